import logging, json, sys, time, os

ROOT = "keyshare"


def _formatter():
    formatter = logging.Formatter(
        fmt=json.dumps({
            "ts": "%(asctime)s",
            "level": "%(levelname)s",
            "name": "%(name)s",
            "msg": "%(message)s"
        }),
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    formatter.converter = time.gmtime  # UTC
    return formatter


def _attach_handlers(logger, to_file=None):
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_formatter())
        logger.addHandler(handler)

    if to_file:
        path = os.path.abspath(to_file)
        if not any(isinstance(h, logging.FileHandler) and h.baseFilename == path for h in logger.handlers):
            os.makedirs(os.path.dirname(path), exist_ok=True)
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(_formatter())
            logger.addHandler(file_handler)


def get_logger(name=ROOT, level=None, to_file=None):
    """
    Structured JSON logger shared by the store, handler, and client.

    Component loggers ("keyshare.handler", "keyshare.expiry", ...) carry no
    handlers of their own and inherit level and output from the package
    logger "keyshare", so configuring that one logger covers every component.
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    if name.startswith(ROOT + "."):
        owner = logging.getLogger(ROOT)
        if owner.level == logging.NOTSET:
            owner.setLevel(logging.INFO)
    else:
        owner = logger
        if level is None and logger.level == logging.NOTSET:
            level = logging.INFO

    if level is not None:
        logger.setLevel(level)
    _attach_handlers(owner, to_file)
    return logger
