"""
keyshare_core.codec
-------------------
Wire encodings for KeyShare records.

- Binary: protobuf message ``keyshare.KeyShare`` (GET response body)
- Form:   URL-encoded fields with raw URL-safe base64 bytes (POST request body)

The protobuf schema is assembled from a FileDescriptorProto in a private
descriptor pool, so no generated _pb2 module is needed. Field numbers are
fixed; add new fields with new numbers only.
"""

from __future__ import annotations
from typing import Dict, Mapping
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError
from .errors import MalformedField
from .storage.models import KeyShare, PublicKeyFormat, PrivateKeyFormat
from .utils import b64url_encode, b64url_decode

CONTENT_TYPE = "application/x-protobuf; messageType=keyshare.KeyShare"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_F = descriptor_pb2.FieldDescriptorProto

# (field name, number, type, enum type)
_FIELDS = (
    ("name", 1, _F.TYPE_STRING, None),
    ("public_key", 2, _F.TYPE_BYTES, None),
    ("public_format", 3, _F.TYPE_ENUM, ".keyshare.PublicKeyFormat"),
    ("private_key", 4, _F.TYPE_BYTES, None),
    ("private_format", 5, _F.TYPE_ENUM, ".keyshare.PrivateKeyFormat"),
    ("password", 6, _F.TYPE_BYTES, None),
)


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name="keyshare/keyshare.proto", package="keyshare", syntax="proto3"
    )
    for enum_cls in (PublicKeyFormat, PrivateKeyFormat):
        enum = fdp.enum_type.add(name=enum_cls.__name__)
        for member in enum_cls:
            enum.value.add(name=member.name, number=int(member))

    msg = fdp.message_type.add(name="KeyShare")
    for name, number, ftype, type_name in _FIELDS:
        field = msg.field.add(name=name, number=number, type=ftype, label=_F.LABEL_OPTIONAL)
        if type_name:
            field.type_name = type_name
    return fdp


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor().SerializeToString())
KeyShareMessage = message_factory.GetMessageClass(_pool.FindMessageTypeByName("keyshare.KeyShare"))


# --------- Binary (protobuf) ----------
def to_message(share: KeyShare):
    return KeyShareMessage(
        name=share.name,
        public_key=share.public_key,
        public_format=int(share.public_format),
        private_key=share.private_key,
        private_format=int(share.private_format),
        password=share.password,
    )


def from_message(msg) -> KeyShare:
    return KeyShare(
        name=msg.name,
        public_key=bytes(msg.public_key),
        public_format=PublicKeyFormat(msg.public_format),
        private_key=bytes(msg.private_key),
        private_format=PrivateKeyFormat(msg.private_format),
        password=bytes(msg.password),
    )


def encode_key_share(share: KeyShare) -> bytes:
    return to_message(share).SerializeToString(deterministic=True)


def decode_key_share(data: bytes) -> KeyShare:
    msg = KeyShareMessage()
    try:
        msg.ParseFromString(data)
    except DecodeError as e:
        raise MalformedField(f"undecodable KeyShare payload: {e}") from e
    return from_message(msg)


# --------- Form fields ----------
def encode_form(share: KeyShare) -> Dict[str, str]:
    fields = {
        "name": share.name,
        "publicKey": b64url_encode(share.public_key),
        "publicKeyFormat": share.public_format.name,
        "privateKey": b64url_encode(share.private_key),
        "password": b64url_encode(share.password),
    }
    if share.private_key or share.private_format:
        fields["privateKeyFormat"] = share.private_format.name
    return fields


def _bytes_field(fields: Mapping[str, str], key: str) -> bytes:
    try:
        return b64url_decode(fields.get(key) or "")
    except ValueError as e:
        raise MalformedField(f"{key}: {e}") from e


def decode_form(fields: Mapping[str, str]) -> KeyShare:
    """
    Build a KeyShare from submitted form fields.

    Raises MalformedField for a missing name, a missing or unknown
    publicKeyFormat, an unknown privateKeyFormat (or a missing one when a
    private key is supplied), and any binary field that is not raw URL-safe
    base64.
    """
    name = fields.get("name") or ""
    if not name:
        raise MalformedField("name: required")

    try:
        public_format = PublicKeyFormat.parse(fields.get("publicKeyFormat") or "")
    except ValueError as e:
        raise MalformedField(f"publicKeyFormat: {e}") from e

    public_key = _bytes_field(fields, "publicKey")
    private_key = _bytes_field(fields, "privateKey")
    password = _bytes_field(fields, "password")

    raw_private_format = fields.get("privateKeyFormat")
    if raw_private_format is None and not private_key:
        private_format = PrivateKeyFormat.UNKNOWN_PRIVATE_KEY_FORMAT
    else:
        try:
            private_format = PrivateKeyFormat.parse(raw_private_format or "")
        except ValueError as e:
            raise MalformedField(f"privateKeyFormat: {e}") from e

    return KeyShare(
        name=name,
        public_key=public_key,
        public_format=public_format,
        private_key=private_key,
        private_format=private_format,
        password=password,
    )
