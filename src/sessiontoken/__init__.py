"""sessiontoken - stateless, HMAC-signed session tokens."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sessiontoken")
except PackageNotFoundError:
    __version__ = "0+local"
from sessiontoken._constants import SEPARATOR, SIGNATURE_HEX_LENGTH
from sessiontoken.codec import TokenCodec, canonical_json, decode, decode_with_keys, encode
from sessiontoken.config import CodecConfig, KeyProvider
from sessiontoken.exceptions import (
    DecodeErrorKind,
    MalformedTokenError,
    PayloadDecodeError,
    SessionTokenError,
    SignatureLengthError,
    SignatureMismatchError,
    TokenConfigError,
    TokenDecodeError,
    TokenEncodeError,
    TokenSchemaError,
)
from sessiontoken.models import PASSWORD_AUTH_TYPES, AuthType, SessionToken

__all__ = [
    "__version__",
    "AuthType",
    "CodecConfig",
    "DecodeErrorKind",
    "KeyProvider",
    "MalformedTokenError",
    "PASSWORD_AUTH_TYPES",
    "PayloadDecodeError",
    "SEPARATOR",
    "SIGNATURE_HEX_LENGTH",
    "SessionToken",
    "SessionTokenError",
    "SignatureLengthError",
    "SignatureMismatchError",
    "TokenCodec",
    "TokenConfigError",
    "TokenDecodeError",
    "TokenEncodeError",
    "TokenSchemaError",
    "canonical_json",
    "decode",
    "decode_with_keys",
    "encode",
]
