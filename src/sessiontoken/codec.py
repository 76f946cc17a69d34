"""Signed session token wire format.

A token on the wire is::

    b64url_nopad(canonical_json(token)) "." lowerhex(hmac_sha256(key, b64url_nopad(...)))

The signature covers the trimmed base64 text exactly as transmitted, and
is verified before any of it is decoded or parsed.  Expiry is not checked
here; see :meth:`SessionToken.is_access_expired`.
"""

from __future__ import annotations

import binascii
import json
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from sessiontoken._constants import SEPARATOR, SIGNATURE_HEX_LENGTH
from sessiontoken._crypto import b64url_decode_trimmed, b64url_encode_trimmed, sign_hex, verify_hex
from sessiontoken._redact import redact_for_log, token_preview
from sessiontoken.config import CodecConfig, KeyProvider, as_key_bytes
from sessiontoken.exceptions import (
    DecodeErrorKind,
    MalformedTokenError,
    PayloadDecodeError,
    SignatureLengthError,
    SignatureMismatchError,
    TokenConfigError,
    TokenDecodeError,
    TokenEncodeError,
    TokenSchemaError,
)
from sessiontoken.models import SessionToken

_logger = logging.getLogger(__name__)

# HTML-sensitive characters and JS line separators stay escaped inside strings,
# so payloads are byte-identical with other issuers of this format.
_JSON_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)

# Failures that require a valid signature, i.e. the issuer itself
# produced bad material.
_ANOMALOUS_KINDS = frozenset({DecodeErrorKind.PAYLOAD_DECODE_ERROR, DecodeErrorKind.SCHEMA_ERROR})


def canonical_json(token: SessionToken) -> bytes:
    """Serialize *token* to compact JSON with keys in wire order.

    Raises
    ------
    TokenEncodeError
        If *token* is not a valid :class:`SessionToken` (e.g. one built
        with ``model_construct``) or holds unencodable text.
    """
    if not isinstance(token, SessionToken):
        raise TokenEncodeError(f"expected SessionToken, got {type(token).__name__}")
    try:
        wire = token.to_wire()
        SessionToken.model_validate(wire)
        text = json.dumps(wire, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return text.translate(_JSON_ESCAPES).encode("utf-8")
    except (AttributeError, TypeError, ValueError) as exc:
        raise TokenEncodeError(f"Session token serialization failed: {type(exc).__name__}") from exc


def encode(token: SessionToken, key: bytes | str) -> bytes:
    """Encode and sign *token*.

    Deterministic: the same token and key always give the same bytes.

    Parameters
    ----------
    token : SessionToken
        Record to encode.
    key : bytes or str
        Signing key; ``str`` is UTF-8 encoded.

    Returns
    -------
    bytes
        ``payload + b"." + signature``.

    Raises
    ------
    TokenEncodeError
        If the token cannot be serialized.
    """
    payload = b64url_encode_trimmed(canonical_json(token))
    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug("Encoded session token %s", redact_for_log(token.to_wire()))
    return payload + SEPARATOR + sign_hex(payload, as_key_bytes(key))


def decode(data: bytes | str, key: bytes | str) -> SessionToken:
    """Verify and decode a token produced by :func:`encode`.

    Raises
    ------
    MalformedTokenError
        No separator, or more than one.
    SignatureLengthError
        Signature segment is not 64 characters.
    SignatureMismatchError
        Signature does not verify under *key*.
    PayloadDecodeError
        Signed payload is not valid unpadded URL-safe base64.
    TokenSchemaError
        Signed payload is not a valid session token record.
    """
    return decode_with_keys(data, (key,))


def decode_with_keys(data: bytes | str, keys: Iterable[bytes | str]) -> SessionToken:
    """Decode *data*, accepting a signature from any of *keys*.

    Keys are tried in order, so the current key should come first.  Only a
    signature mismatch moves on to the next key; every other failure is
    raised immediately.

    Raises
    ------
    TokenConfigError
        If *keys* is empty.
    TokenDecodeError
        As for :func:`decode`.
    """
    key_list = [as_key_bytes(k) for k in keys]
    if not key_list:
        raise TokenConfigError("at least one verification key is required")

    raw = _as_bytes(data)
    payload, signature = _split(raw)
    for key in key_list:
        if verify_hex(payload, signature, key):
            return _parse_payload(payload, raw)
    raise _rejected(SignatureMismatchError("Session token signature mismatch"), raw)


def _as_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"token must be bytes or str, not {type(data).__name__}")


def _split(raw: bytes) -> tuple[bytes, bytes]:
    parts = raw.split(SEPARATOR)
    if len(parts) != 2:
        raise _rejected(MalformedTokenError("Malformed session token"), raw)
    payload, signature = parts
    if len(signature) != SIGNATURE_HEX_LENGTH:
        raise _rejected(
            SignatureLengthError(f"Signature must be {SIGNATURE_HEX_LENGTH} characters, got {len(signature)}"),
            raw,
        )
    return payload, signature


def _parse_payload(payload: bytes, raw: bytes) -> SessionToken:
    try:
        decoded = b64url_decode_trimmed(payload)
    except binascii.Error as exc:
        raise _rejected(PayloadDecodeError("Session token payload is not valid base64"), raw) from exc

    try:
        return SessionToken.model_validate_json(decoded)
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors()})
        raise _rejected(
            TokenSchemaError(f"Session token payload failed validation: {', '.join(fields)}"),
            raw,
        ) from exc


def _rejected(error: TokenDecodeError, raw: bytes) -> TokenDecodeError:
    level = logging.WARNING if error.kind in _ANOMALOUS_KINDS else logging.DEBUG
    _logger.log(level, "Rejected session token %s: %s", token_preview(raw), error.kind)
    return error


class TokenCodec:
    """Encode and decode session tokens with keys from a provider.

    Holds no mutable state; one instance can be shared by any number of
    threads or tasks.

    Parameters
    ----------
    keys : KeyProvider
        Supplies the signing key and the keys accepted for verification.
    """

    def __init__(self, keys: KeyProvider) -> None:
        self._keys = keys

    @classmethod
    def from_env(cls, **overrides: object) -> TokenCodec:
        """Build a codec from :meth:`CodecConfig.from_env`."""
        return cls(CodecConfig.from_env(**overrides))

    def encode(self, token: SessionToken) -> bytes:
        """Sign *token* with the provider's current key."""
        return encode(token, self._keys.current_key())

    def decode(self, data: bytes | str) -> SessionToken:
        """Verify *data* against every key the provider accepts."""
        return decode_with_keys(data, self._keys.verification_keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={type(self._keys).__name__})"
