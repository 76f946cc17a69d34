"""Cryptographic and encoding primitives for the token wire format."""

from __future__ import annotations

from sessiontoken._crypto.encoding import b64url_decode_trimmed, b64url_encode_trimmed
from sessiontoken._crypto.signing import sign_hex, verify_hex

__all__ = [
    "b64url_decode_trimmed",
    "b64url_encode_trimmed",
    "sign_hex",
    "verify_hex",
]
