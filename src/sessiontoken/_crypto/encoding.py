"""Unpadded URL-safe base64 used for the token payload."""

from __future__ import annotations

import base64
import binascii


def b64url_encode_trimmed(data: bytes) -> bytes:
    """URL-safe base64 encode *data* and drop trailing ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def b64url_decode_trimmed(text: bytes) -> bytes:
    """Reverse :func:`b64url_encode_trimmed`.

    Padding is reconstructed from the length.  Decoding is strict: only
    the URL-safe alphabet is accepted and the result must re-encode to
    exactly *text*, so there is one valid spelling per payload.

    Raises
    ------
    binascii.Error
        If *text* is not canonical unpadded URL-safe base64.
    """
    remainder = len(text) % 4
    if remainder == 1:
        raise binascii.Error(f"invalid base64 length {len(text)}")
    if b"+" in text or b"/" in text:
        raise binascii.Error("non URL-safe base64 character")
    padded = text + b"=" * (-len(text) % 4)
    data = base64.b64decode(padded, altchars=b"-_", validate=True)
    if b64url_encode_trimmed(data) != text:
        raise binascii.Error("non-canonical base64 encoding")
    return data
