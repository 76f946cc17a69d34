"""HMAC-SHA256 signing for token payloads."""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes, hmac
from cryptography.hazmat.primitives.constant_time import bytes_eq


def sign_hex(payload: bytes, key: bytes) -> bytes:
    """Compute ``lowerhex(HMAC-SHA256(key, payload))``.

    Parameters
    ----------
    payload : bytes
        The trimmed base64 payload exactly as it appears on the wire.
    key : bytes
        Secret signing key.

    Returns
    -------
    bytes
        64 ASCII bytes of lowercase hex.
    """
    mac = hmac.HMAC(key, hashes.SHA256())
    mac.update(payload)
    return mac.finalize().hex().encode("ascii")


def verify_hex(payload: bytes, signature: bytes, key: bytes) -> bool:
    """Check *signature* against the expected hex digest of *payload*.

    The comparison is on the hex text, not on the decoded digest, so an
    uppercase or otherwise re-encoded signature does not verify.  It runs
    in constant time for equal-length inputs.
    """
    return bytes_eq(sign_hex(payload, key), signature)
