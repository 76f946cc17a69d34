from __future__ import annotations

import binascii

import pytest

from sessiontoken._crypto import b64url_decode_trimmed, b64url_encode_trimmed, sign_hex, verify_hex


@pytest.mark.parametrize("data", [b"", b"a", b"ab", b"abc", b"\xfb\xff\xfe"])
def test_trimmed_base64_has_no_padding(data: bytes) -> None:
    encoded = b64url_encode_trimmed(data)
    assert b"=" not in encoded
    assert b64url_decode_trimmed(encoded) == data


def test_trimmed_base64_uses_url_safe_alphabet() -> None:
    assert b64url_encode_trimmed(b"\xfb\xff\xfe") == b"-__-"


@pytest.mark.parametrize("text", [b"a", b"-__-=", b"+//+", b"YR", b"Y Q"])
def test_decode_rejects_non_canonical(text: bytes) -> None:
    with pytest.raises(binascii.Error):
        b64url_decode_trimmed(text)


def test_sign_hex_known_vector() -> None:
    # RFC 4231 test case 2.
    digest = sign_hex(b"what do ya want for nothing?", b"Jefe")
    assert digest == b"5bdcc146bf60754e6a042426089575c75a003f089d2739839dec58b964ec3843"


def test_verify_hex() -> None:
    sig = sign_hex(b"payload", b"key")
    assert verify_hex(b"payload", sig, b"key")
    assert not verify_hex(b"payload", sig, b"other")
    assert not verify_hex(b"payload", sig.upper(), b"key")
    assert not verify_hex(b"payload", sig[:-1], b"key")
