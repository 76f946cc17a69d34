"""Custom exception hierarchy for sessiontoken."""

from __future__ import annotations

import enum


class DecodeErrorKind(enum.StrEnum):
    """Why a token failed to decode.

    Callers that prefer a single ``except TokenDecodeError`` can branch
    on ``exc.kind`` instead of on the concrete subclass.
    """

    MALFORMED_FORMAT = "malformed_format"
    SIGNATURE_LENGTH_MISMATCH = "signature_length_mismatch"
    SIGNATURE_MISMATCH = "signature_mismatch"
    PAYLOAD_DECODE_ERROR = "payload_decode_error"
    SCHEMA_ERROR = "schema_error"


class SessionTokenError(Exception):
    """Base exception for all sessiontoken errors."""


class TokenConfigError(SessionTokenError):
    """Invalid or missing configuration (e.g. no secret key)."""


class TokenEncodeError(SessionTokenError):
    """The token could not be serialized.

    Should not happen for a valid :class:`~sessiontoken.models.SessionToken`;
    treat it as a programming error and reject the issuance request.
    """


class TokenDecodeError(SessionTokenError):
    """Token bytes were rejected.

    Subclasses fix :attr:`kind`.  Messages never carry the key, the
    signature or any decoded payload content.
    """

    kind: DecodeErrorKind

    def __init__(self, message: str, *, kind: DecodeErrorKind | None = None) -> None:
        if kind is not None:
            self.kind = kind
        super().__init__(message)


class MalformedTokenError(TokenDecodeError):
    """Separator missing, or more than two segments."""

    kind = DecodeErrorKind.MALFORMED_FORMAT


class SignatureLengthError(TokenDecodeError):
    """Signature segment is not exactly 64 hex characters."""

    kind = DecodeErrorKind.SIGNATURE_LENGTH_MISMATCH


class SignatureMismatchError(TokenDecodeError):
    """Recomputed signature differs from the supplied one.

    Covers forged and tampered tokens as well as tokens signed with a
    different (e.g. rotated-out) key.
    """

    kind = DecodeErrorKind.SIGNATURE_MISMATCH


class PayloadDecodeError(TokenDecodeError):
    """Payload is not valid base64 even though the signature matched.

    Only reachable for material signed with the real key, so it points
    at a buggy issuer rather than an attacker.
    """

    kind = DecodeErrorKind.PAYLOAD_DECODE_ERROR


class TokenSchemaError(TokenDecodeError):
    """Decoded payload does not match the session token schema.

    Typically a token produced by an incompatible issuer version, or one
    carrying an unknown ``auth_type``.
    """

    kind = DecodeErrorKind.SCHEMA_ERROR
