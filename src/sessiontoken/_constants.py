"""Internal constants shared across the library."""

# Wire separator between payload and signature.  Not part of the
# URL-safe base64 alphabet, so the first occurrence is always the split.
SEPARATOR = b"."

# hex(HMAC-SHA256) is always 64 lowercase characters.
SIGNATURE_HEX_LENGTH = 64

# Bounds for the Unix timestamps and the user id (signed 64-bit).
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Environment variables read by CodecConfig.from_env.
ENV_SECRET_KEY = "SESSIONTOKEN_SECRET_KEY"
ENV_PREVIOUS_KEYS = "SESSIONTOKEN_PREVIOUS_KEYS"
