"""Signing key configuration for sessiontoken."""

from __future__ import annotations

import dataclasses
import os
from typing import Any, Protocol, runtime_checkable

from sessiontoken._constants import ENV_PREVIOUS_KEYS, ENV_SECRET_KEY
from sessiontoken.exceptions import TokenConfigError


def as_key_bytes(key: bytes | str) -> bytes:
    """Normalise a key to bytes; ``str`` keys are UTF-8 encoded."""
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    raise TokenConfigError(f"key must be bytes or str, not {type(key).__name__}")


@runtime_checkable
class KeyProvider(Protocol):
    """Source of signing keys.

    The codec asks for keys on every call and never caches them, so a
    provider may swap keys at any time.
    """

    def current_key(self) -> bytes: ...

    def verification_keys(self) -> tuple[bytes, ...]: ...


@dataclasses.dataclass(frozen=True)
class CodecConfig:
    """Static key configuration.

    Parameters
    ----------
    secret_key : bytes
        Key used to sign new tokens and tried first when verifying.
    previous_keys : tuple[bytes, ...]
        Retired keys still accepted for verification during a rotation
        window.  Dropping a key here invalidates every token it signed.
    """

    secret_key: bytes
    previous_keys: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        secret = as_key_bytes(self.secret_key)
        if not secret:
            raise TokenConfigError("secret_key must not be empty")
        previous = tuple(as_key_bytes(k) for k in self.previous_keys)
        if any(not k for k in previous):
            raise TokenConfigError("previous_keys must not contain empty keys")
        object.__setattr__(self, "secret_key", secret)
        object.__setattr__(self, "previous_keys", previous)

    def current_key(self) -> bytes:
        return self.secret_key

    def verification_keys(self) -> tuple[bytes, ...]:
        return (self.secret_key, *(k for k in self.previous_keys if k != self.secret_key))

    def __repr__(self) -> str:
        return f"CodecConfig(secret_key=<redacted>, previous_keys=<{len(self.previous_keys)} redacted>)"

    @classmethod
    def from_env(cls, **overrides: Any) -> CodecConfig:
        """Create configuration from environment variables.

        Reads ``SESSIONTOKEN_SECRET_KEY`` (required) and
        ``SESSIONTOKEN_PREVIOUS_KEYS`` (optional, comma-separated).
        Explicit keyword arguments override environment values.

        Raises
        ------
        TokenConfigError
            If no secret key is configured.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        secret = env.get(ENV_SECRET_KEY)
        if secret:
            config_kwargs["secret_key"] = secret

        previous = env.get(ENV_PREVIOUS_KEYS)
        if previous:
            config_kwargs["previous_keys"] = tuple(k.strip() for k in previous.split(",") if k.strip())

        config_kwargs.update(overrides)
        if not config_kwargs.get("secret_key"):
            raise TokenConfigError(f"{ENV_SECRET_KEY} is not set")
        return cls(**config_kwargs)
