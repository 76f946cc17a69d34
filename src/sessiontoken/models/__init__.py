"""Data models for session tokens."""

from sessiontoken.models._base import Int64, TokenBaseModel, unix_now
from sessiontoken.models.token import PASSWORD_AUTH_TYPES, AuthType, SessionToken

__all__ = [
    "AuthType",
    "Int64",
    "PASSWORD_AUTH_TYPES",
    "SessionToken",
    "TokenBaseModel",
    "unix_now",
]
