"""Session token record."""

from __future__ import annotations

import enum

from cryptography.hazmat.primitives.constant_time import bytes_eq
from pydantic import Field, StrictBool, StrictStr

from sessiontoken.models._base import Int64, TokenBaseModel, unix_now


class AuthType(enum.StrEnum):
    """How the token owner authenticated.

    Closed set: an unknown wire value fails validation instead of mapping
    to a fallback member, since callers branch on it.
    """

    EMAIL_PASSWORD = "email_password"
    EMAIL_CAPTCHA = "email_captcha"
    PHONE_PASSWORD = "phone_password"
    PHONE_CAPTCHA = "phone_captcha"
    OAUTH_QQ = "oauth_qq"
    OAUTH_WECHAT = "oauth_wechat"
    OAUTH_WEIBO = "oauth_weibo"


PASSWORD_AUTH_TYPES: frozenset[AuthType] = frozenset({AuthType.EMAIL_PASSWORD, AuthType.PHONE_PASSWORD})
"""Auth types for which ``password_tag`` is meaningful."""


class SessionToken(TokenBaseModel):
    """Authentication state exchanged between client and server.

    Field declaration order is the canonical wire order.

    Parameters
    ----------
    session_id : str
        Opaque session identifier (wire name ``sid``).  Preserved across
        refreshes.
    token_id : str
        Identifier of this token instance; changes on every refresh.
    authenticated : bool
        ``True`` for a fully authenticated token, ``False`` for a
        temporary pre-auth token.
    user_id : int
        Owning account id.
    auth_type : AuthType
        Credential type used to authenticate.
    password_tag : str
        Credential-epoch tag at issuance.  Only meaningful for
        password-based auth types; empty otherwise.
    exp_access : int
        Unix time at which this token expires.
    exp_refresh : int
        Unix time until which the token chain may be refreshed.  Fixed at
        first issuance.
    """

    session_id: StrictStr = Field(alias="sid")
    token_id: StrictStr
    authenticated: StrictBool
    user_id: Int64
    auth_type: AuthType
    password_tag: StrictStr
    exp_access: Int64
    exp_refresh: Int64

    @property
    def uses_password(self) -> bool:
        """Whether ``password_tag`` carries meaning for this token."""
        return self.auth_type in PASSWORD_AUTH_TYPES

    def password_tag_matches(self, current_tag: str) -> bool:
        """Compare the issued tag with the account's current one.

        A password change rotates the account's tag, which invalidates
        tokens issued under the old credential.  Non-password tokens always
        match.
        """
        if not self.uses_password:
            return True
        return bytes_eq(self.password_tag.encode("utf-8"), current_tag.encode("utf-8"))

    def is_access_expired(self, now: int | None = None) -> bool:
        """Whether ``exp_access`` has passed at *now* (default: current time)."""
        if now is None:
            now = unix_now()
        return now >= self.exp_access

    def can_refresh(self, now: int | None = None) -> bool:
        """Whether the chain may still be exchanged for a new token."""
        if now is None:
            now = unix_now()
        return now < self.exp_refresh

    def refreshed(self, token_id: str, exp_access: int) -> SessionToken:
        """Return the next token in this session's chain.

        ``session_id``, ownership, credential fields and ``exp_refresh``
        carry over; *exp_access* is clamped to ``exp_refresh``.

        Raises
        ------
        ValueError
            If *token_id* is the current token's id.
        """
        if token_id == self.token_id:
            raise ValueError("refresh must issue a new token_id")
        values = self.model_dump()
        values["token_id"] = token_id
        values["exp_access"] = min(exp_access, self.exp_refresh)
        return type(self).model_validate(values)
