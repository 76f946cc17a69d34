"""Tests for the SessionToken record."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sessiontoken.models import PASSWORD_AUTH_TYPES, AuthType, SessionToken

BASE: dict = {
    "session_id": "s1",
    "token_id": "t1",
    "authenticated": True,
    "user_id": 42,
    "auth_type": AuthType.EMAIL_PASSWORD,
    "password_tag": "p1",
    "exp_access": 1_700_000_000,
    "exp_refresh": 1_700_100_000,
}


def _token(**changes: object) -> SessionToken:
    return SessionToken(**{**BASE, **changes})


# ------------------------------------------------------------------
# AuthType
# ------------------------------------------------------------------


class TestAuthType:
    def test_wire_values(self) -> None:
        assert [t.value for t in AuthType] == [
            "email_password",
            "email_captcha",
            "phone_password",
            "phone_captcha",
            "oauth_qq",
            "oauth_wechat",
            "oauth_weibo",
        ]

    def test_unknown_value_raises(self) -> None:
        with pytest.raises(ValueError):
            AuthType("oauth_github")

    def test_password_types(self) -> None:
        assert PASSWORD_AUTH_TYPES == {AuthType.EMAIL_PASSWORD, AuthType.PHONE_PASSWORD}


# ------------------------------------------------------------------
# Construction and validation
# ------------------------------------------------------------------


class TestSessionToken:
    def test_accepts_field_names_and_aliases(self) -> None:
        wire = _token().to_wire()
        assert wire["sid"] == "s1"
        assert SessionToken.model_validate(wire) == _token()

    def test_to_wire_uses_stable_names_in_order(self) -> None:
        assert list(_token().to_wire()) == [
            "sid",
            "token_id",
            "authenticated",
            "user_id",
            "auth_type",
            "password_tag",
            "exp_access",
            "exp_refresh",
        ]
        assert _token().to_wire()["auth_type"] == "email_password"

    def test_frozen(self) -> None:
        token = _token()
        with pytest.raises(ValidationError):
            token.user_id = 7  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("user_id", "42"),
            ("user_id", 2**63),
            ("exp_access", 1.5),
            ("authenticated", "yes"),
            ("token_id", 5),
            ("auth_type", "sms"),
        ],
    )
    def test_strict_types(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            _token(**{field: value})

    def test_missing_field(self) -> None:
        data = dict(BASE)
        del data["password_tag"]
        with pytest.raises(ValidationError):
            SessionToken(**data)

    def test_equality_is_field_for_field(self) -> None:
        assert _token() == _token()
        assert _token() != _token(token_id="t2")


# ------------------------------------------------------------------
# Password tag
# ------------------------------------------------------------------


class TestPasswordTag:
    def test_password_token_compares_tag(self) -> None:
        token = _token()
        assert token.uses_password
        assert token.password_tag_matches("p1")
        assert not token.password_tag_matches("p2")

    def test_non_password_token_ignores_tag(self) -> None:
        token = _token(auth_type=AuthType.OAUTH_WECHAT, password_tag="")
        assert not token.uses_password
        assert token.password_tag_matches("anything")


# ------------------------------------------------------------------
# Expiry and refresh
# ------------------------------------------------------------------


class TestExpiry:
    def test_access_expiry_boundary(self) -> None:
        token = _token()
        assert not token.is_access_expired(now=1_699_999_999)
        assert token.is_access_expired(now=1_700_000_000)

    def test_refresh_window_boundary(self) -> None:
        token = _token()
        assert token.can_refresh(now=1_700_099_999)
        assert not token.can_refresh(now=1_700_100_000)

    def test_defaults_to_current_time(self) -> None:
        token = _token(exp_access=0, exp_refresh=2**62)
        assert token.is_access_expired()
        assert token.can_refresh()

    def test_refreshed_keeps_session_and_deadline(self) -> None:
        token = _token()
        nxt = token.refreshed("t2", 1_700_050_000)
        assert nxt.token_id == "t2"
        assert nxt.session_id == token.session_id
        assert nxt.exp_refresh == token.exp_refresh
        assert nxt.exp_access == 1_700_050_000
        assert nxt.password_tag == token.password_tag

    def test_refreshed_clamps_to_refresh_deadline(self) -> None:
        assert _token().refreshed("t2", 1_800_000_000).exp_access == 1_700_100_000

    def test_refreshed_requires_new_token_id(self) -> None:
        with pytest.raises(ValueError, match="new token_id"):
            _token().refreshed("t1", 1_700_050_000)
