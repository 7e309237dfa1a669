from datetime import timedelta

import pytest
from jose import jwt

from pinifast.config import get_settings
from pinifast.core.exceptions import (
    ForbiddenException,
    UnauthorizedException,
    ValidationException,
)
from pinifast.core.security import create_access_token, decode_access_token
from pinifast.domain.schemas.auth import CurrentUser, LoginRequest, RegisterRequest
from pinifast.domain.schemas.user import UserUpdate


def register_request(email="carol@example.com", roles=None):
    return RegisterRequest(
        email=email, first_name="Carol", last_name="Jones", password="secret123", roles=roles
    )


class TestTokens:
    def test_token_carries_identity_claims(self):
        token = create_access_token({"sub": "abc", "id": "abc", "email": "a@b.c", "roles": ["user"]})
        payload = decode_access_token(token)

        assert payload["id"] == "abc"
        assert payload["roles"] == ["user"]
        assert payload["exp"] > payload["iat"]

    def test_expired_token(self):
        token = create_access_token({"sub": "abc"}, expires_delta=timedelta(seconds=-10))

        with pytest.raises(UnauthorizedException, match="Token has expired"):
            decode_access_token(token)

    def test_malformed_token(self):
        with pytest.raises(UnauthorizedException, match="Invalid token"):
            decode_access_token("not-a-token")

    def test_wrong_signature(self):
        settings = get_settings()
        token = jwt.encode({"sub": "abc"}, "some-other-secret", algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(UnauthorizedException, match="Invalid token"):
            decode_access_token(token)


class TestAuthService:
    def test_register_assigns_default_role(self, auth_service, role_service, seeded_roles):
        result = auth_service.register(register_request())

        assert result.token_type == "Bearer"
        assert result.expires_in == get_settings().JWT_EXPIRATION_MINUTES * 60
        assert role_service.get_role_names(result.user.id) == ["user"]
        assert decode_access_token(result.access_token)["roles"] == ["user"]

    def test_register_with_roles_requires_admin(self, auth_service, seeded_roles):
        with pytest.raises(ForbiddenException):
            auth_service.register(register_request(roles=["admin"]))

        member = CurrentUser(id="x", email="x@example.com", roles=["user"])
        with pytest.raises(ForbiddenException):
            auth_service.register(register_request(roles=["admin"]), member)

    def test_admin_can_register_with_roles(self, auth_service, role_service, seeded_roles):
        admin = auth_service.register(register_request(email="boss@example.com"))
        caller = CurrentUser(id=admin.user.id, email=admin.user.email, roles=["admin"])

        result = auth_service.register(register_request(roles=["moderator"]), caller)

        assert role_service.get_role_names(result.user.id) == ["moderator"]

    def test_register_with_unknown_role(self, auth_service, user_service, seeded_roles):
        caller = CurrentUser(id="x", email="x@example.com", roles=["admin"])

        with pytest.raises(ValidationException):
            auth_service.register(register_request(roles=["wizard"]), caller)

        assert user_service.find_by_email("carol@example.com") is None

    def test_login_updates_last_login(self, auth_service, user_service, seeded_roles):
        auth_service.register(register_request())

        result = auth_service.login(LoginRequest(email="CAROL@example.com", password="secret123"))

        assert result.user.last_login is not None
        assert user_service.find_by_email("carol@example.com").last_login is not None

    def test_login_rejects_bad_credentials(self, auth_service, seeded_roles):
        auth_service.register(register_request())

        with pytest.raises(UnauthorizedException, match="Invalid email or password"):
            auth_service.login(LoginRequest(email="carol@example.com", password="wrong-pass"))
        with pytest.raises(UnauthorizedException, match="Invalid email or password"):
            auth_service.login(LoginRequest(email="nobody@example.com", password="secret123"))

    def test_deactivated_account_cannot_login_or_use_token(self, auth_service, user_service, seeded_roles):
        result = auth_service.register(register_request())
        user_service.update(result.user.id, UserUpdate(is_active=False))

        with pytest.raises(UnauthorizedException, match="deactivated"):
            auth_service.login(LoginRequest(email="carol@example.com", password="secret123"))
        with pytest.raises(UnauthorizedException):
            auth_service.validate_token(result.access_token)

    def test_token_of_deleted_user_is_rejected(self, auth_service, user_service, seeded_roles):
        result = auth_service.register(register_request())
        user_service.delete(result.user.id)

        with pytest.raises(UnauthorizedException):
            auth_service.validate_token(result.access_token)

    def test_refresh_picks_up_new_roles(self, auth_service, role_service, seeded_roles):
        result = auth_service.register(register_request())
        moderator = role_service.find_role_by_name("moderator")
        role_service.assign_role_to_user(result.user.id, moderator.id, result.user.id)

        refreshed = auth_service.refresh_token(result.access_token)

        assert sorted(decode_access_token(refreshed.access_token)["roles"]) == ["moderator", "user"]


class TestCurrentUser:
    def test_role_checks_are_case_insensitive(self):
        user = CurrentUser(id="1", email="a@b.c", roles=["Admin"])

        assert user.is_admin
        assert user.has_any_role(["guest", "ADMIN"])
        assert not user.has_role("moderator")
