import pytest

from pinifast.core.exceptions import ValidationException
from pinifast.domain.schemas.user import UserCreate

from conftest import ADMIN_EMAIL


def test_initialize_is_idempotent(bootstrap_service, role_service, user_service):
    bootstrap_service.initialize()
    bootstrap_service.initialize()

    assert sorted(r.name for r in role_service.find_all_roles()) == ["admin", "moderator", "user"]

    admin = user_service.find_by_email(ADMIN_EMAIL)
    assert admin is not None
    assert role_service.get_role_names(admin.id) == ["admin"]
    assert len(user_service.find_all()) == 1


def test_check_admin_exists(bootstrap_service):
    assert bootstrap_service.check_admin_exists() is False

    bootstrap_service.initialize_roles()
    assert bootstrap_service.check_admin_exists() is False

    bootstrap_service.initialize_admin_user()
    assert bootstrap_service.check_admin_exists() is True


def test_existing_user_is_promoted(bootstrap_service, role_service, user_service):
    bootstrap_service.initialize_roles()
    existing = user_service.create(UserCreate(
        email=ADMIN_EMAIL, first_name="Pre", last_name="Existing", password="whatever1"
    ))

    admin = bootstrap_service.initialize_admin_user()

    assert admin.id == existing.id
    assert role_service.user_has_role(existing.id, "admin")


def test_emergency_admin(bootstrap_service, role_service, user_service):
    bootstrap_service.initialize_roles()

    admin = bootstrap_service.create_emergency_admin("rescue@example.com", "rescue-pass")

    assert admin.first_name == "Emergency"
    assert role_service.user_has_role(admin.id, "admin")
    assert user_service.validate_password(admin, "rescue-pass")

    with pytest.raises(ValidationException):
        bootstrap_service.create_emergency_admin("rescue@example.com", "rescue-pass")
