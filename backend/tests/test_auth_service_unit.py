import os
import sys

import pytest

# Ensure the 'backend' directory is on sys.path so imports work from repo root
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bookstore.core.errors import AuthError, ConflictError
from bookstore.core.security import JwtUtil
from bookstore.models.role import RoleName
from bookstore.schemas.user import UserLoginRequestDto, UserRegistrationRequestDto
from bookstore.services.auth_service import AuthService

from fakes import FakeBookRepo, FakeRoleRepo, FakeShoppingCartRepo, FakeUserRepo

PASSWORD = "unit-pass-123"


@pytest.fixture
def repos():
    return FakeUserRepo(), FakeRoleRepo(), FakeShoppingCartRepo(FakeBookRepo())


@pytest.fixture
def service(repos):
    users, roles, carts = repos
    return AuthService(
        user_repo=users,
        role_repo=roles,
        cart_repo=carts,
        jwt_util=JwtUtil("unit-auth-secret-long-enough-for-hs256-0123"),
    )


def _registration(email: str = "Reader@Mail.com") -> UserRegistrationRequestDto:
    return UserRegistrationRequestDto(
        email=email,
        password=PASSWORD,
        repeat_password=PASSWORD,
        first_name=" Ann ",
        last_name="Reader",
    )


def test_register_creates_user_with_role_and_cart(service, repos):
    users, roles, carts = repos

    dto = service.register(_registration())

    assert dto.id == 1
    assert dto.email == "reader@mail.com"
    assert dto.first_name == "Ann"
    user = users.get_by_id(dto.id)
    assert user.role_names == {RoleName.USER}
    assert user.password != PASSWORD
    assert carts.get_by_user_id(dto.id) is not None
    # USER role did not exist yet and was created once
    assert roles.find_by_name(RoleName.USER) is not None


def test_register_reuses_existing_role(service, repos):
    _, roles, _ = repos
    existing = roles.create(RoleName.USER)

    service.register(_registration("a@mail.com"))
    service.register(_registration("b@mail.com"))

    assert roles.find_by_name(RoleName.USER) is existing


def test_register_duplicate_email_conflicts(service):
    service.register(_registration())
    with pytest.raises(ConflictError):
        service.register(_registration("READER@mail.com"))


def test_authenticate_issues_token_for_email(service):
    service.register(_registration())

    resp = service.authenticate(UserLoginRequestDto(email="reader@mail.com", password=PASSWORD))

    assert service.jwt_util.get_username(resp.token) == "reader@mail.com"
    assert service.user_from_token(resp.token).email == "reader@mail.com"


def test_authenticate_wrong_password_raises(service):
    service.register(_registration())
    with pytest.raises(AuthError):
        service.authenticate(UserLoginRequestDto(email="reader@mail.com", password="not-the-password"))


def test_user_from_token_for_unknown_user_raises(service):
    token = service.jwt_util.generate_token("ghost@mail.com")
    with pytest.raises(AuthError):
        service.user_from_token(token)
