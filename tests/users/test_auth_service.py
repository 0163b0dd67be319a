import pytest
from werkzeug.security import generate_password_hash

from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.core.exceptions import AuthenticationError, ValidationError
from src.school_attendance.school_attendance.users.model import User
from src.school_attendance.school_attendance.users.service import AuthService


class FakeUserRepo:
    def __init__(self, users):
        self._users = {u.email: u for u in users}

    def get_by_id(self, user_id):
        return next((u for u in self._users.values() if u.user_id == user_id), None)

    def get_by_email(self, email):
        return self._users.get(email)


@pytest.fixture
def auth():
    return AuthService(
        FakeUserRepo(
            [
                User(1, "Guru", "guru@sekolah.test", generate_password_hash("guru123"), Role.TEACHER),
                User(2, "Lama", "lama@sekolah.test", generate_password_hash("lama123"), Role.TEACHER, is_active=False),
                User(3, "Baru", "baru@sekolah.test", "CHANGE_ME", Role.PARENT),
            ]
        )
    )


def test_login_success(auth):
    user = auth.authenticate(" guru@sekolah.test ", "guru123")

    assert user.user_id == 1
    assert user.role is Role.TEACHER


@pytest.mark.parametrize(
    "email, password",
    [
        ("guru@sekolah.test", "wrong"),
        ("nobody@sekolah.test", "guru123"),
        ("lama@sekolah.test", "lama123"),
        ("baru@sekolah.test", "CHANGE_ME"),
    ],
)
def test_login_failures(auth, email, password):
    with pytest.raises(AuthenticationError):
        auth.authenticate(email, password)


def test_login_requires_credentials(auth):
    with pytest.raises(ValidationError):
        auth.authenticate("", "x")
