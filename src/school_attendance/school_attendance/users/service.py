from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..common.validators import require_present
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        require_present(email, "Email")
        require_present(password, "Password")

        user = self._users.get_by_email(str(email).strip())
        if not user or not user.is_active:
            raise AuthenticationError("Wrong email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            logger.info("failed login for %s", email)
            raise AuthenticationError("Wrong email or password")

        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, role=user.role)
