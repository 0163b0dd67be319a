from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


def to_role(value: Optional[str]) -> Optional[Role]:
    """Map a session value to a Role; unknown values become None."""
    if value is None:
        return None
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value))
    except ValueError:
        return None


def check_allowed_role(allowed: Iterable[Role], role: Optional[Role]) -> Role:
    if not role:
        raise AuthorizationError("You dont insert the role!")
    if role not in set(allowed):
        raise AuthorizationError("Unauthorized, Forbidden Access!")
    return role
