from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import parse_enum, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    username: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.warning("failed login for %s", user.username)
            raise AuthenticationError("Invalid username or password")

        logger.info("user %s logged in", user.username)
        return SessionUser(user_id=user.user_id, full_name=user.full_name, username=user.username, role=user.role)


class UserService:
    """Use case: manage accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> list[User]:
        return list(self._users.list_all())

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_account(self, *, full_name: str, username: str, password: str, role=None) -> User:
        full_name = require_non_empty(full_name, "full_name")
        username = require_non_empty(username, "username")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        role = parse_enum(Role, role, "role", default=Role.STAFF)

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user_id = self._users.create_user(
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
        )
        logger.info("user created id=%s username=%s role=%s", user_id, username, role.value)
        return self.get_user(user_id)

    def set_active(self, user_id: int, *, is_active: bool, acting_user_id: int) -> User:
        user = self.get_user(user_id)
        if user.user_id == acting_user_id and not is_active:
            raise ValidationError("You cannot deactivate your own account")
        self._users.set_active(user.user_id, is_active=is_active)
        return self.get_user(user.user_id)

    def delete_user(self, user_id: int, *, acting_user_id: int) -> None:
        user = self.get_user(user_id)
        if user.user_id == acting_user_id:
            raise ValidationError("You cannot delete your own account")
        self._users.delete_by_id(user.user_id)
        logger.info("user deleted id=%s", user.user_id)
