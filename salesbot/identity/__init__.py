"""Identity: registro de usuario y verificación de passwords."""

from .passwords import hash_password, verify_password
from .users import User, UserId, UserStatus

__all__ = ["User", "UserId", "UserStatus", "hash_password", "verify_password"]
