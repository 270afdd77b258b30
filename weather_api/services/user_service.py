"""
User Service - in-memory accounts for token-based login.

Users live only for the lifetime of the process. A default account
is seeded from settings on first use.
"""
import threading
from dataclasses import dataclass
from typing import Dict, Optional

from weather_api.core.config import Settings, get_settings
from weather_api.core.exceptions import AuthenticationError, UserExistsError, ValidationError
from weather_api.core.logging_config import LoggerMixin
from weather_api.core.security import create_access_token, hash_password, verify_password


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password_hash: str

    def public(self) -> dict:
        return {"id": self.id, "username": self.username}


class UserService(LoggerMixin):
    """
    Registers users, checks credentials and issues access tokens.

    Example:
        >>> service = UserService()
        >>> user, token = service.login("admin@myapp.com", "admin123")
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._users: Dict[str, User] = {}
        self._lock = threading.Lock()
        self._seed_default_user()

    def register(self, username: Optional[str], password: Optional[str]) -> tuple:
        """
        Create a user and return (user, token).

        Raises:
            ValidationError: If username or password is missing
            UserExistsError: If the username is taken
        """
        self._require_credentials(username, password)

        password_hash = hash_password(password)
        with self._lock:
            if username in self._users:
                raise UserExistsError()
            user = User(id=len(self._users) + 1, username=username, password_hash=password_hash)
            self._users[username] = user

        self.logger.info(f"User registered: id={user.id}")
        return user, self.issue_token(user)

    def login(self, username: Optional[str], password: Optional[str]) -> tuple:
        """
        Verify credentials and return (user, token).

        Raises:
            ValidationError: If username or password is missing
            AuthenticationError: If the credentials do not match
        """
        self._require_credentials(username, password)

        with self._lock:
            user = self._users.get(username)

        if user is None or not verify_password(password, user.password_hash):
            self.logger.warning("Login failed: invalid credentials")
            raise AuthenticationError("Invalid credentials")

        return user, self.issue_token(user)

    def issue_token(self, user: User) -> str:
        return create_access_token(
            user_id=user.id,
            username=user.username,
            secret=self.settings.jwt_secret,
            expires_hours=self.settings.jwt_expires_hours,
        )

    @staticmethod
    def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
        if not username or not password:
            raise ValidationError("Username and password are required")

    def _seed_default_user(self) -> None:
        username = self.settings.default_username
        self._users[username] = User(
            id=1,
            username=username,
            password_hash=hash_password(self.settings.default_password),
        )
        self.logger.info(f"Default user initialized: {username}")


_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get or create the user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service


def reset_user_service() -> None:
    """Drop the cached service (used by tests after changing settings)."""
    global _user_service
    _user_service = None
