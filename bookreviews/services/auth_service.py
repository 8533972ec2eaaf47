"""
Authentication flow layered on the storage accessor
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from bookreviews.models.records import User, utc_timestamp
from .errors import DuplicateEmail
from .storage import Storage

logger = logging.getLogger(__name__)

class AuthError(Enum):
    NOT_FOUND = 'User not found'
    INVALID_CREDENTIALS = 'Incorrect password'
    DUPLICATE_EMAIL = 'Email already registered'

@dataclass
class AuthResult:
    success: bool
    user: Optional[User] = None
    error: Optional[AuthError] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.value if self.error else None

    @classmethod
    def ok(cls, user):
        return cls(success=True, user=user)

    @classmethod
    def failed(cls, error):
        return cls(success=False, error=error)

class CurrentSession:
    """
    The signed-in user of this application instance.

    Held by the application context; load() restores the persisted pointer at
    startup and end() clears it on logout.
    """

    def __init__(self, storage: Storage):
        self.storage = storage
        self.user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def load(self) -> Optional[User]:
        self.user = self.storage.get_current_session()
        if self.user:
            logger.info(f"Restored session for {self.user!r}")
        return self.user

    def begin(self, user: User):
        self.storage.set_current_session(user)
        self.user = user

    def end(self):
        self.storage.set_current_session(None)
        self.user = None

class AuthService:
    def __init__(self, storage: Storage, session: CurrentSession):
        self.storage = storage
        self.session = session

    def login(self, email: str, password: str) -> AuthResult:
        user = self.storage.find_user_by_email(email)
        if user is None:
            logger.info(f"Login failed: no user '{email}'")
            return AuthResult.failed(AuthError.NOT_FOUND)
        if user.password != password:
            logger.info(f"Login failed: wrong password for '{email}'")
            return AuthResult.failed(AuthError.INVALID_CREDENTIALS)

        self.session.begin(user)
        logger.info(f"Logged in {user!r}")
        return AuthResult.ok(user)

    def signup(self, email: str, password: str, name: str) -> AuthResult:
        user = User(
            id=f'user-{uuid.uuid4().hex}',
            email=email,
            password=password,
            name=name,
            created_at=utc_timestamp()
        )
        try:
            self.storage.add_user(user)
        except DuplicateEmail:
            return AuthResult.failed(AuthError.DUPLICATE_EMAIL)

        self.session.begin(user)
        logger.info(f"Signed up {user!r}")
        return AuthResult.ok(user)

    def logout(self):
        if self.session.user:
            logger.info(f"Logged out {self.session.user!r}")
        self.session.end()
