"""
Admin authentication.

There is exactly one admin credential pair, configured through
ADMIN_EMAIL and ADMIN_PASSWORD_HASH (a werkzeug password hash). Flask-Login
keeps the session; this module only decides whether credentials are valid
and tells listeners when the session changes.

State machine (per browser session):
    unauthenticated -> authenticating (POST /admin/login) -> authenticated
    authenticated -> unauthenticated (POST /admin/logout)
"""

from __future__ import annotations

import hmac
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from flask_login import UserMixin
from werkzeug.security import check_password_hash

from core.exceptions import InvalidCredentialsError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

SessionListener = Callable[[Optional["AdminUser"]], None]


class AdminUser(UserMixin):
    """The single admin account, identified by email."""

    def __init__(self, email: str):
        self.id = email
        self.email = email

    def __eq__(self, other) -> bool:
        return isinstance(other, AdminUser) and other.email == self.email

    def __hash__(self) -> int:
        return hash(self.email)

    def __repr__(self) -> str:
        return f"AdminUser({self.email!r})"


class AuthService(ABC):
    """
    Authentication boundary.

    sign_in/sign_out notify session listeners: the user on sign-in, None on
    sign-out. The admin order feed hangs off these notifications.
    """

    def __init__(self):
        self._listeners: List[SessionListener] = []
        self._lock = threading.Lock()

    @abstractmethod
    def verify(self, email: str, password: str) -> AdminUser:
        """
        Check a credential pair.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password (not distinguished)
        """

    @abstractmethod
    def load_user(self, user_id: str) -> Optional[AdminUser]:
        """Rebuild the user from the id stored in the session cookie."""

    def sign_in(self, email: str, password: str) -> AdminUser:
        user = self.verify((email or "").strip(), password or "")
        logger.info(f"Admin signed in: {user.email}")
        self._notify(user)
        return user

    def sign_out(self, user: Optional[AdminUser] = None) -> None:
        if user is not None:
            logger.info(f"Admin signed out: {user.email}")
        self._notify(None)

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register for session-change notifications.

        Returns:
            Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    def _notify(self, user: Optional[AdminUser]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(user)


class ConfigAuthService(AuthService):
    """Checks credentials against the configured admin email and password hash."""

    def __init__(self, admin_email: str, password_hash: str):
        super().__init__()
        self._admin_email = (admin_email or "").strip().lower()
        self._password_hash = password_hash or ""

        if not self._admin_email or not self._password_hash:
            logger.warning("Admin credentials not configured; admin login is disabled")

    def verify(self, email: str, password: str) -> AdminUser:
        if not self._admin_email or not self._password_hash:
            raise InvalidCredentialsError()

        email_ok = hmac.compare_digest(email.strip().lower(), self._admin_email)
        password_ok = check_password_hash(self._password_hash, password)

        if not (email_ok and password_ok):
            logger.warning("Rejected admin login attempt")
            raise InvalidCredentialsError()

        return AdminUser(self._admin_email)

    def load_user(self, user_id: str) -> Optional[AdminUser]:
        if self._admin_email and user_id == self._admin_email:
            return AdminUser(self._admin_email)
        return None
