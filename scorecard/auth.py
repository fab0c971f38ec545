# scorecard/auth.py
"""
Session Manager for the Scorecard App

Version: 1.0.0
Features:
- Login against the remote API, bearer token attached to later calls
- Credential persisted across reloads (restored without a network call)
- Logout on explicit request or when the API rejects the token
- Observable current user for the dashboard and other consumers
"""

import logging
from functools import wraps
from typing import Callable, List, Optional

from .api_client import ScorecardApiClient
from .config import config
from .dashboard.models import Credential, User
from .exceptions import AuthError
from .session_store import CookieStore, CredentialStore, is_token_expired

logger = logging.getLogger(__name__)

UserObserver = Callable[[Optional[User]], None]


class SessionManager:
    """
    Owns the authenticated user and the credential.

    The current user changes twice per session: set on login/restore and
    cleared on logout. Observers are called synchronously on each change.

    Usage:
        session = SessionManager(api, CredentialStore(MemoryStore(), key))
        session.subscribe(lambda user: ...)

        session.restore_session()
        if not session.is_authenticated:
            session.login("jane@example.com", "secret")
    """

    def __init__(self, api: ScorecardApiClient, credential_store: CredentialStore):
        self.api = api
        self.credential_store = credential_store
        self._user: Optional[User] = None
        self.session_ended = False
        self._observers: List[UserObserver] = []

        # Expired tokens surface as a 401 on the first authorized call
        self.api.on_unauthorized = self.invalidate

    # ==================== CURRENT USER ====================

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def subscribe(self, observer: UserObserver) -> Callable[[], None]:
        """
        Register an observer for current-user changes.

        Returns:
            Function that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _set_user(self, user: Optional[User]):
        self._user = user
        for observer in list(self._observers):
            try:
                observer(user)
            except Exception:
                logger.exception("Session observer failed")

    # ==================== LOGIN / LOGOUT ====================

    def login(self, identifier: str, secret: str) -> User:
        """
        Authenticate and start a session.

        Nothing is written to the credential store unless the API returned
        a token and a user.

        Raises:
            AuthError: rejected credentials or network fault
        """
        try:
            result = self.api.authenticate(identifier, secret)
        except AuthError as e:
            logger.warning(f"Login failed for {identifier}: {e}")
            raise

        credential = Credential(token=result.token, user=result.user)
        self.credential_store.save(credential)

        self.session_ended = False
        self.api.set_token(credential.token)
        logger.info(f"User {result.user.display_name} ({result.user.role}) logged in successfully")
        self._set_user(result.user)
        return result.user

    def logout(self):
        """Clear the persisted credential and the current user. No-op without a session."""
        if self._user is None and not self.api.has_token and not self.credential_store.has_credential():
            logger.debug("Logout without an active session, nothing to do")
            return

        name = self._user.display_name if self._user else 'Unknown'
        self.credential_store.clear()
        self.session_ended = True
        self.api.clear_token()
        if self._user is not None:
            self._set_user(None)

        logger.info(f"User {name} logged out")

    def invalidate(self, reason: str = "credential rejected by server"):
        """Drop the session after the API refused the token."""
        logger.warning(f"Session invalidated: {reason}")
        self.logout()

    # ==================== RESTORE ====================

    def restore_session(self) -> Optional[User]:
        """
        Restore a persisted session without contacting the server.

        A missing, unparsable or locally expired credential means no
        session; an unusable entry is removed from the store.
        """
        if self._user is not None:
            return self._user

        if not self.credential_store.has_credential():
            return None

        credential = self.credential_store.load()
        if credential is None:
            logger.warning("Discarding unreadable persisted credential")
            self.credential_store.clear()
            return None

        if is_token_expired(credential.token):
            logger.info(f"Persisted token for {credential.user.display_name} has expired")
            self.credential_store.clear()
            return None

        self.api.set_token(credential.token)
        logger.info(f"Restored session for {credential.user.display_name} ({credential.user.role})")
        self._set_user(credential.user)
        return credential.user


# ==================== STREAMLIT WIRING ====================

COOKIE_MANAGER_KEY = "scorecard_cookies"


def build_session_manager(store, api: Optional[ScorecardApiClient] = None) -> SessionManager:
    """Create a session manager over the given key-value store."""
    session_config = config.get_session_config()
    credentials = CredentialStore(store, session_config.credential_key)
    return SessionManager(api or ScorecardApiClient(config.get_api_config()), credentials)


def get_session_manager() -> SessionManager:
    """
    Session manager for the current browser session.

    Created once per Streamlit session and kept in st.session_state, with
    the credential persisted in that browser's cookies.
    """
    import streamlit as st
    import extra_streamlit_components as stx

    if 'session_manager' not in st.session_state:
        store = CookieStore(
            stx.CookieManager(key=COOKIE_MANAGER_KEY),
            expiry_days=config.get_session_config().cookie_expiry_days
        )
        st.session_state.session_manager = build_session_manager(store)
    return st.session_state.session_manager


def sync_session(session: Optional[SessionManager] = None) -> SessionManager:
    """
    Refresh the browser cookies and restore a persisted session.

    Call once at the top of each script run. Cookie values reach the
    server one round-trip after the page loads, so restore is retried on
    every run until it succeeds; after an explicit logout it is not.
    """
    session = session or get_session_manager()
    session.credential_store.store.refresh()
    if not session.is_authenticated and not session.session_ended:
        session.restore_session()
    return session


def require_login(func):
    """Decorator to require login for a page function"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        import streamlit as st

        session = sync_session()
        if not session.is_authenticated:
            st.warning("⚠️ Please login to access this page")
            st.info("Go to the main page to login")
            st.stop()
        return func(*args, **kwargs)
    return wrapper


# ==================== MODULE EXPORTS ====================

__all__ = [
    'SessionManager',
    'build_session_manager',
    'get_session_manager',
    'sync_session',
    'require_login',
]
