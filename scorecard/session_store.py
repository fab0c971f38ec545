# scorecard/session_store.py
"""
Persisted Session State

The credential survives an app reload through a small key-value store that
lives in the user's browser (a cookie), the same role localStorage plays
for a web client. Each browser holds its own entry; nothing is shared
between users of one server process.

- CookieStore: browser cookie store behind a cookie manager component
- MemoryStore: in-process store with the same interface
- CredentialStore: reads/writes the single serialized credential entry
"""

import base64
import binascii
import json
import logging
import time
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from .dashboard.models import Credential, User

logger = logging.getLogger(__name__)


# ==================== KEY-VALUE STORES ====================

class MemoryStore:
    """Key-value store kept in memory. Nothing survives the process."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value

    def remove(self, key: str):
        self._data.pop(key, None)

    def refresh(self):
        pass


class CookieStore:
    """
    Key-value store kept in the browser's cookies.

    Wraps an extra_streamlit_components CookieManager (anything exposing
    get/set/delete). Values are base64url encoded so the cookie library
    never reinterprets the JSON payload and no separator characters reach
    the Cookie header.

    Usage:
        import extra_streamlit_components as stx
        store = CookieStore(stx.CookieManager(key="scorecard_cookies"), expiry_days=7)
    """

    def __init__(self, manager, expiry_days: float = 7.0,
                 clock: Callable[[], datetime] = datetime.now):
        self.manager = manager
        self.expiry_days = expiry_days
        self._clock = clock

    @staticmethod
    def _encode(value: str) -> str:
        return base64.urlsafe_b64encode(value.encode("utf-8")).decode("ascii")

    @staticmethod
    def _decode(raw) -> Optional[str]:
        if not isinstance(raw, str):
            return None
        try:
            return base64.b64decode(raw.encode("ascii"), altchars=b"-_", validate=True).decode("utf-8")
        except (ValueError, binascii.Error, UnicodeError):
            logger.warning("Cookie value is not valid base64, ignoring")
            return None

    def get(self, key: str) -> Optional[str]:
        raw = self.manager.get(key)
        if raw is None:
            return None
        # Undecodable cookies are handed on as-is so the caller can reject them
        decoded = self._decode(raw)
        return decoded if decoded is not None else str(raw)

    def set(self, key: str, value: str):
        expires_at = self._clock() + timedelta(days=self.expiry_days)
        self.manager.set(key, self._encode(value), expires_at=expires_at, key=f"set_{key}")

    def refresh(self):
        """Re-read the browser's cookies. Call once per script run."""
        self.manager.get_all(key="refresh_cookies")

    def remove(self, key: str):
        if self.manager.get(key) is not None:
            self.manager.delete(key, key=f"delete_{key}")


# ==================== TOKEN HELPERS ====================

def token_expiry(token: str) -> Optional[float]:
    """
    Read the `exp` claim from a JWT-shaped token without verifying it.

    Returns:
        Expiry as a unix timestamp, or None when the token is opaque
        or carries no expiry
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    payload = parts[1]
    payload += "=" * (-len(payload) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload.encode("ascii")))
    except (ValueError, UnicodeError):
        return None

    exp = claims.get("exp") if isinstance(claims, dict) else None
    if isinstance(exp, (int, float)) and not isinstance(exp, bool):
        return float(exp)
    return None


def is_token_expired(token: str, now: Optional[float] = None) -> bool:
    expiry = token_expiry(token)
    if expiry is None:
        return False
    return expiry <= (now if now is not None else time.time())


# ==================== CREDENTIAL STORE ====================

class CredentialStore:
    """
    Persist the session credential under a single key.

    Stored value: {"token": "...", "user": {"id", "displayName", "role"}}
    """

    def __init__(self, store, key: str):
        self.store = store
        self.key = key

    def save(self, credential: Credential):
        value = json.dumps({
            'token': credential.token,
            'user': credential.user.to_dict(),
        })
        self.store.set(self.key, value)

    def load(self) -> Optional[Credential]:
        """
        Read the persisted credential.

        Returns None when nothing is stored or the stored value cannot be
        parsed into a token and a user.
        """
        raw = self.store.get(self.key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Persisted credential is not valid JSON, ignoring")
            return None

        if not isinstance(data, dict):
            logger.warning("Persisted credential has unexpected shape, ignoring")
            return None

        token = data.get('token')
        user = data.get('user')
        if not isinstance(token, str) or not token or not isinstance(user, dict):
            logger.warning("Persisted credential is missing token or user, ignoring")
            return None

        user_id = user.get('id')
        display_name = user.get('displayName')
        role = user.get('role')
        if not all(isinstance(v, str) for v in (user_id, display_name, role)) or not role:
            logger.warning("Persisted user snapshot is incomplete, ignoring")
            return None

        return Credential(token=token, user=User(id=user_id, display_name=display_name, role=role))

    def has_credential(self) -> bool:
        return self.store.get(self.key) is not None

    def clear(self):
        self.store.remove(self.key)


__all__ = [
    'MemoryStore',
    'CookieStore',
    'CredentialStore',
    'token_expiry',
    'is_token_expired',
]
