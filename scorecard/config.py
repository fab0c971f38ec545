# scorecard/config.py
"""
Centralized Configuration Management

Version: 1.0.0
Features:
- Support both local (.env) and Streamlit Cloud (secrets.toml)
- Singleton pattern for efficiency
- Type-safe getters with defaults
- Environment detection
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from typing import Dict, Any, Mapping
from dataclasses import dataclass

# Initialize logger
logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://api.instorm.io"
DEFAULT_COOKIE_EXPIRY_DAYS = 7.0
DEFAULT_CREDENTIAL_KEY = "scorecard_credential"


def is_running_on_streamlit_cloud() -> bool:
    """Detect if running on Streamlit Cloud"""
    try:
        import streamlit as st
        return hasattr(st, 'secrets') and len(st.secrets) > 0
    except Exception:
        return False


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid numeric value for {name}: {value!r}")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


@dataclass
class ApiConfig:
    """Remote API configuration container"""
    base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = 15.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'base_url': self.base_url,
            'timeout_seconds': self.timeout_seconds,
        }


@dataclass
class SessionConfig:
    """Persisted session configuration container"""
    credential_key: str = DEFAULT_CREDENTIAL_KEY
    cookie_expiry_days: float = DEFAULT_COOKIE_EXPIRY_DAYS

    def to_dict(self) -> Dict[str, Any]:
        return {
            'cookie_expiry_days': self.cookie_expiry_days,
            'credential_key': self.credential_key,
        }


class Config:
    """
    Centralized configuration management

    Usage:
        from scorecard.config import config

        api_config = config.get_api_config()
        session_config = config.get_session_config()

        level = config.get_app_setting("LOG_LEVEL", "INFO")

        if config.is_feature_enabled("DEBUG_PANEL"):
            ...
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.is_cloud = is_running_on_streamlit_cloud()
        self._load_config()
        self._initialized = True

    @classmethod
    def reset(cls):
        """Drop the singleton so the next Config() re-reads the environment"""
        cls._instance = None

    def _load_config(self):
        """Load configuration based on environment"""
        if self.is_cloud:
            self._load_cloud_config()
        else:
            self._load_local_config()

        self._log_config_status()

    def _load_cloud_config(self):
        """Load configuration from Streamlit Cloud secrets"""
        import streamlit as st

        self._apply(
            api=st.secrets.get("API", {}),
            session=st.secrets.get("SESSION", {}),
            app=st.secrets.get("APP", {}),
        )

        logger.info("☁️ Running in STREAMLIT CLOUD")

    def _load_local_config(self):
        """Load configuration from local .env file"""
        env_paths = [
            Path.cwd() / ".env",
            Path(__file__).parent.parent / ".env",
        ]

        for env_path in env_paths:
            if env_path.exists():
                load_dotenv(env_path)
                logger.info(f"Loaded .env from: {env_path}")
                break

        self._apply(
            api={
                "BASE_URL": os.getenv("API_BASE_URL"),
                "TIMEOUT_SECONDS": os.getenv("API_TIMEOUT_SECONDS"),
            },
            session={
                "COOKIE_EXPIRY_DAYS": os.getenv("SESSION_COOKIE_EXPIRY_DAYS"),
                "CREDENTIAL_KEY": os.getenv("SESSION_CREDENTIAL_KEY"),
            },
            app={
                "LOG_LEVEL": os.getenv("LOG_LEVEL"),
                "ENABLE_DEBUG_PANEL": os.getenv("ENABLE_DEBUG_PANEL"),
            },
        )

        logger.info("💻 Running in LOCAL environment")

    def _apply(self, api: Mapping, session: Mapping, app: Mapping):
        """Build typed containers from a raw settings source"""
        base_url = api.get("BASE_URL") or DEFAULT_API_BASE_URL
        self._api_config = ApiConfig(
            base_url=base_url.rstrip("/"),
            timeout_seconds=_as_float("API_TIMEOUT_SECONDS", api.get("TIMEOUT_SECONDS") or 15.0),
        )

        self._session_config = SessionConfig(
            cookie_expiry_days=_as_float(
                "SESSION_COOKIE_EXPIRY_DAYS",
                session.get("COOKIE_EXPIRY_DAYS") or DEFAULT_COOKIE_EXPIRY_DAYS
            ),
            credential_key=session.get("CREDENTIAL_KEY") or DEFAULT_CREDENTIAL_KEY,
        )

        self._app_config = {
            "LOG_LEVEL": (app.get("LOG_LEVEL") or "INFO").upper(),
            "ENABLE_DEBUG_PANEL": _as_bool(app.get("ENABLE_DEBUG_PANEL") or "false"),
        }

    def _log_config_status(self):
        """Log configuration status"""
        logger.info(f"✅ API: {self._api_config.base_url} (timeout={self._api_config.timeout_seconds}s)")
        logger.info(f"✅ Session cookie: {self._session_config.credential_key} "
                    f"(expires after {self._session_config.cookie_expiry_days} days)")

    # ==================== PUBLIC GETTERS ====================

    def get_api_config(self) -> ApiConfig:
        """Get remote API configuration"""
        return self._api_config

    def get_session_config(self) -> SessionConfig:
        """Get persisted session configuration"""
        return self._session_config

    def get_app_setting(self, key: str, default: Any = None) -> Any:
        """Get application setting with default"""
        return self._app_config.get(key, default)

    def is_feature_enabled(self, feature: str) -> bool:
        """Check if feature is enabled"""
        key = f"ENABLE_{feature.upper()}"
        return bool(self._app_config.get(key, False))

    @property
    def app_config(self) -> Dict[str, Any]:
        return self._app_config.copy()


# ==================== SINGLETON INSTANCE ====================

config = Config()

__all__ = [
    'config',
    'Config',
    'ApiConfig',
    'SessionConfig',
]
