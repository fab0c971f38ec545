"""
Sales Scorecard client package

This package contains the session and dashboard core:
- auth: Session manager (login, logout, restore, current user)
- api_client: HTTP client for the scorecard API
- session_store: Persisted credential storage
- config: Configuration management (local .env + Streamlit Cloud)
- dashboard: Role-scoped dashboard metrics

Usage:
    from scorecard.auth import get_session_manager
    from scorecard.dashboard import DashboardAggregator
    from scorecard.config import config
"""

from .exceptions import (
    ScorecardError,
    AuthError,
    ApiError,
)

__all__ = [
    'ScorecardError',
    'AuthError',
    'ApiError',
]

__version__ = '1.0.0'
