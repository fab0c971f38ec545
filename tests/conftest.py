"""Shared fixtures for scorecard tests."""

import base64
import json
from datetime import date, datetime
from unittest.mock import Mock

import pytest

from scorecard.api_client import LoginResult, ScorecardApiClient
from scorecard.auth import SessionManager
from scorecard.config import ApiConfig
from scorecard.dashboard.models import EvaluationItem, EvaluationRecord, User
from scorecard.session_store import CredentialStore, MemoryStore

CREDENTIAL_KEY = "scorecard_credential"


@pytest.fixture
def salesperson():
    return User(id="u-1", display_name="Sam Seller", role="SALESPERSON")


@pytest.fixture
def director():
    return User(id="u-9", display_name="Dana Director", role="SALES_DIRECTOR")


@pytest.fixture
def fixed_now():
    return datetime(2025, 3, 15, 10, 30)


@pytest.fixture
def make_record():
    def _make(record_id="e-1", visit=date(2025, 3, 3), scores=(4, 6)):
        return EvaluationRecord(
            id=record_id,
            visit_date=visit,
            items=[EvaluationItem(score=s) for s in scores],
        )
    return _make


@pytest.fixture
def memory_credentials():
    return CredentialStore(MemoryStore(), CREDENTIAL_KEY)


@pytest.fixture
def api():
    """API client stand-in with the real token bookkeeping."""
    client = ScorecardApiClient(ApiConfig(base_url="https://api.test"), http=Mock())
    client.authenticate = Mock()
    client.fetch_directorate_summary = Mock()
    client.fetch_own_evaluations = Mock(return_value=[])
    client.fetch_evaluatable_users = Mock(return_value=[])
    return client


@pytest.fixture
def session(api, memory_credentials):
    return SessionManager(api, memory_credentials)


@pytest.fixture
def login_as(api, session):
    """Log the session in as the given user."""
    def _login(user, token="tok-123"):
        api.authenticate.return_value = LoginResult(token=token, user=user)
        return session.login("someone@example.com", "secret")
    return _login


@pytest.fixture
def make_jwt():
    """Build an unsigned JWT-shaped token carrying the given claims."""
    def _make(claims):
        def part(obj):
            return base64.urlsafe_b64encode(json.dumps(obj).encode()).decode().rstrip("=")
        return f"{part({'alg': 'HS256'})}.{part(claims)}.signature"
    return _make


class FakeCookieManager:
    """One browser's cookie jar, shaped like extra_streamlit_components.CookieManager."""

    def __init__(self):
        self.cookies = {}
        self.expires = {}
        self.calls = []

    def get(self, cookie):
        return self.cookies.get(cookie)

    def get_all(self, key="get_all"):
        self.calls.append(("get_all", key))
        return dict(self.cookies)

    def set(self, cookie, val, expires_at=None, key="set"):
        self.calls.append(("set", key))
        self.cookies[cookie] = val
        self.expires[cookie] = expires_at

    def delete(self, cookie, key="delete"):
        self.calls.append(("delete", key))
        del self.cookies[cookie]


@pytest.fixture
def browser():
    """Factory for independent browser cookie jars."""
    return FakeCookieManager
