# scorecard/api_client.py
"""
Scorecard API Client

Thin HTTP layer over the remote scorecard service:
- Login (token + user)
- Directorate roll-up for Sales Directors
- The current user's own evaluations
- Users the current user may evaluate (debug page only)

A bearer token is attached to every authorized call. An HTTP 401 means the
token is no longer accepted: the registered on_unauthorized callback runs
(the session manager logs the user out) and AuthError is raised.
No retries, no token refresh.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import requests

from .config import ApiConfig
from .exceptions import ApiError, AuthError
from .dashboard.models import (
    DirectorateMetrics,
    EvaluationRecord,
    User,
    parse_directorate_summary,
    parse_evaluations,
    parse_user,
)

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "/auth/login"
DIRECTORATE_SUMMARY_ENDPOINT = "/analytics/dashboard"
OWN_EVALUATIONS_ENDPOINT = "/evaluations/my"
EVALUATABLE_USERS_ENDPOINT = "/organizations/salespeople"


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


class ScorecardApiClient:
    """
    Client for the scorecard REST API.

    Usage:
        api = ScorecardApiClient(config.get_api_config())
        result = api.authenticate("jane@example.com", "secret")
        api.set_token(result.token)

        records = api.fetch_own_evaluations()
    """

    def __init__(
        self,
        api_config: ApiConfig,
        http: Optional[requests.Session] = None,
        on_unauthorized: Optional[Callable[[], None]] = None
    ):
        self.base_url = api_config.base_url.rstrip("/")
        self.timeout = api_config.timeout_seconds
        self.http = http if http is not None else requests.Session()
        self.on_unauthorized = on_unauthorized
        self._token: Optional[str] = None

    # ==================== TOKEN ====================

    def set_token(self, token: str):
        self._token = token

    def clear_token(self):
        self._token = None

    @property
    def has_token(self) -> bool:
        return self._token is not None

    # ==================== TRANSPORT ====================

    def _headers(self) -> dict:
        headers = {'Content-Type': 'application/json'}
        if self._token:
            headers['Authorization'] = f"Bearer {self._token}"
        return headers

    def _request(self, method: str, endpoint: str, **kwargs) -> Any:
        """
        Perform an authorized request and decode the JSON body.

        Raises:
            AuthError: the server answered 401
            ApiError: transport failure, other non-2xx status or bad JSON
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"📡 {method} {endpoint}")

        try:
            response = self.http.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Network error for {endpoint}: {e}")
            raise ApiError(f"Network error for {endpoint}", detail=str(e)) from e

        if response.status_code == 401:
            logger.warning(f"401 from {endpoint}, credential no longer accepted")
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            raise AuthError("Authentication expired. Please log in again.", detail=f"401 from {endpoint}")

        if not response.ok:
            logger.error(f"API error {response.status_code} for {endpoint}")
            raise ApiError(
                f"API error {response.status_code} for {endpoint}",
                detail=response.text,
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {endpoint}: {e}")
            raise ApiError(f"Invalid JSON from {endpoint}", detail=str(e), status_code=response.status_code) from e

    # ==================== AUTHENTICATION ====================

    def authenticate(self, identifier: str, secret: str) -> LoginResult:
        """
        Exchange credentials for a bearer token.

        Args:
            identifier: Login email
            secret: Password

        Returns:
            LoginResult(token, user)

        Raises:
            AuthError: rejected credentials, network fault or no token in the response
        """
        url = f"{self.base_url}{LOGIN_ENDPOINT}"
        try:
            response = self.http.post(
                url,
                json={'email': identifier, 'password': secret},
                headers={'Content-Type': 'application/json'},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise AuthError("Login failed", detail=str(e)) from e

        if not response.ok:
            raise AuthError(f"Login failed: {response.status_code}", detail=response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise AuthError("Login failed", detail=f"invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise AuthError("Login failed", detail="unexpected response shape")

        token = data.get('token') or data.get('access_token')
        if not token or not isinstance(token, str):
            raise AuthError("No token received from server")

        try:
            user = parse_user(data.get('user') or {}, fallback_name=identifier.split('@')[0])
        except ApiError as e:
            raise AuthError("Login failed", detail=e.detail) from e

        return LoginResult(token=token, user=user)

    # ==================== DATA ====================

    def fetch_directorate_summary(self) -> DirectorateMetrics:
        return parse_directorate_summary(self._request("GET", DIRECTORATE_SUMMARY_ENDPOINT))

    def fetch_own_evaluations(self) -> List[EvaluationRecord]:
        return parse_evaluations(self._request("GET", OWN_EVALUATIONS_ENDPOINT))

    def fetch_evaluatable_users(self) -> List[User]:
        payload = self._request("GET", EVALUATABLE_USERS_ENDPOINT)
        if not isinstance(payload, list):
            raise ApiError("Invalid users payload", detail=f"expected list, got {type(payload).__name__}")
        return [parse_user(entry) for entry in payload]


__all__ = [
    'ScorecardApiClient',
    'LoginResult',
]
