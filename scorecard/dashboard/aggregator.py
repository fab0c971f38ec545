# scorecard/dashboard/aggregator.py
"""
Role-scoped Dashboard Aggregator

Watches the session's current role and loads the matching dataset:
- Sales Director: directorate roll-up, passed through as-is
- Everyone else: own evaluations, reduced into IndividualMetrics

States: LOADING -> READY | FAILED, back to LOADING on every role change.
A failed fetch never breaks the dashboard; it shows zeroed metrics.

Each load takes a new generation number. A response that arrives after a
newer load started belongs to a superseded generation and is dropped.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from ..exceptions import ScorecardError
from .constants import DIRECTORATE_ROLES
from .metrics import calculate_individual_metrics
from .models import DirectorateMetrics, IndividualMetrics, User

logger = logging.getLogger(__name__)


class DashboardState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class DashboardAggregator:
    """
    Fetch-and-reduce controller for the dashboard metric cards.

    Usage:
        aggregator = DashboardAggregator(api)
        aggregator.attach(session)   # loads now if a user is present

        if aggregator.is_director:
            metrics = aggregator.directorate_metrics
        else:
            metrics = aggregator.individual_metrics
    """

    def __init__(self, api, clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            api: Collaborator exposing fetch_directorate_summary() and
                fetch_own_evaluations()
            clock: Source of "now" for the this-month count
        """
        self.api = api
        self.clock = clock
        self._generation = 0
        self._role: Optional[str] = None
        self._state = DashboardState.LOADING
        self._individual: Optional[IndividualMetrics] = None
        self._directorate: Optional[DirectorateMetrics] = None
        self._error: Optional[ScorecardError] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def error(self) -> Optional[ScorecardError]:
        return self._error

    @property
    def is_director(self) -> bool:
        return self._role in DIRECTORATE_ROLES

    @property
    def individual_metrics(self) -> Optional[IndividualMetrics]:
        return self._individual

    @property
    def directorate_metrics(self) -> Optional[DirectorateMetrics]:
        return self._directorate

    # =========================================================================
    # ROLE OBSERVATION
    # =========================================================================

    def attach(self, session):
        """Follow a session's current user; loads immediately if one is set."""
        if self._unsubscribe is not None:
            self._unsubscribe()
        self._unsubscribe = session.subscribe(self.observe)
        if session.current_user is not None:
            self.observe(session.current_user)

    def observe(self, user: Optional[User]):
        """React to a current-user change. Only a different role triggers a load."""
        role = user.role if user is not None else None

        if role is None:
            if self._role is not None:
                logger.info("Session ended, clearing dashboard metrics")
            self._generation += 1
            self._role = None
            self._state = DashboardState.LOADING
            self._individual = None
            self._directorate = None
            self._error = None
            return

        if role == self._role:
            return

        self.load(role)

    # =========================================================================
    # LOADING
    # =========================================================================

    def load(self, role: str):
        """Enter LOADING for a role and run its fetch-and-reduce pass."""
        self._generation += 1
        generation = self._generation
        self._role = role
        self._state = DashboardState.LOADING
        self._error = None

        director = role in DIRECTORATE_ROLES
        logger.info(f"Loading {'directorate' if director else 'individual'} dashboard for role {role}")

        try:
            if director:
                directorate = self.api.fetch_directorate_summary()
                individual = None
            else:
                records = self.api.fetch_own_evaluations()
                individual = calculate_individual_metrics(records, now=self.clock())
                directorate = None
        except ScorecardError as e:
            if self._is_stale(generation):
                return
            logger.error(f"Failed to load dashboard data for role {role}: {e}")
            self._error = e
            self._individual = None if director else IndividualMetrics.empty()
            self._directorate = DirectorateMetrics.empty() if director else None
            self._state = DashboardState.FAILED
            return

        if self._is_stale(generation):
            return

        self._individual = individual
        self._directorate = directorate
        self._state = DashboardState.READY
        logger.debug(f"Dashboard ready for role {role} (generation {generation})")

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.info(f"Discarding stale dashboard response (generation {generation}, current {self._generation})")
            return True
        return False


__all__ = [
    'DashboardAggregator',
    'DashboardState',
]
