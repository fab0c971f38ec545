# scorecard/dashboard/models.py
"""
Typed records for the scorecard client

Every payload coming back from the remote API is parsed here into an
explicit dataclass. A payload that does not have the expected shape raises
ApiError instead of travelling further into the app as an untyped dict.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from ..exceptions import ApiError
from .constants import DEFAULT_ROLE

logger = logging.getLogger(__name__)


# =============================================================================
# SESSION RECORDS
# =============================================================================

@dataclass(frozen=True)
class User:
    """Authenticated user snapshot. Role is fixed for the life of a session."""
    id: str
    display_name: str
    role: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.id,
            'displayName': self.display_name,
            'role': self.role,
        }


@dataclass(frozen=True)
class Credential:
    """Bearer token plus the user it authorizes."""
    token: str
    user: User

    def __repr__(self) -> str:
        return f"Credential(token='***', user={self.user!r})"


def parse_user(payload: Any, fallback_name: str = "") -> User:
    """
    Parse a user object from the API.

    Args:
        payload: Raw user mapping ({id, displayName, role})
        fallback_name: Display name used when the payload has none

    Returns:
        User

    Raises:
        ApiError: payload is not a mapping or a field has the wrong type
    """
    if not isinstance(payload, Mapping):
        raise ApiError("Invalid user payload", detail=f"expected object, got {type(payload).__name__}")

    user_id = payload.get('id', '')
    display_name = payload.get('displayName') or fallback_name
    role = payload.get('role') or DEFAULT_ROLE

    if not isinstance(user_id, (str, int)) or isinstance(user_id, bool):
        raise ApiError("Invalid user payload", detail="id must be a string")
    if not isinstance(display_name, str) or not isinstance(role, str):
        raise ApiError("Invalid user payload", detail="displayName and role must be strings")

    return User(id=str(user_id), display_name=display_name, role=role)


# =============================================================================
# EVALUATIONS
# =============================================================================

@dataclass(frozen=True)
class EvaluationItem:
    score: float


@dataclass(frozen=True)
class EvaluationRecord:
    """One evaluation visit. Items may be empty for incomplete evaluations."""
    id: str
    visit_date: date
    items: List[EvaluationItem] = field(default_factory=list)

    @property
    def score_sum(self) -> float:
        return sum(item.score for item in self.items)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_visit_date(value: Any) -> date:
    """
    Parse an ISO date or datetime string into a calendar date.

    Timezone-aware datetimes are converted to local time first so the
    month matches what the user sees on their clock.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str) and value:
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ApiError("Invalid evaluation payload", detail=f"unparsable visitDate {value!r}")
    else:
        raise ApiError("Invalid evaluation payload", detail=f"unparsable visitDate {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.date()


def parse_evaluation(payload: Any) -> EvaluationRecord:
    """Parse one evaluation record ({id, visitDate, items: [{score}]})."""
    if not isinstance(payload, Mapping):
        raise ApiError("Invalid evaluation payload", detail=f"expected object, got {type(payload).__name__}")

    raw_items = payload.get('items') or []
    if not isinstance(raw_items, list):
        raise ApiError("Invalid evaluation payload", detail="items must be a list")

    items = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            raise ApiError("Invalid evaluation payload", detail="item must be an object")
        # Older API versions call the item score 'rating'
        score = raw.get('score', raw.get('rating'))
        if not _is_number(score):
            raise ApiError("Invalid evaluation payload", detail=f"item score must be numeric, got {score!r}")
        items.append(EvaluationItem(score=score))

    return EvaluationRecord(
        id=str(payload.get('id', '')),
        visit_date=parse_visit_date(payload.get('visitDate')),
        items=items,
    )


def parse_evaluations(payload: Any) -> List[EvaluationRecord]:
    if not isinstance(payload, list):
        raise ApiError("Invalid evaluations payload", detail=f"expected list, got {type(payload).__name__}")
    return [parse_evaluation(entry) for entry in payload]


# =============================================================================
# METRICS
# =============================================================================

@dataclass(frozen=True)
class IndividualMetrics:
    """Summary numbers for an individual contributor's own evaluations."""
    total_evaluations: int = 0
    average_score: float = 0
    total_score: float = 0
    this_month: int = 0

    @classmethod
    def empty(cls) -> "IndividualMetrics":
        return cls()

    @property
    def average_score_display(self) -> str:
        if not self.total_evaluations:
            return "0"
        return f"{self.average_score:.1f}"


# Wire names of the directorate roll-up fields
DIRECTORATE_FIELDS = {
    'total_regions': 'totalRegions',
    'total_team_members': 'totalTeamMembers',
    'average_performance': 'averagePerformance',
    'total_evaluations': 'totalEvaluations',
    'evaluations_completed': 'evaluationsCompleted',
    'average_score': 'averageScore',
}


@dataclass(frozen=True)
class DirectorateMetrics:
    """
    Organization-wide roll-up, pre-aggregated by the API.

    Fields are kept exactly as received; a field the API left out stays
    None and only becomes 0 when displayed.
    """
    total_regions: Optional[float] = None
    total_team_members: Optional[float] = None
    average_performance: Optional[float] = None
    total_evaluations: Optional[float] = None
    evaluations_completed: Optional[float] = None
    average_score: Optional[float] = None

    @classmethod
    def empty(cls) -> "DirectorateMetrics":
        return cls(**{f.name: 0 for f in fields(cls)})

    def display_value(self, name: str):
        value = getattr(self, name)
        return value if value is not None else 0


def parse_directorate_summary(payload: Any) -> DirectorateMetrics:
    if not isinstance(payload, Mapping):
        raise ApiError("Invalid directorate payload", detail=f"expected object, got {type(payload).__name__}")

    values = {}
    for attr, wire_name in DIRECTORATE_FIELDS.items():
        value = payload.get(wire_name)
        if value is not None and not _is_number(value):
            raise ApiError("Invalid directorate payload", detail=f"{wire_name} must be numeric, got {value!r}")
        values[attr] = value

    return DirectorateMetrics(**values)
