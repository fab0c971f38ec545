"""
Dashboard Module

Role-scoped metrics for the scorecard home page.

Components:
- constants: Role enumeration, display labels, metric card definitions
- models: Typed API records (User, EvaluationRecord, metrics) and parsers
- metrics: Individual-contributor metric reduction
- aggregator: Role-driven fetch-and-reduce state machine
- fragments: Streamlit metric cards

Usage:
    from scorecard.dashboard import (
        DashboardAggregator,
        calculate_individual_metrics,
        display_label,
    )
"""

from .constants import (
    Role,
    ROLE_LABELS,
    DIRECTORATE_ROLES,
    display_label,
)
from .models import (
    User,
    Credential,
    EvaluationItem,
    EvaluationRecord,
    IndividualMetrics,
    DirectorateMetrics,
)
from .metrics import calculate_individual_metrics
from .aggregator import DashboardAggregator, DashboardState

__all__ = [
    # Classes
    'DashboardAggregator',
    'DashboardState',
    'User',
    'Credential',
    'EvaluationItem',
    'EvaluationRecord',
    'IndividualMetrics',
    'DirectorateMetrics',

    # Functions
    'calculate_individual_metrics',
    'display_label',

    # Constants
    'Role',
    'ROLE_LABELS',
    'DIRECTORATE_ROLES',
]

__version__ = '1.0.0'
