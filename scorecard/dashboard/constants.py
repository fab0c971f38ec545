# scorecard/dashboard/constants.py
"""
Constants for the Dashboard Module

Centralized configuration for:
- Role definitions and display labels
- Metric card definitions (order, labels, formatting)
"""

from enum import Enum

# =====================================================================
# ROLE DEFINITIONS
# =====================================================================


class Role(str, Enum):
    """Organizational roles known to the scorecard API."""
    SALES_DIRECTOR = "SALES_DIRECTOR"
    REGIONAL_SALES_MANAGER = "REGIONAL_SALES_MANAGER"
    SALES_LEAD = "SALES_LEAD"
    SALESPERSON = "SALESPERSON"
    ADMIN = "ADMIN"


ROLE_LABELS = {
    Role.SALES_DIRECTOR.value: "Sales Director",
    Role.REGIONAL_SALES_MANAGER.value: "Regional Sales Manager",
    Role.SALES_LEAD.value: "Sales Lead",
    Role.SALESPERSON.value: "Salesperson",
    Role.ADMIN.value: "Administrator",
}

# Role assigned when the login response omits one
DEFAULT_ROLE = Role.SALESPERSON.value

# Roles that see the directorate roll-up instead of their own evaluations
DIRECTORATE_ROLES = [Role.SALES_DIRECTOR.value]

# Roles allowed to open the debug page regardless of the feature flag
DEBUG_ACCESS_ROLES = [Role.ADMIN.value]


def display_label(role) -> str:
    """Human label for a role; unknown roles are shown as-is."""
    key = role.value if isinstance(role, Role) else role
    return ROLE_LABELS.get(key, key)


# =====================================================================
# METRIC CARDS
# =====================================================================

# (field, label, icon, suffix)
DIRECTORATE_CARDS = [
    ("total_regions", "Total Regions", "🌍", ""),
    ("total_team_members", "Team Members", "👥", ""),
    ("average_performance", "Average Performance", "📈", "%"),
    ("total_evaluations", "Total Evaluations", "📋", ""),
    ("evaluations_completed", "Completed", "✅", ""),
    ("average_score", "Average Score", "⭐", ""),
]

INDIVIDUAL_CARDS = [
    ("total_evaluations", "Total Evaluations", "📋"),
    ("average_score_display", "Average Score", "⭐"),
    ("total_score", "Total Score", "🏆"),
    ("this_month", "This Month", "📅"),
]
