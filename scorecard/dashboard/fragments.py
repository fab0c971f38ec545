# scorecard/dashboard/fragments.py
"""
Streamlit rendering for the scorecard dashboard.

- Role badge
- Directorate metric cards (Sales Director)
- Individual metric cards (everyone else)

Cards always render; a failed load shows zeros with a short caption.
"""

import logging

import streamlit as st

from .aggregator import DashboardAggregator, DashboardState
from .constants import DIRECTORATE_CARDS, INDIVIDUAL_CARDS, display_label
from .models import DirectorateMetrics, IndividualMetrics, User

logger = logging.getLogger(__name__)


def role_badge(user: User):
    st.markdown(
        f'<span class="role-badge">{display_label(user.role)}</span>',
        unsafe_allow_html=True
    )


def directorate_cards(metrics: DirectorateMetrics):
    """Six roll-up cards; missing fields show as 0."""
    if metrics is None:
        metrics = DirectorateMetrics.empty()

    columns = st.columns(3)
    for i, (name, label, icon, suffix) in enumerate(DIRECTORATE_CARDS):
        with columns[i % 3]:
            st.metric(
                label=f"{icon} {label}",
                value=f"{metrics.display_value(name)}{suffix}",
            )


def individual_cards(metrics: IndividualMetrics):
    """Four cards for the user's own evaluations."""
    if metrics is None:
        metrics = IndividualMetrics.empty()

    columns = st.columns(4)
    for column, (name, label, icon) in zip(columns, INDIVIDUAL_CARDS):
        with column:
            st.metric(
                label=f"{icon} {label}",
                value=getattr(metrics, name),
            )


def dashboard_fragment(user: User, aggregator: DashboardAggregator):
    """Render the role-scoped dashboard for the signed-in user."""
    role_badge(user)

    if aggregator.state == DashboardState.LOADING:
        st.info("⏳ Loading dashboard...")
        return

    if aggregator.is_director:
        st.markdown("### 🏢 Directorate Overview")
        directorate_cards(aggregator.directorate_metrics)
    else:
        st.markdown("### 📋 Evaluation Results")
        individual_cards(aggregator.individual_metrics)

    if aggregator.state == DashboardState.FAILED:
        st.caption("⚠️ Dashboard data is currently unavailable. Showing empty metrics.")


def get_dashboard_aggregator(session) -> DashboardAggregator:
    """Aggregator for the current browser session, following its session manager."""
    if 'dashboard_aggregator' not in st.session_state:
        aggregator = DashboardAggregator(session.api)
        aggregator.attach(session)
        st.session_state.dashboard_aggregator = aggregator
    return st.session_state.dashboard_aggregator
