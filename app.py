# app.py
"""
Sales Scorecard - Main Entry Point

Version: 1.0.0
"""

import streamlit as st
from scorecard.auth import sync_session
from scorecard.config import config
from scorecard.dashboard.fragments import dashboard_fragment, get_dashboard_aggregator
from scorecard.dashboard.constants import display_label
from scorecard.exceptions import AuthError
import logging

# Configure logging
logging.basicConfig(
    level=config.get_app_setting("LOG_LEVEL", "INFO"),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

APP_NAME = "Sales Scorecard"
APP_ICON = "📊"
APP_VERSION = "1.0.0"

st.set_page_config(page_title=APP_NAME, page_icon=APP_ICON, layout="centered")

st.markdown("""
<style>
    .scorecard-title { font-size: 2rem; font-weight: 700; color: #0b5394; margin: 0; }
    .scorecard-tagline { color: #5f6b7a; margin-bottom: 1.5rem; }
    .welcome-box { background: #0b5394; color: #fff; padding: 1.25rem 1.5rem; border-radius: 0.5rem; }
    .welcome-title { font-size: 1.4rem; font-weight: 600; }
    .role-badge { background: #dbe8f6; color: #0b5394; padding: 0.2rem 0.6rem; border-radius: 0.75rem; }
    .scorecard-version { color: #9aa4b1; font-size: 0.8rem; text-align: right; }
</style>
""", unsafe_allow_html=True)

# One cookie read and one restore attempt per script run
session = sync_session()
aggregator = get_dashboard_aggregator(session)


# ==================== LOGIN ====================

def _queue_login(email: str, password: str):
    """Stash the credentials and rerun so the form renders disabled during the call."""
    st.session_state.pending_login = (email, password)
    st.session_state.login_in_flight = True
    st.rerun()


def _run_pending_login() -> bool:
    pending = st.session_state.pop('pending_login', None)
    if pending is None:
        st.session_state.login_in_flight = False
        st.rerun()

    email, password = pending
    try:
        with st.spinner("Authenticating..."):
            session.login(email, password)
    except AuthError as e:
        st.session_state.login_error = e.message
        st.session_state.login_in_flight = False
        st.rerun()

    st.session_state.login_in_flight = False
    return True


def show_login_page() -> bool:
    """
    Display the login form.

    Returns:
        True when a queued login succeeded during this run
    """
    in_flight = st.session_state.get('login_in_flight', False)
    page = st.empty()

    with page.container():
        st.markdown(f'<p class="scorecard-title">{APP_ICON} {APP_NAME}</p>', unsafe_allow_html=True)
        st.markdown('<p class="scorecard-tagline">Sales evaluation tracking</p>', unsafe_allow_html=True)

        error = st.session_state.pop('login_error', None)
        if error:
            st.error(f"❌ {error}")

        with st.form("login_form"):
            email = st.text_input("Email", key="login_email")
            password = st.text_input("Password", type="password", key="login_password")
            submit = st.form_submit_button("🔑 Login", type="primary", disabled=in_flight)

        if submit:
            if not email or not password:
                st.warning("Please enter both email and password")
            else:
                _queue_login(email, password)

    if in_flight and _run_pending_login():
        page.empty()
        return True
    return False


# ==================== DASHBOARD ====================

def show_main_app():
    """Display the dashboard after login"""
    user = session.current_user

    sidebar = st.sidebar.empty()
    with sidebar.container():
        st.markdown(f"### 👤 {user.display_name}")
        st.caption(f"Role: {display_label(user.role)}")
        logout = st.button("🚪 Logout")

    if logout:
        sidebar.empty()
        session.logout()
        return

    st.markdown(
        f'<div class="welcome-box"><div class="welcome-title">Welcome, {user.display_name}! 👋</div></div>',
        unsafe_allow_html=True
    )

    dashboard_fragment(user, aggregator)

    st.markdown(f'<p class="scorecard-version">{APP_NAME} v{APP_VERSION}</p>', unsafe_allow_html=True)


# ==================== MAIN ====================

def main():
    """Main application entry point"""
    # Logout and a successful login switch views within the same run,
    # leaving the cookie write rendered for the browser to apply
    if session.is_authenticated:
        show_main_app()

    if not session.is_authenticated and show_login_page():
        show_main_app()


if __name__ == "__main__":
    main()
