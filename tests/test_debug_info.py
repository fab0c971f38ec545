"""Tests for read-only debug info collection."""

from scorecard.dashboard.models import User
from scorecard.debug_info import collect_debug_info
from scorecard.exceptions import ApiError


class TestCollectDebugInfo:
    def test_collects_user_and_evaluatable_users(self, api, session, login_as, director):
        login_as(director)
        api.fetch_evaluatable_users.return_value = [
            User(id="u-3", display_name="Rita", role="REGIONAL_SALES_MANAGER"),
        ]

        info = collect_debug_info(session)

        assert info['current_user'] == director.to_dict()
        assert info['credential_persisted'] is True
        assert info['token_attached'] is True
        assert info['evaluatable_users'].to_dict('records') == [
            {'id': 'u-3', 'name': 'Rita', 'role': 'REGIONAL_SALES_MANAGER'},
        ]

    def test_error_reported_inline(self, api, session, login_as, salesperson):
        """Test a failing call is reported, not raised."""
        login_as(salesperson)
        api.fetch_evaluatable_users.side_effect = ApiError("API error 500 for /organizations/salespeople")

        info = collect_debug_info(session)

        assert info['evaluatable_users_error'] == "API error 500 for /organizations/salespeople"
        assert 'evaluatable_users' not in info

    def test_does_not_touch_session(self, api, session, login_as, salesperson, memory_credentials):
        """Test collecting info leaves the session state unchanged."""
        login_as(salesperson)
        before = memory_credentials.load()

        collect_debug_info(session)

        assert session.current_user == salesperson
        assert memory_credentials.load() == before
        api.authenticate.assert_called_once()

    def test_no_token_in_output(self, session, login_as, salesperson):
        login_as(salesperson, token="secret-token")

        info = collect_debug_info(session)

        assert "secret-token" not in repr({k: v for k, v in info.items() if k != 'evaluatable_users'})
