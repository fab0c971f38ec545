"""Tests for role definitions and display labels."""

import pytest

from scorecard.dashboard.constants import ROLE_LABELS, Role, display_label


class TestDisplayLabel:
    """Tests for display_label."""

    @pytest.mark.parametrize("role", list(Role))
    def test_every_known_role_has_a_label(self, role):
        """Test every enumerated role maps to a non-empty label."""
        label = display_label(role.value)
        assert label
        assert label == ROLE_LABELS[role.value]

    def test_enum_member_and_string_agree(self):
        """Test passing the enum or its value gives the same label."""
        assert display_label(Role.SALES_DIRECTOR) == display_label("SALES_DIRECTOR")
        assert display_label("SALES_DIRECTOR") == "Sales Director"

    def test_deterministic(self):
        """Test repeated calls return the same label."""
        assert display_label("SALES_LEAD") == display_label("SALES_LEAD")

    def test_unknown_role_returned_unchanged(self):
        """Test unrecognized roles are shown as-is."""
        assert display_label("REGIONAL_MANAGER") == "REGIONAL_MANAGER"
        assert display_label("") == ""
