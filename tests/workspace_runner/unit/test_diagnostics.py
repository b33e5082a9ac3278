"""Unit tests for environment diagnostics."""

import pytest

from workspace_runner.monitoring.diagnostics import (
    ALL_GOOD_MESSAGE,
    ISSUES_HEADER,
    PERMISSION_REMEDIATION,
    SEPARATE_DESKTOPS_REMEDIATION,
    WorkspaceDiagnostics,
    build_checks,
    diagnose,
)


class TestDiagnose:
    """Test the pure remediation text builder."""

    def test_all_good(self):
        assert diagnose(True, True) == "All required permissions are configured correctly."

    def test_all_good_without_desktop_check(self):
        assert diagnose(True) == ALL_GOOD_MESSAGE

    def test_permission_missing(self):
        text = diagnose(False, True)

        assert text.startswith(ISSUES_HEADER)
        assert "Accessibility" in text
        assert "separate Spaces" not in text

    def test_separate_desktops_disabled(self):
        text = diagnose(True, False)

        assert text == ISSUES_HEADER + "\n\n" + SEPARATE_DESKTOPS_REMEDIATION
        assert "Displays have separate Spaces" in text

    def test_both_failing_in_display_order(self):
        text = diagnose(False, False)

        lines = text.split("\n")
        assert lines[0] == ISSUES_HEADER
        assert lines[1] == ""
        assert lines[2:] == [PERMISSION_REMEDIATION, SEPARATE_DESKTOPS_REMEDIATION]

    @pytest.mark.parametrize("granted", [True, False])
    @pytest.mark.parametrize("separate", [True, False, None])
    def test_one_bullet_per_failing_check(self, granted, separate):
        text = diagnose(granted, separate)

        failing = (not granted) + (separate is False)
        assert text.count("• ") == failing
        if failing == 0:
            assert text == ALL_GOOD_MESSAGE

    def test_build_checks_omits_inapplicable_predicate(self):
        checks = build_checks(True, None)

        assert [check.name for check in checks] == ["accessibility_permission"]


class TestWorkspaceDiagnostics:
    """Test probing the environment collaborators."""

    def test_reads_collaborators(self, permission_oracle, desktop_preferences):
        permission_oracle.granted = False
        desktop_preferences.enabled = False
        diagnostics = WorkspaceDiagnostics(permission_oracle, desktop_preferences)

        checks = diagnostics.check()

        assert [(c.name, c.ok) for c in checks] == [
            ("accessibility_permission", False),
            ("separate_desktops", False),
        ]

    def test_desktop_check_excluded(self, permission_oracle, desktop_preferences):
        desktop_preferences.enabled = False
        diagnostics = WorkspaceDiagnostics(permission_oracle, desktop_preferences)

        assert diagnostics.diagnose(include_desktop=False) == ALL_GOOD_MESSAGE

    def test_without_desktop_preferences(self, permission_oracle):
        diagnostics = WorkspaceDiagnostics(permission_oracle)

        assert len(diagnostics.check(include_desktop=True)) == 1

    def test_failing_probe_counts_as_unsatisfied(self, permission_oracle, desktop_preferences):
        def unreadable():
            raise OSError("preferences unavailable")

        desktop_preferences.separate_desktops_enabled = unreadable
        diagnostics = WorkspaceDiagnostics(permission_oracle, desktop_preferences)

        assert diagnostics.diagnose() == ISSUES_HEADER + "\n\n" + SEPARATE_DESKTOPS_REMEDIATION

    def test_diagnose_has_no_side_effects(self, permission_oracle, desktop_preferences):
        permission_oracle.granted = False
        diagnostics = WorkspaceDiagnostics(permission_oracle, desktop_preferences)

        first = diagnostics.diagnose()
        second = diagnostics.diagnose()

        assert first == second
        assert permission_oracle.requests == 0
