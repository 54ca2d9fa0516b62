"""Tests for calculator activity logging."""

import logging
from datetime import UTC, datetime

from clinicalscore.core.audit import (
    ActivityAction,
    ActivityEvent,
    log_activity,
    log_calculation,
    log_submission_failure,
)
from clinicalscore.services.framework import CalculatorFramework


class TestActivityEvent:
    """Tests for ActivityEvent model."""

    def test_required_fields(self) -> None:
        """Test ActivityEvent with required fields only."""
        event = ActivityEvent(action=ActivityAction.CALCULATOR_STARTED, calculator_type="audit")
        assert event.session_id is None
        assert event.success is True

    def test_timestamp_auto_set(self) -> None:
        """Test that timestamp is automatically set."""
        before = datetime.now(UTC)
        event = ActivityEvent(action=ActivityAction.EXPORT, calculator_type="gcs")
        after = datetime.now(UTC)
        assert before <= event.timestamp <= after

    def test_action_values(self) -> None:
        """Test action type values."""
        assert ActivityAction.CALCULATOR_STARTED == "calculator_started"
        assert ActivityAction.CALCULATOR_RESET == "calculator_reset"
        assert ActivityAction.SUBMISSION_FAILED == "submission_failed"


class TestLogActivity:
    """Tests for the logging helpers."""

    def test_log_activity_returns_event(self, caplog) -> None:
        """Test log_activity logs and returns the event."""
        with caplog.at_level(logging.INFO, logger="activity"):
            event = log_activity(ActivityAction.EXPORT, "who5", session_id="s1", details={"format": "json"})

        assert event.details == {"format": "json"}
        assert "ACTIVITY: export who5 session=s1 success=True" in caplog.text

    def test_failures_log_as_warning(self, caplog) -> None:
        """Test unsuccessful activity is logged at WARNING."""
        with caplog.at_level(logging.INFO, logger="activity"):
            event = log_submission_failure("audit", "s2", attempts=3, reason="timeout")

        assert event.success is False
        assert event.details == {"attempts": 3, "reason": "timeout"}
        assert caplog.records[-1].levelno == logging.WARNING

    def test_log_calculation_excludes_answers(self) -> None:
        """Test only the outcome is recorded."""
        event = log_calculation("epds", "s3", score=14, risk_level="moderate", duration_ms=1.23456)
        assert event.action == ActivityAction.CALCULATION_COMPLETED
        assert event.details == {"score": 14, "risk_level": "moderate", "duration_ms": 1.235}

    def test_framework_logs_start_and_reset(self, caplog) -> None:
        """Test the framework records session start and reset."""
        with caplog.at_level(logging.INFO, logger="activity"):
            framework = CalculatorFramework("gcs")
            framework.reset_calculator()

        messages = [record.message for record in caplog.records if record.name == "activity"]
        assert any(m.startswith("ACTIVITY: calculator_started gcs") for m in messages)
        assert any(m.startswith("ACTIVITY: calculator_reset gcs") for m in messages)
