"""Activity logging for calculator sessions.

Records what happened in a questionnaire session:
- Session start and reset
- Completed calculations (score and risk level, never raw answers)
- Failed remote submissions
- Result exports

Events go to a dedicated logger so they can be routed to a separate,
append-only sink in deployment.
"""

import logging
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field

# Separate logger for calculator activity
activity_logger = logging.getLogger("activity")


class ActivityAction(str, Enum):
    """Types of recorded calculator activity."""

    CALCULATOR_STARTED = "calculator_started"
    CALCULATION_COMPLETED = "calculation_completed"
    CALCULATION_FAILED = "calculation_failed"
    CALCULATOR_RESET = "calculator_reset"
    SUBMISSION_FAILED = "submission_failed"
    EXPORT = "export"


class ActivityEvent(BaseModel):
    """Activity event record."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    action: ActivityAction = Field(..., description="Type of activity")
    calculator_type: str = Field(..., description="Calculator the event belongs to")
    session_id: str | None = Field(None, description="Framework session ID")
    details: dict | None = Field(None, description="Additional context")
    success: bool = Field(True, description="Whether the activity succeeded")


def log_activity(
    action: ActivityAction,
    calculator_type: str,
    session_id: str | None = None,
    details: dict | None = None,
    success: bool = True,
) -> ActivityEvent:
    """Log a calculator activity event.

    Args:
        action: Type of activity
        calculator_type: Calculator type identifier
        session_id: Framework session ID
        details: Additional context
        success: Whether the activity succeeded

    Returns:
        The created ActivityEvent
    """
    event = ActivityEvent(
        action=action,
        calculator_type=calculator_type,
        session_id=session_id,
        details=details,
        success=success,
    )

    log_level = logging.INFO if success else logging.WARNING
    activity_logger.log(
        log_level,
        f"ACTIVITY: {action.value} {calculator_type}"
        f"{f' session={session_id}' if session_id else ''}"
        f" success={success}",
        extra={"activity_event": event.model_dump()},
    )

    return event


def log_calculation(
    calculator_type: str,
    session_id: str,
    score: float,
    risk_level: str,
    duration_ms: float,
) -> ActivityEvent:
    """Log a completed calculation.

    Only the outcome is recorded; answers stay out of the log.
    """
    return log_activity(
        action=ActivityAction.CALCULATION_COMPLETED,
        calculator_type=calculator_type,
        session_id=session_id,
        details={"score": score, "risk_level": risk_level, "duration_ms": round(duration_ms, 3)},
    )


def log_submission_failure(
    calculator_type: str,
    session_id: str,
    attempts: int,
    reason: str,
) -> ActivityEvent:
    """Log a failed remote submission (degraded completion)."""
    return log_activity(
        action=ActivityAction.SUBMISSION_FAILED,
        calculator_type=calculator_type,
        session_id=session_id,
        details={"attempts": attempts, "reason": reason},
        success=False,
    )
