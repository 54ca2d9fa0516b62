"""Core application configuration and utilities."""

from clinicalscore.core.audit import ActivityAction, ActivityEvent, log_activity, log_calculation, log_submission_failure
from clinicalscore.core.config import configure_logging, settings
from clinicalscore.core.errors import (
    CalculatorBusyError,
    CalculatorError,
    ConfigurationError,
    FieldViolation,
    SubmissionFailure,
    ValidationError,
)

__all__ = [
    # Config
    "settings",
    "configure_logging",
    # Activity log
    "ActivityAction",
    "ActivityEvent",
    "log_activity",
    "log_calculation",
    "log_submission_failure",
    # Errors
    "CalculatorError",
    "CalculatorBusyError",
    "ConfigurationError",
    "FieldViolation",
    "SubmissionFailure",
    "ValidationError",
]
