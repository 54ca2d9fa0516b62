"""Error taxonomy for calculator sessions.

- ValidationError: user-correctable (missing answers, out-of-range values,
  patient not eligible for the calculator).
- ConfigurationError: programming defect detected at setup time.
- CalculatorBusyError: a submission is already in flight.
- SubmissionFailure: the remote log write failed after a successful local
  calculation. Never undoes the local result.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level constraint violation."""

    field: str
    message: str
    code: str = "invalid"
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "code": self.code, "value": self.value}


class CalculatorError(Exception):
    """Base class for calculator errors."""


class ValidationError(CalculatorError):
    """Raised when answers or patient data do not satisfy the calculator."""

    def __init__(self, violations: list[FieldViolation]):
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations) or "unknown"
        super().__init__(f"Validation failed for: {fields}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class ConfigurationError(CalculatorError):
    """Raised for calculator setup defects (unknown type, duplicate steps)."""


class CalculatorBusyError(CalculatorError):
    """Raised when a submission is started while another is in flight."""


class SubmissionFailure(CalculatorError):
    """Raised by submission collaborators when the remote write failed."""

    def __init__(self, message: str, attempts: int = 1, cause: Exception | None = None):
        super().__init__(message)
        self.attempts = attempts
        self.cause = cause
