"""Calculator Framework.

Owns one questionnaire session: patient data, answers, steps, the
submission lifecycle and the computed result. Scoring is delegated to the
strategy registered for the calculator type; remote submission is
delegated to a Submitter and never gates local completion.

Phases:
    idle        nothing submitted (or reset)
    submitting  validation and scoring in progress
    complete    result present, remote submission succeeded or skipped
    degraded    result present, remote submission failed
"""

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any

from clinicalscore.core.audit import (
    ActivityAction,
    log_activity,
    log_calculation,
    log_submission_failure,
)
from clinicalscore.core.errors import (
    CalculatorBusyError,
    ConfigurationError,
    SubmissionFailure,
    ValidationError,
)
from clinicalscore.schemas.base import (
    CalculatorType,
    ExportFormat,
    FrameworkPhase,
    Gender,
    SubmissionStatus,
)
from clinicalscore.services.catalog import CalculatorConfig, CalculatorStep, get_config
from clinicalscore.services.export import ExportData, ExportedResult, ExportService
from clinicalscore.services.scoring import (
    CalculationResult,
    CalculatorData,
    PatientData,
    resolve_strategy,
)
from clinicalscore.services.submission import Submitter
from clinicalscore.services.validation import SchemaValidator, validate_submission

logger = logging.getLogger(__name__)

Observer = Callable[["CalculatorFramework"], None]

PATIENT_BUCKET = "patient"
CALCULATOR_BUCKET = "calculator"


@dataclass
class FrameworkState:
    """Submission flags. Exactly one FrameworkPhase holds at a time."""

    is_submitting: bool = False
    is_complete: bool = False
    submission_failed: bool = False

    @property
    def phase(self) -> FrameworkPhase:
        if self.is_submitting:
            return FrameworkPhase.SUBMITTING
        if self.is_complete:
            return FrameworkPhase.DEGRADED if self.submission_failed else FrameworkPhase.COMPLETE
        return FrameworkPhase.IDLE


@dataclass
class SubmissionOutcome:
    """What submit_calculation produced."""

    result: CalculationResult | None
    status: SubmissionStatus
    error: SubmissionFailure | None = None


def _new_session_id() -> str:
    return uuid.uuid4().hex


class CalculatorFramework:
    """State machine for one calculator session.

    Args:
        calculator_type: Calculator to run.
        submitter: Remote result log. None skips submission.
        validator: Optional range validator run after the required-field
            and eligibility checks.
        export_service: Renderer used by export_results.

    Raises:
        ConfigurationError: If the type has no config or no strategy, or the
            config's steps are inconsistent.
    """

    def __init__(
        self,
        calculator_type: CalculatorType | str,
        submitter: Submitter | None = None,
        validator: SchemaValidator | None = None,
        export_service: ExportService | None = None,
    ):
        self.config: CalculatorConfig = get_config(calculator_type)
        self._strategy = resolve_strategy(self.config.type)
        self.submitter = submitter
        self.validator = validator
        self.export_service = export_service or ExportService()

        self.patient = self._default_patient()
        self.calculator_data: CalculatorData = self.config.default_answers()
        self.result: CalculationResult | None = None
        self.state = FrameworkState()

        self.steps: list[CalculatorStep] = []
        self.current_step = 0

        self.session_id = _new_session_id()
        self.start_time = datetime.now(UTC)
        self.completion_time: datetime | None = None

        self._observers: list[Observer] = []
        self._generation = 0
        self._submission_task: asyncio.Task | None = None

        self.initialize_steps(self.config.steps)

        log_activity(
            ActivityAction.CALCULATOR_STARTED,
            calculator_type=self.config.type.value,
            session_id=self.session_id,
        )

    def _default_patient(self) -> PatientData:
        return PatientData(age=self.config.default_age, gender=self.config.default_gender)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register an observer. Returns a function that unsubscribes it."""
        self._observers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Observer) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._observers):
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Observer {callback!r} failed for session {self.session_id}: {e}")

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def initialize_steps(self, steps: list[CalculatorStep] | tuple[CalculatorStep, ...]) -> None:
        """Store steps sorted by order.

        Raises:
            ConfigurationError: On duplicate ids or orders, or unknown fields.
        """
        ids = [step.id for step in steps]
        orders = [step.order for step in steps]
        if len(set(ids)) != len(ids):
            raise ConfigurationError(f"Duplicate step id in {self.config.type.value}: {ids}")
        if len(set(orders)) != len(orders):
            raise ConfigurationError(f"Duplicate step order in {self.config.type.value}: {orders}")

        known = set(self.config.field_ids)
        for step in steps:
            unknown = [f for f in step.fields if f not in known]
            if unknown:
                raise ConfigurationError(
                    f"Step '{step.id}' references unknown fields: {', '.join(unknown)}"
                )

        self.steps = sorted(steps, key=lambda step: step.order)
        self.current_step = 0

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    def next_step(self) -> None:
        if self.current_step < self.total_steps - 1:
            self.current_step += 1
            self._notify()

    def previous_step(self) -> None:
        if self.current_step > 0:
            self.current_step -= 1
            self._notify()

    def go_to_step(self, step: int) -> None:
        if 0 <= step < self.total_steps:
            self.current_step = step
            self._notify()

    @property
    def progress(self) -> int:
        """Position of the current step as a percentage."""
        return round(self.current_step / max(self.total_steps - 1, 1) * 100)

    @property
    def duration(self) -> float:
        """Seconds since the session started, frozen at completion."""
        end = self.completion_time or datetime.now(UTC)
        return (end - self.start_time).total_seconds()

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def set_field_value(self, bucket: str, key: str, value: Any) -> None:
        """Write one patient or calculator field. No validation happens here.

        Raises:
            ValueError: If bucket is neither "patient" nor "calculator".
        """
        if bucket == PATIENT_BUCKET:
            if key == "gender":
                self.patient.gender = Gender(value) if value is not None else None
            elif key == "age":
                self.patient.age = value
            elif key == "name":
                self.patient.name = value
            else:
                self.patient.extra[key] = value
        elif bucket == CALCULATOR_BUCKET:
            self.calculator_data[key] = value
        else:
            raise ValueError(f"Unknown field bucket: {bucket}")
        self._notify()

    def get_field_value(self, bucket: str, key: str) -> Any:
        if bucket == PATIENT_BUCKET:
            if key in ("name", "age", "gender"):
                return getattr(self.patient, key)
            return self.patient.extra.get(key)
        elif bucket == CALCULATOR_BUCKET:
            return self.calculator_data.get(key)
        raise ValueError(f"Unknown field bucket: {bucket}")

    @property
    def gender_allowed(self) -> bool:
        if self.patient.gender is None and self.config.requires_gender:
            return False
        if not self.config.gender_restricted:
            return True
        return self.patient.gender in self.config.allowed_genders

    @property
    def can_proceed(self) -> bool:
        """True when every validated step is answered and the gender is allowed."""
        for step in self.steps:
            if step.validation and any(self.calculator_data.get(f) is None for f in step.fields):
                return False
        return self.gender_allowed

    @property
    def phase(self) -> FrameworkPhase:
        return self.state.phase

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit_calculation(self) -> SubmissionOutcome:
        """Validate, score and then submit the result to the remote log.

        The result is stored and the session marked complete before the
        submitter is awaited. A submitter failure leaves the session in the
        degraded phase instead of raising.

        Returns:
            SubmissionOutcome with status submitted, degraded, skipped or
            cancelled (a reset or a newer submission replaced this one while
            it was in flight).

        Raises:
            CalculatorBusyError: If a submission is already running.
            ValidationError: If answers or patient data are not acceptable.
        """
        if self.state.is_submitting:
            raise CalculatorBusyError(
                f"Submission already in progress for session {self.session_id}"
            )

        self.state.is_submitting = True
        self._notify()
        generation = self._generation
        answers = dict(self.calculator_data)

        violations = validate_submission(self.config, answers, self.patient, self.validator)
        if violations:
            self.state.is_submitting = False
            self._notify()
            logger.info(
                f"Validation failed for {self.config.type.value} session {self.session_id}: "
                f"{', '.join(v.field for v in violations)}"
            )
            raise ValidationError(violations)

        started = time.perf_counter()
        try:
            result = self._strategy(answers, replace(self.patient, extra=dict(self.patient.extra)))
        except Exception as e:
            self.state.is_submitting = False
            self._notify()
            logger.error(f"Scoring failed for {self.config.type.value}: {e}")
            log_activity(
                ActivityAction.CALCULATION_FAILED,
                calculator_type=self.config.type.value,
                session_id=self.session_id,
                details={"error": str(e)},
                success=False,
            )
            raise

        self.completion_time = datetime.now(UTC)
        self.result = replace(result, completed_at=self.completion_time)
        self.state.is_complete = True
        self.state.submission_failed = False
        self.state.is_submitting = False
        log_calculation(
            calculator_type=self.config.type.value,
            session_id=self.session_id,
            score=self.result.score,
            risk_level=self.result.risk_level.value,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        self._notify()

        if self.submitter is None or not getattr(self.submitter, "enabled", True):
            return SubmissionOutcome(result=self.result, status=SubmissionStatus.SKIPPED)

        return await self._submit_remote(generation)

    def _is_current(self, generation: int, result: CalculationResult | None) -> bool:
        """True while no reset or newer submission has replaced this one."""
        return generation == self._generation and self.result is result

    async def _submit_remote(self, generation: int) -> SubmissionOutcome:
        result = self.result
        task = asyncio.create_task(self.submitter.submit(self.build_payload()))
        self._submission_task = task
        try:
            await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.info(f"Submission for {self.config.type.value} cancelled by reset")
                return SubmissionOutcome(result=None, status=SubmissionStatus.CANCELLED)
            raise
        except Exception as e:
            if not self._is_current(generation, result):
                logger.info(
                    f"Ignoring failed submission for {self.config.type.value}: "
                    f"result was replaced"
                )
                return SubmissionOutcome(result=None, status=SubmissionStatus.CANCELLED)
            failure = e if isinstance(e, SubmissionFailure) else SubmissionFailure(str(e), cause=e)
            self.state.submission_failed = True
            logger.warning(
                f"Result for {self.config.type.value} session {self.session_id} "
                f"kept locally, submission failed: {failure}"
            )
            log_submission_failure(
                calculator_type=self.config.type.value,
                session_id=self.session_id,
                attempts=failure.attempts,
                reason=str(failure),
            )
            self._notify()
            return SubmissionOutcome(result=result, status=SubmissionStatus.DEGRADED, error=failure)
        finally:
            if self._submission_task is task:
                self._submission_task = None

        if not self._is_current(generation, result):
            return SubmissionOutcome(result=None, status=SubmissionStatus.CANCELLED)
        return SubmissionOutcome(result=result, status=SubmissionStatus.SUBMITTED)

    def build_payload(self) -> dict[str, Any]:
        """Summary sent to the remote result log."""
        return {
            "name": self.patient.name,
            "age": self.patient.age,
            "gender": self.patient.gender.value if self.patient.gender else None,
            "answers": [
                {"id": field_id, "value": value} for field_id, value in self.calculator_data.items()
            ],
            "scores": self.result.to_dict() if self.result else {},
            "calculator": {"type": self.config.type.value, "version": self.config.version},
            "session_id": self.session_id,
            "duration": self.duration,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    # ------------------------------------------------------------------
    # Reset and export
    # ------------------------------------------------------------------

    def reset_calculator(self) -> None:
        """Return to idle with fresh answers and a new session id.

        Any in-flight remote submission is cancelled and its outcome
        ignored. Patient data is kept unless the config resets it.
        """
        self._generation += 1
        if self._submission_task is not None and not self._submission_task.done():
            self._submission_task.cancel()
        self._submission_task = None

        self.calculator_data = self.config.default_answers()
        if self.config.reset_patient:
            self.patient = self._default_patient()
        self.result = None
        self.state = FrameworkState()
        self.current_step = 0
        self.session_id = _new_session_id()
        self.start_time = datetime.now(UTC)
        self.completion_time = None

        log_activity(
            ActivityAction.CALCULATOR_RESET,
            calculator_type=self.config.type.value,
            session_id=self.session_id,
        )
        self._notify()

    def export_results(self, format: ExportFormat | str = ExportFormat.JSON) -> ExportedResult:
        """Render the current result.

        Raises:
            ValueError: If there is no result yet or the format is unsupported.
        """
        if self.result is None:
            raise ValueError("No result to export")
        return self.export_service.export(
            ExportData(
                config=self.config,
                patient=self.patient,
                answers=dict(self.calculator_data),
                result=self.result,
                session_id=self.session_id,
                duration=self.duration,
            ),
            format,
        )

    def snapshot(self) -> dict[str, Any]:
        """Plain view of the session for callers that re-read state."""
        return {
            "session_id": self.session_id,
            "calculator_type": self.config.type.value,
            "phase": self.phase.value,
            "is_submitting": self.state.is_submitting,
            "is_complete": self.state.is_complete,
            "submission_failed": self.state.submission_failed,
            "can_proceed": self.can_proceed,
            "current_step": self.current_step,
            "total_steps": self.total_steps,
            "progress": self.progress,
            "duration": self.duration,
            "patient": self.patient.to_dict(),
            "answers": dict(self.calculator_data),
            "result": self.result.to_dict() if self.result else None,
        }
