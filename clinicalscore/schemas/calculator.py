"""Request and response schemas for the calculator API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from clinicalscore.schemas.base import (
    CalculatorType,
    Category,
    FrameworkPhase,
    Gender,
    RiskLevel,
    SubmissionStatus,
    Theme,
)


# ==============================================================================
# Catalog
# ==============================================================================


class FieldSchema(BaseModel):
    """One answer field of a calculator."""

    id: str
    label: str
    minimum: float
    maximum: float
    integer: bool = True
    required: bool = True
    default: float | None = None


class StepSchema(BaseModel):
    """One step of a calculator form."""

    id: str
    title: str
    order: int
    validation: bool = True
    fields: list[str] = Field(default_factory=list)


class CalculatorSummary(BaseModel):
    """Calculator entry in the catalog listing."""

    type: CalculatorType
    name: str
    description: str
    category: Category
    theme: Theme
    estimated_duration: int = Field(..., description="Estimated time to complete, in minutes")


class CalculatorDetail(CalculatorSummary):
    """Full calculator configuration."""

    version: str
    min_age: int
    max_age: int
    allowed_genders: list[Gender]
    default_age: int | None = None
    default_gender: Gender | None = None
    requires_gender: bool = False
    references: list[str] = Field(default_factory=list)
    fields: list[FieldSchema]
    steps: list[StepSchema]


# ==============================================================================
# Scoring
# ==============================================================================


class PatientInput(BaseModel):
    """Patient demographics sent with a scoring request."""

    name: str | None = None
    age: int | None = Field(None, ge=0, description="Age in years")
    gender: Gender | None = None


class ScoreRequest(BaseModel):
    """Stateless scoring request."""

    answers: dict[str, float | None] = Field(..., description="Answer value per field id")
    patient: PatientInput = Field(default_factory=PatientInput)


class CalculationResultSchema(BaseModel):
    """Result of a scoring strategy."""

    score: float
    interpretation: str
    risk_level: RiskLevel
    recommendations: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
    completed_at: datetime | None = None


class ScoreResponse(BaseModel):
    """Stateless scoring response."""

    calculator_type: CalculatorType
    result: CalculationResultSchema


# ==============================================================================
# SCORE2
# ==============================================================================


class Score2Request(BaseModel):
    """Current and target cardiovascular risk profile."""

    gender: Gender
    age: int = Field(55, ge=0, le=150, description="Age in years, clamped to 40-89 for the chart")
    smoking: bool = False
    systolic_bp: float = Field(..., gt=0, description="Systolic blood pressure (mmHg)")
    ldl: float = Field(..., gt=0, description="LDL cholesterol (mmol/L)")
    target_systolic_bp: float = Field(120, gt=0)
    target_ldl: float = Field(2.0, gt=0)
    target_smoking: bool = False


class Score2Response(BaseModel):
    """SCORE2 assessment."""

    current_risk: int = Field(..., description="10-year risk in percent")
    target_risk: int
    risk_group: str
    risk_level: RiskLevel
    age_tier: str
    absolute_risk_reduction: float
    relative_risk_reduction: float
    number_needed_to_treat: float
    attribution: dict[str, int]
    ldl_reference_range: list[float]


# ==============================================================================
# Sessions
# ==============================================================================


class SessionCreate(BaseModel):
    """Request to start a calculator session."""

    calculator_type: CalculatorType


class FieldUpdate(BaseModel):
    """Set one field value."""

    bucket: str = Field(..., pattern="^(patient|calculator)$")
    key: str
    value: Any = None


class SessionState(BaseModel):
    """Snapshot of a calculator session."""

    id: str = Field(..., description="Session handle used in URLs")
    session_id: str = Field(..., description="Framework session id, renewed on reset")
    calculator_type: CalculatorType
    phase: FrameworkPhase
    is_submitting: bool
    is_complete: bool
    submission_failed: bool
    can_proceed: bool
    current_step: int
    total_steps: int
    progress: int
    duration: float
    patient: dict[str, Any]
    answers: dict[str, Any]
    result: CalculationResultSchema | None = None


class SubmissionInfo(BaseModel):
    """How the remote submission ended."""

    status: SubmissionStatus
    error: str | None = None
    attempts: int | None = None


class SubmitResponse(BaseModel):
    """Response to a session submit."""

    session: SessionState
    submission: SubmissionInfo


class ErrorDetail(BaseModel):
    """Field-level error returned with 422 responses."""

    field: str
    message: str
    code: str
    value: Any = None
