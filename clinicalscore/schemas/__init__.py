"""Pydantic schemas and enums for the clinical calculators service."""

from clinicalscore.schemas.base import (
    CalculatorType,
    Category,
    ExportFormat,
    FrameworkPhase,
    Gender,
    RiskLevel,
    SubmissionStatus,
    Theme,
)
from clinicalscore.schemas.calculator import (
    CalculationResultSchema,
    CalculatorDetail,
    CalculatorSummary,
    FieldUpdate,
    Score2Request,
    Score2Response,
    ScoreRequest,
    ScoreResponse,
    SessionCreate,
    SessionState,
    SubmitResponse,
)

__all__ = [
    # Enums
    "CalculatorType",
    "Category",
    "ExportFormat",
    "FrameworkPhase",
    "Gender",
    "RiskLevel",
    "SubmissionStatus",
    "Theme",
    # Catalog
    "CalculatorDetail",
    "CalculatorSummary",
    # Scoring
    "CalculationResultSchema",
    "ScoreRequest",
    "ScoreResponse",
    "Score2Request",
    "Score2Response",
    # Sessions
    "FieldUpdate",
    "SessionCreate",
    "SessionState",
    "SubmitResponse",
]
