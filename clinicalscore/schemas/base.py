"""Base enums shared by the calculators, the framework and the API."""

from enum import Enum


class CalculatorType(str, Enum):
    """Calculator type identifiers. Each selects exactly one scoring strategy."""

    AUDIT = "audit"
    DANPSS = "danpss"
    EPDS = "epds"
    GCS = "gcs"
    IPSS = "ipss"
    LRTI = "lrti"
    PUQE = "puqe"
    SCORE2 = "score2"
    WESTLEY_CROUP = "westleycroupscore"
    WHO5 = "who5"


class RiskLevel(str, Enum):
    """Risk levels used across all calculators."""

    MINIMAL = "minimal"
    LOW = "low"
    MILD = "mild"
    MEDIUM = "medium"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"
    VERY_HIGH = "very_high"
    UNKNOWN = "unknown"


class Gender(str, Enum):
    """Patient gender."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Category(str, Enum):
    """Clinical area a calculator belongs to."""

    PSYCHOLOGY = "psychology"
    INFECTION = "infection"
    PREGNANCY = "pregnancy"
    GENERAL = "general"


class Theme(str, Enum):
    """Display theme tag."""

    SKY = "sky"
    TEAL = "teal"
    ORANGE = "orange"


class FrameworkPhase(str, Enum):
    """The four mutually exclusive framework sub-states."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    COMPLETE = "complete"
    DEGRADED = "degraded"


class SubmissionStatus(str, Enum):
    """How the best-effort remote submission ended."""

    SUBMITTED = "submitted"
    DEGRADED = "degraded"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"


class ExportFormat(str, Enum):
    """Supported result export formats."""

    JSON = "json"
    TEXT = "text"
