"""Calculator Catalog.

Declarative configuration for every calculator: fields with their ranges
and defaults, steps, patient eligibility and display tags. The framework,
the validator and the HTTP layer all read from here, so defaults live in
exactly one place.
"""

from dataclasses import dataclass, field

from clinicalscore.core.errors import ConfigurationError
from clinicalscore.schemas.base import CalculatorType, Category, Gender, Theme
from clinicalscore.services.scoring import (
    AUDIT_QUESTIONS,
    DANPSS_SECTIONS,
    EPDS_QUESTIONS,
    IPSS_SYMPTOMS,
    PUQE_QUESTIONS,
    WHO5_QUESTIONS,
    danpss_fields,
)


@dataclass(frozen=True)
class FieldSpec:
    """A single answer field."""

    id: str
    label: str
    minimum: float
    maximum: float
    integer: bool = True
    required: bool = True
    default: float | None = None


@dataclass(frozen=True)
class CalculatorStep:
    """A step of a calculator form."""

    id: str
    title: str
    order: int
    validation: bool = True
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class CalculatorConfig:
    """Immutable description of one calculator."""

    type: CalculatorType
    name: str
    version: str
    description: str
    category: Category
    theme: Theme
    min_age: int
    max_age: int
    fields: tuple[FieldSpec, ...]
    steps: tuple[CalculatorStep, ...]
    allowed_genders: tuple[Gender, ...] = (Gender.MALE, Gender.FEMALE, Gender.OTHER)
    default_age: int | None = None
    default_gender: Gender | None = None
    requires_gender: bool = False
    estimated_duration: int = 5
    reset_patient: bool = False
    references: tuple[str, ...] = field(default_factory=tuple)

    @property
    def field_ids(self) -> tuple[str, ...]:
        return tuple(f.id for f in self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.id for f in self.fields if f.required)

    @property
    def gender_restricted(self) -> bool:
        return set(self.allowed_genders) != set(Gender)

    def get_field(self, field_id: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.id == field_id:
                return spec
        return None

    def default_answers(self) -> dict[str, float | None]:
        """Fresh answer map with every field at its default."""
        return {spec.id: spec.default for spec in self.fields}


def _scale(ids: tuple[str, ...], minimum: int, maximum: int) -> tuple[FieldSpec, ...]:
    return tuple(
        FieldSpec(
            id=field_id,
            label=field_id.replace("_", " ").capitalize(),
            minimum=minimum,
            maximum=maximum,
        )
        for field_id in ids
    )


def _single_step(fields: tuple[FieldSpec, ...], title: str = "Questionnaire") -> tuple[CalculatorStep, ...]:
    return (
        CalculatorStep(
            id="questions",
            title=title,
            order=1,
            fields=tuple(f.id for f in fields if f.required),
        ),
    )


# ============================================================================
# Field Definitions
# ============================================================================

_AUDIT_FIELDS = _scale(AUDIT_QUESTIONS, 0, 4)
_EPDS_FIELDS = _scale(EPDS_QUESTIONS, 0, 3)
_WHO5_FIELDS = _scale(WHO5_QUESTIONS, 0, 5)
_IPSS_FIELDS = _scale(IPSS_SYMPTOMS, 0, 5) + (
    FieldSpec(id="quality_of_life", label="Quality of life due to urinary symptoms", minimum=0, maximum=6),
)
_PUQE_FIELDS = _scale(PUQE_QUESTIONS, 1, 5)
_WESTLEY_FIELDS = (
    FieldSpec(id="level_of_consciousness", label="Level of consciousness", minimum=0, maximum=5),
    FieldSpec(id="cyanosis", label="Cyanosis", minimum=0, maximum=5),
    FieldSpec(id="stridor", label="Stridor", minimum=0, maximum=2),
    FieldSpec(id="air_entry", label="Air entry", minimum=0, maximum=2),
    FieldSpec(id="retractions", label="Retractions", minimum=0, maximum=3),
)
_GCS_FIELDS = (
    FieldSpec(id="eye_opening", label="Eye opening", minimum=1, maximum=4),
    FieldSpec(id="verbal_response", label="Verbal response", minimum=1, maximum=5),
    FieldSpec(id="motor_response", label="Motor response", minimum=1, maximum=6),
)
_DANPSS_FIELDS = tuple(
    FieldSpec(
        id=field_id,
        label=field_id.replace("_", " ").capitalize(),
        minimum=0,
        maximum=3,
        required=section != "sexual",
    )
    for section in DANPSS_SECTIONS
    for pair in danpss_fields(section)
    for field_id in pair
)
_LRTI_FIELDS = (
    FieldSpec(id="temperature", label="Temperature (C)", minimum=30, maximum=45, integer=False),
    FieldSpec(id="respiratory_rate", label="Respiratory rate (/min)", minimum=5, maximum=80, required=False),
    FieldSpec(id="heart_rate", label="Heart rate (/min)", minimum=20, maximum=250, required=False),
    FieldSpec(id="systolic_bp", label="Systolic blood pressure (mmHg)", minimum=50, maximum=250, required=False),
)
_SCORE2_FIELDS = (
    FieldSpec(id="systolic_bp", label="Systolic blood pressure (mmHg)", minimum=80, maximum=250),
    FieldSpec(id="ldl", label="LDL cholesterol (mmol/L)", minimum=0.5, maximum=15, integer=False),
    FieldSpec(id="smoking", label="Current smoker", minimum=0, maximum=1),
    FieldSpec(
        id="target_systolic_bp", label="Target systolic blood pressure", minimum=80, maximum=250, default=120
    ),
    FieldSpec(id="target_ldl", label="Target LDL cholesterol", minimum=0.5, maximum=15, integer=False, default=2.0),
    FieldSpec(id="target_smoking", label="Smoker after intervention", minimum=0, maximum=1, default=0),
)


def _danpss_steps() -> tuple[CalculatorStep, ...]:
    titles = {
        "emptying": "Emptying symptoms",
        "filling": "Filling symptoms",
        "other": "Other symptoms",
        "sexual": "Sexual function",
    }
    return tuple(
        CalculatorStep(
            id=section,
            title=titles[section],
            order=index,
            validation=section != "sexual",
            fields=tuple(field_id for pair in danpss_fields(section) for field_id in pair),
        )
        for index, section in enumerate(DANPSS_SECTIONS, start=1)
    )


# ============================================================================
# Catalog
# ============================================================================

CALCULATOR_CONFIGS: dict[CalculatorType, CalculatorConfig] = {
    CalculatorType.AUDIT: CalculatorConfig(
        type=CalculatorType.AUDIT,
        name="AUDIT",
        version="1.0.0",
        description="Alcohol Use Disorders Identification Test",
        category=Category.PSYCHOLOGY,
        theme=Theme.SKY,
        min_age=18,
        max_age=150,
        fields=_AUDIT_FIELDS,
        steps=_single_step(_AUDIT_FIELDS),
        estimated_duration=5,
        references=("Saunders JB et al. Addiction. 1993;88:791-804.",),
    ),
    CalculatorType.DANPSS: CalculatorConfig(
        type=CalculatorType.DANPSS,
        name="DAN-PSS",
        version="1.0.0",
        description="Danish Prostatic Symptom Score",
        category=Category.GENERAL,
        theme=Theme.TEAL,
        min_age=18,
        max_age=150,
        fields=_DANPSS_FIELDS,
        steps=_danpss_steps(),
        allowed_genders=(Gender.MALE,),
        default_gender=Gender.MALE,
        estimated_duration=7,
    ),
    CalculatorType.EPDS: CalculatorConfig(
        type=CalculatorType.EPDS,
        name="EPDS",
        version="1.0.0",
        description="Edinburgh Postnatal Depression Scale",
        category=Category.PREGNANCY,
        theme=Theme.SKY,
        min_age=16,
        max_age=50,
        fields=_EPDS_FIELDS,
        steps=_single_step(_EPDS_FIELDS),
        allowed_genders=(Gender.FEMALE,),
        default_gender=Gender.FEMALE,
        references=("Cox JL et al. Br J Psychiatry. 1987;150:782-786.",),
    ),
    CalculatorType.GCS: CalculatorConfig(
        type=CalculatorType.GCS,
        name="GCS",
        version="1.0.0",
        description="Glasgow Coma Scale",
        category=Category.GENERAL,
        theme=Theme.ORANGE,
        min_age=0,
        max_age=150,
        fields=_GCS_FIELDS,
        steps=_single_step(_GCS_FIELDS, title="Neurological assessment"),
        estimated_duration=2,
        references=("Teasdale G, Jennett B. Lancet. 1974;2:81-84.",),
    ),
    CalculatorType.IPSS: CalculatorConfig(
        type=CalculatorType.IPSS,
        name="IPSS",
        version="1.0.0",
        description="International Prostate Symptom Score",
        category=Category.GENERAL,
        theme=Theme.TEAL,
        min_age=40,
        max_age=150,
        fields=_IPSS_FIELDS,
        steps=_single_step(_IPSS_FIELDS),
        allowed_genders=(Gender.MALE,),
        default_gender=Gender.MALE,
    ),
    CalculatorType.LRTI: CalculatorConfig(
        type=CalculatorType.LRTI,
        name="LRTI",
        version="1.0.0",
        description="Lower respiratory tract infection risk assessment",
        category=Category.INFECTION,
        theme=Theme.ORANGE,
        min_age=0,
        max_age=150,
        fields=_LRTI_FIELDS,
        steps=_single_step(_LRTI_FIELDS, title="Vital signs"),
        estimated_duration=3,
    ),
    CalculatorType.PUQE: CalculatorConfig(
        type=CalculatorType.PUQE,
        name="PUQE",
        version="1.0.0",
        description="Pregnancy-Unique Quantification of Emesis",
        category=Category.PREGNANCY,
        theme=Theme.SKY,
        min_age=16,
        max_age=50,
        fields=_PUQE_FIELDS,
        steps=_single_step(_PUQE_FIELDS),
        allowed_genders=(Gender.FEMALE,),
        default_gender=Gender.FEMALE,
        estimated_duration=2,
    ),
    CalculatorType.SCORE2: CalculatorConfig(
        type=CalculatorType.SCORE2,
        name="SCORE2",
        version="1.0.0",
        description="10-year risk of cardiovascular disease",
        category=Category.GENERAL,
        theme=Theme.TEAL,
        min_age=40,
        max_age=89,
        fields=_SCORE2_FIELDS,
        steps=(
            CalculatorStep(id="current", title="Current risk factors", order=1, fields=("systolic_bp", "ldl", "smoking")),
            CalculatorStep(
                id="targets",
                title="Treatment targets",
                order=2,
                validation=False,
                fields=("target_systolic_bp", "target_ldl", "target_smoking"),
            ),
        ),
        default_age=55,
        requires_gender=True,
        estimated_duration=3,
        references=("SCORE2 working group. Eur Heart J. 2021;42:2439-2454.",),
    ),
    CalculatorType.WESTLEY_CROUP: CalculatorConfig(
        type=CalculatorType.WESTLEY_CROUP,
        name="Westley Croup Score",
        version="1.0.0",
        description="Severity of croup in children",
        category=Category.INFECTION,
        theme=Theme.ORANGE,
        min_age=0,
        max_age=6,
        fields=_WESTLEY_FIELDS,
        steps=_single_step(_WESTLEY_FIELDS, title="Clinical signs"),
        estimated_duration=2,
        reset_patient=True,
        references=("Westley CR et al. Am J Dis Child. 1978;132:484-487.",),
    ),
    CalculatorType.WHO5: CalculatorConfig(
        type=CalculatorType.WHO5,
        name="WHO-5",
        version="1.0.0",
        description="WHO-5 Well-Being Index",
        category=Category.PSYCHOLOGY,
        theme=Theme.SKY,
        min_age=18,
        max_age=150,
        fields=_WHO5_FIELDS,
        steps=_single_step(_WHO5_FIELDS),
        estimated_duration=2,
    ),
}


def get_config(calculator_type: CalculatorType | str) -> CalculatorConfig:
    """Return the config for a calculator type.

    Raises:
        ConfigurationError: If the type is unknown.
    """
    try:
        return CALCULATOR_CONFIGS[CalculatorType(calculator_type)]
    except (KeyError, ValueError):
        raise ConfigurationError(f"Unknown calculator type: {calculator_type}") from None


def list_configs() -> list[CalculatorConfig]:
    return list(CALCULATOR_CONFIGS.values())
