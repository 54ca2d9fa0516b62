"""Calculator catalog and stateless scoring endpoints."""

import logging
import time

from fastapi import APIRouter, HTTPException, status

from clinicalscore.core.errors import ConfigurationError
from clinicalscore.schemas.base import CalculatorType
from clinicalscore.schemas.calculator import (
    CalculationResultSchema,
    CalculatorDetail,
    CalculatorSummary,
    FieldSchema,
    Score2Request,
    Score2Response,
    ScoreRequest,
    ScoreResponse,
    StepSchema,
)
from clinicalscore.services import risk_table
from clinicalscore.services.catalog import CalculatorConfig, get_config, list_configs
from clinicalscore.services.scoring import CalculationResult, PatientData, get_scoring_service
from clinicalscore.services.validation import SchemaValidator, validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Calculators"])

_validator = SchemaValidator()


# ==============================================================================
# Helper Functions
# ==============================================================================


def _summary(config: CalculatorConfig) -> CalculatorSummary:
    return CalculatorSummary(
        type=config.type,
        name=config.name,
        description=config.description,
        category=config.category,
        theme=config.theme,
        estimated_duration=config.estimated_duration,
    )


def _detail(config: CalculatorConfig) -> CalculatorDetail:
    return CalculatorDetail(
        **_summary(config).model_dump(),
        version=config.version,
        min_age=config.min_age,
        max_age=config.max_age,
        allowed_genders=list(config.allowed_genders),
        default_age=config.default_age,
        default_gender=config.default_gender,
        requires_gender=config.requires_gender,
        references=list(config.references),
        fields=[
            FieldSchema(
                id=spec.id,
                label=spec.label,
                minimum=spec.minimum,
                maximum=spec.maximum,
                integer=spec.integer,
                required=spec.required,
                default=spec.default,
            )
            for spec in config.fields
        ],
        steps=[
            StepSchema(
                id=step.id,
                title=step.title,
                order=step.order,
                validation=step.validation,
                fields=list(step.fields),
            )
            for step in config.steps
        ],
    )


def result_schema(result: CalculationResult) -> CalculationResultSchema:
    return CalculationResultSchema(
        score=result.score,
        interpretation=result.interpretation,
        risk_level=result.risk_level,
        recommendations=list(result.recommendations),
        details=dict(result.details),
        completed_at=result.completed_at,
    )


def _get_config_or_404(calculator_type: str) -> CalculatorConfig:
    try:
        return get_config(calculator_type)
    except ConfigurationError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown calculator '{calculator_type}'. "
            f"Available: {', '.join(t.value for t in CalculatorType)}",
        )


# ==============================================================================
# Catalog
# ==============================================================================


@router.get(
    "/calculators",
    response_model=list[CalculatorSummary],
    summary="List calculators",
    description="List every available questionnaire calculator.",
)
async def list_calculators() -> list[CalculatorSummary]:
    return [_summary(config) for config in list_configs()]


@router.get(
    "/calculators/{calculator_type}",
    response_model=CalculatorDetail,
    summary="Get calculator configuration",
    description="Fields, steps and patient eligibility for one calculator.",
)
async def get_calculator(calculator_type: str) -> CalculatorDetail:
    """Get one calculator's configuration.

    Raises:
        HTTPException: 404 if the calculator type is unknown.
    """
    return _detail(_get_config_or_404(calculator_type))


# ==============================================================================
# Scoring
# ==============================================================================


@router.post(
    "/calculators/{calculator_type}/score",
    response_model=ScoreResponse,
    summary="Score a questionnaire",
    description="Validate the answers and run the calculator without creating a session.",
)
async def score_calculator(calculator_type: str, request: ScoreRequest) -> ScoreResponse:
    """Score a complete set of answers.

    Missing required fields are filled from the calculator defaults before
    validation, the same way a fresh session starts.

    Raises:
        HTTPException: 404 if the calculator is unknown, 422 on invalid answers.
    """
    config = _get_config_or_404(calculator_type)
    start_time = time.perf_counter()

    answers = {**config.default_answers(), **request.answers}
    patient = PatientData(
        name=request.patient.name,
        age=request.patient.age if request.patient.age is not None else config.default_age,
        gender=request.patient.gender or config.default_gender,
    )

    violations = validate_submission(config, answers, patient, _validator)
    if violations:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": f"Validation failed for: {', '.join(v.field for v in violations)}",
                "violations": [v.to_dict() for v in violations],
            },
        )

    result = get_scoring_service().calculate(config.type, answers, patient)

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"Scored {config.type.value}: {result.score} ({result.risk_level.value}) in {elapsed_ms:.1f}ms")

    return ScoreResponse(calculator_type=config.type, result=result_schema(result))


@router.post(
    "/score2/assess",
    response_model=Score2Response,
    summary="Assess cardiovascular risk",
    description="SCORE2 risk for the current profile and a treatment target profile.",
)
async def assess_score2(request: Score2Request) -> Score2Response:
    """Run the SCORE2 risk table engine on a current and target profile."""
    assessment = risk_table.assess(
        gender=request.gender,
        age=request.age,
        smoking=request.smoking,
        systolic_bp=request.systolic_bp,
        ldl=request.ldl,
        target_systolic_bp=request.target_systolic_bp,
        target_ldl=request.target_ldl,
        target_smoking=request.target_smoking,
    )
    return Score2Response(**assessment.to_dict())
