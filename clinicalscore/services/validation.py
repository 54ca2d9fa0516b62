"""Answer validation against the catalog field ranges.

Builds one pydantic model per calculator from its FieldSpec entries and
translates pydantic errors into FieldViolation records.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from clinicalscore.core.errors import FieldViolation
from clinicalscore.schemas.base import CalculatorType, Gender
from clinicalscore.services.catalog import CalculatorConfig, FieldSpec, get_config
from clinicalscore.services.scoring import PatientData

logger = logging.getLogger(__name__)


@dataclass
class ValidationReport:
    """Outcome of validating a set of answers."""

    valid: bool
    violations: list[FieldViolation] = field(default_factory=list)


def _field_definition(spec: FieldSpec) -> tuple[Any, Any]:
    value_type = int if spec.integer else float
    return (
        value_type | None,
        Field(default=None, ge=spec.minimum, le=spec.maximum, description=spec.label),
    )


def build_answer_model(config: CalculatorConfig) -> type[BaseModel]:
    """Create a pydantic model describing a calculator's answers."""
    definitions = {spec.id: _field_definition(spec) for spec in config.fields}
    return create_model(
        f"{config.name.replace('-', '').replace(' ', '')}Answers",
        __config__=ConfigDict(extra="ignore", strict=False),
        **definitions,
    )


def _violation_from_error(error: dict[str, Any]) -> FieldViolation:
    loc = error.get("loc") or ("answers",)
    return FieldViolation(
        field=str(loc[0]),
        message=error.get("msg", "Invalid value"),
        code=error.get("type", "invalid"),
        value=error.get("input"),
    )


class SchemaValidator:
    """Validation collaborator backed by generated pydantic models."""

    def __init__(self) -> None:
        self._models: dict[CalculatorType, type[BaseModel]] = {}

    def model_for(self, calculator_type: CalculatorType | str) -> type[BaseModel]:
        config = get_config(calculator_type)
        model = self._models.get(config.type)
        if model is None:
            model = build_answer_model(config)
            self._models[config.type] = model
        return model

    def validate(
        self,
        calculator_type: CalculatorType | str,
        answers: Mapping[str, float | None],
    ) -> ValidationReport:
        """Check answer types and ranges.

        Missing answers are not reported here; see check_required.
        """
        model = self.model_for(calculator_type)
        try:
            model.model_validate(dict(answers))
        except PydanticValidationError as e:
            violations = [_violation_from_error(err) for err in e.errors()]
            logger.debug(f"Schema validation failed for {calculator_type}: {len(violations)} violation(s)")
            return ValidationReport(valid=False, violations=violations)
        return ValidationReport(valid=True)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def check_types(
    config: CalculatorConfig, answers: Mapping[str, Any]
) -> list[FieldViolation]:
    """Report answers that are set but are not numbers.

    Stored values are never coerced, so a numeric string is reported too.
    """
    return [
        FieldViolation(
            field=field_id,
            message="Answer must be a number",
            code="invalid_type",
            value=answers[field_id],
        )
        for field_id in config.field_ids
        if answers.get(field_id) is not None and not _is_number(answers[field_id])
    ]


def check_required(
    config: CalculatorConfig, answers: Mapping[str, float | None]
) -> list[FieldViolation]:
    """Report every required field that has no answer."""
    return [
        FieldViolation(field=field_id, message="This field is required", code="missing")
        for field_id in config.required_fields
        if answers.get(field_id) is None
    ]


def _is_whole_number(value: Any) -> bool:
    if isinstance(value, float):
        return value.is_integer()
    return _is_number(value)


def check_eligibility(config: CalculatorConfig, patient: PatientData) -> list[FieldViolation]:
    """Check the patient's age and gender against the calculator limits.

    Unset age is not a violation. Unset gender is one only for calculators
    that score on a sex-specific chart.
    """
    violations = []
    if patient.age is not None:
        if not _is_whole_number(patient.age):
            violations.append(
                FieldViolation(
                    field="age",
                    message="Age must be a whole number of years",
                    code="invalid_type",
                    value=patient.age,
                )
            )
        elif not config.min_age <= patient.age <= config.max_age:
            violations.append(
                FieldViolation(
                    field="age",
                    message=f"Age must be between {config.min_age} and {config.max_age}",
                    code="age_out_of_range",
                    value=patient.age,
                )
            )
    if patient.gender is None:
        if config.requires_gender:
            violations.append(
                FieldViolation(
                    field="gender",
                    message=f"{config.name} requires the patient's sex",
                    code="missing",
                )
            )
    elif config.gender_restricted:
        allowed = [g.value for g in config.allowed_genders]
        if Gender(patient.gender) not in config.allowed_genders:
            violations.append(
                FieldViolation(
                    field="gender",
                    message=f"{config.name} is only available for: {', '.join(allowed)}",
                    code="gender_not_allowed",
                    value=Gender(patient.gender).value,
                )
            )
    return violations


def validate_submission(
    config: CalculatorConfig,
    answers: Mapping[str, Any],
    patient: PatientData,
    validator: SchemaValidator | None = None,
) -> list[FieldViolation]:
    """Run every check applied before scoring, in order.

    Required fields, answer types and eligibility come first; the schema
    validator only runs when those pass.
    """
    violations = (
        check_required(config, answers)
        + check_types(config, answers)
        + check_eligibility(config, patient)
    )
    if violations or validator is None:
        return violations
    return validator.validate(config.type, answers).violations
