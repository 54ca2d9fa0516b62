"""Scoring Strategy Registry.

One pure scoring function per calculator type. Every strategy takes the
answer map and the patient data and returns a CalculationResult; none of
them mutate their inputs or keep state.

Bands are inclusive on the lower bound: a score equal to a threshold
selects the higher band.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Any

from clinicalscore.core.errors import ConfigurationError
from clinicalscore.schemas.base import CalculatorType, Gender, RiskLevel
from clinicalscore.services import risk_table

logger = logging.getLogger(__name__)

CalculatorData = dict[str, float | None]


@dataclass
class PatientData:
    """Patient demographics entered alongside the questionnaire."""

    name: str | None = None
    age: int | None = None
    gender: Gender | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender.value if self.gender else None,
            **self.extra,
        }


@dataclass
class CalculationResult:
    """Result of one scoring strategy invocation."""

    score: float
    interpretation: str
    risk_level: RiskLevel
    recommendations: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)
    completed_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "interpretation": self.interpretation,
            "risk_level": self.risk_level.value,
            "recommendations": list(self.recommendations),
            "details": dict(self.details),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


ScoringStrategy = Callable[[Mapping[str, float | None], PatientData], CalculationResult]


def _answer(answers: Mapping[str, float | None], key: str) -> float:
    """Read an answer, treating unanswered as zero."""
    value = answers.get(key)
    return 0 if value is None else value


def _sum(answers: Mapping[str, float | None], keys: list[str] | tuple[str, ...]) -> int:
    return int(sum(_answer(answers, key) for key in keys))


def _questions(count: int) -> tuple[str, ...]:
    return tuple(f"question{i}" for i in range(1, count + 1))


# ============================================================================
# AUDIT (Alcohol Use Disorders Identification Test)
# ============================================================================

AUDIT_QUESTIONS = _questions(10)
AUDIT_HIGH_THRESHOLD = 8


def score_audit(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score AUDIT: ten questions 0-4, total 0-40.

    A total of 8 or more indicates hazardous drinking or dependence.
    """
    score = _sum(answers, AUDIT_QUESTIONS)

    if score >= AUDIT_HIGH_THRESHOLD:
        risk = RiskLevel.HIGH
        interpretation = "Signs of alcohol dependence"
        recommendations = [
            "Brief intervention on alcohol use",
            "Consider referral to alcohol treatment",
            "Follow up on liver function",
        ]
    else:
        risk = RiskLevel.LOW
        interpretation = "Low-risk alcohol consumption"
        recommendations = ["No intervention needed", "Repeat screening annually"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={
            "consumption_score": _sum(answers, AUDIT_QUESTIONS[0:3]),
            "dependence_score": _sum(answers, AUDIT_QUESTIONS[3:6]),
            "harm_score": _sum(answers, AUDIT_QUESTIONS[6:10]),
        },
    )


# ============================================================================
# EPDS (Edinburgh Postnatal Depression Scale)
# ============================================================================

EPDS_QUESTIONS = _questions(10)


def score_epds(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score EPDS: ten questions 0-3.

    Any positive answer to question 10 (thoughts of self-harm) escalates a
    moderate result to severe with urgent referral.
    """
    score = _sum(answers, EPDS_QUESTIONS)
    suicidal_thoughts = _answer(answers, "question10") > 0
    urgent_referral = False

    if score >= 13:
        if suicidal_thoughts:
            risk = RiskLevel.SEVERE
            category = "severe"
            interpretation = "Probable depression with thoughts of self-harm"
            urgent_referral = True
            recommendations = [
                "Urgent psychiatric referral",
                "Assess immediate safety",
                "Do not leave the patient without a follow-up plan",
            ]
        else:
            risk = RiskLevel.MODERATE
            category = "moderate"
            interpretation = "Probable depression"
            recommendations = [
                "Refer for clinical assessment of depression",
                "Follow up within two weeks",
            ]
    elif score >= 10:
        risk = RiskLevel.MILD
        category = "mild"
        interpretation = "Possible depression"
        recommendations = ["Repeat EPDS in two to four weeks", "Offer supportive counselling"]
    else:
        risk = RiskLevel.MINIMAL
        category = "minimal"
        interpretation = "Depression unlikely"
        recommendations = ["No further action needed"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={
            "suicidal_thoughts": suicidal_thoughts,
            "urgent_referral_needed": urgent_referral,
            "score_category": category,
        },
    )


# ============================================================================
# WHO-5 Well-Being Index
# ============================================================================

WHO5_QUESTIONS = _questions(5)


def _well_being_level(percentage: int) -> str:
    if percentage < 28:
        return "poor"
    elif percentage < 50:
        return "below_average"
    elif percentage < 68:
        return "average"
    elif percentage < 85:
        return "good"
    return "excellent"


def score_who5(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score WHO-5: raw sum 0-25 multiplied by 4 to a 0-100 percentage."""
    raw_score = _sum(answers, WHO5_QUESTIONS)
    percentage = raw_score * 4

    if percentage >= 50:
        risk = RiskLevel.LOW
        interpretation = "Normal well-being"
        recommendations = ["No intervention needed"]
    elif percentage >= 36:
        risk = RiskLevel.MODERATE
        interpretation = "Risk of depression"
        recommendations = [
            "Screen for depression with a diagnostic instrument",
            "Repeat WHO-5 in two weeks",
        ]
    else:
        risk = RiskLevel.HIGH
        interpretation = "High risk of depression"
        recommendations = [
            "Clinical assessment for depression",
            "Consider referral to mental health services",
        ]

    return CalculationResult(
        score=percentage,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={
            "raw_score": raw_score,
            "percentage": percentage,
            "well_being": _well_being_level(percentage),
            "depression_risk": risk != RiskLevel.LOW,
        },
    )


# ============================================================================
# IPSS (International Prostate Symptom Score)
# ============================================================================

IPSS_SYMPTOMS = (
    "incomplete_emptying",
    "frequency",
    "intermittency",
    "urgency",
    "weak_stream",
    "straining",
    "nocturia",
)


def _quality_of_life_impact(value: float) -> str:
    if value <= 1:
        return "minimal"
    elif value <= 3:
        return "moderate"
    elif value <= 5:
        return "significant"
    return "severe"


def score_ipss(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score IPSS: seven symptom questions 0-5 plus quality of life 0-6.

    The quality-of-life answer is reported separately and not added to the
    symptom score.
    """
    score = _sum(answers, IPSS_SYMPTOMS)
    quality_of_life = _answer(answers, "quality_of_life")

    if score >= 20:
        risk = RiskLevel.SEVERE
        interpretation = "Severe lower urinary tract symptoms"
        recommendations = [
            "Urological referral",
            "Consider combination medical therapy or surgery",
        ]
    elif score >= 8:
        risk = RiskLevel.MODERATE
        interpretation = "Moderate lower urinary tract symptoms"
        recommendations = [
            "Consider alpha-blocker treatment",
            "Reassess symptoms in three months",
        ]
    else:
        risk = RiskLevel.MILD
        interpretation = "Mild lower urinary tract symptoms"
        recommendations = ["Watchful waiting", "Lifestyle advice on fluid intake"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={
            "symptom_score": score,
            "quality_of_life": quality_of_life,
            "quality_of_life_impact": _quality_of_life_impact(quality_of_life),
        },
    )


# ============================================================================
# PUQE (Pregnancy-Unique Quantification of Emesis)
# ============================================================================

PUQE_QUESTIONS = ("nausea", "vomiting", "retching")


def score_puqe(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score PUQE: three questions 1-5, total 3-15."""
    score = _sum(answers, PUQE_QUESTIONS)

    if score >= 13:
        risk = RiskLevel.SEVERE
        interpretation = "Severe nausea and vomiting of pregnancy"
        recommendations = [
            "Assess for hyperemesis gravidarum",
            "Consider admission for intravenous fluids",
            "Check electrolytes and ketones",
        ]
    elif score >= 7:
        risk = RiskLevel.MODERATE
        interpretation = "Moderate nausea and vomiting of pregnancy"
        recommendations = ["Consider antiemetic treatment", "Advise small frequent meals"]
    else:
        risk = RiskLevel.MILD
        interpretation = "Mild nausea and vomiting of pregnancy"
        recommendations = ["Dietary advice", "Adequate fluid intake"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={"hyperemesis_risk": risk == RiskLevel.SEVERE},
    )


# ============================================================================
# Westley Croup Score
# ============================================================================

WESTLEY_ITEMS = (
    "level_of_consciousness",
    "cyanosis",
    "stridor",
    "air_entry",
    "retractions",
)


def score_westley_croup(
    answers: Mapping[str, float | None], patient: PatientData
) -> CalculationResult:
    """Score Westley Croup: five weighted signs, total 0-17."""
    score = _sum(answers, WESTLEY_ITEMS)

    if score >= 6:
        risk = RiskLevel.SEVERE
        action = "critical"
        interpretation = "Severe croup"
        recommendations = [
            "Immediate hospital assessment",
            "Nebulized epinephrine and systemic corticosteroid",
        ]
    elif score >= 3:
        risk = RiskLevel.MODERATE
        action = "treat"
        interpretation = "Moderate croup"
        recommendations = ["Oral dexamethasone", "Observe for two to four hours"]
    else:
        risk = RiskLevel.MILD
        action = "observe"
        interpretation = "Mild croup"
        recommendations = ["Consider single-dose oral dexamethasone", "Home care advice"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={"action": action},
    )


# ============================================================================
# GCS (Glasgow Coma Scale)
# ============================================================================

GCS_COMPONENTS = ("eye_opening", "verbal_response", "motor_response")


def score_gcs(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score GCS: eye 1-4, verbal 1-5, motor 1-6, total 3-15."""
    score = _sum(answers, GCS_COMPONENTS)

    if score <= 8:
        risk = RiskLevel.SEVERE
        interpretation = "Severe brain injury"
        recommendations = ["Secure the airway", "Immediate neurosurgical evaluation"]
    elif score <= 12:
        risk = RiskLevel.MODERATE
        interpretation = "Moderate brain injury"
        recommendations = ["CT of the head", "Frequent neurological observation"]
    elif score <= 14:
        risk = RiskLevel.MILD
        interpretation = "Mild brain injury"
        recommendations = ["Observation", "Consider CT of the head"]
    else:
        risk = RiskLevel.LOW
        interpretation = "Normal level of consciousness"
        recommendations = ["No acute intervention needed"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={key: _answer(answers, key) for key in GCS_COMPONENTS},
    )


# ============================================================================
# DAN-PSS (Danish Prostatic Symptom Score)
# ============================================================================

DANPSS_SECTIONS: dict[str, int] = {
    "emptying": 4,
    "filling": 4,
    "other": 4,
    "sexual": 3,
}
DANPSS_URINARY_SECTIONS = ("emptying", "filling", "other")


def danpss_fields(section: str) -> list[tuple[str, str]]:
    """Return (symptom_id, bother_id) pairs for a DAN-PSS section."""
    return [
        (f"{section}_{i}_symptom", f"{section}_{i}_bother")
        for i in range(1, DANPSS_SECTIONS[section] + 1)
    ]


def _danpss_section(answers: Mapping[str, float | None], section: str) -> dict[str, Any]:
    symptom_total = bother_total = product_total = 0
    answered = 0
    pairs = danpss_fields(section)
    for symptom_id, bother_id in pairs:
        symptom = _answer(answers, symptom_id)
        bother = _answer(answers, bother_id)
        answered += (answers.get(symptom_id) is not None) + (answers.get(bother_id) is not None)
        symptom_total += symptom
        bother_total += bother
        product_total += symptom * bother
    return {
        "symptom_score": int(symptom_total),
        "bother_score": int(bother_total),
        "total": int(product_total),
        "answered": answered,
        "complete": answered == len(pairs) * 2,
    }


def score_danpss(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score DAN-PSS: paired symptom and bother answers (0-3 each).

    Each question contributes symptom x bother. The sexual function section
    only counts towards the total when all of its answers are given.
    """
    sections = {name: _danpss_section(answers, name) for name in DANPSS_SECTIONS}
    score = sum(sections[name]["total"] for name in DANPSS_URINARY_SECTIONS)

    sexual = sections["sexual"]
    if sexual["complete"]:
        score += sexual["total"]
        sexual_status = "complete"
        sexual_message = "Sexual function included in the total score"
    elif sexual["answered"] == 0:
        sexual_status = "not_started"
        sexual_message = "Sexual function not answered and excluded from the total score"
    else:
        sexual_status = "incomplete"
        sexual_message = "Sexual function partially answered and excluded from the total score"

    if score >= 20:
        risk = RiskLevel.SEVERE
        interpretation = "Severe prostatic symptoms"
        recommendations = ["Urological referral", "Consider surgical evaluation"]
    elif score >= 8:
        risk = RiskLevel.MODERATE
        interpretation = "Moderate prostatic symptoms"
        recommendations = ["Consider medical treatment", "Reassess in three months"]
    else:
        risk = RiskLevel.MILD
        interpretation = "Mild prostatic symptoms"
        recommendations = ["Watchful waiting"]

    return CalculationResult(
        score=score,
        interpretation=interpretation,
        risk_level=risk,
        recommendations=recommendations,
        details={
            "sections": sections,
            "sexual_status": sexual_status,
            "sexual_message": sexual_message,
        },
    )


# ============================================================================
# LRTI (Lower Respiratory Tract Infection)
# ============================================================================

def score_lrti(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score LRTI from vital signs.

    Temperature > 38.5 and systolic BP < 100 score 2 each; respiratory
    rate > 25 and heart rate > 100 score 1 each. Unanswered vitals do not
    score.
    """
    temperature = answers.get("temperature")
    respiratory_rate = answers.get("respiratory_rate")
    heart_rate = answers.get("heart_rate")
    systolic_bp = answers.get("systolic_bp")

    score = 0
    if temperature is not None and temperature > 38.5:
        score += 2
    if respiratory_rate is not None and respiratory_rate > 25:
        score += 1
    if heart_rate is not None and heart_rate > 100:
        score += 1
    if systolic_bp is not None and systolic_bp < 100:
        score += 2

    if score <= 1:
        risk = RiskLevel.LOW
        vital_signs = "normal"
    elif score <= 3:
        risk = RiskLevel.MODERATE
        vital_signs = "concerning"
    elif score <= 5:
        risk = RiskLevel.HIGH
        vital_signs = "critical"
    else:
        risk = RiskLevel.VERY_HIGH
        vital_signs = "critical"

    antibiotics = score >= 2
    if antibiotics:
        recommendations = ["Antibiotic treatment", "Symptomatic treatment"]
    else:
        recommendations = ["Symptomatic treatment", "Observation at home"]

    return CalculationResult(
        score=score,
        interpretation=f"LRTI risk: {risk.value.replace('_', ' ')}",
        risk_level=risk,
        recommendations=recommendations,
        details={
            "vital_signs_category": vital_signs,
            "antibiotic_recommended": antibiotics,
        },
    )


# ============================================================================
# SCORE2 (10-year cardiovascular risk)
# ============================================================================

def score_score2(answers: Mapping[str, float | None], patient: PatientData) -> CalculationResult:
    """Score SCORE2 by delegating to the risk table engine.

    The score is the current 10-year risk in percent. Target values that
    were not answered fall back to the engine defaults.

    Raises:
        ValueError: If the patient's sex is not set.
    """
    if patient.gender is None:
        raise ValueError("SCORE2 requires the patient's sex")
    age = patient.age if patient.age is not None else risk_table.DEFAULT_AGE
    target_bp = answers.get("target_systolic_bp")
    target_ldl = answers.get("target_ldl")
    target_smoking = answers.get("target_smoking")

    assessment = risk_table.assess(
        gender=patient.gender,
        age=age,
        smoking=bool(_answer(answers, "smoking")),
        systolic_bp=_answer(answers, "systolic_bp"),
        ldl=_answer(answers, "ldl"),
        target_systolic_bp=(
            risk_table.DEFAULT_TARGET_SYSTOLIC_BP if target_bp is None else target_bp
        ),
        target_ldl=risk_table.DEFAULT_TARGET_LDL if target_ldl is None else target_ldl,
        target_smoking=(
            risk_table.DEFAULT_TARGET_SMOKING if target_smoking is None else bool(target_smoking)
        ),
    )

    recommendations = []
    if assessment.risk_level != RiskLevel.LOW:
        recommendations.append("Discuss risk factor treatment")
    if _answer(answers, "smoking"):
        recommendations.append("Smoking cessation")
    if _answer(answers, "systolic_bp") >= 140:
        recommendations.append("Blood pressure treatment")
    if _answer(answers, "ldl") > assessment.ldl_reference_range[1]:
        recommendations.append("Lipid-lowering treatment")
    if not recommendations:
        recommendations.append("Lifestyle advice")

    return CalculationResult(
        score=assessment.current_risk,
        interpretation=f"10-year cardiovascular risk: {assessment.risk_group} ({assessment.age_tier})",
        risk_level=assessment.risk_level,
        recommendations=recommendations,
        details=assessment.to_dict(),
    )


# ============================================================================
# Registry
# ============================================================================

STRATEGIES: dict[CalculatorType, ScoringStrategy] = {
    CalculatorType.AUDIT: score_audit,
    CalculatorType.DANPSS: score_danpss,
    CalculatorType.EPDS: score_epds,
    CalculatorType.GCS: score_gcs,
    CalculatorType.IPSS: score_ipss,
    CalculatorType.LRTI: score_lrti,
    CalculatorType.PUQE: score_puqe,
    CalculatorType.SCORE2: score_score2,
    CalculatorType.WESTLEY_CROUP: score_westley_croup,
    CalculatorType.WHO5: score_who5,
}

_missing = set(CalculatorType) - set(STRATEGIES)
if _missing:
    raise ConfigurationError(
        f"No scoring strategy registered for: {', '.join(sorted(t.value for t in _missing))}"
    )


def resolve_strategy(calculator_type: CalculatorType | str) -> ScoringStrategy:
    """Resolve the scoring strategy for a calculator type.

    Raises:
        ConfigurationError: If the type is unknown.
    """
    try:
        return STRATEGIES[CalculatorType(calculator_type)]
    except (KeyError, ValueError):
        raise ConfigurationError(f"Unknown calculator type: {calculator_type}") from None


# ============================================================================
# Service
# ============================================================================

class ScoringService:
    """Stateless scoring entry point used by the HTTP layer."""

    def __init__(self) -> None:
        self._calculation_count = 0
        logger.info(f"Scoring service initialized with {len(STRATEGIES)} strategies")

    def get_available_calculators(self) -> list[str]:
        return [calculator_type.value for calculator_type in STRATEGIES]

    def calculate(
        self,
        calculator_type: CalculatorType | str,
        answers: Mapping[str, float | None],
        patient: PatientData | None = None,
    ) -> CalculationResult:
        """Run a calculator's strategy on already validated answers.

        Raises:
            ConfigurationError: If the calculator type is unknown.
        """
        strategy = resolve_strategy(calculator_type)
        result = strategy(dict(answers), patient or PatientData())
        self._calculation_count += 1
        return result

    def get_stats(self) -> dict[str, Any]:
        return {
            "total_calculators": len(STRATEGIES),
            "calculations_performed": self._calculation_count,
        }


_scoring_service: ScoringService | None = None
_scoring_lock = Lock()


def get_scoring_service() -> ScoringService:
    """Get the singleton scoring service."""
    global _scoring_service

    if _scoring_service is None:
        with _scoring_lock:
            if _scoring_service is None:
                _scoring_service = ScoringService()

    return _scoring_service


def reset_scoring_service() -> None:
    """Reset the singleton (for testing)."""
    global _scoring_service
    with _scoring_lock:
        _scoring_service = None
