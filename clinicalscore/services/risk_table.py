"""SCORE2 Risk Table Engine.

Table-driven 10-year cardiovascular risk estimation:

- Band lookup by sex, age, smoking, systolic blood pressure and LDL
- Age-tiered risk group classification
- Risk-reduction arithmetic (ARR, RRR, NNT) between a current and a
  target profile
- Attribution of the modifiable part of the risk to blood pressure,
  LDL and smoking
- Age-dependent LDL reference range

All functions are pure. Recompute whenever an input changes.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from clinicalscore.schemas.base import Gender, RiskLevel
from clinicalscore.services.score2_data import SCORE2_TABLE

logger = logging.getLogger(__name__)

AGE_BANDS = (
    "40-44", "45-49", "50-54", "55-59", "60-64",
    "65-69", "70-74", "75-79", "80-84", "85-89",
)
BP_BANDS = ("100-119", "120-139", "140-159", "160-179")
LDL_BANDS = ("2.2-3.1", "3.2-4.1", "4.2-5.1", "5.2-6.1")

MIN_AGE = 40
MAX_AGE = 89

DEFAULT_AGE = 55
DEFAULT_TARGET_SYSTOLIC_BP = 120
DEFAULT_TARGET_LDL = 2.0
DEFAULT_TARGET_SMOKING = False


@dataclass(frozen=True)
class RiskProfile:
    """Inputs to a single table lookup."""

    gender: Gender
    age: int
    smoking: bool
    systolic_bp: float
    ldl: float


@dataclass(frozen=True)
class AgeTier:
    """Risk group thresholds for one age tier (percent)."""

    label: str
    high_threshold: float
    very_high_threshold: float


AGE_TIERS = (
    AgeTier(label="< 50 years", high_threshold=2.5, very_high_threshold=7.5),
    AgeTier(label="50 - 69 years", high_threshold=5.0, very_high_threshold=10.0),
    AgeTier(label=">= 70 years", high_threshold=7.5, very_high_threshold=15.0),
)


@dataclass(frozen=True)
class RiskReduction:
    """Absolute/relative risk reduction and number needed to treat."""

    absolute: float
    relative: float
    number_needed_to_treat: float


@dataclass
class RiskAssessment:
    """Current versus target risk for one patient."""

    current_risk: int
    target_risk: int
    risk_group: str
    risk_level: RiskLevel
    age_tier: str
    reduction: RiskReduction
    attribution: dict[str, int] = field(default_factory=dict)
    ldl_reference_range: tuple[float, float] = (0.0, 0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_risk": self.current_risk,
            "target_risk": self.target_risk,
            "risk_group": self.risk_group,
            "risk_level": self.risk_level.value,
            "age_tier": self.age_tier,
            "absolute_risk_reduction": self.reduction.absolute,
            "relative_risk_reduction": self.reduction.relative,
            "number_needed_to_treat": self.reduction.number_needed_to_treat,
            "attribution": dict(self.attribution),
            "ldl_reference_range": list(self.ldl_reference_range),
        }


# ============================================================================
# Band Lookup
# ============================================================================

def age_band(age: int) -> str:
    """Return the 5-year age band, clamped to 40-44 .. 85-89."""
    clamped = min(max(int(age), MIN_AGE), MAX_AGE)
    return AGE_BANDS[(clamped - MIN_AGE) // 5]


def bp_band(systolic_bp: float) -> str:
    """Return the systolic blood pressure band (mmHg)."""
    if systolic_bp >= 160:
        return "160-179"
    elif systolic_bp >= 140:
        return "140-159"
    elif systolic_bp >= 120:
        return "120-139"
    return "100-119"


def ldl_band(ldl: float) -> str:
    """Return the LDL cholesterol band (mmol/L)."""
    if ldl >= 5.2:
        return "5.2-6.1"
    elif ldl >= 4.2:
        return "4.2-5.1"
    elif ldl >= 3.2:
        return "3.2-4.1"
    return "2.2-3.1"


def _sex_key(gender: Gender | str | None) -> str:
    # Charts exist for male and female only; other falls back to female.
    return "male" if gender == Gender.MALE else "female"


def lookup_risk(profile: RiskProfile) -> int:
    """Look up the 10-year risk (percent) for a profile.

    Args:
        profile: Sex, age, smoking status, systolic BP and LDL.

    Returns:
        Integer risk percentage from the chart.
    """
    smoking_key = "smoker" if profile.smoking else "non_smoker"
    return SCORE2_TABLE[_sex_key(profile.gender)][smoking_key][ldl_band(profile.ldl)][
        age_band(profile.age)
    ][bp_band(profile.systolic_bp)]


# ============================================================================
# Classification
# ============================================================================

def age_tier(age: int) -> AgeTier:
    """Select the risk-group thresholds for an age."""
    if age < 50:
        return AGE_TIERS[0]
    elif age < 70:
        return AGE_TIERS[1]
    return AGE_TIERS[2]


def classify_risk(risk: float, age: int) -> tuple[str, RiskLevel]:
    """Classify a risk percentage into a risk group for the given age.

    Returns:
        Tuple of (group label, RiskLevel).
    """
    tier = age_tier(age)
    if risk >= tier.very_high_threshold:
        return "very high", RiskLevel.VERY_HIGH
    elif risk >= tier.high_threshold:
        return "high", RiskLevel.HIGH
    return "low-moderate", RiskLevel.LOW


# ============================================================================
# Risk Reduction
# ============================================================================

def risk_reduction(current_risk: float, target_risk: float) -> RiskReduction:
    """Compute ARR, RRR and NNT between current and target risk.

    ARR is in percentage points. RRR is a fraction of the current risk.
    NNT is 1 / ARR, reported as 0 when there is no reduction.

    Example:
        >>> risk_reduction(20, 10)
        RiskReduction(absolute=10, relative=0.5, number_needed_to_treat=0.1)
    """
    arr = current_risk - target_risk
    rrr = arr / current_risk if current_risk != 0 else 0
    nnt = 1 / arr if arr != 0 else 0
    return RiskReduction(absolute=arr, relative=rrr, number_needed_to_treat=nnt)


# ============================================================================
# Risk Factor Attribution
# ============================================================================

def _log_weight(current: float, counterfactual: float) -> float:
    if current <= 0 or counterfactual <= 0:
        return 0.0
    return max(math.log(current) - math.log(counterfactual), 0.0)


def _percentages(weights: dict[str, float], total: float) -> dict[str, int]:
    """Whole percentages summing to exactly 100 (largest remainder)."""
    shares = {name: weight / total * 100 for name, weight in weights.items()}
    result = {name: math.floor(share) for name, share in shares.items()}
    leftover = 100 - sum(result.values())
    by_remainder = sorted(shares, key=lambda name: shares[name] - result[name], reverse=True)
    for name in by_remainder[:leftover]:
        result[name] += 1
    return result


def attribute_risk_factors(
    current: RiskProfile,
    target_systolic_bp: float = DEFAULT_TARGET_SYSTOLIC_BP,
    target_ldl: float = DEFAULT_TARGET_LDL,
    target_smoking: bool = DEFAULT_TARGET_SMOKING,
    previous: dict[str, int] | None = None,
) -> dict[str, int]:
    """Split the modifiable risk between blood pressure, LDL and smoking.

    For each factor the risk is recomputed with only that factor moved to
    its target. The log-ratio of current to counterfactual risk is the
    factor's weight; weights are normalized to percentages.

    Args:
        current: The patient's current profile.
        target_systolic_bp: Target systolic BP.
        target_ldl: Target LDL.
        target_smoking: Target smoking status.
        previous: Breakdown to keep when no factor contributes.

    Returns:
        Dict with keys blood_pressure, ldl, smoking summing to 100, or the
        previous breakdown (zeros if none) when every weight is zero.
    """
    risk = lookup_risk(current)
    counterfactuals = {
        "blood_pressure": RiskProfile(
            current.gender, current.age, current.smoking, target_systolic_bp, current.ldl
        ),
        "ldl": RiskProfile(
            current.gender, current.age, current.smoking, current.systolic_bp, target_ldl
        ),
        "smoking": RiskProfile(
            current.gender, current.age, target_smoking, current.systolic_bp, current.ldl
        ),
    }
    weights = {
        name: _log_weight(risk, lookup_risk(profile))
        for name, profile in counterfactuals.items()
    }

    total = sum(weights.values())
    if total <= 0:
        if previous is not None:
            return dict(previous)
        return {name: 0 for name in weights}

    return _percentages(weights, total)


# ============================================================================
# LDL Reference Range
# ============================================================================

def ldl_reference_range(age: int) -> tuple[float, float]:
    """Return the normal LDL range (mmol/L) for an age."""
    if age < 30:
        return (1.2, 4.3)
    elif age < 50:
        return (1.4, 4.7)
    return (2.0, 5.3)


# ============================================================================
# Assessment
# ============================================================================

def assess(
    gender: Gender | str,
    age: int,
    smoking: bool,
    systolic_bp: float,
    ldl: float,
    target_systolic_bp: float = DEFAULT_TARGET_SYSTOLIC_BP,
    target_ldl: float = DEFAULT_TARGET_LDL,
    target_smoking: bool = DEFAULT_TARGET_SMOKING,
    previous_attribution: dict[str, int] | None = None,
) -> RiskAssessment:
    """Assess current and target cardiovascular risk for a patient.

    Args:
        gender: Patient sex.
        age: Patient age in years (clamped to the chart for lookup).
        smoking: Current smoker.
        systolic_bp: Current systolic BP (mmHg).
        ldl: Current LDL cholesterol (mmol/L).
        target_systolic_bp: Treatment target BP.
        target_ldl: Treatment target LDL.
        target_smoking: Smoking status after intervention.
        previous_attribution: Breakdown kept when nothing is attributable.

    Returns:
        RiskAssessment with classification, reduction and attribution.
    """
    current = RiskProfile(Gender(gender), int(age), bool(smoking), systolic_bp, ldl)
    target = RiskProfile(
        current.gender, current.age, bool(target_smoking), target_systolic_bp, target_ldl
    )

    current_risk = lookup_risk(current)
    target_risk = lookup_risk(target)
    group, level = classify_risk(current_risk, current.age)

    logger.debug(
        f"SCORE2 lookup: sex={_sex_key(current.gender)} age={current.age} "
        f"risk={current_risk}% target={target_risk}%"
    )

    return RiskAssessment(
        current_risk=current_risk,
        target_risk=target_risk,
        risk_group=group,
        risk_level=level,
        age_tier=age_tier(current.age).label,
        reduction=risk_reduction(current_risk, target_risk),
        attribution=attribute_risk_factors(
            current,
            target_systolic_bp=target_systolic_bp,
            target_ldl=target_ldl,
            target_smoking=bool(target_smoking),
            previous=previous_attribution,
        ),
        ldl_reference_range=ldl_reference_range(current.age),
    )
