"""Tests for the SCORE2 risk table engine."""

import pytest

from clinicalscore.schemas.base import Gender, RiskLevel
from clinicalscore.services.risk_table import (
    AGE_BANDS,
    BP_BANDS,
    LDL_BANDS,
    RiskProfile,
    age_band,
    age_tier,
    assess,
    attribute_risk_factors,
    bp_band,
    classify_risk,
    ldl_band,
    ldl_reference_range,
    lookup_risk,
    risk_reduction,
)
from clinicalscore.services.score2_data import SCORE2_TABLE


# ============================================================================
# Band Tests
# ============================================================================


class TestBands:
    """Test band selection."""

    def test_age_band_boundaries(self):
        """Test five-year age bands."""
        assert age_band(40) == "40-44"
        assert age_band(44) == "40-44"
        assert age_band(45) == "45-49"
        assert age_band(89) == "85-89"

    def test_age_band_clamps(self):
        """Test ages outside the chart clamp to the edge bands."""
        assert age_band(25) == "40-44"
        assert age_band(95) == "85-89"

    def test_bp_band(self):
        """Test systolic BP bands are inclusive on the lower bound."""
        assert bp_band(90) == "100-119"
        assert bp_band(119) == "100-119"
        assert bp_band(120) == "120-139"
        assert bp_band(140) == "140-159"
        assert bp_band(160) == "160-179"
        assert bp_band(200) == "160-179"

    def test_ldl_band(self):
        """Test LDL bands are inclusive on the lower bound."""
        assert ldl_band(1.5) == "2.2-3.1"
        assert ldl_band(3.2) == "3.2-4.1"
        assert ldl_band(4.2) == "4.2-5.1"
        assert ldl_band(5.2) == "5.2-6.1"
        assert ldl_band(8.0) == "5.2-6.1"


# ============================================================================
# Table Tests
# ============================================================================


class TestTable:
    """Test the risk chart itself."""

    def test_table_is_complete(self):
        """Test every band combination has a value."""
        for sex in ("male", "female"):
            for smoking in ("non_smoker", "smoker"):
                for ldl in LDL_BANDS:
                    for age in AGE_BANDS:
                        assert set(SCORE2_TABLE[sex][smoking][ldl][age]) == set(BP_BANDS)

    def test_monotone_in_age(self):
        """Test risk never decreases with age band."""
        for sex in ("male", "female"):
            for smoking in ("non_smoker", "smoker"):
                for ldl in LDL_BANDS:
                    for bp in BP_BANDS:
                        values = [SCORE2_TABLE[sex][smoking][ldl][age][bp] for age in AGE_BANDS]
                        assert values == sorted(values)

    def test_monotone_in_ldl_and_bp(self):
        """Test risk never decreases with LDL band or BP band."""
        for sex in ("male", "female"):
            for smoking in ("non_smoker", "smoker"):
                for age in AGE_BANDS:
                    for bp in BP_BANDS:
                        values = [SCORE2_TABLE[sex][smoking][ldl][age][bp] for ldl in LDL_BANDS]
                        assert values == sorted(values)
                    for ldl in LDL_BANDS:
                        values = [SCORE2_TABLE[sex][smoking][ldl][age][bp] for bp in BP_BANDS]
                        assert values == sorted(values)

    def test_smokers_strictly_higher(self):
        """Test smokers always have a higher risk than non-smokers."""
        for sex in ("male", "female"):
            for ldl in LDL_BANDS:
                for age in AGE_BANDS:
                    for bp in BP_BANDS:
                        assert (
                            SCORE2_TABLE[sex]["smoker"][ldl][age][bp]
                            > SCORE2_TABLE[sex]["non_smoker"][ldl][age][bp]
                        )

    def test_lookup(self):
        """Test lookup picks the right cell."""
        profile = RiskProfile(Gender.MALE, 55, False, 125, 3.0)
        assert lookup_risk(profile) == SCORE2_TABLE["male"]["non_smoker"]["2.2-3.1"]["55-59"]["120-139"]

    def test_other_gender_uses_female_chart(self):
        """Test gender 'other' falls back to the female chart."""
        other = lookup_risk(RiskProfile(Gender.OTHER, 60, True, 150, 4.5))
        female = lookup_risk(RiskProfile(Gender.FEMALE, 60, True, 150, 4.5))
        assert other == female


# ============================================================================
# Classification Tests
# ============================================================================


class TestClassification:
    """Test age-tiered risk groups."""

    def test_under_50(self):
        """Test thresholds below age 50."""
        assert classify_risk(2, 45) == ("low-moderate", RiskLevel.LOW)
        assert classify_risk(2.5, 45) == ("high", RiskLevel.HIGH)
        assert classify_risk(7.5, 45) == ("very high", RiskLevel.VERY_HIGH)

    def test_50_to_69(self):
        """Test thresholds for ages 50-69."""
        assert classify_risk(4, 60)[1] == RiskLevel.LOW
        assert classify_risk(5, 60)[1] == RiskLevel.HIGH
        assert classify_risk(10, 69)[1] == RiskLevel.VERY_HIGH

    def test_70_and_over(self):
        """Test thresholds from age 70."""
        assert classify_risk(7, 70)[1] == RiskLevel.LOW
        assert classify_risk(7.5, 75)[1] == RiskLevel.HIGH
        assert classify_risk(15, 80)[1] == RiskLevel.VERY_HIGH

    def test_tier_rederived_from_age(self):
        """Test the same risk classifies differently by age."""
        assert classify_risk(8, 45)[1] == RiskLevel.VERY_HIGH
        assert classify_risk(8, 55)[1] == RiskLevel.HIGH
        assert classify_risk(8, 72)[1] == RiskLevel.HIGH
        assert age_tier(49).label == "< 50 years"
        assert age_tier(50).label == "50 - 69 years"
        assert age_tier(70).label == ">= 70 years"


# ============================================================================
# Risk Reduction Tests
# ============================================================================


class TestRiskReduction:
    """Test ARR, RRR and NNT."""

    def test_reduction(self):
        """Test the documented 20 -> 10 example."""
        reduction = risk_reduction(20, 10)
        assert reduction.absolute == 10
        assert reduction.relative == pytest.approx(0.5)
        assert reduction.number_needed_to_treat == pytest.approx(0.1)

    def test_no_reduction_is_zero(self):
        """Test equal risks give zero ARR, RRR and NNT."""
        reduction = risk_reduction(12, 12)
        assert reduction.absolute == 0
        assert reduction.relative == 0
        assert reduction.number_needed_to_treat == 0

    def test_zero_current_risk(self):
        """Test RRR is zero when current risk is zero."""
        reduction = risk_reduction(0, 0)
        assert reduction.relative == 0


# ============================================================================
# Attribution Tests
# ============================================================================


class TestAttribution:
    """Test risk factor attribution."""

    def test_smoking_only(self):
        """Test all risk is attributed to smoking when BP and LDL are at target."""
        profile = RiskProfile(Gender.MALE, 55, True, 110, 2.5)
        assert attribute_risk_factors(profile) == {"blood_pressure": 0, "ldl": 0, "smoking": 100}

    def test_all_factors_sum_to_100(self):
        """Test percentages sum to exactly 100."""
        profile = RiskProfile(Gender.MALE, 65, True, 170, 5.8)
        attribution = attribute_risk_factors(profile)
        assert set(attribution) == {"blood_pressure", "ldl", "smoking"}
        assert all(value > 0 for value in attribution.values())
        assert sum(attribution.values()) == 100

    def test_rounding_never_drifts(self):
        """Test the breakdown totals 100 for every profile with modifiable risk."""
        for gender in (Gender.MALE, Gender.FEMALE):
            for age in (42, 57, 72, 87):
                for bp in (125, 145, 165):
                    for ldl in (3.5, 4.5, 5.8):
                        attribution = attribute_risk_factors(RiskProfile(gender, age, True, bp, ldl))
                        assert sum(attribution.values()) == 100, (gender, age, bp, ldl)

    def test_no_modifiable_risk_returns_zeros(self):
        """Test zero weights give a zero breakdown."""
        profile = RiskProfile(Gender.FEMALE, 50, False, 110, 2.5)
        assert attribute_risk_factors(profile) == {"blood_pressure": 0, "ldl": 0, "smoking": 0}

    def test_no_modifiable_risk_keeps_previous(self):
        """Test zero weights leave the previous breakdown untouched."""
        profile = RiskProfile(Gender.FEMALE, 50, False, 110, 2.5)
        previous = {"blood_pressure": 40, "ldl": 30, "smoking": 30}
        assert attribute_risk_factors(profile, previous=previous) == previous


# ============================================================================
# LDL Reference Range and Assessment Tests
# ============================================================================


class TestLdlReferenceRange:
    """Test LDL reference range by age."""

    def test_ranges(self):
        """Test the three age groups."""
        assert ldl_reference_range(25) == (1.2, 4.3)
        assert ldl_reference_range(30) == (1.4, 4.7)
        assert ldl_reference_range(49) == (1.4, 4.7)
        assert ldl_reference_range(50) == (2.0, 5.3)


class TestAssess:
    """Test the combined assessment."""

    def test_target_equal_to_current(self):
        """Test a profile already at target has no reduction."""
        assessment = assess(Gender.MALE, 55, False, 125, 2.5)
        assert assessment.current_risk == assessment.target_risk
        assert assessment.reduction.absolute == 0
        assert assessment.reduction.number_needed_to_treat == 0

    def test_high_risk_smoker(self):
        """Test a high-risk smoker improves with treatment."""
        assessment = assess("male", 65, True, 170, 5.8)
        assert assessment.target_risk < assessment.current_risk
        assert assessment.reduction.absolute > 0
        assert assessment.risk_level == RiskLevel.VERY_HIGH
        assert assessment.age_tier == "50 - 69 years"

    def test_to_dict(self):
        """Test serialization keys."""
        data = assess(Gender.FEMALE, 45, False, 130, 3.5).to_dict()
        assert data["ldl_reference_range"] == [1.4, 4.7]
        assert data["risk_level"] in {"low", "high", "very_high"}
        assert "attribution" in data
