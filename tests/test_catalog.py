"""Tests for the calculator catalog."""

import pytest

from clinicalscore.core.errors import ConfigurationError
from clinicalscore.schemas.base import CalculatorType, Gender
from clinicalscore.services.catalog import CALCULATOR_CONFIGS, get_config, list_configs


class TestCatalog:
    """Test calculator configurations."""

    def test_every_type_configured(self):
        """Test every calculator type has a config."""
        assert set(CALCULATOR_CONFIGS) == set(CalculatorType)
        assert len(list_configs()) == len(CalculatorType)

    def test_get_config_by_value(self):
        """Test configs are found by type value."""
        assert get_config("westleycroupscore").type == CalculatorType.WESTLEY_CROUP

    def test_get_unknown_config_raises(self):
        """Test unknown types raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            get_config("nope")

    @pytest.mark.parametrize("config", list(CALCULATOR_CONFIGS.values()), ids=lambda c: c.type.value)
    def test_steps_are_consistent(self, config):
        """Test step ids and orders are unique and reference known fields."""
        ids = [step.id for step in config.steps]
        orders = [step.order for step in config.steps]
        assert len(ids) == len(set(ids))
        assert len(orders) == len(set(orders))
        for step in config.steps:
            assert set(step.fields) <= set(config.field_ids)

    @pytest.mark.parametrize("config", list(CALCULATOR_CONFIGS.values()), ids=lambda c: c.type.value)
    def test_defaults_within_range(self, config):
        """Test every non-null default lies within its field range."""
        for spec in config.fields:
            if spec.default is not None:
                assert spec.minimum <= spec.default <= spec.maximum

    def test_gender_restrictions(self):
        """Test gender-restricted calculators."""
        assert get_config("ipss").allowed_genders == (Gender.MALE,)
        assert get_config("danpss").allowed_genders == (Gender.MALE,)
        assert get_config("epds").allowed_genders == (Gender.FEMALE,)
        assert get_config("puqe").allowed_genders == (Gender.FEMALE,)
        assert get_config("audit").gender_restricted is False

    def test_age_ranges(self):
        """Test age limits."""
        assert (get_config("westleycroupscore").min_age, get_config("westleycroupscore").max_age) == (0, 6)
        assert (get_config("score2").min_age, get_config("score2").max_age) == (40, 89)
        assert get_config("ipss").min_age == 40

    def test_default_answers_are_fresh(self):
        """Test default answers return a new dict each time."""
        config = get_config("score2")
        first = config.default_answers()
        first["systolic_bp"] = 140
        second = config.default_answers()
        assert second["systolic_bp"] is None
        assert second["target_systolic_bp"] == 120
        assert second["target_ldl"] == 2.0
        assert second["target_smoking"] == 0

    def test_danpss_sexual_fields_optional(self):
        """Test sexual function answers are not required."""
        config = get_config("danpss")
        assert "sexual_1_symptom" in config.field_ids
        assert "sexual_1_symptom" not in config.required_fields
        assert "emptying_1_bother" in config.required_fields
