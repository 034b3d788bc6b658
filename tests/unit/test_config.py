"""Tests for configuration defaults, loading and validation."""

import pytest
from pathlib import Path

from txplan_app.config.defaults import get_default_config
from txplan_app.config.loader import ConfigLoader
from txplan_app.config.validation import ConfigValidator
from txplan_app.errors import MalformedDataError, MissingDataError


@pytest.fixture
def loader(tmp_path) -> ConfigLoader:
    return ConfigLoader.create(tmp_path)


class TestDefaults:
    def test_values(self):
        config = get_default_config()
        assert config.stepper.arm_delay_ms == 500
        assert config.stepper.repeat_interval_ms == 150
        assert (config.stepper.min_value, config.stepper.max_value) == (1, 20)
        assert config.selector.display_limit == 6
        assert config.ledger.money_places == 2
        assert config.currency.symbol == "₹"
        assert config.plan.default_status == "pending"


class TestConfigLoader:
    """Test 3-tier precedence and file loading."""

    def test_defaults_without_files(self, loader):
        assert loader.load_config() == get_default_config()

    def test_settings_file_overrides_defaults(self, tmp_path, loader):
        (tmp_path / "settings.yaml").write_text("selector:\n  display_limit: 8\n", encoding="utf-8")
        config = loader.load_config()
        assert config.selector.display_limit == 8
        assert config.stepper.arm_delay_ms == 500

    def test_explicit_overrides_win(self, tmp_path, loader):
        (tmp_path / "settings.yaml").write_text("selector:\n  display_limit: 8\n", encoding="utf-8")
        config = loader.load_config({"selector": {"display_limit": 3}, "stepper": {"repeat_interval_ms": 100}})
        assert config.selector.display_limit == 3
        assert config.stepper.repeat_interval_ms == 100
        assert config.stepper.arm_delay_ms == 500

    def test_invalid_override_rejected(self, loader):
        with pytest.raises(MalformedDataError) as exc_info:
            loader.load_config({"stepper": {"arm_delay_ms": 0}})
        assert exc_info.value.context["errors"][0][0] == "arm_delay_ms"

    def test_non_mapping_settings_file(self, tmp_path, loader):
        (tmp_path / "settings.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(MalformedDataError):
            loader.load_settings()

    def test_empty_settings_file(self, tmp_path, loader):
        (tmp_path / "settings.yaml").write_text("", encoding="utf-8")
        assert loader.load_settings() == {}

    def test_repository_config(self):
        loader = ConfigLoader.create()
        assert loader.config_dir == Path(__file__).parent.parent.parent / "config"
        assert loader.load_config().selector.display_limit == 6

        catalog = loader.load_catalog()
        assert len(catalog) == 15
        assert catalog.get("14").name == "Wisdom Tooth"


class TestCatalogLoading:
    def test_fallback_to_builtin(self, loader):
        assert len(loader.load_catalog()) == 15

    def test_custom_catalog(self, tmp_path, loader):
        (tmp_path / "categories.yaml").write_text(
            "categories:\n"
            "  - {_id: a, name: Scaling, baseCost: 1200}\n"
            "  - {_id: b, name: Sealant, baseCost: 650.5, description: Pit and fissure sealant}\n",
            encoding="utf-8"
        )
        catalog = loader.load_catalog()
        assert [c.id for c in catalog] == ["a", "b"]
        assert str(catalog.get("b").base_cost) == "650.50"

    def test_invalid_record(self, tmp_path, loader):
        (tmp_path / "categories.yaml").write_text(
            "categories:\n  - {_id: a, baseCost: 1200}\n", encoding="utf-8"
        )
        with pytest.raises(MissingDataError):
            loader.load_catalog()


class TestConfigValidator:
    """Test parameter validation rules."""

    def test_default_config_valid(self, loader):
        assert ConfigValidator.validate_config(loader.merge_config()) == []

    def test_stepper_bounds(self):
        errors = ConfigValidator.validate_stepper_params({"min_value": 10, "max_value": 5})
        assert [e.field for e in errors] == ["max_value"]

    @pytest.mark.parametrize("value", [0, -150, 1.5, "150", True])
    def test_repeat_interval(self, value):
        errors = ConfigValidator.validate_stepper_params({"repeat_interval_ms": value})
        assert errors and errors[0].field == "repeat_interval_ms"

    def test_display_limit(self):
        assert ConfigValidator.validate_selector_params({"display_limit": 0})
        assert ConfigValidator.validate_selector_params({"display_limit": 6}) == []

    def test_default_quantity_within_bounds(self):
        errors = ConfigValidator.validate_ledger_params(
            {"min_quantity": 1, "max_quantity": 20, "default_quantity": 25}
        )
        assert [e.field for e in errors] == ["default_quantity"]

    def test_money_places(self):
        assert ConfigValidator.validate_ledger_params({"money_places": 7})

    def test_plan_status(self):
        errors = ConfigValidator.validate_plan_params({"default_status": "in-progress"})
        assert errors[0].field == "default_status"

    def test_stepper_bounds_within_ledger_bounds(self, loader):
        errors = ConfigValidator.validate_config(
            loader.merge_config({"ledger": {"max_quantity": 10}})
        )
        assert [(e.field, e.value) for e in errors] == [("stepper.max_value", 20)]

        errors = ConfigValidator.validate_config(
            loader.merge_config({"ledger": {"min_quantity": 2, "default_quantity": 2}})
        )
        assert [e.field for e in errors] == ["stepper.min_value"]

    def test_matching_bounds_load(self, loader):
        config = loader.load_config({
            "ledger": {"max_quantity": 10},
            "stepper": {"max_value": 10},
        })
        assert config.stepper.max_value == config.ledger.max_quantity == 10

    def test_unknown_keys_and_sections(self):
        errors = ConfigValidator.validate_config({
            "stepper": {"hold_ms": 10},
            "theme": {"dark": True},
            "selector": 6,
        })
        fields = {e.field for e in errors}
        assert fields == {"stepper.hold_ms", "theme", "selector"}
