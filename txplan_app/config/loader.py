"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.catalog import CategoryCatalog, default_catalog
from ..errors import MalformedDataError
from .defaults import (
    AppConfig,
    CurrencyParams,
    LedgerParams,
    PlanParams,
    SelectorParams,
    StepperParams,
    get_default_config,
)
from .validation import ConfigValidator

SETTINGS_FILE = "settings.yaml"
CATEGORIES_FILE = "categories.yaml"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: AppConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise MalformedDataError(
                f"{filename} must contain a mapping",
                raw_data=str(data)[:200],
                expected_format="mapping",
                context={"path": str(path)}
            )
        return data

    def load_settings(self) -> dict[str, Any]:
        """Load site-level setting overrides from settings.yaml."""
        return self._read_yaml(SETTINGS_FILE)

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. settings.yaml in the config directory
        3. Built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_settings())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load_config(self, overrides: Optional[dict[str, Any]] = None) -> AppConfig:
        """
        Merge and validate configuration into a typed AppConfig.

        Raises:
            MalformedDataError: If any merged parameter fails validation
        """
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            raise MalformedDataError(
                f"Invalid configuration: {errors[0].field}: {errors[0].message}",
                context={"errors": [(e.field, e.message, e.value) for e in errors]}
            )

        return AppConfig(
            stepper=StepperParams(**merged["stepper"]),
            selector=SelectorParams(**merged["selector"]),
            ledger=LedgerParams(**merged["ledger"]),
            currency=CurrencyParams(**merged["currency"]),
            plan=PlanParams(**merged["plan"]),
        )

    def load_catalog(self) -> CategoryCatalog:
        """Load the category catalog from categories.yaml, or the built-in one."""
        data = self._read_yaml(CATEGORIES_FILE)
        records = data.get("categories")

        if not records:
            return default_catalog()

        return CategoryCatalog.from_records(records)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
