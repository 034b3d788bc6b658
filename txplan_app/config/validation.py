"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import (
    CurrencyParams,
    LedgerParams,
    PlanParams,
    SelectorParams,
    StepperParams,
)

_SECTIONS = {
    "stepper": StepperParams,
    "selector": SelectorParams,
    "ledger": LedgerParams,
    "currency": CurrencyParams,
    "plan": PlanParams,
}

_PLAN_STATUSES = ("pending", "in_progress", "completed", "cancelled")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_unknown_keys(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Reject keys that the section's dataclass does not define."""
        known = {f.name for f in fields(_SECTIONS[section])}
        return [
            ValidationError(
                field=f"{section}.{key}",
                message="Unknown configuration key",
                value=params[key]
            )
            for key in params
            if key not in known
        ]

    @staticmethod
    def validate_stepper_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate stepper parameters."""
        errors = []

        for name in ("min_value", "max_value"):
            if name in params and not _is_int(params[name]):
                errors.append(ValidationError(
                    field=name,
                    message="Must be an integer",
                    value=params[name]
                ))

        min_value = params.get("min_value")
        max_value = params.get("max_value")
        if _is_int(min_value) and _is_int(max_value) and min_value > max_value:
            errors.append(ValidationError(
                field="max_value",
                message="Must be greater than or equal to min_value",
                value=max_value
            ))

        for name in ("arm_delay_ms", "repeat_interval_ms"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_selector_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate selector parameters."""
        errors = []

        if "display_limit" in params:
            value = params["display_limit"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="display_limit",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_ledger_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate ledger parameters."""
        errors = []

        for name in ("min_quantity", "max_quantity", "default_quantity"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value < 1:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        lo = params.get("min_quantity")
        hi = params.get("max_quantity")
        default = params.get("default_quantity")
        if _is_int(lo) and _is_int(hi):
            if lo > hi:
                errors.append(ValidationError(
                    field="max_quantity",
                    message="Must be greater than or equal to min_quantity",
                    value=hi
                ))
            elif _is_int(default) and not lo <= default <= hi:
                errors.append(ValidationError(
                    field="default_quantity",
                    message="Must lie within [min_quantity, max_quantity]",
                    value=default
                ))

        if "money_places" in params:
            value = params["money_places"]
            if not _is_int(value) or value < 0 or value > 6:
                errors.append(ValidationError(
                    field="money_places",
                    message="Must be an integer between 0 and 6",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_currency_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate currency parameters."""
        errors = []

        if "symbol" in params and not isinstance(params["symbol"], str):
            errors.append(ValidationError(
                field="symbol",
                message="Must be a string",
                value=params["symbol"]
            ))

        return errors

    @staticmethod
    def validate_plan_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate plan parameters."""
        errors = []

        if "default_status" in params and params["default_status"] not in _PLAN_STATUSES:
            errors.append(ValidationError(
                field="default_status",
                message=f"Must be one of {', '.join(_PLAN_STATUSES)}",
                value=params["default_status"]
            ))

        if "id_prefix" in params and not isinstance(params["id_prefix"], str):
            errors.append(ValidationError(
                field="id_prefix",
                message="Must be a string",
                value=params["id_prefix"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        for section in config:
            if section not in _SECTIONS:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=config[section]
                ))

        validators = {
            "stepper": ConfigValidator.validate_stepper_params,
            "selector": ConfigValidator.validate_selector_params,
            "ledger": ConfigValidator.validate_ledger_params,
            "currency": ConfigValidator.validate_currency_params,
            "plan": ConfigValidator.validate_plan_params,
        }

        for section, validate in validators.items():
            if section not in config:
                continue
            params = config[section]
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(ConfigValidator.validate_unknown_keys(section, params))
            errors.extend(validate(params))

        errors.extend(ConfigValidator.validate_quantity_bounds(config))

        return errors

    @staticmethod
    def validate_quantity_bounds(config: dict[str, Any]) -> list[ValidationError]:
        """Stepper bounds must lie within the ledger's quantity bounds."""
        stepper = config.get("stepper")
        ledger = config.get("ledger")
        if not isinstance(stepper, dict) or not isinstance(ledger, dict):
            return []

        errors = []

        lo = ledger.get("min_quantity")
        min_value = stepper.get("min_value")
        if _is_int(lo) and _is_int(min_value) and min_value < lo:
            errors.append(ValidationError(
                field="stepper.min_value",
                message="Must be greater than or equal to ledger.min_quantity",
                value=min_value
            ))

        hi = ledger.get("max_quantity")
        max_value = stepper.get("max_value")
        if _is_int(hi) and _is_int(max_value) and max_value > hi:
            errors.append(ValidationError(
                field="stepper.max_value",
                message="Must be less than or equal to ledger.max_quantity",
                value=max_value
            ))

        return errors
