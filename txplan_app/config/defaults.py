"""Default configuration parameters for the treatment plan builder."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StepperParams:
    """Press-and-hold stepper parameters."""
    min_value: int = 1
    max_value: int = 20
    arm_delay_ms: int = 500                 # Hold duration before auto-repeat starts
    repeat_interval_ms: int = 150           # Auto-repeat tick interval


@dataclass(frozen=True)
class SelectorParams:
    """Category selector parameters."""
    display_limit: int = 6                  # Categories shown before "show all"


@dataclass(frozen=True)
class LedgerParams:
    """Cost ledger parameters."""
    min_quantity: int = 1
    max_quantity: int = 20
    default_quantity: int = 1
    money_places: int = 2                   # Fixed-point decimal places


@dataclass(frozen=True)
class CurrencyParams:
    """Currency display parameters."""
    symbol: str = "₹"


@dataclass(frozen=True)
class PlanParams:
    """Plan draft parameters."""
    default_status: str = "pending"
    id_prefix: str = "plan_"


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    stepper: StepperParams
    selector: SelectorParams
    ledger: LedgerParams
    currency: CurrencyParams
    plan: PlanParams


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        stepper=StepperParams(),
        selector=SelectorParams(),
        ledger=LedgerParams(),
        currency=CurrencyParams(),
        plan=PlanParams(),
    )
