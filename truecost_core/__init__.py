"""Core math and persistence for the life cost calculators."""

from .models import (
    FRICTION_CATEGORIES,
    CategoryAllocation,
    FrictionInputs,
    FrictionResults,
    SalaryInputs,
    SalaryResults,
    StoredRecord,
    TimeCostInputs,
    TimeCostResults,
)
from .conversions import ConversionError, parse_non_negative, parse_number, to_minutes
from .policy import DEFAULT_POLICY, ConfigError, Policy, load_policy
from .engine import (
    calculate_friction,
    calculate_salary,
    calculate_time_cost,
    totals_over_duration,
)
from .migration import (
    CURRENT_SCHEMA_VERSION,
    FRICTION_KEY,
    SALARY_KEY,
    TIME_COST_KEY,
    is_legacy_time_cost,
    migrate_time_cost_inputs,
    upgrade_record,
)
from .storage import (
    JsonFileBackend,
    MemoryBackend,
    PersistenceStore,
    QSettingsBackend,
    UnavailableBackend,
)
from .lookup import load_true_hourly_rate
from .currency import format_currency
from .session import Calculators, FrictionSession, SalarySession, TimeCostSession, open_calculators

__all__ = [
    "FRICTION_CATEGORIES",
    "CategoryAllocation",
    "FrictionInputs",
    "FrictionResults",
    "SalaryInputs",
    "SalaryResults",
    "StoredRecord",
    "TimeCostInputs",
    "TimeCostResults",
    "ConversionError",
    "parse_number",
    "parse_non_negative",
    "to_minutes",
    "DEFAULT_POLICY",
    "ConfigError",
    "Policy",
    "load_policy",
    "calculate_salary",
    "calculate_time_cost",
    "calculate_friction",
    "totals_over_duration",
    "CURRENT_SCHEMA_VERSION",
    "SALARY_KEY",
    "TIME_COST_KEY",
    "FRICTION_KEY",
    "is_legacy_time_cost",
    "migrate_time_cost_inputs",
    "upgrade_record",
    "JsonFileBackend",
    "MemoryBackend",
    "PersistenceStore",
    "QSettingsBackend",
    "UnavailableBackend",
    "load_true_hourly_rate",
    "format_currency",
    "SalarySession",
    "TimeCostSession",
    "FrictionSession",
    "Calculators",
    "open_calculators",
]
