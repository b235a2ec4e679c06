"""Domain records for the life cost calculators."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

PayType = Literal["annual", "hourly"]
TimeUnit = Literal["minutes", "hours", "days"]
Frequency = Literal["once", "weekly", "fortnightly", "monthly"]
Duration = Literal["4weeks", "8weeks", "12weeks", "6months", "ongoing"]
EnergyLevel = Literal["light", "medium", "heavy"]
FrictionCategory = Literal[
    "admin_drag",
    "schedule_overload",
    "environment_friction",
    "people_drain",
    "health_drag",
    "digital_noise",
]

# Declaration order doubles as the tie-break order for friction rankings.
FRICTION_CATEGORIES: Tuple[FrictionCategory, ...] = (
    "admin_drag",
    "schedule_overload",
    "environment_friction",
    "people_drain",
    "health_drag",
    "digital_noise",
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _Record:
    """Mixin mapping snake_case fields to the camelCase keys used on disk."""

    def to_dict(self) -> Dict[str, Any]:
        return {_camel(k): v for k, v in asdict(self).items()}  # type: ignore[call-overload]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build a record from a stored mapping; unknown keys are ignored and
        missing keys fall back to the dataclass defaults."""
        kwargs = {}
        for f in fields(cls):  # type: ignore[arg-type]
            key = _camel(f.name)
            if key in data:
                kwargs[f.name] = data[key]
            elif f.name in data:
                kwargs[f.name] = data[f.name]
        return cls(**kwargs)


@dataclass(frozen=True)
class SalaryInputs(_Record):
    """Raw salary form values. Numeric fields stay text until calculation."""

    pay_type: PayType = "annual"
    annual_salary: str = "75000"
    hourly_rate: str = "35"
    paid_hours_week: str = "38"
    contract_hours_week: str = "38"
    actual_hours_week: str = "45"
    commute_minutes_day: str = "30"
    commute_days_week: str = "5"
    after_hours_minutes_day: str = "30"
    after_hours_days_week: str = "3"
    monthly_work_expenses: str = "200"
    childcare_cost_week: str = ""
    recovery_hours_week: float = 2


@dataclass(frozen=True)
class SalaryResults(_Record):
    """Weekly figures derived from :class:`SalaryInputs`."""

    commute_hours_week: float
    after_hours_week: float
    total_work_time_week: float
    gross_pay_week: float
    costs_week: float
    net_after_costs_week: float
    true_hourly_rate: float
    donated_overtime_hours: float
    on_paper_hourly: float


@dataclass(frozen=True)
class TimeCostInputs(_Record):
    commitment_name: str = ""
    base_time_value: str = "1"
    base_time_unit: TimeUnit = "hours"
    hidden_time_value: str = "15"
    hidden_time_unit: TimeUnit = "minutes"
    frequency: Frequency = "weekly"
    duration: Duration = "ongoing"
    energy_level: EnergyLevel = "medium"
    hourly_value: str = ""
    show_money_cost: bool = False


@dataclass(frozen=True)
class TimeCostResults(_Record):
    """Monthly and one-off totals for a commitment.

    ``money_cost_month`` and ``money_cost_one_off`` are ``None`` when the money
    view is switched off or no hourly value is set, which is distinct from a
    computed cost of zero.
    """

    total_minutes_per_occurrence: float
    time_minutes_month: float
    recovery_minutes_month: float
    total_minutes_month: float
    hours_month: float
    days_month: float
    weekends_month: float
    money_cost_month: Optional[float]
    is_one_off: bool
    total_hours_one_off: float
    total_days_one_off: float
    total_weekends_one_off: float
    money_cost_one_off: Optional[float]


@dataclass(frozen=True)
class FrictionInputs(_Record):
    """Six 0-10 friction sliders plus the minutes they cost per day."""

    admin_drag: int = 3
    schedule_overload: int = 4
    environment_friction: int = 2
    people_drain: int = 3
    health_drag: int = 2
    digital_noise: int = 5
    daily_minutes_lost: int = 45


@dataclass(frozen=True)
class CategoryAllocation(_Record):
    category: FrictionCategory
    score: float
    proportion: float
    minutes_per_day: float
    minutes_per_week: float


@dataclass(frozen=True)
class FrictionResults(_Record):
    allocations: Tuple[CategoryAllocation, ...]
    highest_category: FrictionCategory
    highest_category_label: str
    leverage_category: FrictionCategory
    next_move: str
    insight: str
    friction_score: float
    yearly_hours_lost: float
    yearly_days_lost: float

    def allocation_for(self, category: FrictionCategory) -> CategoryAllocation:
        for alloc in self.allocations:
            if alloc.category == category:
                return alloc
        raise KeyError(category)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["allocations"] = [alloc.to_dict() for alloc in self.allocations]
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FrictionResults":
        raw = dict(data)
        raw["allocations"] = tuple(
            CategoryAllocation.from_dict(item) for item in raw.get("allocations", ())
        )
        return super().from_dict(raw)


@dataclass
class StoredRecord:
    """One persisted calculator document: inputs, results and any UI flags."""

    inputs: Dict[str, Any]
    results: Dict[str, Any]
    flags: Dict[str, Any] = field(default_factory=dict)
    schema_version: int = 2

    def to_document(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "schemaVersion": self.schema_version,
            "inputs": self.inputs,
            "results": self.results,
        }
        doc.update(self.flags)
        return doc

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "StoredRecord":
        flags = {k: v for k, v in doc.items() if k not in ("schemaVersion", "inputs", "results")}
        return cls(
            inputs=dict(doc.get("inputs") or {}),
            results=dict(doc.get("results") or {}),
            flags=flags,
            schema_version=int(doc.get("schemaVersion", 1)),
        )
