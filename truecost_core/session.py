"""Calculator sessions: hold inputs, recompute on change, persist the pair."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, get_args

from .currency import DEFAULT_CURRENCY
from .engine import calculate_friction, calculate_salary, calculate_time_cost
from .lookup import NO_SAVED_RATE_HINT, load_true_hourly_rate
from .migration import FRICTION_KEY, SALARY_KEY, TIME_COST_KEY
from .models import (
    Duration,
    EnergyLevel,
    Frequency,
    FrictionInputs,
    FrictionResults,
    PayType,
    SalaryInputs,
    SalaryResults,
    TimeCostInputs,
    TimeCostResults,
    TimeUnit,
)
from .notes import FRICTION_CALCULATOR, SALARY_CALCULATOR, TIME_COST_CALCULATOR, Clock, note_for_today, utc_now
from .policy import DEFAULT_POLICY, Policy, load_policy
from .storage import PersistenceStore
from .summary import CopyAcknowledgement, friction_summary, salary_summary, time_cost_summary

logger = logging.getLogger(__name__)

_SALARY_CHOICES: Dict[str, tuple] = {"pay_type": get_args(PayType)}
_TIME_COST_CHOICES: Dict[str, tuple] = {
    "base_time_unit": get_args(TimeUnit),
    "hidden_time_unit": get_args(TimeUnit),
    "frequency": get_args(Frequency),
    "duration": get_args(Duration),
    "energy_level": get_args(EnergyLevel),
}


def _restore_choices(record: Any, defaults: Any, choices: Mapping[str, tuple], key: str) -> Any:
    """Replace stored enum values the calculators do not know with defaults."""
    fixes = {}
    for name, allowed in choices.items():
        if getattr(record, name) not in allowed:
            logger.warning("%s: unknown %s %r in stored inputs; using default", key, name, getattr(record, name))
            fixes[name] = getattr(defaults, name)
    return replace(record, **fixes) if fixes else record


def _storable(inputs: Dict[str, Any]) -> Dict[str, Any]:
    # JSON has no NaN or infinity; the engines read null as zero.
    return {k: None if isinstance(v, float) and not math.isfinite(v) else v for k, v in inputs.items()}


class _Session:
    key = ""
    calculator_id = SALARY_CALCULATOR

    def __init__(
        self,
        store: PersistenceStore,
        policy: Policy = DEFAULT_POLICY,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.policy = policy
        self.copied = CopyAcknowledgement(policy.copied_flag_seconds, clock)
        self.stored = store.load(self.key)

    def _flags(self) -> Dict[str, Any]:
        return {}

    def _persist(self) -> bool:
        return self.store.save(self.key, _storable(self.inputs.to_dict()), self.results.to_dict(), **self._flags())

    def _set_inputs(self, inputs: Any) -> None:
        self.inputs = inputs
        self.results = self._calculate(inputs)
        self._persist()

    def _calculate(self, inputs: Any) -> Any:
        raise NotImplementedError

    def update(self, **changes: Any):
        """Apply field changes, recompute and save. Returns the new results."""
        self._set_inputs(replace(self.inputs, **changes))
        return self.results

    def copy_summary(self, currency: str = DEFAULT_CURRENCY) -> str:
        text = self.summary(currency)
        self.copied.trigger("Copied!")
        return text

    def summary(self, currency: str = DEFAULT_CURRENCY) -> str:
        raise NotImplementedError

    def daily_note(self, now: Clock = utc_now) -> str:
        return note_for_today(self.calculator_id, self.policy, now)


class SalarySession(_Session):
    key = SALARY_KEY
    calculator_id = SALARY_CALCULATOR

    inputs: SalaryInputs
    results: SalaryResults

    def __init__(self, store: PersistenceStore, policy: Policy = DEFAULT_POLICY, clock=time.monotonic) -> None:
        super().__init__(store, policy, clock)
        self.saved_as_default = False
        inputs = SalaryInputs()
        if self.stored is not None:
            inputs = _restore_choices(SalaryInputs.from_dict(self.stored["inputs"]), inputs, _SALARY_CHOICES, self.key)
            self.saved_as_default = bool(self.stored.get("savedAsDefault", False))
        self.inputs = inputs
        self.results = self._calculate(inputs)

    def _calculate(self, inputs: SalaryInputs) -> SalaryResults:
        return calculate_salary(inputs)

    def _flags(self) -> Dict[str, Any]:
        return {"savedAsDefault": self.saved_as_default}

    def reset(self) -> SalaryResults:
        """Restore default inputs unless the current ones were saved as default."""
        if not self.saved_as_default:
            self._set_inputs(SalaryInputs())
        return self.results

    def toggle_saved_as_default(self) -> bool:
        self.saved_as_default = not self.saved_as_default
        self._persist()
        return self.saved_as_default

    def summary(self, currency: str = DEFAULT_CURRENCY) -> str:
        return salary_summary(self.inputs, self.results, currency)


class TimeCostSession(_Session):
    key = TIME_COST_KEY
    calculator_id = TIME_COST_CALCULATOR

    inputs: TimeCostInputs
    results: TimeCostResults

    def __init__(self, store: PersistenceStore, policy: Policy = DEFAULT_POLICY, clock=time.monotonic) -> None:
        super().__init__(store, policy, clock)
        self.rate_hint = CopyAcknowledgement(policy.rate_hint_seconds, clock)
        inputs = TimeCostInputs()
        if self.stored is not None:
            inputs = _restore_choices(
                TimeCostInputs.from_dict(self.stored["inputs"]), inputs, _TIME_COST_CHOICES, self.key
            )
        self.inputs = inputs
        self.results = self._calculate(inputs)

    def _calculate(self, inputs: TimeCostInputs) -> TimeCostResults:
        return calculate_time_cost(inputs, self.policy)

    def reset(self) -> TimeCostResults:
        self.rate_hint.clear()
        self._set_inputs(TimeCostInputs())
        return self.results

    def use_true_rate(self) -> Optional[float]:
        """Copy the salary calculator's true hourly rate into this commitment.

        Returns the rate, or None after raising the "no saved rate" hint.
        """

        rate = load_true_hourly_rate(self.store)
        if rate is None:
            self.rate_hint.trigger(NO_SAVED_RATE_HINT)
            return None
        self.rate_hint.clear()
        self.update(hourly_value=f"{rate:.2f}", show_money_cost=True)
        return rate

    def summary(self, currency: str = DEFAULT_CURRENCY) -> str:
        return time_cost_summary(self.inputs, self.results, currency)


class FrictionSession(_Session):
    key = FRICTION_KEY
    calculator_id = FRICTION_CALCULATOR

    inputs: FrictionInputs
    results: FrictionResults

    def __init__(self, store: PersistenceStore, policy: Policy = DEFAULT_POLICY, clock=time.monotonic) -> None:
        super().__init__(store, policy, clock)
        inputs = FrictionInputs()
        if self.stored is not None:
            inputs = FrictionInputs.from_dict(self.stored["inputs"])
        self.inputs = inputs
        self.results = self._calculate(inputs)

    def _calculate(self, inputs: FrictionInputs) -> FrictionResults:
        return calculate_friction(inputs, self.policy)

    def reset(self) -> FrictionResults:
        self._set_inputs(FrictionInputs())
        return self.results

    def summary(self, currency: str = DEFAULT_CURRENCY) -> str:
        return friction_summary(self.results)


@dataclass(frozen=True)
class Calculators:
    salary: SalarySession
    time_cost: TimeCostSession
    friction: FrictionSession


def open_calculators(
    store: PersistenceStore,
    config_path: Optional[str] = "config.yaml",
    clock: Callable[[], float] = time.monotonic,
) -> Calculators:
    """Restore all three calculators from ``store`` under the policy in
    ``config_path``. A missing config file means the default policy."""

    policy = load_policy(config_path)
    logger.debug("opening calculators with note timezone %s", policy.note_timezone)
    return Calculators(
        salary=SalarySession(store, policy, clock),
        time_cost=TimeCostSession(store, policy, clock),
        friction=FrictionSession(store, policy, clock),
    )
