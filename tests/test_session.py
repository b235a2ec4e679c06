import json
import math
from datetime import datetime, timezone
from pathlib import Path

import pytest

from truecost_core.lookup import NO_SAVED_RATE_HINT
from truecost_core.migration import FRICTION_KEY, SALARY_KEY, TIME_COST_KEY
from truecost_core.models import FrictionInputs, SalaryInputs, TimeCostInputs
from truecost_core.notes import FRICTION_CALCULATOR, SALARY_CALCULATOR, TIME_COST_CALCULATOR, daily_note
from truecost_core.policy import DEFAULT_POLICY
from truecost_core.session import FrictionSession, SalarySession, TimeCostSession, open_calculators
from truecost_core.storage import MemoryBackend, PersistenceStore, UnavailableBackend


def test_salary_session_starts_from_defaults(store: PersistenceStore) -> None:
    session = SalarySession(store)

    assert session.inputs == SalaryInputs()
    assert session.saved_as_default is False
    assert store.load(SALARY_KEY) is None


def test_salary_session_persists_every_change(store: PersistenceStore) -> None:
    session = SalarySession(store)
    results = session.update(actual_hours_week="50")

    saved = store.load(SALARY_KEY)
    assert saved["inputs"]["actualHoursWeek"] == "50"
    assert saved["results"]["trueHourlyRate"] == pytest.approx(results.true_hourly_rate)
    assert saved["savedAsDefault"] is False

    reopened = SalarySession(store)
    assert reopened.inputs.actual_hours_week == "50"
    assert reopened.results == results


def test_salary_reset_respects_saved_as_default(store: PersistenceStore) -> None:
    session = SalarySession(store)
    session.update(annual_salary="90000")
    assert session.toggle_saved_as_default() is True

    session.reset()
    assert session.inputs.annual_salary == "90000"
    assert store.load(SALARY_KEY)["savedAsDefault"] is True

    session.toggle_saved_as_default()
    session.reset()
    assert session.inputs == SalaryInputs()


def test_salary_session_copy_raises_flag(store: PersistenceStore, clock) -> None:
    session = SalarySession(store, clock=clock)
    text = session.copy_summary("AUD")

    assert text.startswith("Salary Reality Summary")
    assert session.copied.active
    clock.advance(3)
    assert not session.copied.active


def test_session_without_storage_still_calculates() -> None:
    session = SalarySession(PersistenceStore(UnavailableBackend()))
    results = session.update(commute_minutes_day="60")
    assert math.isclose(results.commute_hours_week, 5.0)


def test_time_cost_session_loads_legacy_record() -> None:
    legacy = {"inputs": {"baseTimeMinutes": "30", "hiddenTimeMinutes": "10", "frequency": "weekly"}, "results": {}}
    store = PersistenceStore(MemoryBackend({TIME_COST_KEY: json.dumps(legacy)}))
    session = TimeCostSession(store)

    assert session.inputs.base_time_value == "30"
    assert session.inputs.base_time_unit == "minutes"
    assert session.inputs.hidden_time_unit == "minutes"
    assert math.isclose(session.results.total_minutes_per_occurrence, 40.0)


def test_time_cost_session_replaces_unknown_choices() -> None:
    doc = {"inputs": {"baseTimeUnit": "fortnights", "frequency": "hourly", "baseTimeValue": "2"}, "results": {}}
    store = PersistenceStore(MemoryBackend({TIME_COST_KEY: json.dumps(doc)}))
    session = TimeCostSession(store)

    defaults = TimeCostInputs()
    assert session.inputs.base_time_unit == defaults.base_time_unit
    assert session.inputs.frequency == defaults.frequency
    assert session.inputs.base_time_value == "2"


def test_use_true_rate_without_salary_record_shows_hint(store: PersistenceStore, clock) -> None:
    session = TimeCostSession(store, clock=clock)

    assert session.use_true_rate() is None
    assert session.rate_hint.active
    assert session.rate_hint.message == NO_SAVED_RATE_HINT
    assert session.inputs.show_money_cost is False

    clock.advance(4)
    assert not session.rate_hint.active


def test_use_true_rate_copies_salary_rate(store: PersistenceStore, salary_inputs: SalaryInputs) -> None:
    salary = SalarySession(store)
    salary.update(**vars(salary_inputs))

    session = TimeCostSession(store)
    rate = session.use_true_rate()

    assert rate == pytest.approx(salary.results.true_hourly_rate)
    assert session.inputs.hourly_value == f"{rate:.2f}"
    assert session.inputs.show_money_cost is True
    assert session.results.money_cost_month == pytest.approx(session.results.hours_month * float(f"{rate:.2f}"))
    assert store.load(TIME_COST_KEY)["inputs"]["showMoneyCost"] is True


def test_time_cost_reset_clears_hint(store: PersistenceStore) -> None:
    session = TimeCostSession(store)
    session.update(commitment_name="Board meeting")
    session.use_true_rate()

    session.reset()
    assert session.inputs == TimeCostInputs()
    assert not session.rate_hint.active


def test_friction_session_round_trip(store: PersistenceStore) -> None:
    session = FrictionSession(store)
    results = session.update(people_drain=9, daily_minutes_lost=90)

    assert results.highest_category == "people_drain"
    saved = store.load(FRICTION_KEY)
    assert saved["results"]["highestCategory"] == "people_drain"
    assert len(saved["results"]["allocations"]) == 6

    reopened = FrictionSession(store)
    assert reopened.inputs.people_drain == 9
    assert reopened.results.highest_category == "people_drain"
    assert sum(a.minutes_per_day for a in reopened.results.allocations) == pytest.approx(90)

    reopened.reset()
    assert reopened.inputs == FrictionInputs()


@pytest.mark.parametrize("junk", ["abc", math.nan])
def test_friction_session_saves_unreadable_slider(store: PersistenceStore, junk) -> None:
    results = FrictionSession(store).update(admin_drag=junk)

    assert results.allocation_for("admin_drag").minutes_per_day == 0
    saved = store.load(FRICTION_KEY)
    assert saved is not None
    assert saved["results"]["allocations"][0]["score"] == 0
    assert FrictionSession(store).results == results


def _sydney_new_year():
    return datetime(2024, 12, 31, 14, 0, tzinfo=timezone.utc)


def test_sessions_show_their_own_daily_note(store: PersistenceStore) -> None:
    assert SalarySession(store).daily_note(_sydney_new_year) == daily_note(SALARY_CALCULATOR, 1)
    assert TimeCostSession(store).daily_note(_sydney_new_year) == daily_note(TIME_COST_CALCULATOR, 1)
    assert FrictionSession(store).daily_note(_sydney_new_year) == daily_note(FRICTION_CALCULATOR, 1)


def test_open_calculators_applies_config(store: PersistenceStore, tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("policy:\n  note_timezone: UTC\n  leverage_lead_threshold: 5\n", encoding="utf-8")

    calculators = open_calculators(store, str(path))

    assert calculators.friction.policy.leverage_lead_threshold == 5
    assert calculators.salary.policy is calculators.time_cost.policy
    assert calculators.friction.daily_note(_sydney_new_year) == daily_note(FRICTION_CALCULATOR, 366)
    assert calculators.friction.update(admin_drag=5, people_drain=9).leverage_category == "admin_drag"


def test_open_calculators_with_shipped_config(store: PersistenceStore) -> None:
    path = Path(__file__).resolve().parent.parent / "config.yaml"
    calculators = open_calculators(store, str(path))

    assert calculators.time_cost.policy == DEFAULT_POLICY
    assert calculators.salary.daily_note(_sydney_new_year) == daily_note(SALARY_CALCULATOR, 1)


def test_open_calculators_without_config_uses_defaults(store: PersistenceStore, tmp_path) -> None:
    calculators = open_calculators(store, str(tmp_path / "missing.yaml"))
    assert calculators.friction.policy is DEFAULT_POLICY
