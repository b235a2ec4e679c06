import pytest

from truecost_core.models import FrictionInputs, SalaryInputs, TimeCostInputs
from truecost_core.storage import MemoryBackend, PersistenceStore


@pytest.fixture
def salary_inputs() -> SalaryInputs:
    """Annual salary worked example used across unit tests."""
    return SalaryInputs(
        pay_type="annual",
        annual_salary="75000",
        contract_hours_week="38",
        actual_hours_week="45",
        commute_minutes_day="30",
        commute_days_week="5",
        after_hours_minutes_day="30",
        after_hours_days_week="3",
        monthly_work_expenses="200",
        childcare_cost_week="0",
        recovery_hours_week=2,
    )


@pytest.fixture
def time_cost_inputs() -> TimeCostInputs:
    return TimeCostInputs()


@pytest.fixture
def friction_inputs() -> FrictionInputs:
    return FrictionInputs()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> PersistenceStore:
    return PersistenceStore(backend)


class FakeClock:
    """Monotonic seconds source the tests advance by hand."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
