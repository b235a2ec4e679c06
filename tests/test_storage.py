import json
import math

import pytest

from truecost_core.engine import calculate_salary
from truecost_core.migration import CURRENT_SCHEMA_VERSION, SALARY_KEY, TIME_COST_KEY
from truecost_core.models import SalaryInputs
from truecost_core.storage import (
    JsonFileBackend,
    MemoryBackend,
    PersistenceStore,
    QSettingsBackend,
    UnavailableBackend,
)


def _salary_pair():
    inputs = SalaryInputs()
    return inputs.to_dict(), calculate_salary(inputs).to_dict()


def test_save_then_load_round_trips(store: PersistenceStore) -> None:
    inputs, results = _salary_pair()
    assert store.save(SALARY_KEY, inputs, results, savedAsDefault=True)

    loaded = store.load(SALARY_KEY)
    assert loaded == {
        "schemaVersion": CURRENT_SCHEMA_VERSION,
        "inputs": inputs,
        "results": results,
        "savedAsDefault": True,
    }


def test_save_of_loaded_record_is_idempotent(store: PersistenceStore, backend: MemoryBackend) -> None:
    inputs, results = _salary_pair()
    store.save(SALARY_KEY, inputs, results, savedAsDefault=False)
    first = backend.get_item(SALARY_KEY)

    record = store.load_record(SALARY_KEY)
    store.save(SALARY_KEY, record.inputs, record.results, **record.flags)

    assert json.loads(backend.get_item(SALARY_KEY)) == json.loads(first)


def test_load_missing_key_is_none(store: PersistenceStore) -> None:
    assert store.load("truecost.nothing") is None
    assert store.load_record("truecost.nothing") is None


@pytest.mark.parametrize(
    "raw",
    ["{not json", "[]", '{"results": {}}', '{"inputs": 5}', "", "[" * 200000 + "]" * 200000],
)
def test_load_ignores_unusable_documents(raw: str) -> None:
    store = PersistenceStore(MemoryBackend({SALARY_KEY: raw}))
    assert store.load(SALARY_KEY) is None


def test_load_migrates_legacy_time_cost_record() -> None:
    legacy = {"inputs": {"baseTimeMinutes": "30", "hiddenTimeMinutes": "10", "frequency": "weekly"}, "results": {}}
    store = PersistenceStore(MemoryBackend({TIME_COST_KEY: json.dumps(legacy)}))

    loaded = store.load(TIME_COST_KEY)
    assert loaded["inputs"]["baseTimeValue"] == "30"
    assert loaded["inputs"]["hiddenTimeUnit"] == "minutes"
    assert loaded["schemaVersion"] == CURRENT_SCHEMA_VERSION


def test_unavailable_storage_never_raises() -> None:
    store = PersistenceStore(UnavailableBackend())
    inputs, results = _salary_pair()

    assert store.save(SALARY_KEY, inputs, results) is False
    assert store.load(SALARY_KEY) is None
    assert store.get_text("truecost.currency") is None
    assert store.set_text("truecost.currency", "USD") is False


def test_unserialisable_values_are_dropped(store: PersistenceStore, backend: MemoryBackend) -> None:
    assert store.save(SALARY_KEY, {"x": object()}, {}) is False
    assert store.save(SALARY_KEY, {}, {"rate": math.nan}) is False
    assert SALARY_KEY not in backend


def test_json_file_backend_round_trip(tmp_path) -> None:
    path = tmp_path / "nested" / "truecost.json"
    store = PersistenceStore(JsonFileBackend(str(path)))
    inputs, results = _salary_pair()

    assert store.save(SALARY_KEY, inputs, results)
    assert store.set_text("truecost.currency", "GBP")

    reopened = PersistenceStore(JsonFileBackend(str(path)))
    assert reopened.load(SALARY_KEY)["results"] == results
    assert reopened.get_text("truecost.currency") == "GBP"

    reopened.backend.remove_item("truecost.currency")
    assert reopened.get_text("truecost.currency") is None


def test_json_file_backend_corrupt_file_is_treated_as_empty(tmp_path) -> None:
    path = tmp_path / "truecost.json"
    path.write_text("{broken", encoding="utf-8")
    store = PersistenceStore(JsonFileBackend(str(path)))
    inputs, results = _salary_pair()

    assert store.load(SALARY_KEY) is None
    assert store.save(SALARY_KEY, inputs, results) is False
    assert path.read_text(encoding="utf-8") == "{broken"


def test_qsettings_backend_round_trip(tmp_path) -> None:
    pytest.importorskip("PyQt5.QtCore")
    backend = QSettingsBackend(path=str(tmp_path / "truecost.ini"))
    store = PersistenceStore(backend)
    inputs, results = _salary_pair()

    assert store.save(SALARY_KEY, inputs, results, savedAsDefault=False)
    assert store.load(SALARY_KEY)["inputs"] == inputs

    backend.remove_item(SALARY_KEY)
    assert store.load(SALARY_KEY) is None


def test_too_deeply_nested_values_are_dropped(store: PersistenceStore, backend: MemoryBackend) -> None:
    nested: list = []
    for _ in range(100000):
        nested = [nested]
    assert store.save(SALARY_KEY, {"x": nested}, {}) is False
    assert SALARY_KEY not in backend
