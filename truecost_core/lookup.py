"""Read-only access to values another calculator has saved."""

from __future__ import annotations

import math
from typing import Optional

from .migration import SALARY_KEY
from .storage import PersistenceStore

NO_SAVED_RATE_HINT = (
    "No saved rate found. Calculate your true hourly rate in Salary Reality first."
)


def load_true_hourly_rate(store: PersistenceStore) -> Optional[float]:
    """Return the salary calculator's saved true hourly rate, if positive.

    A missing record, a missing field or a non-positive rate all mean the
    rate is not available, which callers surface as a hint.
    """

    document = store.load(SALARY_KEY)
    if document is None:
        return None
    results = document.get("results")
    if not isinstance(results, dict):
        return None
    rate = results.get("trueHourlyRate")
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return None
    if not math.isfinite(rate) or rate <= 0:
        return None
    return float(rate)
