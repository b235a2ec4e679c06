"""Upcasting of persisted calculator documents to the current schema."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from .models import TimeCostInputs

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 2

SALARY_KEY = "truecost.salaryReality"
TIME_COST_KEY = "truecost.timeCost"
FRICTION_KEY = "truecost.lifeFriction"

LEGACY_TIME_COST_KEYS = ("baseTimeMinutes", "hiddenTimeMinutes")


def is_legacy_time_cost(data: Mapping[str, Any]) -> bool:
    """Return True for time cost inputs saved before time units existed."""
    return any(key in data for key in LEGACY_TIME_COST_KEYS)


def migrate_time_cost_inputs(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a fresh current-schema inputs dict built from legacy ``data``.

    Legacy minute fields become value/unit pairs in minutes; every other field
    is copied across, with defaults filling whatever the old record lacked.
    ``data`` itself is left untouched.
    """

    defaults = TimeCostInputs().to_dict()
    migrated = dict(defaults)
    for key in defaults:
        if key in data and data[key] is not None:
            migrated[key] = data[key]

    base = data.get("baseTimeMinutes")
    hidden = data.get("hiddenTimeMinutes")
    migrated["baseTimeValue"] = base if base is not None else defaults["baseTimeValue"]
    migrated["baseTimeUnit"] = "minutes"
    migrated["hiddenTimeValue"] = hidden if hidden is not None else defaults["hiddenTimeValue"]
    migrated["hiddenTimeUnit"] = "minutes"
    return migrated


def upgrade_record(key: str, document: Mapping[str, Any]) -> Dict[str, Any]:
    """Bring a stored document up to :data:`CURRENT_SCHEMA_VERSION`.

    Documents without a ``schemaVersion`` tag predate versioning; their shape
    decides whether any field needs rewriting. The returned dict is always a
    new object carrying the current version tag.
    """

    doc = dict(document)
    version = doc.get("schemaVersion")
    if isinstance(version, int) and version > CURRENT_SCHEMA_VERSION:
        logger.warning(
            "%s: stored schema version %s is newer than %s; reading as-is",
            key, version, CURRENT_SCHEMA_VERSION,
        )
        return doc
    if version == CURRENT_SCHEMA_VERSION:
        return doc

    inputs = doc.get("inputs")
    if key == TIME_COST_KEY and isinstance(inputs, Mapping) and is_legacy_time_cost(inputs):
        logger.info("%s: migrating legacy minute-based inputs", key)
        doc["inputs"] = migrate_time_cost_inputs(inputs)
    doc["schemaVersion"] = CURRENT_SCHEMA_VERSION
    return doc
