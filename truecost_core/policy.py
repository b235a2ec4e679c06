"""Tunable policy constants, optionally overridden from a YAML file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a policy file holds values the calculators cannot use."""


def _frozen(mapping: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Policy:
    """Constants that shape the calculations without being derived from input.

    The weekend divisor and the leverage lead are judgement calls, which is why
    they live here instead of being hard-coded in the engine.
    """

    recovery_multipliers: Mapping[str, float] = field(
        default_factory=lambda: _frozen({"light": 0.0, "medium": 0.25, "heavy": 0.5})
    )
    monthly_multipliers: Mapping[str, float] = field(
        default_factory=lambda: _frozen(
            {"weekly": 4.33, "fortnightly": 2.165, "monthly": 1.0, "once": 1.0}
        )
    )
    weekend_waking_hours: float = 16.0  # waking hours in one weekend day
    leverage_lead_threshold: float = 3.0
    note_timezone: str = "Australia/Sydney"
    copied_flag_seconds: float = 2.0
    rate_hint_seconds: float = 4.0


DEFAULT_POLICY = Policy()

_SCALARS = (
    "weekend_waking_hours",
    "leverage_lead_threshold",
    "copied_flag_seconds",
    "rate_hint_seconds",
)
_TABLES = ("recovery_multipliers", "monthly_multipliers")


def load_policy(path: Optional[str] = None, base: Policy = DEFAULT_POLICY) -> Policy:
    """Return ``base`` overlaid with the ``policy`` section of a YAML file.

    Parameters
    ----------
    path:
        Location of the YAML file. ``None`` or a missing file yields ``base``
        unchanged.
    base:
        Policy the overrides are applied to.
    """

    if path is None or not os.path.exists(path):
        return base
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML ({exc})") from exc

    section = data.get("policy", data) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigError(f"{path}: expected a mapping of policy values.")
    policy = apply_overrides(base, section, context=path)
    logger.debug("Loaded policy overrides from %s", path)
    return policy


def apply_overrides(base: Policy, overrides: Mapping[str, Any], context: str = "policy") -> Policy:
    changes: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key in _SCALARS:
            number = _positive_number(value, f"{context}: {key}", allow_zero=key == "leverage_lead_threshold")
            changes[key] = number
        elif key in _TABLES:
            changes[key] = _merge_table(getattr(base, key), value, f"{context}: {key}")
        elif key == "note_timezone":
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{context}: note_timezone must be a timezone name.")
            changes[key] = value.strip()
        else:
            logger.warning("%s: ignoring unknown policy key '%s'", context, key)
    return replace(base, **changes)


def _merge_table(current: Mapping[str, float], value: Any, context: str) -> Mapping[str, float]:
    if not isinstance(value, dict):
        raise ConfigError(f"{context} must be a mapping.")
    merged = dict(current)
    for name, raw in value.items():
        if name not in merged:
            raise ConfigError(f"{context}: unknown entry '{name}'.")
        merged[name] = _positive_number(raw, f"{context}.{name}", allow_zero=True)
    return _frozen(merged)


def _positive_number(value: Any, context: str, allow_zero: bool = False) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{context}: invalid numeric value {value!r}.")
    if number < 0 or (number == 0 and not allow_zero):
        raise ConfigError(f"{context}: value must be {'non-negative' if allow_zero else 'positive'}.")
    return number
