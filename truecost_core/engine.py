"""Pure math routines for the salary, time cost and friction calculators."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np

from .conversions import MINUTES_PER_HOUR, parse_non_negative, parse_number, to_minutes
from .models import (
    FRICTION_CATEGORIES,
    CategoryAllocation,
    Duration,
    FrictionCategory,
    FrictionInputs,
    FrictionResults,
    SalaryInputs,
    SalaryResults,
    TimeCostInputs,
    TimeCostResults,
)
from .policy import DEFAULT_POLICY, Policy

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12
DAYS_PER_WEEK = 7
DAYS_PER_YEAR = 365
HOURS_PER_DAY = 24
# Floor for hour denominators so all-zero time inputs cannot divide by zero.
MIN_HOURS = 0.1

DURATION_MULTIPLIERS: Mapping[str, int] = MappingProxyType(
    {"4weeks": 1, "8weeks": 2, "12weeks": 3, "6months": 6, "ongoing": 0}
)
DURATION_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "4weeks": "4 weeks",
        "8weeks": "8 weeks",
        "12weeks": "12 weeks",
        "6months": "6 months",
        "ongoing": "ongoing",
    }
)

ACTIONABLE_CATEGORIES: Tuple[FrictionCategory, ...] = (
    "admin_drag",
    "schedule_overload",
    "environment_friction",
    "digital_noise",
)
NON_ACTIONABLE_CATEGORIES: Tuple[FrictionCategory, ...] = ("people_drain", "health_drag")

CATEGORY_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "admin_drag": "Admin drag",
        "schedule_overload": "Schedule overload",
        "environment_friction": "Environment friction",
        "people_drain": "People drain",
        "health_drag": "Health drag",
        "digital_noise": "Digital noise",
    }
)

CATEGORY_INSIGHTS: Mapping[str, str] = MappingProxyType(
    {
        "admin_drag": "The small tasks keep piling up, each one feeling heavier than it should.",
        "schedule_overload": "There is always somewhere to be, and rarely time to just be.",
        "environment_friction": "The space around you is asking for something you have not had time to give.",
        "people_drain": "Some relationships take more than they return, and you feel the difference.",
        "health_drag": "Your body has been keeping score of what you have been putting off.",
        "digital_noise": "The notifications never stop, and neither does the low hum of being always reachable.",
    }
)

NEXT_MOVES: Mapping[str, str] = MappingProxyType(
    {
        "admin_drag": "Book one 30-minute admin block this week and clear the oldest three items on the list.",
        "schedule_overload": "Pick one recurring commitment to pause or decline for the next month.",
        "environment_friction": "Fix the one thing at home or at your desk that trips you up every day.",
        "people_drain": "Choose one draining interaction to shorten, reschedule or set a boundary around.",
        "health_drag": "Protect one block for sleep, movement or a check-up you have been postponing.",
        "digital_noise": "Turn off notifications for one app and batch email into two set times a day.",
    }
)


def calculate_salary(inputs: SalaryInputs) -> SalaryResults:
    """Return weekly pay and time figures for ``inputs``.

    Unparseable fields count as zero, so the function never raises.
    """

    annual_salary = parse_number(inputs.annual_salary)
    hourly_rate = parse_number(inputs.hourly_rate)
    paid_hours_week = parse_number(inputs.paid_hours_week)
    contract_hours_week = parse_number(inputs.contract_hours_week)
    actual_hours_week = parse_number(inputs.actual_hours_week)
    commute_minutes_day = parse_number(inputs.commute_minutes_day)
    commute_days_week = parse_number(inputs.commute_days_week)
    after_hours_minutes_day = parse_number(inputs.after_hours_minutes_day)
    after_hours_days_week = parse_number(inputs.after_hours_days_week)
    monthly_work_expenses = parse_number(inputs.monthly_work_expenses)
    childcare_cost_week = parse_number(inputs.childcare_cost_week)
    recovery_hours_week = parse_number(inputs.recovery_hours_week)

    commute_hours_week = commute_minutes_day * commute_days_week / MINUTES_PER_HOUR
    after_hours_week = after_hours_minutes_day * after_hours_days_week / MINUTES_PER_HOUR
    total_work_time_week = actual_hours_week + commute_hours_week + after_hours_week + recovery_hours_week

    annual = inputs.pay_type == "annual"
    gross_pay_week = annual_salary / WEEKS_PER_YEAR if annual else hourly_rate * paid_hours_week

    costs_week = monthly_work_expenses * MONTHS_PER_YEAR / WEEKS_PER_YEAR + childcare_cost_week
    net_after_costs_week = gross_pay_week - costs_week
    true_hourly_rate = net_after_costs_week / max(total_work_time_week, MIN_HOURS)
    donated_overtime_hours = max(0.0, actual_hours_week - contract_hours_week)

    if annual:
        on_paper_hourly = (annual_salary / WEEKS_PER_YEAR) / max(contract_hours_week, MIN_HOURS)
    else:
        on_paper_hourly = hourly_rate

    return SalaryResults(
        commute_hours_week=commute_hours_week,
        after_hours_week=after_hours_week,
        total_work_time_week=total_work_time_week,
        gross_pay_week=gross_pay_week,
        costs_week=costs_week,
        net_after_costs_week=net_after_costs_week,
        true_hourly_rate=true_hourly_rate,
        donated_overtime_hours=donated_overtime_hours,
        on_paper_hourly=on_paper_hourly,
    )


def calculate_time_cost(inputs: TimeCostInputs, policy: Policy = DEFAULT_POLICY) -> TimeCostResults:
    """Return the monthly (or one-off) cost of a commitment.

    Negative or unparseable numbers count as zero. Money figures are only
    produced when an hourly value is set and the money view is switched on.
    """

    base_minutes = to_minutes(parse_non_negative(inputs.base_time_value), inputs.base_time_unit)
    hidden_minutes = to_minutes(parse_non_negative(inputs.hidden_time_value), inputs.hidden_time_unit)
    hourly_value = parse_non_negative(inputs.hourly_value)
    recovery_multiplier = policy.recovery_multipliers[inputs.energy_level]
    monthly_multiplier = policy.monthly_multipliers[inputs.frequency]
    weekend_hours = policy.weekend_waking_hours
    is_one_off = inputs.frequency == "once"

    per_occurrence = base_minutes + hidden_minutes

    time_minutes_month = per_occurrence if is_one_off else per_occurrence * monthly_multiplier
    recovery_minutes_month = time_minutes_month * recovery_multiplier
    total_minutes_month = time_minutes_month + recovery_minutes_month
    hours_month = total_minutes_month / MINUTES_PER_HOUR

    total_hours_one_off = per_occurrence * (1 + recovery_multiplier) / MINUTES_PER_HOUR

    show_money = hourly_value > 0 and bool(inputs.show_money_cost)

    return TimeCostResults(
        total_minutes_per_occurrence=per_occurrence,
        time_minutes_month=time_minutes_month,
        recovery_minutes_month=recovery_minutes_month,
        total_minutes_month=total_minutes_month,
        hours_month=hours_month,
        days_month=hours_month / HOURS_PER_DAY,
        weekends_month=hours_month / weekend_hours,
        money_cost_month=hours_month * hourly_value if show_money else None,
        is_one_off=is_one_off,
        total_hours_one_off=total_hours_one_off,
        total_days_one_off=total_hours_one_off / HOURS_PER_DAY,
        total_weekends_one_off=total_hours_one_off / weekend_hours,
        money_cost_one_off=total_hours_one_off * hourly_value if show_money else None,
    )


def duration_multiplier(duration: Duration) -> int:
    """Number of four-week blocks in ``duration``; ``"ongoing"`` has none."""
    return DURATION_MULTIPLIERS[duration]


def duration_label(duration: Duration) -> str:
    return DURATION_LABELS[duration]


def totals_over_duration(
    inputs: TimeCostInputs, results: TimeCostResults
) -> Optional[Tuple[float, Optional[float]]]:
    """Return ``(hours, money)`` accumulated over a fixed-length commitment.

    One-off and ongoing commitments have no such total and yield ``None``.
    ``money`` is ``None`` whenever the monthly money cost is.
    """

    if results.is_one_off or inputs.duration == "ongoing":
        return None
    blocks = duration_multiplier(inputs.duration)
    money = results.money_cost_month * blocks if results.money_cost_month is not None else None
    return results.hours_month * blocks, money


def calculate_friction(inputs: FrictionInputs, policy: Policy = DEFAULT_POLICY) -> FrictionResults:
    """Split the daily minutes lost across the friction categories.

    Each category receives minutes in proportion to its slider score. The
    leverage category favours things the user can change directly: a
    non-actionable category only wins when it leads the best actionable one
    by at least ``policy.leverage_lead_threshold`` points. Scores and minutes
    are parsed like the other calculators, so junk or non-finite values count
    as zero.
    """

    scores = np.asarray(
        [parse_number(getattr(inputs, name)) for name in FRICTION_CATEGORIES], dtype=float
    )
    total_score = float(scores.sum())
    daily_minutes = parse_number(inputs.daily_minutes_lost)

    if total_score > 0:
        proportions = scores / total_score
    else:
        proportions = np.zeros_like(scores)
    minutes_per_day = proportions * daily_minutes

    allocations = tuple(
        CategoryAllocation(
            category=category,
            score=float(scores[idx]),
            proportion=float(proportions[idx]),
            minutes_per_day=float(minutes_per_day[idx]),
            minutes_per_week=float(minutes_per_day[idx]) * DAYS_PER_WEEK,
        )
        for idx, category in enumerate(FRICTION_CATEGORIES)
    )

    # np.argmax returns the first maximum, which is the declaration-order tie-break.
    highest = FRICTION_CATEGORIES[int(np.argmax(scores))]
    leverage = _leverage_category(dict(zip(FRICTION_CATEGORIES, scores.tolist())), policy)

    yearly_hours_lost = daily_minutes * DAYS_PER_YEAR / MINUTES_PER_HOUR

    return FrictionResults(
        allocations=allocations,
        highest_category=highest,
        highest_category_label=CATEGORY_LABELS[highest],
        leverage_category=leverage,
        next_move=NEXT_MOVES[leverage],
        insight=CATEGORY_INSIGHTS[highest],
        friction_score=float(scores.mean()),
        yearly_hours_lost=yearly_hours_lost,
        yearly_days_lost=yearly_hours_lost / HOURS_PER_DAY,
    )


def _leverage_category(scores: Mapping[str, float], policy: Policy) -> FrictionCategory:
    actionable = _top(scores, ACTIONABLE_CATEGORIES)
    non_actionable = _top(scores, NON_ACTIONABLE_CATEGORIES)
    if scores[non_actionable] - scores[actionable] >= policy.leverage_lead_threshold:
        return non_actionable
    return actionable


def _top(scores: Mapping[str, float], group: Tuple[FrictionCategory, ...]) -> FrictionCategory:
    best = group[0]
    for category in group[1:]:
        if scores[category] > scores[best]:
            best = category
    return best
