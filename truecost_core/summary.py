"""Display formatting and the copyable text summaries."""

from __future__ import annotations

import math
import time
from typing import Callable, Optional

from .conversions import parse_number
from .currency import DEFAULT_CURRENCY, PLACEHOLDER, format_currency
from .models import FrictionResults, SalaryInputs, SalaryResults, TimeCostInputs, TimeCostResults

# Below this many weekends a one-off summary skips the weekend line.
MIN_WEEKENDS_SHOWN = 0.1


def format_hours(value: float) -> str:
    if not math.isfinite(value):
        return PLACEHOLDER
    return f"{value:.1f}"


def format_short_hours(value: float) -> str:
    """One decimal of hours, or whole minutes when under an hour."""
    if not math.isfinite(value):
        return PLACEHOLDER
    if value < 1:
        return f"{round(value * 60)} min"
    return f"{value:.1f}"


def format_duration(hours: float) -> str:
    if not math.isfinite(hours):
        return PLACEHOLDER
    if hours < 1:
        return f"{round(hours * 60)} minutes"
    if hours < 24:
        return f"{hours:.1f} hours"
    return f"{hours / 24:.1f} days"


def format_whole_number(value: float) -> str:
    return f"{round(value):,}"


def rate_gap_message(results: SalaryResults) -> Optional[str]:
    """Sentence comparing the true rate with the on-paper rate.

    Returns None when there is no on-paper rate to compare against.
    """

    if results.on_paper_hourly <= 0:
        return None
    if results.true_hourly_rate < results.on_paper_hourly:
        gap = (1 - results.true_hourly_rate / results.on_paper_hourly) * 100
        return f"You are earning {gap:.0f}% less than it appears."
    return "Your true rate matches your on-paper rate."


def yearly_overtime_message(results: SalaryResults) -> Optional[str]:
    if results.donated_overtime_hours <= 0:
        return None
    yearly = format_hours(results.donated_overtime_hours * 52)
    return f"That's {yearly} hours per year of unpaid work."


def salary_summary(inputs: SalaryInputs, results: SalaryResults, currency: str = DEFAULT_CURRENCY) -> str:
    def money(value: float) -> str:
        return format_currency(value, currency)

    if inputs.pay_type == "annual":
        pay_type = "Annual Salary"
        pay_line = f"Annual Salary: {money(parse_number(inputs.annual_salary))}"
    else:
        pay_type = "Hourly Rate"
        pay_line = f"Hourly Rate: {money(parse_number(inputs.hourly_rate))}/hr"

    lines = [
        "Salary Reality Summary",
        "----------------------",
        f"Pay Type: {pay_type}",
        pay_line,
        "",
        f"Total Time Consumed: {format_hours(results.total_work_time_week)} hours/week",
        f"True Hourly Rate: {money(results.true_hourly_rate)}/hr",
        f"On-Paper Hourly: {money(results.on_paper_hourly)}/hr",
        f"Donated Overtime: {format_hours(results.donated_overtime_hours)} hours/week",
    ]
    overtime = yearly_overtime_message(results)
    if overtime is not None:
        lines.append(overtime)
    lines += ["", f"On paper: {money(results.on_paper_hourly)}/hr. In reality: {money(results.true_hourly_rate)}/hr."]
    gap = rate_gap_message(results)
    if gap is not None:
        lines.append(gap)
    return "\n".join(lines)


def time_cost_summary(
    inputs: TimeCostInputs, results: TimeCostResults, currency: str = DEFAULT_CURRENCY
) -> str:
    name = inputs.commitment_name or "This commitment"
    lines = [name, "─" * len(name)]

    if results.is_one_off:
        lines.append(f"Time cost: {format_duration(results.total_hours_one_off)} (one-off)")
        if results.total_weekends_one_off >= MIN_WEEKENDS_SHOWN:
            lines.append(f"That's about {results.total_weekends_one_off:.1f} weekends")
        if results.money_cost_one_off is not None:
            lines.append(
                f"Opportunity cost: {format_currency(results.money_cost_one_off, currency)} (one-off)"
            )
    else:
        lines.append(f"Time cost: {format_short_hours(results.hours_month)} hours/month")
        lines.append(f"That's about {results.weekends_month:.1f} weekends/month")
        if results.money_cost_month is not None:
            lines.append(
                f"Opportunity cost: {format_currency(results.money_cost_month, currency)}/month"
            )
    return "\n".join(lines) + "\n"


def friction_summary(results: FrictionResults) -> str:
    lines = [
        "Life Friction Summary",
        "---------------------",
        f"Friction score: {results.friction_score:.1f} / 10",
        f"Time lost per year: {format_whole_number(results.yearly_hours_lost)} hours"
        f" ({results.yearly_days_lost:.1f} days)",
        f"Biggest source: {results.highest_category_label}",
        "",
        f"Next move: {results.next_move}",
    ]
    return "\n".join(lines)


class CopyAcknowledgement:
    """A flag that reads True for ``delay`` seconds after :meth:`trigger`.

    ``clock`` is any monotonic seconds source; tests pass a fake one.
    """

    def __init__(self, delay: float = 2.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = delay
        self._clock = clock
        self._expires_at: Optional[float] = None
        self.message: Optional[str] = None

    def trigger(self, message: Optional[str] = None) -> None:
        self.message = message
        self._expires_at = self._clock() + self.delay

    def clear(self) -> None:
        self.message = None
        self._expires_at = None

    @property
    def active(self) -> bool:
        if self._expires_at is None:
            return False
        if self._clock() >= self._expires_at:
            self.clear()
            return False
        return True
