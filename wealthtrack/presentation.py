"""
Chart helpers for the debt repayment planner.

Downsamples the month-by-month balance projection into a compact series
suitable for plotting.
"""

from typing import List, Optional
from dataclasses import dataclass

from wealthtrack.calculations.consolidation import BalancePoint

# Charts extend to an explicit zero point if the series ends above this
PAYOFF_THRESHOLD = 100


@dataclass
class ChartPoint:
    """One plotted point of the repayment chart."""

    name: str
    month_index: int
    balance: float
    consolidated_balance: Optional[float] = None


def sampling_interval(max_months: int) -> int:
    """Stride between plotted months."""
    if max_months > 60:
        return 6
    if max_months > 24:
        return 3
    return 1


def month_label(month: int) -> str:
    """Axis label: "Now", months under a year, then years."""
    if month == 0:
        return "Now"
    if month < 12:
        return f"{month}m"
    return f"{month / 12:.1f}y"


def _chart_value(value: float) -> float:
    """Whole, non-negative balance for plotting."""
    return max(0, round(value))


def sample_balance_series(series: List[BalancePoint]) -> List[ChartPoint]:
    """
    Downsample a balance projection for charting.

    Month 0 is always kept. If the last sampled point has not reached
    payoff, a terminal "End" point at zero is appended.
    """
    if not series:
        return []

    max_months = series[-1].month
    has_consolidation = series[0].consolidated_balance is not None
    step = sampling_interval(max_months)

    points = []
    for point in series[::step]:
        points.append(
            ChartPoint(
                name=month_label(point.month),
                month_index=point.month,
                balance=_chart_value(point.balance),
                consolidated_balance=(
                    _chart_value(point.consolidated_balance) if has_consolidation else None
                ),
            )
        )

    last = points[-1]
    if last.balance > PAYOFF_THRESHOLD or (last.consolidated_balance or 0) > PAYOFF_THRESHOLD:
        points.append(
            ChartPoint(
                name="End",
                month_index=max_months,
                balance=0,
                consolidated_balance=0 if has_consolidation else None,
            )
        )

    return points
