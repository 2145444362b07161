"""
Performance History Synthesis

Builds a plausible value trajectory for investment sparklines. The series
ends exactly at the current value and is shaped by the stated return; it
is a presentation aid, not a model of actual history.
"""

from typing import List, Optional
import numpy as np

from wealthtrack.calculations.models import InvestmentPerformance

NOISE_SCALE = 0.3  # Noise amplitude relative to total growth

HISTORY_POINTS_1Y = 12
HISTORY_POINTS_5Y = 24
HISTORY_POINTS_MAX = 36


def implied_start_value(current_value: float, return_rate: float) -> float:
    """Starting value that grows to current_value at return_rate percent."""
    return current_value / (1 + return_rate / 100)


def generate_performance_history(
    current_value: float,
    return_rate: float,
    points: int = 24,
    rng: Optional[np.random.Generator] = None,
) -> List[float]:
    """
    Generate a synthetic value history ending at current_value.

    Args:
        current_value: Value at the end of the series
        return_rate: Return over the period in percent
        points: Number of points in the series
        rng: Noise source; pass a seeded generator for reproducible output

    Returns:
        List of values, floored at 0, last element exactly current_value
    """
    if points <= 0:
        return []
    if points == 1:
        return [max(0, current_value)]

    if rng is None:
        rng = np.random.default_rng()

    start_value = implied_start_value(current_value, return_rate)
    growth = current_value - start_value
    volatility = growth * NOISE_SCALE

    progress = np.linspace(0.0, 1.0, points)
    values = start_value + growth * progress
    # Zero-mean uniform noise on every point but the last
    values[:-1] += (rng.random(points - 1) - 0.5) * volatility
    values = np.maximum(values, 0.0)

    history = values.tolist()
    history[-1] = max(0, current_value)
    return history


def build_performance(
    current_value: float,
    return_1y: float,
    return_5y: Optional[float] = None,
    return_max: Optional[float] = None,
    rng: Optional[np.random.Generator] = None,
) -> InvestmentPerformance:
    """Stated returns with a synthetic history for each horizon given."""
    if rng is None:
        rng = np.random.default_rng()

    performance = InvestmentPerformance(
        return_1y=return_1y,
        history_1y=generate_performance_history(
            current_value, return_1y, HISTORY_POINTS_1Y, rng
        ),
    )

    if return_5y:
        performance.return_5y = return_5y
        performance.history_5y = generate_performance_history(
            current_value, return_5y, HISTORY_POINTS_5Y, rng
        )

    if return_max:
        performance.return_max = return_max
        performance.history_max = generate_performance_history(
            current_value, return_max, HISTORY_POINTS_MAX, rng
        )

    return performance
