"""
Financial Calculation Engine

Pure calculation modules for personal finance tracking.
Every function is a pure function of its arguments; nothing reads the
clock or holds state between calls.
"""

from wealthtrack.calculations import (
    amortization,
    cashflow,
    consolidation,
    depreciation,
    networth,
    performance,
)

__all__ = [
    "amortization",
    "cashflow",
    "consolidation",
    "depreciation",
    "networth",
    "performance",
]
