"""
Net worth totals and asset allocation.
"""

from typing import Dict, List
from dataclasses import dataclass

from wealthtrack.calculations.models import EntryType, FinancialEntry


@dataclass
class NetWorth:
    total_assets: float
    total_liabilities: float
    net_worth: float


def calculate_net_worth(entries: List[FinancialEntry]) -> NetWorth:
    """Sum assets and liabilities at their current values."""
    total_assets = sum(e.value for e in entries if e.type == EntryType.ASSET)
    total_liabilities = sum(e.value for e in entries if e.type == EntryType.LIABILITY)
    return NetWorth(
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=total_assets - total_liabilities,
    )


def calculate_asset_allocation(entries: List[FinancialEntry]) -> Dict[str, float]:
    """Asset value by category, in order of first appearance."""
    allocation: Dict[str, float] = {}
    for entry in entries:
        if entry.type != EntryType.ASSET:
            continue
        allocation[entry.category] = allocation.get(entry.category, 0) + entry.value
    return allocation
