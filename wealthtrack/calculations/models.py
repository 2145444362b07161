"""
Records and result types shared by the calculation modules.

Records mirror the persisted entry shape. Results are produced fresh on
every call; nothing here holds state between calculations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import enum


class EntryType(str, enum.Enum):
    """Entry type enumeration."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"


class InterestType(str, enum.Enum):
    """Interest convention for a liability."""
    SIMPLE = "SIMPLE"
    COMPOUND_MONTHLY = "COMPOUND_MONTHLY"
    COMPOUND_ANNUALLY = "COMPOUND_ANNUALLY"

    @classmethod
    def parse(cls, value) -> "InterestType":
        """
        Resolve a stored tag to an interest type.

        Anything unrecognized (including the legacy "COMPOUND" tag and None)
        resolves to COMPOUND_MONTHLY.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.COMPOUND_MONTHLY


class DepreciationMethod(str, enum.Enum):
    """Depreciation method for a depreciating asset."""
    STRAIGHT_LINE = "STRAIGHT_LINE"
    DECLINING_BALANCE = "DECLINING_BALANCE"
    SUM_OF_YEARS_DIGITS = "SUM_OF_YEARS_DIGITS"

    @classmethod
    def parse(cls, value) -> "DepreciationMethod":
        """Resolve a stored tag; unrecognized tags fall back to DECLINING_BALANCE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.DECLINING_BALANCE


@dataclass
class InvestmentPerformance:
    """Stated returns and sparkline histories for an investment asset."""

    return_1y: float  # Percent
    history_1y: List[float] = field(default_factory=list)
    return_5y: Optional[float] = None
    history_5y: Optional[List[float]] = None
    return_max: Optional[float] = None
    history_max: Optional[List[float]] = None


@dataclass
class FinancialEntry:
    """An asset or liability as entered by the user."""

    id: str
    type: EntryType
    category: str
    name: str
    value: float  # Current value, never negative
    updated_at: Optional[datetime] = None

    # Liability
    interest_rate: Optional[float] = None  # Annual percent
    interest_type: Optional[str] = None
    term_years: Optional[float] = None  # Remaining term

    # Depreciating asset
    is_depreciating: bool = False
    original_value: Optional[float] = None  # Historical cost
    purchase_date: Optional[datetime] = None
    depreciation_rate: Optional[float] = None  # Annual percent
    depreciation_method: Optional[str] = None

    # Investment asset
    performance: Optional[InvestmentPerformance] = None


@dataclass
class BudgetEntry:
    """Monthly spending limit for a category."""

    id: str
    category: str
    limit: float
    spent: float = 0.0


@dataclass
class IncomeEntry:
    """Monthly income stream, optionally earmarked for a budget category."""

    id: str
    category: str
    amount: float
    allocated_category: Optional[str] = None


@dataclass
class AmortizationRow:
    """One month of a repayment schedule."""

    month: int  # 1-based
    payment: float
    principal: float
    interest: float
    balance: float  # Balance after this month's payment
