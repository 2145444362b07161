"""
Debt Consolidation Analysis

Aggregates the repayment schedules of several liabilities and compares
them against a single hypothetical consolidation loan.

The balance projection is returned month by month; charting code is
responsible for any downsampling (see wealthtrack.presentation).
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from dateutil.relativedelta import relativedelta

from wealthtrack.calculations.amortization import (
    calculate_total_interest,
    generate_amortization_schedule,
)
from wealthtrack.calculations.models import AmortizationRow, FinancialEntry, InterestType


@dataclass
class ConsolidationTerms:
    """Hypothetical single loan replacing all current debts."""

    annual_rate: float  # Percent
    term_years: float

    @property
    def is_valid(self) -> bool:
        return (
            math.isfinite(self.annual_rate)
            and math.isfinite(self.term_years)
            and self.annual_rate > 0
            and self.term_years > 0
        )


@dataclass
class LoanSummary:
    """Repayment position of a single liability."""

    entry: FinancialEntry
    current: float
    original: float  # max(original_value, current)
    progress: float  # Percent of original already repaid
    monthly_payment: float = 0.0
    interest_remaining: float = 0.0
    schedule: List[AmortizationRow] = field(default_factory=list)
    payoff_date: Optional[date] = None

    def balance_at(self, month: int) -> float:
        """Outstanding balance after the given number of months."""
        if not self.schedule or month == 0:
            # Without rate and term the debt stays at its current value
            return self.current
        if month > len(self.schedule):
            return 0.0
        return self.schedule[month - 1].balance


@dataclass
class ConsolidationResult:
    """Consolidated loan figures and savings against the current debts."""

    monthly_payment: float = 0.0
    total_interest: float = 0.0
    is_valid: bool = False
    monthly_savings: float = 0.0  # Positive favours consolidation
    interest_savings: float = 0.0
    schedule: List[AmortizationRow] = field(default_factory=list)


@dataclass
class BalancePoint:
    """Total outstanding debt after a number of months under each strategy."""

    month: int
    balance: float
    consolidated_balance: Optional[float] = None


@dataclass
class DebtAnalysis:
    """Full analysis of a set of liabilities."""

    loans: List[LoanSummary]
    total_current: float
    total_original: float
    total_monthly_payment: float
    total_interest_remaining: float
    consolidation: Optional[ConsolidationResult]
    balance_series: List[BalancePoint]

    @property
    def max_months(self) -> int:
        return self.balance_series[-1].month if self.balance_series else 0


def effective_original(current: float, original_value: Optional[float]) -> float:
    """
    Original balance used for progress reporting.

    original_value is only trusted when it exceeds the current balance, so a
    balance that has grown since origination reports 0% rather than a
    negative figure.
    """
    return original_value if original_value and original_value > current else current


def calculate_paid_off_percent(current: float, original_value: Optional[float]) -> float:
    """Percent of the original balance already repaid."""
    original = effective_original(current, original_value)
    if original <= 0:
        return 0.0
    return (original - current) / original * 100


def summarize_loan(entry: FinancialEntry, as_of: Optional[date] = None) -> LoanSummary:
    """Build the repayment summary for one liability."""
    current = entry.value
    summary = LoanSummary(
        entry=entry,
        current=current,
        original=effective_original(current, entry.original_value),
        progress=calculate_paid_off_percent(current, entry.original_value),
    )

    # Projection only when both rate and term are known
    if entry.interest_rate and entry.term_years:
        schedule = generate_amortization_schedule(
            entry.value,
            entry.interest_rate,
            entry.term_years,
            entry.interest_type or InterestType.COMPOUND_MONTHLY,
        )
        if schedule:
            summary.schedule = schedule
            summary.monthly_payment = schedule[0].payment
            summary.interest_remaining = calculate_total_interest(schedule)
            if as_of is not None:
                summary.payoff_date = as_of + relativedelta(months=len(schedule))

    return summary


def simulate_consolidation(
    total_current: float,
    total_monthly_payment: float,
    total_interest_remaining: float,
    terms: ConsolidationTerms,
) -> ConsolidationResult:
    """
    Run the consolidated loan and compare it with the current debts.

    Savings stay at zero unless the consolidation is valid.
    """
    result = ConsolidationResult()

    if terms.is_valid:
        schedule = generate_amortization_schedule(
            total_current,
            terms.annual_rate,
            terms.term_years,
            InterestType.COMPOUND_MONTHLY,
        )
        if schedule:
            result.schedule = schedule
            result.is_valid = True
            result.monthly_payment = schedule[0].payment
            result.total_interest = calculate_total_interest(schedule)
            result.monthly_savings = total_monthly_payment - result.monthly_payment
            result.interest_savings = total_interest_remaining - result.total_interest

    return result


def project_balances(
    loans: List[LoanSummary],
    consolidation: Optional[ConsolidationResult] = None,
) -> List[BalancePoint]:
    """
    Total debt balance for every month until the last loan is repaid.

    Month 0 is the current position. The consolidated balance is only
    filled in when a valid consolidation schedule exists.
    """
    has_consolidation = consolidation is not None and consolidation.is_valid
    consolidated_schedule = consolidation.schedule if has_consolidation else []

    max_months = max(
        max((len(loan.schedule) for loan in loans), default=0),
        len(consolidated_schedule),
    )
    total_current = sum(loan.current for loan in loans)

    series = []
    for month in range(max_months + 1):
        balance = sum(loan.balance_at(month) for loan in loans)

        consolidated_balance = None
        if has_consolidation:
            if month == 0:
                consolidated_balance = total_current
            elif month > len(consolidated_schedule):
                consolidated_balance = 0.0
            else:
                consolidated_balance = consolidated_schedule[month - 1].balance

        series.append(BalancePoint(month, balance, consolidated_balance))

    return series


def analyze_debts(
    liabilities: List[FinancialEntry],
    consolidation: Optional[ConsolidationTerms] = None,
    as_of: Optional[date] = None,
) -> Optional[DebtAnalysis]:
    """
    Analyze a set of liabilities.

    Args:
        liabilities: Liability entries; rate and term may be missing
        consolidation: Hypothetical consolidation loan, or None to skip
        as_of: Reference date for projected payoff dates

    Returns:
        Debt analysis, or None when there are no liabilities
    """
    if not liabilities:
        return None

    loans = [summarize_loan(entry, as_of) for entry in liabilities]

    total_current = sum(loan.current for loan in loans)
    total_original = sum(loan.original for loan in loans)
    total_monthly_payment = sum(loan.monthly_payment for loan in loans)
    total_interest_remaining = sum(loan.interest_remaining for loan in loans)

    result = None
    if consolidation is not None:
        result = simulate_consolidation(
            total_current, total_monthly_payment, total_interest_remaining, consolidation
        )

    return DebtAnalysis(
        loans=loans,
        total_current=total_current,
        total_original=total_original,
        total_monthly_payment=total_monthly_payment,
        total_interest_remaining=total_interest_remaining,
        consolidation=result,
        balance_series=project_balances(loans, result),
    )
