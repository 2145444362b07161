"""
Cash Flow Calculations

Monthly income against debt service and budgeted spending.
"""

from typing import List
from dataclasses import dataclass

from wealthtrack.calculations.amortization import generate_amortization_schedule
from wealthtrack.calculations.models import (
    BudgetEntry,
    EntryType,
    FinancialEntry,
    IncomeEntry,
    InterestType,
)


@dataclass
class CashflowSummary:
    """Monthly cash flow position."""

    monthly_income: float
    monthly_debt_payments: float
    monthly_budget_limit: float
    total_expenses: float
    net_flow: float
    savings_rate: float  # Percent of income


@dataclass
class BudgetStatus:
    """Spending progress for a single budget."""

    budget: BudgetEntry
    progress: float  # Percent of limit spent, capped at 100
    remaining: float  # Negative when overspent
    allocated_income: float
    is_fully_funded: bool


def calculate_monthly_debt_payment(entry: FinancialEntry) -> float:
    """First scheduled payment of a liability, or 0 if it cannot be computed."""
    if entry.interest_rate is None or entry.term_years is None or entry.value <= 0:
        return 0.0

    schedule = generate_amortization_schedule(
        entry.value,
        entry.interest_rate,
        entry.term_years,
        entry.interest_type or InterestType.COMPOUND_MONTHLY,
    )
    return schedule[0].payment if schedule else 0.0


def calculate_savings_rate(monthly_income: float, net_flow: float) -> float:
    """Net flow as a percent of income; 0 when there is no income."""
    if monthly_income > 0:
        return net_flow / monthly_income * 100
    return 0.0


def summarize_cashflow(
    income_entries: List[IncomeEntry],
    budgets: List[BudgetEntry],
    entries: List[FinancialEntry],
) -> CashflowSummary:
    """
    Calculate the monthly cash flow position.

    Args:
        income_entries: Monthly income streams
        budgets: Monthly spending limits
        entries: All financial entries; only liabilities contribute

    Returns:
        Cash flow summary
    """
    monthly_income = sum(item.amount for item in income_entries)

    monthly_debt_payments = sum(
        calculate_monthly_debt_payment(entry)
        for entry in entries
        if entry.type == EntryType.LIABILITY
    )

    monthly_budget_limit = sum(item.limit for item in budgets)

    total_expenses = monthly_debt_payments + monthly_budget_limit
    net_flow = monthly_income - total_expenses

    return CashflowSummary(
        monthly_income=monthly_income,
        monthly_debt_payments=monthly_debt_payments,
        monthly_budget_limit=monthly_budget_limit,
        total_expenses=total_expenses,
        net_flow=net_flow,
        savings_rate=calculate_savings_rate(monthly_income, net_flow),
    )


def calculate_budget_progress(spent: float, limit: float) -> float:
    """Percent of the limit spent, capped at 100."""
    if limit == 0:
        return 0.0
    return min(spent / limit * 100, 100.0)


def summarize_budget(budget: BudgetEntry, income_entries: List[IncomeEntry]) -> BudgetStatus:
    """Spending progress and earmarked income for one budget."""
    allocated_income = sum(
        item.amount
        for item in income_entries
        if item.allocated_category == budget.category
    )

    return BudgetStatus(
        budget=budget,
        progress=calculate_budget_progress(budget.spent, budget.limit),
        remaining=budget.limit - budget.spent,
        allocated_income=allocated_income,
        is_fully_funded=allocated_income >= budget.spent,
    )
