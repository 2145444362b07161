"""
Financial calculation API endpoints.

These endpoints accept records and return calculated results. The
evaluation instant defaults to the request time and is resolved here,
never inside the engine.
"""

import logging
from dataclasses import asdict
from datetime import date, datetime, timezone
from typing import List, Optional

import numpy as np
from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field, field_validator

from wealthtrack.api.schemas import BudgetInput, EntryInput, IncomeInput, as_utc, to_entries
from wealthtrack.calculations import (
    amortization,
    cashflow,
    consolidation,
    depreciation,
    networth,
    performance,
)
from wealthtrack.calculations.models import EntryType, InterestType
from wealthtrack.presentation import sample_balance_series

logger = logging.getLogger(__name__)

router = APIRouter()


class CalculationInput(BaseModel):
    """Base for calculation inputs; rejects NaN and infinity."""

    model_config = ConfigDict(allow_inf_nan=False)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AmortizationInput(CalculationInput):
    """Input for amortization calculation."""

    principal: float
    annual_rate: float  # Percent
    term_years: float = Field(le=100)
    interest_type: str = InterestType.COMPOUND_MONTHLY.value
    start_date: Optional[date] = None


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""

    schedule = amortization.generate_amortization_schedule(
        principal=inputs.principal,
        annual_rate=inputs.annual_rate,
        term_years=inputs.term_years,
        interest_type=inputs.interest_type,
    )

    rows = [asdict(row) for row in schedule]
    if inputs.start_date is not None:
        dates = amortization.calculate_payment_dates(schedule, inputs.start_date)
        for row, period_date in zip(rows, dates):
            row["date"] = period_date.isoformat()

    return {
        "schedule": rows,
        "interest_type": amortization.interest_type_label(inputs.interest_type),
        "total_interest": amortization.calculate_total_interest(schedule),
        "total_payment": amortization.calculate_total_payment(schedule),
    }


class DepreciationInput(CalculationInput):
    """Input for depreciation of a single entry."""

    entry: EntryInput
    as_of: Optional[datetime] = None

    @field_validator("as_of")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


@router.post("/depreciation")
async def calculate_depreciation(inputs: DepreciationInput):
    """Current value of a depreciating asset."""
    as_of = inputs.as_of or _now()
    value = depreciation.calculate_depreciation(inputs.entry.to_domain(), as_of)
    return {"value": value, "as_of": as_of.isoformat()}


class RefreshInput(CalculationInput):
    """Input for refreshing depreciated values."""

    entries: List[EntryInput]
    as_of: Optional[datetime] = None

    @field_validator("as_of")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


@router.post("/refresh")
async def refresh_entries(inputs: RefreshInput):
    """Recompute values of all depreciating assets."""
    as_of = inputs.as_of or _now()
    entries = to_entries(inputs.entries)
    refreshed = depreciation.refresh_depreciated_values(entries, as_of)

    changed = [new.id for old, new in zip(entries, refreshed) if new is not old]
    logger.debug(f"Refreshed {len(changed)} depreciated entries as of {as_of.isoformat()}")

    return {"entries": [asdict(entry) for entry in refreshed], "changed": changed}


class ConsolidationInput(CalculationInput):
    """Hypothetical consolidation loan."""

    annual_rate: float
    term_years: float = Field(le=100)


class DebtInput(CalculationInput):
    """Input for debt analysis."""

    entries: List[EntryInput]
    consolidation: Optional[ConsolidationInput] = None
    as_of: Optional[date] = None


def _loan_response(loan: consolidation.LoanSummary) -> dict:
    return {
        "id": loan.entry.id,
        "name": loan.entry.name,
        "category": loan.entry.category,
        "current": loan.current,
        "original": loan.original,
        "progress": loan.progress,
        "monthly_payment": loan.monthly_payment,
        "interest_remaining": loan.interest_remaining,
        "months_remaining": len(loan.schedule),
        "payoff_date": loan.payoff_date.isoformat() if loan.payoff_date else None,
    }


@router.post("/debts")
async def analyze_debts(inputs: DebtInput):
    """Debt repayment summary with optional consolidation comparison."""
    liabilities = [
        entry for entry in to_entries(inputs.entries) if entry.type == EntryType.LIABILITY
    ]

    terms = None
    if inputs.consolidation is not None:
        terms = consolidation.ConsolidationTerms(
            annual_rate=inputs.consolidation.annual_rate,
            term_years=inputs.consolidation.term_years,
        )

    analysis = consolidation.analyze_debts(
        liabilities, terms, as_of=inputs.as_of or _now().date()
    )
    if analysis is None:
        return {"analysis": None, "chart": []}

    result = None
    if analysis.consolidation is not None:
        result = asdict(analysis.consolidation)
        result.pop("schedule")

    return {
        "analysis": {
            "loans": [_loan_response(loan) for loan in analysis.loans],
            "total_current": analysis.total_current,
            "total_original": analysis.total_original,
            "total_monthly_payment": analysis.total_monthly_payment,
            "total_interest_remaining": analysis.total_interest_remaining,
            "consolidation": result,
            "max_months": analysis.max_months,
        },
        "chart": [asdict(point) for point in sample_balance_series(analysis.balance_series)],
    }


class PerformanceRequest(CalculationInput):
    """Input for synthesized performance histories."""

    current_value: float
    return_1y: float = Field(gt=-100)
    return_5y: Optional[float] = Field(default=None, gt=-100)
    return_max: Optional[float] = Field(default=None, gt=-100)
    seed: Optional[int] = None


@router.post("/performance")
async def calculate_performance(inputs: PerformanceRequest):
    """Stated returns with synthetic sparkline histories."""
    rng = np.random.default_rng(inputs.seed)
    result = performance.build_performance(
        inputs.current_value,
        inputs.return_1y,
        inputs.return_5y,
        inputs.return_max,
        rng=rng,
    )
    return asdict(result)


class HistoryInput(CalculationInput):
    """Input for a single synthesized history."""

    current_value: float
    return_rate: float = Field(gt=-100)
    points: int = Field(default=24, ge=0, le=1000)
    seed: Optional[int] = None


@router.post("/performance/history")
async def calculate_history(inputs: HistoryInput):
    """Synthetic value history ending at the current value."""
    history = performance.generate_performance_history(
        inputs.current_value,
        inputs.return_rate,
        inputs.points,
        rng=np.random.default_rng(inputs.seed),
    )
    return {"history": history}


class CashflowInput(CalculationInput):
    """Input for cash flow summary."""

    income: List[IncomeInput] = []
    budgets: List[BudgetInput] = []
    entries: List[EntryInput] = []


@router.post("/cashflow")
async def calculate_cashflow(inputs: CashflowInput):
    """Monthly income, outflows, net flow and savings rate."""
    income = [item.to_domain() for item in inputs.income]
    budgets = [item.to_domain() for item in inputs.budgets]

    summary = cashflow.summarize_cashflow(income, budgets, to_entries(inputs.entries))
    statuses = [cashflow.summarize_budget(budget, income) for budget in budgets]

    return {
        "summary": asdict(summary),
        "budgets": [asdict(status) for status in statuses],
    }


class EntriesInput(CalculationInput):
    """A list of financial entries."""

    entries: List[EntryInput]


@router.post("/net-worth")
async def calculate_net_worth(inputs: EntriesInput):
    """Net worth totals and asset allocation."""
    entries = to_entries(inputs.entries)
    return {
        "totals": asdict(networth.calculate_net_worth(entries)),
        "allocation": networth.calculate_asset_allocation(entries),
    }
