"""
Tests for financial calculation engine.
"""

import math
import pytest
import numpy as np
from datetime import date, timedelta

from wealthtrack.calculations.amortization import (
    calculate_monthly_rate,
    calculate_payment,
    calculate_payment_dates,
    calculate_total_interest,
    calculate_total_payment,
    generate_amortization_schedule,
    interest_type_label,
)
from wealthtrack.calculations.cashflow import (
    calculate_budget_progress,
    summarize_budget,
    summarize_cashflow,
)
from wealthtrack.calculations.depreciation import (
    calculate_depreciation,
    refresh_depreciated_values,
)
from wealthtrack.calculations.models import (
    BudgetEntry,
    DepreciationMethod,
    EntryType,
    FinancialEntry,
    IncomeEntry,
    InterestType,
)
from wealthtrack.calculations.networth import calculate_asset_allocation, calculate_net_worth
from wealthtrack.calculations.performance import build_performance, generate_performance_history


class TestDepreciation:
    """Test asset depreciation calculations."""

    def test_straight_line_half_depreciated(self, depreciating_asset, as_of):
        """10% straight line over 5 years leaves half the value."""
        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        assert calculate_depreciation(entry, as_of) == 500

    def test_straight_line_fully_depreciated(self, depreciating_asset, as_of):
        """Straight line never goes below zero."""
        entry = depreciating_asset("STRAIGHT_LINE", 20, 1000, 6)
        assert calculate_depreciation(entry, as_of) == 0

    def test_declining_balance_two_years(self, depreciating_asset, as_of):
        """1000 * 0.8 * 0.8 = 640."""
        entry = depreciating_asset("DECLINING_BALANCE", 20, 1000, 2)
        assert calculate_depreciation(entry, as_of) == 640

    def test_declining_balance_fractional_year(self, depreciating_asset, as_of):
        """Declining balance decays continuously between whole years."""
        entry = depreciating_asset("DECLINING_BALANCE", 20, 1000, 0.5)
        assert calculate_depreciation(entry, as_of) == round(1000 * 0.8 ** 0.5)

    def test_naive_purchase_date_taken_as_utc(self, depreciating_asset, as_of):
        """A naive purchase date against an aware instant is read as UTC."""
        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        entry.purchase_date = entry.purchase_date.replace(tzinfo=None)
        assert calculate_depreciation(entry, as_of) == 500

    def test_naive_as_of_taken_as_utc(self, depreciating_asset, as_of):
        """A naive evaluation instant against an aware purchase date is read as UTC."""
        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        assert calculate_depreciation(entry, as_of.replace(tzinfo=None)) == 500

    def test_sum_of_years_digits_two_years(self, depreciating_asset, as_of):
        """5 year life: 5/15 + 4/15 depreciated after two years."""
        entry = depreciating_asset("SUM_OF_YEARS_DIGITS", 20, 1000, 2)
        assert calculate_depreciation(entry, as_of) == 400

    def test_sum_of_years_digits_short_life(self, depreciating_asset, as_of):
        """2 year life: 2/3 depreciated after the first year."""
        entry = depreciating_asset("SUM_OF_YEARS_DIGITS", 50, 1000, 1)
        assert calculate_depreciation(entry, as_of) == 333

    def test_sum_of_years_digits_fully_depreciated(self, depreciating_asset, as_of):
        """Beyond the implied useful life the value is zero."""
        entry = depreciating_asset("SUM_OF_YEARS_DIGITS", 20, 1000, 6)
        assert calculate_depreciation(entry, as_of) == 0

    def test_unknown_method_uses_declining_balance(self, depreciating_asset, as_of):
        """Unrecognized methods fall back to declining balance."""
        entry = depreciating_asset("DOUBLE_DECLINING", 20, 1000, 2)
        assert calculate_depreciation(entry, as_of) == 640
        assert DepreciationMethod.parse(None) == DepreciationMethod.DECLINING_BALANCE

    def test_future_purchase_keeps_original_value(self, depreciating_asset, as_of):
        """A purchase date after the evaluation instant returns the original value."""
        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, -1)
        entry.value = 900
        assert calculate_depreciation(entry, as_of) == 1000

    def test_not_depreciating_passthrough(self, depreciating_asset, as_of):
        """Entries not opted in keep their stored value."""
        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        entry.is_depreciating = False
        entry.value = 750
        assert calculate_depreciation(entry, as_of) == 750

    def test_missing_rate_passthrough(self, depreciating_asset, as_of):
        """Missing depreciation inputs keep the stored value."""
        entry = depreciating_asset("STRAIGHT_LINE", None, 1000, 5)
        entry.value = 750
        assert calculate_depreciation(entry, as_of) == 750

        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        entry.purchase_date = None
        entry.value = 750
        assert calculate_depreciation(entry, as_of) == 750

    def test_same_instant_same_result(self, depreciating_asset, as_of):
        """Repeated evaluation at the same instant is identical."""
        entry = depreciating_asset("SUM_OF_YEARS_DIGITS", 15, 24000, 3.3)
        assert calculate_depreciation(entry, as_of) == calculate_depreciation(entry, as_of)

    def test_later_instant_lower_value(self, depreciating_asset, as_of):
        """Value decreases as the evaluation instant moves forward."""
        entry = depreciating_asset("STRAIGHT_LINE", 10, 1000, 2)
        later = as_of + timedelta(days=365.25)
        assert calculate_depreciation(entry, later) < calculate_depreciation(entry, as_of)

    def test_refresh_updates_only_changed_assets(self, depreciating_asset, liability, as_of):
        """Refresh copies changed assets and leaves everything else untouched."""
        stale = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        current = depreciating_asset("STRAIGHT_LINE", 10, 1000, 5)
        current.value = 500
        loan = liability("l1", 5000, 5, 3)

        refreshed = refresh_depreciated_values([stale, current, loan], as_of)

        assert refreshed[0] is not stale
        assert refreshed[0].value == 500
        assert stale.value == 1000
        assert refreshed[1] is current
        assert refreshed[2] is loan


class TestAmortization:
    """Test loan amortization calculations."""

    def test_monthly_rate_compound_monthly(self):
        """Nominal rate divided by 12."""
        assert calculate_monthly_rate(12, InterestType.COMPOUND_MONTHLY) == pytest.approx(0.01)

    def test_monthly_rate_compound_annually(self):
        """Twelve compounded months equal the annual rate."""
        rate = calculate_monthly_rate(6, "COMPOUND_ANNUALLY")
        assert (1 + rate) ** 12 == pytest.approx(1.06)

    def test_calculate_payment(self):
        """$100k at 6% for 5 years."""
        payment = calculate_payment(100000, 0.005, 60)
        assert abs(payment - 1933.28) < 0.01

    def test_compound_schedule_pays_off(self):
        """Balance is non-increasing and ends at zero."""
        schedule = generate_amortization_schedule(100000, 6, 5, "COMPOUND_MONTHLY")

        assert len(schedule) == 60
        assert schedule[0].month == 1
        assert schedule[-1].balance == 0
        for previous, row in zip(schedule, schedule[1:]):
            assert row.balance <= previous.balance

    def test_compound_annually_schedule_pays_off(self):
        """Annual compounding also amortizes to zero, with a lower payment."""
        annual = generate_amortization_schedule(100000, 6, 5, InterestType.COMPOUND_ANNUALLY)
        monthly = generate_amortization_schedule(100000, 6, 5, InterestType.COMPOUND_MONTHLY)

        assert annual[-1].balance == 0
        assert annual[0].payment < monthly[0].payment

    def test_compound_rows_balance(self):
        """Principal plus interest equals payment on every row."""
        schedule = generate_amortization_schedule(25000, 7.5, 3)
        for row in schedule:
            assert row.principal + row.interest == pytest.approx(row.payment)

    def test_simple_interest_slices(self):
        """Flat interest: constant slices that sum to the totals."""
        schedule = generate_amortization_schedule(12000, 10, 2, InterestType.SIMPLE)

        assert len(schedule) == 24
        assert all(row.principal == 500 for row in schedule)
        assert all(row.interest == pytest.approx(100) for row in schedule)
        assert all(row.payment == pytest.approx(600) for row in schedule)
        assert sum(row.principal for row in schedule) == 12000
        assert calculate_total_interest(schedule) == pytest.approx(12000 * 0.10 * 2)
        assert schedule[-1].balance == 0

    def test_zero_rate(self):
        """0% interest divides the principal evenly."""
        schedule = generate_amortization_schedule(1200, 0, 1)

        assert len(schedule) == 12
        assert all(row.interest == 0 for row in schedule)
        assert schedule[0].payment == 100
        assert schedule[-1].balance == 0

    def test_empty_schedules(self):
        """Non-positive principal or term yields no rows."""
        assert generate_amortization_schedule(10000, 5, 0) == []
        assert generate_amortization_schedule(10000, 5, -2) == []
        assert generate_amortization_schedule(0, 5, 10) == []
        assert generate_amortization_schedule(-100, 5, 10) == []

    def test_unknown_interest_type_compounds_monthly(self):
        """Unrecognized types (including the legacy COMPOUND tag) compound monthly."""
        expected = generate_amortization_schedule(10000, 5, 2, InterestType.COMPOUND_MONTHLY)
        assert generate_amortization_schedule(10000, 5, 2, "COMPOUND") == expected
        assert generate_amortization_schedule(10000, 5, 2, None) == expected

    def test_fractional_term(self):
        """An 18 month term produces 18 rows."""
        schedule = generate_amortization_schedule(9000, 4, 1.5)
        assert len(schedule) == 18
        assert schedule[-1].balance == 0

    def test_nan_principal_propagates(self):
        """NaN inputs flow into the rows without raising."""
        schedule = generate_amortization_schedule(float("nan"), 5, 1)
        assert len(schedule) == 12
        assert math.isnan(schedule[0].balance)

    def test_totals(self):
        """Total payment is principal plus total interest."""
        schedule = generate_amortization_schedule(20000, 8, 4)
        total = calculate_total_payment(schedule)
        assert total == pytest.approx(20000 + calculate_total_interest(schedule))

    def test_payment_dates(self):
        """Payments fall on successive calendar months."""
        schedule = generate_amortization_schedule(1200, 0, 1)
        dates = calculate_payment_dates(schedule, date(2025, 1, 31))

        assert dates[0] == date(2025, 1, 31)
        assert dates[1] == date(2025, 2, 28)
        assert dates[-1] == date(2025, 12, 31)

    def test_interest_type_label(self):
        """Labels for display."""
        assert interest_type_label("SIMPLE") == "Simple Interest"
        assert interest_type_label("COMPOUND_ANNUALLY") == "Compound Interest (Annually)"


class TestPerformanceHistory:
    """Test synthetic performance histories."""

    def test_last_point_is_current_value(self):
        """Every series ends exactly at the current value."""
        rng = np.random.default_rng(7)
        for points in (2, 12, 24, 36):
            history = generate_performance_history(125000, 12.4, points, rng)
            assert len(history) == points
            assert history[-1] == 125000

    def test_starts_near_implied_start(self):
        """First point lies within the noise band around the implied start."""
        history = generate_performance_history(110, 10, 12, np.random.default_rng(1))
        # start = 100, growth = 10, noise within +/- 1.5
        assert 98.5 <= history[0] <= 101.5

    def test_values_never_negative(self):
        """Large noise relative to the start value is floored at zero."""
        history = generate_performance_history(100, 1000, 50, np.random.default_rng(3))
        assert all(value >= 0 for value in history)

    def test_seeded_is_reproducible(self):
        """Same seed gives the same series."""
        first = generate_performance_history(5000, -8, 24, np.random.default_rng(42))
        second = generate_performance_history(5000, -8, 24, np.random.default_rng(42))
        assert first == second

    def test_degenerate_point_counts(self):
        """Zero points is empty; one point is just the current value."""
        assert generate_performance_history(100, 5, 0) == []
        assert generate_performance_history(100, 5, 1) == [100]

    def test_build_performance(self):
        """Histories are built only for stated horizons."""
        performance = build_performance(
            10000, 12, return_5y=40, rng=np.random.default_rng(0)
        )

        assert len(performance.history_1y) == 12
        assert len(performance.history_5y) == 24
        assert performance.return_max is None
        assert performance.history_max is None


class TestCashflow:
    """Test cash flow aggregation."""

    def test_summarize_cashflow(self, liability):
        """Income less debt payments and budget limits."""
        income = [IncomeEntry("i1", "Salary", 4000), IncomeEntry("i2", "Freelance", 1000)]
        budgets = [BudgetEntry("b1", "Groceries", 1000), BudgetEntry("b2", "Transport", 500)]
        entries = [
            liability("l1", 12000, 10, 2, InterestType.SIMPLE),
            liability("l2", 3000),  # No rate or term
            FinancialEntry("a1", EntryType.ASSET, "Cash & Bank", "Checking", 8000),
        ]

        summary = summarize_cashflow(income, budgets, entries)

        assert summary.monthly_income == 5000
        assert summary.monthly_debt_payments == pytest.approx(600)
        assert summary.monthly_budget_limit == 1500
        assert summary.total_expenses == pytest.approx(2100)
        assert summary.net_flow == pytest.approx(2900)
        assert summary.savings_rate == pytest.approx(58)

    def test_zero_income_savings_rate(self, liability):
        """No income means a 0% savings rate, not a division error."""
        summary = summarize_cashflow(
            [], [BudgetEntry("b1", "Rent", 1500)], [liability("l1", 5000, 5, 3)]
        )
        assert summary.monthly_income == 0
        assert summary.savings_rate == 0
        assert summary.net_flow < 0

    def test_budget_progress(self):
        """Progress is capped at 100% and zero limits report 0%."""
        assert calculate_budget_progress(400, 1000) == 40
        assert calculate_budget_progress(1200, 1000) == 100
        assert calculate_budget_progress(50, 0) == 0

    def test_summarize_budget(self):
        """Allocated income is matched by category."""
        budget = BudgetEntry("b1", "Groceries", 600, spent=450)
        income = [
            IncomeEntry("i1", "Salary", 300, allocated_category="Groceries"),
            IncomeEntry("i2", "Bonus", 200, allocated_category="Groceries"),
            IncomeEntry("i3", "Salary", 4000),
        ]

        status = summarize_budget(budget, income)

        assert status.progress == pytest.approx(75)
        assert status.remaining == 150
        assert status.allocated_income == 500
        assert status.is_fully_funded


class TestNetWorth:
    """Test net worth totals."""

    def test_net_worth_and_allocation(self, liability):
        """Assets less liabilities; allocation grouped by category."""
        entries = [
            FinancialEntry("a1", EntryType.ASSET, "Cash & Bank", "Checking", 5000),
            FinancialEntry("a2", EntryType.ASSET, "Investments", "Index Fund", 20000),
            FinancialEntry("a3", EntryType.ASSET, "Cash & Bank", "Savings", 3000),
            liability("l1", 7000),
        ]

        totals = calculate_net_worth(entries)

        assert totals.total_assets == 28000
        assert totals.total_liabilities == 7000
        assert totals.net_worth == 21000
        assert calculate_asset_allocation(entries) == {
            "Cash & Bank": 8000,
            "Investments": 20000,
        }
