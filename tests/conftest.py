"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os
from datetime import datetime, timedelta, timezone

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from wealthtrack.calculations.models import EntryType, FinancialEntry

AS_OF = datetime(2025, 1, 1, tzinfo=timezone.utc)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def as_of():
    """Fixed evaluation instant."""
    return AS_OF


@pytest.fixture
def depreciating_asset():
    """Factory for depreciating assets purchased a number of years before AS_OF."""

    def make(method, rate, original_value, age_years):
        return FinancialEntry(
            id="asset-1",
            type=EntryType.ASSET,
            category="Vehicles",
            name="Test Asset",
            value=original_value,
            updated_at=AS_OF,
            is_depreciating=True,
            original_value=original_value,
            purchase_date=AS_OF - timedelta(days=365.25 * age_years),
            depreciation_rate=rate,
            depreciation_method=method,
        )

    return make


@pytest.fixture
def liability():
    """Factory for liabilities."""

    def make(id, value, interest_rate=None, term_years=None, interest_type=None, original_value=None):
        return FinancialEntry(
            id=id,
            type=EntryType.LIABILITY,
            category="Personal Loans",
            name=f"Loan {id}",
            value=value,
            interest_rate=interest_rate,
            term_years=term_years,
            interest_type=interest_type,
            original_value=original_value,
        )

    return make
