"""
CSV export of financial entries.
"""

import csv
import io
import enum
from datetime import date, datetime
from typing import List, Optional

from wealthtrack.calculations.models import FinancialEntry

CSV_HEADERS = [
    "ID",
    "Type",
    "Category",
    "Name",
    "Current Value",
    "Currency",
    "Last Updated",
    "Original Value",
    "Purchase Date",
    "Depreciation Rate (%)",
    "Depreciation Method",
    "Interest Rate (%)",
    "Term (Years)",
    "Interest Type",
    "1Y Return (%)",
    "5Y Return (%)",
    "Max Return (%)",
]


def format_csv_value(value) -> str:
    """Render a field; missing values are empty and whole floats drop the .0."""
    if value is None:
        return ""
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def entry_to_row(entry: FinancialEntry, currency: str) -> List[str]:
    performance = entry.performance
    row = [
        entry.id,
        entry.type,
        entry.category,
        entry.name,
        entry.value,
        currency,
        entry.updated_at,
        entry.original_value,
        entry.purchase_date,
        entry.depreciation_rate,
        entry.depreciation_method,
        entry.interest_rate,
        entry.term_years,
        entry.interest_type,
        performance.return_1y if performance else None,
        performance.return_5y if performance else None,
        performance.return_max if performance else None,
    ]
    return [format_csv_value(value) for value in row]


def export_entries_csv(entries: List[FinancialEntry], currency: str) -> str:
    """
    Render entries as CSV text.

    Fields containing a comma, quote or newline are quoted, with embedded
    quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for entry in entries:
        writer.writerow(entry_to_row(entry, currency))
    return buffer.getvalue()


def export_filename(on: Optional[date] = None) -> str:
    """Download filename for an export made on the given day."""
    if on is None:
        on = date.today()
    return f"wealthtrack_export_{on.isoformat()}.csv"
