"""
Data export API endpoint.
"""

from typing import List, Optional

from fastapi import APIRouter
from fastapi.responses import Response
from pydantic import BaseModel

from wealthtrack.api.schemas import EntryInput, to_entries
from wealthtrack.config import get_settings
from wealthtrack.services.export import export_entries_csv, export_filename

router = APIRouter()


class ExportInput(BaseModel):
    """Input for CSV export."""

    entries: List[EntryInput]
    currency: Optional[str] = None


@router.post("/csv")
async def export_csv(inputs: ExportInput):
    """Download entries as a CSV file."""
    currency = inputs.currency or get_settings().default_currency
    content = export_entries_csv(to_entries(inputs.entries), currency)

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
