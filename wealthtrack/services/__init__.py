"""
Application services module.
"""

from wealthtrack.services.advisor import AdvisorService, get_advisor_service
from wealthtrack.services.export import export_entries_csv, export_filename

__all__ = [
    "AdvisorService",
    "get_advisor_service",
    "export_entries_csv",
    "export_filename",
]
