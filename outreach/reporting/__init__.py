"""Export layouts and destinations for archived interactions."""
from outreach.reporting.sinks import push_to_google_sheets, write_archive_csv, write_excel
from outreach.reporting.templates import (
    ARCHIVE_HEADERS,
    DRAFT_HEADERS,
    archive_to_csv,
    entries_to_rows,
    entry_to_draft_row,
)

__all__ = [
    "ARCHIVE_HEADERS",
    "DRAFT_HEADERS",
    "archive_to_csv",
    "entries_to_rows",
    "entry_to_draft_row",
    "push_to_google_sheets",
    "write_archive_csv",
    "write_excel",
]
