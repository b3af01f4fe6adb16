"""Row layouts for exporting archived interactions."""
from typing import Any, Dict, Iterable, List

from outreach.core.models import ArchiveEntry
from outreach.processing.links import chat_text

ARCHIVE_HEADERS = ["Company", "Representative", "Phone", "Email", "Notes", "Status"]

DRAFT_HEADERS = ARCHIVE_HEADERS + ["Channel", "Language", "Subject", "Email_Body", "Chat_Body"]


def entry_to_row(entry: ArchiveEntry) -> Dict[str, Any]:
    customer = entry.customer
    return {
        "Company": customer.company,
        "Representative": customer.representative,
        "Phone": customer.phone,
        "Email": customer.email,
        "Notes": customer.notes,
        "Status": entry.status,
    }


def entry_to_draft_row(entry: ArchiveEntry) -> Dict[str, Any]:
    """Archive row extended with the draft that was sent."""

    row = entry_to_row(entry)
    row.update(
        {
            "Channel": entry.message.channel,
            "Language": entry.message.language,
            "Subject": entry.message.subject,
            "Email_Body": entry.message.body,
            "Chat_Body": chat_text(entry.message),
        }
    )
    return row


def entries_to_rows(entries: Iterable[ArchiveEntry]) -> List[Dict[str, Any]]:
    return [entry_to_row(entry) for entry in entries]


def archive_to_csv(entries: Iterable[ArchiveEntry]) -> str:
    """Render the archive as CSV text.

    Every field is wrapped in double quotes verbatim. Embedded quotes are not
    escaped, so notes containing ``"`` produce a malformed row.
    """

    lines = [",".join(ARCHIVE_HEADERS)]
    for row in entries_to_rows(entries):
        lines.append(",".join(f'"{row[header]}"' for header in ARCHIVE_HEADERS))
    return "\n".join(lines)
