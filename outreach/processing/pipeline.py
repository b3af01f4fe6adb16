"""Batch pipeline: ingest a lead file, draft messages, archive, and export."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from outreach.core.models import GenerationContext
from outreach.core.utils import default_context, load_env_file
from outreach.ingestion.loader import load_customers
from outreach.processing.drafting import DraftGenerator, generate_all
from outreach.reporting.sinks import push_to_google_sheets, write_archive_csv, write_excel
from outreach.reporting.templates import entries_to_rows, entry_to_draft_row
from outreach.review.workspace import Workspace

DEFAULT_SERVICE_ACCOUNT_PATHS = [
    Path("secrets/service_account.json"),
    Path("credentials/service_account.json"),
]
DEFAULT_SHEETS_ENV_FILE = Path("secrets/sheets.env")
_SHEETS_ENV_LOADED = False


logger = logging.getLogger(__name__)


def _ensure_sheets_env() -> None:
    """Populate Google Sheets env vars from secrets/sheets.env."""

    global _SHEETS_ENV_LOADED
    if _SHEETS_ENV_LOADED:
        return
    _SHEETS_ENV_LOADED = True

    env_path = Path(os.getenv("GOOGLE_SHEETS_ENV_FILE", DEFAULT_SHEETS_ENV_FILE))
    load_env_file(env_path)


def _default_service_account_path() -> Optional[Path]:
    for candidate in DEFAULT_SERVICE_ACCOUNT_PATHS:
        if candidate.exists():
            return candidate
    return None


def _resolve_sheets_target(
    spreadsheet_id: Optional[str],
    worksheet_title: str,
    explicit_account_path: Optional[Path],
) -> Dict[str, Any]:
    _ensure_sheets_env()
    if not spreadsheet_id:
        raise ValueError("spreadsheet_id is required when sink='sheets'")

    account_path = explicit_account_path or _default_service_account_path()
    if not account_path:
        raise ValueError(
            "Provide --service-account pointing to your Google credentials or place a file at "
            f"{DEFAULT_SERVICE_ACCOUNT_PATHS[0]}"
        )

    return {
        "spreadsheet_id": spreadsheet_id,
        "worksheet_title": worksheet_title,
        "service_account_path": account_path,
    }


def auto_sheets_target() -> Optional[Dict[str, Any]]:
    _ensure_sheets_env()
    if os.getenv("GOOGLE_SHEETS_AUTO_SYNC", "0") != "1":
        return None

    spreadsheet_id = os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID")
    if not spreadsheet_id:
        logger.warning("Auto Sheets sync is enabled but GOOGLE_SHEETS_SPREADSHEET_ID is missing.")
        return None

    worksheet = os.getenv("GOOGLE_SHEETS_WORKSHEET", "Sheet1")
    account_env = os.getenv("GOOGLE_SHEETS_SERVICE_ACCOUNT")
    account_path = Path(account_env) if account_env else _default_service_account_path()
    if not account_path:
        logger.warning("Auto Sheets sync is enabled but no service account JSON was found.")
        return None

    return {
        "spreadsheet_id": spreadsheet_id,
        "worksheet_title": worksheet,
        "service_account_path": account_path,
    }


def run_pipeline(
    input_path: Path,
    output_path: Path,
    sink: str = "csv",
    language: str = "en",
    overrides: Optional[Mapping[str, str]] = None,
    context: Optional[GenerationContext] = None,
    batch_size: Optional[int] = None,
    spreadsheet_id: str | None = None,
    worksheet_title: str = "Sheet1",
    service_account_path: Path | None = None,
    excel_path: Path | None = None,
    generator: Optional[DraftGenerator] = None,
    channel: Optional[str] = None,
) -> Path:
    """Load leads, draft a message for each, archive them, and write the CSV."""

    logger.info("Pipeline starting for %s", input_path)
    customers = load_customers(input_path, overrides)
    if not customers:
        message = (
            f"No customers found in {input_path}. "
            "Verify the column mapping and that rows include a company, phone, or email."
        )
        logger.error(message)
        raise ValueError(message)

    workspace = Workspace(context or default_context())
    workspace.load(customers)
    generate_all(workspace, generator or DraftGenerator(), language=language, batch_size=batch_size)

    for customer in workspace.customers:
        workspace.archive(customer.id, channel)
    entries = workspace.archive_entries
    logger.info("Archived %d of %d customer(s)", len(entries), len(customers))

    write_archive_csv(entries, output_path)
    logger.info("Wrote CSV output to %s", output_path)

    if sink == "excel":
        excel_target = excel_path or output_path.with_suffix(".xlsx")
        write_excel([entry_to_draft_row(entry) for entry in entries], excel_target)
        logger.info("Wrote Excel output to %s", excel_target)
    elif sink == "sheets":
        sheets_target = _resolve_sheets_target(
            spreadsheet_id=spreadsheet_id,
            worksheet_title=worksheet_title,
            explicit_account_path=service_account_path,
        )
        _push_rows_to_sheets(entries_to_rows(entries), sheets_target)
    else:
        _maybe_auto_sync(entries_to_rows(entries))
    return output_path


def _push_rows_to_sheets(rows: Iterable[Dict[str, Any]], target: Dict[str, Any]) -> None:
    push_to_google_sheets(
        rows,
        spreadsheet_id=target["spreadsheet_id"],
        worksheet_title=target["worksheet_title"],
        service_account_path=target["service_account_path"],
    )


def _maybe_auto_sync(rows: List[Dict[str, Any]]) -> None:
    target = auto_sheets_target()
    if not target:
        return
    _push_rows_to_sheets(rows, target)
    logger.info(
        "Pushed %d rows to Google Sheets document %s (worksheet %s)",
        len(rows),
        target["spreadsheet_id"],
        target["worksheet_title"],
    )
