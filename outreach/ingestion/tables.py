"""Readers for spreadsheet files and pasted spreadsheet text."""
from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from outreach.ingestion.normalizer import cell_text

logger = logging.getLogger(__name__)

Table = Tuple[List[str], List[List[Any]]]

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
DELIMITED_SUFFIXES = {".csv", ".tsv", ".txt"}
IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp"}


def _is_blank_row(row: Sequence[Any]) -> bool:
    return all(not cell_text(cell) for cell in row)


def _split_header(rows: Iterable[Sequence[Any]]) -> Table:
    """Use the first non-blank row as headers and keep the rest verbatim."""

    remaining = [list(row) for row in rows]
    while remaining and _is_blank_row(remaining[0]):
        remaining.pop(0)
    if not remaining:
        return [], []
    headers = [cell_text(cell) for cell in remaining[0]]
    return headers, remaining[1:]


def read_excel(path: Path) -> Table:
    """Read the first worksheet of an Excel workbook."""

    from openpyxl import load_workbook

    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return _split_header(sheet.iter_rows(values_only=True))
    finally:
        workbook.close()


def _sniff_dialect(sample: str, default_delimiter: str) -> csv.Dialect | type[csv.Dialect]:
    try:
        return csv.Sniffer().sniff(sample, delimiters=",;\t")
    except csv.Error:
        return csv.excel_tab if default_delimiter == "\t" else csv.excel


def read_delimited(path: Path) -> Table:
    """Read CSV/TSV text, sniffing the delimiter where possible."""

    text = path.read_text(encoding="utf-8-sig")
    default = "\t" if path.suffix.lower() in {".tsv", ".txt"} else ","
    dialect = _sniff_dialect(text[:4096], default)
    return _split_header(csv.reader(io.StringIO(text), dialect))


def read_table(path: Path) -> Table:
    """Load ``(headers, rows)`` from a spreadsheet-like file."""

    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        headers, rows = read_excel(path)
    elif suffix in DELIMITED_SUFFIXES:
        headers, rows = read_delimited(path)
    else:
        raise ValueError(f"Unsupported spreadsheet format: {path.suffix or path.name}")

    logger.info("Read %d row(s) with headers %s from %s", len(rows), headers, path.name)
    return headers, rows


def split_pasted_table(text: str) -> Optional[Table]:
    """Split text copied out of a spreadsheet into headers and rows.

    Cells holding line breaks arrive quoted, so the paste is parsed as
    tab-separated CSV rather than split on newlines. Returns ``None`` when the
    paste has no tab structure, in which case the caller falls back to AI text
    extraction.
    """

    records = [row for row in csv.reader(io.StringIO(text), dialect=csv.excel_tab) if not _is_blank_row(row)]
    if len(records) < 2 or not all(len(row) > 1 for row in records[:2]):
        return None
    return _split_header(records)
