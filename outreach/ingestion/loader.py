"""Entry points that turn an uploaded source into customers."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional

from outreach.core.models import Customer
from outreach.ingestion.extraction import extract_from_image_file, extract_from_text
from outreach.ingestion.mapping import apply_overrides, propose_mapping
from outreach.ingestion.normalizer import normalize_rows
from outreach.ingestion.tables import IMAGE_SUFFIXES, Table, read_table, split_pasted_table
from outreach.processing.llm import ChatClient

logger = logging.getLogger(__name__)


def customers_from_table(
    table: Table, overrides: Optional[Mapping[str, str]] = None, source_tag: str = "file"
) -> List[Customer]:
    """Map and normalize a header/rows table."""

    headers, rows = table
    mapping = propose_mapping(headers)
    if overrides:
        mapping = apply_overrides(mapping, overrides)
    logger.info("Using column mapping %s", mapping)
    return normalize_rows(headers, rows, mapping, source_tag=source_tag)


def load_pasted_text(
    text: str,
    overrides: Optional[Mapping[str, str]] = None,
    client: Optional[ChatClient] = None,
) -> List[Customer]:
    """Tab-separated pastes are mapped locally; anything else goes to the model."""

    table = split_pasted_table(text)
    if table is not None:
        return customers_from_table(table, overrides, source_tag="txt")
    return extract_from_text(text, client=client)


def load_customers(
    path: Path,
    overrides: Optional[Mapping[str, str]] = None,
    client: Optional[ChatClient] = None,
) -> List[Customer]:
    """Load customers from a spreadsheet, pasted-text file, or table photo."""

    logger.info("Loading customers from %s", path)
    suffix = path.suffix.lower()
    if suffix in IMAGE_SUFFIXES:
        return extract_from_image_file(path, client=client)
    if suffix == ".txt":
        return load_pasted_text(path.read_text(encoding="utf-8-sig"), overrides, client=client)
    return customers_from_table(read_table(path), overrides)
