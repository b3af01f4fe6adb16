"""Ingestion of lead tables from spreadsheets, pasted text, and photos."""
from outreach.ingestion.extraction import ExtractionError, extract_from_image, extract_from_text
from outreach.ingestion.loader import customers_from_table, load_customers, load_pasted_text
from outreach.ingestion.mapping import UNMAPPED, apply_overrides, parse_override, propose_mapping
from outreach.ingestion.normalizer import normalize_rows
from outreach.ingestion.tables import read_table, split_pasted_table

__all__ = [
    "ExtractionError",
    "UNMAPPED",
    "apply_overrides",
    "customers_from_table",
    "extract_from_image",
    "extract_from_text",
    "load_customers",
    "load_pasted_text",
    "normalize_rows",
    "parse_override",
    "propose_mapping",
    "read_table",
    "split_pasted_table",
]
