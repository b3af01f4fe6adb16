"""Header-to-field mapping for spreadsheet uploads."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Mapping, Sequence

from outreach.core.models import CANONICAL_FIELDS

logger = logging.getLogger(__name__)

UNMAPPED = "none"

ColumnMapping = Dict[str, str]

# Exhibition sheets arrive with Turkish or English headers. Keywords are
# matched as casefolded substrings, so "tel" also covers "Telefon".
FIELD_KEYWORDS: Dict[str, tuple[str, ...]] = {
    "company": ("firma", "company", "şirket", "sirket", "organization", "organisation", "business"),
    "representative": (
        "temsilci",
        "representative",
        "yetkili",
        "contact person",
        "contact name",
        "rep",
        "kişi",
    ),
    "phone": ("tel", "phone", "mobile", "cel", "gsm", "whatsapp"),
    "email": ("mail", "e-posta", "eposta"),
    "country": ("adres", "address", "country", "ülke", "ulke", "location", "city"),
    "website": ("web", "site", "url", "www"),
    "notes": ("açıklama", "açiklama", "aciklama", "note", "comment", "remark", "description"),
}


def _matches(header: str, keywords: Iterable[str]) -> bool:
    folded = header.casefold()
    return any(keyword in folded for keyword in keywords)


def propose_mapping(headers: Sequence[str]) -> ColumnMapping:
    """Guess which header feeds each canonical field.

    Headers are scanned left to right and the first one containing any of the
    field's keywords wins. Fields without a match map to ``"none"``.
    """

    mapping: ColumnMapping = {}
    for field in CANONICAL_FIELDS:
        keywords = FIELD_KEYWORDS[field]
        mapping[field] = next(
            (header for header in headers if _matches(str(header or ""), keywords)),
            UNMAPPED,
        )
    logger.debug("Proposed column mapping %s", mapping)
    return mapping


def apply_overrides(mapping: Mapping[str, str], overrides: Mapping[str, str]) -> ColumnMapping:
    """Return a copy of ``mapping`` with operator choices applied."""

    unknown = sorted(set(overrides) - set(CANONICAL_FIELDS))
    if unknown:
        raise ValueError(f"Unknown field(s) in mapping override: {', '.join(unknown)}")

    updated = dict(mapping)
    for field, header in overrides.items():
        updated[field] = header or UNMAPPED
    return updated


def parse_override(text: str) -> tuple[str, str]:
    """Split a ``field=Header`` CLI argument."""

    if "=" not in text:
        raise ValueError(f"Expected FIELD=HEADER, got {text!r}")
    field, header = text.split("=", 1)
    return field.strip().lower(), header.strip()
