"""Turn mapped spreadsheet rows into canonical customer records."""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, List, Mapping, Sequence

from outreach.core.models import CANONICAL_FIELDS, Customer
from outreach.ingestion.mapping import UNMAPPED

logger = logging.getLogger(__name__)

_STAMP_LOCK = threading.Lock()
_LAST_STAMP = 0


def _batch_stamp() -> int:
    """Return a millisecond stamp that never repeats within the process."""

    global _LAST_STAMP
    with _STAMP_LOCK:
        stamp = max(time.time_ns() // 1_000_000, _LAST_STAMP + 1)
        _LAST_STAMP = stamp
    return stamp


def make_customer_id(source_tag: str, stamp: int, index: int) -> str:
    return f"cust-{source_tag}-{stamp}-{index}"


def cell_text(value: Any) -> str:
    """Coerce a spreadsheet cell to trimmed text."""

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Excel stores long phone numbers as floats.
        return str(int(value))
    return str(value).strip()


def normalize_rows(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    mapping: Mapping[str, str],
    source_tag: str = "file",
) -> List[Customer]:
    """Build customers from raw rows using a confirmed column mapping.

    Rows without a company, phone, or email are dropped; rows that only lack
    some of them are kept.
    """

    header_index = {}
    for position, header in enumerate(headers):
        header_index.setdefault(header, position)

    stamp = _batch_stamp()
    customers: List[Customer] = []
    dropped = 0
    for row_number, row in enumerate(rows):
        values = {}
        for field in CANONICAL_FIELDS:
            header = mapping.get(field, UNMAPPED)
            position = header_index.get(header) if header != UNMAPPED else None
            if position is None or position >= len(row):
                values[field] = ""
            else:
                values[field] = cell_text(row[position])

        customer = Customer(id=make_customer_id(source_tag, stamp, row_number), **values)
        if customer.is_blank():
            dropped += 1
            continue
        customers.append(customer)

    if dropped:
        logger.debug("Dropped %d row(s) without company, phone, or email", dropped)
    logger.info("Normalized %d customer(s) from %d row(s)", len(customers), len(rows))
    return customers


def customers_from_payload(items: Sequence[Mapping[str, Any]], source_tag: str) -> List[Customer]:
    """Build customers from JSON objects keyed by canonical field names.

    Missing or null keys become empty strings. No rows are filtered here;
    model output is trusted to contain only real leads.
    """

    stamp = _batch_stamp()
    customers: List[Customer] = []
    for index, item in enumerate(items):
        values = {field: cell_text(item.get(field)) for field in CANONICAL_FIELDS}
        customers.append(Customer(id=make_customer_id(source_tag, stamp, index), **values))
    return customers
