"""AI-backed extraction of customer rows from table photos and free text."""
from __future__ import annotations

import base64
import logging
import mimetypes
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from outreach.core.models import Customer
from outreach.ingestion.normalizer import customers_from_payload
from outreach.processing.llm import ChatClient

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/(png|jpeg|jpg|webp);base64,")

COLUMN_HINT = (
    "Columns map as follows: Firma->company, Temsilci->representative, Tel->phone, "
    "Adres->country, Mail->email, Web site->website, Açıklama->notes. "
    "Açıklama (notes) is the most important context; translate it to English if it is Turkish. "
    "Use an empty string for any empty field."
)

RESPONSE_SHAPE = (
    'Respond ONLY with a JSON object {"customers": [...]} where every item has the string keys '
    "company, representative, phone, country, email, website, notes. company and notes are required."
)


class ExtractionError(ValueError):
    """Raised when a source yields no usable customer rows."""


def _customers_from_reply(reply: Dict[str, Any]) -> List[Dict[str, Any]]:
    items = reply.get("customers")
    if not isinstance(items, list):
        raise ValueError("Extraction reply is missing the 'customers' array")
    return [item for item in items if isinstance(item, dict)]


def extract_from_image(
    image: bytes | str, mime_type: str = "image/png", client: Optional[ChatClient] = None
) -> List[Customer]:
    """Read a photographed lead table into customers.

    ``image`` may be raw bytes or base64 text, with or without a data-URL
    prefix.
    """

    if isinstance(image, bytes):
        encoded = base64.b64encode(image).decode("ascii")
    else:
        encoded = DATA_URL_PREFIX.sub("", image.strip())

    client = client or ChatClient()
    messages = [
        {
            "role": "system",
            "content": "You are a precise data extraction assistant. You read tabular data from images. "
            + RESPONSE_SHAPE,
        },
        {
            "role": "user",
            "content": [
                {"type": "text", "text": "Extract the customer rows from this table image. " + COLUMN_HINT},
                {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{encoded}"}},
            ],
        },
    ]
    try:
        items = _customers_from_reply(client.complete_json(messages))
    except Exception as exc:
        logger.exception("Image extraction failed")
        raise ExtractionError("Failed to extract data from image.") from exc

    customers = customers_from_payload(items, source_tag="img")
    if not customers:
        raise ExtractionError("No data found in image. Please try a clearer image.")
    logger.info("Extracted %d customer(s) from image", len(customers))
    return customers


def extract_from_text(text: str, client: Optional[ChatClient] = None) -> List[Customer]:
    """Parse free-form or loosely tabular text into customers."""

    client = client or ChatClient()
    messages = [
        {
            "role": "system",
            "content": "You convert raw spreadsheet text (tab-separated or unstructured) into structured "
            "JSON and handle Turkish headers and values. " + RESPONSE_SHAPE,
        },
        {
            "role": "user",
            "content": "Parse this raw text, most likely copied from Excel. "
            + COLUMN_HINT
            + "\n\nRaw text:\n"
            + text,
        },
    ]
    try:
        items = _customers_from_reply(client.complete_json(messages))
    except Exception as exc:
        logger.exception("Text extraction failed")
        raise ExtractionError("Failed to parse text data.") from exc

    customers = customers_from_payload(items, source_tag="txt")
    if not customers:
        raise ExtractionError("Could not identify customer data in the pasted text.")
    logger.info("Extracted %d customer(s) from text", len(customers))
    return customers


def extract_from_image_file(path: Path, client: Optional[ChatClient] = None) -> List[Customer]:
    mime_type = mimetypes.guess_type(path.name)[0] or "image/png"
    return extract_from_image(path.read_bytes(), mime_type=mime_type, client=client)
