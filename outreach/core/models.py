"""Data models shared by ingestion, drafting, and review."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

CANONICAL_FIELDS = (
    "company",
    "representative",
    "phone",
    "email",
    "country",
    "website",
    "notes",
)

LANGUAGES = ("en", "ar")
CHANNELS = ("email", "whatsapp")


@dataclass
class Customer:
    """A single exhibition lead after normalization.

    Every field is plain text; missing values are empty strings.
    """

    id: str
    company: str = ""
    representative: str = ""
    phone: str = ""
    country: str = ""
    email: str = ""
    website: str = ""
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dictionary representation."""

        return asdict(self)

    def is_blank(self) -> bool:
        """True when the record carries no company, phone, or email."""

        return not (self.company or self.phone or self.email)


@dataclass
class GeneratedMessage:
    """An outreach draft for one customer."""

    subject: str
    body: str
    channel: str = "email"
    chat_body: Optional[str] = None
    language: str = "en"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GenerationContext:
    """Campaign details that parameterize every draft request."""

    sender_company: str = ""
    event_name: str = ""
    event_location: str = ""
    sender_name: str = ""


@dataclass
class ArchiveEntry:
    """A completed interaction: the customer and the draft that was sent."""

    customer: Customer
    message: GeneratedMessage
    status: str = field(default="Processed")
