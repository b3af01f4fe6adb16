"""Deep links for mail and chat handlers."""
from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import quote

from outreach.core.models import CHANNELS, Customer, GeneratedMessage
from outreach.processing.phones import dial_digits, segment_phones

CHAT_VARIANTS = ("web", "app", "business")
BUSINESS_PACKAGE = "com.whatsapp.w4b"

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_SAFE = "-_.!~*'()"


def encode_component(text: str) -> str:
    return quote(text or "", safe=_URI_SAFE)


def chat_text(message: GeneratedMessage) -> str:
    """Chat-specific body when the draft has one, otherwise the default body."""

    return message.chat_body or message.body


def build_chat_link(phone: str, body_text: str, variant: str = "web") -> str:
    """Build a chat deep link for one phone number.

    ``web`` is the universal link, ``app`` opens the installed app directly,
    and ``business`` is an Android intent pinned to the business app.
    """

    number = dial_digits(phone)
    text = encode_component(body_text)
    if variant == "web":
        return f"https://wa.me/{number}?text={text}"
    if variant == "app":
        return f"whatsapp://send?phone={number}&text={text}"
    if variant == "business":
        return (
            f"intent://send?phone={number}&text={text}"
            f"#Intent;package={BUSINESS_PACKAGE};scheme=whatsapp;end"
        )
    raise ValueError(f"Unknown chat link variant: {variant!r}")


def build_mailto(email: str, message: GeneratedMessage) -> str:
    return (
        f"mailto:{email}?subject={encode_component(message.subject)}"
        f"&body={encode_component(message.body)}"
    )


def website_url(website: str) -> str:
    """Normalize a website cell into an https link."""

    host = (website or "").strip().replace("http://", "").replace("https://", "")
    return f"https://{host}" if host else ""


def clipboard_text(message: GeneratedMessage, channel: Optional[str] = None) -> str:
    """Text placed on the clipboard for a channel, the draft's own by default."""

    channel = channel or message.channel
    if channel not in CHANNELS:
        raise ValueError(f"Unknown channel: {channel!r}")
    if channel == "email":
        return f"Subject: {message.subject}\n\n{message.body}"
    return chat_text(message)


def contact_links(customer: Customer, message: GeneratedMessage) -> Dict[str, object]:
    """All dispatch links for one customer: mail plus chat links per number."""

    body = chat_text(message)
    chats: List[Dict[str, str]] = [
        {"number": number, **{variant: build_chat_link(number, body, variant) for variant in CHAT_VARIANTS}}
        for number in segment_phones(customer.phone)
    ]
    return {
        "mailto": build_mailto(customer.email, message) if customer.email else "",
        "website": website_url(customer.website),
        "chats": chats,
    }
