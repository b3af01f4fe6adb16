"""Drafting, phone handling, and link construction."""
from outreach.processing.drafting import (
    DraftGenerator,
    draft_customer,
    fallback_message,
    generate_all,
    switch_language,
    template_draft,
)
from outreach.processing.links import (
    build_chat_link,
    build_mailto,
    chat_text,
    clipboard_text,
    contact_links,
    website_url,
)
from outreach.processing.phones import normalize_phone, segment_phones

__all__ = [
    "DraftGenerator",
    "build_chat_link",
    "build_mailto",
    "chat_text",
    "clipboard_text",
    "contact_links",
    "draft_customer",
    "fallback_message",
    "generate_all",
    "switch_language",
    "normalize_phone",
    "segment_phones",
    "template_draft",
    "website_url",
]
