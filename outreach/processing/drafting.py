"""AI drafting of follow-up emails and chat messages."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Sequence

from outreach.core.models import LANGUAGES, Customer, GeneratedMessage, GenerationContext
from outreach.core.utils import get_config_value, get_int_config
from outreach.processing.llm import ChatClient
from outreach.review.workspace import GenerationTicket, Workspace

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 3
FALLBACK_SUBJECT = "Follow up"
FALLBACK_BODY = "Error generating draft."
REPLY_KEYS = ("emailSubject", "emailBody", "whatsappBody")


def fallback_message(language: str = "en") -> GeneratedMessage:
    """Neutral placeholder stored when drafting fails."""

    return GeneratedMessage(subject=FALLBACK_SUBJECT, body=FALLBACK_BODY, channel="email", language=language)


def recipient_first_name(customer: Customer) -> str:
    """Best guess at the recipient's first name.

    Uses the representative column, then the local part of the email
    address (``ahmad.ghazzoul@...`` -> ``Ahmad``).
    """

    if customer.representative.strip():
        return customer.representative.split()[0]
    local = customer.email.split("@", 1)[0] if "@" in customer.email else ""
    for token in local.replace("_", ".").replace("-", ".").split("."):
        if token.isalpha() and len(token) > 1:
            return token.capitalize()
    return ""


def _chat_instructions(context: GenerationContext, language: str) -> str:
    sender = context.sender_name or "the sender"
    if language == "ar":
        return (
            "Create a WhatsApp sequence in Arabic with a friendly, respectful Egyptian business tone. "
            "Write 4-5 short, separate lines suitable for chat. Start strictly with \"السلام عليكم\". "
            "Address the recipient with a respectful title (أستاذ, or باشمهندس when the company or notes "
            "suggest engineering or construction) and use حضرتك rather than انت. If the name is unknown, "
            "use يا فندم. Flow: greeting, a respectful check-in, "
            f"introduce {sender} from {context.sender_company}, mention the visit to "
            f"{context.event_name}, then refer directly to the interest in the notes. "
            "Be warm and professional, not bureaucratic."
        )
    return (
        "Create a WhatsApp sequence in English. Keep it casual and direct in 4-5 short, separate lines. "
        "No 'Dear' and no 'Sincerely'. Flow: greet the recipient by first name, ask how things are going, "
        f"introduce {sender} from {context.sender_company}, mention meeting at {context.event_name}, "
        "then refer to the specific request in the notes."
    )


def _email_instructions(context: GenerationContext, language: str) -> str:
    if language == "ar":
        return (
            "Write a professional business email in Arabic. Address the recipient as السيد الأستاذ/ or "
            "المهندس/ followed by the name. The subject must reference the product or interest in the notes "
            f"and the event {context.event_name}. Mention that we met at {context.event_name} in "
            f"{context.event_location}."
        )
    return (
        "Write a professional business email in English. The subject line must name the specific product "
        f"or interest from the notes together with {context.event_name} or {context.sender_company}; "
        "avoid generic subjects such as 'Hello' or 'Follow up'. Mention that we met at "
        f"{context.event_name} in {context.event_location}."
    )


def build_prompt(customer: Customer, context: GenerationContext, language: str = "en") -> str:
    """Compose the user prompt for one customer."""

    sender = context.sender_name or "Sales team"
    return "\n".join(
        [
            f"Sender: {sender}, Export Executive at {context.sender_company}.",
            f'Recipient Name: "{customer.representative}".',
            f'Recipient Email: "{customer.email}".',
            "If the recipient name is missing, infer the first name from the email address.",
            f'Company: "{customer.company}".',
            f'Specific Notes from Fair: "{customer.notes}".',
            f'Campaign Context: Exhibition "{context.event_name}" in "{context.event_location}".',
            "",
            "Task:",
            f"1. {_email_instructions(context, language)}",
            f"2. {_chat_instructions(context, language)}",
            "",
            "Output a JSON object with 'emailSubject', 'emailBody', and 'whatsappBody'. "
            "In 'whatsappBody' separate the short lines with newline characters so they read like a chat history.",
        ]
    )


def template_draft(customer: Customer, context: GenerationContext, language: str = "en") -> GeneratedMessage:
    """Deterministic draft used when AI drafting is switched off."""

    name = recipient_first_name(customer)
    event = context.event_name or "the exhibition"
    sender = context.sender_name or context.sender_company or "our team"
    company = context.sender_company or "our company"
    notes = customer.notes.strip()

    if language == "ar":
        title = f"أستاذ {name}" if name else "يا فندم"
        subject = f"بخصوص زيارتكم لمعرض {event}"
        interest = f"بخصوص اهتمام حضرتك بـ {notes}" if notes else "يسعدنا التواصل مع حضرتك"
        body = "\n\n".join(
            [
                f"السيد الأستاذ/ {name}" if name else "السيد الأستاذ",
                f"سعدنا بلقائكم في معرض {event}. {interest}.",
                f"مع خالص التحية،\n{sender}\n{company}",
            ]
        )
        chat_lines = [
            "السلام عليكم",
            f"أخبار حضرتك إيه {title}",
            f"مع حضرتك {sender} من شركة {company}",
            f"حضرتك شرفتنا في معرض {event}",
            interest,
        ]
    else:
        subject = f"{notes[:60]} - {event}" if notes else f"Great meeting you at {event}"
        greeting = f"Hello {name}," if name else "Hello,"
        interest = f"Regarding your interest in {notes}." if notes else "It was a pleasure to meet you."
        location = f" in {context.event_location}" if context.event_location else ""
        body = "\n\n".join(
            [
                greeting,
                f"Thank you for visiting us at {event}{location}. {interest}",
                "I would be happy to share prices and details at your convenience.",
                f"Best regards,\n{sender}\n{company}",
            ]
        )
        chat_lines = [
            f"Hello {name}".strip(),
            "How is everything going?",
            f"This is {sender} from {company}",
            f"We met at {event}",
            interest,
        ]

    return GeneratedMessage(
        subject=subject,
        body=body,
        channel="email",
        chat_body="\n".join(chat_lines),
        language=language,
    )


class DraftGenerator:
    """Produce a draft per customer, never raising to the caller."""

    def __init__(self, client: Optional[ChatClient] = None) -> None:
        self.client = client or ChatClient()
        self.disabled = get_config_value("AI_DRAFTING_DISABLED", "0") == "1"

    def generate(
        self, customer: Customer, context: GenerationContext, language: str = "en"
    ) -> GeneratedMessage:
        if language not in LANGUAGES:
            logger.warning("Unsupported language %r; drafting in English", language)
            language = "en"

        try:
            if self.disabled or not self.client.available:
                logger.debug("AI drafting unavailable; using template for %s", customer.id)
                return template_draft(customer, context, language)
            return self._call_model(customer, context, language)
        except Exception:
            logger.exception("Draft generation failed for %s", customer.id)
            return fallback_message(language)

    def _call_model(self, customer: Customer, context: GenerationContext, language: str) -> GeneratedMessage:
        reply = self.client.complete_json(
            [
                {
                    "role": "system",
                    "content": "You write exhibition follow-up messages for a sales team. "
                    "Respond ONLY with a JSON object containing " + ", ".join(REPLY_KEYS) + ".",
                },
                {"role": "user", "content": build_prompt(customer, context, language)},
            ],
            temperature=0.7,
        )
        missing = [key for key in REPLY_KEYS if not isinstance(reply.get(key), str)]
        if missing:
            raise ValueError(f"Draft reply missing {', '.join(missing)}")
        return GeneratedMessage(
            subject=reply["emailSubject"],
            body=reply["emailBody"],
            channel="email",
            chat_body=reply["whatsappBody"],
            language=language,
        )


def draft_customer(
    workspace: Workspace, generator: DraftGenerator, customer_id: str, language: str = "en"
) -> bool:
    """Generate (or regenerate) the draft for one active customer."""

    customer = workspace.customer(customer_id)
    if customer is None:
        return False
    ticket = workspace.begin_generation(customer_id, language)
    message = generator.generate(customer, ticket.context, ticket.language)
    return workspace.complete_generation(ticket, message)


def switch_language(
    workspace: Workspace, generator: DraftGenerator, customer_id: str, language: str
) -> bool:
    """Redraft a customer's existing draft in another language.

    Does nothing when there is no draft yet or it is already in ``language``.
    """

    current = workspace.drafts.get(customer_id)
    if current is None or current.language == language:
        return False
    return draft_customer(workspace, generator, customer_id, language)


def _batches(items: Sequence[Customer], size: int) -> List[Sequence[Customer]]:
    return [items[start : start + size] for start in range(0, len(items), size)]


def generate_all(
    workspace: Workspace,
    generator: DraftGenerator,
    language: str = "en",
    batch_size: Optional[int] = None,
    progress_callback: Optional[Callable[[float], None]] = None,
) -> int:
    """Draft every customer that has no draft yet, a few at a time.

    Each batch runs concurrently and finishes before the next one starts.
    Returns the number of drafts stored.
    """

    width = max(1, batch_size or get_int_config("DRAFT_BATCH_SIZE", DEFAULT_BATCH_SIZE))
    pending = workspace.pending()
    total = len(pending)
    done = 0
    stored = 0
    logger.info("Generating %d draft(s) in batches of %d", total, width)

    with ThreadPoolExecutor(max_workers=width) as executor:
        for batch in _batches(pending, width):
            tickets: Dict[str, GenerationTicket] = {
                customer.id: workspace.begin_generation(customer.id, language) for customer in batch
            }
            futures = []
            for customer in batch:
                ticket = tickets[customer.id]
                futures.append((ticket, executor.submit(generator.generate, customer, ticket.context, language)))
            for ticket, future in futures:
                if workspace.complete_generation(ticket, future.result()):
                    stored += 1
                done += 1
                if progress_callback:
                    progress_callback(done / total)

    logger.info("Stored %d of %d draft(s)", stored, total)
    return stored
