"""Session state for the review workflow: active leads, drafts, and archive."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional

from outreach.core.models import CHANNELS, ArchiveEntry, Customer, GeneratedMessage, GenerationContext
from outreach.review.store import DraftStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationTicket:
    """Identifies one dispatched draft request.

    The context is captured at dispatch so later campaign edits only affect
    requests issued afterwards.
    """

    customer_id: str
    epoch: int
    language: str
    context: GenerationContext


class Workspace:
    """Owns the working set, the draft store, and the archive.

    A customer id lives either in the working set or in the archive, never in
    both. All mutation happens on the caller's thread.
    """

    def __init__(self, context: Optional[GenerationContext] = None) -> None:
        self.context = context or GenerationContext()
        self.drafts = DraftStore()
        self._customers: List[Customer] = []
        self._archive: List[ArchiveEntry] = []
        self._epoch = 0
        self._latest: Dict[str, int] = {}

    @property
    def customers(self) -> List[Customer]:
        return list(self._customers)

    @property
    def archive_entries(self) -> List[ArchiveEntry]:
        return list(self._archive)

    def customer(self, customer_id: str) -> Optional[Customer]:
        return next((c for c in self._customers if c.id == customer_id), None)

    def is_archived(self, customer_id: str) -> bool:
        return any(entry.customer.id == customer_id for entry in self._archive)

    def load(self, customers: Iterable[Customer]) -> None:
        """Replace the working set with a freshly ingested batch."""

        batch = list(customers)
        clashes = [c.id for c in batch if self.is_archived(c.id)]
        if clashes:
            raise ValueError(f"Customer ids already archived: {', '.join(clashes)}")
        self._customers = batch
        self.drafts.clear_all()
        self._latest.clear()
        logger.info("Loaded %d customer(s) into the working set", len(batch))

    def reset(self) -> None:
        """Drop the working set and its drafts; the archive is kept."""

        self._customers = []
        self.drafts.clear_all()
        self._latest.clear()

    def update_context(self, **changes: str) -> GenerationContext:
        self.context = replace(self.context, **changes)
        return self.context

    def pending(self) -> List[Customer]:
        """Customers that do not have a draft yet."""

        return [c for c in self._customers if c.id not in self.drafts]

    def edit(self, customer_id: str, updates: Dict[str, Optional[str]]) -> Optional[Customer]:
        """Apply operator corrections to an active customer.

        ``None`` values leave a field untouched; the id cannot be changed.
        """

        current = self.customer(customer_id)
        if current is None:
            return None
        fields = {key: value.strip() for key, value in updates.items() if value is not None and key != "id"}
        updated = replace(current, **fields)
        self._customers = [updated if c.id == customer_id else c for c in self._customers]
        return updated

    def delete(self, customer_id: str) -> None:
        self._customers = [c for c in self._customers if c.id != customer_id]
        self.drafts.clear(customer_id)
        self._latest.pop(customer_id, None)

    def begin_generation(self, customer_id: str, language: str = "en") -> GenerationTicket:
        self._epoch += 1
        self._latest[customer_id] = self._epoch
        return GenerationTicket(customer_id, self._epoch, language, self.context)

    def complete_generation(self, ticket: GenerationTicket, message: GeneratedMessage) -> bool:
        """Store a finished draft if its request is still current.

        Results for customers that were deleted, archived, or re-requested in
        the meantime are dropped.
        """

        if self._latest.get(ticket.customer_id) != ticket.epoch:
            logger.info("Dropping stale draft for %s (epoch %d)", ticket.customer_id, ticket.epoch)
            return False
        del self._latest[ticket.customer_id]
        if self.customer(ticket.customer_id) is None:
            logger.info("Dropping draft for %s; customer is no longer active", ticket.customer_id)
            return False
        self.drafts.set(ticket.customer_id, message)
        return True

    def archive(self, customer_id: str, channel: Optional[str] = None) -> bool:
        """Move a drafted customer into the archive.

        ``channel`` records how the draft was dispatched and defaults to the
        channel it was authored for. Returns ``False`` without changing
        anything when the customer is not active or has no draft.
        """

        if channel is not None and channel not in CHANNELS:
            raise ValueError(f"Unknown channel: {channel!r}")
        customer = self.customer(customer_id)
        message = self.drafts.get(customer_id)
        if customer is None or message is None:
            return False
        if channel is not None:
            message = replace(message, channel=channel)

        remaining = [c for c in self._customers if c.id != customer_id]
        self._archive = [*self._archive, ArchiveEntry(customer=customer, message=message)]
        self._customers = remaining
        self.drafts.clear(customer_id)
        self._latest.pop(customer_id, None)
        logger.info("Archived %s (%s) via %s", customer_id, customer.company or "unknown company", message.channel)
        return True

    def remove_archived(self, customer_id: str) -> None:
        self._archive = [entry for entry in self._archive if entry.customer.id != customer_id]
