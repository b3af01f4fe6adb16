"""In-memory holder for the current draft of each customer."""
from typing import Dict, Optional

from outreach.core.models import GeneratedMessage


class DraftStore:
    """Maps customer ids to their single current draft.

    Setting a draft replaces any previous one wholesale.
    """

    def __init__(self) -> None:
        self._drafts: Dict[str, GeneratedMessage] = {}

    def set(self, customer_id: str, message: GeneratedMessage) -> None:
        self._drafts[customer_id] = message

    def get(self, customer_id: str) -> Optional[GeneratedMessage]:
        return self._drafts.get(customer_id)

    def clear(self, customer_id: str) -> None:
        self._drafts.pop(customer_id, None)

    def clear_all(self) -> None:
        self._drafts.clear()

    def __contains__(self, customer_id: object) -> bool:
        return customer_id in self._drafts

    def __len__(self) -> int:
        return len(self._drafts)
