"""Review state for human-in-the-loop outreach."""
from outreach.review.store import DraftStore
from outreach.review.workspace import GenerationTicket, Workspace

__all__ = ["DraftStore", "GenerationTicket", "Workspace"]
