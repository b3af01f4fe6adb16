"""Logging setup for the CLI and the Streamlit console."""
from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Per-request chatter from the HTTP stack drowns out drafting and ingestion
# messages once LOG_LEVEL=DEBUG.
NOISY_LOGGERS = ("urllib3", "watchdog")


def configure_logging(level: str | None = None) -> None:
    """Initialize root logging for ``outreach.*`` loggers.

    The level comes from ``level`` or ``LOG_LEVEL`` (default ``INFO``).
    Ingestion reports mapping and row counts, drafting reports batch
    progress and failures, and the workspace reports archive moves and
    dropped stale drafts, all in one shared format.
    """

    resolved_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, logging.getLevelName(resolved_level)))
