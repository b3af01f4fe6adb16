"""Core building blocks for the outreach package."""
from outreach.core.logging import configure_logging
from outreach.core.models import (
    CANONICAL_FIELDS,
    ArchiveEntry,
    Customer,
    GeneratedMessage,
    GenerationContext,
)
from outreach.core.utils import default_context, get_config_value, load_env_file

__all__ = [
    "CANONICAL_FIELDS",
    "ArchiveEntry",
    "Customer",
    "GeneratedMessage",
    "GenerationContext",
    "configure_logging",
    "default_context",
    "get_config_value",
    "load_env_file",
]
