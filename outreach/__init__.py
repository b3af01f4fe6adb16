"""Exhibition lead ingestion and AI-drafted follow-up outreach."""
from outreach.core import (
    CANONICAL_FIELDS,
    ArchiveEntry,
    Customer,
    GeneratedMessage,
    GenerationContext,
    configure_logging,
)
from outreach.ingestion import (
    ExtractionError,
    load_customers,
    load_pasted_text,
    normalize_rows,
    propose_mapping,
)
from outreach.processing import (
    DraftGenerator,
    build_chat_link,
    build_mailto,
    generate_all,
    normalize_phone,
    segment_phones,
)
from outreach.processing.pipeline import run_pipeline
from outreach.reporting import archive_to_csv, write_archive_csv
from outreach.review import DraftStore, Workspace

__all__ = [
    "CANONICAL_FIELDS",
    "ArchiveEntry",
    "Customer",
    "DraftGenerator",
    "DraftStore",
    "ExtractionError",
    "GeneratedMessage",
    "GenerationContext",
    "Workspace",
    "archive_to_csv",
    "build_chat_link",
    "build_mailto",
    "configure_logging",
    "generate_all",
    "load_customers",
    "load_pasted_text",
    "normalize_phone",
    "normalize_rows",
    "propose_mapping",
    "run_pipeline",
    "segment_phones",
    "write_archive_csv",
]
