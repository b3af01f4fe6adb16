"""Shared configuration helpers for the outreach package."""
import logging
import os
from pathlib import Path

from outreach.core.models import GenerationContext

logger = logging.getLogger(__name__)


def get_config_value(key: str, default: str = "") -> str:
    """Get configuration value from Streamlit secrets or environment variables.

    Checks Streamlit secrets first (for cloud deployment), then falls back
    to environment variables (for local development and the CLI).
    """
    try:
        import streamlit as st
        if hasattr(st, "secrets") and key in st.secrets:
            return str(st.secrets[key])
    except ImportError:
        pass
    except Exception as exc:  # missing or unparsable secrets.toml
        logger.debug("Streamlit secrets unavailable for %s: %s", key, exc)

    return os.getenv(key, default)


def get_int_config(key: str, default: int) -> int:
    """Read an integer setting, keeping the default on junk values."""

    raw = get_config_value(key, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer value %r for %s", raw, key)
        return default


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists."""
    if not path.exists():
        return

    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)


def default_context() -> GenerationContext:
    """Build the campaign context from configuration."""

    return GenerationContext(
        sender_company=get_config_value("OUTREACH_SENDER_COMPANY"),
        event_name=get_config_value("OUTREACH_EVENT_NAME"),
        event_location=get_config_value("OUTREACH_EVENT_LOCATION"),
        sender_name=get_config_value("OUTREACH_SENDER_NAME"),
    )
