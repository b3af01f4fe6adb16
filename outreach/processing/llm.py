"""Thin client for the OpenAI-compatible chat completions endpoint."""
from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from outreach.core.utils import get_config_value, get_int_config, load_env_file

logger = logging.getLogger(__name__)
DEFAULT_SECRET_FILE = Path(__file__).resolve().parents[1] / "secrets" / "openai.env"
_AI_ENV_LOADED = False


class AIUnavailableError(RuntimeError):
    """Raised when a request is attempted without credentials."""


def _ensure_ai_env() -> None:
    """Load AI credentials from a local secrets file once per process."""

    global _AI_ENV_LOADED
    if _AI_ENV_LOADED:
        return

    _AI_ENV_LOADED = True
    secret_location = os.getenv("AI_SECRET_FILE")
    path = Path(secret_location).expanduser() if secret_location else DEFAULT_SECRET_FILE
    load_env_file(path)


class ChatClient:
    """Send chat prompts and decode JSON-object replies.

    Batch drafting calls one client from several worker threads, so each
    thread gets its own ``requests.Session``.
    """

    def __init__(self) -> None:
        _ensure_ai_env()
        self.api_key = get_config_value("OPENAI_API_KEY") or None
        self.model = get_config_value("OPENAI_MODEL", "gpt-4o-mini")
        self.base_url = get_config_value("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
        self.timeout = get_int_config("AI_TIMEOUT_SECONDS", 60)
        self._local = threading.local()

    @property
    def available(self) -> bool:
        return self.api_key is not None

    def session(self) -> requests.Session:
        """Session owned by the calling thread."""

        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def complete_json(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Run one chat completion and parse the reply as a JSON object.

        Transport, HTTP, and decoding errors propagate to the caller.
        """

        if not self.available:
            raise AIUnavailableError("OPENAI_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "response_format": {"type": "json_object"},
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens

        response = self.session().post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
            json=payload,
            timeout=self.timeout,
        )
        response.raise_for_status()
        content = response.json()["choices"][0]["message"]["content"]
        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise ValueError("Model reply is not a JSON object")
        return parsed
