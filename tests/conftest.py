"""Pytest configuration to make the local package importable without installation."""
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from outreach.cli import main as cli_main
from outreach.core.models import Customer


@pytest.fixture(autouse=True)
def disable_ai(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable remote LLM calls during tests to avoid token usage."""

    monkeypatch.setenv("AI_DRAFTING_DISABLED", "1")
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setenv("AI_SECRET_FILE", str(ROOT / "tests" / "missing-secrets.env"))


class FakeChatClient:
    """Stands in for ChatClient; returns canned replies or raises."""

    def __init__(self, reply: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None) -> None:
        self.reply = reply or {}
        self.error = error
        self.calls: List[List[Dict[str, Any]]] = []
        self.available = True

    def complete_json(self, messages, temperature=0.2, max_tokens=None):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture
def fake_client_factory():
    return FakeChatClient


@pytest.fixture
def customers() -> List[Customer]:
    return [
        Customer(id="cust-test-1-0", company="Alpha Yapı", representative="Mehmet Kaya", phone="+90 532 111 2233", email="mehmet@alpha.com.tr", notes="MDF kit prices"),
        Customer(id="cust-test-1-1", company="Beta Trading", phone="0044 20 7946 0000 / 0044 7700 900123", email="info@beta.co.uk", notes="Silicone sealants"),
        Customer(id="cust-test-1-2", company="Gamma Build", email="ahmad.ghazzoul@gamma.ae", notes="PU foam"),
    ]


@pytest.fixture
def leads_csv(tmp_path: Path) -> Path:
    """A small exhibition sheet with Turkish headers."""

    path = tmp_path / "leads.csv"
    path.write_text(
        "Firma,Temsilci,Tel,Adres,Mail,Web site,Açıklama\n"
        'CompanyA,John Doe,"+1234,+5678",USA,john@companya.com,www.companya.com,Wants MDF kit prices\n'
        ",,,Germany,,www.nobody.de,Just browsing\n"
        "CompanyB,,,,,,\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def run_cli(monkeypatch: pytest.MonkeyPatch):
    """Helper to invoke the CLI with custom arguments inside tests."""

    def _run(args: list[str]) -> None:
        monkeypatch.setattr(sys, "argv", ["outreach.cli", *args])
        cli_main()

    return _run
