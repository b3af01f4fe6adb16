"""End-to-end runs of the batch CLI."""
import csv
from pathlib import Path

import pytest
from openpyxl import load_workbook

import outreach.processing.pipeline as pipeline
from outreach.processing.pipeline import run_pipeline


def test_cli_writes_processed_csv(tmp_path: Path, leads_csv: Path, run_cli, capsys):
    output = tmp_path / "processed.csv"

    run_cli(["--input", str(leads_csv), "--output", str(output), "--event-name", "Canton Fair"])

    with output.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["Company"] for row in rows] == ["CompanyA", "CompanyB"]
    assert rows[0]["Phone"] == "+1234,+5678"
    assert rows[0]["Notes"] == "Wants MDF kit prices"
    assert {row["Status"] for row in rows} == {"Processed"}
    assert f"Wrote {output}" in capsys.readouterr().out


def test_cli_excel_sink(tmp_path: Path, leads_csv: Path, run_cli):
    output = tmp_path / "processed.csv"
    workbook_path = tmp_path / "processed.xlsx"

    run_cli(
        [
            "--input",
            str(leads_csv),
            "--output",
            str(output),
            "--sink",
            "excel",
            "--excel-output",
            str(workbook_path),
            "--channel",
            "whatsapp",
            "--language",
            "ar",
        ]
    )

    values = list(load_workbook(workbook_path).active.values)
    headers = list(values[0])
    assert "Subject" in headers
    assert values[1][headers.index("Language")] == "ar"
    assert values[1][headers.index("Channel")] == "whatsapp"
    assert output.exists()


def test_cli_sheets_sink(tmp_path: Path, leads_csv: Path, run_cli, monkeypatch):
    pushed = {}

    def fake_push(rows, spreadsheet_id, worksheet_title, service_account_path):
        pushed.update(
            rows=list(rows),
            spreadsheet_id=spreadsheet_id,
            worksheet_title=worksheet_title,
            service_account_path=service_account_path,
        )

    monkeypatch.setattr(pipeline, "push_to_google_sheets", fake_push)
    account = tmp_path / "service_account.json"
    account.write_text("{}", encoding="utf-8")

    run_cli(
        [
            "--input",
            str(leads_csv),
            "--output",
            str(tmp_path / "processed.csv"),
            "--sink",
            "sheets",
            "--spreadsheet-id",
            "sheet-123",
            "--worksheet",
            "Leads",
            "--service-account",
            str(account),
        ]
    )

    assert pushed["spreadsheet_id"] == "sheet-123"
    assert pushed["worksheet_title"] == "Leads"
    assert pushed["service_account_path"] == account
    assert [row["Company"] for row in pushed["rows"]] == ["CompanyA", "CompanyB"]


def test_sheets_sink_requires_spreadsheet_id(tmp_path: Path, leads_csv: Path):
    with pytest.raises(ValueError, match="spreadsheet_id"):
        run_pipeline(leads_csv, tmp_path / "processed.csv", sink="sheets")


def test_cli_column_override(tmp_path: Path, leads_csv: Path, run_cli):
    output = tmp_path / "processed.csv"

    run_cli(["--input", str(leads_csv), "--output", str(output), "--map", "notes=none"])

    with output.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert rows[0]["Notes"] == ""


def test_cli_rejects_unknown_mapping_field(leads_csv: Path, run_cli):
    with pytest.raises(SystemExit):
        run_cli(["--input", str(leads_csv), "--map", "fax=Faks"])


def test_pipeline_uses_supplied_generator(tmp_path: Path, leads_csv: Path, fake_client_factory, monkeypatch):
    from outreach.processing.drafting import DraftGenerator

    monkeypatch.setenv("AI_DRAFTING_DISABLED", "0")
    client = fake_client_factory(
        reply={"emailSubject": "MDF kits", "emailBody": "Hi", "whatsappBody": "Hi there"}
    )
    output = tmp_path / "processed.csv"

    run_pipeline(leads_csv, output, sink="excel", generator=DraftGenerator(client=client), batch_size=1)

    assert len(client.calls) == 2
    values = list(load_workbook(output.with_suffix(".xlsx")).active.values)
    headers = list(values[0])
    assert values[1][headers.index("Subject")] == "MDF kits"
