"""Command line entry point for batch lead outreach."""
import argparse
from dataclasses import replace
from pathlib import Path

from outreach.core.logging import configure_logging
from outreach.core.models import CHANNELS, LANGUAGES
from outreach.core.utils import default_context
from outreach.ingestion.mapping import apply_overrides, parse_override
from outreach.processing.pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Draft follow-up messages for exhibition leads")
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Lead spreadsheet (.xlsx, .csv, .tsv), pasted text (.txt), or table photo",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("output/processed_customers.csv"),
        help="CSV file to write processed customers to",
    )
    parser.add_argument(
        "--sink",
        choices=["csv", "sheets", "excel"],
        default="csv",
        help="Where to forward processed rows after writing the CSV",
    )
    parser.add_argument(
        "--excel-output",
        type=Path,
        default=Path("output/processed_customers.xlsx"),
        help="Excel workbook (with drafts) to write when --sink=excel",
    )
    parser.add_argument("--spreadsheet-id", help="Google Sheets spreadsheet ID for the sheets sink")
    parser.add_argument("--worksheet", default="Sheet1", help="Worksheet title inside the Google Sheets document")
    parser.add_argument(
        "--service-account",
        type=Path,
        help="Path to a Google service account JSON key used for Sheets pushes",
    )
    parser.add_argument("--language", choices=LANGUAGES, default="en", help="Draft language")
    parser.add_argument(
        "--channel",
        choices=CHANNELS,
        default="email",
        help="Channel the archived drafts are recorded as sent through",
    )
    parser.add_argument(
        "--map",
        dest="mappings",
        action="append",
        default=[],
        metavar="FIELD=HEADER",
        help="Override the detected column for a field (use 'none' to leave it empty)",
    )
    parser.add_argument("--sender-company", help="Sender organization named in drafts")
    parser.add_argument("--sender-name", help="Sender person signing the drafts")
    parser.add_argument("--event-name", help="Exhibition where the leads were met")
    parser.add_argument("--event-location", help="Exhibition location")
    parser.add_argument("--batch-size", type=int, help="Concurrent draft requests per batch")
    return parser


def main() -> None:
    """Entrypoint for running the pipeline from the command line."""

    configure_logging()
    parser = build_parser()
    args = parser.parse_args()

    try:
        overrides = dict(parse_override(item) for item in args.mappings)
        apply_overrides({}, overrides)
    except ValueError as exc:
        parser.error(str(exc))

    context = default_context()
    cli_context = {
        "sender_company": args.sender_company,
        "sender_name": args.sender_name,
        "event_name": args.event_name,
        "event_location": args.event_location,
    }
    context = replace(context, **{key: value for key, value in cli_context.items() if value is not None})

    output_path = run_pipeline(
        args.input,
        args.output,
        sink=args.sink,
        language=args.language,
        overrides=overrides,
        context=context,
        batch_size=args.batch_size,
        spreadsheet_id=args.spreadsheet_id,
        worksheet_title=args.worksheet,
        service_account_path=args.service_account,
        excel_path=args.excel_output,
        channel=args.channel,
    )
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()
