from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from recordmap.adapters import ExportFormatError, load_records
from recordmap.app import sync_clients, sync_invoices
from recordmap.config import ConfigurationError, configure_logging
from recordmap.domain.records import Client, Contact, Invoice, LedgerInvoice
from recordmap.domain.sync import pending_destination_creations

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from recordmap.domain.correlation import ReconciliationResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Correlate billing and ledger records")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("clients", "Correlate billing clients with ledger contacts"),
        ("invoices", "Correlate billing invoices with ledger invoices"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--source",
            type=Path,
            required=True,
            help="JSON export of the billing records",
        )
        sub.add_argument(
            "--destination",
            type=Path,
            required=True,
            help="JSON export of the ledger records",
        )
        sub.add_argument(
            "--map",
            type=Path,
            default=None,
            help="Correlation map file (defaults to the data directory)",
        )

    return parser.parse_args(list(argv))


def _log_pending(result: ReconciliationResult) -> None:
    for pending in pending_destination_creations(result.map):
        log.info("Awaiting ledger creation: %s (source id %s)", pending.name, pending.identifier)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "clients":
            clients = load_records(parsed_args.source, Client)
            contacts = load_records(parsed_args.destination, Contact)
        else:
            invoices = load_records(parsed_args.source, Invoice)
            ledger_invoices = load_records(parsed_args.destination, LedgerInvoice)
    except ExportFormatError:
        log.exception("Invalid export")
        sys.exit(2)

    try:
        if parsed_args.command == "clients":
            result = sync_clients(clients, contacts, map_path=parsed_args.map)
        elif parsed_args.command == "invoices":
            result = sync_invoices(invoices, ledger_invoices, map_path=parsed_args.map)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during correlation")
        sys.exit(1)

    _log_pending(result)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
