from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from pimtrans.app import normalize_translations
from pimtrans.config import ConfigurationError, configure_logging
from pimtrans.domain.reconciliation import ReconciliationAborted

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Maintain catalog translation records")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every planned change, not only dry-run plans",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    translations = subparsers.add_parser("translations", help="Translation record maintenance")
    translations_sub = translations.add_subparsers(dest="translations_command", required=True)
    normalize = translations_sub.add_parser(
        "normalize",
        help="Assign channels to legacy translations and merge duplicate records",
    )
    normalize.add_argument(
        "--item-id",
        type=str,
        help="Limit normalization to a specific catalog item",
    )
    normalize.add_argument(
        "--language",
        type=str,
        help="Limit normalization to a specific language",
    )
    normalize.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report what would change",
    )
    normalize.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Number of records to load per page (defaults to config)",
    )
    normalize.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first record that fails to commit (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _validate_page_size(value: int | None) -> int | None:
    if value is not None and value <= 0:
        raise ValueError("Page size must be positive")
    return value


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    item_id: UUID | None = None
    page_size: int | None = None
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        if parsed_args.command == "translations":
            item_id = _parse_uuid(parsed_args.item_id) if parsed_args.item_id else None
            page_size = _validate_page_size(parsed_args.page_size)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if (
            parsed_args.command == "translations"
            and parsed_args.translations_command == "normalize"
        ):
            normalize_translations(
                item_id=item_id,
                language=parsed_args.language or None,
                dry_run=parsed_args.dry_run,
                page_size=page_size,
                fail_fast=parsed_args.fail_fast,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(2)
    except ReconciliationAborted:
        log.exception("Translation normalization aborted")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during translation normalization")
        sys.exit(1)


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
