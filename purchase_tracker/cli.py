"""Console interface for the purchase tracker."""

from __future__ import annotations

import argparse
import calendar
import os
import sys
from pathlib import Path
from typing import List, Optional

from purchase_core.exceptions import ParseError, PersistenceError, RecordNotFoundError, ValidationError
from purchase_core.logging_setup import DEFAULT_LEVEL, configure_logging
from purchase_core.models import Purchase
from purchase_core.services import PurchaseService
from purchase_core.storage import JSONStorage
from purchase_core.validators import parse_month

DEFAULT_FILE = "purchases.json"
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"


def _format_purchase(purchase: Purchase) -> str:
    return (
        f"[{purchase.id}] {purchase.description} | amount: {purchase.amount} "
        f"| created: {purchase.created_at.strftime(DISPLAY_FORMAT)} UTC"
    )


def handle_add(args: argparse.Namespace, service: PurchaseService) -> None:
    purchase = service.add(args.description, args.amount)
    print(f"Purchase added successfully (ID: {purchase.id})")


def handle_update(args: argparse.Namespace, service: PurchaseService) -> None:
    purchase = service.update(args.id, description=args.description, amount=args.amount)
    print("Purchase updated:\n" + _format_purchase(purchase))


def handle_delete(args: argparse.Namespace, service: PurchaseService) -> None:
    purchase = service.delete(args.id)
    print(f"Purchase {purchase.id} deleted.")


def handle_show(args: argparse.Namespace, service: PurchaseService) -> None:
    print(_format_purchase(service.get(args.id)))


def handle_list(args: argparse.Namespace, service: PurchaseService) -> None:
    purchases = service.list(args.month)
    if not purchases:
        print("No purchases found.")
        return
    for purchase in purchases:
        print(_format_purchase(purchase))


def handle_summary(args: argparse.Namespace, service: PurchaseService) -> None:
    total = service.summary(args.month)
    if args.month is None:
        print(f"Total: {total}")
    else:
        print(f"Total for {calendar.month_name[parse_month(args.month)]}: {total}")


HANDLERS = {
    "add": handle_add,
    "update": handle_update,
    "delete": handle_delete,
    "show": handle_show,
    "list": handle_list,
    "summary": handle_summary,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="purchase-tracker", description="Purchase Tracker CLI")
    parser.add_argument(
        "--file",
        default=os.getenv("PURCHASE_TRACKER_FILE", DEFAULT_FILE),
        type=Path,
        help=f"JSON file holding the purchases (default: $PURCHASE_TRACKER_FILE or ./{DEFAULT_FILE})",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("PURCHASE_TRACKER_LOG_LEVEL", DEFAULT_LEVEL),
        help=f"Logging level written to stderr (default: {DEFAULT_LEVEL})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add a new purchase")
    add_parser.add_argument("description")
    add_parser.add_argument("amount")

    update_parser = subparsers.add_parser("update", help="Replace the description and amount of a purchase")
    update_parser.add_argument("id")
    update_parser.add_argument("description")
    update_parser.add_argument("amount")

    delete_parser = subparsers.add_parser("delete", help="Delete a purchase")
    delete_parser.add_argument("id")

    show_parser = subparsers.add_parser("show", help="Show a single purchase")
    show_parser.add_argument("id")

    list_parser = subparsers.add_parser("list", help="List purchases")
    list_parser.add_argument("--month", help="Only purchases created in this month (1-12) of any year")

    summary_parser = subparsers.add_parser("summary", help="Total amount, optionally for one month")
    summary_parser.add_argument("month", nargs="?", help="Month number (1-12); the year is not considered")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    service = PurchaseService(JSONStorage(args.file))

    try:
        HANDLERS[args.command](args, service)
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except ParseError as exc:
        print(f"Corrupted store: {exc}", file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
