"""Framework-agnostic business services for the purchase tracker."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .exceptions import ParseError, RecordNotFoundError, ValidationError
from .models import Purchase, utc_now
from .storage import JSONStorage
from .validators import parse_amount, parse_id, parse_month, validate_required_str

logger = logging.getLogger(__name__)


def next_id(purchases: Iterable[Purchase]) -> int:
    """Return one past the highest id in use, or 1 for an empty collection."""
    return max((purchase.id for purchase in purchases), default=0) + 1


def find_by_id(purchases: Sequence[Purchase], purchase_id: int) -> Optional[Tuple[int, Purchase]]:
    """Locate a purchase by id, returning its position alongside it."""
    for index, purchase in enumerate(purchases):
        if purchase.id == purchase_id:
            return index, purchase
    return None


class PurchaseService:
    """Runs one load, compute, and optional save cycle per operation."""

    def __init__(self, storage: JSONStorage) -> None:
        self._storage = storage

    # Public API -----------------------------------------------------------
    def add(self, description: object, amount: object) -> Purchase:
        description = validate_required_str(description, "description")
        amount = parse_amount(amount)

        purchases = self.load()
        purchase = Purchase(
            id=next_id(purchases),
            description=description,
            amount=amount,
            created_at=utc_now(),
        )
        purchases.append(purchase)
        self.save(purchases)
        logger.info("Added purchase %d", purchase.id)
        return purchase

    def update(
        self,
        purchase_id: object,
        description: Optional[object] = None,
        amount: Optional[object] = None,
    ) -> Purchase:
        purchase_id = parse_id(purchase_id)
        if description is None and amount is None:
            raise ValidationError("nothing to update: supply a description or an amount")
        # id and created_at are never part of the change set.
        changes = {}
        if description is not None:
            changes["description"] = validate_required_str(description, "description")
        if amount is not None:
            changes["amount"] = parse_amount(amount)

        purchases = self.load()
        index, existing = self._get_or_raise(purchases, purchase_id)
        updated = replace(existing, **changes)
        purchases[index] = updated
        self.save(purchases)
        logger.info("Updated purchase %d", purchase_id)
        return updated

    def delete(self, purchase_id: object) -> Purchase:
        purchase_id = parse_id(purchase_id)
        purchases = self.load()
        index, removed = self._get_or_raise(purchases, purchase_id)
        del purchases[index]
        self.save(purchases)
        logger.info("Deleted purchase %d", purchase_id)
        return removed

    def get(self, purchase_id: object) -> Purchase:
        """Return a purchase or raise if it does not exist."""
        purchase_id = parse_id(purchase_id)
        _, purchase = self._get_or_raise(self.load(), purchase_id)
        return purchase

    def list(self, month: Optional[object] = None) -> List[Purchase]:
        """Return purchases in stored order, optionally limited to one calendar month."""
        purchases = self.load()
        if month is None:
            return purchases
        return list(_in_month(purchases, parse_month(month)))

    def summary(self, month: Optional[object] = None) -> int:
        """Sum amounts, optionally over purchases created in the given month of any year."""
        return sum(purchase.amount for purchase in self.list(month))

    def load(self) -> List[Purchase]:
        """Load and hydrate every purchase from the store."""
        raw_records = self._storage.load()
        purchases: List[Purchase] = []
        seen = set()
        for position, payload in enumerate(raw_records):
            try:
                purchase = Purchase.from_dict(payload)
            except ParseError as exc:
                logger.warning("Rejecting store %s: %s", self._storage.path, exc)
                raise ParseError(f"Invalid record at position {position} in {self._storage.path}: {exc}") from exc
            if purchase.id in seen:
                raise ParseError(f"Duplicate id {purchase.id} in {self._storage.path}")
            seen.add(purchase.id)
            purchases.append(purchase)
        return purchases

    def save(self, purchases: Iterable[Purchase]) -> None:
        self._storage.save(purchase.to_dict() for purchase in purchases)

    # Internal helpers -----------------------------------------------------
    def _get_or_raise(self, purchases: Sequence[Purchase], purchase_id: int) -> Tuple[int, Purchase]:
        match = find_by_id(purchases, purchase_id)
        if match is None:
            logger.warning("Purchase %d not found in %s", purchase_id, self._storage.path)
            raise RecordNotFoundError(f"Purchase {purchase_id} not found")
        return match


def _in_month(purchases: Iterable[Purchase], month: int) -> Iterable[Purchase]:
    # Year is ignored: month 5 matches May of every year.
    return (purchase for purchase in purchases if purchase.created_at.month == month)
