"""Core business logic package for the purchase tracker."""

from .models import Purchase
from .services import PurchaseService, find_by_id, next_id
from .storage import JSONStorage
from .exceptions import ParseError, PersistenceError, RecordNotFoundError, ValidationError

__all__ = [
    "Purchase",
    "PurchaseService",
    "find_by_id",
    "next_id",
    "JSONStorage",
    "ParseError",
    "PersistenceError",
    "RecordNotFoundError",
    "ValidationError",
]
