"""Shared fixtures for the purchase tracker tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from purchase_core.services import PurchaseService
from purchase_core.storage import JSONStorage


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "purchases.json"


@pytest.fixture
def storage(store_path: Path) -> JSONStorage:
    return JSONStorage(store_path)


@pytest.fixture
def service(storage: JSONStorage) -> PurchaseService:
    return PurchaseService(storage)


@pytest.fixture
def write_store(store_path: Path) -> Callable[[Any], Path]:
    """Write an arbitrary JSON payload to the store file."""

    def _write(payload: Any) -> Path:
        store_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        return store_path

    return _write
