"""Persistence utilities for the purchase tracker core."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .exceptions import ParseError, PersistenceError

logger = logging.getLogger(__name__)


class JSONStorage:
    """Single-file JSON storage with crash-safe writes.

    The whole collection is read and rewritten on every access. There is no
    locking: two processes writing the same file race and the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def load(self) -> List[Dict[str, Any]]:
        path = self._path
        if not path.exists():
            logger.debug("Store %s does not exist yet; starting empty", path)
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError, UnicodeDecodeError and oversized integers are all ValueErrors.
            raise ParseError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not isinstance(payload, list):
            raise ParseError(f"Expected list payload in {path}")
        logger.debug("Loaded %d record(s) from %s", len(payload), path)
        return payload

    def save(self, records: Iterable[Dict[str, Any]]) -> None:
        path = self._path
        temp_path = path.with_suffix(path.suffix + ".tmp")
        payload = list(records)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())
            # Path.replace is an atomic rename on POSIX and Windows.
            temp_path.replace(path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Unable to write to {path}") from exc
        logger.debug("Saved %d record(s) to %s", len(payload), path)

    @property
    def path(self) -> Path:
        return self._path
