"""Durable append-only store of generated cover letters."""

import json
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Union

from .errors import CacheCorruptError, CacheWriteError
from .logging_config import get_logger

logger = get_logger("cache")

# One lock per resolved cache path, shared by every ResponseCache in the process
_path_locks: Dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _registry_lock:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock


@dataclass
class CacheEntry:
    """Single generated letter."""
    returned_query: str

    def to_dict(self):
        return {"returnedQuery": self.returned_query}

    @staticmethod
    def from_dict(data: dict):
        return CacheEntry(returned_query=data["returnedQuery"])


CacheStore = Dict[str, List[CacheEntry]]


def _is_well_formed(data) -> bool:
    if not isinstance(data, dict):
        return False
    for key, entries in data.items():
        if not isinstance(key, str) or not isinstance(entries, list):
            return False
        for entry in entries:
            if not isinstance(entry, dict) or not isinstance(entry.get("returnedQuery"), str):
                return False
    return True


class ResponseCache:
    """JSON file mapping job descriptions to the letters generated for them.

    Letters are only ever appended. Every append rewrites the whole file
    through an atomic rename, and appends within one process are serialized
    per file. Separate processes sharing a file are not coordinated.
    """

    def __init__(self, path: Union[str, Path], strict: bool = False):
        """Initialize the cache.

        Args:
            path: Location of the JSON file
            strict: Raise CacheCorruptError on an unreadable file instead of
                treating it as empty
        """
        self.path = Path(path)
        self.strict = strict
        self._lock = _lock_for(self.path)

    def _corrupt(self, reason: str) -> CacheStore:
        if self.strict:
            raise CacheCorruptError(f"Cover letter cache at {self.path} is corrupt: {reason}")
        logger.warning("Ignoring unreadable cover letter cache at %s: %s", self.path, reason)
        return {}

    def load(self) -> CacheStore:
        """Load the full mapping.

        A missing or blank file is an empty mapping.

        Raises:
            CacheCorruptError: In strict mode, if the file cannot be parsed
        """
        if not self.path.exists():
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return self._corrupt(str(e))

        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except (json.JSONDecodeError, RecursionError) as e:
            # Deeply nested arrays exhaust the decoder's recursion limit
            return self._corrupt(f"{type(e).__name__}: {e}")

        if not _is_well_formed(data):
            return self._corrupt("expected an object of arrays of {returnedQuery: string}")

        return {
            key: [CacheEntry.from_dict(entry) for entry in entries]
            for key, entries in data.items()
        }

    def save(self, store: CacheStore) -> None:
        """Overwrite the file with the full mapping.

        Raises:
            CacheWriteError: If the file cannot be written; the previous
                contents are left intact
        """
        data = {key: [entry.to_dict() for entry in entries] for key, entries in store.items()}
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CacheWriteError(f"Could not write cover letter cache at {self.path}: {e}") from e

    def append(self, key: str, letter: str) -> None:
        """Append a letter under ``key`` and persist the whole mapping.

        Raises:
            CacheWriteError: If the write fails
            CacheCorruptError: In strict mode, if the existing file is corrupt
        """
        with self._lock:
            store = self.load()
            store.setdefault(key, []).append(CacheEntry(returned_query=letter))
            self.save(store)
        logger.info("Cached cover letter (%d stored for this job description)", len(store[key]))
