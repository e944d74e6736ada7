# src/xchange/adapters/persistence/file_store.py
"""
File Store - JSON File Implementation of the Persistence Port

Each key is stored in its own `<key>.json` file under the data directory.
Writes are atomic (temporary file + rename) so a crash never leaves a
half-written file behind; unreadable files are moved aside and treated as
absent.

Files that USE this module:
- xchange.app (default store for favorites and history)
- tests.test_persistence (unit tests)

Files that this module USES:
- xchange.adapters.persistence.base (PersistenceStore interface)
- xchange.config (settings for the data directory)
"""
from __future__ import annotations

import json
import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from xchange.adapters.persistence.base import PersistenceStore
from xchange.config import settings
from xchange.domain.errors import PersistenceError

log = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStore(PersistenceStore):
    """Stores one JSON document per key in a directory."""

    def __init__(self, directory: Optional[Union[str, Path]] = None):
        """
        Args:
            directory: Data directory (defaults to settings.data_dir); created on first write
        """
        self.directory = Path(directory) if directory is not None else settings.data_dir

    def path_for(self, key: str) -> Path:
        """
        Get path of the file backing key.

        Raises:
            ValueError: If key contains characters unsafe in a file name
        """
        if not _SAFE_KEY.match(key) or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def save(self, key: str, value: Any) -> None:
        """
        Save value under key using an atomic write.

        Raises:
            PersistenceError: If the directory or file cannot be written
        """
        p = self.path_for(key)

        try:
            p.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                suffix=".json.tmp",
                dir=str(p.parent),
                text=True
            )
        except OSError as e:
            raise PersistenceError(f"Failed to prepare {p}: {e}") from e

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(p))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise PersistenceError(f"Failed to save {key}: {e}") from e

        log.debug("Saved %s to %s", key, p)

    def load(self, key: str) -> Optional[Any]:
        """
        Load the value stored under key.

        A file that is not valid UTF-8 JSON is backed up as `<key>.json.corrupt`,
        removed, and reported as absent.

        Returns:
            Decoded JSON value, or None if the file is missing or unreadable
        """
        p = self.path_for(key)
        if not p.exists():
            return None

        try:
            with p.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            backup_path = p.with_suffix(".json.corrupt")
            try:
                shutil.copy2(p, backup_path)
                p.unlink()
                log.warning("Store file %s corrupted (not valid UTF-8 JSON), backed up to %s: %s",
                            p, backup_path, e)
            except OSError as backup_error:
                log.error("Failed to backup corrupt store file %s: %s", p, backup_error)
            return None
        except OSError as e:
            log.error("Unexpected error loading store file %s: %s", p, e, exc_info=True)
            return None
