"""
Persistence backends for learner progress.

A backend is a key-value store of text blobs scoped to one learner
profile. The progress tracker serialises its state to JSON and treats
the backend as opaque; keys carry a version suffix so old formats can be
dropped by changing the key.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from nutq.config import get_settings
from nutq.exceptions import StorageError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


@runtime_checkable
class StorageBackend(Protocol):
    """Load/save interface the progress tracker depends on."""

    def load(self, key: str) -> Optional[str]:
        """Return the blob stored under `key`, or None if absent."""
        ...

    def save(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous blob."""
        ...

    def delete(self, key: str) -> None:
        """Remove `key`; absent keys are ignored."""
        ...


class MemoryStorage:
    """In-process storage, mostly for tests and short sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileStorage:
    """
    One UTF-8 file per key under a directory.

    Saves write a temporary file in the same directory and atomically
    replace the target, so a crash never leaves a half-written blob.

    Args:
        directory: Storage directory, defaults to ``settings.storage_dir``.
            Created on first save.
    """

    def __init__(self, directory: Path | str | None = None):
        self.directory = Path(directory) if directory is not None else get_settings().storage_dir

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise StorageError(key, "key must be alphanumeric with '.', '_' or '-'")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(key, str(exc)) from exc

    def save(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(key, str(exc)) from exc
        logger.debug("Saved %d bytes to %s", len(value), path)

    def delete(self, key: str) -> None:
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(key, str(exc)) from exc
