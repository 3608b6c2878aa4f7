"""Filesystem layer of a database.

The internal structure of a database is hidden from callers; this module sits
between a database handle and the OS filesystem. Every file access goes
through ``StoreIO._open_file`` so the decision between "invalid argument" and
"I/O failure" is made in one place.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import IO, Any

from jsondb.errors import InvalidArgumentError, StoreIoError
from jsondb.storage.naming import is_name_valid

logger = logging.getLogger(__name__)

METADATA_DIR = ".metadata"
METADATA_FILE = "metadata.json"


class FileOpenMode(Enum):
    """How a path under the store root is opened."""

    OPEN = "open"  # read-only, file must exist
    WRITE = "write"  # truncate an existing file
    WRITE_CREATE = "write_create"  # exclusive create, parents synthesized


class StoreIO:
    """Serialize and deserialize JSON payloads beneath one canonical root."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def metadata_path(self) -> Path:
        return Path(METADATA_DIR) / METADATA_FILE

    # ── Lifecycle ─────────────────────────────────────────────

    @classmethod
    def create(
        cls,
        name: str,
        base_path: str | Path,
        metadata: dict[str, Any] | None = None,
        pretty: bool = True,
    ) -> StoreIO:
        """Create the directory structure of a new database.

        ``base_path`` must already exist; the database lands in
        ``<canonical base_path>/<name>``. When ``metadata`` is omitted an empty
        placeholder metadata file is written instead.
        """
        if not is_name_valid(name):
            raise InvalidArgumentError("Database name contains forbidden characters")

        # Path.resolve(strict=True) raises FileNotFoundError for a missing base
        root = Path(base_path).resolve(strict=True) / name
        if root.exists():
            raise StoreIoError(f"Directory already exists: {root}")

        io = cls(root)
        if metadata is None:
            with io._open_file(io.metadata_path, FileOpenMode.WRITE_CREATE):
                pass
        else:
            io.serialize_new(io.metadata_path, metadata, pretty)
        logger.info("Created database structure at %s", root)
        return io

    @classmethod
    def open(cls, path: str | Path) -> StoreIO:
        """Open the directory structure of an existing database."""
        try:
            root = Path(path).resolve(strict=True)
        except OSError:
            raise StoreIoError(f"Database does not exist: {path}") from None

        metadata_dir = root / METADATA_DIR
        if not metadata_dir.is_dir() or not (metadata_dir / METADATA_FILE).is_file():
            raise StoreIoError(f"Database structure is corrupted: {root}")

        logger.info("Opened database structure at %s", root)
        return cls(root)

    def read_metadata(self) -> dict[str, Any] | None:
        """Raw metadata payload, or None for an empty placeholder."""
        if (self._path / self.metadata_path).stat().st_size == 0:
            return None
        return self.deserialize(self.metadata_path)

    # ── File access ───────────────────────────────────────────

    def _resolve(self, path: str | Path) -> Path:
        """Join ``path`` onto the root, refusing anything that escapes it."""
        if str(path) in ("", "."):
            raise InvalidArgumentError("Empty path cannot denote a database file")
        joined = Path(self._path, path)
        normalized = Path(os.path.normpath(joined))
        if normalized == self._path or not normalized.is_relative_to(self._path):
            raise InvalidArgumentError(f"Path is outside of the database: {path}")
        return normalized

    def _open_file(self, path: str | Path, mode: FileOpenMode) -> IO[str]:
        file_path = self._resolve(path)

        if mode is FileOpenMode.WRITE_CREATE:
            file_path.parent.mkdir(parents=True, exist_ok=True)
        elif not file_path.exists() or file_path.is_dir():
            # open() would fail too, but without naming the offending path
            raise InvalidArgumentError(f"Cannot access an object at invalid path: {file_path}")

        if mode is FileOpenMode.OPEN:
            return file_path.open("r", encoding="utf-8")
        if mode is FileOpenMode.WRITE:
            return file_path.open("w", encoding="utf-8")
        return file_path.open("x", encoding="utf-8")

    @staticmethod
    def _encode(value: Any, pretty: bool) -> str:
        if pretty:
            return json.dumps(value, indent=2, ensure_ascii=False)
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    def serialize(self, path: str | Path, value: Any, pretty: bool = True) -> None:
        """Serialize ``value`` into an existing file, truncating old content.

        Use ``serialize_new`` when the file has not been created yet. The value
        is encoded before the file is opened, so a value that cannot be
        serialized leaves the old content in place.
        """
        text = self._encode(value, pretty)
        with self._open_file(path, FileOpenMode.WRITE) as fp:
            fp.write(text)
        logger.debug("Serialized %s", path)

    def serialize_new(self, path: str | Path, value: Any, pretty: bool = True) -> None:
        """Serialize ``value`` into a new file; fails if the file already exists."""
        text = self._encode(value, pretty)
        with self._open_file(path, FileOpenMode.WRITE_CREATE) as fp:
            fp.write(text)
        logger.debug("Serialized new %s", path)

    def deserialize(self, path: str | Path, decoder: Callable[[Any], Any] | None = None) -> Any:
        """Parse an existing file, optionally shaping the result with ``decoder``.

        Codec errors and decoder errors propagate unchanged.
        """
        with self._open_file(path, FileOpenMode.OPEN) as fp:
            value = json.load(fp)
        logger.debug("Deserialized %s", path)
        return decoder(value) if decoder is not None else value

