"""JSON database abstraction layer.

A database is a directory holding several collections. Each collection is an
independent JSON document stored in its own file, ``<root>/<name>.json``, and
written back whenever its structure is altered. All filesystem access goes
through ``StoreIO``; structural edits go through ``jsondb.pointer``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jsondb.errors import InvalidArgumentError
from jsondb.metadata import Metadata
from jsondb.pointer import incorporate_into, resolve_pointer
from jsondb.storage.io import StoreIO
from jsondb.storage.naming import is_name_valid

logger = logging.getLogger(__name__)

COLLECTION_SUFFIX = ".json"


class Database:
    """Handle on one database directory."""

    def __init__(self, io: StoreIO, metadata: Metadata | None, pretty: bool = True) -> None:
        self._io = io
        self._metadata = metadata
        self._pretty = pretty

    @classmethod
    def create(cls, name: str, path: str | Path, *, pretty: bool = True) -> Database:
        """Create an empty database named ``name`` inside the existing directory ``path``."""
        metadata = Metadata.new(name)
        io = StoreIO.create(name, path, metadata.to_dict(), pretty)
        logger.info("Created database %s at %s", name, io.path)
        return cls(io, metadata, pretty)

    @classmethod
    def open(cls, path: str | Path, *, pretty: bool = True) -> Database:
        """Open an existing database; ``create`` must have run before."""
        io = StoreIO.open(path)
        raw = io.read_metadata()
        metadata = Metadata.from_dict(raw) if raw is not None else None
        logger.info("Opened database at %s", io.path)
        return cls(io, metadata, pretty)

    @property
    def path(self) -> Path:
        return self._io.path

    @property
    def io(self) -> StoreIO:
        return self._io

    @property
    def metadata(self) -> Metadata | None:
        return self._metadata

    @property
    def name(self) -> str:
        if self._metadata is not None:
            return self._metadata.name
        return self._io.path.name

    # ── Collections ───────────────────────────────────────────

    def _collection_path(self, name: str) -> Path:
        if not is_name_valid(name):
            raise InvalidArgumentError(f"Collection name contains forbidden characters: {name!r}")
        return Path(name + COLLECTION_SUFFIX)

    def _touch(self) -> None:
        if self._metadata is None:
            return
        self._metadata.touch()
        self._io.serialize(self._io.metadata_path, self._metadata.to_dict(), self._pretty)

    def create_collection(self, name: str, document: Any = None) -> None:
        """Create a new collection file; an empty object unless ``document`` is given."""
        path = self._collection_path(name)
        self._io.serialize_new(path, {} if document is None else document, self._pretty)
        self._touch()
        logger.info("Created collection %s", name)

    def load_collection(self, name: str) -> Any:
        return self._io.deserialize(self._collection_path(name))

    def insert(self, collection: str, pointer: str, value: Any) -> None:
        """Graft ``value`` into a collection at ``pointer`` and write it back."""
        path = self._collection_path(collection)
        document = self._io.deserialize(path)
        incorporate_into(document, pointer, value)
        self._io.serialize(path, document, self._pretty)
        self._touch()

    def get(self, collection: str, pointer: str = "") -> Any:
        return resolve_pointer(self.load_collection(collection), pointer)
