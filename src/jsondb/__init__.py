"""jsondb: a file-backed, document-oriented key-value store.

Each database is a directory on disk. Payloads are arbitrary JSON values
addressed by file paths relative to the database root and, inside one
document, by JSON Pointer.
"""

from jsondb.database import Database
from jsondb.errors import ErrorKind, InvalidArgumentError, JsonDbError, JsonStructureError, StoreIoError
from jsondb.metadata import Metadata
from jsondb.pointer import incorporate_into, pointer_complement, pointer_complement_mut, resolve_pointer
from jsondb.storage.io import StoreIO

__all__ = [
    "Database",
    "ErrorKind",
    "InvalidArgumentError",
    "JsonDbError",
    "JsonStructureError",
    "Metadata",
    "StoreIO",
    "StoreIoError",
    "incorporate_into",
    "pointer_complement",
    "pointer_complement_mut",
    "resolve_pointer",
]
