"""File load/save collaborators used by the editor session."""

from .files import LoadError, SaveError, StorageError, read_document, write_document

__all__ = [
    "StorageError",
    "LoadError",
    "SaveError",
    "read_document",
    "write_document",
]
