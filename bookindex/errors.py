"""Exceptions raised by the book index and its loaders."""
from typing import Optional


class CatalogError(Exception):
    """Base class for all book index errors."""


class InvalidArgumentError(CatalogError, ValueError):
    """Malformed input handed to the index.

    Attributes:
        position: Offending position in a bulk load, if any
    """

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.position = position


class NullInputError(InvalidArgumentError, TypeError):
    """A required input sequence was None."""


class CatalogFileError(CatalogError):
    """Catalog file is missing or could not be read."""
