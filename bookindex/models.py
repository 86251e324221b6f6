"""Data models for books."""
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Tuple

from bookindex.errors import InvalidArgumentError


@dataclass(frozen=True)
class Book:
    """Immutable book record. Only the title takes part in equality and hashing."""
    title: str
    authors: Tuple[str, ...] = field(compare=False)

    def __post_init__(self):
        if not isinstance(self.title, str) or not self.title:
            raise InvalidArgumentError("Missing book title")
        if isinstance(self.authors, str) or not isinstance(self.authors, Sequence) or not self.authors:
            raise InvalidArgumentError(f"Missing authors for '{self.title}'")
        if not all(isinstance(author, str) and author for author in self.authors):
            raise InvalidArgumentError(f"Author names for '{self.title}' must be non-empty strings")
        # Freeze whatever sequence the caller handed us
        object.__setattr__(self, "authors", tuple(self.authors))

    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(self.authors)
