"""Parse catalog records and files into books for the index."""
import csv
import json
import logging
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple, Union

from bookindex.config import Config
from bookindex.errors import CatalogFileError, InvalidArgumentError
from bookindex.models import Book

logger = logging.getLogger(__name__)


def _split_authors(raw: Any, separator: str) -> List[str]:
    """Normalize an authors field (list or separated string) to clean names."""
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split(separator)
    elif not isinstance(raw, (list, tuple)):
        return []
    return [str(name).strip() for name in raw if name is not None and str(name).strip()]


def parse_record(
    record: Dict[str, Any],
    separator: str = Config.AUTHOR_SEPARATOR
) -> Optional[Book]:
    """
    Parse a single catalog record.

    Accepts flat records ({"title": ..., "authors": [...]}) as well as
    Google Books items ({"volumeInfo": {"title": ..., "authors": [...]}}).

    Args:
        record: Raw record
        separator: Separator used when authors is a single string

    Returns:
        Book object or None if the record has no title or no authors
    """
    if not isinstance(record, dict):
        logger.warning(f"Skipping non-object record: {record!r}")
        return None

    source = record.get("volumeInfo", record)
    if not isinstance(source, dict):
        source = {}
    title = str(source.get("title") or "").strip()
    raw_authors = source.get("authors")
    if raw_authors is None:
        raw_authors = source.get("author")
    authors = _split_authors(raw_authors, separator)

    if not title:
        logger.warning(f"Skipping record without title: {record!r}")
        return None
    if not authors:
        logger.warning(f"Skipping '{title}': no authors")
        return None

    return Book(title=title, authors=authors)


def parse_records(
    records: Union[List[Dict[str, Any]], Dict[str, Any]],
    separator: str = Config.AUTHOR_SEPARATOR
) -> List[Book]:
    """
    Parse a list of records, or a {"items": [...]} envelope.

    Returns:
        List of Book objects (unusable records are skipped)
    """
    if isinstance(records, dict):
        records = records.get("items", [])

    books = []
    for record in records:
        book = parse_record(record, separator)
        if book:
            books.append(book)

    return books


def to_columns(books: List[Book]) -> Tuple[List[str], List[List[str]]]:
    """Split books into the parallel title / author-list sequences CatalogIndex.load takes."""
    return [book.title for book in books], [list(book.authors) for book in books]


def read_catalog_file(
    path: Union[str, Path],
    separator: str = Config.AUTHOR_SEPARATOR
) -> List[Book]:
    """
    Read books from a JSON or CSV catalog file.

    JSON files hold a list of records or an {"items": [...]} envelope.
    CSV files need a header row with "title" and "authors" columns.

    Args:
        path: Catalog file path
        separator: Separator between author names in string fields

    Returns:
        List of Book objects in file order

    Raises:
        CatalogFileError: File missing or unreadable
        InvalidArgumentError: Unsupported file extension
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in (".json", ".csv"):
        raise InvalidArgumentError(f"Unsupported catalog format: {path.name}")
    if not path.is_file():
        raise CatalogFileError(f"Catalog file not found: {path}")

    try:
        with path.open("r", newline="", encoding="utf-8") as f:
            if suffix == ".json":
                data = json.load(f)
            else:
                data = list(csv.DictReader(f))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, csv.Error) as e:
        raise CatalogFileError(f"Failed to read catalog {path}: {e}") from e

    if not isinstance(data, (list, dict)):
        raise CatalogFileError(f"Catalog {path} must hold a list of records")

    books = parse_records(data, separator)
    logger.info(f"Read {len(books)} books from {path}")
    return books
