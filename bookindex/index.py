"""In-memory bidirectional index between book titles and authors."""
from typing import Optional, List, Dict, Set, Any, Sequence, FrozenSet, Tuple
import logging

from bookindex.errors import InvalidArgumentError, NullInputError
from bookindex.models import Book

logger = logging.getLogger(__name__)


class CatalogIndex:
    """
    Title -> book and author -> books maps kept in step with each other.

    Every author key maps to a non-empty set of books, and a book appears
    under an author exactly when it is stored under its title and lists that
    author. Not thread-safe: callers serialize access.
    """

    def __init__(self):
        """Create an empty index."""
        self.title_to_book: Dict[str, Book] = {}
        self.author_to_books: Dict[str, Set[Book]] = {}

    def load(
        self,
        titles: Sequence[str],
        author_lists: Sequence[Sequence[str]]
    ) -> int:
        """
        Bulk load books from two parallel sequences.

        Positions are validated one at a time as they are inserted, so a bad
        position aborts the load but leaves earlier positions in place.

        Args:
            titles: Book titles
            author_lists: Author list for each title, same length as titles

        Returns:
            Number of books inserted (duplicate titles are skipped)

        Raises:
            NullInputError: Either sequence is None
            InvalidArgumentError: Lengths differ, or a position has a blank
                title or an empty author list
        """
        logger.info("Initializing book index...")
        if titles is None or author_lists is None:
            raise NullInputError("Titles and author lists must not be None")
        if len(titles) != len(author_lists):
            raise InvalidArgumentError(
                f"Titles ({len(titles)}) and author lists ({len(author_lists)}) must have the same length"
            )

        inserted = 0
        for position, (title, authors) in enumerate(zip(titles, author_lists)):
            book = self._build_book(title, authors, position)
            if self.insert(book):
                inserted += 1

        logger.info(f"Loaded {inserted} books, {self.author_count()} authors")
        logger.debug(f"Titles after load: {list(self.title_to_book)}")
        return inserted

    def add_book(self, title: str, authors: Sequence[str]) -> bool:
        """Validate a single title/authors pair and insert it."""
        return self.insert(self._build_book(title, authors))

    def insert(self, book: Book) -> bool:
        """
        Store a book under its title and link it to each of its authors.

        Args:
            book: Book to store

        Returns:
            False if the title is already present, True otherwise
        """
        if book.title in self.title_to_book:
            logger.warning(f"Book already in index, skipping: {book.title}")
            return False

        self.title_to_book[book.title] = book
        self._link_authors(book)
        return True

    def remove_by_title(self, title: str) -> bool:
        """
        Remove a book and every author reference to it.

        Authors left without books are dropped from the author index.

        Returns:
            False for unknown titles, True if removed
        """
        book = self.title_to_book.pop(title, None)
        if book is None:
            logger.warning(f"No such title in index: {title}")
            return False

        self._unlink_authors(book)
        return True

    def remove_by_author(self, author: str) -> bool:
        """
        Remove every book written by an author.

        Co-authors of those books lose them too, and are dropped if that
        leaves them with nothing.

        Returns:
            False for unknown authors, True if removed
        """
        if author not in self.author_to_books:
            logger.warning(f"Unknown author: {author}")
            return False

        # Removing a book shrinks this very set, so iterate over a copy
        for book in list(self.author_to_books[author]):
            self.remove_by_title(book.title)
        return True

    def query_by_author(self, author: Optional[str]) -> FrozenSet[Book]:
        """Books written by an author; empty for None or unknown authors."""
        if author is None:
            return frozenset()
        return frozenset(self.author_to_books.get(author, ()))

    def query_by_title(self, title: Optional[str]) -> Tuple[str, ...]:
        """
        Authors of a title, in their stored order.

        Returns:
            Tuple of author names, empty for None or unknown titles
        """
        book = self.title_to_book.get(title)
        if book is None:
            logger.debug(f"Title not found: {title}")
            return ()
        return book.authors

    def book_count(self) -> int:
        return len(self.title_to_book)

    def author_count(self) -> int:
        return len(self.author_to_books)

    def titles(self) -> List[str]:
        """All titles in insertion order."""
        return list(self.title_to_book)

    def authors(self) -> List[str]:
        """All authors in the order they first appeared."""
        return list(self.author_to_books)

    def books(self) -> List[Book]:
        """All books in insertion order."""
        return list(self.title_to_book.values())

    def get_stats(self) -> Dict[str, Any]:
        """Get index statistics."""
        return {
            "total_books": self.book_count(),
            "total_authors": self.author_count(),
            "max_books_per_author": max(
                (len(books) for books in self.author_to_books.values()),
                default=0
            )
        }

    def reset(self):
        """Drop every book and author. Safe to call repeatedly."""
        logger.info("Clearing book index")
        self.title_to_book.clear()
        self.author_to_books.clear()

    shutdown = reset

    def _build_book(
        self,
        title: str,
        authors: Sequence[str],
        position: Optional[int] = None
    ) -> Book:
        try:
            return Book(title=title, authors=authors)
        except InvalidArgumentError as e:
            if position is None:
                raise
            raise InvalidArgumentError(f"{e} at position {position}", position) from e

    def _link_authors(self, book: Book):
        logger.debug(f"Linking '{book.title}' to authors: {list(book.authors)}")
        for author in book.authors:
            self.author_to_books.setdefault(author, set()).add(book)

    def _unlink_authors(self, book: Book):
        for author in book.authors:
            books = self.author_to_books.get(author)
            if books is None:
                # Author listed twice on this book, already dropped
                continue
            books.discard(book)
            if not books:
                logger.warning(f"Author has no books left, removing: {author}")
                del self.author_to_books[author]

    def __len__(self) -> int:
        return self.book_count()

    def __contains__(self, title) -> bool:
        return title in self.title_to_book

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.reset()
