#!/usr/bin/env python3
"""Book Index Explorer CLI - query a catalog file by title or author."""
import argparse
import sys
import json
import logging
from typing import List
from tabulate import tabulate
from bookindex.config import Config
from bookindex.errors import CatalogError
from bookindex.index import CatalogIndex
from bookindex.models import Book
from bookindex.parse import read_catalog_file, to_columns

logger = logging.getLogger(__name__)

FORMATS = list(Config.OUTPUT_FORMATS)


def setup_index(catalog_path: str) -> CatalogIndex:
    """Build a fresh index from a catalog file."""
    books = read_catalog_file(catalog_path)
    index = CatalogIndex()
    titles, author_lists = to_columns(books)
    index.load(titles, author_lists)
    return index


def display_books(books: List[Book], format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["Title", "Authors"]
        rows = [
            [
                book.title[:50] + "..." if len(book.title) > 50 else book.title,
                book.authors_str[:40] + "..." if len(book.authors_str) > 40 else book.authors_str
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        books_dict = [
            {"title": book.title, "authors": list(book.authors)}
            for book in books
        ]
        print(json.dumps(books_dict, indent=2))

    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.authors_str}")


def display_authors(title: str, authors, format_type: str):
    """Display the authors of one title."""
    if format_type == "table":
        rows = [[i, author] for i, author in enumerate(authors, 1)]
        print("\n" + tabulate(rows, headers=["#", f"Authors of {title}"], tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps({"title": title, "authors": list(authors)}, indent=2))

    elif format_type == "compact":
        for i, author in enumerate(authors, 1):
            print(f"{i}. {author}")


def show_stats(args, index: CatalogIndex):
    """Show index statistics."""
    stats = index.get_stats()

    print("\n" + "=" * 50)
    print("CATALOG STATISTICS")
    print("=" * 50)
    print(f"Total books: {stats['total_books']}")
    print(f"Total authors: {stats['total_authors']}")
    print(f"Most books by one author: {stats['max_books_per_author']}")
    print("=" * 50 + "\n")


def books_by_author(args, index: CatalogIndex):
    """List books written by an author."""
    books = sorted(index.query_by_author(args.author), key=lambda b: b.title)
    if not books:
        print(f"No books found for author: {args.author}")
        return
    display_books(books, args.format)


def authors_by_title(args, index: CatalogIndex):
    """List authors of a title."""
    authors = index.query_by_title(args.title)
    if not authors:
        print(f"No such title: {args.title}")
        return
    display_authors(args.title, authors, args.format)


def list_books(args, index: CatalogIndex):
    """List every book in catalog order."""
    display_books(index.books(), args.format)


def remove_entries(args, index: CatalogIndex):
    """Remove titles, then authors, and show what is left."""
    for title in args.title:
        removed = index.remove_by_title(title)
        print(f"{'✅ Removed' if removed else '⚠️  Not found'} title: {title}")
    for author in args.author:
        removed = index.remove_by_author(author)
        print(f"{'✅ Removed' if removed else '⚠️  Not found'} author: {author}")

    print(f"\n{index.book_count()} books and {index.author_count()} authors remain")
    display_books(index.books(), args.format)


COMMANDS = {
    "stats": show_stats,
    "by-author": books_by_author,
    "by-title": authors_by_title,
    "list": list_books,
    "remove": remove_entries,
}


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Book Index Explorer - look up books by author and authors by title",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Catalog summary
  %(prog)s --catalog books.json stats

  # Everything an author wrote
  %(prog)s by-author "Terry Pratchett" --format compact

  # Who wrote a book
  %(prog)s by-title "Good Omens"

  # Drop an author and every book they wrote
  %(prog)s remove --author "Neil Gaiman"
        """
    )
    parser.add_argument("--catalog", default=config.CATALOG_FILE,
                        help=f"Catalog file, .json or .csv (default: {config.CATALOG_FILE})")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("stats", help="Show catalog statistics")

    author_parser = subparsers.add_parser("by-author", help="Books written by an author")
    author_parser.add_argument("author", help="Author name")

    title_parser = subparsers.add_parser("by-title", help="Authors of a title")
    title_parser.add_argument("title", help="Book title")

    list_parser = subparsers.add_parser("list", help="List every book")

    remove_parser = subparsers.add_parser("remove", help="Remove titles or authors, then list the rest")
    remove_parser.add_argument("--title", action="append", default=[], help="Title to remove (repeatable)")
    remove_parser.add_argument("--author", action="append", default=[], help="Author to remove (repeatable)")

    for sub in (author_parser, title_parser, list_parser, remove_parser):
        sub.add_argument("--format", choices=FORMATS, default=config.default_format, help="Output format")

    return parser


def main():
    """Main CLI entry point."""
    config = Config()
    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    parser = build_parser(config)
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        with setup_index(args.catalog) as index:
            COMMANDS[args.command](args, index)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except CatalogError as e:
        logger.error(f"❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
