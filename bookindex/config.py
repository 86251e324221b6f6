"""Configuration management."""
import logging
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Catalog source
    CATALOG_FILE = os.getenv("CATALOG_FILE", "books.json")
    AUTHOR_SEPARATOR = os.getenv("AUTHOR_SEPARATOR", ";")

    # Output
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    DEFAULT_FORMAT = os.getenv("DEFAULT_FORMAT", "table")
    OUTPUT_FORMATS = ("table", "json", "compact")

    @property
    def log_level(self) -> int:
        """Resolve LOG_LEVEL to a logging constant, falling back to INFO."""
        level = logging.getLevelName(self.LOG_LEVEL)
        return level if isinstance(level, int) else logging.INFO

    @property
    def default_format(self) -> str:
        """DEFAULT_FORMAT if it names a known output format, else table."""
        return self.DEFAULT_FORMAT if self.DEFAULT_FORMAT in self.OUTPUT_FORMATS else "table"
