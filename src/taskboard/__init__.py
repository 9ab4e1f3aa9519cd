"""Task list components kept in sync with a JSON REST task store."""

__version__ = "0.1.0"
