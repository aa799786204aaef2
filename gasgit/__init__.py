"""Pull Google Apps Script projects into git, optionally redacting API paths."""

__version__ = "0.1.0"
