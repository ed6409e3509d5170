"""Movie catalog scraper and download link resolver."""

__version__ = "0.1.0"
