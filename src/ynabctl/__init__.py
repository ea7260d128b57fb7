"""ynabctl: command-line client for the YNAB API."""

__version__ = "0.1.0"
