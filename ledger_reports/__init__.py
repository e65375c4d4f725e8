"""Financial reports derived from general-ledger journal lines."""

__version__ = "0.1.0"
