"""Receipts and financial reports for currency-exchange bookkeeping."""

__version__ = "0.1.0"
