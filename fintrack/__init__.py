"""
fintrack - Local-first Personal Finance Tracker

A FastAPI-based service that records income and expense transactions,
persists them locally, derives dashboard views, and optionally mirrors
the data to a GitHub Gist for cross-device sync.
"""

__version__ = "0.1.0"
