"""Totem restaurant operations core: report parsers, reconciliation and summaries."""

__version__ = "0.1.0"
