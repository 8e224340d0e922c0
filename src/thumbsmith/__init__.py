"""Thumbsmith: a rate-limited gateway for AI thumbnail generation."""

__version__ = "0.1.0"
