"""Content archival adapter."""

from .client import HttpContentArchiver, LoggingContentArchiver, MockContentArchiver

__all__ = ["HttpContentArchiver", "LoggingContentArchiver", "MockContentArchiver"]
