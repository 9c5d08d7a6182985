"""Unified search gateway across help-center, documentation and knowledge-base sources."""

__version__ = "1.0.0"
