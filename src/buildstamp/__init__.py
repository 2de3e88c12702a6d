"""Buildstamp: rolling build counters and version templates for CI jobs."""

__version__ = "0.1.0"
