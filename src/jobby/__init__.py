"""Jobby: run-time helper for scheduled jobs."""

__version__ = "0.1.0"
