"""Optimistic stack and card management with rollback."""

__version__ = "0.1.0"
