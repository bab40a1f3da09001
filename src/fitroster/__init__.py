"""Fitroster: group-class enrollment with waitlist promotion."""

__version__ = "0.1.0"
