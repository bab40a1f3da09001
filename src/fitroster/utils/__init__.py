"""Utility helpers."""

from .time import to_utc, utc_now

__all__ = ["to_utc", "utc_now"]
