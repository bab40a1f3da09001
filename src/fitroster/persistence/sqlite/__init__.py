"""SQLite persistence implementation."""

from .database import SQLiteDatabase
from .repositories import SQLiteClassRecordStore, SQLiteNotificationRepository

__all__ = ["SQLiteClassRecordStore", "SQLiteDatabase", "SQLiteNotificationRepository"]
