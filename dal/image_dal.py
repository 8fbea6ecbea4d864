"""Async Data Access Layer for IMAGE table.

Provides ImageDAL class with async CRUD operations compatible with
`utils.database_init.AsyncDatabaseInitializer`.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import aiosqlite

from models.image_record import ImageRecord
from utils.database_init import AsyncDatabaseInitializer


class ImageStorageError(OSError):
    """Raised when the underlying database cannot be read or written."""


class ImageDAL:
    """Data access layer for IMAGE records.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`).
    """

    _COLUMNS = ("id", "file_name", "data")
    _COLUMN_LIST = ", ".join(_COLUMNS)

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def insert(self, file_name: Optional[str], data: bytes) -> ImageRecord:
        """Insert a new IMAGE row and return it with its allocated id."""
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    "INSERT INTO IMAGE (file_name, data) VALUES (?, ?)",
                    (file_name, data),
                )
                await conn.commit()
                return ImageRecord(id=cur.lastrowid, file_name=file_name, data=data)
        except (aiosqlite.Error, OSError) as exc:
            raise ImageStorageError(f"Failed to insert image {file_name!r}") from exc

    async def find_by_id(self, image_id: int) -> Optional[ImageRecord]:
        """Return ImageRecord for `image_id`, or None if not found."""
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    f"SELECT {self._COLUMN_LIST} FROM IMAGE WHERE id = ?",
                    (image_id,),
                )
                row = await cur.fetchone()
                return self._row_to_record(row) if row else None
        except (aiosqlite.Error, OSError) as exc:
            raise ImageStorageError(f"Failed to read image {image_id}") from exc

    async def find_all(self) -> List[ImageRecord]:
        """Return every IMAGE row ordered by id."""
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(f"SELECT {self._COLUMN_LIST} FROM IMAGE ORDER BY id")
                rows = await cur.fetchall()
                return [self._row_to_record(r) for r in rows]
        except (aiosqlite.Error, OSError) as exc:
            raise ImageStorageError("Failed to list images") from exc

    async def replace(self, image_id: int, file_name: Optional[str], data: bytes) -> Optional[ImageRecord]:
        """Overwrite filename and bytes of an existing row.

        Both columns are written by one UPDATE statement. Returns the updated
        record, or None when no row has `image_id`.
        """
        try:
            async with self._db.connection() as conn:
                cur = await conn.execute(
                    "UPDATE IMAGE SET file_name = ?, data = ? WHERE id = ?",
                    (file_name, data, image_id),
                )
                await conn.commit()
                if cur.rowcount < 1:
                    return None
                return ImageRecord(id=image_id, file_name=file_name, data=data)
        except (aiosqlite.Error, OSError) as exc:
            raise ImageStorageError(f"Failed to update image {image_id}") from exc

    async def delete_by_id(self, image_id: int) -> None:
        """Delete IMAGE row by id. Missing ids are ignored."""
        try:
            async with self._db.connection() as conn:
                await conn.execute("DELETE FROM IMAGE WHERE id = ?", (image_id,))
                await conn.commit()
        except (aiosqlite.Error, OSError) as exc:
            raise ImageStorageError(f"Failed to delete image {image_id}") from exc

    @staticmethod
    def _row_to_record(row: Sequence[object]) -> ImageRecord:
        """Convert a DB row tuple into an ImageRecord."""
        return ImageRecord(id=row[0], file_name=row[1], data=bytes(row[2] or b""))
