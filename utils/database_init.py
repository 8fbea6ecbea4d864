import os
import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

LOGGER = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


class AsyncDatabaseInitializer:
    """
    Manage the async SQLite database that backs the image store.

    - The database file is located at: <db_dir>/app.db
    - `db_dir` defaults to the DATABASE_DIR environment variable. A RuntimeError
      is raised if neither is provided or the path is not a usable directory.
    - On the first call to `ensure_database()` for a given instance the IMAGE
      table is created. If `reset` is enabled (argument or DATABASE_RESET env),
      any existing database file is deleted first.
    - Subsequent calls to `ensure_database()` on the same instance are no-ops,
      so it is safe for `connection()` to call it.
    """

    def __init__(self, db_dir: Optional[Path | str] = None, reset: Optional[bool] = None) -> None:
        if db_dir is None:
            env_dir = os.getenv("DATABASE_DIR")
            if env_dir is None or not env_dir.strip():
                raise RuntimeError(
                    "DATABASE_DIR environment variable must be set to a writable "
                    "directory path where the SQLite database file will be stored."
                )
            db_dir = env_dir

        db_dir = Path(db_dir).expanduser()

        # If the path exists but is not a directory, that's a configuration error.
        if db_dir.exists() and not db_dir.is_dir():
            raise RuntimeError(
                f"Database directory {db_dir} points to a file, not a directory. "
                "Please set DATABASE_DIR to a directory path."
            )

        try:
            db_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RuntimeError(
                f"Failed to create or access database directory at {db_dir}"
            ) from exc

        if reset is None:
            reset = os.getenv("DATABASE_RESET", "").strip().lower() in _TRUTHY

        self.db_dir = db_dir
        self.db_path = self.db_dir / "app.db"
        self.reset = reset

        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def ensure_database(self) -> None:
        """
        Ensure the SQLite database exists at `self.db_path` with the IMAGE table.

        Subsequent calls on the same instance are no-ops.
        """
        if self._initialized:
            return

        async with self._lock:
            if self._initialized:
                return

            if self.reset and self.db_path.exists():
                try:
                    self.db_path.unlink()
                except OSError as exc:
                    raise RuntimeError(
                        f"Failed to delete existing database at {self.db_path}"
                    ) from exc
                LOGGER.info("Removed existing database at %s", self.db_path)

            max_attempts = 3
            for attempt in range(1, max_attempts + 1):
                try:
                    async with aiosqlite.connect(self.db_path) as db:
                        # AUTOINCREMENT keeps ids from being reused after deletes.
                        await db.execute(
                            """
                            CREATE TABLE IF NOT EXISTS IMAGE (
                                id INTEGER PRIMARY KEY AUTOINCREMENT,
                                file_name TEXT,
                                data BLOB NOT NULL
                            )
                            """
                        )
                        await db.commit()
                    break
                except FileNotFoundError:
                    # On some platforms a transient missing file error may occur; retry a few times.
                    if attempt >= max_attempts:
                        raise
                    await asyncio.sleep(0.1 * attempt)

            LOGGER.info("Image database ready at %s", self.db_path)
            self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Async context manager yielding an `aiosqlite.Connection`.

        The database is created on the first use via `ensure_database()`.
        """
        await self.ensure_database()
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()
