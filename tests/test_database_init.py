"""Tests for AsyncDatabaseInitializer."""

import pytest

from utils.database_init import AsyncDatabaseInitializer


class TestInitializerConfiguration:
    """Test directory resolution and validation"""

    def testExplicitDirectoryCreated(self, tmp_path):
        dbDir = tmp_path / "nested" / "dir"
        initializer = AsyncDatabaseInitializer(dbDir)
        assert dbDir.is_dir()
        assert initializer.db_path == dbDir / "app.db"

    def testEnvironmentDirectory(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_DIR", str(tmp_path))
        initializer = AsyncDatabaseInitializer()
        assert initializer.db_path == tmp_path / "app.db"

    def testMissingEnvironmentRaises(self, monkeypatch):
        monkeypatch.delenv("DATABASE_DIR", raising=False)
        with pytest.raises(RuntimeError):
            AsyncDatabaseInitializer()

    def testFileAsDirectoryRaises(self, tmp_path):
        filePath = tmp_path / "file.txt"
        filePath.write_text("test")
        with pytest.raises(RuntimeError):
            AsyncDatabaseInitializer(filePath)

    def testResetFromEnvironment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_RESET", "true")
        assert AsyncDatabaseInitializer(tmp_path).reset is True
        monkeypatch.setenv("DATABASE_RESET", "0")
        assert AsyncDatabaseInitializer(tmp_path).reset is False


class TestEnsureDatabase:
    """Test schema creation and reset behavior"""

    @pytest.mark.asyncio
    async def testCreatesImageTable(self, tmp_path):
        initializer = AsyncDatabaseInitializer(tmp_path)
        assert not initializer.initialized
        async with initializer.connection() as conn:
            cur = await conn.execute("PRAGMA table_info(IMAGE)")
            columns = {row[1] for row in await cur.fetchall()}
        assert columns == {"id", "file_name", "data"}
        assert initializer.initialized

    @pytest.mark.asyncio
    async def testDataSurvivesNewInitializer(self, tmp_path):
        first = AsyncDatabaseInitializer(tmp_path, reset=False)
        async with first.connection() as conn:
            await conn.execute("INSERT INTO IMAGE (file_name, data) VALUES (?, ?)", ("a.png", b"\x01"))
            await conn.commit()

        second = AsyncDatabaseInitializer(tmp_path, reset=False)
        async with second.connection() as conn:
            cur = await conn.execute("SELECT COUNT(*) FROM IMAGE")
            assert (await cur.fetchone())[0] == 1

    @pytest.mark.asyncio
    async def testResetWipesExistingDatabase(self, tmp_path):
        first = AsyncDatabaseInitializer(tmp_path, reset=False)
        async with first.connection() as conn:
            await conn.execute("INSERT INTO IMAGE (file_name, data) VALUES (?, ?)", ("a.png", b"\x01"))
            await conn.commit()

        second = AsyncDatabaseInitializer(tmp_path, reset=True)
        async with second.connection() as conn:
            cur = await conn.execute("SELECT COUNT(*) FROM IMAGE")
            assert (await cur.fetchone())[0] == 0
