"""Shared fixtures for image store tests."""

from contextlib import asynccontextmanager

import aiosqlite
import pytest
from fastapi.testclient import TestClient

from dal.image_dal import ImageDAL
from main import create_app
from services.image_store import ImageStoreService
from utils.database_init import AsyncDatabaseInitializer


class BrokenInitializer:
    """Connection provider whose database is unavailable."""

    @asynccontextmanager
    async def connection(self):
        raise aiosqlite.OperationalError("disk I/O error")
        yield  # pragma: no cover


@pytest.fixture
def dbInitializer(tmp_path):
    """Database initializer backed by a temporary directory."""
    return AsyncDatabaseInitializer(tmp_path / "db")


@pytest.fixture
def imageDal(dbInitializer):
    return ImageDAL(dbInitializer)


@pytest.fixture
def brokenDal():
    return ImageDAL(BrokenInitializer())


@pytest.fixture
def imageStore(imageDal):
    return ImageStoreService(imageDal)


@pytest.fixture
def client(tmp_path):
    """TestClient running the full application lifespan against a temp database."""
    app = create_app(AsyncDatabaseInitializer(tmp_path / "api-db"))
    with TestClient(app) as testClient:
        yield testClient
