"""
Root conftest.py for svc-resource tests.

Provides an in-memory stand-in for the motor database/collection handles so
the resource routes can be exercised without a running MongoDB, plus the
app/client fixtures built on top of it.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pymongo.results import InsertOneResult

from svc_resource.api.fastapi import CatchAllExceptionMiddleware, create_resource
from svc_resource.schemas import Post


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """Mark route-level tests so `-m mongo` selects them."""
    for item in items:
        norm = str(item.fspath).replace("\\", "/")
        if "/tests/unit/api/" in norm or "/tests/acceptance/" in norm:
            item.add_marker(pytest.mark.mongo)


# =============================================================================
# IN-MEMORY MONGO DOUBLES
# =============================================================================


class MockCursor:
    """Mimics the chainable part of a motor cursor: skip/limit/to_list."""

    def __init__(self, docs: Iterable[Dict[str, Any]]):
        self._docs = [dict(d) for d in docs]
        self._skip = 0
        self._limit = 0
        self.calls: list[tuple[str, int]] = []

    def skip(self, n: int) -> "MockCursor":
        self.calls.append(("skip", n))
        self._skip = n
        return self

    def limit(self, n: int) -> "MockCursor":
        self.calls.append(("limit", n))
        self._limit = n
        return self

    async def to_list(self, length: Optional[int] = None) -> list[Dict[str, Any]]:
        docs = self._docs[self._skip :]
        if self._limit:
            docs = docs[: self._limit]
        return docs


class MockCollection:
    """Dict-backed collection keyed by ObjectId, insertion ordered."""

    def __init__(self, name: str):
        self.name = name
        self.docs: Dict[ObjectId, Dict[str, Any]] = {}
        self.last_cursor: Optional[MockCursor] = None
        self.last_update: Optional[Dict[str, Any]] = None

    def find(self, filter: Optional[Dict[str, Any]] = None) -> MockCursor:
        self.last_cursor = MockCursor(self.docs.values())
        return self.last_cursor

    async def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(filter["_id"])
        return dict(doc) if doc is not None else None

    async def insert_one(self, document: Dict[str, Any]) -> InsertOneResult:
        doc = dict(document)
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = doc
        return InsertOneResult(doc["_id"], True)

    async def find_one_and_update(
        self, filter: Dict[str, Any], update: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        self.last_update = update
        current = self.docs.get(filter["_id"])
        if current is None:
            return None
        before = dict(current)
        current.update(update["$set"])
        return before

    async def find_one_and_delete(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.docs.pop(filter["_id"], None)


class MockDatabase:
    def __init__(self, name: str = "test_db"):
        self.name = name
        self.collections: Dict[str, MockCollection] = {}
        self.commands: list[Any] = []

    def __getitem__(self, name: str) -> MockCollection:
        if name not in self.collections:
            self.collections[name] = MockCollection(name)
        return self.collections[name]

    async def command(self, cmd: Any) -> Dict[str, Any]:
        self.commands.append(cmd)
        return {"ok": 1.0}


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def mock_db() -> MockDatabase:
    return MockDatabase()


@pytest.fixture
def posts_resource(mock_db):
    return create_resource(Post, mock_db, "posts")


@pytest.fixture
def posts_app(posts_resource) -> FastAPI:
    app = FastAPI(title="Resource Test App")
    app.add_middleware(CatchAllExceptionMiddleware)
    app.include_router(posts_resource.router, prefix="/posts")
    return app


@pytest.fixture
def client(posts_app) -> TestClient:
    return TestClient(posts_app)


@pytest.fixture(autouse=True)
def _mongo_env(monkeypatch):
    """Keep settings deterministic regardless of the developer's shell."""
    monkeypatch.setenv("MONGO_URL", "mongodb://localhost:27017")
    monkeypatch.setenv("MONGO_DB", "test_db")
    monkeypatch.delenv("APP_RESOURCE_NAME", raising=False)
    monkeypatch.delenv("APP_PORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)

    from svc_resource.app.settings import get_app_settings
    from svc_resource.db.nosql.mongo import close_mongo, get_mongo_settings

    get_mongo_settings.cache_clear()
    get_app_settings.cache_clear()
    yield
    close_mongo()
    get_mongo_settings.cache_clear()
    get_app_settings.cache_clear()
