"""
Pytest fixtures for the news API.

HTTP tests run against an in-memory gateway; gateway tests run against a
fake pool shaped like asyncpg's (fetch / fetchval / execute).
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from main import create_app
from news.repository import DEFAULT_RECENT_COUNT, StorageError
from news.schemas import Post


def make_posts(count: int = 12) -> list[Post]:
    """Posts 1..count; a higher id is also more recent."""
    return [
        Post(
            id=i,
            title=f"Headline {i}",
            content=f"Body of post {i}",
            pub_time=1_700_000_000 + i * 60,
            link=f"https://example.com/news/{i}",
        )
        for i in range(1, count + 1)
    ]


class FakeStorage:
    """In-memory stand-in for NewsStorage with the same async surface."""

    def __init__(self, posts: list[Post] | None = None) -> None:
        self.posts = list(posts or [])
        self.calls: list[tuple[Any, ...]] = []
        self.error: str | None = None

    def _ordered(self) -> list[Post]:
        return sorted(self.posts, key=lambda p: (p.pub_time, p.id), reverse=True)

    def _check(self) -> None:
        if self.error is not None:
            raise StorageError(self.error)

    async def fetch_recent(self, n: int) -> list[Post]:
        self.calls.append(("fetch_recent", n))
        self._check()
        if n == 0:
            n = DEFAULT_RECENT_COUNT
        return self._ordered()[:n]

    async def fetch_all(self) -> list[Post]:
        self.calls.append(("fetch_all",))
        self._check()
        return self._ordered()

    async def fetch_page(self, offset: int, limit: int) -> tuple[list[Post], int]:
        self.calls.append(("fetch_page", offset, limit))
        self._check()
        rows = self._ordered()
        return rows[offset : offset + limit], len(rows)

    async def search(self, substring: str, offset: int, limit: int) -> tuple[list[Post], int]:
        self.calls.append(("search", substring, offset, limit))
        self._check()
        needle = substring.lower()
        rows = [p for p in self._ordered() if needle in p.title.lower()]
        return rows[offset : offset + limit], len(rows)

    async def insert(self, posts: list[Post]) -> int:
        self.calls.append(("insert", len(posts)))
        self._check()
        self.posts.extend(posts)
        return len(posts)


class FakePool:
    """
    Records every statement. `fetch_rows` / `count` feed reads;
    `fail_on_execute` makes the n-th execute call (1-based) raise.
    """

    def __init__(self) -> None:
        self.fetch_rows: list[dict[str, Any]] = []
        self.count = 0
        self.statements: list[tuple[str, tuple[Any, ...]]] = []
        self.committed: list[tuple[Any, ...]] = []
        self.fail_on_execute: int | None = None
        self.execute_error: Exception | None = None
        self.fetch_error: Exception | None = None
        self._executes = 0

    async def fetch(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self.statements.append((sql, args))
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.fetch_rows)

    async def fetchval(self, sql: str, *args: Any) -> int:
        self.statements.append((sql, args))
        return self.count

    async def execute(self, sql: str, *args: Any) -> str:
        self.statements.append((sql, args))
        self._executes += 1
        if self.fail_on_execute == self._executes:
            raise self.execute_error or OSError("connection reset by peer")
        self.committed.append(args)
        return "INSERT 0 1"


@pytest.fixture
def posts() -> list[Post]:
    return make_posts()


@pytest.fixture
def storage(posts) -> FakeStorage:
    return FakeStorage(posts)


@pytest.fixture
def app(storage):
    return create_app(storage=storage)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def pool() -> FakePool:
    return FakePool()
