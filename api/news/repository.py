"""
News persistence (raw SQL).

`NewsStorage` wraps an asyncpg pool. Each call borrows its own pooled
connection, so one instance is shared by all concurrent requests.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping

import asyncpg

from .schemas import Post

DEFAULT_RECENT_COUNT = 10

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        raise StorageError(str(exc)) from exc


def _row_to_post(row: Mapping[str, Any]) -> Post:
    return Post(
        id=int(row["id"]),
        title=row["title"] or "",
        content=row["content"] or "",
        pub_time=int(row["pub_time"] or 0),
        link=row["link"] or "",
    )


def _like_pattern(substring: str) -> str:
    """
    Wrap `substring` for ILIKE so that `%`, `_` and `\\` match literally.
    """
    escaped = substring.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class NewsStorage:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def fetch_recent(self, n: int) -> list[Post]:
        """
        Return up to `n` latest posts. `n == 0` means the default of 10.
        """
        if n == 0:
            n = DEFAULT_RECENT_COUNT
        with _storage_errors():
            rows = await self._pool.fetch(
                """
                SELECT id, title, content, pub_time, link
                FROM news
                ORDER BY pub_time DESC, id DESC
                LIMIT $1
                """,
                n,
            )
        return [_row_to_post(r) for r in rows]

    async def fetch_all(self) -> list[Post]:
        with _storage_errors():
            rows = await self._pool.fetch(
                """
                SELECT id, title, content, pub_time, link
                FROM news
                ORDER BY pub_time DESC, id DESC
                """
            )
        return [_row_to_post(r) for r in rows]

    async def fetch_page(self, offset: int, limit: int) -> tuple[list[Post], int]:
        """
        One page of posts plus the total row count.
        """
        with _storage_errors():
            rows = await self._pool.fetch(
                """
                SELECT id, title, content, pub_time, link
                FROM news
                ORDER BY pub_time DESC, id DESC
                OFFSET $1
                LIMIT $2
                """,
                offset,
                limit,
            )
            total = await self._pool.fetchval("SELECT count(*) FROM news")
        return [_row_to_post(r) for r in rows], int(total or 0)

    async def search(self, substring: str, offset: int, limit: int) -> tuple[list[Post], int]:
        """
        Case-insensitive title search. Content is not searched.
        """
        pattern = _like_pattern(substring)
        with _storage_errors():
            rows = await self._pool.fetch(
                """
                SELECT id, title, content, pub_time, link
                FROM news
                WHERE title ILIKE $1
                ORDER BY pub_time DESC, id DESC
                OFFSET $2
                LIMIT $3
                """,
                pattern,
                offset,
                limit,
            )
            total = await self._pool.fetchval(
                "SELECT count(*) FROM news WHERE title ILIKE $1",
                pattern,
            )
        return [_row_to_post(r) for r in rows], int(total or 0)

    async def insert(self, posts: Iterable[Post]) -> int:
        """
        Insert posts one statement at a time, outside any transaction.

        Stops at the first failing row; rows inserted before it stay
        committed. Returns how many rows were inserted.
        """
        inserted = 0
        for post in posts:
            try:
                with _storage_errors():
                    await self._pool.execute(
                        """
                        INSERT INTO news (title, content, pub_time, link)
                        VALUES ($1, $2, $3, $4)
                        """,
                        post.title,
                        post.content,
                        post.pub_time,
                        post.link,
                    )
            except StorageError:
                logger.warning("news_insert_failed inserted=%s link=%s", inserted, post.link)
                raise
            inserted += 1
        logger.info("news_insert_complete inserted=%s", inserted)
        return inserted
