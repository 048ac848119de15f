"""
News service: query-parameter coercion and the pagination/search contract.

Handlers stay thin; everything here is independent of FastAPI routing.
"""

from __future__ import annotations

import re

from . import schemas
from .repository import NewsStorage

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Query parameters end up as Postgres bigint.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(raw: str | None) -> int | None:
    """
    Strict base-10 integer parsing: optional sign, digits only.

    Returns None for anything else (blank, whitespace, `1.5`, `1_000`) and
    for values outside the signed 64-bit range.
    """
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def coerce_positive(raw: str | None, default: int) -> int:
    value = parse_int(raw)
    if value is None or value < 1:
        return default
    return value


def coerce_page(raw: str | None, limit: int) -> int:
    """
    Like `coerce_positive`, but a page whose offset would not fit in a
    bigint falls back to the first page.
    """
    page = coerce_positive(raw, DEFAULT_PAGE)
    if page_offset(page, limit) > INT64_MAX:
        return DEFAULT_PAGE
    return page


def page_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def total_pages(total: int, limit: int) -> int:
    # ceil(total / limit) in integer arithmetic
    if limit <= 0:
        return 0
    return (total + limit - 1) // limit


async def latest_news(storage: NewsStorage, n: int) -> list[schemas.Post]:
    return await storage.fetch_recent(n)


async def list_news(
    storage: NewsStorage,
    *,
    query: str = "",
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> schemas.NewsPage:
    """
    Plain listing when `query` is empty, title search otherwise.
    """
    offset = page_offset(page, limit)
    if query:
        posts, total = await storage.search(query, offset, limit)
    else:
        posts, total = await storage.fetch_page(offset, limit)

    return schemas.NewsPage(
        data=posts,
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages(total, limit),
    )
