"""
News API endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from . import schemas, service
from .repository import NewsStorage, StorageError

# The JSON content type comes from FastAPI's response class; CORS is added
# to every response, errors included.
CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
JSON_HEADERS = {"Content-Type": "application/json", **CORS_HEADERS}

INVALID_N_MESSAGE = "Invalid parameter 'n'"
LIST_ERROR_MESSAGE = "Ошибка при получении новостей"

logger = logging.getLogger(__name__)

router = APIRouter()


def get_storage(request: Request) -> NewsStorage:
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("News storage is not initialized. Start the app through its lifespan.")
    return storage


def _set_cors(response: Response) -> None:
    response.headers.update(CORS_HEADERS)


@router.get("/news", response_model=schemas.NewsPage)
async def list_news(
    response: Response,
    q: str = "",
    page: str | None = None,
    limit: str | None = None,
    storage: NewsStorage = Depends(get_storage),
) -> schemas.NewsPage:
    """
    Paginated listing, or a title search when `q` is given.

    Malformed `page`/`limit` values fall back to 1 and 10.
    """
    _set_cors(response)

    page_size = service.coerce_positive(limit, service.DEFAULT_LIMIT)
    page_num = service.coerce_page(page, page_size)
    try:
        return await service.list_news(storage, query=q, page=page_num, limit=page_size)
    except StorageError as exc:
        logger.exception("news_list_failed q=%r page=%s limit=%s", q, page_num, page_size)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=LIST_ERROR_MESSAGE,
            headers=CORS_HEADERS,
        ) from exc


@router.get("/news/{n}", response_model=list[schemas.Post])
async def latest_news(
    n: str,
    response: Response,
    storage: NewsStorage = Depends(get_storage),
) -> list[schemas.Post]:
    """
    The `n` most recent posts (`n = 0` means 10).

    Negative `n` is rejected with 400 instead of reaching the LIMIT clause.
    """
    _set_cors(response)

    count = service.parse_int(n)
    if count is None or count < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=INVALID_N_MESSAGE,
            headers=CORS_HEADERS,
        )
    try:
        return await service.latest_news(storage, count)
    except StorageError as exc:
        logger.warning("news_latest_failed n=%s error=%s", count, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
            headers=CORS_HEADERS,
        ) from exc


@router.options("/news/{n}")
async def latest_news_preflight(n: str) -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=JSON_HEADERS)
