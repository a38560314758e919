# src/patchql/api/v1/endpoints/threads.py
"""Thread search and lookup endpoints."""

import logging

from fastapi import APIRouter, Query

from patchql.api.v1.dependencies import ThreadServiceDep, http_error
from patchql.core.errors import QueryError
from patchql.schemas.thread import (
    OrderBy,
    Privacy,
    ThreadConnection,
    ThreadResponse,
    ThreadSelectors,
)

router = APIRouter(prefix="/threads", tags=["threads"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=ThreadConnection)
def search_threads(
    service: ThreadServiceDep,
    before: str | None = Query(None, description="Return threads newer than this cursor"),
    after: str | None = Query(None, description="Return threads older than this cursor"),
    page_size: int | None = Query(None, description="Number of threads to return"),
    privacy: Privacy = Query(Privacy.PUBLIC, description="Public, private or all threads"),
    roots_authored_by: list[str] | None = Query(None),
    roots_authored_by_someone_followed_by: list[str] | None = Query(None),
    has_replies_authored_by: list[str] | None = Query(None),
    has_replies_authored_by_someone_followed_by: list[str] | None = Query(None),
    mentions_authors: list[str] | None = Query(None),
    mentions_channels: list[str] | None = Query(None),
    order_by: OrderBy = Query(OrderBy.RECEIVED),
) -> ThreadConnection:
    """Search for threads that match *any* of the selectors.

    Selectors are logically OR'd, not AND'd.

    Raises:
        HTTPException: 400 for bad cursors or page sizes, 404 when nothing matches
    """
    selectors = ThreadSelectors(
        roots_authored_by=roots_authored_by,
        roots_authored_by_someone_followed_by=roots_authored_by_someone_followed_by,
        has_replies_authored_by=has_replies_authored_by,
        has_replies_authored_by_someone_followed_by=has_replies_authored_by_someone_followed_by,
        mentions_authors=mentions_authors,
        mentions_channels=mentions_channels,
    )
    try:
        return service.threads(
            before=before,
            after=after,
            page_size=page_size,
            privacy=privacy,
            selectors=selectors,
            order_by=order_by,
        )
    except QueryError as err:
        logger.warning("Thread search rejected: %s", err)
        raise http_error(err) from err


@router.get("/lookup", response_model=ThreadResponse)
def get_thread(
    service: ThreadServiceDep,
    root_id: str = Query(..., description="Key string of the root message"),
    order_by: OrderBy = Query(OrderBy.RECEIVED),
) -> ThreadResponse:
    """Find a thread by the key string of its root message.

    Raises:
        HTTPException: 404 if the key is unknown
    """
    try:
        return service.thread(root_id, order_by)
    except QueryError as err:
        raise http_error(err) from err
