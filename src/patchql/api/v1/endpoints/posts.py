# src/patchql/api/v1/endpoints/posts.py
"""Post lookup endpoints."""

from fastapi import APIRouter, Query

from patchql.api.v1.dependencies import ThreadServiceDep, http_error
from patchql.core.errors import QueryError
from patchql.schemas.thread import PostResponse

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/lookup", response_model=PostResponse)
def get_post(
    service: ThreadServiceDep,
    post_id: str = Query(..., alias="id", description="Key string of the message"),
) -> PostResponse:
    """Find a post by key string.

    Raises:
        HTTPException: 404 if the key is unknown
    """
    try:
        return service.post(post_id)
    except QueryError as err:
        raise http_error(err) from err
