"""Cursor pagination over thread search results."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from patchql.core.errors import ConflictingCursorsError, InvalidPageSizeError, NoResultsFoundError
from patchql.models.message import CONTENT_TYPE_POST
from patchql.query.predicate import And, Compare, Op, Predicate, ThreadField
from patchql.repositories.base import ThreadRow, ThreadStore
from patchql.schemas.thread import OrderBy, PageInfo, ThreadConnection
from patchql.services.cursor import decode_cursor, encode_cursor

__all__ = [
    "ThreadPage",
    "assemble_connection",
    "cursor_bound",
    "paginate_threads",
    "thread_search_predicate",
]

logger = logging.getLogger(__name__)

# Thread search is defined only over root messages of this type.
_ROOT_POSTS = And(
    (
        Compare(ThreadField.ROOT_KEY_ID, Op.IS_NULL),
        Compare(ThreadField.CONTENT_TYPE, Op.EQ, CONTENT_TYPE_POST),
    )
)


@dataclass
class ThreadPage:
    """Matched thread ids of one page plus the metadata to fetch the next."""

    thread_keys: list[int]
    page_info: PageInfo


def cursor_bound(before: str | None, after: str | None) -> Predicate | None:
    """Return the sequence bound implied by the cursors, if any.

    ``before`` refers to position in the result list, which is newest first,
    so it selects rows with a *greater* sequence number. ``after`` selects
    older rows.

    Raises:
        ConflictingCursorsError: If both cursors are given.
        CursorDecodeError: If the given cursor is malformed.
    """
    if before is not None and after is not None:
        raise ConflictingCursorsError()
    if before is not None:
        return Compare(ThreadField.FLUME_SEQ, Op.GT, decode_cursor(before))
    if after is not None:
        return Compare(ThreadField.FLUME_SEQ, Op.LT, decode_cursor(after))
    return None


def thread_search_predicate(filter_predicate: Predicate, bound: Predicate | None) -> Predicate:
    """AND the composed filter with the cursor bound and the root-post restriction."""
    clauses: list[Predicate] = [filter_predicate]
    if bound is not None:
        clauses.append(bound)
    clauses.append(_ROOT_POSTS)
    return And(tuple(clauses))


def _page_info(rows: list[ThreadRow], has_next_page: bool) -> PageInfo:
    first_seq = rows[0].flume_seq
    last_seq = rows[-1].flume_seq
    if first_seq is None or last_seq is None:
        raise NoResultsFoundError()
    return PageInfo(
        start_cursor=encode_cursor(first_seq),
        end_cursor=encode_cursor(last_seq),
        has_next_page=has_next_page,
    )


def paginate_threads(
    store: ThreadStore,
    filter_predicate: Predicate,
    *,
    limit: int,
    bound: Predicate | None = None,
    order_by: OrderBy = OrderBy.RECEIVED,
) -> ThreadPage:
    """Execute a thread search and return one page of results.

    Rows are ordered by descending sequence number. ``order_by`` is accepted
    for every mode; asserted and causal ordering currently resolve to the
    same sequence order.

    One row beyond ``limit`` is fetched to decide ``has_next_page`` and then
    dropped.

    Raises:
        InvalidPageSizeError: If ``limit`` is below 1.
        NoResultsFoundError: If nothing matches.
    """
    if limit < 1:
        raise InvalidPageSizeError(f"Page size must be positive, got {limit}")
    if order_by is not OrderBy.RECEIVED:
        logger.debug("Order %s resolved to received order", order_by.value)

    predicate = thread_search_predicate(filter_predicate, bound)
    logger.debug("Thread search predicate: %r (limit %d)", predicate, limit)
    rows = store.thread_rows(predicate, limit + 1)
    if not rows:
        raise NoResultsFoundError()

    has_next_page = len(rows) > limit
    rows = rows[:limit]
    return ThreadPage([row.key_id for row in rows], _page_info(rows, has_next_page))


def assemble_connection(page_size: int, page: ThreadPage) -> ThreadConnection:
    """Package a page into the connection shape returned to callers."""
    return ThreadConnection(
        page_size=page_size,
        thread_keys=page.thread_keys,
        page_info=page.page_info,
    )
