"""Thread and post queries exposed by the transports."""

from __future__ import annotations

import logging

from patchql.core.errors import InvalidPageSizeError, NotFoundError
from patchql.core.settings import settings
from patchql.query.filters import apply_privacy, compose_thread_filter
from patchql.repositories.base import StoreProvider
from patchql.schemas.thread import (
    OrderBy,
    PostResponse,
    Privacy,
    ThreadConnection,
    ThreadResponse,
    ThreadSelectors,
)
from patchql.services.pagination import assemble_connection, cursor_bound, paginate_threads

__all__ = ["ThreadQueryService"]

logger = logging.getLogger(__name__)


class ThreadQueryService:
    """Answers thread searches and key lookups against a store provider.

    Every call holds exactly one store handle from ``provider`` until its
    rows are materialised. Arguments are validated before a handle is
    requested.
    """

    def __init__(self, provider: StoreProvider, *, max_page_size: int | None = None) -> None:
        """Initialize the service.

        Args:
            provider: Source of store handles, such as a connection pool.
            max_page_size: Upper bound applied to requested page sizes.
        """
        self.provider = provider
        self.max_page_size = max_page_size or settings.max_page_size

    def _resolve_message(self, key: str, kind: str) -> int:
        with self.provider.acquire() as store:
            key_id = store.message_key_id(key)
        if key_id is None:
            logger.info("%s lookup missed for key %s", kind, key)
            raise NotFoundError(f"{kind} not found: {key}")
        return key_id

    def thread(self, root_id: str, order_by: OrderBy = OrderBy.RECEIVED) -> ThreadResponse:
        """Return the thread rooted at the message with key ``root_id``.

        Raises:
            NotFoundError: If the key is unknown or has no message.
        """
        key_id = self._resolve_message(root_id, "Thread")
        return ThreadResponse(root=PostResponse(key_id=key_id), order_by=order_by)

    def post(self, key: str) -> PostResponse:
        """Return the post with message key ``key``.

        Raises:
            NotFoundError: If the key is unknown or has no message.
        """
        return PostResponse(key_id=self._resolve_message(key, "Post"))

    def threads(
        self,
        *,
        before: str | None = None,
        after: str | None = None,
        page_size: int | None = None,
        privacy: Privacy = Privacy.PUBLIC,
        selectors: ThreadSelectors | None = None,
        order_by: OrderBy = OrderBy.RECEIVED,
    ) -> ThreadConnection:
        """Search for threads that match *any* of the selectors.

        Args:
            before: Cursor; return threads newer than it.
            after: Cursor; return threads older than it.
            page_size: Number of threads to return, capped at ``max_page_size``.
            privacy: Public, private or all threads.
            selectors: Author selectors, OR'd together. ``None`` matches everything.
            order_by: Requested ordering.

        Raises:
            ConflictingCursorsError: If both ``before`` and ``after`` are set.
            CursorDecodeError: If a cursor is malformed.
            InvalidPageSizeError: If ``page_size`` is below 1.
            NoResultsFoundError: If no thread matches.
        """
        # Conflicting cursors are reported whatever the other arguments are.
        bound = cursor_bound(before, after)
        if page_size is None:
            page_size = settings.default_page_size
        if page_size < 1:
            raise InvalidPageSizeError(f"Page size must be positive, got {page_size}")
        limit = min(page_size, self.max_page_size)

        with self.provider.acquire() as store:
            predicate = compose_thread_filter(selectors or ThreadSelectors(), store)
            predicate = apply_privacy(predicate, privacy)
            page = paginate_threads(
                store,
                predicate,
                limit=limit,
                bound=bound,
                order_by=order_by,
            )
        return assemble_connection(page_size, page)
