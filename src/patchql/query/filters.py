"""Composition of thread search selectors into a single predicate."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import NamedTuple

from patchql.query.predicate import (
    MATCH_ALL,
    And,
    Compare,
    Op,
    Or,
    Predicate,
    ThreadField,
)
from patchql.repositories.base import AuthorResolver
from patchql.schemas.thread import Privacy, ThreadSelectors

__all__ = ["apply_privacy", "build_thread_filter", "compose_thread_filter", "resolve_selectors"]

logger = logging.getLogger(__name__)


class _SelectorRule(NamedTuple):
    name: str
    resolve: Callable[[AuthorResolver, Sequence[str]], list[int]]
    column: ThreadField


def _direct(resolver: AuthorResolver, authors: Sequence[str]) -> list[int]:
    return resolver.author_ids(authors)


def _followees(resolver: AuthorResolver, authors: Sequence[str]) -> list[int]:
    return resolver.followed_author_ids(authors)


_RULES: tuple[_SelectorRule, ...] = (
    _SelectorRule("roots_authored_by", _direct, ThreadField.AUTHOR_ID),
    _SelectorRule("roots_authored_by_someone_followed_by", _followees, ThreadField.AUTHOR_ID),
    _SelectorRule("has_replies_authored_by", _direct, ThreadField.REPLY_AUTHOR_ID),
    _SelectorRule(
        "has_replies_authored_by_someone_followed_by",
        _followees,
        ThreadField.REPLY_AUTHOR_ID,
    ),
)


def resolve_selectors(
    selectors: ThreadSelectors,
    resolver: AuthorResolver,
) -> list[tuple[ThreadField, list[int]]]:
    """Resolve every supplied selector to the column and author ids it matches.

    Selectors that were not supplied are skipped. An empty or unknown author
    list still produces an entry, with no ids.
    """
    resolved: list[tuple[ThreadField, list[int]]] = []
    for rule in _RULES:
        authors = getattr(selectors, rule.name)
        if authors is None:
            continue
        ids = rule.resolve(resolver, authors)
        logger.debug("Selector %s resolved %d authors to %d ids", rule.name, len(authors), len(ids))
        resolved.append((rule.column, ids))
    return resolved


def build_thread_filter(resolved: Sequence[tuple[ThreadField, Sequence[int]]]) -> Predicate:
    """Combine resolved selectors with OR.

    Returns the match-all predicate when nothing was resolved.
    """
    if not resolved:
        return MATCH_ALL
    return Or(tuple(Compare(column, Op.IN, ids) for column, ids in resolved))


def compose_thread_filter(selectors: ThreadSelectors, resolver: AuthorResolver) -> Predicate:
    """Resolve ``selectors`` and return their OR-combined predicate.

    Selectors are logically OR'd, **not** AND'd: if ``roots_authored_by`` and
    ``has_replies_authored_by`` are both given, a thread matching either one
    is included.
    """
    return build_thread_filter(resolve_selectors(selectors, resolver))


def apply_privacy(predicate: Predicate, privacy: Privacy) -> Predicate:
    """Narrow ``predicate`` to one side of the public/private partition."""
    if privacy is Privacy.ALL:
        return predicate
    return And((predicate, Compare(ThreadField.IS_DECRYPTED, Op.EQ, privacy is Privacy.PRIVATE)))
