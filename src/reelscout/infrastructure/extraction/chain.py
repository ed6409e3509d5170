"""Ordered strategy chains.

A strategy is a named function ``DocumentNode -> Sequence[T]``.  The chain
runs strategies in order and stops at the first one that returns a
non-empty result.  All strategies empty yields an empty result, never an
error.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import structlog

from reelscout.domain.ports.document import DocumentNode

log = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Strategy(Generic[T]):
    name: str
    run: Callable[[DocumentNode], Sequence[T]]


@dataclass(frozen=True)
class ChainResult(Generic[T]):
    items: list[T]
    strategy: str | None = None  # name of the winning strategy


def run_chain(
    root: DocumentNode,
    strategies: Sequence[Strategy[T]],
    *,
    chain: str = "",
) -> ChainResult[T]:
    for strategy in strategies:
        items = list(strategy.run(root))
        if items:
            log.debug(
                "extraction_strategy_matched",
                chain=chain,
                strategy=strategy.name,
                count=len(items),
            )
            return ChainResult(items=items, strategy=strategy.name)
    log.debug("extraction_chain_empty", chain=chain)
    return ChainResult(items=[])


def dedupe_by(items: Sequence[T], key: Callable[[T], str]) -> list[T]:
    """Keep the first occurrence of each key, preserving order."""
    seen: set[str] = set()
    out: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        out.append(item)
    return out


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())
