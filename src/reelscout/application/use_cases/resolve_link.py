"""Link resolution with a warning threshold and a hard ceiling."""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections.abc import Callable

import structlog

from reelscout.domain.entities import RESOLUTION_TIMEOUT_MESSAGE, ResolutionResult
from reelscout.domain.exceptions import MissingParameter
from reelscout.domain.ports import LinkResolverPort

log = structlog.get_logger(__name__)

SlowCallback = Callable[[str], None]


class ResolveLinkUseCase:
    """Runs a resolver under time limits.

    After ``warning_seconds`` a ``resolve_still_working`` event is logged
    and the optional ``on_slow`` callback fires; the resolution keeps
    running.  After ``timeout_seconds`` it is cancelled and a ``fallback``
    result carrying a timeout message is returned.
    """

    def __init__(
        self,
        resolver: LinkResolverPort,
        *,
        timeout_seconds: float = 20.0,
        warning_seconds: float = 8.0,
    ) -> None:
        self._resolver = resolver
        self._timeout = timeout_seconds
        self._warning = min(warning_seconds, timeout_seconds)

    async def execute(
        self,
        url: str | None,
        on_slow: SlowCallback | None = None,
    ) -> ResolutionResult:
        if not url:
            raise MissingParameter("url", "URL is required")

        started = time.monotonic()
        task = asyncio.create_task(self._resolver.resolve(url))

        done, _ = await asyncio.wait({task}, timeout=self._warning)
        if not done:
            log.warning("resolve_still_working", url=url, elapsed=self._warning)
            if on_slow is not None:
                on_slow(url)
            done, _ = await asyncio.wait(
                {task}, timeout=self._timeout - self._warning
            )

        if not done:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            log.warning("resolve_timeout", url=url, timeout=self._timeout)
            return ResolutionResult.unresolved(url, RESOLUTION_TIMEOUT_MESSAGE)

        result = task.result()
        log.info(
            "resolve_finished",
            url=url,
            strategy=result.strategy,
            is_resolved=result.is_resolved,
            duration_ms=round((time.monotonic() - started) * 1000),
        )
        return result
