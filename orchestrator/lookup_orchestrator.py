"""
LookupOrchestrator - concurrent lookup of one word across every source.

Each source runs as its own task with its own HTTP client and a timeout.
Results are observable as soon as they arrive; a slow or failing source never
delays or affects the others.
"""

import asyncio
import concurrent.futures
from typing import AsyncIterator, Callable, Iterable, Mapping

from config.config import SourceId, get_config
from models.lookup_session import LookupSession
from models.source_result import SourceResult, SourceStatus
from sources import ADAPTERS, Adapter
from sources.http import ClientFactory, build_client
from utils.logger import get_logger

logger = get_logger(__name__)

ResultCallback = Callable[[LookupSession, SourceResult], None]


def normalize_word(word: str | None) -> str:
    """
    Validate the query word.

    Raises:
        ValueError: if the word is missing or blank
    """
    cleaned = (word or "").strip()
    if not cleaned:
        raise ValueError("Word parameter is required")
    return cleaned


class LookupOrchestrator:
    """
    Fans one word out to every source adapter.

    Example usage:
        orchestrator = LookupOrchestrator()
        session = orchestrator.lookup_sync("kelime")
        for result in session.results():
            print(result.source.value, result.view_state)
    """

    def __init__(
        self,
        adapters: Mapping[SourceId, Adapter] | None = None,
        client_factory: ClientFactory | None = None,
        default_timeout_s: float | None = None,
    ):
        """
        Args:
            adapters: Adapter per source (defaults to every known source)
            client_factory: Builds one fresh httpx.AsyncClient per adapter call
            default_timeout_s: Per-source ceiling in seconds
        """
        self.adapters = dict(adapters if adapters is not None else ADAPTERS)
        self.client_factory = client_factory or build_client
        self.default_timeout_s = default_timeout_s or get_config().LOOKUP_TIMEOUT_S

    @property
    def sources(self) -> tuple[SourceId, ...]:
        return tuple(self.adapters)

    def _create_timeout_result(self, source: SourceId, word: str, timeout_s: float, latency_ms: int):
        return SourceResult.upstream_error(
            source,
            word,
            code="timeout",
            message=f"Lookup timed out after {timeout_s}s",
            latency_ms=latency_ms,
            details={"timeout_seconds": timeout_s},
        )

    def _create_exception_result(self, source: SourceId, word: str, exception: Exception, latency_ms: int):
        return SourceResult.upstream_error(
            source,
            word,
            code="unknown",
            message=f"Unexpected error: {exception!s}",
            latency_ms=latency_ms,
            details={"exception_type": type(exception).__name__},
        )

    async def _safe_lookup(self, source: SourceId, word: str, timeout_s: float) -> SourceResult:
        """
        Run one adapter with its own client and a timeout.

        Always returns a terminal SourceResult; a timeout or anything escaping
        the adapter becomes an upstream-error result.
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        adapter = self.adapters[source]

        try:
            async with self.client_factory() as client:
                return await asyncio.wait_for(adapter(word, client), timeout=timeout_s)

        except asyncio.TimeoutError:
            elapsed_ms = int((loop.time() - start_time) * 1000)
            logger.warning(
                f"Timeout for {source.value}",
                extra={"extra_fields": {"source": source.value, "word": word, "timeout_s": timeout_s}},
            )
            return self._create_timeout_result(source, word, timeout_s, elapsed_ms)

        except Exception as e:
            elapsed_ms = int((loop.time() - start_time) * 1000)
            logger.error(
                f"Unexpected error for {source.value}: {e}",
                extra={
                    "extra_fields": {
                        "source": source.value,
                        "word": word,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    }
                },
            )
            return self._create_exception_result(source, word, e, elapsed_ms)

    async def lookup_source(self, source: SourceId, word: str, timeout_s: float | None = None) -> SourceResult:
        """Look ``word`` up in a single source."""
        word = normalize_word(word)
        return await self._safe_lookup(source, word, timeout_s or self.default_timeout_s)

    async def iter_results(
        self,
        word: str,
        sources: Iterable[SourceId] | None = None,
        timeout_s: float | None = None,
    ) -> AsyncIterator[SourceResult]:
        """
        Yield terminal results in arrival order.

        Raises:
            ValueError: if the word is blank (before any upstream call)
        """
        word = normalize_word(word)
        timeout = timeout_s or self.default_timeout_s
        tasks = [
            asyncio.create_task(self._safe_lookup(source, word, timeout))
            for source in (self.sources if sources is None else sources)
        ]
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()

    async def lookup(
        self,
        word: str,
        sources: Iterable[SourceId] | None = None,
        timeout_s: float | None = None,
        on_result: ResultCallback | None = None,
    ) -> LookupSession:
        """
        Look ``word`` up in every source concurrently.

        Args:
            word: The query word
            sources: Subset of sources to query (defaults to all)
            timeout_s: Per-source timeout in seconds
            on_result: Called with the session each time one source resolves

        Returns:
            LookupSession with every slot in a terminal state
        """
        word = normalize_word(word)
        session = LookupSession(word=word, sources=tuple(self.sources if sources is None else sources))

        logger.info(
            f"Starting lookup across {len(session.sources)} sources",
            extra={"extra_fields": {"word": word, "sources": [s.value for s in session.sources]}},
        )

        async for result in self.iter_results(word, session.sources, timeout_s):
            session.resolve(result)
            if on_result is not None:
                on_result(session, result)

        logger.info(
            f"Lookup complete: {session.found_count} found, {session.error_count} errors",
            extra={
                "extra_fields": {
                    "word": word,
                    "found_count": session.found_count,
                    "error_count": session.error_count,
                    "not_found": [
                        r.source.value for r in session.results() if r.status == SourceStatus.NOT_FOUND
                    ],
                }
            },
        )
        return session

    def lookup_sync(
        self,
        word: str,
        sources: Iterable[SourceId] | None = None,
        timeout_s: float | None = None,
    ) -> LookupSession:
        """
        Synchronous wrapper for lookup.

        Runs in a separate thread with its own loop when an event loop is
        already running in this thread.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.lookup(word, sources, timeout_s))

        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            future = executor.submit(asyncio.run, self.lookup(word, sources, timeout_s))
            return future.result()
