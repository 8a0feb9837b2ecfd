"""Resolution of "more" placeholders through ``api/morechildren.json``.

Work is modelled as an explicit queue of ``MoreItem``s drained by a fixed
pool of workers. Each worker resolves one item at a time, chunk by chunk.
Nested placeholders found in a response go back on the queue after their ids
are deduplicated against everything already requested in the extraction.

Failures are contained per chunk: every chunk ends with a ``ChunkOutcome``
and the extraction continues with whatever was resolved.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx
import logfire

from urlsum.adapter.reddit.client import RedditClient
from urlsum.adapter.reddit.urls import build_morechildren_url
from urlsum.config import RedditSettings
from urlsum.domain.model import ChunkOutcome, Comment, MoreItem, ResolutionReport
from urlsum.domain.service import CommentBatch, process_comment_batch
from urlsum.domain.value import ChunkStatus, LinkId
from urlsum.util.format import chunked

Sleep = Callable[[float], Awaitable[None]]

# Transport failures worth retrying; anything else is given up on at once
RETRYABLE_TRANSPORT_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class RequestBudget:
    """Caps the number of morechildren requests issued by one extraction."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.used = 0
        self.refused = 0

    def try_consume(self) -> bool:
        """Take one request from the budget.

        Returns:
            False once the cap has been reached
        """
        if self.used >= self.limit:
            self.refused += 1
            return False
        self.used += 1
        return True

    @property
    def exhausted(self) -> bool:
        return self.used >= self.limit


@dataclass(frozen=True)
class ExtractionContext:
    """Call-scoped state of one extraction.

    Created once per ``get_content`` call and passed explicitly to every
    resolver call, so concurrent extractions never share ids or counters.
    """

    link_id: LinkId
    budget: RequestBudget
    requested_ids: set[str] = field(default_factory=set)

    @classmethod
    def create(cls, link_id: LinkId, max_more_requests: int) -> "ExtractionContext":
        return cls(link_id=link_id, budget=RequestBudget(max_more_requests))

    def claim(self, ids: Iterable[str]) -> list[str]:
        """Mark ids as requested, returning only those not seen before."""
        fresh: list[str] = []
        for comment_id in ids:
            if comment_id not in self.requested_ids:
                self.requested_ids.add(comment_id)
                fresh.append(comment_id)
        return fresh


@dataclass
class ChunkResult:
    """What one chunk produced."""

    outcome: ChunkOutcome
    comments: list[Comment] = field(default_factory=list)
    more_items: list[MoreItem] = field(default_factory=list)


@dataclass
class Resolution:
    """Everything the resolver gathered for one extraction.

    ``comments`` holds each chunk's comments in pre-order, chunks in
    completion order.
    """

    comments: list[Comment]
    report: ResolutionReport


class MoreChildrenResolver:
    """Resolves MoreItems with bounded concurrency, retries and a request cap."""

    def __init__(
        self,
        client: RedditClient,
        settings: RedditSettings,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize resolver.

        Args:
            client: Reddit client (owns the shared concurrency limiter)
            settings: Reddit settings with limits and delays
            sleep: Non-blocking sleep, replaceable in tests
        """
        self.client = client
        self.settings = settings
        self._sleep = sleep

    async def resolve(
        self, context: ExtractionContext, more_items: Iterable[MoreItem]
    ) -> Resolution:
        """Resolve placeholders until the queue is empty or the cap is hit.

        Args:
            context: Extraction context (link id, budget, requested ids)
            more_items: Placeholders collected from the initial response

        Returns:
            Resolved comments and the per-chunk report
        """
        queue: asyncio.Queue[MoreItem] = asyncio.Queue()
        comments: list[Comment] = []
        outcomes: list[ChunkOutcome] = []

        def enqueue(items: Iterable[MoreItem]) -> None:
            for item in items:
                ids = context.claim(item.ids)
                if ids:
                    queue.put_nowait(MoreItem(ids=tuple(ids), depth=item.depth))

        enqueue(more_items)
        if queue.empty():
            return Resolution(comments=[], report=ResolutionReport())

        async def worker() -> None:
            while True:
                item = await queue.get()
                try:
                    for result in await self._resolve_item(context, item):
                        outcomes.append(result.outcome)
                        comments.extend(result.comments)
                        enqueue(result.more_items)
                except Exception as e:
                    logfire.error(
                        "Unexpected error resolving more item",
                        link_id=str(context.link_id),
                        ids=len(item.ids),
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    outcomes.append(
                        ChunkOutcome(
                            ids=item.ids,
                            depth=item.depth,
                            status=ChunkStatus.FAILED,
                            detail=str(e),
                        )
                    )
                finally:
                    queue.task_done()

        with logfire.span(
            "more_children_resolver.resolve",
            link_id=str(context.link_id),
            pending=queue.qsize(),
        ):
            workers = [
                asyncio.create_task(worker())
                for _ in range(self.settings.max_concurrent_requests)
            ]
            try:
                await queue.join()
            finally:
                for task in workers:
                    task.cancel()
                await asyncio.gather(*workers, return_exceptions=True)

            report = ResolutionReport(
                outcomes=tuple(outcomes),
                request_count=context.budget.used,
                truncated=context.budget.refused > 0,
            )
            logfire.info(
                "More children resolved",
                link_id=str(context.link_id),
                comments=len(comments),
                requests=report.request_count,
                truncated=report.truncated,
                skipped=report.count(ChunkStatus.SKIPPED),
                failed=report.count(ChunkStatus.FAILED),
            )
            return Resolution(comments=comments, report=report)

    async def _resolve_item(
        self, context: ExtractionContext, item: MoreItem
    ) -> list[ChunkResult]:
        """Resolve one MoreItem chunk by chunk, pausing between chunks."""
        chunks = chunked(item.ids, self.settings.chunk_size)
        results: list[ChunkResult] = []
        parse_failures = 0

        for index, chunk in enumerate(chunks):
            if context.budget.exhausted:
                context.budget.refused += 1
                logfire.warn(
                    "More request cap reached",
                    link_id=str(context.link_id),
                    limit=context.budget.limit,
                )
                results.extend(
                    self._abandon(
                        chunks[index:], item.depth, ChunkStatus.TRUNCATED, "request cap reached"
                    )
                )
                break

            if index > 0:
                await self._sleep(self.settings.chunk_delay)

            result = await self._resolve_chunk(context, chunk, item.depth)
            results.append(result)

            if result.outcome.status == ChunkStatus.TRUNCATED:
                results.extend(
                    self._abandon(
                        chunks[index + 1 :],
                        item.depth,
                        ChunkStatus.TRUNCATED,
                        "request cap reached",
                    )
                )
                break

            if result.outcome.status == ChunkStatus.PARSE_ERROR:
                parse_failures += 1
            elif result.outcome.status == ChunkStatus.RESOLVED:
                parse_failures = 0

            if parse_failures >= self.settings.max_consecutive_parse_failures:
                logfire.warn(
                    "Too many consecutive parse failures, abandoning more item",
                    link_id=str(context.link_id),
                    failures=parse_failures,
                )
                results.extend(
                    self._abandon(
                        chunks[index + 1 :],
                        item.depth,
                        ChunkStatus.SKIPPED,
                        "abandoned after consecutive parse failures",
                    )
                )
                break

        return results

    async def _resolve_chunk(
        self, context: ExtractionContext, chunk: list[str], depth: int
    ) -> ChunkResult:
        """Fetch one chunk of at most 100 ids.

        429 gets one quick inline retry; after that, rate limiting and
        transport errors back off exponentially up to ``max_retry_count``
        retries. Other statuses skip the chunk.
        """
        url = build_morechildren_url(
            self.client.base_url,
            context.link_id,
            chunk,
            sort=self.settings.morechildren_sort,
            depth=self.settings.morechildren_depth,
        )
        ids = tuple(chunk)
        attempts = 0
        retry_count = 0
        quick_retry_used = False

        def outcome(status: ChunkStatus, detail: str | None = None, count: int = 0) -> ChunkOutcome:
            return ChunkOutcome(
                ids=ids,
                depth=depth,
                status=status,
                comment_count=count,
                attempts=attempts,
                detail=detail,
            )

        while True:
            if not context.budget.try_consume():
                logfire.warn(
                    "More request cap reached",
                    link_id=str(context.link_id),
                    limit=context.budget.limit,
                )
                return ChunkResult(outcome(ChunkStatus.TRUNCATED, "request cap reached"))

            attempts += 1
            try:
                response = await self.client.get(url)
            except RETRYABLE_TRANSPORT_ERRORS as e:
                logfire.warn(
                    "Network error fetching more children",
                    ids=len(ids),
                    retry_count=retry_count,
                    error=str(e),
                )
                if retry_count < self.settings.max_retry_count:
                    retry_count += 1
                    await self._backoff(retry_count)
                    continue
                return ChunkResult(outcome(ChunkStatus.FAILED, f"network error: {e}"))
            except httpx.HTTPError as e:
                logfire.error("Non-retryable error fetching more children", error=str(e))
                return ChunkResult(outcome(ChunkStatus.FAILED, str(e)))

            status = response.status_code
            if status == 429:
                if not quick_retry_used:
                    quick_retry_used = True
                    logfire.warn("Rate limited, retrying chunk once", ids=len(ids))
                    await self._sleep(self.settings.rate_limit_retry_delay)
                    continue
                if retry_count < self.settings.max_retry_count:
                    retry_count += 1
                    await self._backoff(retry_count)
                    continue
                return ChunkResult(outcome(ChunkStatus.FAILED, "rate limited"))

            if status == 404:
                logfire.warn("Some comments in chunk were not found (likely deleted)", ids=len(ids))
                return ChunkResult(outcome(ChunkStatus.SKIPPED, "not found"))
            if status == 403:
                logfire.warn("Access denied to some comments in chunk", ids=len(ids))
                return ChunkResult(outcome(ChunkStatus.SKIPPED, "forbidden"))
            if not 200 <= status < 300:
                logfire.warn("HTTP error for chunk", ids=len(ids), status_code=status)
                return ChunkResult(outcome(ChunkStatus.SKIPPED, f"HTTP {status}"))

            return self._parse_chunk(response, depth, outcome)

    def _parse_chunk(
        self,
        response: httpx.Response,
        depth: int,
        outcome: Callable[..., ChunkOutcome],
    ) -> ChunkResult:
        """Accept both morechildren response shapes.

        - ``{"json": {"data": {"things": [...]}}}``
        - ``{"json": [{"data": {"children": [...]}}, ...]}``
        """
        try:
            payload: Any = response.json()
        except ValueError:
            logfire.warn("Could not decode more children response", preview=response.text[:200])
            return ChunkResult(outcome(ChunkStatus.PARSE_ERROR, "invalid JSON"))

        body = payload.get("json") if isinstance(payload, dict) else None

        if isinstance(body, dict):
            errors = body.get("errors")
            if errors:
                logfire.warn("Reddit API returned errors for chunk", errors=str(errors))
                return ChunkResult(outcome(ChunkStatus.SKIPPED, f"API errors: {errors}"))
            data = body.get("data")
            things = data.get("things") if isinstance(data, dict) else None
            if not isinstance(things, list):
                return self._unparseable(payload, outcome)
            batch = process_comment_batch(things, depth=depth)

        elif isinstance(body, list):
            batch = CommentBatch()
            for listing in body:
                data = listing.get("data") if isinstance(listing, dict) else None
                children = data.get("children") if isinstance(data, dict) else None
                if not isinstance(children, list):
                    logfire.warn("Skipping unparseable more children listing")
                    continue
                batch.extend(process_comment_batch(children, depth=depth))

        else:
            return self._unparseable(payload, outcome)

        if not batch.comments and not batch.more_items:
            logfire.info("More children chunk returned no comments")

        return ChunkResult(
            outcome(ChunkStatus.RESOLVED, count=batch.count),
            comments=batch.comments,
            more_items=batch.more_items,
        )

    def _unparseable(
        self, payload: Any, outcome: Callable[..., ChunkOutcome]
    ) -> ChunkResult:
        keys = sorted(payload.keys()) if isinstance(payload, dict) else type(payload).__name__
        logfire.warn("Could not parse more children response structure", keys=str(keys))
        return ChunkResult(outcome(ChunkStatus.PARSE_ERROR, "unexpected response structure"))

    async def _backoff(self, retry_count: int) -> None:
        delay = self.settings.backoff_factor**retry_count
        logfire.info("Backing off before retry", seconds=delay, retry_count=retry_count)
        await self._sleep(delay)

    @staticmethod
    def _abandon(
        chunks: list[list[str]], depth: int, status: ChunkStatus, detail: str
    ) -> list[ChunkResult]:
        return [
            ChunkResult(ChunkOutcome(ids=tuple(chunk), depth=depth, status=status, detail=detail))
            for chunk in chunks
        ]
