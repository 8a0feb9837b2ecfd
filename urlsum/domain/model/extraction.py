"""Extraction results.

A failed morechildren chunk never fails the extraction. Each chunk produces
a ``ChunkOutcome`` and the outcomes are aggregated into a
``ResolutionReport`` returned alongside the transcript.
"""

from pydantic import Field

from urlsum.domain.model.common import DomainModel
from urlsum.domain.value import ChunkStatus


class ChunkOutcome(DomainModel):
    """Result of resolving one chunk of at most 100 ids."""

    ids: tuple[str, ...]
    depth: int
    status: ChunkStatus
    comment_count: int = 0
    attempts: int = 0
    detail: str | None = None


class ResolutionReport(DomainModel):
    """Aggregated outcome of the morechildren resolution phase."""

    outcomes: tuple[ChunkOutcome, ...] = ()
    request_count: int = 0
    truncated: bool = False

    def count(self, status: ChunkStatus) -> int:
        """Number of chunks that ended with the given status."""
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def is_complete(self) -> bool:
        """True when every chunk resolved and no work was cut off."""
        return not self.truncated and all(
            outcome.status == ChunkStatus.RESOLVED for outcome in self.outcomes
        )


class ExtractionResult(DomainModel):
    """Transcript handed to the summarization layer.

    ``comment_count`` is the number of comments actually extracted for a
    post view (it may be lower than Reddit's advertised count) and None for
    listing views.
    """

    content: str
    comment_count: int | None = None
    report: ResolutionReport = Field(default_factory=ResolutionReport)
