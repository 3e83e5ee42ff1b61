import logging
import threading
from collections.abc import Callable, Hashable, Iterable

from .base import AcceptedSpan, ResolvedAnnotation

logger = logging.getLogger(__name__)

Classifier = Callable[[ResolvedAnnotation], Hashable | None]
# (candidate tag or None, overlapping accepted span) -> may the two co-exist?
CompatibilityPolicy = Callable[[Hashable | None, AcceptedSpan], bool]


def never_compatible(tag: Hashable | None, span: AcceptedSpan) -> bool:
    """Default policy: an already-tagged region cannot be tagged again."""
    return False


def _classify(candidate: ResolvedAnnotation, classify: Classifier | None) -> Hashable | None:
    if classify is None:
        return None
    try:
        return classify(candidate)
    except Exception:
        # an unclassifiable candidate falls back to the generic check
        logger.debug("Could not classify %s", candidate.uri, exc_info=True)
        return None


def is_acceptable(
    candidate: ResolvedAnnotation,
    accepted_spans: Iterable[AcceptedSpan],
    classify: Classifier | None = None,
    compatible: CompatibilityPolicy | None = None,
) -> bool:
    """Check whether candidate can be accepted alongside accepted_spans."""
    return _acceptable(candidate, _classify(candidate, classify), accepted_spans, compatible)


def _acceptable(
    candidate: ResolvedAnnotation,
    tag: Hashable | None,
    accepted_spans: Iterable[AcceptedSpan],
    compatible: CompatibilityPolicy | None,
) -> bool:
    if compatible is None:
        compatible = never_compatible
    return all(compatible(tag, span) for span in accepted_spans if candidate.overlaps(span))


def filter_acceptable(
    candidates: Iterable[ResolvedAnnotation],
    accepted_spans: Iterable[AcceptedSpan],
    classify: Classifier | None = None,
    compatible: CompatibilityPolicy | None = None,
) -> list[tuple[ResolvedAnnotation, AcceptedSpan]]:
    """Filter a batch of candidates against accepted spans.

    Candidates are processed in offset order. Each accepted candidate blocks
    later overlapping ones; rejected candidates block nothing. The given
    accepted_spans are not modified.

    Returns (candidate, span it would occupy) pairs for the accepted candidates.
    """
    blocking = list(accepted_spans)
    accepted: list[tuple[ResolvedAnnotation, AcceptedSpan]] = []

    for candidate in sorted(candidates, key=lambda c: c.document_offset):
        tag = _classify(candidate, classify)
        if not _acceptable(candidate, tag, blocking, compatible):
            logger.debug(
                "Rejected %r at %d: overlaps a tagged region",
                candidate.original_surface_form,
                candidate.document_offset,
            )
            continue
        span = AcceptedSpan.from_annotation(candidate, tag)
        blocking.append(span)
        accepted.append((candidate, span))

    return accepted


class AcceptedSpanRegistry:
    """Caller-side set of accepted spans for one document.

    filter_and_commit runs filtering and commit of a batch under one lock so
    that concurrent batches cannot both accept overlapping spans.
    """

    def __init__(self, spans: Iterable[AcceptedSpan] = ()) -> None:
        self._spans: set[AcceptedSpan] = set(spans)
        self._lock = threading.Lock()

    @property
    def spans(self) -> frozenset[AcceptedSpan]:
        with self._lock:
            return frozenset(self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def filter_and_commit(
        self,
        candidates: Iterable[ResolvedAnnotation],
        classify: Classifier | None = None,
        compatible: CompatibilityPolicy | None = None,
    ) -> list[ResolvedAnnotation]:
        with self._lock:
            accepted = filter_acceptable(candidates, self._spans, classify, compatible)
            self._spans.update(span for _, span in accepted)
        return [candidate for candidate, _ in accepted]
