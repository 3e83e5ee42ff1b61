import logging
import re

from ..errors import ReconciliationMiss

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def _surface_pattern(normalized: str) -> re.Pattern:
    """Literal pattern for normalized where every whitespace run matches any whitespace run."""
    return re.compile(r"\s+".join(re.escape(part) for part in _WHITESPACE.split(normalized)))


def _relocate(text: str, offset: int, normalized: str) -> str:
    if 0 <= offset <= len(text):
        m = _surface_pattern(normalized).match(text, offset)
        if m is not None:
            return m.group()
    raise ReconciliationMiss(normalized, offset)


def reconcile(text: str, offset: int, normalized: str) -> str:
    """Recover the literal text the annotator normalized into ``normalized``.

    The annotator collapses whitespace runs in the surface forms it returns,
    so "New   York" in the text comes back as "New York". The match is
    anchored at ``offset``; if nothing matches there, ``normalized`` is
    returned unchanged.
    """
    if _WHITESPACE.search(normalized) is None:
        return normalized

    try:
        return _relocate(text, offset, normalized)
    except ReconciliationMiss as e:
        logger.warning("Could not reconcile surface form: %s", e)
        return normalized
