import logging
import re

from .offsets import AdjustmentTable

logger = logging.getLogger(__name__)

# Opening, closing or empty element tag: <name attr="v" ns:attr='v' flag/>
# A tag missing its closing ">" never matches.
_TAG_PATTERN = re.compile(
    r"</?[A-Za-z_][\w.:-]*"
    r"(?:\s+[A-Za-z_][\w.:-]*(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+))?)*"
    r"\s*/?>"
)


def strip(text: str) -> tuple[str, AdjustmentTable]:
    """Remove inline tags from text.

    Returns the tag-free text and the adjustment table needed to map offsets
    in it back onto ``text``.
    """
    segments: list[str] = []
    pairs: list[tuple[int, int]] = []
    removed = 0
    last_match_end = 0

    for m in _TAG_PATTERN.finditer(text):
        segments.append(text[last_match_end : m.start()])
        last_match_end = m.end()
        # where the tag would start once everything before it is stripped
        position = m.start() - removed
        removed += m.end() - m.start()
        pairs.append((position, removed))

    if not pairs:
        return text, AdjustmentTable()

    segments.append(text[last_match_end:])
    logger.debug("Stripped %d tag(s), %d character(s) removed", len(pairs), removed)
    return "".join(segments), AdjustmentTable(pairs)
