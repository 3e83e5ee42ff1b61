import logging
from pathlib import Path

from .annotations.base import TextSpan
from .errors import NoSelection

logger = logging.getLogger(__name__)


def read_document(path: Path) -> str:
    """Read a text document, trying UTF-8 first then latin-1."""
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.warning("%s: not valid UTF-8, falling back to latin-1 encoding", path.name)
        return path.read_text(encoding="latin-1")


class FileSelection:
    """Selection provider over a range of a text file.

    ``end=None`` selects to the end of the document.
    """

    def __init__(self, path: Path, start: int = 0, end: int | None = None) -> None:
        self.path = path
        self.start = start
        self.end = end
        self._text: str | None = None

    @property
    def text(self) -> str:
        if self._text is None:
            self._text = read_document(self.path)
        return self._text

    def __call__(self) -> TextSpan | None:
        text = self.text
        end = len(text) if self.end is None else self.end
        if not 0 <= self.start <= end <= len(text):
            raise NoSelection(f"Selection {self.start}:{end} is outside {self.path.name} (length {len(text)})")
        if self.start == end:
            return None
        return TextSpan(start_offset=self.start, text=text[self.start : end])
