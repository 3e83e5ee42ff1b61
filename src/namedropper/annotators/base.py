from typing import Protocol

from ..annotations.base import RawAnnotation


class Annotator(Protocol):
    """An entity annotation service.

    Implementations raise ServiceError on transport or parse failures and
    return an empty list when nothing was recognized.
    """

    def annotate(self, text: str, confidence: float, support: int, endpoint: str) -> list[RawAnnotation]: ...
