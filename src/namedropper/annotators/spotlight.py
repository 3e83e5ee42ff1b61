import json
import logging
from pathlib import Path
from typing import Any

from ..annotations.base import RawAnnotation
from ..errors import ServiceError

logger = logging.getLogger(__name__)


def _parse_types(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(t.strip() for t in value.split(",") if t.strip())


def _parse_resource(resource: dict[str, Any]) -> RawAnnotation:
    similarity = resource.get("@similarityScore")
    support = resource.get("@support")
    return RawAnnotation(
        surface_form=resource["@surfaceForm"],
        offset=int(resource["@offset"]),
        uri=resource["@URI"],
        label=resource.get("@label") or None,
        abstract=resource.get("@abstract") or None,
        types=_parse_types(resource.get("@types")),
        similarity=float(similarity) if similarity not in (None, "") else None,
        support=int(support) if support not in (None, "") else None,
    )


def parse_spotlight_response(payload: dict[str, Any]) -> list[RawAnnotation]:
    """Convert a DBpedia Spotlight JSON annotate response into raw annotations.

    Spotlight leaves out the "Resources" key entirely when nothing was found.
    """
    if not isinstance(payload, dict):
        raise ServiceError(f"Unexpected Spotlight response: {type(payload).__name__}")

    resources = payload.get("Resources")
    if resources is None:
        return []
    # a single resource may come back as an object instead of a list
    if isinstance(resources, dict):
        resources = [resources]
    if not isinstance(resources, list):
        raise ServiceError(f"Unexpected Spotlight resources: {resources!r}")

    annotations = []
    for resource in resources:
        try:
            annotations.append(_parse_resource(resource))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ServiceError(f"Malformed Spotlight resource {resource!r}") from e

    annotations.sort(key=lambda a: a.offset)
    return annotations


class RecordedAnnotator:
    """Annotator that replays a saved Spotlight response from disk.

    The confidence and support thresholds are applied locally, the way the
    service applies them to a live request.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> Any:
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ServiceError(f"Could not read Spotlight response from {self.path}: {e}") from e

    def annotate(self, text: str, confidence: float, support: int, endpoint: str) -> list[RawAnnotation]:
        logger.debug("Replaying %s (recorded from %s)", self.path.name, endpoint)
        payload = self._load()

        recorded_text = payload.get("@text") if isinstance(payload, dict) else None
        if recorded_text is not None and recorded_text != text:
            logger.warning("%s: recorded text differs from the submitted text, offsets may drift", self.path.name)

        annotations = []
        for annotation in parse_spotlight_response(payload):
            if annotation.similarity is not None and annotation.similarity < confidence:
                continue
            if annotation.support is not None and annotation.support < support:
                continue
            annotations.append(annotation)

        logger.info("Annotator returned %d resource(s)", len(annotations))
        return annotations
