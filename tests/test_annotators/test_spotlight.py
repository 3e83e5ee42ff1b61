import json
from pathlib import Path

import pytest

from namedropper.annotators.spotlight import RecordedAnnotator, parse_spotlight_response
from namedropper.errors import ServiceError

FIXTURES = Path(__file__).parent.parent / "fixtures"

STRIPPED_LETTER = "Dear Ellen, I arrived in New\nYork on Tuesday and took the train to Atlanta."
ENDPOINT = "https://api.dbpedia-spotlight.org/en/annotate"


# --- parse_spotlight_response ---


def test_parse_resources():
    payload = json.loads((FIXTURES / "letter_spotlight.json").read_text(encoding="utf-8"))
    annotations = parse_spotlight_response(payload)

    assert [a.surface_form for a in annotations] == ["Ellen", "New York", "Atlanta"]
    new_york = annotations[1]
    assert new_york.offset == 25
    assert new_york.uri == "http://dbpedia.org/resource/New_York_City"
    assert new_york.similarity == pytest.approx(0.91)
    assert new_york.support == 81003
    assert "DBpedia:Place" in new_york.types
    assert new_york.label is None


def test_parse_no_resources():
    assert parse_spotlight_response({"@text": "nothing"}) == []


def test_parse_single_resource_object():
    payload = {"Resources": {"@URI": "http://dbpedia.org/resource/Paris", "@surfaceForm": "Paris", "@offset": "0"}}
    annotations = parse_spotlight_response(payload)
    assert len(annotations) == 1
    assert annotations[0].similarity is None
    assert annotations[0].types == ()


def test_parse_sorted_by_offset():
    payload = {
        "Resources": [
            {"@URI": "u2", "@surfaceForm": "B", "@offset": "10"},
            {"@URI": "u1", "@surfaceForm": "A", "@offset": "2"},
        ]
    }
    assert [a.offset for a in parse_spotlight_response(payload)] == [2, 10]


def test_parse_malformed_resource():
    with pytest.raises(ServiceError):
        parse_spotlight_response({"Resources": [{"@URI": "u", "@surfaceForm": "A", "@offset": "x"}]})


def test_parse_missing_field():
    with pytest.raises(ServiceError):
        parse_spotlight_response({"Resources": [{"@URI": "u", "@offset": "1"}]})


def test_parse_not_an_object():
    with pytest.raises(ServiceError):
        parse_spotlight_response(["not", "a", "response"])


# --- RecordedAnnotator ---


def test_recorded_annotator_applies_confidence():
    annotator = RecordedAnnotator(FIXTURES / "letter_spotlight.json")
    annotations = annotator.annotate(STRIPPED_LETTER, 0.5, 20, ENDPOINT)
    assert [a.surface_form for a in annotations] == ["New York", "Atlanta"]


def test_recorded_annotator_applies_support():
    annotator = RecordedAnnotator(FIXTURES / "letter_spotlight.json")
    annotations = annotator.annotate(STRIPPED_LETTER, 0.0, 50000, ENDPOINT)
    assert [a.surface_form for a in annotations] == ["New York"]


def test_recorded_annotator_empty():
    annotator = RecordedAnnotator(FIXTURES / "empty_spotlight.json")
    assert annotator.annotate("Nothing to see here.", 0.5, 20, ENDPOINT) == []


def test_recorded_annotator_invalid_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ServiceError):
        RecordedAnnotator(path).annotate("text", 0.5, 20, ENDPOINT)


def test_recorded_annotator_missing_file(tmp_path: Path):
    with pytest.raises(ServiceError):
        RecordedAnnotator(tmp_path / "missing.json").annotate("text", 0.5, 20, ENDPOINT)
