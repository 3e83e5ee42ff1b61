from pathlib import Path

import pytest

from namedropper.annotations.base import TextSpan
from namedropper.config import Config
from namedropper.document import FileSelection, read_document
from namedropper.errors import NoSelection

# --- read_document ---


def test_read_utf8(tmp_path: Path):
    path = tmp_path / "doc.xml"
    path.write_text("<p>Zürich</p>", encoding="utf-8")
    assert read_document(path) == "<p>Zürich</p>"


def test_read_latin1_fallback(tmp_path: Path):
    path = tmp_path / "doc.xml"
    path.write_bytes("<p>Zürich</p>".encode("latin-1"))
    assert read_document(path) == "<p>Zürich</p>"


# --- FileSelection ---


def test_selection_range(tmp_path: Path):
    path = tmp_path / "doc.txt"
    path.write_text("Dear Ellen, greetings from Atlanta.", encoding="utf-8")
    assert FileSelection(path, 5, 10)() == TextSpan(start_offset=5, text="Ellen")


def test_selection_to_end(tmp_path: Path):
    path = tmp_path / "doc.txt"
    path.write_text("Dear Ellen", encoding="utf-8")
    assert FileSelection(path, 5)() == TextSpan(start_offset=5, text="Ellen")


def test_selection_empty_range(tmp_path: Path):
    path = tmp_path / "doc.txt"
    path.write_text("Dear Ellen", encoding="utf-8")
    assert FileSelection(path, 4, 4)() is None


def test_selection_out_of_bounds(tmp_path: Path):
    path = tmp_path / "doc.txt"
    path.write_text("Dear Ellen", encoding="utf-8")
    with pytest.raises(NoSelection):
        FileSelection(path, 5, 50)()
    with pytest.raises(NoSelection):
        FileSelection(path, 8, 3)()


# --- Config ---


def test_config_defaults():
    config = Config()
    assert config.confidence == 0.5
    assert config.support == 20
    assert config.endpoint.startswith("https://")
    assert config.dry_run is False


@pytest.mark.parametrize(
    "kwargs",
    [{"confidence": -0.1}, {"confidence": 1.2}, {"support": -1}, {"endpoint": ""}],
)
def test_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)
