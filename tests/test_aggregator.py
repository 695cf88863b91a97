from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import pytest

from bcfai.chat.aggregator import USAGE, aggregate, discover_files, load_directory
from bcfai.chat.errors import InputError, ParseError
from bcfai.chat.schemas import Topic


def _json_parser(data: bytes) -> List[Any]:
    return json.loads(data.decode("utf-8"))


def _write(path: Path, topics: List[Any]) -> Path:
    path.write_text(json.dumps(topics), encoding="utf-8")
    return path


def test_discover_files_filters_by_extension_case_insensitively(tmp_path: Path) -> None:
    (tmp_path / "b.BCF").write_bytes(b"")
    (tmp_path / "a.bcf").write_bytes(b"")
    (tmp_path / "notes.txt").write_bytes(b"")
    (tmp_path / "folder.bcf").mkdir()

    files = discover_files(tmp_path)

    assert [path.name for path in files] == ["a.bcf", "b.BCF"]


def test_discover_files_requires_directory() -> None:
    with pytest.raises(InputError, match="Usage"):
        discover_files(None)
    assert USAGE.startswith("Usage: bcfai-chat")


def test_discover_files_rejects_unreadable_directory(tmp_path: Path) -> None:
    with pytest.raises(InputError, match="valid directory"):
        discover_files(tmp_path / "missing")


def test_discover_files_rejects_directory_without_bcf_files(tmp_path: Path) -> None:
    (tmp_path / "readme.md").write_text("hello")

    with pytest.raises(InputError, match="No BCF files found"):
        discover_files(tmp_path)


def test_aggregate_concatenates_in_file_order(tmp_path: Path) -> None:
    first = _write(tmp_path / "a.bcf", [{"id": 1, "title": "A"}])
    second = _write(tmp_path / "b.bcf", [{"id": 2, "title": "B"}])

    context = aggregate([first, second], parse=_json_parser)

    assert context.text == '[{"id": 1, "title": "A"}][{"id": 2, "title": "B"}]'
    assert context.sources == (str(first), str(second))
    assert context.topic_count == 2


def test_aggregate_starts_from_empty_context(tmp_path: Path) -> None:
    only = _write(tmp_path / "a.bcf", [])

    context = aggregate([only], parse=_json_parser)

    assert context.text == "[]"
    assert not context.text.startswith("undefined")


def test_context_grows_with_topics(tmp_path: Path) -> None:
    small = aggregate([_write(tmp_path / "a.bcf", [{"id": 1}])], parse=_json_parser)
    large = aggregate(
        [_write(tmp_path / "a.bcf", [{"id": 1}]), _write(tmp_path / "b.bcf", [{"id": 2}, {"id": 3}])],
        parse=_json_parser,
    )

    assert len(large) > len(small)
    assert large.text.startswith(small.text)


def test_aggregate_serializes_topic_records(tmp_path: Path) -> None:
    path = tmp_path / "a.bcf"
    path.write_bytes(b"ignored")

    context = aggregate([path], parse=lambda data: [Topic(guid="t-1", title="Leak")])

    assert json.loads(context.text) == [{"guid": "t-1", "title": "Leak"}]


def test_aggregate_requires_paths() -> None:
    with pytest.raises(InputError):
        aggregate([])


def test_bad_file_aborts_whole_aggregation(tmp_path: Path) -> None:
    good = _write(tmp_path / "a.bcf", [{"id": 1}])
    bad = tmp_path / "b.bcf"
    bad.write_bytes(b"{not json")

    with pytest.raises(ParseError, match="b.bcf"):
        aggregate([good, bad], parse=_json_parser)


def test_unreadable_file_raises_input_error(tmp_path: Path) -> None:
    with pytest.raises(InputError, match="Cannot read"):
        aggregate([tmp_path / "gone.bcf"], parse=_json_parser)


def test_load_directory_uses_bcf_parser_errors(tmp_path: Path) -> None:
    (tmp_path / "broken.bcf").write_bytes(b"not a zip")

    with pytest.raises(ParseError, match="broken.bcf"):
        load_directory(tmp_path)
