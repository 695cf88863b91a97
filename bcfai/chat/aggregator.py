"""Collect the topics of every input file into one knowledge context."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from .bcf import parse_bcf
from .errors import InputError, ParseError
from .schemas import KnowledgeContext

logger = logging.getLogger(__name__)

USAGE = "Usage: bcfai-chat <path/to/bcf/files>"
BCF_EXTENSION = ".bcf"

TopicParser = Callable[[bytes], Iterable[Any]]


def discover_files(
    directory: Union[str, Path, None], extension: str = BCF_EXTENSION
) -> List[Path]:
    """Return the files in ``directory`` whose suffix matches ``extension``."""

    if not directory:
        raise InputError(USAGE)

    root = Path(directory)
    try:
        entries = sorted(root.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise InputError("Insert a valid directory.") from exc

    wanted = extension.lower()
    files = [entry for entry in entries if entry.is_file() and entry.suffix.lower() == wanted]
    if not files:
        raise InputError(f"No BCF files found in {directory}")

    logger.info("Found %s BCF files in %s", len(files), root)
    return files


def aggregate(
    paths: Sequence[Union[str, Path]],
    parse: TopicParser = parse_bcf,
) -> KnowledgeContext:
    """Parse each file and concatenate the serialized topic lists.

    A file that fails to parse aborts the whole aggregation; a partial
    context is never returned.
    """

    if not paths:
        raise InputError("No input files supplied")

    text = ""
    sources: List[str] = []
    topic_count = 0
    for path in paths:
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise InputError(f"Cannot read {file_path}: {exc}") from exc

        try:
            topics = list(parse(data))
            serialized = _serialize_topics(topics)
        except Exception as exc:
            raise ParseError(f"Failed to parse {file_path}: {exc}") from exc

        text += serialized
        sources.append(str(file_path))
        topic_count += len(topics)
        logger.debug("Loaded %s topics from %s", len(topics), file_path)

    return KnowledgeContext(text=text, sources=tuple(sources), topic_count=topic_count)


def load_directory(
    directory: Union[str, Path, None],
    parse: TopicParser = parse_bcf,
    extension: str = BCF_EXTENSION,
) -> KnowledgeContext:
    return aggregate(discover_files(directory, extension), parse)


def _serialize_topics(topics: Iterable[Any]) -> str:
    return json.dumps([_topic_payload(topic) for topic in topics], ensure_ascii=False)


def _topic_payload(topic: Any) -> Any:
    to_payload: Optional[Callable[[], Mapping[str, Any]]] = getattr(topic, "to_payload", None)
    if to_payload is not None:
        return to_payload()
    return topic


__all__ = ["BCF_EXTENSION", "USAGE", "aggregate", "discover_files", "load_directory"]
