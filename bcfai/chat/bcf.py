"""Read topics and comments out of BCF archives.

A BCF file is a zip archive holding one folder per topic, each with a
``markup.bcf`` XML document.  BCF 2.1 stores comments as ``Markup/Comment``
siblings of the topic, BCF 3.0 nests them under ``Topic/Comments``.  Both
layouts are accepted, with or without an XML namespace.
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Iterable, List, Optional
from xml.etree import ElementTree

from .errors import ParseError
from .schemas import Topic, TopicComment

logger = logging.getLogger(__name__)

MARKUP_FILENAME = "markup.bcf"


def parse_bcf(data: bytes) -> List[Topic]:
    """Return the topics stored in the BCF archive ``data``."""

    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise ParseError("Not a BCF archive") from exc

    topics: List[Topic] = []
    with archive:
        names = sorted(
            name
            for name in archive.namelist()
            if name.rsplit("/", 1)[-1].lower() == MARKUP_FILENAME
        )
        for name in names:
            try:
                raw = archive.read(name)
            except (zipfile.BadZipFile, OSError) as exc:
                raise ParseError(f"Cannot read {name}: {exc}") from exc
            try:
                root = ElementTree.fromstring(raw)
            except ElementTree.ParseError as exc:
                raise ParseError(f"Malformed markup in {name}: {exc}") from exc
            topics.append(_topic_from_markup(root, name))

    logger.debug("Parsed %s topics from archive", len(topics))
    return topics


def _topic_from_markup(root: ElementTree.Element, name: str) -> Topic:
    topic_el = _child(root, "Topic")
    if topic_el is None:
        raise ParseError(f"{name} has no Topic element")

    comment_elements = list(_children(root, "Comment"))
    nested = _child(topic_el, "Comments")
    if nested is not None:
        comment_elements.extend(_children(nested, "Comment"))

    return Topic(
        guid=topic_el.get("Guid", ""),
        title=_text(topic_el, "Title") or "",
        topic_type=topic_el.get("TopicType"),
        topic_status=topic_el.get("TopicStatus"),
        priority=_text(topic_el, "Priority"),
        index=_text(topic_el, "Index"),
        labels=_labels(topic_el),
        creation_date=_text(topic_el, "CreationDate"),
        creation_author=_text(topic_el, "CreationAuthor"),
        modified_date=_text(topic_el, "ModifiedDate"),
        modified_author=_text(topic_el, "ModifiedAuthor"),
        assigned_to=_text(topic_el, "AssignedTo"),
        due_date=_text(topic_el, "DueDate"),
        stage=_text(topic_el, "Stage"),
        description=_text(topic_el, "Description"),
        comments=[_comment(element) for element in comment_elements],
    )


def _comment(element: ElementTree.Element) -> TopicComment:
    return TopicComment(
        guid=element.get("Guid", ""),
        comment=_text(element, "Comment") or "",
        date=_text(element, "Date"),
        author=_text(element, "Author"),
        modified_date=_text(element, "ModifiedDate"),
        modified_author=_text(element, "ModifiedAuthor"),
    )


def _labels(topic_el: ElementTree.Element) -> List[str]:
    # 2.1 repeats <Labels>text</Labels>, 3.0 wraps <Label> items in one <Labels>
    labels: List[str] = []
    for element in _children(topic_el, "Labels"):
        items = list(_children(element, "Label"))
        if items:
            labels.extend((item.text or "").strip() for item in items)
        elif element.text and element.text.strip():
            labels.append(element.text.strip())
    return [label for label in labels if label]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(element: ElementTree.Element, name: str) -> Iterable[ElementTree.Element]:
    return (child for child in element if _local_name(child.tag) == name)


def _child(element: ElementTree.Element, name: str) -> Optional[ElementTree.Element]:
    return next(iter(_children(element, name)), None)


def _text(element: ElementTree.Element, name: str) -> Optional[str]:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


__all__ = ["MARKUP_FILENAME", "parse_bcf"]
