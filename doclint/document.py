"""Document loader: parse XML or JSON input into an immutable element tree."""

from __future__ import annotations

import json
import logging
import weakref
import xml.etree.ElementTree as ET
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Union

from .errors import NotFoundError, ParseError
from .utils import read_bytes_file

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)
XML_SUFFIXES = (".xml", ".bom")
JSON_ROOT_TAG = "root"
JSON_ITEM_TAG = "item"
NAME_ATTRIBUTES = ("name", "qualifiedName", "id")


class Element:
    """One node of a loaded document.

    Attributes keep their source order and raw string values. The parent is a
    weak reference so the tree is owned top-down only.
    """

    __slots__ = ("tag", "attributes", "text", "children", "_parent", "__weakref__")

    def __init__(self, tag: str, attributes: Mapping[str, str], text: Optional[str] = None) -> None:
        self.tag = tag
        self.attributes: Mapping[str, str] = MappingProxyType(dict(attributes))
        self.text = text
        self.children: Sequence[Element] = ()
        self._parent: Optional[weakref.ReferenceType[Element]] = None

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, name={self.name!r})"

    @property
    def parent(self) -> Optional["Element"]:
        return self._parent() if self._parent is not None else None

    @property
    def name(self) -> Optional[str]:
        """Return the first identifying attribute present on the element."""

        for attr in NAME_ATTRIBUTES:
            value = self.attributes.get(attr)
            if value:
                return value
        return None

    def get(self, attribute: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(attribute, default)

    def iter(self, *tags: str) -> Iterator["Element"]:
        """Yield this element and its descendants in document order."""

        stack: List[Element] = [self]
        while stack:
            element = stack.pop()
            if not tags or element.tag in tags:
                yield element
            stack.extend(reversed(element.children))

    def find_children(self, tag: str) -> List["Element"]:
        return [child for child in self.children if child.tag == tag]

    def child_text(self, tag: str) -> Optional[str]:
        """Return the text of the first direct child named ``tag``."""

        for child in self.children:
            if child.tag == tag:
                return child.text or ""
        return None

    @property
    def path(self) -> str:
        """Return a locator such as ``/model/objects/object[@name='X']``."""

        segments: List[str] = []
        element: Optional[Element] = self
        while element is not None:
            segments.append(element._segment())
            element = element.parent
        return "/" + "/".join(reversed(segments))

    def _segment(self) -> str:
        for attr in NAME_ATTRIBUTES:
            value = self.attributes.get(attr)
            if value:
                return f"{self.tag}[@{attr}='{value}']"
        parent = self.parent
        if parent is None:
            return self.tag
        siblings = parent.find_children(self.tag)
        if len(siblings) == 1:
            return self.tag
        position = next(idx for idx, sibling in enumerate(siblings, start=1) if sibling is self)
        return f"{self.tag}[{position}]"


class Document:
    """A parsed document: the root element plus where it came from."""

    def __init__(self, root: Element, source: Optional[str] = None, fmt: str = "xml") -> None:
        self.root = root
        self.source = source
        self.format = fmt

    def __repr__(self) -> str:
        return f"Document(source={self.source!r}, root={self.root.tag!r})"

    def iter(self, *tags: str) -> Iterator[Element]:
        return self.root.iter(*tags)

    def names(self, *tags: str) -> set[str]:
        """Return every identifying name carried by elements of ``tags``."""

        return {element.name for element in self.iter(*tags) if element.name}


def _attach(parent: Element, children: List[Element]) -> None:
    for child in children:
        child._parent = weakref.ref(parent)
    parent.children = tuple(children)


def _local_name(tag: str) -> str:
    return tag.split("}", 1)[1] if tag.startswith("{") else tag


def _from_xml(node: ET.Element) -> Element:
    attributes = {_local_name(key): value for key, value in node.attrib.items()}
    element = Element(_local_name(node.tag), attributes, node.text)
    _attach(element, [_from_xml(child) for child in node])
    return element


def _scalar(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _from_json(tag: str, value: Any) -> Element:
    if isinstance(value, dict):
        attributes = {key: _scalar(item) for key, item in value.items() if not isinstance(item, (dict, list))}
        element = Element(tag, attributes)
        children: List[Element] = []
        for key, item in value.items():
            if isinstance(item, dict):
                children.append(_from_json(key, item))
            elif isinstance(item, list):
                children.extend(_from_json(key, entry) for entry in item)
        _attach(element, children)
        return element
    if isinstance(value, list):
        element = Element(tag, {})
        _attach(element, [_from_json(JSON_ITEM_TAG, entry) for entry in value])
        return element
    return Element(tag, {}, _scalar(value))


def detect_format(raw: Union[bytes, str], source: Optional[str] = None) -> str:
    """Guess ``xml`` or ``json`` from the source suffix, then the content."""

    if source:
        suffix = Path(source).suffix.lower()
        if suffix in JSON_SUFFIXES:
            return "json"
        if suffix in XML_SUFFIXES:
            return "xml"
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    stripped = text.lstrip("\ufeff \t\r\n")
    if stripped[:1] in ("{", "["):
        return "json"
    return "xml"


def load(raw: Union[bytes, str], *, fmt: Optional[str] = None, source: Optional[str] = None) -> Document:
    """Parse ``raw`` into a :class:`Document`.

    Raises :class:`ParseError` when the input is not well-formed.
    """

    fmt = fmt or detect_format(raw, source)
    logger.debug("Loading %s as %s", source or "<input>", fmt)
    if fmt == "xml":
        try:
            node = ET.fromstring(raw)
        except ET.ParseError as exc:
            raise ParseError(str(exc), source=source, position=getattr(exc, "position", None)) from exc
        return Document(_from_xml(node), source=source, fmt=fmt)
    if fmt == "json":
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            position = (exc.lineno, exc.colno) if isinstance(exc, json.JSONDecodeError) else None
            raise ParseError(str(exc), source=source, position=position) from exc
        return Document(_from_json(JSON_ROOT_TAG, data), source=source, fmt=fmt)
    raise ValueError(f"Unsupported document format: {fmt}")


def load_path(path: Union[str, Path], fmt: Optional[str] = None) -> Document:
    """Read and parse the document stored at ``path``."""

    location = Path(path)
    raw = read_bytes_file(location)
    if raw is None:
        raise NotFoundError(str(location))
    return load(raw, fmt=fmt, source=str(location))
