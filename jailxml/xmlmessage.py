"""Minimal XML request parsing and XML text escaping."""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

BAD_REQUEST_CODE = 400

_END_OF_CALL = "</methodCall>"

_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "'": "&apos;",
        '"': "&quot;",
    }
)

_NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
}


class BadRequestError(Exception):
    """A request that cannot be understood (HTTP 400)."""

    code = BAD_REQUEST_CODE

    def __init__(self, message: str, detail: str = "") -> None:
        super().__init__(f"{message}: {detail}" if detail else message)
        self.message = message
        self.detail = detail


class XmlNode:
    """An element of a parsed document, located by offsets into the raw text."""

    def __init__(self, raw: str, tag: str, offset: int) -> None:
        self.raw = raw
        self.tag = tag
        self.offset = offset
        self.length = 0
        self.children: List[XmlNode] = []

    @property
    def name(self) -> str:
        return self.tag

    def add_child(self, child: "XmlNode") -> None:
        self.children.append(child)

    def raw_content(self) -> str:
        """The undecoded text between the opening and the closing tag."""
        return self.raw[self.offset:self.offset + self.length]

    def get_string(self) -> str:
        """The decoded content of a ``string`` or ``name`` element."""
        if self.tag in ("string", "name"):
            return decode_xml(self.raw_content())
        raise BadRequestError(
            "Message data type error", "Expected string and found " + self.tag
        )

    def __iter__(self) -> Iterator["XmlNode"]:
        return iter(self.children)

    def __repr__(self) -> str:
        return f"XmlNode(tag={self.tag!r}, children={len(self.children)})"


def _next_tag(raw: str, offset: int) -> Optional[Tuple[str, int, int]]:
    """Find the next tag from offset.

    Returns (tag text, position of '<', position just after '>') or None.
    """
    start = raw.find("<", offset)
    if start == -1:
        return None
    end = raw.find(">", start)
    if end == -1:
        raise BadRequestError("XML parse error: unexpected end of XML")
    return raw[start + 1:end], start, end + 1


class XmlMessage:
    """A parsed XML request; the document element is ``root``."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.root = self._parse()

    def _parse(self) -> XmlNode:
        raw = self.raw
        tail_start = len(raw) - 15
        if tail_start < 0 or raw.find(_END_OF_CALL, tail_start) == -1:
            logger.info("XML: data pass end tag of methodcall")
        # The first tag is the XML declaration; the second opens the root.
        first = _next_tag(raw, 0)
        second = _next_tag(raw, first[2]) if first else None
        if second is None:
            raise BadRequestError("XML parse error: start tag not found")
        tag, _, offset = second
        root = XmlNode(raw, tag, offset)
        self._build(root)
        return root

    def _build(self, root: XmlNode) -> None:
        raw = self.raw
        stack = [root]
        offset = root.offset
        while stack:
            found = _next_tag(raw, offset)
            if found is None:
                raise BadRequestError("XML parse error: end tag not found")
            tag, start, offset = found
            node = stack[-1]
            if tag.startswith("/"):
                name = tag[1:]
                if name != node.name:
                    raise BadRequestError(
                        "XML parse error: unexpected end of tag", name
                    )
                node.length = start - node.offset
                stack.pop()
            elif tag.endswith("/"):
                node.add_child(XmlNode(raw, tag[:-1], offset))
            else:
                child = XmlNode(raw, tag, offset)
                node.add_child(child)
                stack.append(child)


def _sequence_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead & 0xE0 == 0xC0:
        return 2
    if lead & 0xF0 == 0xE0:
        return 3
    if lead & 0xF8 == 0xF0:
        return 4
    return 1


def clean_utf8(data: Union[bytes, str]) -> str:
    """Drop every invalid or truncated UTF-8 sequence from data."""
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogateescape")
    pieces = []
    position = 0
    total = len(data)
    while position < total:
        size = _sequence_length(data[position])
        if position + size > total:
            break
        chunk = data[position:position + size]
        try:
            pieces.append(chunk.decode("utf-8"))
        except UnicodeDecodeError:
            pass
        position += size
    return "".join(pieces)


def encode_xml(data: Union[bytes, str]) -> str:
    """Escape text for inclusion in an XML document."""
    return clean_utf8(data).translate(_ESCAPES)


def _atoi(text: str) -> int:
    text = text.lstrip(" \t\n\r\f\v")
    sign = 1
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1
        text = text[1:]
    digits = []
    for char in text:
        if not "0" <= char <= "9":
            break
        digits.append(char)
    return sign * int("".join(digits)) if digits else 0


def decode_xml(data: str) -> str:
    """Resolve the predefined entities and decimal character references."""
    pieces = []
    position = 0
    total = len(data)
    while position < total:
        amp = data.find("&", position)
        if amp == -1:
            pieces.append(data[position:])
            break
        pieces.append(data[position:amp])
        end = data.find(";", amp + 1)
        if end == -1:
            raise BadRequestError("XML string decode error")
        code = data[amp + 1:end]
        if code.startswith("#"):
            pieces.append(chr(_atoi(code[1:]) % 256))
        elif code in _NAMED_ENTITIES:
            pieces.append(_NAMED_ENTITIES[code])
        else:
            raise BadRequestError("XML string decode error")
        position = end + 1
    return "".join(pieces)