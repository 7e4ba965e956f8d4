#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Legacy XML script filter output (Alfred 2).

Unless Alfred 2 compatibility is specifically needed, prefer
`alfredkit.output.json_output`. Per-modifier icons and item variables have
no representation in this format and are dropped.
"""

from __future__ import annotations

from collections.abc import Iterable
import re
from types import TracebackType
from typing import IO
import xml.etree.ElementTree as ET

from provide.foundation import logger

from alfredkit.config.defaults import XML_FOOTER, XML_HEADER, XML_INDENT
from alfredkit.exceptions import InvalidItemError, InvalidOutputError
from alfredkit.items import Icon, IconKind, Item, ItemType, Modifier, ModifierData

_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "&": "&amp;",
    "\r": "&#13;",
}

# Parsers normalize these to spaces inside attribute values
_ATTR_WHITESPACE = {
    "\n": "&#10;",
    "\t": "&#9;",
}

# Characters that may not appear in an XML 1.0 document at all
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

_ESCAPE = re.compile('[<>"&\r]')
_ATTR_ESCAPE = re.compile("[\n\t]")


def encode_entities(text: str) -> str:
    """Escape markup characters and replace characters XML cannot carry with U+FFFD.

    Carriage returns become character references so parsers keep them.
    """
    text = _INVALID_XML_CHARS.sub("\ufffd", text)
    return _ESCAPE.sub(lambda m: _ENTITIES[m.group(0)], text)


def _attr(name: str, value: str) -> str:
    escaped = _ATTR_ESCAPE.sub(lambda m: _ATTR_WHITESPACE[m.group(0)], encode_entities(value))
    return f' {name}="{escaped}"'


def _modifier_xml(modifier: Modifier, data: ModifierData) -> str:
    parts = [f'<mod key="{modifier.value}"']
    if data.subtitle is not None:
        parts.append(_attr("subtitle", data.subtitle))
    if data.arg is not None:
        parts.append(_attr("arg", data.arg))
    if data.valid is not None:
        parts.append(_attr("valid", "yes" if data.valid else "no"))
    parts.append("/>")
    return "".join(parts)


def _icon_xml(icon: Icon) -> str:
    if icon.kind is IconKind.PATH:
        return f"<icon>{encode_entities(icon.value)}</icon>"
    return f'<icon type="{icon.kind.value}">{encode_entities(icon.value)}</icon>'


def item_to_xml(item: Item, indent: int = 1) -> str:
    """Return the ``<item>`` fragment for ``item``, one element per line."""
    outer = XML_INDENT * indent
    inner = XML_INDENT * (indent + 1)

    attrs = []
    if item.uid is not None:
        attrs.append(_attr("uid", item.uid))
    if item.arg is not None:
        attrs.append(_attr("arg", item.arg))
    if item.type is not ItemType.DEFAULT:
        attrs.append(_attr("type", item.type.value))
    if not item.valid:
        attrs.append(' valid="no"')
    if item.autocomplete is not None:
        attrs.append(_attr("autocomplete", item.autocomplete))

    children = [f"<title>{encode_entities(item.title)}</title>"]
    if item.subtitle is not None:
        children.append(f"<subtitle>{encode_entities(item.subtitle)}</subtitle>")
    if item.icon is not None:
        children.append(_icon_xml(item.icon))
    for modifier, data in item.modifiers.items():
        if data.subtitle is None and data.arg is None and data.valid is None:
            continue
        children.append(_modifier_xml(modifier, data))
    if item.text_copy is not None:
        children.append(f'<text type="copy">{encode_entities(item.text_copy)}</text>')
    if item.text_large_type is not None:
        children.append(f'<text type="largetype">{encode_entities(item.text_large_type)}</text>')
    if item.quicklook_url is not None:
        children.append(f"<quicklookurl>{encode_entities(item.quicklook_url)}</quicklookurl>")

    lines = [f"{outer}<item{''.join(attrs)}>"]
    lines.extend(f"{inner}{child}" for child in children)
    lines.append(f"{outer}</item>")
    return "\n".join(lines) + "\n"


class XMLWriter:
    """Streams items into an XML document.

    The header is written as soon as the writer is created and the footer
    when it is closed. If a write fails, the stream may hold a partial item;
    every later call re-raises that same error without writing anything.

    Used as a context manager, leaving the block writes the footer and
    flushes the stream unless a write failed or the block raised.
    """

    def __init__(self, stream: IO[str]) -> None:
        stream.write(XML_HEADER)
        self._stream: IO[str] | None = stream
        self._error: Exception | None = None
        self._count = 0

    def __enter__(self) -> XMLWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._stream is None or self._error is not None or exc_type is not None:
            return
        self.close().flush()

    @property
    def closed(self) -> bool:
        return self._stream is None

    def _check(self) -> IO[str]:
        if self._error is not None:
            raise self._error
        if self._stream is None:
            raise ValueError("XMLWriter is closed")
        return self._stream

    def write_item(self, item: Item) -> None:
        stream = self._check()
        fragment = item_to_xml(item)
        try:
            stream.write(fragment)
        except Exception as e:
            logger.error("Failed writing XML item", error=str(e), title=item.title)
            self._error = e
            raise
        self._count += 1

    def close(self) -> IO[str]:
        """Write the footer and return the stream, which is not flushed."""
        stream = self._check()
        try:
            stream.write(XML_FOOTER)
        except Exception as e:
            logger.error("Failed writing XML footer", error=str(e))
            self._error = e
            raise
        self._stream = None
        logger.debug("Closed XML script filter output", items=self._count)
        return stream


def write_items(stream: IO[str], items: Iterable[Item]) -> None:
    """Write a complete XML document for ``items`` and flush the stream."""
    writer = XMLWriter(stream)
    for item in items:
        writer.write_item(item)
    writer.close().flush()


def _icon_from_element(element: ET.Element) -> Icon:
    kind = IconKind(element.get("type", IconKind.PATH.value))
    return Icon(kind, element.text or "")


def _modifier_from_element(element: ET.Element) -> tuple[Modifier, ModifierData]:
    valid = element.get("valid")
    return Modifier(element.get("key")), ModifierData(
        subtitle=element.get("subtitle"),
        arg=element.get("arg"),
        valid=None if valid is None else valid == "yes",
    )


def item_from_element(element: ET.Element) -> Item:
    """Build an item from an ``<item>`` element."""
    try:
        subtitle = element.find("subtitle")
        icon = element.find("icon")
        quicklook = element.find("quicklookurl")
        texts = {text.get("type"): text.text or "" for text in element.findall("text")}
        return Item(
            title=element.findtext("title", ""),
            subtitle=None if subtitle is None else subtitle.text or "",
            uid=element.get("uid"),
            arg=element.get("arg"),
            type=ItemType(element.get("type", ItemType.DEFAULT.value)),
            valid=element.get("valid", "yes") != "no",
            autocomplete=element.get("autocomplete"),
            icon=None if icon is None else _icon_from_element(icon),
            text_copy=texts.get("copy"),
            text_large_type=texts.get("largetype"),
            quicklook_url=None if quicklook is None else quicklook.text or "",
            modifiers=dict(_modifier_from_element(mod) for mod in element.findall("mod")),
        )
    except ValueError as e:
        raise InvalidItemError(f"Malformed item element: {e}") from e


def read_items(text: str) -> list[Item]:
    """Parse a legacy XML script filter document back into items."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise InvalidOutputError(f"Invalid XML script filter document: {e}") from e
    if root.tag != "items":
        raise InvalidOutputError(f"Expected <items> root element, got <{root.tag}>")
    return [item_from_element(element) for element in root.findall("item")]


# 🎩📋🔚
