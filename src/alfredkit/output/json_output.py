#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""JSON script filter output (Alfred 3 and later).

The document is a single object holding an ``items`` array, optionally
accompanied by document-level ``variables`` and a ``rerun`` interval. Only
fields that are set on an item are emitted, so a bare item serializes to
``{"title": ...}``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import IO, Any

from provide.foundation import logger
from provide.foundation.errors import FoundationError
from provide.foundation.serialization import json_dumps, json_loads

from alfredkit.config.defaults import RERUN_MAX_SECONDS, RERUN_MIN_SECONDS
from alfredkit.exceptions import InvalidItemError, InvalidOutputError
from alfredkit.items import Icon, IconKind, Item, ItemType, Modifier, ModifierData


def icon_to_dict(icon: Icon) -> dict[str, str]:
    if icon.kind is IconKind.PATH:
        return {"path": icon.value}
    return {"type": icon.kind.value, "path": icon.value}


def modifier_to_dict(data: ModifierData) -> dict[str, Any]:
    mod: dict[str, Any] = {}
    if data.subtitle is not None:
        mod["subtitle"] = data.subtitle
    if data.arg is not None:
        mod["arg"] = data.arg
    if data.valid is not None:
        mod["valid"] = data.valid
    if data.icon is not None:
        mod["icon"] = icon_to_dict(data.icon)
    return mod


def item_to_dict(item: Item) -> dict[str, Any]:
    """Return the JSON object for a single item."""
    d: dict[str, Any] = {"title": item.title}
    if item.subtitle is not None:
        d["subtitle"] = item.subtitle
    if item.uid is not None:
        d["uid"] = item.uid
    if item.arg is not None:
        d["arg"] = item.arg
    if item.type is not ItemType.DEFAULT:
        d["type"] = item.type.value
    if not item.valid:
        d["valid"] = False
    if item.autocomplete is not None:
        d["autocomplete"] = item.autocomplete
    if item.icon is not None:
        d["icon"] = icon_to_dict(item.icon)

    text: dict[str, str] = {}
    if item.text_copy is not None:
        text["copy"] = item.text_copy
    if item.text_large_type is not None:
        text["largetype"] = item.text_large_type
    if text:
        d["text"] = text

    if item.quicklook_url is not None:
        d["quicklookurl"] = item.quicklook_url
    if item.modifiers:
        d["mods"] = {modifier.value: modifier_to_dict(data) for modifier, data in item.modifiers.items()}
    if item.variables:
        d["variables"] = dict(item.variables)
    return d


class OutputBuilder:
    """Assembles a complete JSON document.

    Besides the items, a document may carry workflow variables shared by all
    items and a ``rerun`` interval asking Alfred to re-run the script filter.
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: list[Item] = list(items)
        self._variables: dict[str, str] = {}
        self._rerun: float | None = None

    @classmethod
    def with_items(cls, items: Iterable[Item]) -> OutputBuilder:
        return cls(items)

    @property
    def built_items(self) -> list[Item]:
        return list(self._items)

    def item(self, item: Item) -> OutputBuilder:
        self._items.append(item)
        return self

    def items(self, items: Iterable[Item]) -> OutputBuilder:
        self._items.extend(items)
        return self

    def variable(self, name: str, value: str) -> OutputBuilder:
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidOutputError(f"Variable {name!r} must map a string to a string")
        self._variables[name] = value
        return self

    def variables(self, variables: Mapping[str, str]) -> OutputBuilder:
        if not isinstance(variables, Mapping):
            raise InvalidOutputError(f"variables must be a mapping, got {type(variables).__name__}")
        for name, value in variables.items():
            self.variable(name, value)
        return self

    def unset_variable(self, name: str) -> OutputBuilder:
        self._variables.pop(name, None)
        return self

    def rerun(self, seconds: float) -> OutputBuilder:
        """Re-run the script filter after ``seconds`` (0.1 to 5.0)."""
        if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
            raise InvalidOutputError(f"rerun must be a number of seconds, got {seconds!r}")
        if not RERUN_MIN_SECONDS <= seconds <= RERUN_MAX_SECONDS:
            raise InvalidOutputError(
                f"rerun must be between {RERUN_MIN_SECONDS} and {RERUN_MAX_SECONDS} seconds, got {seconds}"
            )
        self._rerun = seconds
        return self

    def unset_rerun(self) -> OutputBuilder:
        self._rerun = None
        return self

    def to_dict(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self._rerun is not None:
            document["rerun"] = self._rerun
        if self._variables:
            document["variables"] = dict(self._variables)
        document["items"] = [item_to_dict(item) for item in self._items]
        return document

    def dumps(self, indent: int | None = None) -> str:
        return json_dumps(self.to_dict(), indent=indent)

    def write(self, stream: IO[str], indent: int | None = None) -> None:
        """Write the document to ``stream`` and flush it."""
        logger.debug(
            "Writing JSON script filter output",
            items=len(self._items),
            variables=len(self._variables),
            rerun=self._rerun,
        )
        stream.write(self.dumps(indent=indent))
        stream.flush()


def write_items(stream: IO[str], items: Iterable[Item]) -> None:
    """Write a complete JSON document for ``items`` and flush the stream."""
    OutputBuilder(items).write(stream)


def _icon_from_dict(data: Mapping[str, Any]) -> Icon:
    kind = IconKind(data.get("type", IconKind.PATH.value))
    return Icon(kind, data["path"])


def _modifier_from_dict(data: Mapping[str, Any]) -> ModifierData:
    icon = data.get("icon")
    return ModifierData(
        subtitle=data.get("subtitle"),
        arg=data.get("arg"),
        valid=data.get("valid"),
        icon=_icon_from_dict(icon) if icon is not None else None,
    )


def item_from_dict(data: Mapping[str, Any]) -> Item:
    """Build an item from its JSON object.

    Raises:
        InvalidItemError: If the object is not a valid item.
    """
    try:
        text = data.get("text", {})
        icon = data.get("icon")
        return Item(
            title=data["title"],
            subtitle=data.get("subtitle"),
            uid=data.get("uid"),
            arg=data.get("arg"),
            type=ItemType(data.get("type", ItemType.DEFAULT.value)),
            valid=data.get("valid", True),
            autocomplete=data.get("autocomplete"),
            icon=_icon_from_dict(icon) if icon is not None else None,
            text_copy=text.get("copy"),
            text_large_type=text.get("largetype"),
            quicklook_url=data.get("quicklookurl"),
            modifiers={Modifier(key): _modifier_from_dict(mod) for key, mod in data.get("mods", {}).items()},
            variables=data.get("variables", {}),
        )
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise InvalidItemError(f"Malformed item object: {e}") from e


def _load_document(text: str) -> dict[str, Any]:
    try:
        document = json_loads(text)
    except (ValueError, FoundationError) as e:
        raise InvalidOutputError(f"Invalid JSON script filter document: {e}") from e
    if not isinstance(document, dict) or not isinstance(document.get("items"), list):
        raise InvalidOutputError("JSON script filter document must be an object with an 'items' array")
    return document


def read_items(text: str) -> list[Item]:
    """Parse a JSON script filter document back into items."""
    return [item_from_dict(entry) for entry in _load_document(text)["items"]]


def read_document(text: str) -> OutputBuilder:
    """Parse a JSON script filter document, keeping its variables and rerun interval."""
    document = _load_document(text)
    builder = OutputBuilder(item_from_dict(entry) for entry in document["items"])
    builder.variables(document.get("variables", {}))
    if document.get("rerun") is not None:
        builder.rerun(document["rerun"])
    return builder


# 🎩📋🔚
