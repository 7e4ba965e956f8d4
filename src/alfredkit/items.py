#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Script filter items and the builder used to assemble them.

An `Item` is an immutable value object. Items are normally created through
`ItemBuilder`, whose fluent setters mirror every field Alfred understands:

    item = (
        ItemBuilder("Open Downloads")
        .subtitle("~/Downloads")
        .arg("~/Downloads")
        .icon_filetype("public.folder")
        .subtitle_mod(Modifier.CMD, "Reveal in Finder")
        .into_item()
    )

Validation happens when the item is constructed: an empty title, an empty
argument, or a file result without an argument raises `InvalidItemError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

from attrs import Attribute, define, evolve, field

from alfredkit.exceptions import InvalidItemError


class Modifier(Enum):
    """Keyboard modifiers. Alfred does not support modifier combinations."""

    CMD = "cmd"
    ALT = "alt"
    CTRL = "ctrl"
    SHIFT = "shift"
    FN = "fn"


ALL_MODIFIERS: tuple[Modifier, ...] = tuple(Modifier)


class ItemType(Enum):
    """What type of result an item is."""

    DEFAULT = "default"
    # Alfred hides the result when the file does not exist on disk.
    FILE = "file"
    FILE_SKIPCHECK = "file:skipcheck"


FILE_ITEM_TYPES = frozenset({ItemType.FILE, ItemType.FILE_SKIPCHECK})


class IconKind(Enum):
    """How Alfred interprets an icon's value."""

    PATH = "path"
    FILE_ICON = "fileicon"
    FILE_TYPE = "filetype"


def _require_text(instance: Any, attribute: Attribute, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidItemError(f"{type(instance).__name__}.{attribute.name} must be a non-empty string")


def _optional_text(instance: Any, attribute: Attribute, value: str | None) -> None:
    if value is not None:
        _require_text(instance, attribute, value)


def _optional_str(instance: Any, attribute: Attribute, value: str | None) -> None:
    if value is not None and not isinstance(value, str):
        raise InvalidItemError(
            f"{type(instance).__name__}.{attribute.name} must be a string, got {type(value).__name__}"
        )


def _flag(instance: Any, attribute: Attribute, value: bool | None) -> None:
    if value is not None and not isinstance(value, bool):
        raise InvalidItemError(
            f"{type(instance).__name__}.{attribute.name} must be a boolean, got {type(value).__name__}"
        )


def _frozen_mapping(value: Mapping[Any, Any] | None) -> Mapping[Any, Any]:
    return MappingProxyType(dict(value or {}))


@define(frozen=True)
class Icon:
    """An item icon.

    PATH icons are image files relative to the workflow directory, FILE_ICON
    icons use the icon of a file on disk, FILE_TYPE icons use the icon of a
    uniform type identifier such as ``public.folder``.
    """

    kind: IconKind
    value: str = field(validator=_require_text)

    @classmethod
    def path(cls, path: str) -> Icon:
        return cls(IconKind.PATH, path)

    @classmethod
    def file(cls, path: str) -> Icon:
        return cls(IconKind.FILE_ICON, path)

    @classmethod
    def filetype(cls, filetype: str) -> Icon:
        return cls(IconKind.FILE_TYPE, filetype)


def _optional_icon(instance: Any, attribute: Attribute, value: Icon | None) -> None:
    if value is not None and not isinstance(value, Icon):
        raise InvalidItemError(
            f"{type(instance).__name__}.{attribute.name} must be an Icon, got {type(value).__name__}"
        )


@define(frozen=True)
class ModifierData:
    """Overrides applied while a modifier key is held.

    The icon override is only emitted in JSON output; the legacy XML format
    has no per-modifier icons.
    """

    subtitle: str | None = field(default=None, validator=_optional_str)
    arg: str | None = field(default=None, validator=_optional_text)
    valid: bool | None = field(default=None, validator=_flag)
    icon: Icon | None = field(default=None, validator=_optional_icon)

    @property
    def is_empty(self) -> bool:
        return self.subtitle is None and self.arg is None and self.valid is None and self.icon is None


@define(frozen=True)
class Item:
    """A single script filter result."""

    title: str = field(validator=_require_text)
    subtitle: str | None = field(default=None, validator=_optional_str)
    uid: str | None = field(default=None, validator=_optional_str)
    arg: str | None = field(default=None, validator=_optional_text)
    type: ItemType = ItemType.DEFAULT
    valid: bool = field(default=True, validator=_flag)
    autocomplete: str | None = field(default=None, validator=_optional_str)
    icon: Icon | None = field(default=None, validator=_optional_icon)
    text_copy: str | None = field(default=None, validator=_optional_str)
    text_large_type: str | None = field(default=None, validator=_optional_str)
    quicklook_url: str | None = field(default=None, validator=_optional_str)
    modifiers: Mapping[Modifier, ModifierData] = field(factory=dict, converter=_frozen_mapping)
    variables: Mapping[str, str] = field(factory=dict, converter=_frozen_mapping)

    def __attrs_post_init__(self) -> None:
        if not isinstance(self.type, ItemType):
            raise InvalidItemError(f"Unknown item type: {self.type!r}")
        if not isinstance(self.valid, bool):
            raise InvalidItemError(f"Item.valid must be a boolean, got {type(self.valid).__name__}")
        if self.type in FILE_ITEM_TYPES and self.arg is None:
            raise InvalidItemError(f"Item of type '{self.type.value}' requires an arg")
        for modifier, data in self.modifiers.items():
            if not isinstance(modifier, Modifier):
                raise InvalidItemError(f"Unknown modifier: {modifier!r}")
            if not isinstance(data, ModifierData):
                raise InvalidItemError(f"Overrides for '{modifier.value}' must be ModifierData")
            if data.is_empty:
                raise InvalidItemError(f"Modifier '{modifier.value}' has no overrides")
        for name, value in self.variables.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise InvalidItemError(f"Variable {name!r} must map a string to a string")


class ItemBuilder:
    """Fluent builder for `Item` values.

    Every setter returns the builder. `unset_*` methods drop a single value,
    `clear_*` methods drop the default value and every per-modifier override.
    A modifier whose last override is unset disappears from the item.
    """

    def __init__(self, title: str) -> None:
        self._fields: dict[str, Any] = {"title": title}
        self._modifiers: dict[Modifier, ModifierData] = {}
        self._variables: dict[str, str] = {}

    def into_item(self) -> Item:
        """Validate and return the built item."""
        return Item(
            **self._fields,
            modifiers=self._modifiers,
            variables=self._variables,
        )

    def _set(self, name: str, value: Any) -> ItemBuilder:
        self._fields[name] = value
        return self

    def _unset(self, name: str) -> ItemBuilder:
        self._fields.pop(name, None)
        return self

    def _set_mod(self, modifier: Modifier, **changes: Any) -> ItemBuilder:
        current = self._modifiers.get(modifier, ModifierData())
        updated = evolve(current, **changes)
        if updated.is_empty:
            self._modifiers.pop(modifier, None)
        else:
            self._modifiers[modifier] = updated
        return self

    def _clear(self, name: str) -> ItemBuilder:
        self._unset(name)
        for modifier in ALL_MODIFIERS:
            if modifier in self._modifiers:
                self._set_mod(modifier, **{name: None})
        return self

    # Title and subtitle

    def title(self, title: str) -> ItemBuilder:
        return self._set("title", title)

    def subtitle(self, subtitle: str) -> ItemBuilder:
        """Set the default subtitle, used when no modifier overrides it."""
        return self._set("subtitle", subtitle)

    def unset_subtitle(self) -> ItemBuilder:
        return self._unset("subtitle")

    def subtitle_mod(self, modifier: Modifier, subtitle: str) -> ItemBuilder:
        return self._set_mod(modifier, subtitle=subtitle)

    def unset_subtitle_mod(self, modifier: Modifier) -> ItemBuilder:
        return self._set_mod(modifier, subtitle=None)

    def clear_subtitle(self) -> ItemBuilder:
        return self._clear("subtitle")

    # Icons

    def icon(self, icon: Icon) -> ItemBuilder:
        return self._set("icon", icon)

    def icon_path(self, path: str) -> ItemBuilder:
        """Use an image file, relative to the workflow directory, as the icon."""
        return self._set("icon", Icon.path(path))

    def icon_file(self, path: str) -> ItemBuilder:
        """Use the icon of the file at ``path``."""
        return self._set("icon", Icon.file(path))

    def icon_filetype(self, filetype: str) -> ItemBuilder:
        """Use the icon of a file type given as a UTI, e.g. ``public.jpeg``."""
        return self._set("icon", Icon.filetype(filetype))

    def unset_icon(self) -> ItemBuilder:
        return self._unset("icon")

    def icon_mod(self, modifier: Modifier, icon: Icon) -> ItemBuilder:
        return self._set_mod(modifier, icon=icon)

    def icon_path_mod(self, modifier: Modifier, path: str) -> ItemBuilder:
        return self._set_mod(modifier, icon=Icon.path(path))

    def icon_file_mod(self, modifier: Modifier, path: str) -> ItemBuilder:
        return self._set_mod(modifier, icon=Icon.file(path))

    def icon_filetype_mod(self, modifier: Modifier, filetype: str) -> ItemBuilder:
        return self._set_mod(modifier, icon=Icon.filetype(filetype))

    def unset_icon_mod(self, modifier: Modifier) -> ItemBuilder:
        return self._set_mod(modifier, icon=None)

    def clear_icon(self) -> ItemBuilder:
        return self._clear("icon")

    # Identity and argument

    def uid(self, uid: str) -> ItemBuilder:
        return self._set("uid", uid)

    def unset_uid(self) -> ItemBuilder:
        return self._unset("uid")

    def arg(self, arg: str) -> ItemBuilder:
        """Set the value passed to the next workflow object."""
        return self._set("arg", arg)

    def unset_arg(self) -> ItemBuilder:
        return self._unset("arg")

    def arg_mod(self, modifier: Modifier, arg: str) -> ItemBuilder:
        return self._set_mod(modifier, arg=arg)

    def unset_arg_mod(self, modifier: Modifier) -> ItemBuilder:
        return self._set_mod(modifier, arg=None)

    def clear_arg(self) -> ItemBuilder:
        return self._clear("arg")

    # Type and validity

    def type(self, item_type: ItemType) -> ItemBuilder:
        # DEFAULT needs no unsetting counterpart
        return self._set("type", item_type)

    def valid(self, valid: bool) -> ItemBuilder:
        """When False, actioning the item autocompletes instead."""
        return self._set("valid", valid)

    def valid_mod(self, modifier: Modifier, valid: bool) -> ItemBuilder:
        return self._set_mod(modifier, valid=valid)

    def unset_valid_mod(self, modifier: Modifier) -> ItemBuilder:
        return self._set_mod(modifier, valid=None)

    def clear_valid(self) -> ItemBuilder:
        return self._clear("valid")

    # Modifiers as a whole

    def modifier(
        self,
        modifier: Modifier,
        subtitle: str | None = None,
        arg: str | None = None,
        valid: bool = True,
        icon: Icon | None = None,
    ) -> ItemBuilder:
        """Replace every override for ``modifier`` at once."""
        self._modifiers[modifier] = ModifierData(subtitle=subtitle, arg=arg, valid=valid, icon=icon)
        return self

    def unset_modifier(self, modifier: Modifier) -> ItemBuilder:
        self._modifiers.pop(modifier, None)
        return self

    # Remaining optional fields

    def autocomplete(self, autocomplete: str) -> ItemBuilder:
        return self._set("autocomplete", autocomplete)

    def unset_autocomplete(self) -> ItemBuilder:
        return self._unset("autocomplete")

    def text_copy(self, text: str) -> ItemBuilder:
        """Text copied when the user presses cmd-C on the item."""
        return self._set("text_copy", text)

    def unset_text_copy(self) -> ItemBuilder:
        return self._unset("text_copy")

    def text_large_type(self, text: str) -> ItemBuilder:
        """Text shown when the user presses cmd-L on the item."""
        return self._set("text_large_type", text)

    def unset_text_large_type(self) -> ItemBuilder:
        return self._unset("text_large_type")

    def quicklook_url(self, url: str) -> ItemBuilder:
        return self._set("quicklook_url", url)

    def unset_quicklook_url(self) -> ItemBuilder:
        return self._unset("quicklook_url")

    def variable(self, name: str, value: str) -> ItemBuilder:
        """Set a workflow variable passed on when the item is actioned (JSON only)."""
        self._variables[name] = value
        return self

    def unset_variable(self, name: str) -> ItemBuilder:
        self._variables.pop(name, None)
        return self


# 🎩📋🔚
