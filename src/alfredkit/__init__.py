#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""alfredkit: helpers for writing Alfred script filter output.

Build items with `ItemBuilder`, then write them with
`alfredkit.output.json_output.write_items` (Alfred 3 and later) or
`alfredkit.output.xml_output.write_items` (Alfred 2).
"""

from __future__ import annotations

from provide.foundation.utils import get_version

from alfredkit import env
from alfredkit.exceptions import (
    AlfredKitError,
    InvalidItemError,
    InvalidOutputError,
    ReleaseError,
    UpdaterError,
)
from alfredkit.items import Icon, IconKind, Item, ItemBuilder, ItemType, Modifier, ModifierData
from alfredkit.output import OutputBuilder, OutputFormat, XMLWriter
from alfredkit.updater import GithubReleaser, Releaser, Updater

__version__ = get_version("alfredkit", caller_file=__file__)

__all__ = [
    "AlfredKitError",
    "GithubReleaser",
    "Icon",
    "IconKind",
    "InvalidItemError",
    "InvalidOutputError",
    "Item",
    "ItemBuilder",
    "ItemType",
    "Modifier",
    "ModifierData",
    "OutputBuilder",
    "OutputFormat",
    "ReleaseError",
    "Releaser",
    "Updater",
    "UpdaterError",
    "XMLWriter",
    "__version__",
    "env",
]

# 🎩📋🔚
