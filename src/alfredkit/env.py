#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Accessors for the environment variables Alfred sets for workflow scripts.

Every accessor returns ``None`` when its variable is absent. See
https://www.alfredapp.com/help/workflows/script-environment-variables/
"""

from __future__ import annotations

from enum import Enum
import os
from pathlib import Path
from typing import Any

from attrs import asdict, define


class Subtext(Enum):
    """Subtext mode selected in Alfred's Appearance preferences."""

    ALWAYS = "0"
    ALTERNATIVE_ACTIONS = "1"
    SELECTED_RESULT = "2"
    NEVER = "3"


def _var(name: str) -> str | None:
    return os.environ.get(name)


def _path(name: str) -> Path | None:
    value = _var(name)
    return Path(value) if value is not None else None


def preferences() -> Path | None:
    """Location of Alfred.alfredpreferences."""
    return _path("alfred_preferences")


def local_preferences() -> Path | None:
    """Location of the Mac-specific preferences inside Alfred.alfredpreferences."""
    prefs = preferences()
    local_hash = _var("alfred_preferences_localhash")
    if prefs is None or local_hash is None:
        return None
    return prefs / "preferences" / "local" / local_hash


def theme() -> str | None:
    """Current theme, e.g. ``alfred.theme.yosemite``."""
    return _var("alfred_theme")


def theme_background() -> str | None:
    """Theme background color, e.g. ``rgba(255,255,255,0.98)``."""
    return _var("alfred_theme_background")


def theme_selection_background() -> str | None:
    return _var("alfred_theme_selection_background")


def theme_subtext() -> Subtext | None:
    value = _var("alfred_theme_subtext")
    try:
        return Subtext(value)
    except ValueError:
        return None


def version() -> str | None:
    """Alfred version, e.g. ``5.1.2``."""
    return _var("alfred_version")


def version_build() -> int | None:
    """Alfred build number; ``None`` when absent or not a number."""
    value = _var("alfred_version_build")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def workflow_bundle_id() -> str | None:
    return _var("alfred_workflow_bundleid")


def workflow_cache() -> Path | None:
    """Recommended location for volatile workflow data.

    Only populated when the workflow has a bundle identifier.
    """
    return _path("alfred_workflow_cache")


def workflow_data() -> Path | None:
    """Recommended location for non-volatile workflow data.

    Only populated when the workflow has a bundle identifier.
    """
    return _path("alfred_workflow_data")


def workflow_name() -> str | None:
    return _var("alfred_workflow_name")


def workflow_uid() -> str | None:
    """Unique ID of the running workflow, e.g. ``user.workflow.B0AC54EC-...``."""
    return _var("alfred_workflow_uid")


def workflow_version() -> str | None:
    return _var("alfred_workflow_version")


def is_debug() -> bool:
    """True when the user has the workflow debug panel open."""
    return _var("alfred_debug") == "1"


@define(frozen=True)
class WorkflowEnvironment:
    """Snapshot of every workflow environment value at one point in time."""

    preferences: Path | None
    local_preferences: Path | None
    theme: str | None
    theme_background: str | None
    theme_selection_background: str | None
    theme_subtext: Subtext | None
    version: str | None
    version_build: int | None
    workflow_bundle_id: str | None
    workflow_cache: Path | None
    workflow_data: Path | None
    workflow_name: str | None
    workflow_uid: str | None
    workflow_version: str | None
    debug: bool

    @classmethod
    def current(cls) -> WorkflowEnvironment:
        return cls(
            preferences=preferences(),
            local_preferences=local_preferences(),
            theme=theme(),
            theme_background=theme_background(),
            theme_selection_background=theme_selection_background(),
            theme_subtext=theme_subtext(),
            version=version(),
            version_build=version_build(),
            workflow_bundle_id=workflow_bundle_id(),
            workflow_cache=workflow_cache(),
            workflow_data=workflow_data(),
            workflow_name=workflow_name(),
            workflow_uid=workflow_uid(),
            workflow_version=workflow_version(),
            debug=is_debug(),
        )

    @property
    def in_workflow(self) -> bool:
        """True when running under Alfred rather than from a plain shell."""
        return self.workflow_uid is not None

    def as_dict(self) -> dict[str, Any]:
        """Plain values suitable for display or JSON output."""

        def _plain(_inst: Any, _attr: Any, value: Any) -> Any:
            if isinstance(value, Path):
                return str(value)
            if isinstance(value, Enum):
                return value.name.lower()
            return value

        return asdict(self, value_serializer=_plain)


# 🎩📋🔚
