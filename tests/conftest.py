#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures and helpers for alfredkit tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import provide.testkit  # noqa: F401 - Installs setproctitle blocker early
from provide.testkit.logger import reset_foundation_setup_for_testing
import pytest
import semver

from alfredkit.items import ItemBuilder, ItemType, Modifier
from alfredkit.updater import Releaser

WORKFLOW_UID = "workflow.B0AC54EC-601C"
WORKFLOW_NAME = "YouForgotTo/フ:NameYourOwnWork}flowッ"
WORKFLOW_VERSION = "0.10.5"

ALFRED_VARIABLES = (
    "alfred_preferences",
    "alfred_preferences_localhash",
    "alfred_theme",
    "alfred_theme_background",
    "alfred_theme_selection_background",
    "alfred_theme_subtext",
    "alfred_version",
    "alfred_version_build",
    "alfred_workflow_bundleid",
    "alfred_workflow_cache",
    "alfred_workflow_data",
    "alfred_workflow_name",
    "alfred_workflow_uid",
    "alfred_workflow_version",
    "alfred_debug",
)


class FakeReleaser(Releaser):
    """Releaser answering from memory and counting remote lookups."""

    def __init__(self, version: str = "1.0.0", url: str = "https://example.com/wf.alfredworkflow") -> None:
        self.version = semver.Version.parse(version)
        self.url = url
        self.calls = 0
        self.error: Exception | None = None

    def latest_version(self) -> semver.Version:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.version

    def downloadable_url(self) -> str:
        return self.url


@pytest.fixture(autouse=True)
def reset_foundation_logging() -> Iterator[None]:
    """Reset foundation logging state before each test to avoid conflicts."""
    reset_foundation_setup_for_testing()
    yield
    reset_foundation_setup_for_testing()


@pytest.fixture(autouse=True)
def clean_alfred_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure no Alfred variables leak in from the developer's shell."""
    for name in ALFRED_VARIABLES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workflow_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Mimic the variables Alfred sets for a workflow with a bundle id."""
    data_dir = tmp_path / "data"
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("alfred_workflow_data", str(data_dir))
    monkeypatch.setenv("alfred_workflow_cache", str(cache_dir))
    monkeypatch.setenv("alfred_workflow_uid", WORKFLOW_UID)
    monkeypatch.setenv("alfred_workflow_name", WORKFLOW_NAME)
    monkeypatch.setenv("alfred_workflow_bundleid", "MY_BUNDLE_ID")
    monkeypatch.setenv("alfred_workflow_version", WORKFLOW_VERSION)
    return tmp_path


@pytest.fixture
def fake_releaser() -> FakeReleaser:
    return FakeReleaser()


@pytest.fixture
def full_item_builder() -> ItemBuilder:
    """Builder with every field that both output formats can carry."""
    return (
        ItemBuilder("Desktop")
        .subtitle("~/Desktop")
        .uid("desktop")
        .arg("~/Desktop")
        .type(ItemType.FILE)
        .autocomplete("Desk")
        .icon_file("~/Desktop")
        .text_copy("copy me")
        .text_large_type("LARGE")
        .quicklook_url("file:///Users/me/Desktop")
        .subtitle_mod(Modifier.CMD, "Reveal in Finder")
        .arg_mod(Modifier.CMD, "reveal:~/Desktop")
        .valid_mod(Modifier.ALT, False)
    )


# 🎩📋🔚
