#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Self-update support for workflows distributed as release assets."""

from __future__ import annotations

from alfredkit.updater.releaser import GithubReleaser, Release, ReleaseAsset, Releaser, parse_version
from alfredkit.updater.updater import Updater, UpdaterState, sanitize_workflow_name

__all__ = [
    "GithubReleaser",
    "Release",
    "ReleaseAsset",
    "Releaser",
    "Updater",
    "UpdaterState",
    "parse_version",
    "sanitize_workflow_name",
]

# 🎩📋🔚
