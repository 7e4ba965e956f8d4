#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command modules for the alfredkit CLI."""

from __future__ import annotations

from alfredkit.commands.env import env_command
from alfredkit.commands.render import render_command
from alfredkit.commands.update import update_group

__all__ = [
    "env_command",
    "render_command",
    "update_group",
]

# 🎩📋🔚
