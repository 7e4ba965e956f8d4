#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Environment inspection command for the alfredkit CLI."""

from __future__ import annotations

from typing import Any

import click
from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.serialization import json_dumps

from alfredkit.env import WorkflowEnvironment


@click.command("env")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def env_command(as_json: bool) -> None:
    """Show the Alfred workflow environment visible to scripts."""
    environment = WorkflowEnvironment.current()
    info = environment.as_dict()
    logger.debug("Env command started", in_workflow=environment.in_workflow)

    if as_json:
        pout(json_dumps(info, indent=2, default=str))
        return

    if not environment.in_workflow:
        pout("⚠️  Not running inside an Alfred workflow (alfred_workflow_uid is unset)\n")
    _display_environment(info)


def _display_environment(info: dict[str, Any]) -> None:
    """Display one aligned line per variable."""
    width = max(len(name) for name in info)
    for name, value in info.items():
        shown = "-" if value is None else value
        pout(f"{name:<{width}}  {shown}")


# 🎩📋🔚
