#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Update commands for the alfredkit CLI."""

from __future__ import annotations

import sys

import click
from provide.foundation import logger
from provide.foundation.console import perr, pout

from alfredkit.exceptions import AlfredKitError
from alfredkit.items import ItemBuilder
from alfredkit.output import json_output
from alfredkit.updater import Updater


@click.group("update")
def update_group() -> None:
    """Check for and download new releases of the running workflow."""
    pass


@update_group.command("check")
@click.argument("repo")
@click.pass_context
def check_command(ctx: click.Context, repo: str) -> None:
    """Emit a script filter item telling whether REPO (owner/name) has a newer release."""
    logger.debug("Update check started", repo=repo)
    config = (ctx.obj or {}).get("runtime_config")

    try:
        updater = Updater.gh(repo, config=config)
        ready = updater.update_ready()
    except AlfredKitError as e:
        logger.error("Update check failed", error=str(e), repo=repo)
        perr(f"❌ Update check failed: {e}")
        raise click.Abort() from e

    if ready:
        item = (
            ItemBuilder("A new version of this workflow is available")
            .subtitle("Press enter to download and install it")
            .arg(repo)
            .variable("update_ready", "yes")
            .into_item()
        )
    else:
        item = (
            ItemBuilder("This workflow is up to date")
            .subtitle(f"Version {updater.current_version}")
            .valid(False)
            .into_item()
        )
    stream = sys.stdout
    json_output.write_items(stream, [item])
    stream.write("\n")


@update_group.command("download")
@click.argument("repo")
@click.pass_context
def download_command(ctx: click.Context, repo: str) -> None:
    """Download the latest release of REPO and print the file path.

    Connect the output to an Open File action so Alfred installs the release.
    """
    logger.debug("Update download started", repo=repo)
    config = (ctx.obj or {}).get("runtime_config")

    try:
        path = Updater.gh(repo, config=config).download_latest()
    except AlfredKitError as e:
        logger.error("Update download failed", error=str(e), repo=repo)
        perr(f"❌ Download failed: {e}")
        raise click.Abort() from e

    logger.info("Downloaded workflow release", repo=repo, path=str(path))
    pout(str(path))


# 🎩📋🔚
