#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Render command for the alfredkit CLI."""

from __future__ import annotations

import sys
from typing import IO

import click
from provide.foundation import logger
from provide.foundation.console import perr

from alfredkit.exceptions import AlfredKitError
from alfredkit.output import OutputFormat, json_output, xml_output


@click.command("render")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([fmt.value for fmt in OutputFormat]),
    default=OutputFormat.JSON.value,
    show_default=True,
    help="Script filter format to emit.",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with this indent.",
)
def render_command(source: IO[str], output_format: str, indent: int | None) -> None:
    """Re-emit a JSON script filter document read from SOURCE (default stdin).

    With --format xml the items are written in the legacy Alfred 2 format;
    document variables, item variables and per-modifier icons are dropped.
    """
    source_name = getattr(source, "name", "-")
    logger.debug("Render command started", source=source_name, format=output_format)

    try:
        document = json_output.read_document(source.read())
    except AlfredKitError as e:
        logger.error("Render failed", error=str(e), source=source_name)
        perr(f"❌ Cannot read script filter document: {e}")
        raise click.Abort() from e

    stream = sys.stdout
    if OutputFormat(output_format) is OutputFormat.XML:
        xml_output.write_items(stream, document.built_items)
    else:
        document.write(stream, indent=indent)
        stream.write("\n")


# 🎩📋🔚
