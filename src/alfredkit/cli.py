#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""alfredkit command-line interface entrypoint."""

from __future__ import annotations

from attrs import evolve
import click
from provide.foundation import CLIContext, TelemetryConfig, get_hub
from provide.foundation.utils import get_version

from alfredkit.commands.env import env_command
from alfredkit.commands.render import render_command
from alfredkit.commands.update import update_group
from alfredkit.config import AlfredKitRuntimeConfig

__version__ = get_version("alfredkit", caller_file=__file__)


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(
    __version__,
    "-V",
    "--version",
    prog_name="alfredkit",
    message="%(prog)s version %(version)s",
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Alfred script filter helpers.

    Configure logging via environment variables:
    - ALFREDKIT_LOG_LEVEL: Set log level for alfredkit (trace, debug, info, warning, error)
    - ALFREDKIT_SETUP_LOG_LEVEL: Control Foundation's initialization logs
    - PROVIDE_LOG_FILE: Write logs to file

    Logs go to stderr, so they never mix with script filter output on stdout.
    """
    ctx.ensure_object(dict)

    runtime_config = AlfredKitRuntimeConfig.from_env()
    cli_ctx = CLIContext.from_env()
    base_telemetry = TelemetryConfig.from_env()

    telemetry_config = evolve(
        base_telemetry,
        service_name="alfredkit",
        logging=evolve(
            base_telemetry.logging,
            default_level=runtime_config.log_level,  # type: ignore[arg-type]
        ),
    )

    hub = get_hub()
    hub.initialize_foundation(telemetry_config)

    ctx.obj["cli_context"] = cli_ctx
    ctx.obj["runtime_config"] = runtime_config


cli.add_command(render_command, name="render")
cli.add_command(env_command, name="env")
cli.add_command(update_group, name="update")

main = cli

if __name__ == "__main__":
    cli()

# 🎩📋🔚
