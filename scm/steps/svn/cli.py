# Copyright (C) 2015-2026  The Software Heritage developers
# See the AUTHORS file at the top-level directory of this distribution
# License: GNU General Public License version 3, or any later version
# See top-level LICENSE file for more information

import json
import logging
import os

import click

from .config import load_config
from .exception import SvnInfoQueryFailure, WorkspaceConfinementError
from .registry import get_step, load_steps, register_step, registered_steps, run_step
from .step import DESCRIPTOR, Workspace

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _load_steps():
    load_steps()
    # steps of this distribution are available even when it is not installed
    try:
        get_step(DESCRIPTOR.function_name)
    except LookupError:
        register_step(DESCRIPTOR)


@click.group()
@click.option(
    "--config-file",
    "-C",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file (YAML).",
)
@click.option(
    "--log-level",
    "-l",
    default="INFO",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (default to INFO)",
)
@click.pass_context
def cli(ctx, config_file, log_level):
    """Pipeline steps querying subversion working copies"""
    logging.basicConfig(level=log_level.upper())
    ctx.ensure_object(dict)
    ctx.obj["config"] = load_config(config_file)
    _load_steps()


@cli.command("run", help="Run the svninfo step on a workspace path")
@click.argument("path")
@click.option(
    "--workspace",
    "-w",
    default=None,
    help="Workspace root directory (default to the current directory).",
)
@click.option(
    "--queue",
    "-q",
    default=None,
    help="Worker queue of the build agent owning the workspace.",
)
@click.option(
    "--timeout", default=None, type=float, help="Seconds to wait for the worker."
)
@click.option(
    "--format",
    "output_format",
    default="properties",
    type=click.Choice(["properties", "json"]),
    help="Output format",
)
@click.pass_context
def run(ctx, path, workspace, queue, timeout, output_format):
    config = ctx.obj["config"]
    if timeout is None and queue is not None:
        timeout = config["remote"]["timeout"]
    workspace = Workspace(
        root=workspace or os.getcwd(),
        queue=queue,
        timeout=timeout,
        confined=config["confine_to_workspace"],
    )
    try:
        result = run_step(
            DESCRIPTOR.function_name, {"path": path}, {Workspace: workspace}
        )
    except (SvnInfoQueryFailure, WorkspaceConfinementError) as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(dict(result), indent=2))
    else:
        for key, value in result.items():
            click.echo(f"{key}={value}")


@cli.command("list", help="List the available steps")
def list_steps():
    for descriptor in registered_steps():
        click.echo(f"{descriptor.function_name}: {descriptor.display_name}")


def main():
    return cli()


if __name__ == "__main__":
    main()
