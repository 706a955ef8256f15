"""Click command line interface for ``bunyan-view``.

Purpose
-------
Thin shell around :class:`~bunyan_view.application.use_cases.format_record.RecordFormatter`:
read line-delimited JSON from files or stdin, render every record to stdout,
and leave exit-code mapping and traceback display to ``lib_cli_exit_tools``.

Contents
--------
* :func:`cli` - root group (``--traceback``, ``--use-dotenv``).
* :func:`cli_info` - metadata banner.
* :func:`cli_render` - render records with the chosen output mode.
* :func:`main` - entry point returning the process exit code.
"""

from __future__ import annotations

import os
import sys
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from . import summary_info
from .adapters.reader import iter_paths, read_records
from .adapters.stream import StreamWriter
from .domain.modes import OutputMode

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_OUTPUT_CHOICES = (*OutputMode.names(), "paul")


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (or set {config_module.DOTENV_ENV_VAR}=1).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags; prints the banner without a sub-command."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("paths", nargs=-1, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option(
    "-o",
    "--output",
    "output_mode",
    type=click.Choice(_OUTPUT_CHOICES, case_sensitive=False),
    default=None,
    help=f"Output mode (default: long, or ${config_module.OUTPUT_ENV_VAR}).",
)
@click.option("--color/--no-color", default=None, help="Force or suppress ANSI colour (default: auto-detect).")
@click.option(
    "-j",
    "--json-indent",
    type=click.IntRange(min=0),
    default=None,
    help="Indent width for json output.",
)
def cli_render(paths: tuple[str, ...], output_mode: str | None, color: bool | None, json_indent: int | None) -> None:
    """Render Bunyan log records from PATHS (or stdin) for humans."""

    stdout = sys.stdout
    settings = config_module.load_settings(
        color=color,
        output_mode=output_mode,
        json_indent=json_indent,
        stream=stdout,
    )
    formatter = settings.build_formatter()
    writer = StreamWriter(stdout)

    for chunk in formatter.transform(read_records(iter_paths(paths))):
        writer.write(chunk)
        writer.flush()
        if writer.closed:
            break


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences set by ``--traceback`` are restored afterwards so
    embedding callers and tests keep their own configuration.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "cli_info", "cli_render", "main"]
