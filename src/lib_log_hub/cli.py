"""Click command group exposing metadata and a live dispatch demo.

Purpose
-------
Give operators a quick way to inspect the installed package, list registered
backend kinds, and watch the console backend render every severity.

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info`` / ``kinds`` / ``demo`` subcommands.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import os
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from . import runtime
from .adapters import CONSOLE, ConsoleConfig
from .domain import Message, Severity

CLICK_CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
_SEVERITY_NAMES = [severity.name.lower() for severity in Severity]


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
    help=f"Load environment variables from the nearest .env (default: ${config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Root command storing global flags and printing the banner by default."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(runtime.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect installation details."""

    click.echo(runtime.summary_info(), nl=False)


@cli.command("kinds", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_kinds() -> None:
    """List the backend kinds available for activation."""

    for kind in runtime.registered_kinds():
        click.echo(kind)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--level",
    type=click.Choice(_SEVERITY_NAMES, case_sensitive=False),
    default="trace",
    show_default=True,
    help="Minimum severity of the console backend.",
)
@click.option("--buffer-size", type=click.IntRange(min=1), default=10, show_default=True, help="Console queue capacity.")
@click.option("--force-color/--no-force-color", default=False, help="Force ANSI colours even when not attached to a TTY.")
def cli_demo(level: str, buffer_size: int, force_color: bool) -> None:
    """Activate the console backend and emit one message per severity."""

    runtime.init(enable_console=False)
    try:
        runtime.activate(CONSOLE, ConsoleConfig(level=Severity.from_name(level), buffer_size=buffer_size, force_color=force_color))
        dispatcher = runtime.current_runtime().dispatcher
        delivered = 0
        for severity in Severity:
            # FATAL goes straight to the dispatcher; runtime.fatal() would exit the CLI.
            delivered += dispatcher.dispatch(Message(severity, f"{severity.label.lower()} message from the demo"))
    finally:
        runtime.shutdown()
    click.echo(f"emitted {len(Severity)} messages, {delivered} accepted at level {level.upper()}")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through ``lib_cli_exit_tools`` and return the exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return int(
            lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=__init__conf__.shell_command,
            )
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
