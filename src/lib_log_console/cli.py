"""Click command group exposing metadata and a rendering demo.

Contents
--------
* :func:`cli` - root group; prints the metadata banner without a subcommand.
* ``info`` - metadata banner.
* ``demo`` - render sample events through a console sink so templates can be
  tried from the shell.
"""

from __future__ import annotations

import os
from datetime import datetime

import click

from . import __init__conf__
from .__init__conf__ import summary_info
from .adapters.json_formatter import JsonLinesFormatter
from .config import DOTENV_ENV_VAR, enable_dotenv, should_use_dotenv
from .domain.errors import ConfigurationError, TemplateCompileError
from .domain.events import LogEvent
from .domain.levels import LogLevel
from .sink import console_sink

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _demo_events(with_exception: bool) -> list[LogEvent]:
    now = datetime.now().astimezone()
    events = [
        LogEvent(now, LogLevel.INFORMATION, "Hello, {Name}!", {"Name": "Godot"}),
        LogEvent(now, LogLevel.WARNING, "Disk usage at {Percent}%", {"Percent": 91, "Volume": "/data"}),
    ]
    if with_exception:
        try:
            raise ValueError("demo failure")
        except ValueError as exc:
            events.append(LogEvent(now, LogLevel.ERROR, "Job {JobId} failed", {"JobId": 7}, exception=exc))
    return events


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load LOG_* variables from the nearest .env (default from {DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool) -> None:
    """Template-driven console sink utilities."""
    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if should_use_dotenv(explicit=explicit, env_value=os.getenv(DOTENV_ENV_VAR)):
        enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""
    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--template", "-t", default=None, help="Output template applied to every sample event.")
@click.option("--json", "as_json", is_flag=True, help="Render events as JSON lines instead of a template.")
@click.option("--with-exception", is_flag=True, help="Add an error event carrying a traceback.")
@click.option("--no-color", is_flag=True, help="Disable colour output.")
def cli_demo(template: str | None, as_json: bool, with_exception: bool, no_color: bool) -> None:
    """Render sample events through a console sink."""
    if as_json and template is not None:
        raise click.UsageError("--template and --json are mutually exclusive")
    formatter = JsonLinesFormatter() if as_json else None
    try:
        sink = console_sink(template, formatter=formatter, no_color=no_color)
    except (ConfigurationError, TemplateCompileError) as exc:
        raise click.BadParameter(str(exc), param_hint="--template") from exc
    for event in _demo_events(with_exception):
        sink.emit(event)


def main(argv: list[str] | None = None) -> int:
    """Run :func:`cli` and return its exit code instead of exiting."""
    try:
        cli.main(args=argv, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return 0


__all__ = ["cli", "main"]
