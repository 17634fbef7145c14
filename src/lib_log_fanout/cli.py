"""Click command group for smoke-testing the logging facade.

Purpose
-------
Offer ``lib_log_fanout info`` (metadata banner) and ``lib_log_fanout logdemo``
(one call per severity through a console and, optionally, a file transport)
so operators can check filtering and formats from a shell.

Contents
--------
* :func:`cli` - the Click group with ``--version`` and ``--use-dotenv``.
* :func:`info` / :func:`logdemo` - subcommands.
* :func:`main` - test-friendly runner returning an exit code.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

import click

from . import __init__conf__
from . import config as log_config
from .adapters import ConsoleTransport, FileFormat, FileTransport, FileTransportOptions
from .application.ports import TransportPort
from .domain import Severity
from .log import Log

_SEVERITY_CHOICES = [item.value for item in Severity]
_FORMAT_CHOICES = [item.value for item in FileFormat]


@click.group(invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--version", "-V", is_flag=True, help="Print the installed version and exit.")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load a nearby .env before running (defaults to ${log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, use_dotenv: bool) -> None:
    """Emit the metadata banner or dispatch to a subcommand."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if log_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(log_config.DOTENV_ENV_VAR)):
        log_config.enable_dotenv()

    if version:
        click.echo(__init__conf__.version)
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command()
def info() -> None:
    """Print the metadata banner."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command()
@click.option(
    "--minimum-severity",
    type=click.Choice(_SEVERITY_CHOICES, case_sensitive=False),
    default=None,
    help="Lowest severity printed (env: LOG_MINIMUM_SEVERITY, default INFO).",
)
@click.option(
    "--severity",
    "severities",
    multiple=True,
    type=click.Choice(_SEVERITY_CHOICES, case_sensitive=False),
    help="Explicit severity to accept; repeatable. Overrides --minimum-severity.",
)
@click.option("--file", "file_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also append to this file.")
@click.option(
    "--file-format",
    type=click.Choice(_FORMAT_CHOICES, case_sensitive=False),
    default=None,
    help="Line format for --file (env: LOG_FILE_FORMAT, default txt).",
)
@click.option("--scope", default="default", show_default=True, help="Scope label attached to each call.")
@click.option("--no-color", is_flag=True, default=False, help="Disable console styling.")
def logdemo(
    minimum_severity: str | None,
    severities: tuple[str, ...],
    file_path: Path | None,
    file_format: str | None,
    scope: str,
    no_color: bool,
) -> None:
    """Dispatch one call per severity through the configured transports."""

    minimum = Severity.from_name(minimum_severity) if minimum_severity else log_config.severity_from_env()
    explicit = frozenset(Severity.from_name(item) for item in severities) if severities else log_config.severities_from_env()
    no_color = no_color or log_config.env_flag("LOG_NO_COLOR", False)

    transports: list[TransportPort] = [ConsoleTransport(minimum_severity=minimum, severities=explicit, no_color=no_color)]
    file_transport: FileTransport | None = None
    if file_path is not None or os.getenv(log_config.FILE_PATH_ENV_VAR):
        options = log_config.file_options_from_env(FileTransportOptions())
        overrides: dict[str, object] = {"minimum_severity": minimum, "severities": explicit}
        if file_path is not None:
            overrides["file_path"] = file_path
        if file_format is not None:
            overrides["file_format"] = FileFormat.from_name(file_format)
        file_transport = FileTransport(options.merged(**overrides))
        transports.append(file_transport)

    log = Log(transports)
    for index, severity in enumerate(Severity):
        log.forward(severity, scope, (f"{severity.value.lower()} message", {"step": index + 1}))

    if file_transport is not None:
        file_transport.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group in a test-friendly manner.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0.1...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.exceptions.Exit as exit_request:
        return exit_request.exit_code
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return 0


__all__ = ["cli", "info", "logdemo", "main"]
