# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring the analyse and resolve commands."""

from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Annotated, Any

import typer

from ..config import AnalysisConfig, ConfigError
from ..config_loader import ConfigLoader
from ..core.logging import enable_debug_logging
from ..filesystem.resolver import TargetKind, resolve_target, target_kind
from ..invocation import Invocation, build_invocation
from ..orchestration import AnalysisOrchestrator, OutcomeKind
from .host import ConsoleHost, FileDocument
from .shared import CLIError, CLILogger, build_cli_logger

app = typer.Typer(
    name="stanwatch",
    help="Run PHPStan against a file or folder and report ranged diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)


class ExitCode(IntEnum):
    """Process exit statuses of the ``analyse`` command."""

    PASSED = 0
    ERRORS = 1
    FAILED = 2


TARGET_ARGUMENT = Annotated[
    Path,
    typer.Argument(exists=True, resolve_path=True, help="File or directory to analyse."),
]
ROOT_OPTION = Annotated[
    Path | None,
    typer.Option("--root", "-r", help="Workspace root (defaults to the current directory)."),
]
LEVEL_OPTION = Annotated[
    str | None,
    typer.Option("--level", "-l", help="Rule level, 'max', or 'config' to use the configuration file."),
]
MEMORY_LIMIT_OPTION = Annotated[
    str | None,
    typer.Option("--memory-limit", help="Memory limit passed to PHPStan, e.g. 512M."),
]
CONFIGURATION_OPTION = Annotated[
    Path | None,
    typer.Option("--configuration", "-c", help="Explicit phpstan.neon; disables the upward search."),
]
AUTOLOAD_OPTION = Annotated[
    Path | None,
    typer.Option("--autoload-file", "-a", help="Explicit bootstrap file; disables the upward search."),
]
PROGRESS_OPTION = Annotated[
    bool,
    typer.Option("--progress", help="Show PHPStan's progress bar instead of hiding it."),
]
TIMEOUT_OPTION = Annotated[
    float | None,
    typer.Option("--timeout", help="Kill PHPStan after this many seconds (0 disables)."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Print the resolved command without running it."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji output."),
]
COLOR_OPTION = Annotated[
    bool,
    typer.Option("--color/--no-color", help="Toggle colour output."),
]
DEBUG_OPTION = Annotated[
    bool,
    typer.Option("--debug", help="Log resolver and process details to stderr."),
]


def _load_config(root: Path, overrides: dict[str, Any]) -> AnalysisConfig:
    try:
        return ConfigLoader.for_root(root).load(overrides)
    except ConfigError as exc:
        raise CLIError(f"Invalid configuration: {exc}", exit_code=ExitCode.FAILED) from exc


def _describe_invocation(invocation: Invocation, logger: CLILogger) -> None:
    resolution = invocation.resolution
    logger.echo(f"cwd: {resolution.cwd or '-'}")
    logger.echo(f"configuration: {resolution.configuration or '-'}")
    logger.echo(f"autoload-file: {resolution.autoload_file or '-'}")
    logger.echo("command: " + " ".join(invocation.argv))


def _run_analysis(target: Path, root: Path, config: AnalysisConfig, logger: CLILogger) -> ExitCode:
    document = FileDocument(target) if target_kind(target) is TargetKind.FILE else None
    host = ConsoleHost(logger, roots=[root], document=document)
    logger.info(f"Analysing {target}")
    with AnalysisOrchestrator(host, config) as orchestrator:
        if not orchestrator.analyse(target):
            raise CLIError(f"Nothing to analyse at {target}", exit_code=ExitCode.FAILED)
        orchestrator.wait()
        outcome = orchestrator.last_outcome

    if len(host.diagnostics):
        logger.section("Diagnostics")
    for diagnostic in host.diagnostics:
        logger.echo(f"{diagnostic.location()} {diagnostic.message}")
    status = host.status or ""
    kind = outcome.kind if outcome is not None else OutcomeKind.UNKNOWN
    if kind is OutcomeKind.SUCCEEDED:
        logger.ok(status)
        return ExitCode.PASSED
    if kind is OutcomeKind.ERROR_REPORTED:
        logger.warn(status)
        return ExitCode.ERRORS
    logger.fail(status)
    return ExitCode.FAILED


@app.command("analyse")
def analyse_command(
    target: TARGET_ARGUMENT,
    root: ROOT_OPTION = None,
    level: LEVEL_OPTION = None,
    memory_limit: MEMORY_LIMIT_OPTION = None,
    configuration: CONFIGURATION_OPTION = None,
    autoload_file: AUTOLOAD_OPTION = None,
    progress: PROGRESS_OPTION = False,
    timeout: TIMEOUT_OPTION = None,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
    debug: DEBUG_OPTION = False,
) -> None:
    """Analyse a file or folder once and print its diagnostics.

    Exits 0 when PHPStan passes, 1 when it reports errors and 2 when it fails
    or its output cannot be interpreted.
    """

    logger = build_cli_logger(emoji=emoji, debug=debug, no_color=not color)
    if debug:
        enable_debug_logging()
    workspace_root = (root or Path.cwd()).resolve()
    overrides: dict[str, Any] = {
        "level": level,
        "memory_limit": memory_limit,
        "configuration": configuration.resolve() if configuration is not None else None,
        "autoload_file": autoload_file.resolve() if autoload_file is not None else None,
        "no_progress": False if progress else None,
        "timeout": timeout,
    }
    try:
        config = _load_config(workspace_root, overrides)
        if dry_run:
            _describe_invocation(build_invocation(config, target, [workspace_root]), logger)
            return
        exit_code = _run_analysis(target, workspace_root, config, logger)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=int(exit_code))


@app.command("resolve")
def resolve_command(
    target: TARGET_ARGUMENT,
    root: ROOT_OPTION = None,
    emoji: EMOJI_OPTION = True,
    color: COLOR_OPTION = True,
) -> None:
    """Show which configuration, autoload file and working directory apply to a target."""

    logger = build_cli_logger(emoji=emoji, no_color=not color)
    workspace_root = (root or Path.cwd()).resolve()
    try:
        config = _load_config(workspace_root, {})
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    resolution = resolve_target(config, target, [workspace_root])
    logger.echo(f"target: {target}")
    logger.echo(f"cwd: {resolution.cwd or '-'}")
    logger.echo(f"configuration: {resolution.configuration or '-'}")
    logger.echo(f"autoload-file: {resolution.autoload_file or '-'}")


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["ExitCode", "app", "main"]
