"""Typer CLI entrypoint for settings backup export/import."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from prefbackup.backup import (
    STDIO_MARKER,
    BackupError,
    SettingsBackupService,
    generate_backup_file_name,
)
from prefbackup.config import BackupConfig, BackupConfigError, load_backup_config
from prefbackup.environment import DistributionVersionLookup
from prefbackup.store import JsonFilePreferenceStore

app = typer.Typer(help="Export and restore preference store backups.")
_CONSOLE = Console()
_ERR_CONSOLE = Console(stderr=True)
_LOGGING_CONFIGURED = False
_DEFAULT_CONFIG_FILE = Path(".prefs") / "config.yaml"

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        file_okay=True,
        dir_okay=False,
        help="Path to backup config YAML/JSON file.",
    ),
]


def _configure_logging() -> None:
    """Configure Rich-backed logging once for CLI commands."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[
            RichHandler(console=_ERR_CONSOLE, show_path=False, rich_tracebacks=True)
        ],
    )
    _LOGGING_CONFIGURED = True


def _load_config(config_file: Path | None) -> BackupConfig:
    """Load config or exit with a rendered error.

    Args:
        config_file: Optional config path override.

    Returns:
        Loaded config.

    Raises:
        Exit: When config cannot be decoded or validated.
    """
    try:
        return load_backup_config(config_file or _DEFAULT_CONFIG_FILE)
    except BackupConfigError as exc:
        _render_error(_CONSOLE, "config_invalid", str(exc))
        raise typer.Exit(code=1) from exc


def _build_service(config: BackupConfig) -> SettingsBackupService:
    """Wire backup service against the configured file store.

    Args:
        config: Loaded backup config.

    Returns:
        Backup service for the configured store.
    """
    store = JsonFilePreferenceStore(
        root_dir=Path(config.store.directory),
        name=config.store.name,
    )
    return SettingsBackupService(
        store=store,
        version_lookup=DistributionVersionLookup(config.app.distribution),
    )


def _render_error(console: Console, code: str, message: str) -> None:
    """Render one failure panel.

    Args:
        console: Target console.
        code: Stable error code.
        message: Error message.
    """
    console.print(
        Panel(
            escape(message),
            title=escape(f"Error [{code}]"),
            border_style="bold red",
            expand=True,
        )
    )


def _fail(console: Console, error: BackupError | None) -> typer.Exit:
    """Render backup failure and build exit signal.

    Args:
        console: Target console.
        error: Failure from a backup result.

    Returns:
        Exit with status code 1.
    """
    if error is not None:
        _render_error(console, error.code.value, str(error))
    return typer.Exit(code=1)


@app.command("export")
def export_command(
    destination: Annotated[
        str | None,
        typer.Argument(
            help="Backup file path, or '-' for stdout. Defaults to a generated "
            "name in the configured backup directory."
        ),
    ] = None,
    config_file: ConfigOption = None,
) -> None:
    """Export the live preference store to a backup file.

    Args:
        destination: Optional destination override.
        config_file: Optional config file path override.

    Raises:
        Exit: With status 1 when the export fails.
    """
    _configure_logging()
    config = _load_config(config_file)
    target = destination or str(
        Path(config.backup.directory) / generate_backup_file_name()
    )
    console = _ERR_CONSOLE if target == STDIO_MARKER else _CONSOLE
    result = _build_service(config).export_to(target)
    if not result.ok:
        raise _fail(console, result.error)
    console.print(
        Panel(
            escape(f"Store: {config.store.name}\nBackup: {target}"),
            title="Exported",
            border_style="green",
            expand=True,
        )
    )


@app.command("import")
def import_command(
    source: Annotated[
        str,
        typer.Argument(help="Backup file path, or '-' for stdin."),
    ],
    config_file: ConfigOption = None,
) -> None:
    """Restore the live preference store from a backup file.

    Args:
        source: Backup source.
        config_file: Optional config file path override.

    Raises:
        Exit: With status 1 when the import fails.
    """
    _configure_logging()
    config = _load_config(config_file)
    result = _build_service(config).import_from(source)
    if not result.ok:
        raise _fail(_CONSOLE, result.error)
    _CONSOLE.print(
        Panel(
            escape(
                f"Store: {config.store.name}\n"
                f"Restored approximately {result.unwrap()} preferences."
            ),
            title="Imported",
            border_style="green",
            expand=True,
        )
    )


@app.command("name")
def name_command() -> None:
    """Print a generated backup file name."""
    typer.echo(generate_backup_file_name())


def main() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
