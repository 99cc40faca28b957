"""
tsi-scaffold CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import os
import platform
from pathlib import Path

import typer

from tsi_scaffold._version import get_version

LOG_LEVEL_ENV_VAR = "TSI_SCAFFOLD_LOG_LEVEL"


def configure_logging(verbose: bool = False) -> None:
    """
    Configure root logging for a CLI run.

    Core modules log progress at INFO; the CLI already echoes progress, so
    the default level is WARNING unless --verbose or TSI_SCAFFOLD_LOG_LEVEL
    says otherwise.
    """
    if verbose:
        level = logging.DEBUG
    else:
        level_name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        import tsi_scaffold

        install_location = Path(tsi_scaffold.__file__).parent

        install_method = "unknown"
        try:
            from importlib.metadata import distribution

            dist = distribution("tsi-scaffold")
            if dist.read_text("direct_url.json"):
                install_method = "pip (editable)"
            else:
                install_method = "pip"
        except Exception:
            if (install_location.parent.parent / "pyproject.toml").exists():
                install_method = "development"

        typer.echo(f"tsi-scaffold {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:   {python_impl} {python_version}")
        typer.echo(f"  Platform: {platform.system()} {platform.machine()}")
        typer.echo(f"  Location: {install_location}")
        typer.echo(f"  Install:  {install_method}")

        raise typer.Exit()


def is_directory_empty(directory: Path) -> bool:
    """
    Check if directory is empty (or has only files we commonly allow).

    A directory is considered "empty" for create purposes if it contains
    nothing, or only .git and common housekeeping files.
    """
    if not directory.exists():
        return True

    allowed_files = {".git", ".gitignore", "README.md", "LICENSE", ".DS_Store", ".idea"}
    actual_files = {item.name for item in directory.iterdir()}
    return actual_files.issubset(allowed_files)
