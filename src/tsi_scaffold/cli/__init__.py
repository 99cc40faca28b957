"""
tsi-scaffold CLI package.

- project.py: create, env and copy commands
- utils.py: version and logging helpers
"""

import typer

from tsi_scaffold.cli.project import copy_command, create_command, env_command
from tsi_scaffold.cli.utils import configure_logging, version_callback

app = typer.Typer(
    help="""tsi-scaffold – chat app generator for the T-Systems LLM hub

Commands:
  • create: generate a new project from a template
  • env: (re)write a backend or frontend .env file
  • copy: copy template files matching glob patterns
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """tsi-scaffold main callback for global options."""
    configure_logging(verbose)


app.command(name="create")(create_command)
app.command(name="env")(env_command)
app.command(name="copy")(copy_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main"]
