"""
Project commands for the tsi-scaffold CLI.

- create: Generate a new chat application from the bundled templates
- env: Write a single backend or frontend .env file
- copy: Copy files matching glob patterns into a directory
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

import typer
from pydantic import ValidationError

from tsi_scaffold.cli.utils import is_directory_empty
from tsi_scaffold.cli_ui import (
    console,
    create_panel,
    display_files_table,
    print_error,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from tsi_scaffold.core.config import ScaffoldConfig, load_config
from tsi_scaffold.core.copy import CopyOptions, copy_sync
from tsi_scaffold.core.env_vars import (
    BackendEnvOptions,
    FrontendEnvOptions,
    create_backend_env_file,
    create_frontend_env_file,
)
from tsi_scaffold.core.errors import ScaffoldError
from tsi_scaffold.core.scaffold import ScaffoldOptions, install_template
from tsi_scaffold.core.types import TemplateFramework, TemplateVectorDB


class EnvTarget(StrEnum):
    """Which .env file the env command writes."""

    BACKEND = "backend"
    FRONTEND = "frontend"


def _fail(message: str) -> typer.Exit:
    print_error(message)
    return typer.Exit(code=1)


def _load(config: Path | None) -> ScaffoldConfig:
    try:
        return load_config(config)
    except ScaffoldError as e:
        raise _fail(str(e)) from e


def create_command(
    path: str = typer.Argument(..., help="Directory to create the project in"),
    name: str | None = typer.Option(
        None, "--name", "-n", help="Application name (defaults to directory name)"
    ),
    framework: TemplateFramework | None = typer.Option(
        None, "--framework", "-f", help="Backend framework"
    ),
    vector_db: TemplateVectorDB | None = typer.Option(
        None, "--vector-db", help="Vector database for the generated backend"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="LLM model name"),
    embedding_model: str | None = typer.Option(
        None, "--embedding-model", help="Embedding model name"
    ),
    api_key: str | None = typer.Option(None, "--api-key", help="T-Systems API key"),
    llama_cloud_key: str | None = typer.Option(
        None, "--llama-cloud-key", help="Llama Cloud API key"
    ),
    port: int | None = typer.Option(None, "--port", "-p", help="Backend port"),
    frontend: bool | None = typer.Option(
        None, "--frontend/--no-frontend", help="Generate a separate Next.js frontend"
    ),
    api_path: str | None = typer.Option(
        None, "--api-path", help="Chat endpoint the frontend talks to"
    ),
    templates: Path | None = typer.Option(  # noqa: B008
        None, "--templates", help="Templates directory (defaults to bundled templates)"
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to tsi-scaffold.toml"
    ),
    force: bool = typer.Option(
        False, "--force", help="Create even if the directory is not empty"
    ),
) -> None:
    """
    Create a new chat application.

    Copies the framework template and writes the .env file(s). Existing
    .env files are overwritten.

    Examples:
        tsi-scaffold create ./my-app
        tsi-scaffold create ./my-app -f fastapi --vector-db pg --frontend
        tsi-scaffold create ./my-app -f nextjs -m Llama-3.1-70B-Instruct
    """
    cfg = _load(config)
    target = Path(path).resolve()

    if not force and not is_directory_empty(target):
        raise _fail(f"Directory is not empty: {target} (use --force to continue)")

    try:
        opts = ScaffoldOptions(
            root=target,
            app_name=name,
            framework=framework or cfg.app.framework,
            vector_db=vector_db or cfg.vector_db,
            model=model or cfg.llm.model,
            embedding_model=embedding_model or cfg.llm.embedding_model,
            openai_key=api_key or cfg.llm.api_key,
            llama_cloud_key=llama_cloud_key or cfg.llm.llama_cloud_key,
            port=port if port is not None else cfg.app.port,
            frontend=frontend if frontend is not None else cfg.app.frontend,
            custom_api_path=api_path or cfg.app.api_path,
            templates_dir=templates or cfg.app.templates_dir,
        )
    except ValidationError as e:
        raise _fail(f"Invalid options: {e}") from e

    print_header("tsi-scaffold", f"Creating {opts.framework.value} app")
    if opts.frontend and opts.framework == TemplateFramework.NEXTJS:
        print_warning("Next.js already includes a frontend; --frontend is ignored")
    if not opts.openai_key:
        print_info("No API key given; set TSI_API_KEY in .env before starting the app")

    try:
        result = install_template(opts, progress_callback=print_step)
    except (ScaffoldError, OSError) as e:
        raise _fail(f"Failed to create project: {e}") from e

    console.print()
    display_files_table(result.files_created, result.root, title="Created files")
    print_success(f"Project created at: {result.root}")

    steps = [f"cd {path}"]
    if result.frontend_dir is not None:
        steps.append("# backend/ and frontend/ each have their own .env")
    steps.append("# Check the settings in .env, at least TSI_API_KEY")
    console.print(create_panel("\n".join(steps), title="Next steps"))


def env_command(
    root: Path = typer.Argument(  # noqa: B008
        ..., help="Directory to write the .env file into"
    ),
    target: EnvTarget = typer.Option(
        EnvTarget.BACKEND, "--target", "-t", help="Which .env file to write"
    ),
    framework: TemplateFramework | None = typer.Option(
        None, "--framework", "-f", help="Backend framework"
    ),
    vector_db: TemplateVectorDB | None = typer.Option(
        None, "--vector-db", help="Vector database for the backend"
    ),
    model: str | None = typer.Option(None, "--model", "-m", help="LLM model name"),
    embedding_model: str | None = typer.Option(
        None, "--embedding-model", help="Embedding model name"
    ),
    api_key: str | None = typer.Option(None, "--api-key", help="T-Systems API key"),
    llama_cloud_key: str | None = typer.Option(
        None, "--llama-cloud-key", help="Llama Cloud API key"
    ),
    port: int | None = typer.Option(None, "--port", "-p", help="Backend port"),
    api_path: str | None = typer.Option(
        None, "--api-path", help="Chat endpoint the frontend talks to"
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None, "--config", "-c", help="Path to tsi-scaffold.toml"
    ),
) -> None:
    """
    Write a .env file for an existing project.

    The file is overwritten without merging.

    Examples:
        tsi-scaffold env ./backend -f fastapi --vector-db milvus
        tsi-scaffold env ./frontend --target frontend --api-path http://api:8000/api/chat
    """
    cfg = _load(config)

    try:
        if target == EnvTarget.FRONTEND:
            path = create_frontend_env_file(
                root,
                FrontendEnvOptions(
                    custom_api_path=api_path or cfg.app.api_path,
                    model=model or cfg.llm.model,
                ),
            )
        else:
            path = create_backend_env_file(
                root,
                BackendEnvOptions(
                    openai_key=api_key or cfg.llm.api_key,
                    llama_cloud_key=llama_cloud_key or cfg.llm.llama_cloud_key,
                    vector_db=vector_db or cfg.vector_db,
                    model=model or cfg.llm.model,
                    embedding_model=embedding_model or cfg.llm.embedding_model,
                    framework=framework or cfg.app.framework,
                    port=port if port is not None else cfg.app.port,
                ),
            )
    except ValidationError as e:
        raise _fail(f"Invalid options: {e}") from e
    except OSError as e:
        raise _fail(f"Failed to write .env: {e}") from e

    print_success(f"Created '{path.name}' file. Please check the settings.")


def copy_command(
    sources: list[str] = typer.Argument(..., help="Glob patterns to copy (prefix ! to exclude)"),
    dest: str = typer.Option(..., "--dest", "-d", help="Destination directory"),
    cwd: Path | None = typer.Option(  # noqa: B008
        None, "--cwd", help="Directory patterns and destination are relative to"
    ),
    flatten: bool = typer.Option(
        False, "--flatten", help="Copy all files directly into the destination"
    ),
) -> None:
    """
    Copy files matching glob patterns.

    Examples:
        tsi-scaffold copy "**/*.tsx" --cwd templates/components --dest ../app/components
        tsi-scaffold copy "**" "!**/*.md" --dest out --flatten
    """
    try:
        copied = copy_sync(sources, dest, CopyOptions(cwd=cwd, parents=not flatten))
    except (ScaffoldError, OSError) as e:
        raise _fail(f"Copy failed: {e}") from e

    print_success(f"Copied {len(copied)} file(s)")
