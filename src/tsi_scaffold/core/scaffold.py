"""
Project scaffolding from bundled templates.

Copies the template for the chosen framework into the target directory and
writes the matching ``.env`` files. When a separate frontend is requested
for a non-Next.js backend, the layout becomes::

    <root>/backend    # framework template + backend .env
    <root>/frontend   # Next.js template + frontend .env
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, Field

from .config import DEFAULT_TEMPLATES_DIR
from .copy import CopyOptions, copy
from .env_vars import (
    BackendEnvOptions,
    FrontendEnvOptions,
    create_backend_env_file,
    create_frontend_env_file,
)
from .errors import TemplateError
from .types import TemplateDataSource, TemplateFramework, TemplateVectorDB
from .validation import sanitize_name

logger = logging.getLogger(__name__)

# npm drops dotfiles and renames READMEs when publishing, so templates store
# them under these names
TEMPLATE_RENAMES = {
    "gitignore": ".gitignore",
    "README-template.md": "README.md",
}


def rename_template_file(name: str) -> str:
    """Map a stored template filename to its name in the generated project."""
    return TEMPLATE_RENAMES.get(name, name)


class ScaffoldOptions(BaseModel):
    """Everything needed to generate a project."""

    root: Path
    app_name: str | None = None
    framework: TemplateFramework = TemplateFramework.FASTAPI
    vector_db: TemplateVectorDB = TemplateVectorDB.NONE
    model: str | None = None
    embedding_model: str | None = None
    openai_key: str | None = None
    llama_cloud_key: str | None = None
    port: int | None = Field(default=None, ge=1, le=65535)
    frontend: bool = False
    custom_api_path: str | None = None
    data_sources: list[TemplateDataSource] = Field(default_factory=list)
    templates_dir: Path = DEFAULT_TEMPLATES_DIR


@dataclass
class ScaffoldResult:
    """
    Result of a scaffold run.

    Attributes:
        root: Project root
        backend_dir: Directory holding the framework template
        frontend_dir: Directory holding the separate frontend, if any
        files_created: Every file copied or written
    """

    root: Path
    backend_dir: Path
    frontend_dir: Path | None = None
    files_created: list[Path] = field(default_factory=list)


def template_path(templates_dir: Path, framework: TemplateFramework) -> Path:
    """Get the template directory for a framework."""
    return templates_dir / "types" / "streaming" / framework.value


def _update_package_name(directory: Path, name: str) -> Path | None:
    """Set the "name" field of directory/package.json, if there is one."""
    package_path = directory / "package.json"
    if not package_path.exists():
        return None

    try:
        package = json.loads(package_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TemplateError(f"Invalid package.json: {e}", path=package_path) from e
    if not isinstance(package, dict):
        raise TemplateError("Invalid package.json: expected an object", path=package_path)
    package["name"] = name
    package_path.write_text(json.dumps(package, indent=2) + "\n", encoding="utf-8")
    return package_path


def _require_template(templates_dir: Path, framework: TemplateFramework) -> Path:
    path = template_path(templates_dir, framework)
    if not path.is_dir():
        raise TemplateError("Template not found", path=path)
    return path


async def _install(
    template_dir: Path,
    target_dir: Path,
    app_name: str,
    log: Callable[[str], None],
) -> list[Path]:
    log(f"  Copying {template_dir.name} template to {target_dir}...")
    copied = await copy(
        "**",
        target_dir,
        CopyOptions(cwd=template_dir, rename=rename_template_file),
    )
    _update_package_name(target_dir, app_name)
    return copied


async def install_template_async(
    opts: ScaffoldOptions,
    progress_callback: Callable[[str], None] | None = None,
) -> ScaffoldResult:
    """
    Generate a project from the bundled templates.

    Args:
        opts: Scaffold options
        progress_callback: Optional callback for progress messages

    Returns:
        ScaffoldResult describing the generated layout

    Raises:
        TemplateError: If the application name is invalid or a template is missing
        OSError: If copying or writing fails
    """

    def log(msg: str) -> None:
        logger.info(msg)
        if progress_callback:
            progress_callback(msg)

    root = opts.root.resolve()
    app_name = sanitize_name(opts.app_name or root.name)
    log(f"Creating '{app_name}' ({opts.framework.value}) in {root}...")

    separate_frontend = opts.frontend and opts.framework != TemplateFramework.NEXTJS
    if opts.frontend and not separate_frontend:
        logger.info("Next.js already includes a frontend; ignoring frontend option")

    # Both templates are checked before anything is written
    backend_template = _require_template(opts.templates_dir, opts.framework)
    frontend_template = (
        _require_template(opts.templates_dir, TemplateFramework.NEXTJS)
        if separate_frontend
        else None
    )

    backend_dir = root / "backend" if separate_frontend else root
    backend_dir.mkdir(parents=True, exist_ok=True)

    result = ScaffoldResult(root=root, backend_dir=backend_dir)
    result.files_created.extend(
        await _install(
            backend_template,
            backend_dir,
            app_name,
            log,
        )
    )

    result.files_created.append(
        create_backend_env_file(
            backend_dir,
            BackendEnvOptions(
                openai_key=opts.openai_key,
                llama_cloud_key=opts.llama_cloud_key,
                vector_db=opts.vector_db,
                model=opts.model,
                embedding_model=opts.embedding_model,
                framework=opts.framework,
                data_sources=opts.data_sources,
                port=opts.port,
            ),
        )
    )
    log("  Created backend .env")

    if frontend_template is not None:
        frontend_dir = root / "frontend"
        frontend_dir.mkdir(parents=True, exist_ok=True)
        result.frontend_dir = frontend_dir
        result.files_created.extend(
            await _install(
                frontend_template,
                frontend_dir,
                f"{app_name}-frontend",
                log,
            )
        )

        api_path = opts.custom_api_path or f"http://localhost:{opts.port or 8000}/api/chat"
        result.files_created.append(
            create_frontend_env_file(
                frontend_dir,
                FrontendEnvOptions(custom_api_path=api_path, model=opts.model),
            )
        )
        log("  Created frontend .env")

    return result


def install_template(
    opts: ScaffoldOptions,
    progress_callback: Callable[[str], None] | None = None,
) -> ScaffoldResult:
    """Blocking wrapper around install_template_async()."""
    return asyncio.run(install_template_async(opts, progress_callback))
