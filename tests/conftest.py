"""Shared pytest fixtures for tsi-scaffold tests."""

from pathlib import Path

import pytest


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Return a directory holding a small tree of files to copy."""
    root = tmp_path / "src"
    (root / "a").mkdir(parents=True)
    (root / "a" / "b.txt").write_text("b")
    (root / "a" / "c.txt").write_text("c")
    (root / "a" / "notes.md").write_text("notes")
    (root / ".env.example").write_text("KEY=")
    (root / ".hidden").mkdir()
    (root / ".hidden" / "d.txt").write_text("d")
    return root


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Return a templates directory with fastapi and nextjs templates."""
    root = tmp_path / "templates"
    fastapi = root / "types" / "streaming" / "fastapi"
    (fastapi / "app").mkdir(parents=True)
    (fastapi / "gitignore").write_text(".env\n")
    (fastapi / "README-template.md").write_text("# Backend\n")
    (fastapi / "app" / "main.py").write_text("app = None\n")

    nextjs = root / "types" / "streaming" / "nextjs"
    nextjs.mkdir(parents=True)
    (nextjs / "gitignore").write_text(".next/\n")
    (nextjs / "README-template.md").write_text("# Frontend\n")
    (nextjs / "package.json").write_text('{"name": "template", "version": "0.1.0"}\n')
    return root


@pytest.fixture(autouse=True)
def _clean_scaffold_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Keep developer credentials from leaking into rendered files.
    for name in ("TSI_API_KEY", "LLAMA_CLOUD_API_KEY", "TSI_SCAFFOLD_TEMPLATES_DIR"):
        monkeypatch.delenv(name, raising=False)
