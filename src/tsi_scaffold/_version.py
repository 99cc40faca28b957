"""Package version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "tsi-scaffold"

# Source checkout layout: <root>/src/tsi_scaffold/_version.py
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Installed distribution version, else the one in a source checkout's pyproject.toml."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pass

    if _PYPROJECT.is_file():
        project = tomllib.loads(_PYPROJECT.read_text(encoding="utf-8")).get("project", {})
        if project.get("name") == DISTRIBUTION_NAME and "version" in project:
            return str(project["version"])
    return "0.0.0"
