"""
Scaffold configuration.

Settings are resolved in this order (first wins):

1. Command-line options
2. ``tsi-scaffold.toml`` in the working directory (or an explicit path)
3. Environment variables (TSI_API_KEY, LLAMA_CLOUD_API_KEY,
   TSI_SCAFFOLD_TEMPLATES_DIR)
4. Built-in defaults

Example tsi-scaffold.toml:

    [app]
    framework = "fastapi"
    port = 8000
    frontend = true

    [llm]
    model = "Llama-3.1-70B-Instruct"
    embedding_model = "jina-embeddings-v2-base-de"

    [vector_db]
    provider = "pg"
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError
from .types import TemplateFramework, TemplateVectorDB

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "tsi-scaffold.toml"

API_KEY_ENV_VAR = "TSI_API_KEY"
LLAMA_CLOUD_KEY_ENV_VAR = "LLAMA_CLOUD_API_KEY"
TEMPLATES_DIR_ENV_VAR = "TSI_SCAFFOLD_TEMPLATES_DIR"

# Bundled templates shipped inside the package
DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


@dataclass
class LLMConfig:
    """LLM provider settings."""

    model: str | None = None
    embedding_model: str | None = None
    api_key: str | None = None
    llama_cloud_key: str | None = None


@dataclass
class AppConfig:
    """Settings for the generated application."""

    framework: TemplateFramework = TemplateFramework.FASTAPI
    port: int | None = None
    frontend: bool = False
    api_path: str | None = None
    templates_dir: Path = DEFAULT_TEMPLATES_DIR


@dataclass
class ScaffoldConfig:
    """Complete scaffold configuration."""

    app: AppConfig = field(default_factory=AppConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    vector_db: TemplateVectorDB = TemplateVectorDB.NONE
    source: Path | None = None


def _parse_enum(enum_cls: type[Any], raw: Any, key: str) -> Any:
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"Invalid {key} '{raw}'. Valid values: {valid}") from None


def _section(data: dict[str, Any], name: str, source: Path | None) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"Invalid [{name}] section: must be a table", path=source)
    return section


def _optional_str(section: dict[str, Any], key: str, source: Path | None) -> str | None:
    value = section.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"Invalid {key} '{value}': must be a string", path=source)
    return value


def _env_str(name: str) -> str | None:
    value = os.environ.get(name, "").strip()
    return value or None


def load_config(path: Path | None = None) -> ScaffoldConfig:
    """
    Load scaffold configuration.

    Args:
        path: Explicit config file. When None, ``tsi-scaffold.toml`` in the
            current directory is used if present.

    Returns:
        ScaffoldConfig with file values and environment fallbacks applied

    Raises:
        ConfigError: If an explicit file is missing, the TOML is malformed,
            an identifier is unknown, or a section or value has the wrong type
    """
    data: dict[str, Any] = {}
    source: Path | None = None

    if path is not None:
        if not path.is_file():
            raise ConfigError("Config file not found", path=path)
        source = path
    elif Path(CONFIG_FILE_NAME).is_file():
        source = Path(CONFIG_FILE_NAME)

    if source is not None:
        try:
            data = tomllib.loads(source.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML: {e}", path=source) from e
        logger.debug("Loaded scaffold config from %s", source)

    app_data = _section(data, "app", source)
    llm_data = _section(data, "llm", source)
    vector_data = _section(data, "vector_db", source)

    framework = TemplateFramework.FASTAPI
    if "framework" in app_data:
        framework = _parse_enum(TemplateFramework, app_data["framework"], "framework")

    vector_db = TemplateVectorDB.NONE
    if "provider" in vector_data:
        vector_db = _parse_enum(TemplateVectorDB, vector_data["provider"], "vector database")

    port = app_data.get("port")
    if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
        raise ConfigError(f"Invalid port '{port}': must be an integer", path=source)

    frontend = app_data.get("frontend", False)
    if not isinstance(frontend, bool):
        raise ConfigError(f"Invalid frontend '{frontend}': must be true or false", path=source)

    templates_dir = _optional_str(app_data, "templates_dir", source) or _env_str(
        TEMPLATES_DIR_ENV_VAR
    )

    app = AppConfig(
        framework=framework,
        port=port,
        frontend=frontend,
        api_path=_optional_str(app_data, "api_path", source),
        templates_dir=Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR,
    )

    llm = LLMConfig(
        model=_optional_str(llm_data, "model", source),
        embedding_model=_optional_str(llm_data, "embedding_model", source),
        api_key=_optional_str(llm_data, "api_key", source) or _env_str(API_KEY_ENV_VAR),
        llama_cloud_key=(
            _optional_str(llm_data, "llama_cloud_key", source)
            or _env_str(LLAMA_CLOUD_KEY_ENV_VAR)
        ),
    )

    return ScaffoldConfig(app=app, llm=llm, vector_db=vector_db, source=source)
