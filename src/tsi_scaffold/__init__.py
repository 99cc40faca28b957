"""
tsi-scaffold - project generator for T-Systems LLM hub chat applications.

Copies frontend/backend templates into a new project folder and renders
provider-specific ``.env`` files.
"""

from __future__ import annotations

from ._version import get_version
from .core.copy import CopyOptions, copy, copy_sync
from .core.env_vars import (
    EnvVar,
    create_backend_env_file,
    create_frontend_env_file,
    render_env_vars,
)
from .core.errors import (
    ConfigError,
    InvalidArgumentError,
    ScaffoldError,
    TemplateError,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "CopyOptions",
    "copy",
    "copy_sync",
    "EnvVar",
    "render_env_vars",
    "create_backend_env_file",
    "create_frontend_env_file",
    "ScaffoldError",
    "InvalidArgumentError",
    "TemplateError",
    "ConfigError",
]
