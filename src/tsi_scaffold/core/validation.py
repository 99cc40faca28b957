"""
Application name validation and sanitization.

Generated projects ship a package.json, so the application name has to be
a valid npm package name.
"""

from __future__ import annotations

import re

from .errors import TemplateError

MAX_NAME_LENGTH = 214

# Names npm refuses outright
RESERVED_NAMES = {
    "node_modules",
    "favicon.ico",
}

_URL_SAFE_RE = re.compile(r"^[a-z0-9][a-z0-9._~-]*$")


def validate_project_name(name: str) -> tuple[bool, str | None]:
    """
    Validate an application name.

    Args:
        name: Application name to validate

    Returns:
        (is_valid, error_message)

    Examples:
        validate_project_name("my-app")  # -> (True, None)
        validate_project_name("My App")  # -> (False, "...")
    """
    if not name:
        return (False, "Application name cannot be empty")

    if len(name) > MAX_NAME_LENGTH:
        return (False, f"Application name cannot be longer than {MAX_NAME_LENGTH} characters")

    if name.startswith((".", "_")):
        return (False, f"Application name '{name}' cannot start with a period or underscore")

    if name != name.strip():
        return (False, f"Application name '{name}' cannot contain leading or trailing spaces")

    if name.lower() in RESERVED_NAMES:
        return (False, f"Application name '{name}' is reserved. Try 'my-{name}' instead")

    if name != name.lower():
        return (
            False,
            f"Application name '{name}' cannot contain capital letters. Try '{name.lower()}'",
        )

    if not _URL_SAFE_RE.match(name):
        return (
            False,
            f"Application name '{name}' must contain only lowercase letters, digits, "
            "'-', '.', '_' and '~'",
        )

    return (True, None)


def sanitize_name(name: str, validate: bool = True) -> str:
    """
    Convert an arbitrary name to a valid application name.

    Args:
        name: Application name (can include spaces, capitals)
        validate: If True, raises TemplateError when the result is still invalid

    Returns:
        Lowercase, hyphen-separated name

    Raises:
        TemplateError: If validate=True and the name is not usable

    Examples:
        "My Project" -> "my-project"
        "my_app" -> "my_app"
        "__Chat  Bot__" -> "chat-bot"
    """
    name = name.strip().lower()
    name = re.sub(r"[^a-z0-9._~-]+", "-", name)
    name = name.strip("-._")
    name = re.sub(r"-+", "-", name)

    final_name = name or "my-app"

    if validate:
        is_valid, error_msg = validate_project_name(final_name)
        if not is_valid:
            raise TemplateError(error_msg or "Invalid application name")

    return final_name
