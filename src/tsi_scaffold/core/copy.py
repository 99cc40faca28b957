"""
Glob-based template copying.

Copies every file matched by one or more glob patterns into a destination
directory, optionally renaming files and flattening the directory layout.
Individual files are copied concurrently on worker threads.
"""

from __future__ import annotations

import asyncio
import glob
import logging
import os
import shutil
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def identity(name: str) -> str:
    return name


@dataclass
class CopyOptions:
    """
    Options for copy().

    Attributes:
        cwd: Directory patterns and destination are resolved against
            (defaults to the process working directory)
        rename: Applied to the base filename of every copied file
        parents: Keep each match's directory structure under the destination;
            when False all files land directly in the destination
    """

    cwd: str | Path | None = None
    rename: Callable[[str], str] = identity
    parents: bool = True


def expand_sources(patterns: Sequence[str], cwd: str | Path | None = None) -> list[str]:
    """
    Expand glob patterns into file paths relative to cwd.

    ``**`` matches across directories and dotfiles are included. Patterns
    starting with ``!`` remove their matches from the result. Directories
    are skipped and duplicates are dropped, keeping first-seen order.

    Args:
        patterns: Glob patterns
        cwd: Root the patterns are matched against

    Returns:
        Matched file paths, relative to cwd unless a pattern was absolute
    """
    root = os.fspath(cwd) if cwd else None
    base = root or os.curdir

    def _match(pattern: str) -> list[str]:
        found = glob.glob(pattern, root_dir=root, recursive=True, include_hidden=True)
        return [
            os.path.normpath(p) for p in sorted(found) if os.path.isfile(os.path.join(base, p))
        ]

    excluded: set[str] = set()
    for pattern in patterns:
        if pattern.startswith("!"):
            excluded.update(_match(pattern[1:]))

    matches: dict[str, None] = {}
    for pattern in patterns:
        if pattern.startswith("!"):
            continue
        for path in _match(pattern):
            if path not in excluded:
                matches.setdefault(path, None)

    return list(matches)


def _copy_file(source: Path, target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)


async def copy(
    src: str | Sequence[str],
    dest: str | Path,
    options: CopyOptions | None = None,
) -> list[Path]:
    """
    Copy files matching src into dest.

    All matched files are copied concurrently and the call returns once every
    copy has finished. The first failing copy propagates its ``OSError``;
    files already copied are left in place. Two matches that map to the same
    destination race and the last writer wins.

    Args:
        src: Glob pattern or list of patterns
        dest: Destination directory, resolved against ``options.cwd`` when set
        options: Copy options

    Returns:
        Destination paths of the copied files (empty when nothing matched)

    Raises:
        InvalidArgumentError: If no pattern or no destination was given, or the
            destination is the source directory itself
        OSError: If a directory cannot be created or a file cannot be copied

    Examples:
        await copy("**", "my-app", CopyOptions(cwd="templates/types/streaming/fastapi"))
    """
    options = options or CopyOptions()
    sources = [src] if isinstance(src, str) else list(src)

    # Path("") collapses to ".", so check the string form before wrapping it
    if not sources or dest is None or os.fspath(dest) in ("", "."):
        raise InvalidArgumentError("`src` and `dest` are required")

    cwd = Path(options.cwd) if options.cwd else None
    matches = await asyncio.to_thread(expand_sources, sources, cwd)
    dest_root = (cwd / dest).resolve() if cwd else Path(dest)

    logger.debug("Copying %d file(s) to %s", len(matches), dest_root)

    async def _copy_one(match: str) -> Path:
        rel = Path(match)
        name = options.rename(rel.name)

        if options.parents:
            dirname = rel.parent.relative_to(rel.anchor) if rel.is_absolute() else rel.parent
            target = dest_root / dirname / name
        else:
            target = dest_root / name

        source = (cwd / rel).resolve() if cwd else rel
        await asyncio.to_thread(_copy_file, source, target)
        return target

    return list(await asyncio.gather(*(_copy_one(m) for m in matches)))


def copy_sync(
    src: str | Sequence[str],
    dest: str | Path,
    options: CopyOptions | None = None,
) -> list[Path]:
    """Blocking wrapper around copy() for callers without an event loop."""
    return asyncio.run(copy(src, dest, options))
