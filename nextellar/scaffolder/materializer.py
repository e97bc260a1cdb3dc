"""Copy a resolved template into a fresh application directory."""

from __future__ import annotations

import asyncio
import os
import shutil
from pathlib import Path

from .errors import CopyFailureError, DirectoryExistsError
from .locator import ResolvedTemplate

# Directory names never copied out of a template, at any depth.
EXCLUDED_NAMES: tuple[str, ...] = (".git", "node_modules")

_ignore_excluded = shutil.ignore_patterns(*EXCLUDED_NAMES)


def copy_tree(source: Path, destination: Path, *, overlay: bool = False) -> None:
    """Copy *source* into *destination*, skipping excluded directories.

    Modification times are preserved and symlinks are copied as links.  With
    ``overlay=True`` the destination may already exist and same-path files
    are overwritten.
    """
    shutil.copytree(
        source,
        destination,
        symlinks=True,
        ignore=_ignore_excluded,
        copy_function=shutil.copy2,
        dirs_exist_ok=overlay,
    )


async def materialize(resolved: ResolvedTemplate, target: Path, app_name: str | None = None) -> Path:
    """Copy the template at *resolved* into *target*.

    Args:
        resolved: Template chosen by the locator.
        target: Directory to create.  It must not exist yet.
        app_name: Name used in error messages (defaults to ``target.name``).

    Returns:
        The created target directory.

    Raises:
        DirectoryExistsError: If *target* already exists.
        CopyFailureError: If the copy fails part-way.  The partial target is
            left in place.
    """
    target = Path(target)
    if await asyncio.to_thread(os.path.lexists, target):
        raise DirectoryExistsError(app_name or target.name)

    try:
        await asyncio.to_thread(copy_tree, resolved.path, target)
    except OSError as exc:
        raise CopyFailureError(resolved.name, target, str(exc)) from exc

    return target
