from __future__ import annotations

import logging
from pathlib import Path

from ..app import config

logger = logging.getLogger(__name__)


def find_module_root(path: Path, stop_at: Path | None = None) -> Path | None:
    """Nearest directory at or above `path` holding a build manifest."""
    start = path if path.is_dir() else path.parent
    for directory in [start, *start.parents]:
        if any((directory / name).is_file() for name in config.MODULE_MANIFEST_NAMES):
            return directory
        if stop_at is not None and directory == stop_at:
            break
    return None


def module_of(path: Path, stop_at: Path | None = None) -> str | None:
    """Packaging-unit identifier of the document at `path`, or None outside any unit."""
    root = find_module_root(path.resolve(), stop_at.resolve() if stop_at else None)
    if root is None:
        logger.debug("No build manifest above %s", path)
        return None
    return root.as_posix()


__all__ = ["find_module_root", "module_of"]
