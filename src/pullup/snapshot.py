"""
On-disk rollback for files a refactoring is about to rewrite.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path

from returns.result import Failure, Result, Success, safe

from .app import config
from .utils.load_json import dump_json, load_json

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Keeps one snapshot at a time in `<root>/.pullup-snapshot`."""

    def __init__(self, root: Path):
        self.root = root
        self.directory = root / config.SNAPSHOT_DIR_NAME
        self.manifest = self.directory / config.SNAPSHOT_MANIFEST_NAME

    @classmethod
    def for_roots(cls, roots: Sequence[Path]) -> SnapshotStore:
        """Snapshot store at the deepest directory containing every source root."""
        resolved = [str(Path(root).resolve()) for root in roots]
        common = Path(os.path.commonpath(resolved)) if resolved else config.DEFAULT_WORKING_DIR
        return cls(common)

    def exists(self) -> bool:
        return self.manifest.is_file()

    def save(self, files: Iterable[Path]) -> Result[Path, str]:
        """Replace any previous snapshot with copies of `files`."""

        @safe
        def _copy() -> list[dict[str, str]]:
            self.clear()
            self.directory.mkdir(parents=True)
            entries = []
            for index, file in enumerate(files):
                copy_name = f"{index:04d}-{file.name}"
                shutil.copy2(file, self.directory / copy_name)
                entries.append({"original": str(file), "copy": copy_name})
            return entries

        def _record(entries: list[dict[str, str]]) -> Result[Path, str]:
            logger.info("Snapshot of %d files saved to %s", len(entries), self.directory)
            return dump_json(self.manifest, {"files": entries})

        return _copy().alt(str).bind(_record)

    def restore(self) -> Result[list[Path], str]:
        """Copy every snapshotted file back to where it came from."""
        if not self.exists():
            return Failure(f"No snapshot found in {self.directory}")
        manifest = load_json(self.manifest)
        if isinstance(manifest, Failure):
            return manifest

        @safe
        def _copy_back(entries: list[dict[str, str]]) -> list[Path]:
            restored = []
            for entry in entries:
                original = Path(entry["original"])
                shutil.copy2(self.directory / entry["copy"], original)
                restored.append(original)
            return restored

        match manifest.unwrap():
            case {"files": list(entries)}:
                result = _copy_back(entries).alt(str)
            case _:
                return Failure(f"Malformed snapshot manifest {self.manifest}")
        if isinstance(result, Success):
            logger.info("Restored %d files from %s", len(result.unwrap()), self.directory)
        return result

    def clear(self) -> None:
        """Drop the current snapshot, if any."""
        if self.directory.exists():
            shutil.rmtree(self.directory)


__all__ = ["SnapshotStore"]
