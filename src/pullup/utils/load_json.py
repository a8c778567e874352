import json
from pathlib import Path
from typing import Any

from returns.result import Result, safe

from ..app import config


def load_json(file_path: Path) -> Result[Any, str]:
    """Parse a JSON file, reporting I/O and syntax errors as a failure message."""
    return safe(lambda: json.loads(file_path.read_text(encoding="utf-8")))().alt(str)


def dump_json(file_path: Path, data: Any) -> Result[Path, str]:
    """Write `data` as indented JSON with a trailing newline."""

    @safe
    def _write() -> Path:
        text = json.dumps(data, indent=config.DOCUMENT_INDENT)
        file_path.write_text(f"{text}\n", encoding="utf-8")
        return file_path

    return _write().alt(str)
