"""Basic file IO helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.is_file():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def read_text_file(path: Path) -> str:
    """Return the file contents as UTF-8 text, or an empty string if missing."""

    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8")


def read_bytes_file(path: Path) -> Optional[bytes]:
    """Return the raw file contents, or ``None`` if the file does not exist."""

    if not path.is_file():
        return None
    return path.read_bytes()
