"""Exception hierarchy for the linter."""

from __future__ import annotations

from typing import Optional


class DoclintError(Exception):
    """Base class for every error raised by the linter."""


class NotFoundError(DoclintError):
    """Raised when the document source does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Document not found: {path}")
        self.path = path


class ParseError(DoclintError):
    """Raised when a document is not well-formed."""

    def __init__(self, message: str, source: Optional[str] = None, position: Optional[tuple[int, int]] = None) -> None:
        location = source or "<input>"
        if position is not None:
            location = f"{location}:{position[0]}:{position[1]}"
        super().__init__(f"{location}: {message}")
        self.source = source
        self.position = position


class DuplicateRuleError(DoclintError):
    """Raised when a rule identifier is registered twice."""

    def __init__(self, rule_id: str) -> None:
        super().__init__(f"Rule '{rule_id}' is already registered")
        self.rule_id = rule_id


class PluginError(DoclintError):
    """Raised when a custom rule plugin cannot be imported or is malformed."""


class ConfigError(DoclintError):
    """Raised when the sidecar configuration is malformed."""
