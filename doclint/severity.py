"""Severity definitions for lint findings."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings."""

    ERROR = "error"
    WARNING = "warning"
    PASS = "pass"

    @property
    def rank(self) -> int:
        """Return an integer ranking used for ordering and gating."""

        ordering = {
            Severity.ERROR: 2,
            Severity.WARNING: 1,
            Severity.PASS: 0,
        }
        return ordering[self]

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Return the severity named by ``value`` (case-insensitive)."""

        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "warn":
            normalized = "warning"
        for severity in cls:
            if severity.value == normalized:
                return severity
        raise ValueError(f"Unknown severity: {value!r}")


SEVERITY_ORDER = (Severity.ERROR, Severity.WARNING, Severity.PASS)
