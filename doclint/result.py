"""Core result data structures: findings, summaries and the aggregated report."""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .severity import SEVERITY_ORDER, Severity

ENGINE_CATEGORY = "engine"


class ReportStatus(str, Enum):
    """Overall outcome of a lint run."""

    CLEAN = "clean"
    WARNINGS_ONLY = "warnings-only"
    FAILED = "failed"


@dataclass(frozen=True)
class Hit:
    """A rule-local observation, bound to its rule by :meth:`Rule.evaluate`."""

    locator: str
    message: str
    severity: Optional[Severity] = None


@dataclass(frozen=True)
class Finding:
    """Capture a single rule evaluation result."""

    rule: str
    category: str
    severity: Severity
    locator: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


@dataclass(frozen=True)
class Summary:
    """Aggregate finding counts by severity."""

    error: int = 0
    warning: int = 0
    passed: int = 0

    @classmethod
    def tally(cls, findings: Iterable[Finding]) -> "Summary":
        counts = {"error": 0, "warning": 0, "passed": 0}
        for finding in findings:
            counts[cls._attr(finding.severity)] += 1
        return cls(**counts)

    def count(self, severity: Severity) -> int:
        return getattr(self, self._attr(severity))

    def to_dict(self) -> Dict[str, int]:
        return {severity.value: self.count(severity) for severity in SEVERITY_ORDER}

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, self.count(severity)) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(self.count(severity) for severity in SEVERITY_ORDER)

    @staticmethod
    def _attr(severity: Severity) -> str:
        return "passed" if severity is Severity.PASS else severity.value


@dataclass(frozen=True)
class Report:
    """Findings grouped by category with severity and category counts."""

    findings_by_category: Mapping[str, Tuple[Finding, ...]]
    summary: Summary = field(default_factory=Summary)
    source: Optional[str] = None

    def __post_init__(self) -> None:
        frozen = {category: tuple(items) for category, items in self.findings_by_category.items()}
        object.__setattr__(self, "findings_by_category", MappingProxyType(frozen))

    @property
    def categories(self) -> List[str]:
        return list(self.findings_by_category)

    @property
    def category_counts(self) -> Dict[str, int]:
        return {category: len(items) for category, items in self.findings_by_category.items()}

    @property
    def total(self) -> int:
        return self.summary.total

    @property
    def findings(self) -> List[Finding]:
        return [finding for items in self.findings_by_category.values() for finding in items]

    @property
    def status(self) -> ReportStatus:
        if self.summary.error > 0:
            return ReportStatus.FAILED
        if self.summary.warning > 0:
            return ReportStatus.WARNINGS_ONLY
        return ReportStatus.CLEAN

    def category_summary(self, category: str) -> Summary:
        return Summary.tally(self.findings_by_category.get(category, ()))

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": self.source,
            "status": self.status.value,
            "total": self.total,
            "summary": self.summary.to_dict(),
            "categories": {
                category: {
                    "count": len(items),
                    "summary": self.category_summary(category).to_dict(),
                    "findings": [finding.to_dict() for finding in items],
                }
                for category, items in self.findings_by_category.items()
            },
        }


def aggregate(findings: Iterable[Finding], source: Optional[str] = None) -> Report:
    """Group ``findings`` by category, keeping their relative order."""

    items = list(findings)
    grouped: Dict[str, List[Finding]] = {}
    for finding in items:
        grouped.setdefault(finding.category, []).append(finding)
    return Report(
        findings_by_category=grouped,
        summary=Summary.tally(items),
        source=source,
    )

