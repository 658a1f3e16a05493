"""Rule engine: run rules against a document with per-rule fault isolation."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .config import LintConfig
from .document import Document, load_path
from .errors import DoclintError
from .result import ENGINE_CATEGORY, Finding, Report, aggregate
from .rules import Rule, RuleRegistry
from .rules.builtin import default_registry
from .severity import Severity

logger = logging.getLogger(__name__)

StopCheck = Callable[[], bool]


def run(
    document: Document,
    rules: Sequence[Rule],
    config: Optional[LintConfig] = None,
    *,
    should_stop: Optional[StopCheck] = None,
) -> List[Finding]:
    """Evaluate ``rules`` in order and return their findings.

    A rule that raises yields a single ``engine`` error finding naming it; the
    remaining rules still run. ``should_stop`` is polled before each rule.
    """

    config = config or LintConfig()
    findings: List[Finding] = []
    for rule in rules:
        if should_stop is not None and should_stop():
            logger.debug("Lint cancelled before rule %s", rule.id)
            break
        start = time.monotonic()
        try:
            produced = rule.evaluate(document, config)
        except Exception as exc:
            logger.error("Rule %s failed on %s", rule.id, document.source or "<input>", exc_info=True)
            findings.append(
                Finding(
                    rule=rule.id,
                    category=ENGINE_CATEGORY,
                    severity=Severity.ERROR,
                    locator=document.root.path,
                    message=f"rule '{rule.id}' raised {type(exc).__name__}: {exc}",
                )
            )
            continue
        logger.debug("Rule %s produced %d finding(s) in %.1fms", rule.id, len(produced), (time.monotonic() - start) * 1000)
        if not produced and config.report_passes:
            produced = [
                Finding(
                    rule=rule.id,
                    category=rule.category,
                    severity=Severity.PASS,
                    locator=document.root.path,
                    message=f"{rule.name}: no issues",
                )
            ]
        findings.extend(produced)
    return findings


@dataclass
class LintRun:
    """Context for lint runs: the registry, the options and an optional category filter.

    Registry and config are shared read-only, so one context may serve many
    documents concurrently.
    """

    registry: RuleRegistry = field(default_factory=default_registry)
    config: LintConfig = field(default_factory=LintConfig)
    categories: Tuple[str, ...] = ()

    @property
    def rules(self) -> List[Rule]:
        return self.registry.select(self.categories)

    def lint(self, document: Document, should_stop: Optional[StopCheck] = None) -> Report:
        findings = run(document, self.rules, self.config, should_stop=should_stop)
        return aggregate(findings, source=document.source)

    def lint_path(self, path: Union[str, Path], should_stop: Optional[StopCheck] = None) -> Report:
        """Load and lint one document; input errors propagate."""

        return self.lint(load_path(path), should_stop=should_stop)


@dataclass(frozen=True)
class BatchItem:
    """Outcome of linting one document in a batch: a report or an input error."""

    source: str
    report: Optional[Report] = None
    error: Optional[DoclintError] = None


def lint_many(
    lint_run: LintRun,
    paths: Iterable[Union[str, Path]],
    workers: int = 1,
    should_stop: Optional[StopCheck] = None,
) -> List[BatchItem]:
    """Lint several documents, in parallel when ``workers`` > 1.

    Results keep the order of ``paths``. A document that cannot be loaded is
    reported as an error item without affecting the others.
    """

    def _one(path: Union[str, Path]) -> BatchItem:
        try:
            return BatchItem(source=str(path), report=lint_run.lint_path(path, should_stop=should_stop))
        except DoclintError as exc:
            logger.info("Skipping %s: %s", path, exc)
            return BatchItem(source=str(path), error=exc)

    targets = list(paths)
    if workers <= 1 or len(targets) <= 1:
        return [_one(path) for path in targets]
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_one, targets))
