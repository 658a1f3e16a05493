"""Rule definitions, the rule registry and custom rule plugin loading."""

from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from doclint.config import LintConfig
from doclint.document import Document
from doclint.errors import DuplicateRuleError, PluginError
from doclint.result import Finding, Hit
from doclint.severity import Severity

logger = logging.getLogger(__name__)

CheckFunction = Callable[[Document, Any], Iterable[Hit]]


@dataclass(frozen=True)
class Rule:
    """A named, categorized check.

    ``check`` receives the document and either one options section of
    :class:`LintConfig` (named by ``options``) or the whole config when
    ``options`` is ``None``. It must not mutate the document.
    """

    id: str
    name: str
    category: str
    severity: Severity
    check: CheckFunction
    options: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity.parse(self.severity))

    def evaluate(self, document: Document, config: LintConfig) -> List[Finding]:
        options = getattr(config, self.options) if self.options else config
        default = config.severity_for(self.id, self.severity)
        return [
            Finding(
                rule=self.id,
                category=self.category,
                severity=default if hit.severity is None else Severity.parse(hit.severity),
                locator=hit.locator,
                message=hit.message,
            )
            for hit in self.check(document, options)
        ]


class RuleRegistry:
    """Ordered mapping of rule identifier to :class:`Rule`."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: Dict[str, Rule] = {}
        for rule in rules:
            self.register(rule)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def register(self, rule: Rule) -> None:
        if rule.id in self._rules:
            raise DuplicateRuleError(rule.id)
        self._rules[rule.id] = rule

    def get(self, rule_id: str) -> Rule:
        return self._rules[rule_id]

    def all_rules(self) -> List[Rule]:
        return list(self._rules.values())

    def rules_in_category(self, category: str) -> List[Rule]:
        return [rule for rule in self._rules.values() if rule.category == category]

    def categories(self) -> List[str]:
        seen: Dict[str, None] = {}
        for rule in self._rules.values():
            seen.setdefault(rule.category, None)
        return list(seen)

    def select(self, categories: Optional[Iterable[str]] = None) -> List[Rule]:
        """Return the rules of ``categories`` in registration order, or all rules."""

        if not categories:
            return self.all_rules()
        wanted = set(categories)
        return [rule for rule in self._rules.values() if rule.category in wanted]


def load_plugin(path: Union[str, Path], registry: RuleRegistry) -> List[Rule]:
    """Import a Python file and register the rules it exposes.

    The module must define ``get_rules()`` returning an iterable of
    :class:`Rule`, or ``get_rule()`` returning a single one.
    """

    location = Path(path)
    if not location.is_file():
        raise PluginError(f"Rule plugin not found: {location}")
    spec = importlib.util.spec_from_file_location(f"doclint_plugin_{location.stem}", location)
    if spec is None or spec.loader is None:
        raise PluginError(f"Cannot import rule plugin: {location}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise PluginError(f"Failed to import rule plugin {location}: {exc}") from exc

    if not hasattr(module, "get_rules") and not hasattr(module, "get_rule"):
        raise PluginError(f"Rule plugin {location} defines neither get_rules() nor get_rule()")
    try:
        if hasattr(module, "get_rules"):
            rules = list(module.get_rules())
        else:
            rules = [module.get_rule()]
    except Exception as exc:
        raise PluginError(f"Rule plugin {location} failed to build its rules: {exc}") from exc

    for rule in rules:
        if not isinstance(rule, Rule):
            raise PluginError(f"Rule plugin {location} returned {rule!r}, expected a Rule")
        registry.register(rule)
    logger.debug("Registered %d rule(s) from %s", len(rules), location)
    return rules
