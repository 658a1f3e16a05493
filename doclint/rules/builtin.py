"""The default built-in rule set."""

from __future__ import annotations

from typing import List

from . import Rule, RuleRegistry
from . import documentation, index_coverage, length, naming, pairing, required_fields


def builtin_rules() -> List[Rule]:
    return [
        documentation.get_rule(),
        *naming.get_rules(),
        pairing.get_rule(),
        index_coverage.get_rule(),
        required_fields.get_rule(),
        length.get_rule(),
    ]


def default_registry() -> RuleRegistry:
    """Return a fresh registry holding the built-in rules."""

    return RuleRegistry(builtin_rules())
