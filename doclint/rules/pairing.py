"""Completeness pairing: collection queries need a companion count query.

Companion names are produced by named derivation strategies. The defaults
accept ``countForFindActive`` (capitalize), ``countForfindActive`` (verbatim)
and, for ``findActiveOrderByName``, the base ``countForFindActive``. A run can
add its own strategies through :attr:`PairingOptions.custom_derivations`.
"""

from __future__ import annotations

from typing import Iterator, List

from doclint.config import PairingOptions
from doclint.document import Document
from doclint.result import Hit
from doclint.severity import Severity

from . import Rule


def companion_candidates(name: str, options: PairingOptions) -> List[str]:
    table = options.derivation_table()
    candidates: List[str] = []
    for key in options.derivations:
        candidate = table[key](name, options.companion_prefix)
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates


def is_exempt(name: str, options: PairingOptions) -> bool:
    if options.companion_prefix and name.startswith(options.companion_prefix):
        return True
    lowered = name.lower()
    return any(lowered.startswith(prefix.lower()) for prefix in options.exempt_prefixes)


def check_count_companions(document: Document, options: PairingOptions) -> Iterator[Hit]:
    known = document.names(*options.targets)
    for element in document.iter(*options.targets):
        name = element.name
        if not name or is_exempt(name, options):
            continue
        if element.get(options.return_attribute) not in options.collection_types:
            continue
        candidates = companion_candidates(name, options)
        if not candidates or any(candidate in known for candidate in candidates):
            continue
        yield Hit(
            locator=element.path,
            message=f"{element.tag} '{name}' returns a collection but has no companion '{candidates[0]}'",
        )


def get_rule() -> Rule:
    return Rule(
        id="count-companion",
        name="Collection queries have a count companion",
        category="completeness-pairing",
        severity=Severity.ERROR,
        check=check_count_companions,
        options="pairing",
    )
