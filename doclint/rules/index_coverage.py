"""Index coverage: fields filtered or sorted on by queries should be indexed."""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Set, Tuple

from doclint.config import IndexCoverageOptions
from doclint.document import Document, Element
from doclint.result import Hit
from doclint.severity import Severity

from . import Rule

CLAUSE_PATTERN = re.compile(
    r"\b(SELECT|FROM|WHERE|GROUP\s+BY|HAVING|ORDER\s+BY|(?:(?:LEFT|RIGHT|INNER|OUTER|FETCH)\s+)*JOIN|ON)\b",
    re.IGNORECASE,
)
STRING_LITERAL_PATTERN = re.compile(r"'(?:[^']|'')*'")
PARAMETER_PATTERN = re.compile(r":\w+")
FIELD_REFERENCE_PATTERN = re.compile(r"\b[A-Za-z_]\w*\.([A-Za-z_]\w*)\b")


def _normalize_clause(keyword: str) -> str:
    keyword = " ".join(keyword.upper().split())
    return "JOIN" if keyword.endswith("JOIN") else keyword


def split_clauses(content: str) -> List[Tuple[str, str]]:
    """Split a query into ``(CLAUSE, body)`` pairs, e.g. ``("WHERE", "p.status = :s")``."""

    matches = list(CLAUSE_PATTERN.finditer(content))
    clauses: List[Tuple[str, str]] = []
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(content)
        clauses.append((_normalize_clause(match.group(1)), content[match.end():end]))
    return clauses


def referenced_fields(content: str, clauses: Tuple[str, ...]) -> List[str]:
    """Return field names referenced as ``alias.field`` inside the wanted clauses."""

    wanted = {_normalize_clause(clause) for clause in clauses}
    fields: List[str] = []
    for clause, body in split_clauses(content):
        if clause not in wanted:
            continue
        body = STRING_LITERAL_PATTERN.sub(" ", body)
        body = PARAMETER_PATTERN.sub(" ", body)
        for match in FIELD_REFERENCE_PATTERN.finditer(body):
            name = match.group(1)
            if name not in fields:
                fields.append(name)
    return fields


def indexed_fields(document: Document, options: IndexCoverageOptions) -> Set[str]:
    fields: Set[str] = set()
    for index in document.iter(*options.index_targets):
        for entry in index.iter(*options.index_field_tags):
            value = (entry.text or "").strip()
            if value:
                fields.add(value)
                fields.update(part for part in value.split(".") if part)
    return fields


def query_content(element: Element, options: IndexCoverageOptions) -> str:
    content = element.get(options.content_attribute)
    if content is None:
        content = element.child_text(options.content_attribute)
    return content or ""


def check_query_field_indexes(document: Document, options: IndexCoverageOptions) -> Iterator[Hit]:
    indexed: Optional[Set[str]] = None
    stopwords = {word.lower() for word in options.stopwords}
    for element in document.iter(*options.query_targets):
        content = query_content(element, options)
        if not content.strip():
            continue
        if indexed is None:
            indexed = indexed_fields(document, options)
        label = element.name or "<unnamed>"
        for name in referenced_fields(content, options.clauses):
            if name.lower() in stopwords or name in indexed:
                continue
            yield Hit(
                locator=element.path,
                message=f"field '{name}' used by {element.tag} '{label}' is not covered by any index",
            )


def get_rule() -> Rule:
    return Rule(
        id="query-field-index",
        name="Queried fields are indexed",
        category="index-coverage",
        severity=Severity.WARNING,
        check=check_query_field_indexes,
        options="index_coverage",
    )
