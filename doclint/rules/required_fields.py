"""Required fields: auditable elements must declare every mandatory field."""

from __future__ import annotations

from typing import Iterator, List

from doclint.config import RequiredFieldsOptions
from doclint.document import Document
from doclint.result import Hit
from doclint.severity import Severity
from doclint.utils import simple_name

from . import Rule


def check_audit_fields(document: Document, options: RequiredFieldsOptions) -> Iterator[Hit]:
    for element in document.iter(*options.targets):
        declared = {field.name for field in element.iter(*options.field_tags) if field.name}
        missing: List[str] = []
        for aliases in options.required:
            if not any(alias in declared for alias in aliases):
                missing.append(" or ".join(aliases))
        if missing:
            label = simple_name(element.name) if element.name else "<unnamed>"
            yield Hit(
                locator=element.path,
                message=f"{element.tag} '{label}' is missing required fields: {', '.join(missing)}",
            )


def get_rule() -> Rule:
    return Rule(
        id="audit-fields",
        name="Auditable elements declare the audit fields",
        category="required-fields",
        severity=Severity.WARNING,
        check=check_audit_fields,
        options="required_fields",
    )
