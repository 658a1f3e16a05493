"""Flag documentable elements whose description is missing or blank."""

from __future__ import annotations

from typing import Iterator, Optional

from doclint.config import DocumentationOptions
from doclint.document import Document, Element
from doclint.result import Hit
from doclint.severity import Severity

from . import Rule


def description_of(element: Element, field_name: str) -> Optional[str]:
    """Return the description from a child element, falling back to an attribute."""

    text = element.child_text(field_name)
    if text is not None and text.strip():
        return text
    value = element.get(field_name)
    if value is not None and value.strip():
        return value
    return None


def check_missing_descriptions(document: Document, options: DocumentationOptions) -> Iterator[Hit]:
    for element in document.iter(*options.targets):
        if description_of(element, options.description_field) is None:
            label = element.name or "<unnamed>"
            yield Hit(
                locator=element.path,
                message=f"{element.tag} '{label}' has an empty or missing {options.description_field}",
            )


def get_rule() -> Rule:
    return Rule(
        id="missing-description",
        name="Documentable elements carry a description",
        category="documentation",
        severity=Severity.WARNING,
        check=check_missing_descriptions,
        options="documentation",
    )
