"""Length constraint: names of selected element types must fit a character limit."""

from __future__ import annotations

from typing import Iterator

from doclint.config import LengthOptions
from doclint.document import Document
from doclint.result import Hit
from doclint.severity import Severity

from . import Rule


def check_name_length(document: Document, options: LengthOptions) -> Iterator[Hit]:
    if not options.limits:
        return
    for element in document.iter(*options.limits):
        name = element.name
        limit = options.limits[element.tag]
        if name and len(name) > limit:
            yield Hit(
                locator=element.path,
                message=f"{element.tag} name '{name}' exceeds {limit} characters ({len(name)} chars)",
            )


def get_rule() -> Rule:
    return Rule(
        id="name-length",
        name="Names fit the length limit",
        category="length-constraint",
        severity=Severity.ERROR,
        check=check_name_length,
        options="length",
    )
