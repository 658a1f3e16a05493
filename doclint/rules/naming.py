"""Naming conventions: required prefix, camelCase and reserved keywords."""

from __future__ import annotations

from typing import Iterator, List

from doclint.config import NamingOptions
from doclint.document import Document
from doclint.result import Hit
from doclint.severity import Severity
from doclint.utils import simple_name

from . import Rule


def check_required_prefix(document: Document, options: NamingOptions) -> Iterator[Hit]:
    if not options.prefix:
        return
    for element in document.iter(*options.prefix_targets):
        if not element.name:
            continue
        short = simple_name(element.name)
        if not short.startswith(options.prefix):
            yield Hit(
                locator=element.path,
                message=f"{element.tag} '{short}' is missing required prefix '{options.prefix}'",
            )


def check_camel_case(document: Document, options: NamingOptions) -> Iterator[Hit]:
    for element in document.iter(*options.camel_case_targets):
        name = element.name
        if name and name[0].isupper():
            yield Hit(
                locator=element.path,
                message=f"{element.tag} '{name}' starts with an uppercase letter (camelCase)",
            )


def check_reserved_keywords(document: Document, options: NamingOptions) -> Iterator[Hit]:
    reserved = {keyword.lower() for keyword in options.reserved_keywords}
    for element in document.iter(*options.reserved_targets):
        name = element.name
        if name and name.lower() in reserved:
            yield Hit(
                locator=element.path,
                message=f"{element.tag} '{name}' uses the reserved keyword '{name.lower()}'",
            )


def get_rules() -> List[Rule]:
    return [
        Rule(
            id="required-prefix",
            name="Element names carry the required prefix",
            category="naming",
            severity=Severity.WARNING,
            check=check_required_prefix,
            options="naming",
        ),
        Rule(
            id="camel-case",
            name="Field names are camelCase",
            category="naming",
            severity=Severity.WARNING,
            check=check_camel_case,
            options="naming",
        ),
        Rule(
            id="reserved-keyword",
            name="Field names avoid reserved keywords",
            category="naming",
            severity=Severity.ERROR,
            check=check_reserved_keywords,
            options="naming",
        ),
    ]
