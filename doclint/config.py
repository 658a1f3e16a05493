"""Recognized options for the built-in rules and the sidecar config loader.

Defaults follow the Bonita BDM conventions (``bom.xml``). Every value can be
overridden from a YAML file such as::

    naming:
      prefix: ACME
    length-constraint:
      limits:
        index: 30
    severity_overrides:
      camel-case: error
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError
from .severity import Severity
from .utils import DERIVATIONS, Derivation, read_yaml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = ".doclint.yml"


@dataclass(frozen=True)
class DocumentationOptions:
    targets: Tuple[str, ...] = (
        "businessObject",
        "field",
        "relationField",
        "query",
        "customQuery",
        "index",
        "uniqueConstraint",
    )
    description_field: str = "description"


@dataclass(frozen=True)
class NamingOptions:
    prefix: str = "PB"
    prefix_targets: Tuple[str, ...] = ("businessObject",)
    camel_case_targets: Tuple[str, ...] = ("field", "relationField")
    reserved_targets: Tuple[str, ...] = ("field", "relationField")
    reserved_keywords: Tuple[str, ...] = ("type", "status", "order", "group", "key", "value")


@dataclass(frozen=True)
class PairingOptions:
    targets: Tuple[str, ...] = ("query", "customQuery")
    return_attribute: str = "returnType"
    collection_types: Tuple[str, ...] = ("java.util.List",)
    companion_prefix: str = "countFor"
    derivations: Tuple[str, ...] = ("capitalize", "verbatim", "order-by-base")
    exempt_prefixes: Tuple[str, ...] = ("count",)
    # Extra strategies for this run only; not settable from YAML.
    custom_derivations: Mapping[str, Derivation] = field(
        default_factory=lambda: MappingProxyType({}), metadata={"yaml": False}
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "custom_derivations", MappingProxyType(dict(self.custom_derivations)))
        table = self.derivation_table()
        unknown = [name for name in self.derivations if name not in table]
        if unknown:
            raise ConfigError(
                f"Unknown companion derivation(s): {', '.join(unknown)} (known: {', '.join(table)})"
            )

    def derivation_table(self) -> Mapping[str, Derivation]:
        return {**DERIVATIONS, **self.custom_derivations}


@dataclass(frozen=True)
class IndexCoverageOptions:
    query_targets: Tuple[str, ...] = ("query", "customQuery")
    content_attribute: str = "content"
    clauses: Tuple[str, ...] = ("WHERE", "ORDER BY", "ON")
    index_targets: Tuple[str, ...] = ("index", "uniqueConstraint")
    index_field_tags: Tuple[str, ...] = ("fieldName", "fieldPath")
    stopwords: Tuple[str, ...] = ("persistenceId", "persistenceVersion")


@dataclass(frozen=True)
class RequiredFieldsOptions:
    targets: Tuple[str, ...] = ("businessObject",)
    field_tags: Tuple[str, ...] = ("field", "relationField")
    required: Tuple[Tuple[str, ...], ...] = (
        ("processInstanceId",),
        ("creationDate", "auCreationDate"),
        ("creationUser",),
        ("modificationDate",),
        ("modificationUser",),
    )


@dataclass(frozen=True)
class LengthOptions:
    limits: Dict[str, int] = field(default_factory=lambda: {"index": 20, "uniqueConstraint": 20})


@dataclass(frozen=True)
class LintConfig:
    """Options handed to every rule invocation."""

    documentation: DocumentationOptions = field(default_factory=DocumentationOptions)
    naming: NamingOptions = field(default_factory=NamingOptions)
    pairing: PairingOptions = field(default_factory=PairingOptions)
    index_coverage: IndexCoverageOptions = field(default_factory=IndexCoverageOptions)
    required_fields: RequiredFieldsOptions = field(default_factory=RequiredFieldsOptions)
    length: LengthOptions = field(default_factory=LengthOptions)
    severity_overrides: Dict[str, Severity] = field(default_factory=dict)
    report_passes: bool = False

    def severity_for(self, rule_id: str, default: Severity) -> Severity:
        return self.severity_overrides.get(rule_id, default)


# YAML section name -> (LintConfig attribute, options class)
SECTIONS: Mapping[str, Tuple[str, type]] = {
    "documentation": ("documentation", DocumentationOptions),
    "naming": ("naming", NamingOptions),
    "completeness-pairing": ("pairing", PairingOptions),
    "index-coverage": ("index_coverage", IndexCoverageOptions),
    "required-fields": ("required_fields", RequiredFieldsOptions),
    "length-constraint": ("length", LengthOptions),
}


def _coerce(section: str, key: str, value: Any, default: Any) -> Any:
    if isinstance(default, tuple):
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise ConfigError(f"{section}.{key} must be a list")
        if default and isinstance(default[0], tuple):
            # alias groups: each entry is a name or a list of accepted names
            return tuple(
                tuple(str(alias) for alias in item) if isinstance(item, (list, tuple)) else (str(item),)
                for item in value
            )
        return tuple(str(item) for item in value)
    if isinstance(default, dict):
        if not isinstance(value, dict):
            raise ConfigError(f"{section}.{key} must be a mapping")
        try:
            return {str(name): int(limit) for name, limit in value.items()}
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{section}.{key} values must be integers") from exc
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"{section}.{key} must be true or false")
        return value
    if not isinstance(value, str):
        raise ConfigError(f"{section}.{key} must be a string")
    return value


def _build_section(section: str, cls: type, data: Any) -> Any:
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{section}' must be a mapping")
    defaults = cls()
    known = {item.name for item in dataclasses.fields(cls) if item.metadata.get("yaml", True)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        attr = str(key).replace("-", "_")
        if attr not in known:
            raise ConfigError(f"Unknown option '{key}' in section '{section}'")
        values[attr] = _coerce(section, str(key), value, getattr(defaults, attr))
    return dataclasses.replace(defaults, **values)


def config_from_dict(data: Optional[Mapping[str, Any]]) -> LintConfig:
    """Build a :class:`LintConfig` from an already parsed mapping."""

    if not data:
        return LintConfig()
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration root must be a mapping")

    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key in SECTIONS:
            attr, cls = SECTIONS[key]
            values[attr] = _build_section(key, cls, value)
        elif key == "severity_overrides":
            if not isinstance(value, dict):
                raise ConfigError("severity_overrides must be a mapping")
            try:
                values[key] = {str(rule_id): Severity.parse(level) for rule_id, level in value.items()}
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
        elif key == "report_passes":
            values[key] = _coerce("config", key, value, False)
        else:
            raise ConfigError(f"Unknown configuration section '{key}'")
    return LintConfig(**values)


def load_config(path: Optional[Path] = None) -> LintConfig:
    """Load the sidecar configuration, falling back to defaults when absent."""

    location = path or Path(DEFAULT_CONFIG_FILENAME)
    if path is not None and not location.is_file():
        raise ConfigError(f"Configuration file not found: {location}")
    try:
        data = read_yaml_file(location)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {location}: {exc}") from exc
    if data is None:
        logger.debug("No configuration at %s, using defaults", location)
        return LintConfig()
    logger.debug("Loaded configuration from %s", location)
    return config_from_dict(data)
