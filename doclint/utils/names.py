"""Name helpers shared by the naming-oriented rules and companion-name derivations."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping, Optional


def simple_name(name: str) -> str:
    """Strip a package qualifier: ``com.acme.model.PBInvoice`` -> ``PBInvoice``."""

    return name.rsplit(".", 1)[-1]


def capitalize_first(name: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""

    return name[:1].upper() + name[1:]


Derivation = Callable[[str, str], Optional[str]]

ORDER_BY_MARKER = "OrderBy"


def derive_capitalized(name: str, prefix: str) -> Optional[str]:
    return prefix + capitalize_first(name)


def derive_verbatim(name: str, prefix: str) -> Optional[str]:
    return prefix + name


def derive_order_by_base(name: str, prefix: str) -> Optional[str]:
    if ORDER_BY_MARKER not in name:
        return None
    base = name.split(ORDER_BY_MARKER, 1)[0]
    if not base:
        return None
    return prefix + capitalize_first(base)


# Companion-name strategies selectable by name; extend per run through
# PairingOptions.custom_derivations.
DERIVATIONS: Mapping[str, Derivation] = MappingProxyType(
    {
        "capitalize": derive_capitalized,
        "verbatim": derive_verbatim,
        "order-by-base": derive_order_by_base,
    }
)
