"""Utility helpers for the linter."""

from .fileio import read_bytes_file, read_text_file, read_yaml_file
from .names import DERIVATIONS, Derivation, capitalize_first, simple_name

__all__ = [
    "read_bytes_file",
    "read_text_file",
    "read_yaml_file",
    "DERIVATIONS",
    "Derivation",
    "capitalize_first",
    "simple_name",
]
