"""Attribute validators and import ID parsing.

Validators are built by factory functions and raise ValueError with an
operator-readable message when a value is rejected.
"""
from __future__ import annotations
import json
import re
from typing import Any, Callable, Dict, List, Sequence

from cryptography.hazmat.primitives.serialization import load_pem_public_key

from .diagnostics import DiagnosticError


def one_of(*allowed: str) -> Callable[[Any], None]:
    """Value must be one of the allowed strings."""
    def validate(value: Any) -> None:
        if value not in allowed:
            raise ValueError(f"value must be one of: {', '.join(repr(v) for v in allowed)}, got: {value!r}")
    return validate


def length_between(minimum: int, maximum: int) -> Callable[[Any], None]:
    def validate(value: Any) -> None:
        if not minimum <= len(value) <= maximum:
            raise ValueError(f"string length must be between {minimum} and {maximum}, got: {len(value)}")
    return validate


def regex_matches(pattern: str, message: str) -> Callable[[Any], None]:
    compiled = re.compile(pattern)
    
    def validate(value: Any) -> None:
        if not compiled.match(value):
            raise ValueError(f"value {message}")
    return validate


def int_between(minimum: int, maximum: int) -> Callable[[Any], None]:
    def validate(value: Any) -> None:
        if not minimum <= value <= maximum:
            raise ValueError(f"value must be between {minimum} and {maximum}, got: {value}")
    return validate


def size_at_least(minimum: int) -> Callable[[Any], None]:
    def validate(value: Any) -> None:
        if len(value) < minimum:
            raise ValueError(f"set must contain at least {minimum} elements, got: {len(value)}")
    return validate


def each(validator: Callable[[Any], None]) -> Callable[[Any], None]:
    """Apply a validator to every element of a list or set."""
    def validate(value: Any) -> None:
        for element in value:
            validator(element)
    return validate


def json_object_of_strings(value: Any) -> None:
    """Value must be a JSON document encoding an object of string -> string."""
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        raise ValueError("must be valid JSON object with string keys and values")
    if not isinstance(decoded, dict) or not all(isinstance(v, str) for v in decoded.values()):
        raise ValueError("must be valid JSON object with string keys and values")


def pem_public_key(value: Any) -> None:
    """Value must be a PEM encoded public key."""
    if not value:
        raise ValueError("public_key is required")
    try:
        load_pem_public_key(value.encode())
    except (ValueError, TypeError) as exc:
        raise ValueError(f"public_key is not a valid PEM public key: {exc}")


def parse_import_id(import_id: str, fields: Sequence[str], greedy_last: bool = False) -> Dict[str, str]:
    """Split a dot-separated import ID into named parts.
    
    Args:
        import_id: ID given by the operator (e.g. ``my-project.production``)
        fields: Names of the expected parts, in order
        greedy_last: Let the last part contain dots (URLs)
        
    Returns:
        Mapping of field name to part
        
    Raises:
        DiagnosticError: If the ID has the wrong number of parts or an empty part
    """
    expected = ".".join(fields)
    if greedy_last:
        parts: List[str] = import_id.split(".", len(fields) - 1)
    else:
        parts = import_id.split(".")
    if len(parts) != len(fields) or not all(parts):
        raise DiagnosticError(
            "Invalid import ID format",
            f"Expected import ID format: {expected}, got: {import_id}",
        )
    return dict(zip(fields, parts))
