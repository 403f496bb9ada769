from __future__ import annotations

import re
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Sequence, Tuple

from resource_typer.inference.mappings import DialectSpec

NullPolicy = Literal["null", "unknown"]

# Exact-format date strings; anything that only partially matches is a plain string.
_DATE_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII),
    re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII),
    re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?", re.ASCII),
)


class ValueKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OPAQUE = "opaque"


def is_date_string(value: str) -> bool:
    return any(p.fullmatch(value) for p in _DATE_PATTERNS)


def classify(value: Any) -> ValueKind:
    """Tag a JSON-compatible runtime value with its kind."""
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float, Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    return ValueKind.OPAQUE


def sequential_values(mapping: Mapping[Any, Any]) -> List[Any] | None:
    """Return the values of `mapping` if its keys are exactly 0..n-1 in order, else None.

    Keys may be ints or their decimal string form ("0", "1", ...), which is how
    list-like objects come back after a JSON round trip.
    """
    if not mapping:
        return None
    for expected, key in enumerate(mapping):
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            if key != expected:
                return None
        elif isinstance(key, str):
            if key != str(expected):
                return None
        else:
            return None
    return list(mapping.values())


class ValueInferencer:
    """Infers an annotation from a runtime value. Total: never raises."""

    def __init__(self, dialect: DialectSpec, *, null_policy: NullPolicy = "null"):
        if null_policy not in ("null", "unknown"):
            raise ValueError(f"Unsupported null_policy {null_policy!r}")
        self.dialect = dialect
        self.null_policy = null_policy

    def infer(self, value: Any) -> str:
        d = self.dialect
        kind = classify(value)

        if kind is ValueKind.NULL:
            return d.null if self.null_policy == "null" else d.unknown
        if kind is ValueKind.BOOLEAN:
            return d.boolean
        if kind is ValueKind.NUMBER:
            return d.number
        if kind is ValueKind.STRING:
            return d.date if is_date_string(value) else d.string
        if kind is ValueKind.SEQUENCE:
            return self._infer_sequence(value)
        if kind is ValueKind.MAPPING:
            items = sequential_values(value)
            if items is None:
                return d.object
            return self._infer_sequence(items)
        return d.unknown

    def _infer_sequence(self, items: Sequence[Any]) -> str:
        # Only the first element is sampled.
        if len(items) == 0:
            return self.dialect.array_of(self.dialect.unknown)
        return self.dialect.array_of(self.infer(items[0]))

    def infer_fields(self, data: Mapping[str, Any]) -> List[Tuple[str, str]]:
        return [(str(key), self.infer(value)) for key, value in data.items()]

    def infer_mapping(self, data: Mapping[str, Any]) -> Dict[str, str]:
        return dict(self.infer_fields(data))
