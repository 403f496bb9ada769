from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Optional

Dialect = Literal["ts", "js"]

DIALECTS: tuple[str, ...] = ("ts", "js")

# Declared-type names as reported by schema sources (lowercased, no parameters).
TS_TYPE_MAPPINGS: Mapping[str, str] = MappingProxyType(
    {
        # integers
        "integer": "number",
        "int": "number",
        "bigint": "number",
        "biginteger": "number",
        "big_integer": "number",
        "smallint": "number",
        "smallinteger": "number",
        "small_integer": "number",
        "tinyint": "number",
        "mediumint": "number",
        "serial": "number",
        "bigserial": "number",
        # floating / fixed point
        "float": "number",
        "double": "number",
        "double_precision": "number",
        "real": "number",
        "decimal": "number",
        "numeric": "number",
        # text
        "string": "string",
        "varchar": "string",
        "nvarchar": "string",
        "char": "string",
        "nchar": "string",
        "text": "string",
        "unicode": "string",
        "unicode_text": "string",
        "mediumtext": "string",
        "longtext": "string",
        "uuid": "string",
        "ulid": "string",
        "enum": "string",
        "binary": "string",
        "blob": "string",
        "largebinary": "string",
        "large_binary": "string",
        # booleans
        "boolean": "boolean",
        "bool": "boolean",
        # temporal values travel as strings in JSON
        "date": "string",
        "datetime": "string",
        "datetimetz": "string",
        "timestamp": "string",
        "timestamptz": "string",
        "time": "string",
        "interval": "string",
        "year": "number",
        # structured
        "json": "Record<string, any>",
        "jsonb": "Record<string, any>",
        "array": "any[]",
    }
)

JS_TYPE_MAPPINGS: Mapping[str, str] = MappingProxyType(
    {
        key: {"Record<string, any>": "Object<string, *>", "any[]": "Array<*>"}.get(value, value)
        for key, value in TS_TYPE_MAPPINGS.items()
    }
)


@dataclass(frozen=True)
class DialectSpec:
    """Annotation vocabulary of one output dialect."""
    name: str
    extension: str
    unknown: str
    number: str = "number"
    string: str = "string"
    boolean: str = "boolean"
    date: str = "Date"
    object: str = "object"
    null: str = "null"
    array_marker: str = "[]"
    nullable_union: bool = True     # js has no enforced nullability

    def array_of(self, element: str) -> str:
        if " " in element:
            element = f"({element})"
        return f"{element}{self.array_marker}"

    def with_null(self, base: str) -> str:
        if not self.nullable_union or base == self.unknown:
            return base
        return f"{base} | {self.null}"


TS = DialectSpec(name="ts", extension="ts", unknown="any")
JS = DialectSpec(name="js", extension="js", unknown="*", object="Object", nullable_union=False)

_SPECS: Dict[str, DialectSpec] = {"ts": TS, "js": JS}
_DEFAULT_TABLES: Dict[str, Mapping[str, str]] = {"ts": TS_TYPE_MAPPINGS, "js": JS_TYPE_MAPPINGS}

_TYPE_PARAMS = re.compile(r"\(.*\)$")
_SEPARATORS = re.compile(r"\s+")


def get_dialect(name: str) -> DialectSpec:
    try:
        return _SPECS[name]
    except KeyError as exc:
        raise ValueError(f"Unsupported dialect {name!r}; expected one of {DIALECTS}") from exc


def normalize_declared_type(declared_type: str) -> str:
    """Normalize a declared type name for table lookup: 'VARCHAR(255)' -> 'varchar'."""
    cleaned = _TYPE_PARAMS.sub("", str(declared_type or "").strip()).strip().lower()
    return _SEPARATORS.sub("_", cleaned)


class TypeMapping:
    """Read-only declared-type table for one dialect; unknown names map to the sentinel."""

    def __init__(self, dialect: DialectSpec, table: Mapping[str, str]):
        self.dialect = dialect
        self._table: Mapping[str, str] = MappingProxyType(
            {normalize_declared_type(k): v for k, v in table.items()}
        )

    def lookup(self, declared_type: str) -> str:
        return self._table.get(normalize_declared_type(declared_type), self.dialect.unknown)

    def __contains__(self, declared_type: object) -> bool:
        return isinstance(declared_type, str) and normalize_declared_type(declared_type) in self._table

    def __iter__(self):
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def items(self):
        return self._table.items()


def build_type_mapping(dialect: str, overrides: Optional[Mapping[str, str]] = None) -> TypeMapping:
    """Build the mapping table for `dialect`, with `overrides` layered over the defaults."""
    spec = get_dialect(dialect)
    table: Dict[str, str] = dict(_DEFAULT_TABLES[spec.name])
    if overrides:
        table.update({normalize_declared_type(k): v for k, v in overrides.items()})
    return TypeMapping(spec, table)
