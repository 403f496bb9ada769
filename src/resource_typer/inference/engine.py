from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from resource_typer.core.contracts import ColumnDescriptor, TypeDocument
from resource_typer.inference.mappings import DialectSpec, TypeMapping, build_type_mapping
from resource_typer.inference.naming import derive_type_name
from resource_typer.inference.resolver import DeclaredTypeResolver
from resource_typer.inference.values import NullPolicy, ValueInferencer
from resource_typer.rendering.assembler import render_document


@dataclass(frozen=True)
class EngineSettings:
    """Everything the engine needs, passed in explicitly at construction."""
    dialect: str = "ts"
    type_mappings: Mapping[str, str] = field(default_factory=dict)  # overrides over the dialect defaults
    null_policy: NullPolicy = "null"
    exclude_columns: FrozenSet[str] = frozenset()


class TypeInferenceEngine:
    """
    Single entry point for turning schema columns or runtime values into
    declaration file text.

    The engine is pure: it never touches the filesystem and never logs.
    Callers (the generator, the CLI) own I/O and reporting.

    Example:
        >>> engine = TypeInferenceEngine(EngineSettings(dialect="ts"))
        >>> engine.infer({"id": 1})
        'object'
        >>> engine.infer(["a", "b"])
        'string[]'
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()
        self.mapping: TypeMapping = build_type_mapping(
            self.settings.dialect,
            self.settings.type_mappings if self.settings.dialect == "ts" else None,
        )
        self._resolver = DeclaredTypeResolver(self.mapping)
        self._inferencer = ValueInferencer(self.mapping.dialect, null_policy=self.settings.null_policy)

    @property
    def dialect(self) -> DialectSpec:
        return self.mapping.dialect

    # --- inference ---
    def resolve(self, column: ColumnDescriptor) -> str:
        return self._resolver.resolve(column)

    def infer(self, value: Any) -> str:
        return self._inferencer.infer(value)

    def columns_to_fields(self, columns: Sequence[ColumnDescriptor]) -> List[Tuple[str, str]]:
        return [(c.name, self.resolve(c)) for c in columns]

    def values_to_fields(self, data: Mapping[str, Any]) -> List[Tuple[str, str]]:
        return self._inferencer.infer_fields(data)

    # --- naming ---
    @staticmethod
    def type_name(source: str, suffix: str = "") -> str:
        return derive_type_name(source, suffix)

    def file_name(self, type_name: str) -> str:
        return f"{type_name}.{self.dialect.extension}"

    # --- assembly ---
    def document_from_columns(self, name: str, columns: Sequence[ColumnDescriptor], *, origin: Optional[str] = None) -> TypeDocument:
        return TypeDocument(name=name, fields=self.columns_to_fields(columns), origin=origin)

    def document_from_values(self, name: str, data: Mapping[str, Any], *, origin: Optional[str] = None) -> TypeDocument:
        return TypeDocument(name=name, fields=self.values_to_fields(data), origin=origin)

    def render(self, document: TypeDocument, *, generated_at: Optional[datetime] = None) -> str:
        filtered = document.without(self.settings.exclude_columns)
        return render_document(filtered, self.dialect.name, generated_at=generated_at)
