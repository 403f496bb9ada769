from __future__ import annotations

from resource_typer.core.contracts import ColumnDescriptor
from resource_typer.inference.mappings import TypeMapping


class DeclaredTypeResolver:
    """Maps a column's declared schema type to an annotation.

    Order matters: decimal, then enum, then nullable, then the plain table
    lookup. The result is a pure function of the descriptor and the table.
    """

    def __init__(self, mapping: TypeMapping):
        self.mapping = mapping
        self.dialect = mapping.dialect

    def resolve(self, column: ColumnDescriptor) -> str:
        if column.is_decimal:
            return self.dialect.number
        if column.is_enum:
            return self.dialect.string
        base = self.mapping.lookup(column.declared_type)
        if column.nullable:
            return self.dialect.with_null(base)
        return base
