from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List

from resource_typer.core.contracts import ColumnDescriptor
from resource_typer.core.exceptions import IntrospectionError
from resource_typer.core.logger import get_logger


class BaseSchemaSource(ABC):
    """
    Supplies column name -> declared type metadata for models.

    Implementations raise SourceNotFoundError when a model, table or column
    does not exist, and IntrospectionError when a lookup fails otherwise.
    """

    def __init__(self, config: Any = None):
        self.config = config
        self.log = get_logger(self.__class__.__name__)

    # --- Required methods ---
    @abstractmethod
    def list_models(self) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def table_for_model(self, model_name: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def list_columns(self, table: str) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def column_declared_type(self, table: str, column: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def column_is_nullable(self, table: str, column: str) -> bool:
        raise NotImplementedError

    # --- Optional metadata ---
    def column_is_decimal(self, table: str, column: str) -> bool:
        return False

    def column_is_enum(self, table: str, column: str) -> bool:
        return False

    def close(self) -> None:
        pass

    # --- Logging helpers ---
    def log_info(self, msg: str):
        self.log.info(msg)

    def log_warn(self, msg: str):
        self.log.warning(msg)

    def describe_column(self, table: str, column: str) -> ColumnDescriptor:
        """Build a ColumnDescriptor, degrading to the raw declared type on introspection errors."""
        try:
            declared = self.column_declared_type(table, column)
        except IntrospectionError as exc:
            self.log_warn(f"Declared type unavailable for {table}.{column}: {exc}")
            return ColumnDescriptor(name=column, declared_type="")
        try:
            return ColumnDescriptor(
                name=column,
                declared_type=declared,
                nullable=self.column_is_nullable(table, column),
                is_enum=self.column_is_enum(table, column),
                is_decimal=self.column_is_decimal(table, column),
            )
        except IntrospectionError as exc:
            self.log_warn(f"Column metadata unavailable for {table}.{column}, using raw type {declared!r}: {exc}")
            return ColumnDescriptor(name=column, declared_type=declared)

    def describe_table(self, table: str) -> List[ColumnDescriptor]:
        return [self.describe_column(table, column) for column in self.list_columns(table)]
