from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from sqlalchemy.types import Enum as SqlEnum, Float, Numeric, TypeEngine

from resource_typer.core.base_source import BaseSchemaSource
from resource_typer.core.exceptions import IntrospectionError, SourceNotFoundError
from resource_typer.inference.naming import default_table_name, snake_case, to_pascal_segments
from resource_typer.sources.model_scanner import scan_models
from resource_typer.sources.registry import register_schema_source
from resource_typer.sources.types import SqlAlchemySourceRuntimeConfig


def declared_type_name(col_type: TypeEngine) -> str:
    """Name a reflected column type the way mapping tables key it: VARCHAR(255) -> 'varchar'."""
    name = getattr(type(col_type), "__visit_name__", None) or type(col_type).__name__
    return str(name).lower()


@register_schema_source(kind="sqlalchemy")
class SqlAlchemySchemaSource(BaseSchemaSource):
    """
    Schema source that reflects a live database through SQLAlchemy's inspector.

    Models come from `models_path` (declarative classes with `__tablename__`)
    when configured; otherwise every reflected table is treated as a model
    named after the table in PascalCase.
    """

    def __init__(self, config: SqlAlchemySourceRuntimeConfig, *, engine: Optional[Engine] = None):
        super().__init__(config)
        self._owns_engine = engine is None
        self.engine = engine or create_engine(config.url, **dict(config.engine_options))
        self._inspector = None
        self._columns: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._models: Dict[str, str] | None = None

    @property
    def inspector(self):
        if self._inspector is None:
            try:
                self._inspector = inspect(self.engine)
            except SQLAlchemyError as exc:
                raise IntrospectionError(reason="Cannot inspect database", details={"error": str(exc)}) from exc
        return self._inspector

    def close(self) -> None:
        if self._owns_engine:
            self.engine.dispose()

    # --- model discovery ---
    def _model_tables(self) -> Dict[str, str]:
        if self._models is not None:
            return self._models
        cfg: SqlAlchemySourceRuntimeConfig = self.config
        models: Dict[str, str] = {}
        if cfg.models_path:
            for name, spec in scan_models(cfg.models_path).items():
                models[name] = spec.table
        else:
            try:
                tables = self.inspector.get_table_names(schema=cfg.schema)
            except SQLAlchemyError as exc:
                raise IntrospectionError(reason="Cannot list tables", details={"error": str(exc)}) from exc
            for table in tables:
                models[to_pascal_segments(table)] = table
        models.update(cfg.table_overrides)
        self._models = models
        return models

    def list_models(self) -> List[str]:
        return list(self._model_tables().keys())

    def table_for_model(self, model_name: str) -> str:
        cfg: SqlAlchemySourceRuntimeConfig = self.config
        if model_name in cfg.table_overrides:
            return cfg.table_overrides[model_name]
        models = self._model_tables()
        if model_name in models:
            return models[model_name]
        if cfg.models_path:
            raise SourceNotFoundError(
                reason="Model class not found",
                details={"model": model_name, "models_path": cfg.models_path},
            )
        for candidate in (default_table_name(model_name), snake_case(model_name)):
            if self._has_table(candidate):
                return candidate
        raise SourceNotFoundError(reason="No table found for model", details={"model": model_name})

    # --- column reflection ---
    def _has_table(self, table: str) -> bool:
        try:
            return self.inspector.has_table(table, schema=self.config.schema)
        except SQLAlchemyError as exc:
            raise IntrospectionError(reason="Cannot check table", details={"table": table, "error": str(exc)}) from exc

    def _reflect(self, table: str) -> Dict[str, Dict[str, Any]]:
        if table in self._columns:
            return self._columns[table]
        if not self._has_table(table):
            raise SourceNotFoundError(reason="Table not found", details={"table": table})
        try:
            reflected = self.inspector.get_columns(table, schema=self.config.schema)
        except NoSuchTableError as exc:
            raise SourceNotFoundError(reason="Table not found", details={"table": table}) from exc
        except SQLAlchemyError as exc:
            raise IntrospectionError(reason="Cannot reflect columns", details={"table": table, "error": str(exc)}) from exc
        self._columns[table] = {col["name"]: col for col in reflected}
        return self._columns[table]

    def _column(self, table: str, column: str) -> Dict[str, Any]:
        columns = self._reflect(table)
        try:
            return columns[column]
        except KeyError as exc:
            raise SourceNotFoundError(reason="Column not found", details={"table": table, "column": column}) from exc

    def list_columns(self, table: str) -> List[str]:
        return list(self._reflect(table).keys())

    def column_declared_type(self, table: str, column: str) -> str:
        return declared_type_name(self._column(table, column)["type"])

    def column_is_nullable(self, table: str, column: str) -> bool:
        return bool(self._column(table, column).get("nullable", True))

    def column_is_decimal(self, table: str, column: str) -> bool:
        col_type = self._column(table, column)["type"]
        return isinstance(col_type, Numeric) and not isinstance(col_type, Float)

    def column_is_enum(self, table: str, column: str) -> bool:
        return isinstance(self._column(table, column)["type"], SqlEnum)
