from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from resource_typer.core.base_source import BaseSchemaSource
from resource_typer.core.exceptions import ConfigurationMissingError, IntrospectionError, SourceNotFoundError
from resource_typer.inference.naming import default_table_name
from resource_typer.sources.registry import register_schema_source
from resource_typer.sources.types import ManifestSourceRuntimeConfig

MANIFEST_EXTENSIONS = (".yaml", ".yml", ".json")


@register_schema_source(kind="manifest")
class ManifestSchemaSource(BaseSchemaSource):
    """
    Schema source backed by one manifest file per model.

    `models_path/User.yaml`:

        table: users
        columns:
          - name: id
            type: integer
          - name: email
            type: string
            nullable: true
          - name: status
            type: string
            enum: true
          - name: balance
            type: decimal

    `columns` may also be a mapping of column name -> type string or
    column name -> attribute mapping. `decimal: true` marks fixed-point columns;
    the declared type `decimal`/`numeric` implies it as well.
    """

    def __init__(self, config: ManifestSourceRuntimeConfig):
        super().__init__(config)
        self.base_path = Path(config.models_path)
        self._manifests: Dict[str, Dict[str, Any]] | None = None
        self._tables: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def _load_file(self, path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                return json.load(f) or {}
            return yaml.safe_load(f) or {}

    def _load_all(self) -> Dict[str, Dict[str, Any]]:
        if self._manifests is not None:
            return self._manifests
        if not self.base_path.is_dir():
            raise ConfigurationMissingError(
                reason="Models directory not found",
                details={"models_path": str(self.base_path)},
            )
        manifests: Dict[str, Dict[str, Any]] = {}
        for file in sorted(self.base_path.iterdir()):
            if file.suffix not in MANIFEST_EXTENSIONS:
                continue
            try:
                manifest = self._load_file(file)
            except (OSError, ValueError, yaml.YAMLError) as exc:
                self.log_warn(f"Skipping unreadable manifest {file.name}: {exc}")
                continue
            if not isinstance(manifest, dict):
                self.log_warn(f"Skipping manifest {file.name}: top level must be a mapping")
                continue
            model = manifest.get("model") or file.stem
            table = manifest.get("table") or default_table_name(str(model))
            if not isinstance(model, str) or not isinstance(table, str):
                self.log_warn(f"Skipping manifest {file.name}: model and table must be strings")
                continue
            manifests[model] = manifest
            self._tables[table] = self._normalize_columns(manifest.get("columns"))
        self.log_info(f"Loaded {len(manifests)} model manifest(s) from {self.base_path}")
        self._manifests = manifests
        return manifests

    @staticmethod
    def _normalize_columns(raw: Any) -> Dict[str, Dict[str, Any]]:
        columns: Dict[str, Dict[str, Any]] = {}
        if isinstance(raw, dict):
            for name, spec in raw.items():
                if isinstance(spec, dict):
                    columns[str(name)] = dict(spec)
                else:
                    columns[str(name)] = {"type": spec}
        elif isinstance(raw, list):
            for entry in raw:
                if isinstance(entry, dict) and "name" in entry:
                    columns[str(entry["name"])] = dict(entry)
        return columns

    # --- BaseSchemaSource ---
    def list_models(self) -> List[str]:
        return list(self._load_all().keys())

    def table_for_model(self, model_name: str) -> str:
        manifests = self._load_all()
        if model_name not in manifests:
            raise SourceNotFoundError(
                reason="Model manifest not found",
                details={"model": model_name, "models_path": str(self.base_path)},
            )
        return manifests[model_name].get("table") or default_table_name(model_name)

    def _table(self, table: str) -> Dict[str, Dict[str, Any]]:
        self._load_all()
        try:
            return self._tables[table]
        except KeyError as exc:
            raise SourceNotFoundError(reason="Table not found", details={"table": table}) from exc

    def _column(self, table: str, column: str) -> Dict[str, Any]:
        columns = self._table(table)
        try:
            return columns[column]
        except KeyError as exc:
            raise SourceNotFoundError(reason="Column not found", details={"table": table, "column": column}) from exc

    def list_columns(self, table: str) -> List[str]:
        return list(self._table(table).keys())

    def column_declared_type(self, table: str, column: str) -> str:
        return str(self._column(table, column).get("type") or "")

    def column_is_nullable(self, table: str, column: str) -> bool:
        value = self._column(table, column).get("nullable", False)
        if not isinstance(value, bool):
            raise IntrospectionError(
                reason="nullable must be a boolean",
                details={"table": table, "column": column, "value": value},
            )
        return value

    def column_is_decimal(self, table: str, column: str) -> bool:
        spec = self._column(table, column)
        if "decimal" in spec:
            return bool(spec["decimal"])
        return str(spec.get("type") or "").lower().split("(")[0] in {"decimal", "numeric"}

    def column_is_enum(self, table: str, column: str) -> bool:
        spec = self._column(table, column)
        if "enum" in spec:
            return bool(spec["enum"])
        return str(spec.get("type") or "").lower() == "enum"
