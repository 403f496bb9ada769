from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, NonNegativeInt, field_validator

from resource_typer.models.source_config import ApiConnectionConfig, SchemaSourceConfig


class TypeGeneratorConfig(BaseModel):
    # --- output ---
    output_path: str = "resources/js/types"
    dialect: Literal["ts", "js"] = "ts"

    # --- schema-driven generation ---
    models_path: Optional[str] = None
    schema_source: Optional[SchemaSourceConfig] = None
    model_suffix: str = "Resource"

    # --- type policy ---
    type_mappings: Dict[str, str] = Field(default_factory=dict)   # declared type -> ts annotation overrides
    exclude_columns: List[str] = Field(default_factory=lambda: ["password", "remember_token"])
    null_policy: Literal["null", "unknown"] = "null"

    # --- live response typing ---
    auto_generate: bool = True
    live_suffix: str = "Type"
    route_prefix: str = "api/"
    freshness_seconds: NonNegativeInt = 3600
    api: Optional[ApiConnectionConfig] = None

    @field_validator("type_mappings")
    @classmethod
    def _no_blank_annotations(cls, value: Dict[str, str]) -> Dict[str, str]:
        blank = [k for k, v in value.items() if not str(v).strip()]
        if blank:
            raise ValueError(f"type_mappings has empty annotations for: {blank}")
        return value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeGeneratorConfig":
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "TypeGeneratorConfig":
        return cls.model_validate(read_config_file(path))


def read_config_file(path: str | Path) -> Dict[str, Any]:
    """Read a JSON or YAML config file into a plain dict."""
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_file, "r", encoding="utf-8") as f:
        if config_file.suffix == ".json":
            data = json.load(f)
        elif config_file.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            raise ValueError(
                f"Unsupported config format: {config_file.suffix}. Use .json or .yaml"
            )
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping at the top level: {path}")
    return data
