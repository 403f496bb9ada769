from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional


@dataclass(frozen=True)
class ManifestSourceRuntimeConfig:
    """Runtime settings for the manifest schema source (no pydantic beyond wiring)."""
    kind: Literal["manifest"] = "manifest"
    models_path: str = ""


@dataclass(frozen=True)
class SqlAlchemySourceRuntimeConfig:
    kind: Literal["sqlalchemy"] = "sqlalchemy"
    url: str = ""
    schema: Optional[str] = None
    models_path: Optional[str] = None
    table_overrides: Dict[str, str] = field(default_factory=dict)   # model name -> table name
    engine_options: Dict[str, object] = field(default_factory=dict)
