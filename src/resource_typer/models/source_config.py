from __future__ import annotations

from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field, PositiveFloat, model_validator


class ManifestSourceConfig(BaseModel):
    """Columns described by YAML/JSON manifests, one file per model."""

    kind: Literal["manifest"] = "manifest"

    # Falls back to the top-level models_path when omitted.
    models_path: Optional[str] = None


class SqlAlchemySourceConfig(BaseModel):
    """Columns reflected from a live database."""

    kind: Literal["sqlalchemy"] = "sqlalchemy"

    url: str
    schema_name: Optional[str] = Field(default=None, alias="schema")
    models_path: Optional[str] = None
    table_overrides: Dict[str, str] = Field(default_factory=dict)
    engine_options: Dict[str, object] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _validate_url(self) -> "SqlAlchemySourceConfig":
        if "://" not in self.url:
            raise ValueError("url must be a SQLAlchemy database URL, e.g. 'sqlite:///app.db'")
        return self


SchemaSourceConfig = Annotated[
    Union[ManifestSourceConfig, SqlAlchemySourceConfig],
    Field(discriminator="kind"),
]


class ApiConnectionConfig(BaseModel):
    """Backend used by `probe` to fetch live responses."""

    base_url: str
    timeout_seconds: PositiveFloat = 10.0
    headers: Dict[str, str] = Field(default_factory=dict)
