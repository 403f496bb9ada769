from __future__ import annotations

from resource_typer.inference.engine import EngineSettings
from resource_typer.models.generator_config import TypeGeneratorConfig
from resource_typer.sources.api_response import ApiConnection


def build_engine_settings(cfg: TypeGeneratorConfig) -> EngineSettings:
    return EngineSettings(
        dialect=cfg.dialect,
        type_mappings=dict(cfg.type_mappings),
        null_policy=cfg.null_policy,
        exclude_columns=frozenset(cfg.exclude_columns),
    )


def build_api_connection(cfg: TypeGeneratorConfig) -> ApiConnection | None:
    if cfg.api is None:
        return None
    return ApiConnection(
        base_url=cfg.api.base_url,
        timeout_seconds=float(cfg.api.timeout_seconds),
        headers=dict(cfg.api.headers),
    )
