from __future__ import annotations

from resource_typer.models.generator_config import TypeGeneratorConfig
from resource_typer.models.source_config import SqlAlchemySourceConfig
from resource_typer.sources.types import SqlAlchemySourceRuntimeConfig
from resource_typer.wiring.source_registry import BuiltSourceArgs, register_source_wiring


@register_source_wiring(kind="sqlalchemy")
def build_sqlalchemy_source_args(
    *,
    source: SqlAlchemySourceConfig,
    generator: TypeGeneratorConfig,
) -> BuiltSourceArgs:
    runtime_cfg = SqlAlchemySourceRuntimeConfig(
        url=source.url,
        schema=source.schema_name,
        models_path=source.models_path or generator.models_path,
        table_overrides=dict(source.table_overrides),
        engine_options=dict(source.engine_options),
    )
    # The source builds its own engine from the URL.
    return BuiltSourceArgs(args=(runtime_cfg,), kwargs={})
