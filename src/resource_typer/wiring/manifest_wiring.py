from __future__ import annotations

from resource_typer.core.exceptions import ConfigurationMissingError
from resource_typer.models.generator_config import TypeGeneratorConfig
from resource_typer.models.source_config import ManifestSourceConfig
from resource_typer.sources.types import ManifestSourceRuntimeConfig
from resource_typer.wiring.source_registry import BuiltSourceArgs, register_source_wiring


@register_source_wiring(kind="manifest")
def build_manifest_source_args(
    *,
    source: ManifestSourceConfig,
    generator: TypeGeneratorConfig,
) -> BuiltSourceArgs:
    models_path = source.models_path or generator.models_path
    if not models_path:
        raise ConfigurationMissingError(
            reason="manifest schema source requires models_path",
            details={"schema_source": "manifest"},
        )
    return BuiltSourceArgs(args=(ManifestSourceRuntimeConfig(models_path=models_path),), kwargs={})
