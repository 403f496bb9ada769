from __future__ import annotations

import time
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from resource_typer.bootstrap import load_builtin_plugins
from resource_typer.core.base_source import BaseSchemaSource
from resource_typer.core.contracts import GenerationResult, TypeDocument
from resource_typer.core.exceptions import (
    ConfigurationMissingError,
    ErrorKind,
    GenerationError,
    ResourceTyperException,
)
from resource_typer.core.logger import get_logger, push_run_id, reset_run_id
from resource_typer.inference.engine import TypeInferenceEngine
from resource_typer.inference.naming import class_basename, strip_route_prefix
from resource_typer.models.generator_config import TypeGeneratorConfig
from resource_typer.models.source_config import ManifestSourceConfig
from resource_typer.sinks.declaration_sink import DeclarationFileSink, DeclarationSinkConfig
from resource_typer.sources.api_response import ApiResponseSource, unwrap_payload
from resource_typer.sources.registry import SchemaSourceRegistry
from resource_typer.wiring.engine_wiring import build_api_connection, build_engine_settings
from resource_typer.wiring.source_registry import SourceWiringRegistry


def build_schema_source(cfg: TypeGeneratorConfig) -> BaseSchemaSource:
    """Instantiate the configured schema source through the registries.

    Without an explicit `schema_source`, a top-level `models_path` selects the
    manifest source.
    """
    load_builtin_plugins()
    source_cfg = cfg.schema_source
    if source_cfg is None:
        if not cfg.models_path:
            raise ConfigurationMissingError(
                reason="No schema source configured",
                details={"hint": "set schema_source or models_path"},
            )
        source_cfg = ManifestSourceConfig(models_path=cfg.models_path)

    source_cls = SchemaSourceRegistry.get(source_cfg.kind)
    builder = SourceWiringRegistry.get(source_cfg.kind)
    built = builder(source=source_cfg, generator=cfg)
    return source_cls(*built.args, **built.kwargs)


class TypeGenerator:
    """
    Generates declaration files from schema metadata or live response values.

    Each unit (one model, one response) is isolated: failures are logged and
    returned as a failed GenerationResult, never raised.

    Example:
        >>> from resource_typer import TypeGenerator
        >>> generator = TypeGenerator({"output_path": "web/types", "models_path": "models"})
        >>> results = generator.run()
    """

    def __init__(
        self,
        config: Union[Dict[str, Any], TypeGeneratorConfig],
        *,
        schema_source: Optional[BaseSchemaSource] = None,
        api_source: Optional[ApiResponseSource] = None,
        run_id: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        if isinstance(config, dict):
            config = TypeGeneratorConfig.model_validate(config)
        self.config: TypeGeneratorConfig = config
        self.run_id = str(run_id) if run_id is not None else uuid.uuid4().hex[:12]
        self.engine = TypeInferenceEngine(build_engine_settings(config))
        self.sink = DeclarationFileSink(
            DeclarationSinkConfig(
                output_path=config.output_path,
                extension=self.engine.dialect.extension,
                freshness_seconds=config.freshness_seconds,
            ),
            clock=clock,
        )
        self._schema_source = schema_source
        self._api_source = api_source
        self.log = get_logger(__name__)

    # --- collaborators ---
    @property
    def schema_source(self) -> BaseSchemaSource:
        if self._schema_source is None:
            self._schema_source = build_schema_source(self.config)
        return self._schema_source

    @property
    def api_source(self) -> ApiResponseSource:
        if self._api_source is None:
            connection = build_api_connection(self.config)
            if connection is None:
                raise ConfigurationMissingError(reason="No api connection configured", details={"section": "api"})
            self._api_source = ApiResponseSource(connection)
        return self._api_source

    def close(self) -> None:
        if self._schema_source is not None:
            self._schema_source.close()
        if self._api_source is not None:
            self._api_source.close()

    # --- fault isolation ---
    def _isolated(self, name: str, unit: Callable[[], GenerationResult]) -> GenerationResult:
        try:
            return unit()
        except ResourceTyperException as exc:
            self.log.warning(f"Skipped {name}: {exc}")
            return GenerationResult(name=name, status="failed", error_kind=exc.kind, message=str(exc))
        except Exception as exc:
            self.log.error(f"Error processing {name}: {exc}", exc_info=True)
            return GenerationResult(
                name=name,
                status="failed",
                error_kind=ErrorKind.GENERATION_FAILURE,
                message=str(exc),
            )

    def _write(self, document: TypeDocument, *, respect_freshness: bool) -> GenerationResult:
        content = self.engine.render(document)
        audit = self.sink.write(document.name, content, respect_freshness=respect_freshness)
        return GenerationResult(
            name=document.name,
            status=audit["status"],
            path=audit["target_location"],
            metadata=audit,
        )

    # --- schema-driven generation ---
    def generate_for_model(self, model_name: str) -> GenerationResult:
        self.log.info(f"Processing model: {model_name}")

        def unit() -> GenerationResult:
            source = self.schema_source
            table = source.table_for_model(model_name)
            columns = source.describe_table(table)
            type_name = self.engine.type_name(model_name, self.config.model_suffix)
            document = self.engine.document_from_columns(type_name, columns)
            # Schema-driven files are always regenerated.
            return self._write(document, respect_freshness=False)

        return self._isolated(model_name, unit)

    def generate_all(self) -> List[GenerationResult]:
        try:
            models = self.schema_source.list_models()
        except ResourceTyperException as exc:
            self.log.error(f"Cannot list models: {exc}")
            return [GenerationResult(name="*", status="failed", error_kind=exc.kind, message=str(exc))]
        except Exception as exc:
            self.log.error(f"Cannot list models: {exc}", exc_info=True)
            return [
                GenerationResult(
                    name="*",
                    status="failed",
                    error_kind=ErrorKind.GENERATION_FAILURE,
                    message=str(exc),
                )
            ]

        if not models:
            self.log.warning("No models found")
        return [self.generate_for_model(model) for model in models]

    # --- live value generation ---
    def generate_from_value(
        self,
        source_name: str,
        data: Any,
        *,
        suffix: Optional[str] = None,
        origin: Optional[str] = None,
    ) -> GenerationResult:
        def unit() -> GenerationResult:
            if not isinstance(data, Mapping):
                raise GenerationError(
                    reason="Live values must be an object",
                    details={"source": source_name, "type": type(data).__name__},
                )
            type_name = self.engine.type_name(
                source_name, self.config.live_suffix if suffix is None else suffix
            )
            document = self.engine.document_from_values(type_name, data, origin=origin)
            return self._write(document, respect_freshness=True)

        return self._isolated(source_name, unit)

    def type_response(
        self,
        path: str,
        payload: Any,
        *,
        route_name: Optional[str] = None,
    ) -> Optional[GenerationResult]:
        """Type a JSON response body served at `path`.

        Returns None when the response is out of scope: generation disabled,
        a path outside `route_prefix`, or a body with nothing to type.
        """
        if not self.config.auto_generate:
            return None
        normalized = path.lstrip("/")
        prefix = self.config.route_prefix.lstrip("/")
        if prefix and not normalized.startswith(prefix):
            return None

        record = unwrap_payload(payload)
        if record is None:
            return None
        return self.generate_from_value(route_name or normalized, record, origin=path)

    def type_resource(self, resource_class: str, data: Any) -> Optional[GenerationResult]:
        """Type a serialized resource; `UserResource` becomes `UserType`.

        A resource collection (a list of serialized items) is typed from its
        first item.
        """
        if not self.config.auto_generate:
            return None
        if isinstance(data, (list, tuple)) and data and isinstance(data[0], Mapping):
            data = data[0]
        return self.generate_from_value(class_basename(resource_class), data, origin=resource_class)

    def probe(self, endpoint: str, *, name: Optional[str] = None) -> GenerationResult:
        """Fetch `endpoint` from the configured API and type its response."""

        def unit() -> GenerationResult:
            payload = self.api_source.fetch(endpoint)
            record = unwrap_payload(payload)
            if record is None:
                raise GenerationError(reason="Response has nothing to type", details={"endpoint": endpoint})
            return self.generate_from_value(name or strip_route_prefix(endpoint), record, origin=endpoint)

        return self._isolated(name or endpoint, unit)

    # --- batch entry point ---
    def run(self, model: Optional[str] = None) -> List[GenerationResult]:
        token = push_run_id(self.run_id)
        try:
            self.log.info("Starting type generation")
            self.sink.ensure_output_dir()
            if model:
                results = [self.generate_for_model(model)]
            else:
                results = self.generate_all()
            generated = sum(1 for r in results if r.status == "generated")
            failed = sum(1 for r in results if r.status == "failed")
            self.log.info(f"Type generation completed: generated={generated}, failed={failed}")
            return results
        finally:
            reset_run_id(token)
