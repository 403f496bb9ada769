"""
Command-line interface and entry points for resource_typer.

`main()` and `validate_config()` are the programmatic API; `cli()` is the
console script installed as `resource-typer`.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from resource_typer.bootstrap import load_builtin_plugins
from resource_typer.core.contracts import GenerationResult
from resource_typer.core.logger import get_logger, set_level
from resource_typer.models.generator_config import TypeGeneratorConfig, read_config_file
from resource_typer.orchestrator import TypeGenerator
from resource_typer.rendering.registry import RendererRegistry
from resource_typer.sources.registry import SchemaSourceRegistry
from resource_typer.wiring.source_registry import SourceWiringRegistry

logger = get_logger(__name__)

DEFAULT_CONFIG_FILES = ("resource-typer.yaml", "resource-typer.yml", "resource-typer.json")


def load_config(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> TypeGeneratorConfig:
    """Load configuration from a dict, a JSON/YAML file, or a default file in the cwd."""
    if config_dict is not None:
        data = dict(config_dict)
    elif config_path:
        data = read_config_file(config_path)
        logger.info(f"Loaded config from {config_path}")
    else:
        found = next((Path(p) for p in DEFAULT_CONFIG_FILES if Path(p).exists()), None)
        if found is not None:
            logger.info(f"Using config file {found}")
            data = read_config_file(found)
        else:
            data = {}

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value
    return TypeGeneratorConfig.model_validate(data)


def _summary(results: List[GenerationResult]) -> Dict[str, Any]:
    return {
        "status": "success" if all(r.ok for r in results) else "partial",
        "generated": sum(1 for r in results if r.status == "generated"),
        "skipped": sum(1 for r in results if r.status == "skipped"),
        "failed": sum(1 for r in results if r.status == "failed"),
        "results": [r.as_dict() for r in results],
    }


def main(
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    *,
    model: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Generate declaration files for one model or every model.

    Args:
        config_path: Path to a JSON/YAML configuration file
        config_dict: Configuration dictionary (takes precedence over config_path)
        model: Only generate this model
        overrides: Top-level config keys to replace (e.g. {"dialect": "js"})

    Returns:
        Summary dict with per-model results. Unit failures do not raise;
        they are reported with status "failed".

    Example:
        >>> from resource_typer.cli import main
        >>> summary = main(config_dict={"output_path": "web/types", "models_path": "schema"})
        >>> summary["generated"]
    """
    config = load_config(config_path, config_dict, overrides)
    generator = TypeGenerator(config)
    try:
        results = generator.run(model=model)
    finally:
        generator.close()
    return _summary(results)


def probe(
    endpoint: str,
    config_path: Optional[str] = None,
    config_dict: Optional[Dict[str, Any]] = None,
    *,
    name: Optional[str] = None,
) -> Dict[str, Any]:
    config = load_config(config_path, config_dict)
    generator = TypeGenerator(config)
    try:
        result = generator.probe(endpoint, name=name)
    finally:
        generator.close()
    return _summary([result])


def validate_config(config_path: str) -> bool:
    """
    Validate configuration without generating anything.

    Raises:
        FileNotFoundError, ValueError, ValidationError: if the config is unusable
    """
    cfg = TypeGeneratorConfig.from_file(config_path)
    logger.info(f"Validating config: {config_path}")

    load_builtin_plugins()
    _ = RendererRegistry.get(cfg.dialect)
    if cfg.schema_source is not None:
        _ = SchemaSourceRegistry.get(cfg.schema_source.kind)
        _ = SourceWiringRegistry.get(cfg.schema_source.kind)

    logger.info("Configuration is valid")
    return True


def _report(summary: Dict[str, Any]) -> None:
    for result in summary["results"]:
        if result["status"] == "failed":
            logger.warning(f"{result['name']}: {result['error_kind']} - {result['message']}")
    logger.info(
        f"Done: generated={summary['generated']}, skipped={summary['skipped']}, failed={summary['failed']}"
    )


def cli(argv: Optional[List[str]] = None) -> None:
    """
    Command-line interface for resource_typer.

    Usage:
        resource-typer generate --config resource-typer.yaml
        resource-typer generate --model User --dialect js
        resource-typer probe /api/users --config resource-typer.yaml
        resource-typer validate --config resource-typer.yaml
    """
    parser = argparse.ArgumentParser(
        prog="resource-typer",
        description="Generate TypeScript/JSDoc declarations for API resources",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    generate_parser = subparsers.add_parser("generate", help="Generate declarations from schema metadata")
    generate_parser.add_argument("--config", "-c", help="Path to configuration file (JSON or YAML)")
    generate_parser.add_argument("--model", "-m", help="Only generate this model")
    generate_parser.add_argument("--dialect", choices=["ts", "js"], help="Output dialect")
    generate_parser.add_argument("--output", "-o", help="Output directory")
    generate_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    probe_parser = subparsers.add_parser("probe", help="Type a live API response")
    probe_parser.add_argument("endpoint", help="Endpoint path, e.g. /api/users")
    probe_parser.add_argument("--config", "-c", help="Path to configuration file (JSON or YAML)")
    probe_parser.add_argument("--name", help="Source name used to derive the type name")
    probe_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    validate_parser = subparsers.add_parser("validate", help="Validate configuration")
    validate_parser.add_argument("--config", "-c", required=True, help="Path to configuration file (JSON or YAML)")

    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        set_level("DEBUG")

    if args.command == "generate":
        try:
            summary = main(
                config_path=args.config,
                model=args.model,
                overrides={"dialect": args.dialect, "output_path": args.output},
            )
        except (FileNotFoundError, ValueError, ValidationError) as e:
            logger.error(f"Invalid configuration: {e}")
            sys.exit(1)
        _report(summary)
        sys.exit(0)

    elif args.command == "probe":
        try:
            summary = probe(args.endpoint, config_path=args.config, name=args.name)
        except (FileNotFoundError, ValueError, ValidationError) as e:
            logger.error(f"Invalid configuration: {e}")
            sys.exit(1)
        _report(summary)
        sys.exit(0)

    elif args.command == "validate":
        try:
            validate_config(args.config)
            sys.exit(0)
        except Exception as e:
            logger.error(f"Validation failed: {e}")
            sys.exit(1)

    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    cli()
