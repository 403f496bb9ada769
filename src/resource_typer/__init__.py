"""resource_typer.

Generates TypeScript interfaces (or JSDoc typedefs) describing API response
shapes, from database schema metadata or from live JSON responses.

Public API:
"""

from resource_typer.inference.engine import EngineSettings, TypeInferenceEngine
from resource_typer.orchestrator import TypeGenerator
from resource_typer.cli import main, validate_config

__version__ = "0.1.0"

__all__ = [
    "EngineSettings",
    "TypeGenerator",
    "TypeInferenceEngine",
    "main",
    "validate_config",
]
