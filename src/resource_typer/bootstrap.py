from __future__ import annotations

import importlib
import sys
from typing import Iterable


BUILTIN_PLUGIN_MODULES: tuple[str, ...] = (
    # Renderers
    "resource_typer.rendering.typescript",
    "resource_typer.rendering.jsdoc",

    # Schema sources
    "resource_typer.sources.manifest_source",
    "resource_typer.sources.sqlalchemy_source",

    # Schema source wiring
    "resource_typer.wiring.manifest_wiring",
    "resource_typer.wiring.sqlalchemy_wiring",
)


_LOADED = False


def load_builtin_plugins(*, reload: bool = False, modules: Iterable[str] = BUILTIN_PLUGIN_MODULES) -> None:
    """Import built-in renderer, source and wiring modules so decorators register them.

    Call with reload=False (default) so repeated imports are cheap.
    In tests, call with reload=True to clear registries and re-run decorators.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    if reload:
        from resource_typer.rendering.registry import RendererRegistry
        from resource_typer.sources.registry import SchemaSourceRegistry
        from resource_typer.wiring.source_registry import SourceWiringRegistry

        RendererRegistry.clear()
        SchemaSourceRegistry.clear()
        SourceWiringRegistry.clear()

    for module_name in modules:
        if reload:
            sys.modules.pop(module_name, None)
        importlib.import_module(module_name)

    _LOADED = True
