from __future__ import annotations

import json
import re
from typing import List, Sequence, Tuple

from resource_typer.rendering.base import PAGINATION_LINKS, PAGINATION_META, DeclarationRenderer
from resource_typer.rendering.registry import register_renderer

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def property_key(name: str) -> str:
    return name if _IDENTIFIER.match(name) else json.dumps(name)


@register_renderer(dialect="ts")
class TypeScriptRenderer(DeclarationRenderer):
    """Emits `export interface` declarations."""

    dialect = "ts"

    def primary(self, name: str, fields: Sequence[Tuple[str, str]]) -> List[str]:
        lines = [f"export interface {name} {{"]
        lines.extend(f"  {property_key(field)}: {annotation};" for field, annotation in fields)
        lines.append("}")
        return lines

    def collection(self, name: str) -> List[str]:
        lines = [
            f"export interface {name}Collection {{",
            f"  data: {name}[];",
            "  links?: {",
        ]
        lines.extend(f"    {key}: {annotation};" for key, annotation in PAGINATION_LINKS)
        lines.append("  };")
        lines.append("  meta?: {")
        lines.extend(
            f"    {key}{'?' if optional else ''}: {annotation};"
            for key, annotation, optional in PAGINATION_META
        )
        lines.append("  };")
        lines.append("}")
        return lines

    def response(self, name: str) -> List[str]:
        return [
            f"export interface {name}Response {{",
            f"  data: {name};",
            "}",
        ]
