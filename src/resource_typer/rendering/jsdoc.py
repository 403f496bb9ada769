from __future__ import annotations

from typing import List, Sequence, Tuple

from resource_typer.rendering.base import PAGINATION_LINKS, PAGINATION_META, DeclarationRenderer
from resource_typer.rendering.registry import register_renderer


def _jsdoc_type(annotation: str) -> str:
    # JSDoc spells unions without spaces and wants them parenthesized.
    if " | " in annotation:
        return "(" + annotation.replace(" | ", "|") + ")"
    return annotation


def _record(entries: Sequence[Tuple[str, str, bool]]) -> str:
    parts = [
        f"{key}: {_jsdoc_type(annotation + ' | undefined' if optional else annotation)}"
        for key, annotation, optional in entries
    ]
    return "{" + ", ".join(parts) + "}"


@register_renderer(dialect="js")
class JSDocRenderer(DeclarationRenderer):
    """Emits `@typedef` comment blocks for plain JavaScript consumers."""

    dialect = "js"

    def _typedef(self, name: str, properties: Sequence[Tuple[str, str]]) -> List[str]:
        lines = ["/**", f" * @typedef {{Object}} {name}"]
        lines.extend(f" * @property {{{_jsdoc_type(annotation)}}} {prop}" for prop, annotation in properties)
        lines.append(" */")
        return lines

    def primary(self, name: str, fields: Sequence[Tuple[str, str]]) -> List[str]:
        return self._typedef(name, fields)

    def collection(self, name: str) -> List[str]:
        links = _record([(k, v, False) for k, v in PAGINATION_LINKS])
        meta = _record(PAGINATION_META)
        return self._typedef(
            f"{name}Collection",
            [
                ("data", f"{name}[]"),
                ("[links]", links),
                ("[meta]", meta),
            ],
        )

    def response(self, name: str) -> List[str]:
        return self._typedef(f"{name}Response", [("data", name)])

    def footer(self) -> List[str]:
        return ["", "export {};"]
