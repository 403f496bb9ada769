from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence, Tuple

from resource_typer.bootstrap import load_builtin_plugins
from resource_typer.core.contracts import TypeDocument
from resource_typer.rendering.registry import RendererRegistry


def assemble(
    name: str,
    fields: Sequence[Tuple[str, str]],
    dialect: str,
    excluded_fields: Optional[Iterable[str]] = None,
    *,
    origin: Optional[str] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render `{name}`, `{name}Collection` and `{name}Response` for `dialect`.

    Fields listed in `excluded_fields` are dropped before rendering.
    """
    document = TypeDocument(name=name, fields=list(fields), origin=origin).without(excluded_fields)
    return render_document(document, dialect, generated_at=generated_at)


def render_document(document: TypeDocument, dialect: str, *, generated_at: Optional[datetime] = None) -> str:
    load_builtin_plugins()
    renderer_cls = RendererRegistry.get(dialect)
    return renderer_cls().render(document, generated_at=generated_at)
