from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from resource_typer.core.contracts import TypeDocument

GENERATOR_NAME = "resource-typer"

# Fixed pagination shape shared with hand-written consumers.
PAGINATION_LINKS: Tuple[Tuple[str, str], ...] = (
    ("first", "string"),
    ("last", "string"),
    ("prev", "string | null"),
    ("next", "string | null"),
)
PAGINATION_META: Tuple[Tuple[str, str, bool], ...] = (
    ("current_page", "number", False),
    ("last_page", "number", False),
    ("per_page", "number", False),
    ("total", "number", False),
    ("from", "number", True),
    ("to", "number", True),
)


class DeclarationRenderer(ABC):
    """Turns a TypeDocument into declaration file text for one dialect."""

    dialect: str = ""

    def render(self, document: TypeDocument, *, generated_at: Optional[datetime] = None) -> str:
        lines = self.header(document, generated_at or datetime.now())
        lines.append("")
        lines.extend(self.primary(document.name, document.fields))
        lines.append("")
        lines.extend(self.collection(document.name))
        lines.append("")
        lines.extend(self.response(document.name))
        lines.extend(self.footer())
        return "\n".join(lines) + "\n"

    def header(self, document: TypeDocument, generated_at: datetime) -> List[str]:
        lines = [
            f"// Auto-generated by {GENERATOR_NAME}",
            f"// Generated at: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        ]
        if document.origin:
            lines.append(f"// From: {document.origin}")
        return lines

    def footer(self) -> List[str]:
        return []

    @abstractmethod
    def primary(self, name: str, fields: Sequence[Tuple[str, str]]) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def collection(self, name: str) -> List[str]:
        raise NotImplementedError

    @abstractmethod
    def response(self, name: str) -> List[str]:
        raise NotImplementedError
