from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

from resource_typer.core.exceptions import ErrorKind

GenerationStatus = Literal["generated", "skipped", "failed"]

Field = Tuple[str, str]


@dataclass(frozen=True)
class ColumnDescriptor:
    """Schema metadata for one column, as reported by a schema source."""
    name: str
    declared_type: str
    nullable: bool = False
    is_enum: bool = False
    is_decimal: bool = False


@dataclass
class TypeDocument:
    """A named set of (field name, annotation) pairs waiting to be rendered."""
    name: str
    fields: List[Field] = field(default_factory=list)
    origin: Optional[str] = None                # Shown as a "From:" header line when set

    def without(self, excluded) -> "TypeDocument":
        excluded = set(excluded or ())
        return TypeDocument(
            name=self.name,
            fields=[(k, v) for k, v in self.fields if k not in excluded],
            origin=self.origin,
        )

    def field_names(self) -> List[str]:
        return [k for k, _ in self.fields]


@dataclass
class GenerationResult:
    """Outcome of generating one declaration file."""
    name: str
    status: GenerationStatus
    path: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status != "failed"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "path": self.path,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "message": self.message,
        }
