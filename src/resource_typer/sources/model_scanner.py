"""
Discover model classes under a models directory without importing them.

A model is any class body that assigns a string to `__tablename__`
(SQLAlchemy declarative style):

    class Invoice(Base):
        __tablename__ = "invoices"

Files are parsed with `ast`, so scanning never executes user code.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from resource_typer.core.exceptions import ConfigurationMissingError
from resource_typer.core.logger import get_logger

logger = get_logger(__name__)

EXCLUDE_DIRS = {
    ".git",
    ".venv",
    "venv",
    "__pycache__",
    "node_modules",
    "dist",
    "build",
    ".mypy_cache",
    ".pytest_cache",
}


@dataclass(frozen=True)
class ModelSpec:
    name: str
    table: str
    source: str  # file:line


def _is_excluded(p: Path) -> bool:
    return any(part in EXCLUDE_DIRS for part in p.parts)


def _tablename(node: ast.ClassDef) -> str | None:
    for stmt in node.body:
        targets: List[ast.expr] = []
        value: ast.expr | None = None
        if isinstance(stmt, ast.Assign):
            targets, value = stmt.targets, stmt.value
        elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
            targets, value = [stmt.target], stmt.value
        for target in targets:
            if (
                isinstance(target, ast.Name)
                and target.id == "__tablename__"
                and isinstance(value, ast.Constant)
                and isinstance(value.value, str)
            ):
                return value.value
    return None


def scan_file(path: Path) -> List[ModelSpec]:
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    found: List[ModelSpec] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ClassDef):
            table = _tablename(node)
            if table:
                found.append(ModelSpec(name=node.name, table=table, source=f"{path}:{node.lineno}"))
    return found


def scan_models(models_path: str | Path) -> Dict[str, ModelSpec]:
    """Return model name -> ModelSpec for every declarative model under models_path."""
    root = Path(models_path)
    if not root.is_dir():
        raise ConfigurationMissingError(
            reason="Models directory not found",
            details={"models_path": str(root)},
        )

    models: Dict[str, ModelSpec] = {}
    for f in sorted(root.rglob("*.py")):
        if _is_excluded(f.relative_to(root)):
            continue
        try:
            specs = scan_file(f)
        except (SyntaxError, UnicodeDecodeError, OSError) as exc:
            logger.warning(f"Skipping unparsable model file {f}: {exc}")
            continue
        for spec in specs:
            models.setdefault(spec.name, spec)
    return models
