from __future__ import annotations

import re

_ROUTE_PREFIXES = ("api.", "api/")
_SEGMENT_SEPARATORS = re.compile(r"[./\\\-_\s]+")
_INVALID_CHARS = re.compile(r"[^0-9A-Za-z]+")


def strip_route_prefix(source: str) -> str:
    source = source.strip().lstrip("/")
    for prefix in _ROUTE_PREFIXES:
        if source.startswith(prefix):
            return source[len(prefix):]
    return source


def class_basename(source: str) -> str:
    """'app.http.resources.UserResource' -> 'UserResource'."""
    return re.split(r"[.:]", source)[-1]


def to_pascal_segments(text: str) -> str:
    parts = [_INVALID_CHARS.sub("", p) for p in _SEGMENT_SEPARATORS.split(text)]
    return "".join(p[:1].upper() + p[1:] for p in parts if p)


def derive_type_name(source: str, suffix: str = "") -> str:
    """Derive a declaration name from a model, route or resource class name.

    >>> derive_type_name("api/users/show", "Type")
    'UsersShowType'
    >>> derive_type_name("UserResource", "Type")
    'UserType'
    """
    name = strip_route_prefix(source)
    if name.endswith("Resource"):
        name = name[: -len("Resource")]
    name = to_pascal_segments(name)
    if not name:
        raise ValueError(f"Cannot derive a type name from {source!r}")
    return f"{name}{suffix}"


def snake_case(name: str) -> str:
    out: list[str] = []
    for i, ch in enumerate(name):
        if ch.isupper() and i != 0 and (name[i - 1].islower() or (i + 1 < len(name) and name[i + 1].islower())):
            out.append("_")
        out.append(ch.lower())
    return "".join(out)


def pluralize(word: str) -> str:
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def default_table_name(model_name: str) -> str:
    """'InvoiceLine' -> 'invoice_lines'."""
    return pluralize(snake_case(model_name))
