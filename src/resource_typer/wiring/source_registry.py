from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Tuple


class SourceWiringRegistryError(RuntimeError):
    pass


@dataclass(frozen=True)
class BuiltSourceArgs:
    args: Tuple[Any, ...]
    kwargs: Dict[str, Any]


BuilderFn = Callable[..., BuiltSourceArgs]


class SourceWiringRegistry:
    _registry: ClassVar[Dict[str, BuilderFn]] = {}

    @classmethod
    def register(
        cls,
        *,
        kind: str,
        builder: BuilderFn,
        overwrite: bool = False,
    ) -> None:
        if not overwrite and kind in cls._registry:
            raise SourceWiringRegistryError(f"Wiring already registered for kind={kind!r}")
        cls._registry[kind] = builder

    @classmethod
    def get(cls, kind: str) -> BuilderFn:
        try:
            return cls._registry[kind]
        except KeyError as exc:
            raise SourceWiringRegistryError(f"No wiring registered for kind={kind!r}") from exc

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_source_wiring(
    *,
    kind: str,
    overwrite: bool = False,
) -> Callable[[BuilderFn], BuilderFn]:
    def decorator(builder: BuilderFn) -> BuilderFn:
        SourceWiringRegistry.register(kind=kind, builder=builder, overwrite=overwrite)
        return builder

    return decorator
