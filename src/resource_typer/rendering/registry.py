from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, Optional, Type


class RendererRegistryError(RuntimeError):
    pass


class RendererRegistry:
    _registry: ClassVar[Dict[str, Type[Any]]] = {}

    @classmethod
    def register(
        cls,
        *,
        dialect: str,
        renderer_class: Type[Any],
        overwrite: bool = False,
    ) -> None:
        if not overwrite and dialect in cls._registry:
            existing = cls._registry[dialect]
            raise RendererRegistryError(
                f"Renderer already registered for dialect={dialect!r}: {existing}"
            )
        cls._registry[dialect] = renderer_class

    @classmethod
    def get(cls, dialect: str) -> Type[Any]:
        try:
            return cls._registry[dialect]
        except KeyError as exc:
            raise RendererRegistryError(f"No renderer registered for dialect={dialect!r}") from exc

    @classmethod
    def try_get(cls, dialect: str) -> Optional[Type[Any]]:
        return cls._registry.get(dialect)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_renderer(
    *,
    dialect: str,
    overwrite: bool = False,
) -> Callable[[Type[Any]], Type[Any]]:
    def decorator(renderer_class: Type[Any]) -> Type[Any]:
        RendererRegistry.register(
            dialect=dialect,
            renderer_class=renderer_class,
            overwrite=overwrite,
        )
        return renderer_class

    return decorator
