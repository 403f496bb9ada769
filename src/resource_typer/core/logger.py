import logging
import sys
import contextvars
from typing import Optional

# Context variable to carry the current generator run id across the call chain
_RUN_ID: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="-")


class _RunIdFilter(logging.Filter):
    """Logging filter that injects the run_id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.run_id = _RUN_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | run=%(run_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def configure_root_logger(level: Optional[str] = None) -> None:
    """
    Configure the root logger and the resource_typer logger.

    The root logger stays at INFO so that SQLAlchemy and httpx chatter does not
    drown the generator output. Only the resource_typer namespace follows the
    requested level.

    Args:
        level: Log level for resource_typer logs (DEBUG, INFO, WARNING, ERROR).
            When omitted, a level set earlier (e.g. by set_level) is kept.
            The first call defaults it to INFO.

    Safe to call multiple times; it will not duplicate handlers.
    """
    root = logging.getLogger()
    package_logger = logging.getLogger("resource_typer")

    for h in root.handlers:
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _RunIdFilter) for f in h.filters):
            if level is not None:
                set_level(level)
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_RunIdFilter())
    handler.setLevel(logging.DEBUG)
    root.addHandler(handler)
    root.setLevel(logging.INFO)

    if level is not None:
        set_level(level)
    elif package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)


def get_logger(name: str = "resource_typer") -> logging.Logger:
    """Get a module logger; handlers live on the root logger only."""
    configure_root_logger()
    if not name.startswith("resource_typer"):
        name = f"resource_typer.{name}"
    return logging.getLogger(name)


def set_level(level: str) -> None:
    logging.getLogger("resource_typer").setLevel(getattr(logging, level.upper(), logging.INFO))


def push_run_id(run_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current run id in context and return a token for later reset."""
    if not run_id:
        return None
    return _RUN_ID.set(run_id)


def reset_run_id(token: Optional[contextvars.Token]) -> None:
    """Reset the run id context using the provided token (if any)."""
    if token is None:
        return
    try:
        _RUN_ID.reset(token)
    except ValueError:
        # Token created in a different context; nothing to restore.
        pass
