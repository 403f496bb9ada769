from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from resource_typer.core.logger import get_logger


@dataclass(frozen=True)
class DeclarationSinkConfig:
    output_path: str
    extension: str = "ts"
    freshness_seconds: int = 3600


class DeclarationFileSink:
    """
    Writes one declaration file per type name to `{output_path}/{name}.{ext}`.

    Files are overwritten whole; the last writer wins. The output directory is
    created on first write. With `respect_freshness=True` a write is skipped
    while the existing file is younger than `freshness_seconds`.
    """

    def __init__(self, config: DeclarationSinkConfig, *, clock: Callable[[], float] = time.time):
        self.config = config
        self._clock = clock
        self.log = get_logger(self.__class__.__name__)

    def target_path(self, type_name: str) -> Path:
        return Path(self.config.output_path) / f"{type_name}.{self.config.extension}"

    def ensure_output_dir(self) -> Path:
        out = Path(self.config.output_path)
        if not out.exists():
            out.mkdir(parents=True, exist_ok=True)
            self.log.info(f"Created directory: {out}")
        return out

    def age_seconds(self, path: Path) -> Optional[float]:
        try:
            return self._clock() - path.stat().st_mtime
        except FileNotFoundError:
            return None

    def is_fresh(self, type_name: str) -> bool:
        """True iff the artifact exists and is strictly younger than the freshness window."""
        age = self.age_seconds(self.target_path(type_name))
        return age is not None and age < self.config.freshness_seconds

    def write(self, type_name: str, content: str, *, respect_freshness: bool = False) -> Dict[str, Any]:
        target = self.target_path(type_name)
        if respect_freshness and self.is_fresh(type_name):
            self.log.debug(f"Skipping {target}: younger than {self.config.freshness_seconds}s")
            return {"status": "skipped", "target_location": str(target)}

        self.ensure_output_dir()
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)

        self.log.info(f"Generated: {target}")
        return {
            "status": "generated",
            "target_location": str(target),
            "written_at_utc": datetime.now(timezone.utc).isoformat(),
            "bytes": len(content.encode("utf-8")),
        }
