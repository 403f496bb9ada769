from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from resource_typer.core.exceptions import GenerationError, SourceNotFoundError
from resource_typer.core.logger import get_logger


@dataclass(frozen=True)
class ApiConnection:
    base_url: str
    timeout_seconds: float = 10.0
    headers: Dict[str, str] = field(default_factory=dict)


def unwrap_payload(payload: Any) -> Optional[Mapping[str, Any]]:
    """Pick the record that describes a response's item shape.

    - `{"data": [{...}, ...]}` -> first item (resource collections)
    - `{"data": {...}}`        -> the wrapped record (single resources)
    - `{...}` without `data`   -> the payload itself
    Anything else (scalars, empty data, bare lists) has nothing to type.
    """
    if not isinstance(payload, Mapping):
        return None
    if "data" not in payload:
        return payload or None
    data = payload["data"]
    if isinstance(data, list):
        if data and isinstance(data[0], Mapping):
            return data[0]
        return None
    if isinstance(data, Mapping) and data:
        return data
    return None


class ApiResponseSource:
    """Live value source: fetches JSON from an API endpoint."""

    def __init__(
        self,
        connection: ApiConnection,
        *,
        client: Optional[httpx.Client] = None,
    ):
        self.connection = connection
        self.log = get_logger(self.__class__.__name__)
        self._client = client or httpx.Client(
            base_url=connection.base_url,
            timeout=connection.timeout_seconds,
            headers={"Accept": "application/json", **connection.headers},
        )

    def fetch(self, endpoint: str, *, method: str = "GET") -> Any:
        resp = self._client.request(method, endpoint)
        if resp.status_code == 404:
            raise SourceNotFoundError(reason="Endpoint not found", details={"endpoint": endpoint})
        resp.raise_for_status()

        try:
            return resp.json()
        except ValueError as e:
            content_type = resp.headers.get("content-type", "unknown")
            raise GenerationError(
                reason="Endpoint did not return JSON",
                details={"endpoint": endpoint, "status": resp.status_code, "content_type": content_type},
            ) from e

    def close(self) -> None:
        self._client.close()
