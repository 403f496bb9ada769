import pytest
from unittest.mock import MagicMock

import httpx

from resource_typer.core.exceptions import GenerationError, SourceNotFoundError
from resource_typer.sources.api_response import ApiConnection, ApiResponseSource, unwrap_payload


def _client_returning(*, status_code: int = 200, json_value=None, json_error: Exception | None = None):
    client = MagicMock(spec=httpx.Client)
    response = MagicMock()
    response.status_code = status_code
    response.headers = {"content-type": "text/html"}
    response.raise_for_status.return_value = None
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_value
    client.request.return_value = response
    return client


def _source(client) -> ApiResponseSource:
    conn = ApiConnection(base_url="https://example.test", timeout_seconds=1.0, headers={"X-Test": "1"})
    return ApiResponseSource(conn, client=client)


def test_fetch_returns_json_body():
    client = _client_returning(json_value={"data": {"id": 1}})

    body = _source(client).fetch("/api/users/1")

    client.request.assert_called_once_with("GET", "/api/users/1")
    assert body == {"data": {"id": 1}}


def test_fetch_404_is_source_not_found():
    client = _client_returning(status_code=404)
    with pytest.raises(SourceNotFoundError, match="Endpoint not found"):
        _source(client).fetch("/api/missing")


def test_fetch_raises_on_http_error():
    client = _client_returning(status_code=500)
    client.request.return_value.raise_for_status.side_effect = httpx.HTTPStatusError(
        "boom",
        request=MagicMock(),
        response=MagicMock(status_code=500),
    )
    with pytest.raises(httpx.HTTPStatusError):
        _source(client).fetch("/api/users")


def test_fetch_non_json_is_generation_error():
    client = _client_returning(json_error=ValueError("not json"))
    with pytest.raises(GenerationError, match="did not return JSON"):
        _source(client).fetch("/")


def test_close_closes_client():
    client = _client_returning(json_value={})
    _source(client).close()
    client.close.assert_called_once()


class TestUnwrapPayload:
    def test_collection_uses_first_item(self):
        assert unwrap_payload({"data": [{"id": 1}, {"id": 2}]}) == {"id": 1}

    def test_single_resource(self):
        assert unwrap_payload({"data": {"id": 1}}) == {"id": 1}

    def test_bare_object(self):
        assert unwrap_payload({"id": 1}) == {"id": 1}

    @pytest.mark.parametrize(
        "payload",
        [None, 3, "text", [{"id": 1}], {}, {"data": []}, {"data": {}}, {"data": [1, 2]}, {"data": "x"}],
    )
    def test_nothing_to_type(self, payload):
        assert unwrap_payload(payload) is None
