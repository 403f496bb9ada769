"""End-to-end tests for TypeGenerator against manifest, fake and mocked sources."""

import tempfile
from pathlib import Path
from typing import List
from unittest.mock import MagicMock

import httpx
import pytest

from resource_typer.bootstrap import load_builtin_plugins
from resource_typer.core.base_source import BaseSchemaSource
from resource_typer.core.exceptions import ErrorKind, IntrospectionError, SourceNotFoundError
from resource_typer.orchestrator import TypeGenerator, build_schema_source
from resource_typer.sources.api_response import ApiConnection, ApiResponseSource

USER_YAML = """
table: users
columns:
  - {name: id, type: bigint}
  - {name: email, type: varchar}
  - {name: password, type: varchar}
  - {name: bio, type: text, nullable: true}
  - {name: balance, type: decimal}
"""


class FakeSource(BaseSchemaSource):
    """In-memory source; model names map to behaviours."""

    TABLES = {
        "posts": {"id": ("integer", False), "title": ("varchar", False), "body": ("text", True)},
        "flaky": {"id": ("integer", False), "meta": ("json", False)},
    }

    def list_models(self) -> List[str]:
        return ["Post", "Ghost", "Exploding", "Flaky"]

    def table_for_model(self, model_name: str) -> str:
        if model_name == "Ghost":
            raise SourceNotFoundError(reason="Model class not found", details={"model": model_name})
        if model_name == "Exploding":
            raise RuntimeError("boom")
        return {"Post": "posts", "Flaky": "flaky"}[model_name]

    def list_columns(self, table: str) -> List[str]:
        return list(self.TABLES[table])

    def column_declared_type(self, table: str, column: str) -> str:
        return self.TABLES[table][column][0]

    def column_is_nullable(self, table: str, column: str) -> bool:
        if table == "flaky" and column == "meta":
            raise IntrospectionError(reason="driver hiccup")
        return self.TABLES[table][column][1]


def setup_function() -> None:
    load_builtin_plugins(reload=True)


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "models").mkdir()
        (root / "models" / "User.yaml").write_text(USER_YAML, encoding="utf-8")
        yield root


def _config(workdir: Path, **overrides):
    cfg = {"output_path": str(workdir / "types"), "models_path": str(workdir / "models")}
    cfg.update(overrides)
    return cfg


class TestSchemaDrivenGeneration:
    def test_generate_for_model_writes_interface(self, workdir: Path):
        generator = TypeGenerator(_config(workdir))
        result = generator.generate_for_model("User")

        assert result.status == "generated"
        text = (workdir / "types" / "UserResource.ts").read_text(encoding="utf-8")
        assert "export interface UserResource {" in text
        assert "  id: number;" in text
        assert "  bio: string | null;" in text
        assert "  balance: number;" in text
        assert "password" not in text
        assert "export interface UserResourceCollection {" in text
        assert "export interface UserResourceResponse {" in text

    def test_js_dialect(self, workdir: Path):
        generator = TypeGenerator(_config(workdir, dialect="js"))
        generator.generate_for_model("User")

        text = (workdir / "types" / "UserResource.js").read_text(encoding="utf-8")
        assert " * @typedef {Object} UserResource" in text
        assert " * @property {string} bio" in text

    def test_schema_files_always_regenerated(self, workdir: Path):
        generator = TypeGenerator(_config(workdir))
        generator.generate_for_model("User")
        assert generator.generate_for_model("User").status == "generated"

    def test_unknown_model_is_isolated(self, workdir: Path):
        result = TypeGenerator(_config(workdir)).generate_for_model("Ghost")
        assert result.status == "failed"
        assert result.error_kind is ErrorKind.SOURCE_NOT_FOUND

    def test_run_all_models(self, workdir: Path):
        results = TypeGenerator(_config(workdir)).run()
        assert [(r.name, r.status) for r in results] == [("UserResource", "generated")]

    def test_missing_models_path_reported_not_raised(self, workdir: Path):
        generator = TypeGenerator(_config(workdir, models_path=str(workdir / "nope")))
        results = generator.run()
        assert len(results) == 1
        assert results[0].name == "*"
        assert results[0].error_kind is ErrorKind.CONFIGURATION_MISSING

    def test_no_source_configured(self, workdir: Path):
        generator = TypeGenerator({"output_path": str(workdir / "types")})
        result = generator.generate_for_model("User")
        assert result.error_kind is ErrorKind.CONFIGURATION_MISSING


class TestBatchFaultIsolation:
    def test_one_failure_does_not_stop_the_batch(self, workdir: Path):
        generator = TypeGenerator(_config(workdir), schema_source=FakeSource())
        results = {r.name: r for r in generator.run()}

        assert results["PostResource"].status == "generated"
        assert results["Ghost"].error_kind is ErrorKind.SOURCE_NOT_FOUND
        assert results["Exploding"].error_kind is ErrorKind.GENERATION_FAILURE
        assert results["Exploding"].message == "boom"
        assert results["FlakyResource"].status == "generated"

        post = (workdir / "types" / "PostResource.ts").read_text(encoding="utf-8")
        assert "  body: string | null;" in post

    def test_introspection_failure_degrades_to_raw_type(self, workdir: Path):
        generator = TypeGenerator(_config(workdir), schema_source=FakeSource())
        generator.generate_for_model("Flaky")

        text = (workdir / "types" / "FlakyResource.ts").read_text(encoding="utf-8")
        assert "  meta: Record<string, any>;" in text

    def test_single_model_run(self, workdir: Path):
        results = TypeGenerator(_config(workdir), schema_source=FakeSource()).run(model="Post")
        assert [r.name for r in results] == ["PostResource"]


class TestLiveResponses:
    def test_type_response_unwraps_collection(self, workdir: Path):
        generator = TypeGenerator(_config(workdir))
        result = generator.type_response(
            "/api/users",
            {"data": [{"id": 1, "created_at": "2024-01-01T10:00:00Z", "tags": ["a"]}], "meta": {}},
        )

        assert result.status == "generated"
        text = (workdir / "types" / "UsersType.ts").read_text(encoding="utf-8")
        assert "// From: /api/users" in text
        assert "  created_at: Date;" in text
        assert "  tags: string[];" in text

    def test_route_name_wins_over_path(self, workdir: Path):
        generator = TypeGenerator(_config(workdir))
        result = generator.type_response("/api/users/7", {"data": {"id": 7}}, route_name="api.users.show")
        assert Path(result.path).name == "UsersShowType.ts"

    def test_fresh_live_file_is_skipped(self, workdir: Path):
        generator = TypeGenerator(_config(workdir))
        generator.type_response("/api/users", {"data": {"id": 1}})
        assert generator.type_response("/api/users", {"data": {"id": "x"}}).status == "skipped"

    def test_zero_freshness_always_regenerates(self, workdir: Path):
        generator = TypeGenerator(_config(workdir, freshness_seconds=0))
        generator.type_response("/api/users", {"data": {"id": 1}})
        assert generator.type_response("/api/users", {"data": {"id": "x"}}).status == "generated"

    @pytest.mark.parametrize(
        "path, payload",
        [
            ("/web/users", {"data": {"id": 1}}),
            ("/api/users", {"data": []}),
            ("/api/users", "plain text"),
        ],
    )
    def test_out_of_scope_responses_are_ignored(self, workdir: Path, path, payload):
        assert TypeGenerator(_config(workdir)).type_response(path, payload) is None

    def test_disabled_auto_generate(self, workdir: Path):
        generator = TypeGenerator(_config(workdir, auto_generate=False))
        assert generator.type_response("/api/users", {"data": {"id": 1}}) is None
        assert generator.type_resource("UserResource", {"id": 1}) is None

    def test_type_resource(self, workdir: Path):
        generator = TypeGenerator(_config(workdir))
        result = generator.type_resource("app.resources.UserResource", {"id": 1, "email": None})

        assert result.name == "UserType"
        text = (workdir / "types" / "UserType.ts").read_text(encoding="utf-8")
        assert "  email: null;" in text

    def test_generate_from_value_requires_object(self, workdir: Path):
        result = TypeGenerator(_config(workdir)).generate_from_value("users", [1, 2])
        assert result.status == "failed"
        assert result.error_kind is ErrorKind.GENERATION_FAILURE


class TestProbe:
    @staticmethod
    def _api(body) -> ApiResponseSource:
        client = MagicMock(spec=httpx.Client)
        response = MagicMock()
        response.status_code = 200
        response.raise_for_status.return_value = None
        response.json.return_value = body
        client.request.return_value = response
        return ApiResponseSource(ApiConnection(base_url="https://example.test"), client=client)

    def test_probe_types_endpoint(self, workdir: Path):
        generator = TypeGenerator(_config(workdir), api_source=self._api({"data": {"id": 1, "ok": True}}))
        result = generator.probe("/api/orders")

        assert result.status == "generated"
        text = (workdir / "types" / "OrdersType.ts").read_text(encoding="utf-8")
        assert "  ok: boolean;" in text

    def test_probe_with_nothing_to_type(self, workdir: Path):
        generator = TypeGenerator(_config(workdir), api_source=self._api({"data": []}))
        result = generator.probe("/api/orders")
        assert result.status == "failed"
        assert result.error_kind is ErrorKind.GENERATION_FAILURE

    def test_probe_without_api_config(self, workdir: Path):
        result = TypeGenerator(_config(workdir)).probe("/api/orders")
        assert result.error_kind is ErrorKind.CONFIGURATION_MISSING


def test_build_schema_source_defaults_to_manifest(workdir: Path):
    from resource_typer.models.generator_config import TypeGeneratorConfig

    source = build_schema_source(TypeGeneratorConfig(models_path=str(workdir / "models")))
    assert type(source).__name__ == "ManifestSchemaSource"
    assert source.list_models() == ["User"]


class ListingFails(FakeSource):
    def list_models(self) -> List[str]:
        raise RuntimeError("listing exploded")


def test_unexpected_listing_failure_is_reported(workdir: Path):
    results = TypeGenerator(_config(workdir), schema_source=ListingFails()).run()
    assert [(r.name, r.status, r.error_kind) for r in results] == [
        ("*", "failed", ErrorKind.GENERATION_FAILURE)
    ]


def test_broken_model_file_does_not_stop_sqlalchemy_batch(workdir: Path):
    from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine

    url = f"sqlite:///{workdir / 'app.db'}"
    metadata = MetaData()
    Table("users", metadata, Column("id", Integer, primary_key=True), Column("email", String(80)))
    engine = create_engine(url)
    metadata.create_all(engine)
    engine.dispose()

    py_models = workdir / "py_models"
    py_models.mkdir()
    (py_models / "user.py").write_text("class User(Base):\n    __tablename__ = 'users'\n", encoding="utf-8")
    (py_models / "broken.py").write_text("class Oops(:\n", encoding="utf-8")

    generator = TypeGenerator(
        {
            "output_path": str(workdir / "types"),
            "schema_source": {"kind": "sqlalchemy", "url": url, "models_path": str(py_models)},
        }
    )
    try:
        results = generator.run()
    finally:
        generator.close()

    assert [(r.name, r.status) for r in results] == [("UserResource", "generated")]
    assert (workdir / "types" / "UserResource.ts").exists()


def test_malformed_manifest_does_not_stop_batch(workdir: Path):
    (workdir / "models" / "Notes.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    results = TypeGenerator(_config(workdir)).run()
    assert [(r.name, r.status) for r in results] == [("UserResource", "generated")]


def test_type_resource_collection_uses_first_item(workdir: Path):
    generator = TypeGenerator(_config(workdir))
    result = generator.type_resource("app.resources.UserResource", [{"id": 1, "name": "Ada"}, {"id": 2}])

    assert result.status == "generated"
    text = (workdir / "types" / "UserType.ts").read_text(encoding="utf-8")
    assert "  id: number;" in text
    assert "  name: string;" in text


def test_type_resource_empty_collection_fails(workdir: Path):
    result = TypeGenerator(_config(workdir)).type_resource("UserResource", [])
    assert result.status == "failed"
