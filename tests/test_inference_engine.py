from datetime import datetime

from resource_typer.core.contracts import ColumnDescriptor
from resource_typer.inference.engine import EngineSettings, TypeInferenceEngine

FIXED = datetime(2024, 1, 1, 0, 0, 0)


def test_default_settings_target_typescript():
    engine = TypeInferenceEngine()
    assert engine.dialect.name == "ts"
    assert engine.file_name("UserResource") == "UserResource.ts"


def test_js_engine_file_extension():
    engine = TypeInferenceEngine(EngineSettings(dialect="js"))
    assert engine.file_name("UserType") == "UserType.js"


def test_columns_to_fields_respects_overrides():
    engine = TypeInferenceEngine(EngineSettings(type_mappings={"json": "Settings"}))
    fields = engine.columns_to_fields(
        [ColumnDescriptor("id", "integer"), ColumnDescriptor("prefs", "json", nullable=True)]
    )
    assert fields == [("id", "number"), ("prefs", "Settings | null")]


def test_overrides_ignored_for_js():
    engine = TypeInferenceEngine(EngineSettings(dialect="js", type_mappings={"json": "Settings"}))
    assert engine.resolve(ColumnDescriptor("prefs", "json")) == "Object<string, *>"


def test_document_from_values():
    engine = TypeInferenceEngine()
    doc = engine.document_from_values("UsersType", {"id": 1, "tags": []}, origin="/api/users")
    assert doc.fields == [("id", "number"), ("tags", "any[]")]
    assert doc.origin == "/api/users"


def test_render_applies_exclusions():
    engine = TypeInferenceEngine(EngineSettings(exclude_columns=frozenset({"password"})))
    doc = engine.document_from_columns(
        "UserResource",
        [ColumnDescriptor("email", "varchar"), ColumnDescriptor("password", "varchar")],
    )
    text = engine.render(doc, generated_at=FIXED)
    assert "password" not in text
    assert "  email: string;" in text
    # the document itself is not mutated
    assert doc.field_names() == ["email", "password"]


def test_render_is_deterministic_for_fixed_time():
    engine = TypeInferenceEngine()
    doc = engine.document_from_values("X", {"a": 1})
    assert engine.render(doc, generated_at=FIXED) == engine.render(doc, generated_at=FIXED)


def test_type_name_is_static():
    assert TypeInferenceEngine.type_name("api/users", "Type") == "UsersType"
