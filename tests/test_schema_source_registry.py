import pytest

from resource_typer.bootstrap import load_builtin_plugins
from resource_typer.sources.registry import (
    SchemaSourceRegistry,
    SchemaSourceRegistryError,
    register_schema_source,
)


def setup_function() -> None:
    SchemaSourceRegistry.clear()


def teardown_function() -> None:
    load_builtin_plugins(reload=True)


def test_register_and_get_round_trip():
    class Dummy:
        pass

    SchemaSourceRegistry.register(kind="manifest", source_class=Dummy)

    assert SchemaSourceRegistry.get("manifest") is Dummy
    assert SchemaSourceRegistry.try_get("manifest") is Dummy


def test_get_missing_raises_helpful_error():
    with pytest.raises(SchemaSourceRegistryError, match="No schema source registered"):
        SchemaSourceRegistry.get("manifest")


def test_duplicate_registration_raises_by_default():
    class Dummy1:
        pass

    class Dummy2:
        pass

    SchemaSourceRegistry.register(kind="manifest", source_class=Dummy1)

    with pytest.raises(SchemaSourceRegistryError, match="already registered"):
        SchemaSourceRegistry.register(kind="manifest", source_class=Dummy2)


def test_overwrite_allows_re_registration():
    class Dummy1:
        pass

    class Dummy2:
        pass

    SchemaSourceRegistry.register(kind="manifest", source_class=Dummy1)
    SchemaSourceRegistry.register(kind="manifest", source_class=Dummy2, overwrite=True)

    assert SchemaSourceRegistry.get("manifest") is Dummy2


def test_register_schema_source_decorator_registers_class():
    @register_schema_source(kind="custom")
    class Dummy:
        pass

    assert SchemaSourceRegistry.get("custom") is Dummy


def test_bootstrap_registers_builtin_sources():
    load_builtin_plugins(reload=True)

    assert SchemaSourceRegistry.get("manifest").__name__ == "ManifestSchemaSource"
    assert SchemaSourceRegistry.get("sqlalchemy").__name__ == "SqlAlchemySchemaSource"
