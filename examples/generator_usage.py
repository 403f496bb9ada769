"""
Example: Using TypeGenerator from application code.

This shows the two ways declarations get produced:
- Schema-driven: every model manifest under models_path becomes `{Model}Resource.ts`
- Live: a JSON response body (or a serialized resource) becomes `{Route}Type.ts`
"""

from resource_typer import TypeGenerator
from resource_typer.models.generator_config import TypeGeneratorConfig

config = TypeGeneratorConfig.from_file("examples/resource-typer.yaml")


# =============================================================================
# Example 1: Regenerate everything from model manifests
# =============================================================================
generator = TypeGenerator(config, run_id="ci_20260118_140530")

for result in generator.run():
    print(f"{result.name}: {result.status} {result.path or result.message}")


# =============================================================================
# Example 2: Type a response your API just served
# =============================================================================
# Call this from a response hook; out-of-scope paths return None.
result = generator.type_response(
    "/api/users",
    {"data": [{"id": 1, "email": "ada@example.test", "created_at": "2026-01-18T14:05:30Z"}]},
)
if result is not None:
    print(f"\nLive type: {result.name} ({result.status})")


# =============================================================================
# Example 3: Type a serialized resource directly
# =============================================================================
result = generator.type_resource("app.resources.UserResource", {"id": 1, "roles": ["admin"]})
print(f"Resource type: {result.name} ({result.status})")

generator.close()
