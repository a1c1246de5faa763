import json
import os

from src.api.main import app

# Get the OpenAPI schema (note: all REST routes are under /api)
openapi_schema = app.openapi()

# Document the shared error envelope for clients generating SDKs
components = openapi_schema.setdefault("components", {}).setdefault("schemas", {})
if "ErrorResponse" not in components:
    from src.schemas.common import ErrorResponse

    components["ErrorResponse"] = ErrorResponse.model_json_schema(ref_template="#/components/schemas/{model}")
    for name, schema in components["ErrorResponse"].pop("$defs", {}).items():
        components.setdefault(name, schema)

# Write to file
output_dir = "interfaces"
os.makedirs(output_dir, exist_ok=True)
output_path = os.path.join(output_dir, "openapi.json")

with open(output_path, "w") as f:
    json.dump(openapi_schema, f, indent=2)
