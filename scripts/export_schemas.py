"""Export JSON schemas for PlaceResolutionResult and the on-disk CacheIndex."""

import json
from pathlib import Path

from backend.resolver.models import CacheIndex, PlaceResolutionResult


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    # Export PlaceResolutionResult schema
    result_schema = PlaceResolutionResult.model_json_schema()
    result_path = schemas_dir / "PlaceResolutionResult.schema.json"
    with open(result_path, "w") as f:
        json.dump(result_schema, f, indent=2)
    print(f"Exported PlaceResolutionResult schema to {result_path}")

    # Export CacheIndex schema with the camelCase keys used in index.json
    index_schema = CacheIndex.model_json_schema(by_alias=True)
    index_path = schemas_dir / "CacheIndex.schema.json"
    with open(index_path, "w") as f:
        json.dump(index_schema, f, indent=2)
    print(f"Exported CacheIndex schema to {index_path}")


if __name__ == "__main__":
    main()
