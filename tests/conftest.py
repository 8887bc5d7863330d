import sys
from pathlib import Path

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
PACKAGE_ROOT = REPO_ROOT / "openapi_schema_policy"
SCRIPT_DIR = PACKAGE_ROOT / "script"

# Make the package importable without installing it
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from openapi_schema_policy.config import json_schema_loader  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_schema_cache():
    json_schema_loader.clear_cache()
    yield
    json_schema_loader.clear_cache()


@pytest.fixture
def petstore_document():
    """Minimal OpenAPI document with a few component schemas."""
    return {
        "openapi": "3.0.3",
        "components": {
            "schemas": {
                "Pet": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string"},
                        "tag": {"type": "string", "default": "none"},
                    },
                },
                "Pet Store": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                "a/b": {"type": "integer"},
                "til~de": {"type": "boolean"},
            },
        },
        "x-examples": [{"type": "string"}, {"type": "number"}],
    }


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a policy configuration file and return its path."""

    def _write(content: str, name: str = "policy.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
