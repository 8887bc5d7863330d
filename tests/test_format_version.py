"""Tests for policy configuration format version checks."""
from __future__ import annotations

import pytest

from openapi_schema_policy import POLICY_FORMAT_VERSION
from openapi_schema_policy.exceptions import FormatVersionError
from openapi_schema_policy.utils.format_version import (
    SemanticVersion,
    check_format_version,
    parse_format_version,
)
from openapi_schema_policy.config.json_schema_loader import load_schema, resolve_schema_version


class TestParseFormatVersion:
    def test_accepts_optional_prefix(self) -> None:
        assert parse_format_version("v0.1.2") == SemanticVersion(0, 1, 2)
        assert str(parse_format_version(" 1.2.3 ")) == "1.2.3"

    @pytest.mark.parametrize("raw", ["0.1", "latest", "", 0.1])
    def test_rejects_malformed(self, raw) -> None:
        with pytest.raises(FormatVersionError):
            parse_format_version(raw)


class TestCheckFormatVersion:
    def test_supported_version_is_compatible(self) -> None:
        result = check_format_version(POLICY_FORMAT_VERSION)

        assert result.compatible
        assert not result.warning

    def test_missing_version_warns(self) -> None:
        result = check_format_version(None)

        assert result.compatible
        assert result.warning
        assert "schema_validation_policy_format" in result.message

    def test_newer_minor_warns(self) -> None:
        result = check_format_version("0.9.0")

        assert result.compatible
        assert result.warning
        assert result.file_version == SemanticVersion(0, 9, 0)

    def test_major_mismatch_is_incompatible(self) -> None:
        result = check_format_version("1.0.0")

        assert not result.compatible
        assert "major version 0" in result.message

    def test_garbage_is_incompatible(self) -> None:
        assert not check_format_version("one").compatible


class TestSchemaVersionResolution:
    def test_exact_version(self) -> None:
        assert resolve_schema_version("validation_policy", "0.1.0") == "0.1.0"

    def test_newer_patch_and_minor_fall_back_to_bundled(self) -> None:
        assert resolve_schema_version("validation_policy", "0.1.7") == "0.1.0"
        assert resolve_schema_version("validation_policy", "0.4.0") == "0.1.0"

    def test_unknown_major_is_kept(self) -> None:
        assert resolve_schema_version("validation_policy", "3.0.0") == "3.0.0"

    def test_load_schema_caches(self) -> None:
        first = load_schema("validation_policy", "0.1.0")

        assert first is load_schema("validation_policy", "0.1.3")
        assert first["type"] == "object"

    def test_bundled_schema_id_names_this_package(self) -> None:
        schema = load_schema("validation_policy", "0.1.0")

        assert schema["$id"] == "urn:openapi-schema-policy:0.1.0:validation_policy"

    def test_missing_schema_raises(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_schema("validation_policy", "3.0.0")
