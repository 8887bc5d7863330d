# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Loader for the JSON Schemas that describe policy configuration files."""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..exceptions import FormatVersionError
from ..utils.format_version import SemanticVersion, parse_format_version

logger = logging.getLogger(__name__)

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schema"

# Parsed schemas keyed by "<name>-v<version>"
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_path(schema_name: str, version: str) -> Path:
    return SCHEMA_DIR / version / f"{schema_name}.json"


def _available_versions(schema_name: str, major: int) -> List[SemanticVersion]:
    versions = []
    for version_dir in SCHEMA_DIR.iterdir():
        if not version_dir.is_dir():
            continue
        try:
            dir_version = parse_format_version(version_dir.name)
        except FormatVersionError:
            continue
        if dir_version.major == major and (version_dir / f"{schema_name}.json").exists():
            versions.append(dir_version)
    return versions


def resolve_schema_version(schema_name: str, version: str) -> str:
    """Pick the bundled schema version to validate a *version* file against.

    - Major version must match exactly
    - An exact match is used when bundled
    - Otherwise the newest patch of the same minor, then the closest newer
      minor, then the newest bundled version of that major

    Returns the original version when nothing matches, so that loading fails
    with a clear "not found" error.
    """
    try:
        requested = parse_format_version(version)
    except FormatVersionError:
        return version

    if get_schema_path(schema_name, version).exists():
        return version

    available = _available_versions(schema_name, requested.major)
    if not available:
        return version

    same_minor = [v for v in available if v.minor == requested.minor]
    if same_minor:
        return str(max(same_minor, key=lambda v: v.patch))

    newer_minor = [v for v in available if v.minor > requested.minor]
    if newer_minor:
        closest = min(v.minor for v in newer_minor)
        return str(max((v for v in newer_minor if v.minor == closest), key=lambda v: v.patch))

    return str(max(available, key=lambda v: (v.minor, v.patch)))


def load_schema(schema_name: str, version: str) -> dict:
    """Load the bundled JSON Schema *schema_name* for format *version*.

    Raises:
        FileNotFoundError: If no compatible schema is bundled
        json.JSONDecodeError: If the schema file is invalid JSON
    """
    resolved_version = resolve_schema_version(schema_name, version)
    if resolved_version != version:
        logger.debug(f"Using {schema_name} schema {resolved_version} for format version {version}")

    cache_key = f"{schema_name}-v{resolved_version}"
    if cache_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[cache_key]

    schema_path = get_schema_path(schema_name, resolved_version)
    if not schema_path.exists():
        raise FileNotFoundError(
            f"Schema file not found for {schema_name} version {version} "
            f"(resolved to {resolved_version}): {schema_path}"
        )

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    _SCHEMA_CACHE[cache_key] = schema
    return schema


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
