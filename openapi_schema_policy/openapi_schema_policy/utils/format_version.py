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

"""Format version handling for validation policy configuration files.

A policy file declares the configuration format it was written for in its
``schema_validation_policy_format`` field (e.g. ``0.1.0``).

Compatibility rule (semver-like):
  * **Major** must match exactly; a mismatch rejects the file.
  * **Minor** of the file newer than the package → accepted with a warning.
  * **Patch** is ignored for compatibility purposes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .. import POLICY_FORMAT_VERSION
from ..exceptions import FormatVersionError


FORMAT_VERSION_FIELD = "schema_validation_policy_format"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed semantic version (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_format_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``0.1.0`` (a leading 'v' is accepted).

    Raises:
        FormatVersionError: If the string cannot be parsed.
    """
    if not isinstance(raw, str):
        raise FormatVersionError(
            f"Format version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid format version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '0.1.0')."
        )
    return SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def get_supported_format_version() -> SemanticVersion:
    return parse_format_version(POLICY_FORMAT_VERSION)


@dataclass(frozen=True)
class VersionCheckResult:
    """Outcome of comparing a file's declared format version with ours."""

    compatible: bool
    message: str
    file_version: Optional[SemanticVersion] = None
    supported_version: Optional[SemanticVersion] = None
    warning: bool = False


def check_format_version(raw_version: Optional[str]) -> VersionCheckResult:
    """Check whether *raw_version* can be read by this package.

    * Missing version → compatible, with a warning suggesting the field.
    * Unparseable version or major mismatch → incompatible.
    * File minor newer than ours → compatible, with a warning; options added
      in the newer format are rejected later by schema validation.
    """
    supported = get_supported_format_version()

    if raw_version is None:
        return VersionCheckResult(
            compatible=True,
            warning=True,
            message=(
                f"Missing '{FORMAT_VERSION_FIELD}' field. "
                f"Consider adding '{FORMAT_VERSION_FIELD}: {supported}'."
            ),
            supported_version=supported,
        )

    try:
        file_ver = parse_format_version(raw_version)
    except FormatVersionError as exc:
        return VersionCheckResult(compatible=False, message=str(exc), supported_version=supported)

    if file_ver.major != supported.major:
        return VersionCheckResult(
            compatible=False,
            message=(
                f"Incompatible policy format version: file declares {file_ver} "
                f"but this package supports major version {supported.major} "
                f"(supported: {supported})."
            ),
            file_version=file_ver,
            supported_version=supported,
        )

    if file_ver.minor > supported.minor:
        return VersionCheckResult(
            compatible=True,
            warning=True,
            message=(
                f"Policy format version {file_ver} is newer than the supported "
                f"{supported}. Options introduced after {supported} will be rejected."
            ),
            file_version=file_ver,
            supported_version=supported,
        )

    return VersionCheckResult(
        compatible=True,
        message=f"Policy format version {file_ver} is compatible (supported: {supported}).",
        file_version=file_ver,
        supported_version=supported,
    )
