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

"""Options accepted when building a :class:`ValidationPolicy`.

Each option is a plain value naming one policy field and the value it assigns.
Options are applied in order and the last assignment to a field wins, so
``new_validation_policy(visit_as_request(), visit_as_response())`` validates
as a response.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Callable, Optional

from .schema import Schema, SchemaError
from .validation_policy import ValidationDirection, ValidationPolicy


@dataclass(frozen=True)
class SchemaValidationOption:
    """Assignment of ``value`` to the policy field ``field_name``."""

    field_name: str
    value: Any

    def __post_init__(self) -> None:
        # Only constructor fields; the defaults latch is not settable.
        if self.field_name not in _POLICY_FIELDS:
            raise ValueError(
                f"Unknown validation policy field '{self.field_name}'. "
                f"Valid fields: {sorted(_POLICY_FIELDS)}"
            )


_POLICY_FIELDS = frozenset(f.name for f in fields(ValidationPolicy) if f.init)


def new_validation_policy(*options: SchemaValidationOption) -> ValidationPolicy:
    """Build a policy from *options*; later options override earlier ones."""
    return ValidationPolicy().with_options(*options)


def fail_fast() -> SchemaValidationOption:
    """Return the first schema validation error instead of walking the whole document."""
    return SchemaValidationOption("fail_fast", True)


def multi_errors() -> SchemaValidationOption:
    """Collect every violation into a :class:`MultiError`."""
    return SchemaValidationOption("multi_error", True)


def visit_as_request() -> SchemaValidationOption:
    return SchemaValidationOption("validation_direction", ValidationDirection.AS_REQUEST)


def visit_as_response() -> SchemaValidationOption:
    return SchemaValidationOption("validation_direction", ValidationDirection.AS_RESPONSE)


def enable_unknown_property_validation() -> SchemaValidationOption:
    """Report document properties that have no property schema."""
    return SchemaValidationOption("unknown_property_validation_enabled", True)


def enable_format_validation() -> SchemaValidationOption:
    """Check string formats that are not defined by the OpenAPI v3 specification."""
    return SchemaValidationOption("format_validation_enabled", True)


def disable_pattern_validation() -> SchemaValidationOption:
    """Skip ``pattern`` checks, e.g. for patterns the regex engine cannot compile."""
    return SchemaValidationOption("pattern_validation_disabled", True)


def disable_read_only_validation() -> SchemaValidationOption:
    """Accept read-only properties in requests."""
    return SchemaValidationOption("read_only_validation_disabled", True)


def disable_write_only_validation() -> SchemaValidationOption:
    """Accept write-only properties in responses."""
    return SchemaValidationOption("write_only_validation_disabled", True)


def defaults_set(callback: Callable[[], None]) -> SchemaValidationOption:
    """Run *callback* once, the first time validation fills in a schema default."""
    return SchemaValidationOption("defaults_set", callback)


def set_schema_error_message_customizer(
    customizer: Callable[[SchemaError], str],
) -> SchemaValidationOption:
    """Override how schema errors are rendered.

    An empty string returned by *customizer* falls back to the default message.
    """
    return SchemaValidationOption("customize_message_error", customizer)


def set_customize_schema_resolve(
    resolve: Callable[[str], Optional[Schema]],
) -> SchemaValidationOption:
    """Fetch a schema for a non-empty reference the loader left unresolved."""
    return SchemaValidationOption("customize_schema_resolve", resolve)
