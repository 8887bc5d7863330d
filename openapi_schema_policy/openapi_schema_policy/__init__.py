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

"""Validation policy layer for OpenAPI / JSON Schema document validators.

A :class:`ValidationPolicy` is built once from a sequence of options and then
consulted, read-only, by a validator while it walks a document against a schema.
"""

# Version of the policy configuration file format understood by this package.
POLICY_FORMAT_VERSION = "0.1.0"

from .exceptions import (  # noqa: E402
    FormatVersionError,
    PolicyConfigurationError,
    SchemaPolicyError,
)
from .models.schema import MultiError, Schema, SchemaError, SchemaRef  # noqa: E402
from .models.validation_policy import ValidationDirection, ValidationPolicy  # noqa: E402
from .models.options import (  # noqa: E402
    SchemaValidationOption,
    defaults_set,
    disable_pattern_validation,
    disable_read_only_validation,
    disable_write_only_validation,
    enable_format_validation,
    enable_unknown_property_validation,
    fail_fast,
    multi_errors,
    new_validation_policy,
    set_customize_schema_resolve,
    set_schema_error_message_customizer,
    visit_as_request,
    visit_as_response,
)
from .resolvers.components_resolver import ComponentsResolver  # noqa: E402

__all__ = [
    "POLICY_FORMAT_VERSION",
    "ComponentsResolver",
    "FormatVersionError",
    "MultiError",
    "PolicyConfigurationError",
    "Schema",
    "SchemaError",
    "SchemaPolicyError",
    "SchemaRef",
    "SchemaValidationOption",
    "ValidationDirection",
    "ValidationPolicy",
    "defaults_set",
    "disable_pattern_validation",
    "disable_read_only_validation",
    "disable_write_only_validation",
    "enable_format_validation",
    "enable_unknown_property_validation",
    "fail_fast",
    "multi_errors",
    "new_validation_policy",
    "set_customize_schema_resolve",
    "set_schema_error_message_customizer",
    "visit_as_request",
    "visit_as_response",
]
