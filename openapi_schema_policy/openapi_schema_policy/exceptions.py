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

"""Custom exceptions for the schema validation policy layer.

Policy operations themselves never raise: a missing hook or a degenerate hook
result falls back to default behavior. These exceptions belong to the
configuration layer that builds policies from files.
"""


class SchemaPolicyError(Exception):
    """Base exception for schema validation policy errors."""
    pass


class PolicyConfigurationError(SchemaPolicyError):
    """Exception raised for invalid policy configuration documents.

    ``issues`` holds the individual schema violations when the document was
    rejected by schema validation, and is empty otherwise.
    """

    def __init__(self, message: str, issues=None):
        super().__init__(message)
        self.issues = list(issues or [])


class FormatVersionError(PolicyConfigurationError):
    """Exception raised when a policy file's format version is incompatible."""
    pass
