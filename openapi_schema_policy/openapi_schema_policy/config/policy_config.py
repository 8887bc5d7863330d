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

"""Build validation policies from YAML configuration files.

Only the boolean switches and the validation direction can be configured in a
file. Hooks (resolver, message customizer, defaults callback) are code and are
passed to :func:`build_policy` as extra options.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

import yaml
from jsonschema.validators import validator_for

from ..exceptions import FormatVersionError, PolicyConfigurationError
from ..models.options import (
    SchemaValidationOption,
    disable_pattern_validation,
    disable_read_only_validation,
    disable_write_only_validation,
    enable_format_validation,
    enable_unknown_property_validation,
    fail_fast,
    multi_errors,
    visit_as_request,
    visit_as_response,
)
from ..models.validation_policy import ValidationPolicy
from ..utils.format_version import FORMAT_VERSION_FIELD, check_format_version
from ..utils.json_pointer import join_pointer
from .json_schema_loader import load_schema

logger = logging.getLogger(__name__)

POLICY_SCHEMA_NAME = "validation_policy"

# Config switches in the order their options are applied.
_SWITCHES: Tuple[Tuple[str, Callable[[], SchemaValidationOption]], ...] = (
    ("fail_fast", fail_fast),
    ("multi_errors", multi_errors),
    ("enable_unknown_property_validation", enable_unknown_property_validation),
    ("enable_format_validation", enable_format_validation),
    ("disable_pattern_validation", disable_pattern_validation),
    ("disable_read_only_validation", disable_read_only_validation),
    ("disable_write_only_validation", disable_write_only_validation),
)

_DIRECTIONS: Dict[str, Optional[Callable[[], SchemaValidationOption]]] = {
    "unspecified": None,
    "request": visit_as_request,
    "response": visit_as_response,
}


@dataclass(frozen=True)
class ConfigIssue:
    message: str
    yaml_path: str = ""


def load_policy_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a policy configuration file.

    Raises:
        PolicyConfigurationError: If the file is missing, unreadable, not valid
            YAML, or does not contain a mapping
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise PolicyConfigurationError(f"Policy configuration file not found: {path}") from e
    except OSError as e:
        raise PolicyConfigurationError(f"Cannot read policy configuration {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PolicyConfigurationError(f"Invalid YAML in policy configuration {path}: {e}") from e

    if data is None:
        raise PolicyConfigurationError(f"Empty policy configuration file: {path}")
    if not isinstance(data, dict):
        raise PolicyConfigurationError(
            f"Policy configuration root must be a mapping, got {type(data).__name__}: {path}"
        )

    logger.debug(f"Loaded policy configuration from {path}")
    return data


def collect_config_issues(config: Mapping[str, Any]) -> List[ConfigIssue]:
    """Validate *config* against the bundled schema for its format version.

    Raises:
        FormatVersionError: If the declared format version cannot be read by
            this package
    """
    if not isinstance(config, Mapping):
        return [ConfigIssue(message="Root must be a mapping/object")]

    version_check = check_format_version(config.get(FORMAT_VERSION_FIELD))
    if not version_check.compatible:
        raise FormatVersionError(version_check.message)
    if version_check.warning:
        logger.warning(version_check.message)

    schema_version = str(version_check.file_version or version_check.supported_version)
    schema = load_schema(POLICY_SCHEMA_NAME, schema_version)

    validator_cls = validator_for(schema)
    validator = validator_cls(schema)
    errors = sorted(validator.iter_errors(dict(config)), key=lambda e: list(e.absolute_path))
    return [ConfigIssue(message=e.message, yaml_path=join_pointer(e.absolute_path)) for e in errors]


def _format_issues(issues: List[ConfigIssue]) -> str:
    return "\n".join(
        f"  - {i.message}" + (f" (yaml_path={i.yaml_path})" if i.yaml_path else "")
        for i in issues
    )


def options_from_config(config: Mapping[str, Any]) -> List[SchemaValidationOption]:
    """Translate a configuration mapping into policy options.

    Raises:
        PolicyConfigurationError: If the configuration does not match the schema
    """
    issues = collect_config_issues(config)
    if issues:
        raise PolicyConfigurationError(
            f"Invalid policy configuration:\n{_format_issues(issues)}", issues=issues
        )

    options: List[SchemaValidationOption] = []
    for key, factory in _SWITCHES:
        if config.get(key, False):
            options.append(factory())

    direction = _DIRECTIONS[config.get("visit_as", "unspecified")]
    if direction is not None:
        options.append(direction())

    if config.get("fail_fast") and config.get("multi_errors"):
        logger.warning(
            "Both 'fail_fast' and 'multi_errors' are enabled; "
            "the validator decides which error mode takes precedence"
        )

    return options


def build_policy(
    config: Union[Mapping[str, Any], str, Path],
    *extra_options: SchemaValidationOption,
) -> ValidationPolicy:
    """Build a :class:`ValidationPolicy` from a config mapping or file path.

    *extra_options* are applied after the configured ones and therefore
    override them.
    """
    if isinstance(config, (str, Path)):
        config = load_policy_config(config)

    options = options_from_config(config)
    return ValidationPolicy().with_options(*options, *extra_options)
