#!/usr/bin/env python3

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


SCRIPT_DIR = Path(__file__).resolve().parent
PACKAGE_ROOT = SCRIPT_DIR.parent
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from openapi_schema_policy.config import build_policy  # noqa: E402
from openapi_schema_policy.exceptions import PolicyConfigurationError  # noqa: E402
from openapi_schema_policy.models.validation_policy import ValidationPolicy  # noqa: E402
from openapi_schema_policy.utils.logging_utils import configure_split_stream_logging  # noqa: E402

logger = logging.getLogger("check_policy_config")

_REPORTED_FIELDS = [
    "fail_fast",
    "multi_error",
    "format_validation_enabled",
    "unknown_property_validation_enabled",
    "pattern_validation_disabled",
    "read_only_validation_disabled",
    "write_only_validation_disabled",
]


def policy_summary(policy: ValidationPolicy) -> Dict[str, Any]:
    summary: Dict[str, Any] = {name: getattr(policy, name) for name in _REPORTED_FIELDS}
    summary["validation_direction"] = policy.validation_direction.value
    return summary


def check_config(config_path: Path) -> Tuple[List[str], Optional[ValidationPolicy]]:
    """Load and validate *config_path* once.

    Returns human-readable problems (empty when valid) and the resulting
    policy (None when invalid).
    """
    try:
        policy = build_policy(config_path)
    except PolicyConfigurationError as e:
        if not e.issues:
            return [str(e)], None
        return [
            f"{issue.message}" + (f" (yaml_path={issue.yaml_path})" if issue.yaml_path else "")
            for issue in e.issues
        ], None

    return [], policy


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Check a schema validation policy configuration file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("config", help="Policy configuration file (YAML)")
    parser.add_argument(
        "--format",
        choices=["human", "json"],
        default="human",
        help="Output format (default: human)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    configure_split_stream_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    config_path = Path(args.config).resolve()
    problems, policy = check_config(config_path)

    summary = None
    if not problems:
        summary = policy_summary(policy)

    if args.format == "json":
        output = {
            "file": str(config_path),
            "valid": not problems,
            "errors": problems,
            "policy": summary,
        }
        print(json.dumps(output, indent=2))
    elif problems:
        print(f"{config_path}:", file=sys.stderr)
        for problem in problems:
            print(f"  ERROR: {problem}", file=sys.stderr)
    else:
        logger.info(f"{config_path}: valid policy configuration")
        for name, value in summary.items():
            print(f"  {name}: {value}")

    if problems:
        sys.exit(1)


if __name__ == "__main__":
    main()
