from .policy_config import (
    ConfigIssue,
    build_policy,
    collect_config_issues,
    load_policy_config,
    options_from_config,
)

__all__ = [
    "ConfigIssue",
    "build_policy",
    "collect_config_issues",
    "load_policy_config",
    "options_from_config",
]
