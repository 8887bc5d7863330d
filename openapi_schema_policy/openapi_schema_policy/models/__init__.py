"""Policy, option and schema value types.

This package has no dependency on the configuration layer, so policies can be
built in code without PyYAML or jsonschema being involved.
"""
