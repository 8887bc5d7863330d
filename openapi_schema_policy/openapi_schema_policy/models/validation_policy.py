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

"""Validation policy consulted by a schema validator during a traversal."""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from .schema import Schema, SchemaError, SchemaRef

if TYPE_CHECKING:
    from .options import SchemaValidationOption

logger = logging.getLogger(__name__)


class ValidationDirection(Enum):
    """Which side of an HTTP exchange the document is validated as."""

    UNSPECIFIED = "unspecified"
    AS_REQUEST = "request"
    AS_RESPONSE = "response"


class _OnceLatch:
    """Runs a callable at most once, even when raced from several threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def run(self, func: Callable[[], None]) -> bool:
        # Late callers block until the first call has finished.
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            func()
            return True


@dataclass(frozen=True)
class ValidationPolicy:
    """Behavioral switches and hooks for one or more validation traversals.

    Build it with :func:`new_validation_policy` from option values, or directly
    with keyword arguments. Fields never change after construction; the only
    mutable state is the latch guarding the defaults-applied callback.

    A policy can be shared by traversals running in parallel. The defaults
    callback then fires once for the whole group, not once per traversal.
    """

    fail_fast: bool = False
    multi_error: bool = False
    validation_direction: ValidationDirection = ValidationDirection.UNSPECIFIED
    format_validation_enabled: bool = False
    unknown_property_validation_enabled: bool = False
    pattern_validation_disabled: bool = False
    read_only_validation_disabled: bool = False
    write_only_validation_disabled: bool = False

    defaults_set: Optional[Callable[[], None]] = None
    customize_message_error: Optional[Callable[[SchemaError], str]] = None
    customize_schema_resolve: Optional[Callable[[str], Optional[Schema]]] = None

    _defaults_latch: _OnceLatch = field(
        default_factory=_OnceLatch, init=False, repr=False, compare=False
    )

    @property
    def visit_as_request(self) -> bool:
        return self.validation_direction is ValidationDirection.AS_REQUEST

    @property
    def visit_as_response(self) -> bool:
        return self.validation_direction is ValidationDirection.AS_RESPONSE

    @property
    def defaults_applied(self) -> bool:
        """True once the defaults-applied callback has run on this policy."""
        return self._defaults_latch.fired

    def with_options(self, *options: "SchemaValidationOption") -> "ValidationPolicy":
        """Return a new policy with *options* applied on top of this one.

        The new policy has its own defaults latch.
        """
        changes = {}
        for option in options:
            changes[option.field_name] = option.value
        return dataclasses.replace(self, **changes)

    def resolve_schema(self, schema_ref: SchemaRef) -> Optional[Schema]:
        """Return the schema behind *schema_ref*, or None when unresolved.

        An embedded schema always wins. The custom resolver is only a fallback
        for references the document loader left unresolved, and it is never
        called with an empty reference.
        """
        if schema_ref.value is not None or self.customize_schema_resolve is None:
            return schema_ref.value

        if not schema_ref.ref:
            return None

        logger.debug(f"Resolving unresolved schema reference '{schema_ref.ref}' with custom resolver")
        return self.customize_schema_resolve(schema_ref.ref)

    def notify_defaults_applied(self) -> None:
        """Tell the policy the validator substituted a schema default.

        The configured callback runs on the first notification only, for the
        lifetime of this policy.
        """
        if self.defaults_set is None:
            return
        if self._defaults_latch.run(self.defaults_set):
            logger.debug("Schema defaults applied; defaults callback executed")

    def format_error_message(self, error: SchemaError) -> str:
        """Render *error* through the message customizer, or its default text."""
        if self.customize_message_error is not None:
            msg = self.customize_message_error(error)
            if msg:
                return msg
        return error.default_message()

    def bind_error(self, error: SchemaError) -> SchemaError:
        """Attach this policy's message customizer to *error* and return it.

        ``str(error)`` then renders the same text as :meth:`format_error_message`.
        """
        error.customize_message = self.customize_message_error
        return error
