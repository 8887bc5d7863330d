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

"""Schema reference and error values shared with the validation traversal.

Only the parts the policy hooks need are modelled here: the traversal owns
schema parsing and decides which errors to raise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from ..utils.json_pointer import join_pointer


Schema = Mapping[str, Any]


@dataclass(frozen=True)
class SchemaRef:
    """A schema slot that holds an embedded schema, a reference string, or both.

    ``value`` is None until the reference has been resolved.
    """

    ref: str = ""
    value: Optional[Schema] = None


@dataclass(eq=False)
class SchemaError(Exception):
    """A single violation found while validating a document against a schema."""

    value: Any = None
    schema: Optional[Schema] = None
    schema_field: str = ""
    reason: str = ""
    origin: Optional[BaseException] = None
    # Innermost token first; the traversal appends while unwinding.
    reversed_path: List[Any] = field(default_factory=list)
    customize_message: Optional[Callable[["SchemaError"], str]] = field(default=None, repr=False)

    def json_pointer(self) -> List[Any]:
        """Path of the offending value in the document, root first."""
        return list(reversed(self.reversed_path))

    def default_message(self) -> str:
        if self.origin is not None:
            return str(self.origin)

        parts = []
        if self.reversed_path:
            parts.append(f'Error at "{join_pointer(self.json_pointer())}": ')
        if self.reason:
            parts.append(self.reason)
        else:
            parts.append(f'Doesn\'t match schema "{self.schema_field}"')
        return "".join(parts)

    def __str__(self) -> str:
        if self.customize_message is not None:
            msg = self.customize_message(self)
            if msg:
                return msg
        return self.default_message()


class MultiError(Exception):
    """Several violations collected during one traversal."""

    def __init__(self, errors: Optional[List[BaseException]] = None):
        self.errors: List[BaseException] = list(errors or [])
        super().__init__(self.errors)

    def append(self, error: BaseException) -> None:
        self.errors.append(error)

    def is_empty(self) -> bool:
        return not self.errors

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def __str__(self) -> str:
        return " | ".join(str(err) for err in self.errors)
