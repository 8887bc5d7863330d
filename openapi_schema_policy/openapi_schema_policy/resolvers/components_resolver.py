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

import logging
import re
from typing import Any, Mapping, Optional, Sequence

from ..models.schema import Schema
from ..utils.json_pointer import split_fragment

logger = logging.getLogger(__name__)

# RFC 6901 array index: ASCII digits, no leading zero
_INDEX_RE = re.compile(r"0|[1-9][0-9]*")


class ComponentsResolver:
    """Schema reference resolver over an already loaded OpenAPI document.

    Instances are callables suitable for ``set_customize_schema_resolve``.
    Only local references ("#/components/schemas/Pet") are resolved; anything
    pointing at another document yields None so the validator reports it as
    unresolved.
    """

    def __init__(self, document: Mapping[str, Any]):
        self.document = document

    def __call__(self, ref: str) -> Optional[Schema]:
        return self.resolve(ref)

    def resolve(self, ref: str) -> Optional[Schema]:
        tokens = split_fragment(ref)
        if tokens is None:
            logger.debug(f"Skipping non-local schema reference '{ref}'")
            return None

        node: Any = self.document
        for token in tokens:
            node = self._step(node, token)
            if node is None:
                logger.debug(f"Schema reference '{ref}' not found at segment '{token}'")
                return None

        if not isinstance(node, Mapping):
            logger.debug(f"Schema reference '{ref}' does not point at a schema object")
            return None
        return node

    @staticmethod
    def _step(node: Any, token: str) -> Any:
        if isinstance(node, Mapping):
            return node.get(token)

        if isinstance(node, Sequence) and not isinstance(node, str):
            if _INDEX_RE.fullmatch(token) is None:
                return None
            index = int(token)
            if index >= len(node):
                return None
            return node[index]

        return None
