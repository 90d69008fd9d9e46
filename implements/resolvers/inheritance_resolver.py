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
from collections.abc import Mapping
from typing import Any, List, Optional

from ..models.interface import INTERFACE_KEY, EXTENDS_KEY
from ..models.kinds import Kind, classify
from ..utils.cycle_guard import VisitedPath
from .candidate_keys import own_members

logger = logging.getLogger(__name__)


class InheritanceResolver:
    """Resolves the effective members of an interface through its Extends chain.

    Extends entries are searched depth-first in declaration order. Malformed
    parts of the chain (missing Interface, non-sequence Extends, entries that
    are not interfaces) contribute nothing; reporting them is the validator's job.
    """

    @staticmethod
    def _body(intf: Any) -> Optional[Mapping]:
        if classify(intf) is not Kind.INTERFACE_CANDIDATE:
            return None
        body = own_members(intf).get(INTERFACE_KEY)
        if not isinstance(body, Mapping):
            return None
        return body

    @staticmethod
    def _extends(intf: Any) -> List[Any]:
        if classify(intf) is not Kind.INTERFACE_CANDIDATE:
            return []
        extends = own_members(intf).get(EXTENDS_KEY)
        if classify(extends) is not Kind.SEQUENCE:
            return []
        return list(extends)

    def effective_keys(self, intf: Any, visited: Optional[VisitedPath] = None) -> List[Any]:
        """
        Retrieve all member names of intf.Interface and of everything it extends.
        First-seen order is preserved and duplicates are dropped.
        """
        path = (visited or VisitedPath()).push(intf)
        if path is None:
            return []

        body = self._body(intf)
        keys = list(body.keys()) if body is not None else []

        for parent in self._extends(intf):
            for key in self.effective_keys(parent, path):
                if key not in keys:
                    keys.append(key)

        return keys

    def resolve_member(self, intf: Any, name: Any, visited: Optional[VisitedPath] = None) -> Any:
        """
        Find the pattern bound to name, looking at intf.Interface first and then
        recursing into Extends. The first match wins; None if not found.
        """
        path = (visited or VisitedPath()).push(intf)
        if path is None:
            return None

        body = self._body(intf)
        if body is not None and name in body:
            return body[name]

        for parent in self._extends(intf):
            if name in self.effective_keys(parent, path):
                return self.resolve_member(parent, name, path)

        return None


inheritance_resolver = InheritanceResolver()


def effective_keys(intf: Any) -> List[Any]:
    return inheritance_resolver.effective_keys(intf)


def resolve_member(intf: Any, name: Any) -> Any:
    return inheritance_resolver.resolve_member(intf, name)
