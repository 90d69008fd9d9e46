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

"""Option string parsing for match().

Option characters:
  * ``i`` - validate the interface before matching
  * ``r`` - match sub-interfaces and pattern arrays recursively
  * ``f`` - disallow additional functions
  * ``m`` - disallow additional members, including functions

Characters may appear in any order; repeats are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..exceptions import InvocationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchOptions:
    """Strictness flags for a single match() call."""

    validate_first: bool = False
    recurse: bool = False
    forbid_extra_functions: bool = False
    forbid_extra_members: bool = False

    @classmethod
    def parse(cls, opts: Optional[str]) -> MatchOptions:
        """Parse an option string such as ``"irfm"``.

        Raises:
            InvocationError: On the first character that is not an option.
        """
        opts = opts or ""
        if not isinstance(opts, str):
            raise InvocationError(f"opts must be a string, got {type(opts).__name__}")
        flags = {
            'validate_first': False,
            'recurse': False,
            'forbid_extra_functions': False,
            'forbid_extra_members': False,
        }
        for opt in opts:
            if opt == 'i':
                flags['validate_first'] = True
            elif opt == 'r':
                flags['recurse'] = True
            elif opt == 'f':
                flags['forbid_extra_functions'] = True
            elif opt == 'm':
                flags['forbid_extra_members'] = True
            else:
                raise InvocationError(f'unknown character in opts "{opts}": {opt}')

        options = cls(**flags)
        logger.debug(f"Parsed match options '{opts}': {options}")
        return options

    def to_string(self) -> str:
        """Canonical option string, the inverse of parse()."""
        chars = []
        if self.validate_first:
            chars.append('i')
        if self.recurse:
            chars.append('r')
        if self.forbid_extra_functions:
            chars.append('f')
        if self.forbid_extra_members:
            chars.append('m')
        return "".join(chars)
