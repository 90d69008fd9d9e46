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

"""Interface value shape: reserved keys and constructors."""

from typing import Any, Dict, List

INTERFACE_KEY = "Interface"
EXTENDS_KEY = "Extends"
REQUIRES_KEY = "Requires"


def new_interface() -> Dict[str, Any]:
    """Return a blank interface with empty Extends and Requires."""
    return {
        INTERFACE_KEY: {},
        EXTENDS_KEY: [],
        REQUIRES_KEY: [],
    }


def combine(*interfaces: Any) -> Dict[str, Any]:
    """Combine all arguments into a single interface that extends them.

    No validation and no deduplication is performed; validating the result
    surfaces any defect of the combined interfaces.

    Args:
        interfaces: One or more interface values, in inheritance order

    Returns:
        A new interface with an empty body extending every argument
    """
    extends: List[Any] = list(interfaces)
    return {
        INTERFACE_KEY: {},
        EXTENDS_KEY: extends,
    }
