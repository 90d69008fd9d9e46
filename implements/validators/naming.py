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

"""Naming rules for the global members of an interface."""

import re
from typing import Any

_CONSTANT_NAME_RE = re.compile(r'[A-Z][A-Z0-9]*')
_FUNCTION_NAME_RE = re.compile(r'[a-z][a-zA-Z0-9]*')


def is_constant_name(name: Any) -> bool:
    """Check if a name is a valid CONSTANTNAME.

    CONSTANTNAME: Starts with an uppercase letter, followed by uppercase
    letters and digits only. No underscores.
    Examples: ASD, ASD2, VERSION

    Args:
        name: Name to check

    Returns:
        True if name is all caps
    """
    if not isinstance(name, str) or not name:
        return False
    return bool(_CONSTANT_NAME_RE.fullmatch(name))


def is_function_name(name: Any) -> bool:
    """Check if a name is a valid lowerCamel functionName.

    functionName: Starts with a lowercase letter, followed by letters and digits.
    Examples: a, asd, a4, aSdF, aSdF5

    Args:
        name: Name to check

    Returns:
        True if name is lowerCamel
    """
    if not isinstance(name, str) or not name:
        return False
    return bool(_FUNCTION_NAME_RE.fullmatch(name))
