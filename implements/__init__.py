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

"""Structural interface validator.

An interface is a mapping that contains constants, global functions and a
mandatory "Interface" member describing the members an implementation must
provide. An implementation can be a mapping, an instance of a class, a class
(matched by its class body only) or a function with assigned attributes.
"""

__version__ = "1.0.0"

from .api import (
    SELF_INTERFACE,
    Implements,
    implements,
    match,
    match_report,
    validate,
    validate_report,
)
from .config.match_options import MatchOptions
from .exceptions import ImplementsError, InvocationError
from .models.diagnostics import Diagnostic, DiagnosticReport, ErrorCategory
from .models.interface import combine, new_interface

__all__ = [
    'SELF_INTERFACE',
    'Diagnostic',
    'DiagnosticReport',
    'ErrorCategory',
    'Implements',
    'ImplementsError',
    'InvocationError',
    'MatchOptions',
    'combine',
    'implements',
    'match',
    'match_report',
    'new_interface',
    'validate',
    'validate_report',
]
