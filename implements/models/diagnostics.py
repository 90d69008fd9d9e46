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

"""Diagnostic reporting for interface validation and matching."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(str, Enum):
    """Where a diagnostic comes from."""

    STRUCTURAL = "structural"   # the interface declaration is malformed
    INVOCATION = "invocation"   # the caller misused the API
    MATCH = "match"             # the candidate does not conform


@dataclass(frozen=True)
class Diagnostic:
    """A single problem found during one validate/match call."""

    message: str
    category: ErrorCategory
    depth: Optional[int] = None

    def render(self) -> str:
        if self.depth is None:
            return self.message
        return f"{self.depth} {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            'message': self.message,
            'category': self.category.value,
        }
        if self.depth is not None:
            entry['depth'] = self.depth
        return entry


class DiagnosticReport:
    """Container for the diagnostics of a single top-level call."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def add_structural_error(self, message: str, depth: int):
        """Add an error about the interface declaration itself.

        Args:
            message: Error message
            depth: Length of the traversal path at the point of detection
        """
        self.diagnostics.append(Diagnostic(message, ErrorCategory.STRUCTURAL, depth))

    def add_match_error(self, message: str, depth: int):
        """Add an error about the candidate's conformance.

        Args:
            message: Error message
            depth: Number of (interface, candidate) pairs on the traversal path
        """
        self.diagnostics.append(Diagnostic(message, ErrorCategory.MATCH, depth))

    def add_invocation_error(self, message: str):
        """Add an error about API misuse. These carry no depth."""
        self.diagnostics.append(Diagnostic(message, ErrorCategory.INVOCATION))

    def extend(self, other: 'DiagnosticReport'):
        self.diagnostics.extend(other.diagnostics)

    def by_category(self, category: ErrorCategory) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.category is category]

    def render(self) -> str:
        """Newline-joined text of all diagnostics; '' means success."""
        return "\n".join(d.render() for d in self.diagnostics)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.diagnostics]
