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

"""Well-formedness validation of interface declarations.

An interface is a mapping that contains a mandatory "Interface" body, optional
"Extends"/"Requires" lists of other interfaces, CONSTANTS and globalFunctions.
The body in turn contains only exemplars, pattern arrays and other interfaces.
Revisiting a node on the current path is not an error; the branch simply ends
there and the rest of the declaration is still checked.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..models.diagnostics import DiagnosticReport
from ..models.interface import INTERFACE_KEY, EXTENDS_KEY, REQUIRES_KEY
from ..models.kinds import Kind, EXEMPLAR_KINDS, CONSTANT_LEAF_KINDS, classify
from ..resolvers.candidate_keys import own_members
from ..utils.cycle_guard import VisitedPath
from .naming import is_constant_name, is_function_name

logger = logging.getLogger(__name__)


class InterfaceValidator:
    """Validator for interface declarations."""

    def validate(self, intf: Any, report: DiagnosticReport, visited: VisitedPath = None):
        """Validate an interface and everything reachable from it.

        Args:
            intf: A candidate for an interface
            report: DiagnosticReport to add errors to
            visited: Path of nodes already being validated
        """
        path = (visited or VisitedPath()).push(intf)
        if path is None:
            return
        depth = len(path)

        kind = classify(intf)
        if kind is not Kind.INTERFACE_CANDIDATE:
            report.add_structural_error(f"intf is no object, but of type {kind}", depth)
            return

        members = own_members(intf)
        if INTERFACE_KEY not in members:
            report.add_structural_error("intf.Interface: not found", depth)
            return

        for key, value in members.items():
            if key == INTERFACE_KEY:
                self._validate_body(value, report, path)
            elif key in (EXTENDS_KEY, REQUIRES_KEY):
                self._validate_interface_list(key, value, report, path)
            elif is_constant_name(key):
                self._validate_constant(value, report, path)
            elif is_function_name(key):
                value_kind = classify(value)
                if value_kind is not Kind.CALLABLE:
                    report.add_structural_error(
                        f"invalid type for global function {key}: {value_kind}. "
                        f"Did you mean {key.upper()}?",
                        depth,
                    )
            else:
                report.add_structural_error(
                    f"invalid name: {key}. Is neither CONSTANTNAME nor functionName",
                    depth,
                )

    def _validate_body(self, body: Any, report: DiagnosticReport, path: VisitedPath):
        """Validate intf.Interface, which is either a mapping or a pattern array."""
        kind = classify(body)
        if kind is Kind.INTERFACE_CANDIDATE:
            self._validate_body_mapping(body, report, path)
        elif kind is Kind.SEQUENCE:
            self._validate_pattern_array(body, report, path)
        else:
            # only mappings and pattern arrays form a body
            report.add_structural_error(f"invalid type for intf.Interface: {kind}", len(path))

    def _validate_body_mapping(self, body: Any, report: DiagnosticReport, path: VisitedPath):
        path = path.push(body)
        if path is None:
            return

        for value in own_members(body).values():
            self._validate_pattern(value, report, path)

    def _validate_pattern_array(self, array: Any, report: DiagnosticReport, path: VisitedPath):
        """Validate an Interface array or an inline shorthand array of patterns."""
        path = path.push(array)
        if path is None:
            return
        depth = len(path)

        holes = 0
        for pattern in array:
            if pattern is None:
                holes += 1
                continue
            self._validate_pattern(pattern, report, path)

        if holes:
            report.add_structural_error("intf.Interface array is not compact", depth)
        if len(array) == 0:
            report.add_structural_error("intf.Interface array cannot be empty", depth)

    def _validate_pattern(self, pattern: Any, report: DiagnosticReport, path: VisitedPath):
        """Validate a single member pattern inside an Interface body."""
        kind = classify(pattern)
        if kind is Kind.INTERFACE_CANDIDATE:
            self.validate(pattern, report, path)
        elif kind is Kind.SEQUENCE:
            self._validate_pattern_array(pattern, report, path)
        elif kind not in EXEMPLAR_KINDS:
            report.add_structural_error(f"invalid type for interface object: {kind}", len(path))

    def _validate_interface_list(self, key: str, array: Any, report: DiagnosticReport, path: VisitedPath):
        """Validate Extends/Requires: a compact list of mapping-bodied interfaces."""
        depth = len(path)
        kind = classify(array)
        if kind is not Kind.SEQUENCE:
            report.add_structural_error(f"array of interfaces {key} is no array, but {kind}", depth)
            return

        holes = 0
        for intf in array:
            if intf is None:
                holes += 1
                continue
            self.validate(intf, report, path)
            if classify(intf) is not Kind.INTERFACE_CANDIDATE:
                continue
            members = own_members(intf)
            if INTERFACE_KEY in members:
                body_kind = classify(members[INTERFACE_KEY])
                if body_kind is not Kind.INTERFACE_CANDIDATE:
                    report.add_structural_error(
                        f"{key} can only contain interfaces with a mapping Interface, not {body_kind}",
                        depth,
                    )

        if holes:
            report.add_structural_error(f"array of interfaces {key} is not compact", depth)

    def _validate_constant(self, value: Any, report: DiagnosticReport, path: VisitedPath):
        """Validate recursively that value is built only from constant data."""
        path = path.push(value)
        if path is None:
            return
        depth = len(path)

        kind = classify(value)
        if kind is Kind.INTERFACE_CANDIDATE and isinstance(value, Mapping):
            for key, nested in value.items():
                if not is_constant_name(key):
                    report.add_structural_error(f"nested constant is not all caps: {key}", depth)
                self._validate_constant(nested, report, path)
        elif kind is Kind.SEQUENCE:
            for nested in value:
                self._validate_constant(nested, report, path)
        elif kind not in CONSTANT_LEAF_KINDS:
            report.add_structural_error(f"invalid type for a constant: {kind}", depth)


interface_validator = InterfaceValidator()
