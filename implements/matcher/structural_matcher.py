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

"""Structural diff of a candidate against an interface.

Two mutually recursive walks share one dual cycle guard:

- compare_keys() diffs the effective member names of an interface against the
  member names of a candidate and checks the kind of every shared member;
- match_arrays() treats a pattern array as a set of acceptable shapes and
  requires every candidate element to satisfy at least one of them.
"""

import logging
from typing import Any, List

from ..config.match_options import MatchOptions
from ..models.diagnostics import DiagnosticReport
from ..models.interface import INTERFACE_KEY
from ..models.kinds import Kind, classify
from ..resolvers.candidate_keys import DeclaredMember, candidate_keys, candidate_member, member_kind, own_members
from ..resolvers.inheritance_resolver import InheritanceResolver, inheritance_resolver
from ..utils.cycle_guard import VisitedPairs

logger = logging.getLogger(__name__)

_MATCHABLE_CANDIDATE_KINDS = (Kind.INTERFACE_CANDIDATE, Kind.CALLABLE)
_SUB_INTERFACE_CANDIDATE_KINDS = (Kind.INTERFACE_CANDIDATE, Kind.CALLABLE, Kind.SEQUENCE)


def _sorted_keys(keys: List[Any]) -> List[Any]:
    return sorted(keys, key=str)


class StructuralMatcher:
    """Matches candidates against interfaces under a fixed set of options."""

    def __init__(self, options: MatchOptions, resolver: InheritanceResolver = None):
        self.options = options
        self.resolver = resolver or inheritance_resolver

    def compare_keys(self, intf: Any, candidate: Any, report: DiagnosticReport, pairs: VisitedPairs):
        """Perform an interface match of a mapping-bodied interface.

        Args:
            intf: The interface to match against
            candidate: The implementation (mapping, class, instance or function)
            report: DiagnosticReport to add errors to
            pairs: Dual cycle guard of the current path
        """
        pairs = pairs.push(intf, candidate)
        if pairs is None:
            return
        depth = len(pairs)

        kind = classify(candidate)
        if kind not in _MATCHABLE_CANDIDATE_KINDS:
            report.add_match_error(f"invalid type of candidate: {kind}", depth)
            return

        ikeys = _sorted_keys(self.resolver.effective_keys(intf))
        okeys = _sorted_keys(candidate_keys(candidate) or [])

        missing = [key for key in ikeys if key not in okeys]
        extra = [key for key in okeys if key not in ikeys]
        shared = [key for key in ikeys if key in okeys]

        for key in missing:
            report.add_match_error(f"missing key: {key}", depth)

        if extra and (self.options.forbid_extra_members or self.options.forbid_extra_functions):
            for key in extra:
                if self.options.forbid_extra_members:
                    report.add_match_error(f"extra member: {key}", depth)
                if self.options.forbid_extra_functions:
                    if member_kind(candidate_member(candidate, key)) is Kind.CALLABLE:
                        report.add_match_error(f"extra function: {key}", depth)

        for key in shared:
            self._compare_member(key, intf, candidate, report, pairs)

    def _compare_member(
        self,
        key: Any,
        intf: Any,
        candidate: Any,
        report: DiagnosticReport,
        pairs: VisitedPairs,
    ):
        pattern = self.resolver.resolve_member(intf, key)
        value = candidate_member(candidate, key)
        pattern_kind = classify(pattern)
        value_kind = member_kind(value)
        # declared members carry no value to descend into
        descend = self.options.recurse and not isinstance(value, DeclaredMember)

        if value_kind is None:
            logger.debug(f"Kind of member '{key}' is not statically known, accepted")
        elif pattern_kind is Kind.INTERFACE_CANDIDATE and value_kind in _SUB_INTERFACE_CANDIDATE_KINDS:
            if descend:
                logger.debug(f"Descending into sub-interface '{key}' at depth {len(pairs)}")
                self._match_sub_interface(pattern, value, report, pairs)
        elif pattern_kind is Kind.SEQUENCE and value_kind is Kind.SEQUENCE:
            if descend:
                logger.debug(f"Descending into pattern array '{key}' at depth {len(pairs)}")
                self.match_arrays(pattern, value, report, pairs)
        elif pattern_kind is value_kind and pattern_kind is not Kind.UNSUPPORTED:
            pass
        else:
            report.add_match_error(f"type mismatch of {key}: {value_kind} != {pattern_kind}", len(pairs))

    def _match_sub_interface(self, nested: Any, value: Any, report: DiagnosticReport, pairs: VisitedPairs):
        """Match value against a nested interface, which may be array-bodied."""
        body = own_members(nested).get(INTERFACE_KEY)
        if classify(body) is Kind.SEQUENCE:
            self.match_arrays(body, value, report, pairs)
        else:
            self.compare_keys(nested, value, report, pairs)

    def match_arrays(self, patterns: Any, candidate: Any, report: DiagnosticReport, pairs: VisitedPairs):
        """For each element of candidate, find a matching pattern or report it.

        Args:
            patterns: An Interface array or shorthand array of patterns
            candidate: A sequence of arbitrary values
            report: DiagnosticReport to add errors to
            pairs: Dual cycle guard of the current path
        """
        pairs = pairs.push(patterns, candidate)
        if pairs is None:
            return
        depth = len(pairs)

        critical = False
        patterns_kind = classify(patterns)
        candidate_kind = classify(candidate)
        if patterns_kind is not Kind.SEQUENCE:
            report.add_match_error(f"intf.Interface array is no array, but a {patterns_kind}", depth)
            critical = True
        if candidate_kind is not Kind.SEQUENCE:
            report.add_match_error(f"array matching: candidate is no array, but a {candidate_kind}", depth)
            critical = True
        if critical:
            return

        for index, element in enumerate(candidate):
            if not any(self._satisfies(pattern, element, pairs) for pattern in patterns):
                report.add_match_error(
                    f"Interface array doesn't contain match for element at index {index}: {element!r}",
                    depth,
                )

    def _satisfies(self, pattern: Any, element: Any, pairs: VisitedPairs) -> bool:
        if pattern is None:
            return False

        pattern_kind = classify(pattern)
        if pattern_kind is Kind.INTERFACE_CANDIDATE:
            scratch = DiagnosticReport()
            self._match_sub_interface(pattern, element, scratch, pairs)
            return scratch.ok
        if pattern_kind is Kind.SEQUENCE:
            scratch = DiagnosticReport()
            self.match_arrays(pattern, element, scratch, pairs)
            return scratch.ok
        if pattern_kind is Kind.UNSUPPORTED:
            return False
        return pattern_kind is classify(element)
