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

"""Public entry points: validate, match, combine and the arity dispatcher."""

import logging
from typing import Any, Dict, Optional

from .config.match_options import MatchOptions
from .exceptions import InvocationError
from .matcher.structural_matcher import StructuralMatcher
from .models.diagnostics import DiagnosticReport
from .models.interface import INTERFACE_KEY, combine, new_interface
from .models.kinds import Kind, classify
from .resolvers.candidate_keys import own_members
from .utils.cycle_guard import VisitedPairs
from .validators.interface_validator import interface_validator

logger = logging.getLogger(__name__)

_MATCHABLE_BODY_KINDS = (Kind.INTERFACE_CANDIDATE, Kind.SEQUENCE)
_MATCHABLE_CANDIDATE_KINDS = (Kind.INTERFACE_CANDIDATE, Kind.CALLABLE, Kind.SEQUENCE)


def validate_report(intf: Any) -> DiagnosticReport:
    """Validate an interface declaration and return the structured report."""
    report = DiagnosticReport()
    interface_validator.validate(intf, report)
    return report


def validate(intf: Any) -> str:
    """Test whether the interface consists only of valid members.

    Args:
        intf: A candidate for an interface

    Returns:
        A newline-separated string of errors, "" on success
    """
    return validate_report(intf).render()


def _interface_body(intf: Any) -> Optional[Any]:
    if classify(intf) is not Kind.INTERFACE_CANDIDATE:
        return None
    return own_members(intf).get(INTERFACE_KEY)


def match_report(intf: Any, candidate: Any, opts: Optional[str] = "") -> DiagnosticReport:
    """Match a candidate against an interface and return the structured report.

    See match() for the parameters and options.
    """
    report = DiagnosticReport()

    try:
        options = MatchOptions.parse(opts)
    except InvocationError as e:
        report.add_invocation_error(str(e))
        return report

    if intf is None:
        report.add_invocation_error("missing interface to match against")
        return report

    body = _interface_body(intf)
    body_kind = classify(body)
    if body_kind not in _MATCHABLE_BODY_KINDS:
        report.add_invocation_error(f"invalid type of intf: {classify(intf)}, intf.Interface: {body_kind}")
        return report

    if options.validate_first:
        interface_validator.validate(intf, report)
        if not report.ok:
            logger.debug("Interface validation failed, matching skipped")
            return report

    if candidate is None:
        report.add_invocation_error("missing object for matching")
        return report

    candidate_kind = classify(candidate)
    if candidate_kind not in _MATCHABLE_CANDIDATE_KINDS:
        report.add_invocation_error(f"object has invalid type: {candidate_kind}")
        return report

    matcher = StructuralMatcher(options)
    pairs = VisitedPairs()
    if body_kind is Kind.INTERFACE_CANDIDATE:
        matcher.compare_keys(intf, candidate, report, pairs)
    else:
        matcher.match_arrays(body, candidate, report, pairs)

    return report


def match(intf: Any, candidate: Any, opts: Optional[str] = "") -> str:
    """Test the implementation against the interface.

    opts string characters:

    'i' - also validate the interface using validate()

    'r' - check sub-interfaces and pattern arrays recursively

    'f' - disallow additional functions

    'm' - disallow additional members, including functions

    Args:
        intf: The interface to match against
        candidate: The implementation: mapping, class, instance, function or sequence
        opts: String of option characters (see above). Default: ""

    Returns:
        A newline-separated string of errors, "" on match
    """
    return match_report(intf, candidate, opts).render()


SELF_INTERFACE: Dict[str, Any] = {
    INTERFACE_KEY: {
        'validate': validate,
        'match': match,
        'combine': combine,
        'self_interface': {
            INTERFACE_KEY: {},
        },
    },
}
"""Interface of the Implements dispatcher itself.

match(SELF_INTERFACE, implements, "ifm") is "". A deep recursive self-match
with "rm" intentionally fails: self_interface is matched against
SELF_INTERFACE, whose "Interface" member is an extra member of it.
"""


class Implements:
    """Calls validate() or match() depending on the number of arguments:

    implements() -> blank interface (see new_interface())

    implements(intf) -> validate(intf)

    implements(intf, candidate) -> match(intf, candidate)

    implements(intf, candidate, opts) -> match(intf, candidate, opts)
    """

    validate = staticmethod(validate)
    match = staticmethod(match)
    combine = staticmethod(combine)
    self_interface = SELF_INTERFACE

    def __call__(self, *args: Any) -> Any:
        if len(args) == 0:
            return new_interface()
        if len(args) == 1:
            return validate(args[0])
        if len(args) in (2, 3):
            return match(*args)
        message = f"Interface(): invalid number of arguments: {len(args)}"
        logger.debug(message)
        return message


implements = Implements()
