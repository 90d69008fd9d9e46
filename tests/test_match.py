from __future__ import annotations

import functools
import re
from types import SimpleNamespace
from typing import Any, Dict

import pytest

from implements import ErrorCategory, match, match_report
from tests.support.samples import fn


def _cyclic_both() -> tuple:
    intf: Dict[str, Any] = {'Interface': {'sub': None}}
    intf['Interface']['sub'] = intf
    obj: Dict[str, Any] = {'sub': None}
    obj['sub'] = obj
    return intf, obj


def _cyclic_second_order_obj() -> tuple:
    intf, obj = _cyclic_both()
    obj['sub'] = {'sub': obj}
    return intf, obj


def _cyclic_second_order_both() -> tuple:
    intf, obj = _cyclic_second_order_obj()
    intf['Interface']['sub'] = {'Interface': {'sub': intf}}
    return intf, obj


def _cyclic_second_order_intf() -> tuple:
    intf, obj = _cyclic_second_order_both()
    obj['sub'] = obj
    return intf, obj


def _multiple_interfaces(dsa_present: bool) -> tuple:
    intf: Dict[str, Any] = {'Interface': {'asd': {'Interface': {'dsa': None}}}}
    intf['Interface']['asd']['Interface']['dsa'] = intf
    obj: Dict[str, Any] = {'asd': None, 'dsa': None}
    obj['asd'] = obj
    if dsa_present:
        obj['dsa'] = obj
    return intf, obj


EXTENDS_INTF = {
    'Interface': {'asd': fn},
    'Extends': [{'Interface': {'dsa': fn}}],
}


def _overloaded(extends_self: bool) -> Dict[str, Any]:
    intf: Dict[str, Any] = {
        'Interface': {'asd': fn},
        'Extends': [{'Interface': {'asd': fn}}],
    }
    if extends_self:
        intf['Extends'].append(intf)
    return intf


NESTED_INTF = {'Interface': {'intf': {'Interface': {'asd': fn}}}}

SCENARIOS = [
    # options without members
    pytest.param({'Interface': {}}, {}, "", True, id="empty-interface"),
    pytest.param({'Interface': {}}, {}, "f", True, id="option-f"),
    pytest.param({'Interface': {}}, {}, "m", True, id="option-m"),
    pytest.param({'Interface': {}}, {}, "r", True, id="option-r-without-subinterfaces"),
    pytest.param({'Interface': {}}, {}, "rrffmmii", True, id="repeated-options"),
    # extra members
    pytest.param({'Interface': {}}, {'asd': 5}, "", True, id="default-ignores-extra-member"),
    pytest.param({'Interface': {}}, {'asd': 5}, "m", False, id="option-m-with-member"),
    pytest.param({'Interface': {}}, {'asd': 5}, "f", True, id="option-f-with-member"),
    pytest.param({'Interface': {}}, {'asd': fn}, "f", False, id="option-f-with-function"),
    pytest.param({'Interface': {}}, {'asd': fn}, "m", False, id="option-m-with-function"),
    # required members
    pytest.param({'Interface': {'asd': fn}}, {}, "", False, id="missing-function"),
    pytest.param({'Interface': {'asd': fn}}, {}, "rfm", False, id="missing-function-strict"),
    pytest.param({'Interface': {'asd': fn}}, {'asd': fn}, "", True, id="object-with-function"),
    pytest.param({'Interface': {'asd': fn}}, {'asd': "5"}, "", False, id="member-of-wrong-type"),
    pytest.param({'Interface': {'asd': 0}}, {'asd': 1.5}, "", True, id="int-exemplar-float-member"),
    pytest.param({'Interface': {'asd': 0}}, {'asd': True}, "", False, id="bool-is-not-a-number"),
    pytest.param({'Interface': {'asd': None}}, {'asd': None}, "", True, id="undefined-exemplar-without-validation"),
    pytest.param({'Interface': {'asd': None}}, {'asd': None}, "i", False, id="undefined-exemplar-with-validation"),
    pytest.param({'Interface': {'asd': b""}}, {'asd': b""}, "", False, id="unsupported-kinds-never-match"),
    # nested interfaces
    pytest.param(NESTED_INTF, {}, "", False, id="nested-missing-subinterface"),
    pytest.param(NESTED_INTF, {'intf': {}}, "i", True, id="nested-non-recursive-false-positive"),
    pytest.param(NESTED_INTF, {'intf': {}}, "r", False, id="nested-recursive-detects-missing"),
    pytest.param(NESTED_INTF, {'intf': {'asd': fn}}, "r", True, id="nested-recursive-success"),
    pytest.param(NESTED_INTF, {'intf': fn}, "", True, id="nested-function-candidate"),
    pytest.param(NESTED_INTF, {'intf': 5}, "", False, id="nested-number-candidate"),
    # cycles
    pytest.param(*_cyclic_both(), "r", True, id="cycle-first-order-both"),
    pytest.param(*_cyclic_second_order_obj(), "r", True, id="cycle-second-order-obj"),
    pytest.param(*_cyclic_second_order_both(), "r", True, id="cycle-second-order-both"),
    pytest.param(*_cyclic_second_order_intf(), "r", True, id="cycle-second-order-intf"),
    pytest.param(*_multiple_interfaces(True), "r", True, id="cycle-multiple-interfaces"),
    pytest.param(*_multiple_interfaces(False), "r", False, id="cycle-multiple-interfaces-depth"),
    # inheritance
    pytest.param(EXTENDS_INTF, {'asd': fn}, "r", False, id="extends-missing-function"),
    pytest.param(EXTENDS_INTF, {'asd': fn, 'dsa': fn}, "r", True, id="extends-valid-object"),
    pytest.param(EXTENDS_INTF, {'asd': fn, 'dsa': fn}, "rfm", True, id="extends-valid-object-strict"),
    pytest.param(_overloaded(False), {'asd': fn}, "r", True, id="extends-function-overload"),
    pytest.param(_overloaded(True), {'asd': fn}, "r", True, id="extends-recursion"),
    pytest.param({'Interface': {'asd': fn}, 'Extends': []}, {'asd': fn}, "r", True, id="extends-empty"),
    pytest.param(
        {'Interface': {}, 'Requires': [{'Interface': {'never': fn}}]},
        {},
        "irfm",
        True,
        id="requires-is-not-enforced",
    ),
    # array interfaces
    pytest.param({'Interface': [4]}, {0: 5}, "r", False, id="array-interface-with-mapping"),
    pytest.param({'Interface': [4]}, [6], "r", True, id="array-interface-with-list"),
    pytest.param({'Interface': [4]}, (6, 7), "r", True, id="array-interface-with-tuple"),
    pytest.param({'Interface': [4, "5"]}, ["6", 7], "r", True, id="array-multiple-datatypes"),
    pytest.param({'Interface': [4, "5"]}, [re.compile("0")], "r", False, id="array-mismatching-element"),
    pytest.param({'Interface': [4, "5"]}, [], "r", True, id="array-empty-candidate"),
    pytest.param(
        {'Interface': [[5, re.compile("5")]]},
        [[1, re.compile("2")], [1], [re.compile("3")], []],
        "r",
        True,
        id="array-nested-arrays",
    ),
    pytest.param(
        {'Interface': [[5], [re.compile("5")]]},
        [[1, re.compile("2")], [1], [re.compile("3")], []],
        "r",
        False,
        id="array-separation-of-nested-arrays",
    ),
    pytest.param(
        {'Interface': [{'Interface': {'id': 0}}, "fallback"]},
        [{'id': 1}, "text", {'id': 2, 'extra': True}],
        "r",
        True,
        id="array-of-interfaces",
    ),
    pytest.param(
        {'Interface': [{'Interface': {'id': 0}}]},
        [{'id': 1}, {'name': "x"}],
        "r",
        False,
        id="array-of-interfaces-missing-key",
    ),
    pytest.param(
        {'Interface': [{'Interface': {'id': 0}}]},
        [{'id': 1, 'extra': True}],
        "rm",
        False,
        id="array-of-interfaces-strict",
    ),
    # shorthand arrays
    pytest.param(
        {'Interface': {'subarr': [5, re.compile("5")]}},
        {'subarr': [6, re.compile("sechs")]},
        "r",
        True,
        id="shorthand",
    ),
    pytest.param(
        {'Interface': {'subarr': [5, re.compile("5")]}},
        {'subarr': [False]},
        "r",
        False,
        id="shorthand-wrong-element-type",
    ),
    pytest.param(
        {'Interface': {'subarr': [5, re.compile("5")]}},
        {'subarr': [False]},
        "",
        True,
        id="shorthand-not-checked-without-r",
    ),
    pytest.param(
        {'Interface': {'subarr': [5]}},
        {'subarr': {'a': 5}},
        "r",
        False,
        id="shorthand-with-mapping-candidate",
    ),
    pytest.param(
        {'Interface': {'subarr': {'Interface': [5, re.compile("5")]}}},
        {'subarr': [6, re.compile("sechs")]},
        "r",
        True,
        id="array-subinterface",
    ),
    pytest.param(
        {'Interface': {'subarr': {'Interface': [5, re.compile("5")]}}},
        {'subarr': [False]},
        "r",
        False,
        id="array-subinterface-wrong-element-type",
    ),
]


@pytest.mark.parametrize("intf, candidate, opts, conforms", SCENARIOS)
def test_match(intf: Any, candidate: Any, opts: str, conforms: bool) -> None:
    result = match(intf, candidate, opts)
    if conforms:
        assert result == ''
    else:
        assert result != ''


class WithLocalFunction:
    def __init__(self):
        self.asd = fn


class WithClassFunction:
    def asd(self):
        return None


class DerivedFunction(WithClassFunction):
    pass


class WithPrivateHelper:
    def asd(self):
        return None

    def _helper(self):
        return None


@pytest.mark.parametrize(
    "candidate, conforms",
    [
        pytest.param(WithLocalFunction, False, id="class-with-local-function"),
        pytest.param(WithLocalFunction(), True, id="instance-with-local-function"),
        pytest.param(WithClassFunction, True, id="class-with-class-function"),
        pytest.param(WithClassFunction(), True, id="instance-with-class-function"),
        pytest.param(DerivedFunction, True, id="class-with-inherited-function"),
        pytest.param(DerivedFunction(), True, id="instance-with-inherited-function"),
        pytest.param(SimpleNamespace(asd=fn), True, id="namespace-with-function"),
        pytest.param(SimpleNamespace(asd=1), False, id="namespace-with-number"),
    ],
)
def test_match_classes_and_instances(candidate: Any, conforms: bool) -> None:
    result = match({'Interface': {'asd': fn}}, candidate, "fm")
    assert (result == '') is conforms


def test_function_with_assigned_members() -> None:
    def candidate():
        return None

    candidate.asd = fn
    candidate.VERSION = 1

    assert match({'Interface': {'asd': fn}}, candidate) == ''
    assert match({'Interface': {'asd': fn}}, candidate, "m") == "1 extra member: VERSION"


def test_private_members_are_not_part_of_the_capability() -> None:
    assert match({'Interface': {'asd': fn}}, WithPrivateHelper, "fm") == ''
    assert match({'Interface': {'_helper': fn}}, WithPrivateHelper) == "1 missing key: _helper"


def test_missing_keys_are_reported_sorted() -> None:
    result = match({'Interface': {'b': fn, 'c': fn, 'a': fn}}, {})
    assert result.splitlines() == [
        "1 missing key: a",
        "1 missing key: b",
        "1 missing key: c",
    ]


def test_extra_function_reports_member_and_function() -> None:
    result = match({'Interface': {}}, {'run': fn}, "fm")
    assert result.splitlines() == [
        "1 extra member: run",
        "1 extra function: run",
    ]


def test_type_mismatch_names_both_kinds() -> None:
    assert match({'Interface': {'asd': fn}}, {'asd': "5"}) == "1 type mismatch of asd: text != callable"


def test_nested_depth_is_reported() -> None:
    result = match(NESTED_INTF, {'intf': {}}, "r")
    assert result == "2 missing key: asd"


def test_unmatched_element_reports_index_and_value() -> None:
    result = match({'Interface': [4, "5"]}, [1, re.compile("0"), "x"], "r")
    assert result == "1 Interface array doesn't contain match for element at index 1: re.compile('0')"


def test_array_interface_against_non_array_candidate() -> None:
    result = match({'Interface': [4]}, {'a': 1})
    assert result == "1 array matching: candidate is no array, but a interfaceCandidate"


def test_sub_interface_matched_against_sequence_reports_candidate_kind() -> None:
    result = match(NESTED_INTF, {'intf': [1]}, "r")
    assert result == "2 invalid type of candidate: sequence"


def test_inherited_member_pattern_drives_recursion() -> None:
    parent = {'Interface': {'child': {'Interface': {'ping': fn}}}}
    intf = {'Interface': {}, 'Extends': [parent]}

    assert match(intf, {'child': {'ping': fn}}, "r") == ''
    assert match(intf, {'child': {}}, "r") == "2 missing key: ping"


def test_first_extends_entry_wins() -> None:
    intf = {
        'Interface': {},
        'Extends': [{'Interface': {'asd': 0}}, {'Interface': {'asd': fn}}],
    }
    assert match(intf, {'asd': 1}) == ''
    assert match(intf, {'asd': fn}) == "1 type mismatch of asd: callable != number"


def test_sibling_branches_keep_independent_cycle_guards() -> None:
    shared: Dict[str, Any] = {'Interface': {'ping': fn}}
    intf = {'Interface': {'left': shared, 'right': shared}}
    obj = {'left': {'ping': fn}, 'right': {}}

    assert match(intf, obj, "r") == "2 missing key: ping"


def test_same_node_reached_twice_with_one_candidate() -> None:
    shared: Dict[str, Any] = {'Interface': {'ping': fn}}
    child: Dict[str, Any] = {}
    intf = {'Interface': {'left': shared, 'right': shared}}

    assert match(intf, {'left': child, 'right': child}, "r") == "2 missing key: ping\n2 missing key: ping"


@pytest.mark.parametrize(
    "intf, candidate, opts, expected",
    [
        pytest.param({'Interface': {}}, {}, "x", 'unknown character in opts "x": x', id="unknown-option"),
        pytest.param({'Interface': {}}, {}, "rz", 'unknown character in opts "rz": z', id="unknown-option-after-valid"),
        pytest.param(None, {}, "", "missing interface to match against", id="missing-interface"),
        pytest.param({}, {}, "", "invalid type of intf: interfaceCandidate, intf.Interface: undefined", id="missing-body"),
        pytest.param([], {}, "", "invalid type of intf: sequence, intf.Interface: undefined", id="array-as-interface"),
        pytest.param({'Interface': 5}, {}, "", "invalid type of intf: interfaceCandidate, intf.Interface: number", id="number-body"),
        pytest.param({'Interface': {}}, None, "", "missing object for matching", id="missing-candidate"),
        pytest.param({'Interface': {}}, 5, "", "object has invalid type: number", id="number-candidate"),
        pytest.param({'Interface': {}}, "text", "", "object has invalid type: text", id="text-candidate"),
    ],
)
def test_invocation_errors(intf: Any, candidate: Any, opts: str, expected: str) -> None:
    report = match_report(intf, candidate, opts)

    assert report.render() == expected
    assert [d.category for d in report.diagnostics] == [ErrorCategory.INVOCATION]


def test_unknown_option_aborts_before_structural_work() -> None:
    assert match(None, None, "q") == 'unknown character in opts "q": q'


def test_validate_first_aborts_matching() -> None:
    report = match_report({'Interface': {'asd': None}}, {}, "i")

    assert report.render() == "2 invalid type for interface object: undefined"
    assert [d.category for d in report.diagnostics] == [ErrorCategory.STRUCTURAL]


def test_match_errors_are_categorised() -> None:
    report = match_report({'Interface': {'asd': fn}}, {})
    assert [d.category for d in report.diagnostics] == [ErrorCategory.MATCH]


def test_none_options_behave_like_empty_string() -> None:
    assert match({'Interface': {}}, {'asd': 5}, None) == ''


class Connection:
    def send(self):
        return None

    @property
    def status(self) -> str:
        raise RuntimeError("not connected")

    def __getattr__(self, name):
        raise RuntimeError(f"no attribute {name}")


def test_candidate_code_is_never_executed() -> None:
    connection = Connection()

    assert match({'Interface': {'send': fn}}, connection, "f") == ''
    assert match({'Interface': {'send': fn}}, connection, "fm") == "1 extra member: status"
    assert match({'Interface': {'status': ""}}, connection, "r") == ''
    assert match({'Interface': {'reconnect': fn}}, connection) == "1 missing key: reconnect"


class NamedByProperty:
    @property
    def name(self):
        return "x"


class CountedByProperty:
    @property
    def count(self) -> int:
        return 1


class LazyName:
    @functools.cached_property
    def name(self):
        return "x"


@pytest.mark.parametrize(
    "intf, candidate, expected",
    [
        pytest.param({'Interface': {'name': ""}}, NamedByProperty, '', id="unannotated-class"),
        pytest.param({'Interface': {'name': ""}}, NamedByProperty(), '', id="unannotated-instance"),
        pytest.param({'Interface': {'count': 0}}, CountedByProperty, '', id="annotated-class"),
        pytest.param({'Interface': {'count': 0}}, CountedByProperty(), '', id="annotated-instance"),
        pytest.param(
            {'Interface': {'count': ""}},
            CountedByProperty,
            "1 type mismatch of count: number != text",
            id="annotated-class-wrong-kind",
        ),
        pytest.param(
            {'Interface': {'count': ""}},
            CountedByProperty(),
            "1 type mismatch of count: number != text",
            id="annotated-instance-wrong-kind",
        ),
        pytest.param({'Interface': {'name': ""}}, LazyName, '', id="cached-property-class"),
        pytest.param({'Interface': {'name': ""}}, LazyName(), '', id="cached-property-instance"),
    ],
)
def test_properties_match_alike_on_class_and_instance(intf: Any, candidate: Any, expected: str) -> None:
    assert match(intf, candidate, "rfm") == expected


class Factory:
    @staticmethod
    def build():
        return None

    @classmethod
    def create(cls):
        return cls()


@pytest.mark.parametrize("candidate", [Factory, Factory()], ids=["class", "instance"])
def test_static_and_class_methods_are_functions(candidate: Any) -> None:
    assert match({'Interface': {'build': fn, 'create': fn}}, candidate, "fm") == ''


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x, y=None):
        self.x = x
        if y is not None:
            self.y = y

    def norm(self):
        return abs(self.x)


POINT_INTF = {'Interface': {'x': 0, 'y': 0, 'norm': fn}}


def test_slotted_instance_is_matched_by_its_slots() -> None:
    assert match(POINT_INTF, Point(1, 2), "fm") == ''
    assert match(POINT_INTF, Point(1), "fm") == "1 type mismatch of y: undefined != number"
    assert match({'Interface': {'x': ""}}, Point(1, 2)) == "1 type mismatch of x: number != text"


def test_slotted_class_declares_its_slots() -> None:
    assert match(POINT_INTF, Point, "fm") == ''
