from __future__ import annotations

from implements.models.diagnostics import Diagnostic, DiagnosticReport, ErrorCategory
from implements.utils.cycle_guard import VisitedPairs, VisitedPath


def test_path_push_is_persistent() -> None:
    root = VisitedPath()
    a, b = {}, {}

    first = root.push(a)
    second = first.push(b)

    assert len(root) == 0
    assert len(first) == 1
    assert len(second) == 2
    assert b not in first
    assert b in second


def test_path_rejects_node_already_on_it() -> None:
    node: dict = {}
    path = VisitedPath().push(node)

    assert path.push(node) is None


def test_path_compares_identity_not_equality() -> None:
    path = VisitedPath().push({})

    assert path.push({}) is not None


def test_pairs_reject_only_the_same_pair() -> None:
    intf, first, second = {}, {}, {}
    pairs = VisitedPairs().push(intf, first)

    assert pairs.push(intf, first) is None
    assert pairs.push(intf, second) is not None
    assert pairs.push(first, intf) is not None
    assert len(pairs.push(intf, second)) == 2


def test_report_render_and_categories() -> None:
    report = DiagnosticReport()
    assert report.ok
    assert report.render() == ''

    report.add_structural_error("bad body", 2)
    report.add_invocation_error("missing object for matching")
    report.add_match_error("missing key: a", 1)

    assert not report.ok
    assert report.render() == "2 bad body\nmissing object for matching\n1 missing key: a"
    assert [d.message for d in report.by_category(ErrorCategory.MATCH)] == ["missing key: a"]
    assert report.to_dicts()[1] == {'message': "missing object for matching", 'category': "invocation"}


def test_report_extend() -> None:
    first = DiagnosticReport()
    second = DiagnosticReport()
    second.add_match_error("extra member: b", 1)

    first.extend(second)

    assert first.diagnostics == [Diagnostic("extra member: b", ErrorCategory.MATCH, 1)]
