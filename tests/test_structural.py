"""Tests for structural comparison and varying-part extraction."""

import pytest

from code_doctor.languages.javascript import JavaScriptParser
from code_doctor.models import AstNode, NodeKind
from code_doctor.structural import compare_structure, extract_varying_parts, structurally_equivalent


parser = JavaScriptParser()


def _tree(source: str) -> AstNode:
    return parser.parse(source)


# ---------------------------------------------------------------------------
# Strict equivalence
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("source", [
    "function a() {\n  return 1;\n}",
    "function a(x) {\n  if (x > 1 && x < 5) {\n    log(x);\n  } else {\n    warn('no');\n  }\n}",
    "const f = async (a, b) => {\n  const c = await a;\n  for (let i = 0; i < b; i++) { c.push(i); }\n  return { c, n: `t${b}` };\n};",
    "function App() {\n  return <ul>{items.map(i => <li key={i}>{i}</li>)}</ul>;\n}",
])
def test_equivalence_is_reflexive(source):
    tree = _tree(source)
    assert structurally_equivalent(tree, tree)
    assert structurally_equivalent(tree, _tree(source))


def test_strict_check_requires_equal_leaves():
    assert not structurally_equivalent(_tree("function a() { return 1; }"), _tree("function a() { return 2; }"))


def test_function_names_and_parameters_are_ignored():
    left = _tree("function a(x) { return 1; }")
    right = _tree("function b(y, z) { return 1; }")
    assert structurally_equivalent(left, right)


# ---------------------------------------------------------------------------
# Shape mismatches
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("left, right", [
    ("function a() { return x + 1; }", "function a() { return x - 1; }"),
    ("function a() { f(); }", "function a() { f(); g(); }"),
    ("function a() { f(1); }", "function a() { f(1, 2); }"),
    ("function a() { if (x) { f(); } }", "function a() { if (x) { f(); } else { g(); } }"),
    ("function a() { return 1; }", "function a() { return x; }"),
    ("function a() { const x = 1; }", "function a() { let x = 1; }"),
    ("function a() { f(); }", "function a() { if (f) {} }"),
])
def test_different_shapes_are_not_equivalent(left, right):
    assert compare_structure(_tree(left), _tree(right)) is None


def test_missing_side():
    tree = _tree("function a() {}")
    assert compare_structure(tree, None) is None
    assert compare_structure(None, None) is not None


# ---------------------------------------------------------------------------
# Varying parts
# ---------------------------------------------------------------------------


def test_differing_literal_is_recorded():
    varying = extract_varying_parts(_tree("function a() { return 1; }"), _tree("function b() { return 2; }"))
    assert varying.literals == {"1": "2"}
    assert varying.identifiers == {}
    assert len(varying) == 1


def test_differing_identifier_is_recorded():
    varying = extract_varying_parts(
        _tree("function a(p) { return p * 2; }"),
        _tree("function b(q) { return q * 2; }"),
    )
    assert varying.identifiers == {"p": "q"}
    assert varying.literals == {}


def test_pairs_follow_tree_positions():
    varying = extract_varying_parts(
        _tree("function a() { f(1); f(2); }"),
        _tree("function b() { f(3); f(4); }"),
    )
    assert varying.literals == {"1": "3", "2": "4"}


def test_first_pairing_wins_on_conflict():
    varying = extract_varying_parts(
        _tree("function a() { f(x, x); }"),
        _tree("function b() { f(y, z); }"),
    )
    assert varying.identifiers == {"x": "y"}


def test_identical_bodies_have_no_varying_parts():
    varying = extract_varying_parts(_tree("function a() { f(); }"), _tree("function b() { f(); }"))
    assert varying is not None
    assert varying.is_empty()


def test_hand_built_trees():
    def lit(value):
        return AstNode(NodeKind.LITERAL, value=value)

    left = AstNode(NodeKind.BINARY, children=(lit("1"), lit("2")), tag="+")
    right = AstNode(NodeKind.BINARY, children=(lit("1"), lit("3")), tag="+")
    other_op = AstNode(NodeKind.BINARY, children=(lit("1"), lit("3")), tag="*")

    assert compare_structure(left, right).literals == {"2": "3"}
    assert compare_structure(left, other_op) is None
    assert compare_structure(left, lit("1")) is None


@pytest.mark.parametrize("left, right", [
    ("const a = function() { return 1; };", "const b = function() { return 2; };"),
    ("let a = () => { return 1; };", "let b = () => { return 2; };"),
    ("var a = () => 1;", "var b = () => 2;"),
])
def test_bound_function_names_are_ignored(left, right):
    varying = extract_varying_parts(_tree(left), _tree(right))
    assert varying.identifiers == {}
    assert varying.literals == {"1": "2"}


def test_plain_variable_names_still_vary():
    varying = extract_varying_parts(
        _tree("function a() { const x = 1; }"),
        _tree("function a() { const y = 1; }"),
    )
    assert varying.identifiers == {"x": "y"}
