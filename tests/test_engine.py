"""Tests for the duplicate detection engine."""

from code_doctor.config import DetectorConfig
from code_doctor.engine import analyze_pair, analyze_source, scan_source
from code_doctor.languages.javascript import JavaScriptParser
from code_doctor.models import (
    InsufficientFragments,
    NoDuplicates,
    Type1Duplicate,
    Type2Duplicate,
)

from .helpers import make_fragment


parser = JavaScriptParser()

TYPE1_SOURCE = "function a(){\n x=1;\n y=2;\n}\nfunction b(){\n x=1;\n y=2;\n}\n"
TYPE2_SOURCE = "function a(){\n  return 1;\n}\n\nfunction b(){\n  return 2;\n}\n"


# ---------------------------------------------------------------------------
# analyze_source
# ---------------------------------------------------------------------------


def test_line_identical_bodies_are_type1():
    result = analyze_source(TYPE1_SOURCE, parser=parser)

    assert isinstance(result, Type1Duplicate)
    assert result.similarity == 1.0
    assert result.common_lines == ("x=1;", "y=2;")
    assert result.refactoring.fragment1 == "function a(){\nrefactoredCommonFunction();\n}"
    assert result.refactoring.fragment2 == "function b(){\nrefactoredCommonFunction();\n}"
    assert "x=1;" in result.synthesized_function


def test_type1_common_lines_occur_in_both_fragments():
    source = (
        "function a() {\n  setup();\n  run(1);\n  run(2);\n  run(3);\n  teardown();\n}\n"
        "function b() {\n  setup();\n  run(1);\n  run(2);\n  run(3);\n  teardown();\n  extra();\n}\n"
    )
    result = analyze_source(source, parser=parser)

    assert isinstance(result, Type1Duplicate)
    assert result.common_lines
    for line in result.common_lines:
        assert line in result.fragment1.body_lines
        assert line in result.fragment2.body_lines
    assert result.refactoring.fragment2 == "function b() {\nrefactoredCommonFunction();\nextra();\n}"


def test_literal_difference_is_type2():
    result = analyze_source(TYPE2_SOURCE, parser=parser)

    assert isinstance(result, Type2Duplicate)
    assert result.similarity == 0.0
    assert result.varying_parts.literals == {"1": "2"}
    assert result.synthesized_function.startswith("function refactoredCommonFunction(value1) {")
    assert result.refactoring.fragment2 == "function b(){\nreturn refactoredCommonFunction(2);\n}"


def test_identifier_difference_is_type2():
    source = "function a(p) {\n  return p * 2;\n}\nfunction b(q) {\n  return q * 2;\n}\n"
    result = analyze_source(source, parser=parser)

    assert isinstance(result, Type2Duplicate)
    assert result.varying_parts.identifiers == {"p": "q"}
    assert result.synthesized_function == "function refactoredCommonFunction(p) {\n  return p * 2;\n}"


def test_single_function_is_insufficient():
    result = analyze_source("// util\nfunction only() {\n  return 1;\n}\n", parser=parser)
    assert result == InsufficientFragments(fragment_count=1)


def test_no_functions_is_insufficient():
    assert analyze_source("const x = 1;", parser=parser) == InsufficientFragments(fragment_count=0)


def test_unrelated_functions_have_no_duplicates():
    source = "function a(){\n  x=1;\n}\nfunction b(){\n  if (y) {\n    z();\n  }\n}\n"
    result = analyze_source(source, parser=parser)

    assert isinstance(result, NoDuplicates)
    assert result.similarity == 0.0
    assert result.comparison_unavailable is None


def test_unparseable_fragment_downgrades_to_no_duplicates():
    # The nested declaration splits outer() into two partial fragments
    source = "function outer() {\n  function inner() {\n    return 1;\n  }\n}\n"
    result = analyze_source(source, parser=parser)

    assert isinstance(result, NoDuplicates)
    assert result.comparison_unavailable


def test_exact_threshold_does_not_qualify():
    source = (
        "function a() {\n  one();\n  two();\n  three();\n}\n"
        "function b() {\n  one();\n  two();\n  three();\n  four();\n}\n"
    )
    result = analyze_source(source, parser=parser)
    assert isinstance(result, NoDuplicates)
    assert result.similarity == 0.75

    lowered = analyze_source(source, DetectorConfig(similarity_threshold=0.7), parser=parser)
    assert isinstance(lowered, Type1Duplicate)


def test_generated_name_avoids_existing_names():
    source = "let refactoredCommonFunction = null;\n" + TYPE1_SOURCE
    result = analyze_source(source, parser=parser)
    assert result.synthesized_function.startswith("function refactoredCommonFunction2()")


def test_configured_function_name():
    result = analyze_source(TYPE1_SOURCE, DetectorConfig(function_name="initXY"), parser=parser)
    assert result.refactoring.fragment1 == "function a(){\ninitXY();\n}"


def test_default_only_compares_first_two_functions():
    source = (
        "function a() {\n  if (x) {\n    return y;\n  }\n}\n"
        + TYPE1_SOURCE
    )
    assert isinstance(analyze_source(source, parser=parser), NoDuplicates)


# ---------------------------------------------------------------------------
# Function forms
# ---------------------------------------------------------------------------


def test_one_line_functions_with_same_body_are_type1():
    result = analyze_source("function a() { init(); }\nfunction b() { init(); }\n", parser=parser)

    assert isinstance(result, Type1Duplicate)
    assert result.common_lines == ("init();",)
    assert result.refactoring.fragment1 == "function a() {\nrefactoredCommonFunction();\n}"


def test_one_line_functions_with_different_literal_are_type2():
    result = analyze_source("function a() { return 1; }\nfunction b() { return 2; }\n", parser=parser)

    assert isinstance(result, Type2Duplicate)
    assert result.synthesized_function == "function refactoredCommonFunction(value1) {\n  return value1;\n}"
    assert result.refactoring.fragment1 == "function a() {\nreturn refactoredCommonFunction(1);\n}"
    assert result.refactoring.fragment2 == "function b() {\nreturn refactoredCommonFunction(2);\n}"
    assert result.refactoring.warnings == ()


def test_expression_bodied_arrows_are_type2():
    result = analyze_source("const double = x => x * 2;\nconst triple = x => x * 3;\n", parser=parser)

    assert isinstance(result, Type2Duplicate)
    assert result.varying_parts.identifiers == {}
    assert result.varying_parts.literals == {"2": "3"}
    assert result.synthesized_function.startswith("function refactoredCommonFunction(value1) {\n  return x * value1;")
    assert result.refactoring.fragment1 == "const double = x => refactoredCommonFunction(2);"
    assert result.refactoring.fragment2 == "const triple = x => refactoredCommonFunction(3);"


def test_const_bound_functions_vary_only_in_literal():
    source = "const a = function() {\n  return 1;\n};\nconst b = function() {\n  return 2;\n};\n"
    result = analyze_source(source, parser=parser)

    assert isinstance(result, Type2Duplicate)
    assert result.varying_parts.identifiers == {}
    assert result.varying_parts.literals == {"1": "2"}
    assert result.synthesized_function == "function refactoredCommonFunction(value1) {\n  return value1;\n}"
    assert result.refactoring.fragment1 == "const a = function() {\nreturn refactoredCommonFunction(1);\n};"


def test_empty_functions_are_not_duplicates():
    result = analyze_source("function a() {}\nfunction b() {}\n", parser=parser)
    assert isinstance(result, NoDuplicates)
    assert result.comparison_unavailable is None


def test_top_level_code_after_last_function_is_ignored():
    result = analyze_source(TYPE2_SOURCE + "module.exports = { a, b };\nmain();\n", parser=parser)

    assert isinstance(result, Type2Duplicate)
    assert result.refactoring.fragment2 == "function b(){\nreturn refactoredCommonFunction(2);\n}"


# ---------------------------------------------------------------------------
# analyze_pair / scan_source
# ---------------------------------------------------------------------------


def test_analyze_pair_caches_syntax_trees():
    f1 = make_fragment("function a(){\nreturn 1;\n}")
    f2 = make_fragment("function b(){\nreturn 2;\n}", index=1)

    first = analyze_pair(f1, f2, parser=parser)
    tree = f1.syntax_tree(parser)
    second = analyze_pair(f1, f2, parser=parser)

    assert isinstance(first, Type2Duplicate)
    assert isinstance(second, Type2Duplicate)
    assert f1.syntax_tree(parser) is tree


def test_scan_finds_pairs_beyond_the_first():
    source = (
        "function a() {\n  if (x) {\n    return y;\n  }\n}\n"
        + TYPE1_SOURCE
    )
    results = scan_source(source, parser=parser)

    assert len(results) == 1
    assert isinstance(results[0], Type1Duplicate)
    assert (results[0].fragment1.index, results[0].fragment2.index) == (1, 2)


def test_scan_with_nothing_to_compare():
    assert scan_source("function a() {}", parser=parser) == [InsufficientFragments(fragment_count=1)]


def test_scan_without_duplicates():
    source = "function a(){\n  x=1;\n}\nfunction b(){\n  if (y) {\n    z();\n  }\n}\n"
    assert scan_source(source, parser=parser) == []
