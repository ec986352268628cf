"""Tests for the long method and long parameter list checks."""

import pytest

from code_doctor.errors import ParseError
from code_doctor.languages.javascript import JavaScriptParser
from code_doctor.smells import ANONYMOUS, detect_long_methods, detect_long_parameter_lists


parser = JavaScriptParser()


def _function_with_body(name: str, statements: int) -> str:
    body = "".join(f"  step{n}();\n" for n in range(statements))
    return f"function {name}() {{\n{body}}}\n"


# ---------------------------------------------------------------------------
# Long methods
# ---------------------------------------------------------------------------


def test_short_function_not_reported():
    # 13 statements plus header and closing brace is exactly 15 lines
    assert detect_long_methods(_function_with_body("short", 13), parser) == []


def test_long_function_reported():
    source = _function_with_body("first", 2) + "\n" + _function_with_body("long", 14)
    findings = detect_long_methods(source, parser)

    assert len(findings) == 1
    finding = findings[0]
    assert finding.name == "long"
    assert finding.executable_lines == 16
    assert finding.start_line == 6
    assert finding.end_line == 21


def test_blank_and_comment_lines_do_not_count():
    body = "".join(f"  step{n}();\n\n  // note {n}\n" for n in range(13))
    source = f"function padded() {{\n  /* a\n     block comment */\n{body}}}\n"
    assert detect_long_methods(source, parser) == []


def test_custom_line_threshold():
    findings = detect_long_methods(_function_with_body("f", 4), parser, threshold=5)
    assert [f.executable_lines for f in findings] == [6]


def test_class_methods_are_checked():
    body = "".join(f"    this.step{n}();\n" for n in range(20))
    source = f"class Job {{\n  run() {{\n{body}  }}\n}}\n"
    findings = detect_long_methods(source, parser)
    assert [f.name for f in findings] == ["run"]


def test_arrow_function_reported_as_anonymous():
    body = "".join(f"  step{n}();\n" for n in range(20))
    source = f"items.forEach(() => {{\n{body}}});\n"
    findings = detect_long_methods(source, parser)
    assert [f.name for f in findings] == [ANONYMOUS]


def test_long_method_check_rejects_invalid_source():
    with pytest.raises(ParseError):
        detect_long_methods("function broken( {", parser)


# ---------------------------------------------------------------------------
# Long parameter lists
# ---------------------------------------------------------------------------


def test_three_parameters_not_reported():
    assert detect_long_parameter_lists("function f(a, b, c) {}", parser) == []


def test_four_parameters_reported():
    source = "function ok(a) {}\nfunction f(a, b, c, d) {\n  return a;\n}\n"
    findings = detect_long_parameter_lists(source, parser)

    assert len(findings) == 1
    assert findings[0].name == "f"
    assert findings[0].parameter_count == 4
    assert (findings[0].start_line, findings[0].end_line) == (2, 4)


def test_default_and_rest_parameters_count():
    findings = detect_long_parameter_lists("function f(a, b = 1, {c}, ...rest) {}", parser)
    assert [f.parameter_count for f in findings] == [4]


def test_custom_parameter_threshold():
    findings = detect_long_parameter_lists("const g = (x, y) => x + y;", parser, threshold=1)
    assert [(f.name, f.parameter_count) for f in findings] == [("g", 2)]


def test_parameter_check_rejects_invalid_source():
    with pytest.raises(ParseError):
        detect_long_parameter_lists("function f(a, b {", parser)
