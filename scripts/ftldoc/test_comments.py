"""Tests for doc comment parser."""

import pytest

from ftldoc.comments import parse_comment


def test_empty_comment():
    for text in (None, ""):
        result = parse_comment(text)
        assert result.tags == {}
        assert result.params == []
        assert result.comment == ""
        assert result.short_comment == ""


def test_marker_only():
    result = parse_comment("-")
    assert result.comment == ""
    assert result.params == []


def test_body_and_short_comment():
    result = parse_comment("- Renders a button. Uses the theme colors.\n")
    assert result.comment == " Renders a button. Uses the theme colors."
    assert result.short_comment == " Renders a button."


def test_short_comment_without_period():
    result = parse_comment("-Renders a button")
    assert result.short_comment == "Renders a button"


def test_body_newlines_removed():
    result = parse_comment("-\nFirst line\nsecond line.\n")
    assert result.comment == "First linesecond line."
    assert "\n" not in result.comment


def test_indentation_collapsed():
    result = parse_comment("-\n        deeply indented\n\tand tabbed\n")
    assert result.comment == " deeply indented and tabbed"


def test_tags():
    result = parse_comment("-\n@author Jane Doe\n  -- @since 2.3\nBody.")
    assert result.get("@author") == "Jane Doe"
    assert result.get("@since") == "2.3"
    assert result.comment == "Body."


def test_tag_last_value_wins():
    result = parse_comment("-\n@see first\n@see second")
    assert result.tags == {"@see": "second"}


def test_tag_without_value():
    result = parse_comment("- @deprecated")
    assert "@deprecated" in result
    assert result.get("@deprecated") == ""


def test_single_line_param():
    result = parse_comment("- @param name The user name")
    assert len(result.params) == 1
    assert result.params[0].name == "name"
    assert result.params[0].description == "The user name"


def test_param_spanning_lines_keeps_newlines():
    result = parse_comment("-\n@param x the x param\n   more text for x\n")
    assert result.params[0].description == "the x param\n more text for x\n"


def test_params_keep_declaration_order():
    result = parse_comment("-\n@param zeta last\n@param alpha first\n@param mid middle")
    assert [p.name for p in result.params] == ["zeta", "alpha", "mid"]


def test_repeated_param_overwrites():
    result = parse_comment("-\n@param x first\n@param x second")
    assert len(result.params) == 1
    assert result.param("x").description == "second"


def test_tag_does_not_close_param():
    result = parse_comment("-\n@param x the x\n@since 1.0\n continued")
    assert result.param("x").description == "the x\n continued\n"
    assert result.get("@since") == "1.0"
    assert result.comment == ""


def test_blank_line_closes_param():
    doc = "-\n@param x the x param\n  more text for x\n\nTop-level text.\n"
    result = parse_comment(doc)
    assert [(p.name, p.description) for p in result.params] == [
        ("x", "the x param\n more text for x\n")
    ]
    assert result.comment == "Top-level text."
    assert result.short_comment == "Top-level text."


def test_dash_prefixed_lines():
    result = parse_comment("-\n-- @param a the a\n--Plain text.")
    assert result.param("a").description == "the a\nPlain text.\n"


@pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
def test_line_endings(newline):
    doc = newline.join(["-", "@param a one", " two", "", "Body."])
    result = parse_comment(doc)
    assert result.param("a").description == "one\n two\n"
    assert result.comment == "Body."


def test_region_markers_in_plain_comment():
    # First character is dropped whatever it is
    result = parse_comment(" @begin Forms ")
    assert result.get("@begin").strip() == "Forms"


@pytest.mark.parametrize(
    "text",
    ["-@", "-@@@", "--", "- odd line", "-@param", "-@param 1", "-\n\n\n", "-\x00"],
)
def test_never_fails(text):
    result = parse_comment(text)
    assert isinstance(result.comment, str)
