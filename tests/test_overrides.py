import re

import pytest

from assvtt.overrides import (
    OverrideTagStack,
    legacy_position,
    numpad_position,
    rewrite_override_tags,
    strip_override_tags,
    tokenize_override_block,
)


def assert_balanced(markup):
    open_tags = []
    for closing, name in re.findall(r'<(/?)([biu])>', markup):
        if closing:
            assert open_tags and open_tags[-1] == name, markup
            open_tags.pop()
        else:
            open_tags.append(name)
    assert not open_tags, markup


def render(text):
    result = rewrite_override_tags(text)
    return result.text + result.stack.drain()


def test_stack_close_through_reopens_nested_tags():
    stack = OverrideTagStack()
    stack.push("b")
    stack.push("i")
    stack.push("u")

    markup, reopen = stack.close_through("i")

    assert markup == "</u></i>"
    assert reopen == ["u"]
    assert stack.tags == ("b",)


def test_stack_close_through_missing_tag():
    stack = OverrideTagStack()
    stack.push("b")
    with pytest.raises(ValueError):
        stack.close_through("i")


def test_stack_drain_closes_in_lifo_order():
    stack = OverrideTagStack()
    stack.push("b")
    stack.push("i")
    assert stack.drain() == "</i></b>"
    assert len(stack) == 0


def test_tokenize_override_block():
    assert tokenize_override_block("") == []
    assert tokenize_override_block("   ") == []
    assert tokenize_override_block("junk\\b1\\i1") == ["b1", "i1"]


def test_bold_on_off():
    result = rewrite_override_tags("This is the {\\b1}first{\\b0} subtitle.")
    assert result.text == "This is the <b>first</b> subtitle."
    assert result.position == ""
    assert len(result.stack) == 0


def test_closing_outer_tag_reopens_inner_tag():
    text = "{\\b1}a{\\i1}b{\\b0}c{\\i0}d"
    assert render(text) == "<b>a<i>b</i></b><i>c</i>d"


def test_multiple_tags_in_one_block_open_in_order():
    result = rewrite_override_tags("{\\b1\\i1}x")
    assert result.text == "<b><i>x"
    assert result.stack.tags == ("b", "i")
    assert result.stack.drain() == "</i></b>"


def test_reset_closes_everything():
    assert render("{\\b1\\u1}x{\\r}y") == "<b><u>x</u></b>y"


def test_reset_with_style_name():
    assert render("{\\i1}x{\\rAlternate}y") == "<i>x</i>y"


def test_reset_discards_tags_queued_in_same_block():
    assert render("{\\b1\\r}x") == "x"


def test_bold_weight():
    assert render("{\\b700}x{\\b400}y") == "<b>x</b>y"
    assert render("{\\b100}x") == "x"


def test_strikethrough_is_dropped():
    assert render("{\\s1}x{\\s0}y") == "xy"


def test_disable_tag_not_open_is_ignored():
    assert render("{\\i0}x") == "x"


def test_enable_already_open_tag_is_ignored():
    assert render("{\\i1}a{\\i1}b") == "<i>ab</i>"


def test_enable_then_disable_in_same_block():
    assert render("{\\b1\\b0}x") == "x"


def test_empty_and_blank_blocks_are_removed():
    assert render("{}x{ }y") == "xy"


def test_unknown_commands_are_ignored():
    assert render("{\\fs20\\b1\\pos(10,20)}x") == "<b>x</b>"


def test_truncated_position_codes_are_ignored():
    result = rewrite_override_tags("{\\an\\b1}x{\\a}y")
    assert result.text == "<b>xy"
    assert result.position == ""


@pytest.mark.parametrize("code,expected", [
    (1, " align:start"),
    (2, " align:end"),
    (3, ""),
    (4, " line:50% align:start"),
    (5, " line:50% align:end"),
    (6, " line:50%"),
    (7, " line:0 align:start"),
    (8, " line:0 align:end"),
    (9, " line:0"),
])
def test_numpad_position(code, expected):
    assert numpad_position(code) == expected
    assert rewrite_override_tags(f"{{\\an{code}}}x").position == expected


@pytest.mark.parametrize("code,expected", [
    (1, " align:start"),
    (2, ""),
    (3, " align:end"),
    (5, " line:0 align:start"),
    (6, " line:0"),
    (9, " line:50% align:start"),
    (11, " line:50% align:end"),
])
def test_legacy_position(code, expected):
    assert legacy_position(code) == expected
    assert rewrite_override_tags(f"{{\\a{code}}}x").position == expected


def test_position_and_markup_in_one_block():
    result = rewrite_override_tags("{\\an7\\i1}Top")
    assert result.text == "<i>Top"
    assert result.position == " line:0 align:start"


@pytest.mark.parametrize("text", [
    "{\\b1}a{\\i1}b{\\u1}c{\\i0}d{\\b0}e",
    "{\\b1\\i1\\u1}a{\\b0}b{\\u0}c",
    "{\\u1}a{\\b1}b{\\r}c{\\i1}d",
    "{\\i1}a{\\b1}b{\\i0\\u1}c",
    "{\\u1\\b0}a{\\b1}b{\\b0\\u0}c",
])
def test_markup_is_always_balanced(text):
    assert_balanced(render(text))


def test_strip_override_tags():
    assert strip_override_tags("{\\an8\\b1}Hello {\\i1}there") == "Hello there"
