import pytest

from zh_check.context import (
    MARKUP_COMMENT_TOKENS,
    is_between_tag_boundary,
    is_block_commented,
    is_call_wrapped,
    is_line_commented,
    markup_verdict,
    matches_prefix_pattern,
    preceding_line,
    script_verdict,
    text_node_verdict,
)
from zh_check.models import RawMatch, ScanOptions, SuppressionReason


def test_preceding_line_stops_at_line_break():
    assert preceding_line("abc\ndef", 6) == "\nde"


def test_preceding_line_stops_at_window_edge():
    assert preceding_line("abcdefgh", 6, window=2) == "def"


def test_preceding_line_at_start_of_text():
    assert preceding_line("abc", 0) == ""


@pytest.mark.parametrize(
    "text, expected",
    [
        ('// "你好"', True),
        ('a = 1 // "你好"', True),
        ('a = "你好"', False),
        ('// x\nb = "你好"', False),
    ],
)
def test_is_line_commented(text, expected):
    assert is_line_commented(text, text.index('"')) is expected


def test_line_comment_check_does_not_look_inside_strings():
    text = 'const url = "http://x", b = "你好"'
    assert is_line_commented(text, text.rindex('"', 0, -3))


@pytest.mark.parametrize(
    "text, expected",
    [
        ('$t("你好")', True),
        ('this.$t( "你好" )', True),
        ('i18n.t("你好")', True),
        ('foo("你好")', False),
        ('"你好"', False),
    ],
)
def test_is_call_wrapped(text, expected):
    assert is_call_wrapped(text, text.index('"')) is expected


def test_is_call_wrapped_custom_pattern():
    assert is_call_wrapped('__("你好")', 3, r"__\(\s*$")
    assert not is_call_wrapped('__("你好")', 3)


@pytest.mark.parametrize(
    "text, expected",
    [
        ('/* "你好" */', True),
        ('/* x */ "你好"', False),
        ("/**\n * '你好'\n */", True),
        ("'你好'", False),
    ],
)
def test_is_block_commented(text, expected):
    index = text.index("你") - 1
    assert is_block_commented(text, index) is expected


def test_block_comment_window():
    text = "/*" + " " * 20 + '"你"'
    assert is_block_commented(text, 22)
    assert not is_block_commented(text, 22, window=5)


def test_block_comment_with_markup_tokens():
    text = "<!-- <p>你好</p> -->"
    assert is_block_commented(text, text.index("你"), tokens=MARKUP_COMMENT_TOKENS)
    text = "<!-- x --><p>你好</p>"
    assert not is_block_commented(text, text.index("你"), tokens=MARKUP_COMMENT_TOKENS)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("<p> 你好 </p>", True),
        ("<p>你好</p>", True),
        ("<p>a 你好</p>", False),
        ("<p>你好 x</p>", False),
        ("你好</p>", False),
        ("<p>你好", False),
    ],
)
def test_is_between_tag_boundary(text, expected):
    assert is_between_tag_boundary(text, text.index("你"), 2) is expected


def test_tag_boundary_window():
    text = "<p>" + " " * 10 + "你好</p>"
    assert is_between_tag_boundary(text, text.index("你"), 2)
    assert not is_between_tag_boundary(text, text.index("你"), 2, window=5)


def test_matches_prefix_pattern():
    text = "/* i18n-ignore */ '你好'"
    assert matches_prefix_pattern(r"i18n-ignore", text, text.index("'"))
    assert not matches_prefix_pattern(r"^skip", text, text.index("'"))


def _raw(text, payload="你好"):
    return RawMatch(text=f'"{payload}"', index=text.index(payload) - 1, payload=payload)


@pytest.mark.parametrize(
    "text, reason",
    [
        ('/* "你好" */', SuppressionReason.BLOCK_COMMENT),
        ('// "你好"', SuppressionReason.LINE_COMMENT),
        ('t("你好")', SuppressionReason.I18N_WRAPPED),
        ('a = "你好"', SuppressionReason.NONE),
    ],
)
def test_script_verdict(text, reason):
    verdict = script_verdict(text, _raw(text), ScanOptions())
    assert verdict.reason is reason
    assert verdict.suppressed is (reason is not SuppressionReason.NONE)


def test_script_verdict_ignored_prefix():
    text = 'skip-me "你好"'
    options = ScanOptions(ignore_prefix_patterns=("skip-me",))
    assert script_verdict(text, _raw(text), options).reason is SuppressionReason.IGNORED_PREFIX


def test_markup_verdict_does_not_treat_double_slash_as_comment():
    text = '<a href="http://x">"你好"</a>'
    assert markup_verdict(text, _raw(text), ScanOptions()).reason is SuppressionReason.NONE
    text = '<!-- "你好" -->'
    assert markup_verdict(text, _raw(text), ScanOptions()).reason is SuppressionReason.BLOCK_COMMENT


@pytest.mark.parametrize(
    "text, reason",
    [
        ('<a href="https://x.com">"你好"</a>', SuppressionReason.NONE),
        ('{/* "你好" */}', SuppressionReason.BLOCK_COMMENT),
        ('t("你好")', SuppressionReason.I18N_WRAPPED),
    ],
)
def test_text_node_verdict(text, reason):
    assert text_node_verdict(text, _raw(text), ScanOptions()).reason is reason
