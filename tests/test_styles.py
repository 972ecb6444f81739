"""Unit tests for the inline emphasis scanner."""

import re

import pytest

from mdpdf.styles import StyledRun, scan_styles, style_name


def _pairs(text):
    return [(run.text, run.style) for run in scan_styles(text)]


def test_bold_and_italic_runs():
    assert _pairs("**bold** and *italic*") == [
        ("bold", "bold"),
        (" and ", "normal"),
        ("italic", "italic"),
    ]


def test_underscore_markers_are_interchangeable():
    assert _pairs("__bold__ and _italic_") == _pairs("**bold** and *italic*")
    assert _pairs("**mixed__ x") == [("mixed", "bold"), (" x", "normal")]


def test_triple_marker_gives_bold_italic():
    assert _pairs("***both***") == [("both", "bolditalic")]


def test_overlapping_markers_follow_toggle_state():
    assert _pairs("**a *b** c*") == [
        ("a ", "bold"),
        ("b", "bolditalic"),
        (" c", "italic"),
    ]


def test_plain_text_is_one_normal_run():
    assert _pairs("nothing special") == [("nothing special", "normal")]


def test_empty_text_has_no_runs():
    assert _pairs("") == []
    assert _pairs("****") == []


def test_unmatched_marker_leaks_to_end_of_span():
    assert _pairs("a **b c") == [("a ", "normal"), ("b c", "bold")]
    assert _pairs("**a** b *c d") == [
        ("a", "bold"),
        (" b ", "normal"),
        ("c d", "italic"),
    ]


def test_scan_is_lazy_and_restartable():
    scan = scan_styles("x *y* z")
    first = list(scan)
    second = list(scan)
    assert first == second
    assert first[0] == StyledRun("x ", "normal")
    it = iter(scan)
    assert next(it) == StyledRun("x ", "normal")


@pytest.mark.parametrize(
    "text",
    [
        "**bold** and *italic*",
        "start __under__ _score_ end",
        "***a*** b **c *d* e**",
        "no markers here",
    ],
)
def test_runs_reconstruct_text_without_markers(text):
    joined = "".join(run.text for run in scan_styles(text))
    assert joined == re.sub(r"\*\*|__|\*|_", "", text)


def test_style_name():
    assert style_name(False, False) == "normal"
    assert style_name(True, False) == "bold"
    assert style_name(False, True) == "italic"
    assert style_name(True, True) == "bolditalic"
