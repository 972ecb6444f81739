"""Shared fixtures for the layout engine tests."""

import pytest

from mdpdf.config import DEFAULT_LAYOUT
from mdpdf.writer import FpdfMeasurer


class CharMeasurer:
    """Deterministic measurer: every character is half the font size wide."""

    def __init__(self):
        self.fonts = []

    def width(self, text, font):
        self.fonts.append(font)
        return len(text) * font.size * 0.5


@pytest.fixture
def layout():
    return DEFAULT_LAYOUT


@pytest.fixture
def measurer():
    """fpdf2 core-font metrics, as used by real renders."""
    return FpdfMeasurer()


@pytest.fixture
def char_measurer():
    return CharMeasurer()
