"""Approximate text measurement.

There is no shaping engine here. Line and run widths use a flat average
character width, per-character metrics use three character classes, and the
vertical metrics are fixed fractions of the font size. Downstream consumers
expect exactly these constants.
"""

import re
from typing import List

from .blueprint import CharacterMetric, LineBox, TextMetrics

WIDE_CHARS = "mwWMOQ@"
NARROW_CHARS = "iljI.,:;"

WIDE_FACTOR = 0.8
NARROW_FACTOR = 0.3
SPACE_FACTOR = 0.25
DEFAULT_FACTOR = 0.5

ACTUAL_ASCENT = 0.75
ACTUAL_DESCENT = 0.25
FONT_BOX_ASCENT = 0.8
FONT_BOX_DESCENT = 0.2
AUTO_LINE_HEIGHT = 1.2

_WORD_SPLIT_RE = re.compile(r"\s+")


def char_width(char: str, font_size: float) -> float:
    if char in WIDE_CHARS:
        return font_size * WIDE_FACTOR
    if char in NARROW_CHARS:
        return font_size * NARROW_FACTOR
    if char == " ":
        return font_size * SPACE_FACTOR
    return font_size * DEFAULT_FACTOR


def estimate_line_width(text: str, font_size: float) -> float:
    return len(text) * font_size * DEFAULT_FACTOR


def measure_text(text: str, font_size: float) -> TextMetrics:
    width = estimate_line_width(text, font_size)
    return TextMetrics(
        width=width,
        actual_bounding_box_ascent=font_size * ACTUAL_ASCENT,
        actual_bounding_box_descent=font_size * ACTUAL_DESCENT,
        actual_bounding_box_left=0.0,
        actual_bounding_box_right=width,
        font_bounding_box_ascent=font_size * FONT_BOX_ASCENT,
        font_bounding_box_descent=font_size * FONT_BOX_DESCENT,
        em_height_ascent=font_size * FONT_BOX_ASCENT,
        em_height_descent=font_size * FONT_BOX_DESCENT,
    )


def _line_box(text: str, y: float, font_size: float, line_height: float, text_align: str) -> LineBox:
    return LineBox(
        text=text,
        y=y,
        height=line_height,
        baseline=y + font_size * ACTUAL_ASCENT,
        ascent=font_size * ACTUAL_ASCENT,
        descent=font_size * ACTUAL_DESCENT,
        leading=line_height - font_size,
        width=estimate_line_width(text, font_size),
        text_align=text_align.lower(),
    )


def build_line_boxes(
    text: str, max_width: float, font_size: float, line_height: float, text_align: str = "LEFT"
) -> List[LineBox]:
    """Greedy word wrap: a word goes on the current line while the line still fits ``max_width``."""
    if not text:
        return []

    lines = []
    current = ""
    y = 0.0
    for word in _WORD_SPLIT_RE.split(text):
        candidate = f"{current} {word}" if current else word
        if estimate_line_width(candidate, font_size) > max_width and current:
            lines.append(_line_box(current, y, font_size, line_height, text_align))
            current = word
            y += line_height
        else:
            current = candidate

    if current:
        lines.append(_line_box(current, y, font_size, line_height, text_align))
    return lines


def character_metrics(text: str, font_size: float) -> List[CharacterMetric]:
    metrics = []
    x = 0.0
    for char in text:
        width = char_width(char, font_size)
        metrics.append(CharacterMetric(char=char, x=x, width=width, height=font_size, advance_width=width))
        x += width
    return metrics
