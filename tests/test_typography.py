"""Tests for typography extraction and the text metrics approximation."""

import pytest

from figma_blueprint.host import StyleInfo
from figma_blueprint.scene import LineHeight, decode_node
from figma_blueprint.snapshot import EMPTY_SNAPSHOT, HostSnapshot
from figma_blueprint.text_metrics import build_line_boxes, char_width, character_metrics, estimate_line_width, measure_text
from figma_blueprint.typography import (
    OPENTYPE_FEATURES,
    decode_opentype_flags,
    extract_typography,
    font_weight,
    line_height_css,
    line_height_px,
)


class TestFontWeight:
    @pytest.mark.parametrize(
        "style,weight",
        [
            ("Thin", 100),
            ("Extra Light", 200),
            ("Light", 300),
            ("Regular", 400),
            ("Medium", 500),
            ("Semi Bold", 600),
            ("Bold Italic", 700),
            ("Black", 900),
            ("Heavy", 900),
            ("Condensed", 400),
            (None, 400),
        ],
    )
    def test_keyword_table(self, style, weight):
        assert font_weight(style) == weight

    def test_extra_bold_hits_bold_first(self):
        assert font_weight("Extra Bold") == 700


class TestOpenTypeFlags:
    def test_bitmask(self):
        features = decode_opentype_flags(0b1000001)

        assert len(features) == len(OPENTYPE_FEATURES)
        assert features["liga"] is True
        assert features["tnum"] is True
        assert features["dlig"] is False

    def test_bits_beyond_32_never_decode(self):
        features = decode_opentype_flags((1 << 32) | (1 << 33))

        assert features["ss19"] is False
        assert features["ss20"] is False

    def test_tag_map(self):
        features = decode_opentype_flags({"LIGA": 1, "TNUM": 0, "SS20": 1})

        assert features["liga"] is True
        assert features["tnum"] is False
        assert features["ss20"] is True


class TestLineHeight:
    def test_css(self):
        assert line_height_css(LineHeight(24, "PIXELS")) == "24px"
        assert line_height_css(LineHeight(150, "PERCENT")) == "150%"
        assert line_height_css(LineHeight(None, "AUTO")) == "auto"
        assert line_height_css(None) == "auto"

    def test_px(self):
        assert line_height_px(LineHeight(150, "PERCENT"), 16) == 24
        assert line_height_px(LineHeight(30, "PIXELS"), 16) == 30
        assert line_height_px(None, 10) == pytest.approx(12)


class TestTextMetrics:
    def test_character_classes(self):
        assert char_width("m", 10) == 8
        assert char_width("i", 10) == pytest.approx(3)
        assert char_width(" ", 10) == 2.5
        assert char_width("a", 10) == 5

    def test_line_width_ignores_character_classes(self):
        assert estimate_line_width("mmmm mmmm", 10) == 45
        assert estimate_line_width("iiii iiii", 10) == 45
        assert measure_text("mW", 10).width == 10
        assert measure_text("mW", 10).actual_bounding_box_right == 10

    def test_vertical_metrics(self):
        metrics = measure_text("ab", 10)

        assert metrics.width == 10
        assert metrics.actual_bounding_box_ascent == 7.5
        assert metrics.actual_bounding_box_descent == 2.5
        assert metrics.font_bounding_box_ascent == 8
        assert metrics.font_bounding_box_descent == 2

    def test_greedy_wrap(self):
        lines = build_line_boxes("hello world", max_width=30, font_size=10, line_height=12)

        assert [line.text for line in lines] == ["hello", "world"]
        assert [line.y for line in lines] == [0, 12]
        assert lines[1].baseline == 19.5
        assert lines[0].leading == 2
        assert lines[0].text_align == "left"

    def test_wrap_uses_average_width(self):
        lines = build_line_boxes("mmmm mmmm", max_width=50, font_size=10, line_height=12)

        assert [line.text for line in lines] == ["mmmm mmmm"]
        assert lines[0].width == 45

    def test_long_word_stays_on_one_line(self):
        lines = build_line_boxes("extraordinarily", max_width=10, font_size=10, line_height=12)
        assert len(lines) == 1

    def test_empty_text(self):
        assert build_line_boxes("", 100, 10, 12) == []

    def test_character_offsets(self):
        metrics = character_metrics("ab", 10)
        assert [m.x for m in metrics] == [0, 5]
        assert metrics[1].advance_width == 5


class TestExtractTypography:
    def test_non_text_node(self, rect_raw):
        assert extract_typography(decode_node(rect_raw), EMPTY_SNAPSHOT) is None

    def test_font_descriptor_and_fallback(self, text_raw):
        typography = extract_typography(decode_node(text_raw), EMPTY_SNAPSHOT)
        fallback = typography.font.fallback

        assert typography.font.family == "Inter"
        assert typography.font.weight == 700
        assert fallback.size == "16px"
        assert fallback.line_height == "24px"
        assert fallback.letter_spacing == "0px"
        assert typography.text_content == "Hello world"
        assert typography.text_color == "rgba(0, 0, 0, 1)"
        assert typography.line_boxes
        assert typography.first_line_offset == 0
        assert typography.font_stack.fallbacks[0].family == "system-ui"

    def test_font_loading_state(self, text_raw):
        node = decode_node(text_raw)
        loaded = HostSnapshot(fonts={("Inter", "Bold"): True})
        failed = HostSnapshot(failures={"font:Inter Bold": "not available"})

        assert extract_typography(node, EMPTY_SNAPSHOT).font_loading_state == "unloaded"
        assert extract_typography(node, loaded).font_loading_state == "loaded"
        assert extract_typography(node, failed).font_loading_state == "error"

    def test_text_style_token(self, text_raw):
        node = decode_node(dict(text_raw, textStyleId="S:text"))
        snapshot = HostSnapshot(styles={"S:text": StyleInfo(id="S:text", name="Heading/H1")})

        typography = extract_typography(node, snapshot)

        assert typography.font.token == "Heading/H1"
        assert typography.text_style_id == "S:text"

    def test_unresolved_text_style_is_omitted(self, text_raw):
        node = decode_node(dict(text_raw, textStyleId="S:missing"))
        typography = extract_typography(node, EMPTY_SNAPSHOT)

        assert typography.font.token is None
        assert typography.text_style_id is None
