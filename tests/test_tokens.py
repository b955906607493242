"""Tests for token mapping, categorization and linting."""

import pytest

from figma_blueprint.scene import decode_node
from figma_blueprint.snapshot import EMPTY_SNAPSHOT, HostSnapshot
from figma_blueprint.tokens import classify_token_key, extract_tokens


class TestClassification:
    @pytest.mark.parametrize(
        "key,category",
        [
            ("fillColor", "colors"),
            ("fontFamily", "typography"),
            ("paddingTop", "spacing"),
            ("maxwidth", "sizing"),
            ("shadowBlur", "shadows"),
            ("borderStyle", "borders"),
            ("radius", "radii"),
            ("opacity", None),
        ],
    )
    def test_categories(self, key, category):
        assert classify_token_key(key) == category

    def test_first_match_wins(self):
        # matches both "color" and "font"; colors is checked first
        assert classify_token_key("fontcolor") == "colors"
        assert classify_token_key("textSize") == "typography"


class TestExtractTokens:
    def test_resolved_fill_style(self, make_raw, styles):
        node = decode_node(make_raw(
            "RECTANGLE",
            fillStyleId="S:fill",
            fills=[{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}}],
        ))

        tokens = extract_tokens(node, HostSnapshot(styles=styles))

        assert tokens.token_mapping == {"background": "Brand/Primary"}
        assert tokens.design_tokens == {"colors": {"backgroundPrimary": "Brand/Primary"}}
        assert "fill" not in tokens.non_token_values

    def test_unstyled_values_are_linted(self, rect_raw):
        tokens = extract_tokens(decode_node(rect_raw), EMPTY_SNAPSHOT)

        assert tokens.token_mapping == {}
        assert tokens.non_token_values == ["fill", "stroke", "text"]
        assert [w.property for w in tokens.linting_warnings] == ["fill", "stroke", "text"]
        assert tokens.linting_warnings[0].rule == "token-required"
        assert tokens.linting_warnings[0].element == "Card Background"

    def test_fallback_values(self, rect_raw, text_raw):
        rect_tokens = extract_tokens(decode_node(rect_raw), EMPTY_SNAPSHOT)
        text_tokens = extract_tokens(decode_node(text_raw), EMPTY_SNAPSHOT)

        assert rect_tokens.fallback_values == {
            "backgroundColor": "rgba(255, 0, 0, 1)",
            "borderColor": "rgba(0, 0, 255, 1)",
        }
        assert text_tokens.fallback_values == {
            "textColor": "rgba(0, 0, 0, 1)",
            "fontSize": "16px",
            "fontFamily": "Inter",
        }
