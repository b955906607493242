"""Tests for layout and responsive derivation."""

import pytest

from figma_blueprint.layout import extract_layout, position_of, relative_to_parent
from figma_blueprint.responsive import BREAKPOINT, extract_responsive
from figma_blueprint.scene import decode_node


class TestGroupFixUp:
    def test_children_rebased_on_tightest_corner(self, group_raw):
        group = decode_node(group_raw)

        xs = [position_of(child, group).x for child in group.children]

        assert xs == [0, 20, 40]
        assert min(xs) == 0

    def test_clamped_to_zero(self, make_raw, group_raw):
        group = decode_node(group_raw)
        stray = decode_node(make_raw("RECTANGLE", x=0, y=0))

        position = position_of(stray, group)

        assert (position.x, position.y) == (0, 0)

    def test_frame_parent_keeps_local_position(self, frame_raw):
        frame = decode_node(frame_raw)
        assert position_of(frame.children[0], frame).x == 10


class TestRelativeToParent:
    def test_uses_absolute_bounds(self, make_raw):
        child = make_raw("RECTANGLE", "1:2", absoluteBoundingBox={"x": 150, "y": 125, "width": 50, "height": 50})
        parent = make_raw(
            "FRAME",
            "1:1",
            absoluteBoundingBox={"x": 100, "y": 100, "width": 200, "height": 100},
            children=[child],
        )
        parent_node = decode_node(parent)

        relative = relative_to_parent(parent_node.children[0], parent_node)

        assert (relative.x, relative.y) == (50, 25)
        assert relative.x_percent == pytest.approx(25)
        assert relative.y_percent == pytest.approx(25)


class TestExtractLayout:
    def test_auto_layout_frame(self, frame_raw):
        layout = extract_layout(decode_node(frame_raw))
        auto = layout.auto_layout

        assert auto.enabled
        assert auto.direction == "HORIZONTAL"
        assert auto.gap == 8
        assert auto.justify_content == "SPACE_BETWEEN"
        assert auto.align_items == "CENTER"
        assert (layout.padding.left, layout.padding.top) == (16, 12)
        assert layout.size_mode.width == "AUTO"
        assert layout.responsive_hints.preferred_behavior == "hug-content"
        assert layout.relative_to_parent is None

    def test_detected_direction_without_auto_layout(self, rect_raw, make_raw):
        wide = extract_layout(decode_node(rect_raw))
        tall = extract_layout(decode_node(make_raw("RECTANGLE", width=10, height=40)))

        assert not wide.auto_layout.enabled
        assert wide.auto_layout.detected_direction == "HORIZONTAL"
        assert tall.auto_layout.detected_direction == "VERTICAL"
        assert wide.auto_layout.suggested_alignment == "CENTER"

    def test_constraints_default_to_min(self, rect_raw):
        constraints = extract_layout(decode_node(rect_raw)).constraints
        assert (constraints.horizontal, constraints.vertical) == ("MIN", "MIN")


class TestResponsive:
    def test_only_for_auto_layout(self, rect_raw):
        assert extract_responsive(decode_node(rect_raw)) is None

    def test_single_breakpoint(self, frame_raw):
        responsive = extract_responsive(decode_node(frame_raw))

        assert [b.breakpoint for b in responsive.breakpoint_behavior] == [BREAKPOINT]
        assert list(responsive.container_adaptation.breakpoints) == ["md"]
        assert responsive.breakpoint_behavior[0].layout_changes.spacing == 8

    def test_sizing(self, frame_raw):
        responsive = extract_responsive(decode_node(frame_raw))

        assert responsive.fluid_sizing is True
        assert responsive.aspect_ratio == 4
        assert responsive.resizing_logic.max_size.width == 400
        assert responsive.resizing_logic.min_size.width == 0

    def test_fixed_sizing_is_not_fluid(self, frame_raw):
        frame_raw.update(primaryAxisSizingMode="FIXED")
        assert extract_responsive(decode_node(frame_raw)).fluid_sizing is False
