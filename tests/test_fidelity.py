"""Tests for fidelity scoring and the benchmark runner."""

import pytest

from figma_blueprint.config import Settings
from figma_blueprint.fidelity import js_round, run_benchmark, validate_node, validate_tree
from figma_blueprint.host import InMemoryHost
from figma_blueprint.scene import decode_node
from figma_blueprint.transform import transform_node_tree


def test_js_round():
    assert js_round(2.5) == 3
    assert js_round(2.49) == 2
    assert js_round(-0.5) == 0


class TestValidateNode:
    def test_matching_rectangle_is_pixel_perfect(self, rect_raw):
        node = decode_node(rect_raw)
        report = validate_node(node, transform_node_tree(node))

        assert report.positioning.accuracy == 100
        assert report.typography.accuracy == 100
        assert report.visuals.accuracy == 100
        assert report.overall.accuracy == 100
        assert report.overall.pixel_perfect
        assert report.suggestions == []

    def test_positioning_within_tolerance(self, rect_raw):
        blueprint = transform_node_tree(decode_node(rect_raw))
        nudged = decode_node(dict(rect_raw, x=10.05, width=100.08))

        assert validate_node(nudged, blueprint).positioning.accuracy == 100

    def test_moved_node_loses_positioning(self, rect_raw):
        blueprint = transform_node_tree(decode_node(rect_raw))
        moved = decode_node(dict(rect_raw, x=20))

        report = validate_node(moved, blueprint)

        assert report.positioning.accuracy == 31
        assert not report.overall.pixel_perfect
        assert "Add relative positioning context for responsive layouts" in report.suggestions
        assert "Compare against a rendered preview of the node" in report.suggestions

    def test_text_node(self, text_raw):
        node = decode_node(text_raw)
        report = validate_node(node, transform_node_tree(node))

        assert report.typography.accuracy == 100
        assert report.typography.flags == {"fontMetrics": True, "lineSpacing": True, "characterSpacing": True}

    def test_fill_count_mismatch(self, rect_raw):
        blueprint = transform_node_tree(decode_node(rect_raw))
        repainted = decode_node(dict(rect_raw, fills=rect_raw["fills"] * 2))

        assert validate_node(repainted, blueprint).visuals.accuracy == 60

    def test_serialized_report(self, rect_raw):
        node = decode_node(rect_raw)
        data = validate_node(node, transform_node_tree(node)).to_dict()

        assert data["nodeId"] == "1:2"
        assert data["overall"]["pixelPerfect"] is True
        assert data["positioning"]["flags"]["subPixelPrecision"] is True


def test_validate_tree_pairs_every_node(frame_raw):
    root = decode_node(frame_raw)
    reports = validate_tree(root, transform_node_tree(root))

    assert [r.node_id for r in reports] == ["1:1", "1:2", "1:3"]


@pytest.mark.asyncio
async def test_run_benchmark(rect_raw, text_raw):
    result = await run_benchmark([rect_raw, text_raw], InMemoryHost(), Settings(export_svg=False))

    assert result.total_nodes == 2
    assert len(result.detailed_results) == 2
    assert result.average_accuracy == 100
    assert result.pixel_perfect_count == 2


@pytest.mark.asyncio
async def test_run_benchmark_empty():
    result = await run_benchmark([], InMemoryHost())

    assert result.average_accuracy == 0
    assert result.total_nodes == 0
