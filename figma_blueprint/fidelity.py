"""Fidelity scoring.

Compares a blueprint node with the scene node it came from and scores
positioning, typography and visuals from 0 to 100. The checklists are fixed
weights; suggestions come from fixed thresholds.
"""

import math
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from loguru import logger

from .blueprint import AxisReport, BenchmarkResult, BlueprintNode, FidelityReport, OverallReport
from .config import Settings
from .host import SceneHost
from .scene import SceneNode, decode_node, has_text_children
from .transform import extract_blueprint
from .typography import font_weight

TOLERANCE = 0.1
PIXEL_PERFECT = 95
REVIEW_THRESHOLD = 90


def js_round(value: float) -> int:
    return int(math.floor(value + 0.5))


def _close(a: Optional[float], b: Optional[float]) -> bool:
    return a is not None and b is not None and abs(a - b) <= TOLERANCE


def _accuracy(score: float, max_score: float) -> int:
    return js_round(score / max_score * 100) if max_score > 0 else 100


def score_positioning(node: SceneNode, blueprint: BlueprintNode) -> AxisReport:
    score = max_score = 0
    sub_pixel = relative = False
    layout = blueprint.layout

    if layout.position is not None and node.x is not None and node.y is not None:
        if _close(layout.position.x, node.x) and _close(layout.position.y, node.y):
            score += 30
        max_score += 30

    bbox = blueprint.geometry.bounding_box
    if bbox is not None and node.x is not None and node.y is not None:
        sub_pixel = True
        if _close(bbox.x, node.x) and _close(bbox.y, node.y):
            score += 25
        max_score += 25

    if layout.relative_to_parent is not None:
        relative = True
        score += 20
        max_score += 20

    size = layout.size
    if size is not None and size.width is not None and node.width is not None and node.height is not None:
        if _close(size.width, node.width) and _close(size.height, node.height):
            score += 25
        max_score += 25

    return AxisReport(
        accuracy=_accuracy(score, max_score),
        flags={"subPixelPrecision": sub_pixel, "relativePrecision": relative},
    )


def _font_size_px(size: str) -> Optional[float]:
    try:
        return float(size[:-2]) if size.endswith("px") else float(size)
    except ValueError:
        return None


def score_typography(node: SceneNode, blueprint: BlueprintNode) -> AxisReport:
    if node.text is None and not has_text_children(node):
        return AxisReport(
            accuracy=100, flags={"fontMetrics": True, "lineSpacing": True, "characterSpacing": True}
        )

    score = max_score = 0
    flags = {"fontMetrics": False, "lineSpacing": False, "characterSpacing": False}
    typography = blueprint.typography

    if typography is not None and typography.font is not None and node.text is not None and node.text.font_family:
        fallback = typography.font.fallback
        if fallback.family == node.text.font_family:
            score += 15
        if _font_size_px(fallback.size) == node.text.font_size:
            score += 15
        if fallback.weight == font_weight(node.text.font_style):
            score += 10
        max_score += 40

    if typography is not None and typography.text_metrics is not None:
        flags["fontMetrics"] = True
        score += 20
        max_score += 20
        if typography.line_boxes:
            flags["lineSpacing"] = True
            score += 20
            max_score += 20
        if typography.character_metrics:
            flags["characterSpacing"] = True
            score += 20
            max_score += 20

    return AxisReport(accuracy=_accuracy(score, max_score), flags=flags)


def score_visuals(node: SceneNode, blueprint: BlueprintNode) -> AxisReport:
    score = max_score = 0
    flags = {"colorPrecision": False, "blendModes": False, "effects": False}
    visuals = blueprint.visuals

    if node.fills is not None and visuals.fills is not None:
        if len(node.fills) == len(visuals.fills):
            score += 20
        max_score += 20
        flags["colorPrecision"] = True

    if node.strokes is not None and visuals.strokes is not None:
        if len(node.strokes) == len(visuals.strokes):
            score += 15
        max_score += 15

    if node.effects and visuals.effects is not None:
        if len(node.effects) == len(visuals.effects):
            score += 15
        max_score += 15
        flags["effects"] = True

    flags["blendModes"] = True
    if (visuals.blend_mode or "NORMAL") == (node.blend_mode or "NORMAL"):
        score += 15
    max_score += 15

    if visuals.clip_path or blueprint.geometry.mask_data is not None:
        score += 15
        max_score += 15

    return AxisReport(accuracy=_accuracy(score, max_score), flags=flags)


def improvement_suggestions(positioning: AxisReport, typography: AxisReport, visuals: AxisReport) -> List[str]:
    suggestions = []

    if positioning.accuracy < PIXEL_PERFECT:
        if not positioning.flags.get("subPixelPrecision"):
            suggestions.append("Enable sub-pixel positioning for better accuracy")
        if not positioning.flags.get("relativePrecision"):
            suggestions.append("Add relative positioning context for responsive layouts")

    if typography.accuracy < PIXEL_PERFECT:
        if not typography.flags.get("fontMetrics"):
            suggestions.append("Measure fonts precisely to improve text metrics")
        if not typography.flags.get("lineSpacing"):
            suggestions.append("Add line-by-line analysis for accurate line spacing")
        if not typography.flags.get("characterSpacing"):
            suggestions.append("Include character-level metrics for complex text layouts")

    if visuals.accuracy < PIXEL_PERFECT:
        if not visuals.flags.get("colorPrecision"):
            suggestions.append("Improve color extraction precision and gradient handling")
        if not visuals.flags.get("blendModes"):
            suggestions.append("Add blend mode and layer composition support")
        if not visuals.flags.get("effects"):
            suggestions.append("Enhance effect extraction including backdrop blur and clipping")

    if min(positioning.accuracy, typography.accuracy, visuals.accuracy) < REVIEW_THRESHOLD:
        suggestions.append("Compare against a rendered preview of the node")

    return suggestions


def validate_node(node: SceneNode, blueprint: BlueprintNode) -> FidelityReport:
    positioning = score_positioning(node, blueprint)
    typography = score_typography(node, blueprint)
    visuals = score_visuals(node, blueprint)
    overall = js_round((positioning.accuracy + typography.accuracy + visuals.accuracy) / 3)
    return FidelityReport(
        node_id=node.id,
        overall=OverallReport(accuracy=overall, score=overall, pixel_perfect=overall >= PIXEL_PERFECT),
        positioning=positioning,
        typography=typography,
        visuals=visuals,
        suggestions=improvement_suggestions(positioning, typography, visuals),
    )


def iter_pairs(node: SceneNode, blueprint: BlueprintNode) -> Iterable[Tuple[SceneNode, BlueprintNode]]:
    yield node, blueprint
    for child, child_blueprint in zip(node.children, blueprint.children):
        yield from iter_pairs(child, child_blueprint)


def validate_tree(node: SceneNode, blueprint: BlueprintNode) -> List[FidelityReport]:
    return [validate_node(n, b) for n, b in iter_pairs(node, blueprint)]


async def run_benchmark(
    nodes: List[Union[SceneNode, Mapping[str, Any]]], host: SceneHost, settings: Optional[Settings] = None
) -> BenchmarkResult:
    logger.info(f"Running fidelity benchmark on {len(nodes)} nodes")
    results = []
    total = 0
    pixel_perfect = 0
    for raw in nodes:
        node = raw if isinstance(raw, SceneNode) else decode_node(raw)
        try:
            extraction = await extract_blueprint(node, host, settings)
            report = validate_node(node, extraction.blueprint)
        except Exception as e:
            logger.error(f"Failed to process {node.name}: {e}")
            continue
        results.append(report)
        total += report.overall.accuracy
        if report.overall.pixel_perfect:
            pixel_perfect += 1
        logger.debug(f"{node.name}: {report.overall.accuracy}%{' (pixel perfect)' if report.overall.pixel_perfect else ''}")

    average = js_round(total / len(nodes)) if nodes else 0
    logger.info(f"Benchmark: average {average}%, pixel perfect {pixel_perfect}/{len(nodes)}")
    return BenchmarkResult(
        average_accuracy=average,
        pixel_perfect_count=pixel_perfect,
        total_nodes=len(nodes),
        detailed_results=results,
    )
