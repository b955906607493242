# transform.py

from typing import Any, Callable, Mapping, Optional, Union

from loguru import logger

from .blueprint import (
    BlueprintNode,
    ExtractionResult,
    Geometry,
    Interactivity,
    Layout,
    Relationships,
    Tokens,
    Typography,
    Visuals,
)
from .config import Settings
from .diagnostics import Diagnostics
from .geometry import extract_geometry
from .host import SceneHost
from .interactivity import extract_interactivity
from .layout import extract_layout
from .relationships import extract_relationships
from .responsive import extract_responsive
from .scene import NodeKind, SceneNode, count_nodes, decode_node
from .semantic import extract_semantic
from .snapshot import EMPTY_SNAPSHOT, HostSnapshot, prefetch_snapshot
from .tokens import extract_tokens
from .typography import extract_typography
from .visuals import extract_visuals


def _guarded(stage: str, node: SceneNode, diagnostics: Diagnostics, extract: Callable[[], Any], empty: Any):
    """Run one extractor; a failure costs only this node's value group."""
    try:
        return extract()
    except Exception as e:
        diagnostics.warn(node, stage, f"extractor failed: {type(e).__name__}: {e}")
        return empty() if callable(empty) else empty


def transform_node_tree(
    node: SceneNode,
    snapshot: HostSnapshot = EMPTY_SNAPSHOT,
    diagnostics: Optional[Diagnostics] = None,
    parent: Optional[SceneNode] = None,
    sibling_index: int = 0,
    hierarchy_level: int = 0,
) -> BlueprintNode:
    """Build the blueprint for ``node`` and, in order, its whole subtree.

    Pure given the snapshot: no host calls happen here.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    def run(stage, extract, empty):
        return _guarded(stage, node, diagnostics, extract, empty)

    groups = dict(
        visuals=run("visuals", lambda: extract_visuals(node, snapshot), Visuals),
        typography=run("typography", lambda: extract_typography(node, snapshot), Typography),
        layout=run("layout", lambda: extract_layout(node, parent), Layout),
        geometry=run("geometry", lambda: extract_geometry(node, snapshot.svgs.get(node.id)), Geometry),
        semantic=run("semantic", lambda: extract_semantic(node), None),
        responsive=run("responsive", lambda: extract_responsive(node), None),
        interactivity=run("interactivity", lambda: extract_interactivity(node), Interactivity),
        tokens=run("tokens", lambda: extract_tokens(node, snapshot), Tokens),
        relationships=run("relationships", lambda: extract_relationships(node, snapshot, parent), Relationships),
    )
    children = [
        transform_node_tree(child, snapshot, diagnostics, node, index, hierarchy_level + 1)
        for index, child in enumerate(node.children)
    ]

    return BlueprintNode(
        id=node.id,
        name=node.name,
        type=node.type_name,
        sibling_index=sibling_index,
        hierarchy_level=hierarchy_level,
        is_instance=node.kind is NodeKind.INSTANCE,
        children=children,
        **groups,
    )


async def extract_blueprint(
    root: Union[SceneNode, Mapping[str, Any]],
    host: SceneHost,
    settings: Optional[Settings] = None,
) -> ExtractionResult:
    """Prefetch every host lookup for ``root``, then transform the tree."""
    if not isinstance(root, SceneNode):
        root = decode_node(root)

    diagnostics = Diagnostics()
    snapshot = await prefetch_snapshot(root, host, settings, diagnostics)
    blueprint = transform_node_tree(root, snapshot, diagnostics)

    logger.info(f"Extracted blueprint for {root.name!r}: {count_nodes(root)} nodes, {len(diagnostics)} diagnostics")
    return ExtractionResult(blueprint=blueprint, diagnostics=diagnostics.entries)
