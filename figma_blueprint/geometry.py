"""Bounding boxes, transform decomposition, path parsing and SVG payloads."""

import math
import re
from typing import List, Optional

from .blueprint import (
    BoundingBox,
    Geometry,
    MaskData,
    PathCommand,
    PixelBounds,
    SvgData,
    SvgPath,
    TransformDecomposition,
    VectorPathValue,
)
from .colors import format_rgba
from .scene import AffineTransform, NodeKind, SceneNode

PATH_COMMAND_RE = re.compile(r"([MmLlHhVvCcSsQqTtAaZz])([\d\s,.-]*)")
_ARG_SPLIT_RE = re.compile(r"[\s,]+")

SVG_EXPORT_KINDS = frozenset({
    NodeKind.VECTOR,
    NodeKind.TEXT,
    NodeKind.RECTANGLE,
    NodeKind.ELLIPSE,
    NodeKind.POLYGON,
    NodeKind.REGULAR_POLYGON,
    NodeKind.STAR,
    NodeKind.LINE,
    NodeKind.IMAGE,
})
SVG_CONTAINER_KINDS = frozenset({NodeKind.FRAME, NodeKind.GROUP, NodeKind.INSTANCE})
MAX_INSTANCE_CHILDREN = 10
MAX_EXPORTABLE_INSTANCE_CHILDREN = 5


def bounding_box(x: float, y: float, width: float, height: float) -> BoundingBox:
    right = x + width
    bottom = y + height
    return BoundingBox(
        x=x,
        y=y,
        width=width,
        height=height,
        left=x,
        top=y,
        right=right,
        bottom=bottom,
        center_x=x + width / 2,
        center_y=y + height / 2,
        pixel_bounds=PixelBounds(
            left=math.floor(x),
            top=math.floor(y),
            right=math.ceil(right),
            bottom=math.ceil(bottom),
        ),
    )


def decompose_transform(matrix: AffineTransform) -> TransformDecomposition:
    """Split a 2x3 affine matrix into translate/scale/rotation/skew.

    skewX is ``atan2(c, d) - 90``, so the identity matrix reports -90.
    """
    a, b, c, d = matrix.a, matrix.b, matrix.c, matrix.d
    rotation = math.degrees(math.atan2(b, a))
    return TransformDecomposition(
        translate_x=matrix.tx,
        translate_y=matrix.ty,
        scale_x=math.sqrt(a * a + b * b),
        scale_y=math.sqrt(c * c + d * d),
        rotation=rotation,
        skew_x=math.degrees(math.atan2(c, d)) - 90,
        skew_y=rotation,
    )


def _parse_float(token: str) -> Optional[float]:
    try:
        value = float(token)
    except ValueError:
        return None
    return None if math.isnan(value) else value


def parse_path_data(path_data: str) -> List[PathCommand]:
    """Tokenize an SVG path string into commands.

    Commands other than Z with no arguments are dropped; unparseable
    numbers are skipped rather than raising.
    """
    commands = []
    for match in PATH_COMMAND_RE.finditer(path_data or ""):
        letter, args = match.group(1), match.group(2).strip()
        if args:
            coordinates = [
                value
                for value in (_parse_float(token) for token in _ARG_SPLIT_RE.split(args) if token)
                if value is not None
            ]
            commands.append(
                PathCommand(command=letter.upper(), coordinates=coordinates, relative=letter == letter.lower())
            )
        elif letter.upper() == "Z":
            commands.append(PathCommand(command="Z", coordinates=[], relative=False))
    return commands


def _any_visible(items) -> bool:
    return any(item.visible for item in items or ())


def is_empty_mask(node: SceneNode) -> bool:
    if not node.is_mask:
        return False
    return not node.children or all(not c.visible or c.opacity == 0 for c in node.children)


def is_svg_exportable(node: SceneNode) -> bool:
    """Whether the host should be asked for an SVG export of this node."""
    exportable_container = (
        node.kind in SVG_CONTAINER_KINDS
        and (_any_visible(node.fills) or _any_visible(node.strokes) or _any_visible(node.effects))
        and (node.kind is not NodeKind.INSTANCE or len(node.children) <= MAX_EXPORTABLE_INSTANCE_CHILDREN)
    )
    if node.kind not in SVG_EXPORT_KINDS and not exportable_container:
        return False
    if not node.visible or node.opacity == 0:
        return False
    if node.width is not None and node.width < 1:
        return False
    if node.height is not None and node.height < 1:
        return False
    if node.width == 0 or node.height == 0:
        return False
    if is_empty_mask(node):
        return False
    if node.kind is NodeKind.INSTANCE and len(node.children) > MAX_INSTANCE_CHILDREN:
        return False
    return True


def build_svg_data(node: SceneNode, svg_content: str) -> SvgData:
    width = node.width or 100
    height = node.height or 100

    paths = []
    fill = node.fills[0] if node.fills else None
    stroke = node.strokes[0] if node.strokes else None
    for vector_path in node.vector.vector_paths if node.vector else ():
        svg_path = {
            "d": vector_path.data,
            "fill_rule": "evenodd" if vector_path.winding_rule == "EVENODD" else "nonzero",
        }
        if fill is not None and fill.type == "SOLID":
            svg_path["fill"] = format_rgba(fill.color)
            svg_path["opacity"] = fill.opacity
        if stroke is not None and stroke.type == "SOLID":
            svg_path["stroke"] = format_rgba(stroke.color)
            svg_path["stroke_width"] = node.stroke_weight if node.stroke_weight is not None else 1
            svg_path["stroke_linecap"] = node.stroke_cap.lower() if node.stroke_cap else None
            svg_path["stroke_linejoin"] = node.stroke_join.lower() if node.stroke_join else None
        paths.append(SvgPath(**svg_path))

    return SvgData(
        view_box=f"0 0 {_num_str(width)} {_num_str(height)}",
        width=width,
        height=height,
        svg_content=svg_content,
        paths=paths,
    )


def _num_str(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def vector_clip_path(data: Optional[str]) -> str:
    return f'path("{data}")' if data else "none"


def _matrix(transform: Optional[AffineTransform]):
    if transform is None:
        return None
    return [list(row) for row in transform.as_matrix()]


def extract_geometry(node: SceneNode, svg_content: Optional[str] = None) -> Geometry:
    """Geometry value group; ``svg_content`` is the prefetched SVG export, if any."""
    bbox = None
    if node.width is not None and node.height is not None:
        bbox = bounding_box(node.x or 0, node.y or 0, node.width, node.height)

    transform = None
    if node.absolute_transform is not None:
        transform = decompose_transform(node.absolute_transform)

    vector = node.vector
    path_commands = None
    vector_paths = None
    clip_path = None
    if vector is not None:
        vector_paths = [VectorPathValue(winding_rule=p.winding_rule, data=p.data) for p in vector.vector_paths]
        path_commands = [cmd for p in vector.vector_paths if p.data for cmd in parse_path_data(p.data)]
        if node.kind is NodeKind.VECTOR and vector.vector_paths:
            clip_path = vector_clip_path(vector.vector_paths[0].data)

    return Geometry(
        bounding_box=bbox,
        absolute_transform=_matrix(node.absolute_transform),
        relative_transform=_matrix(node.relative_transform),
        transform=transform,
        vector_paths=vector_paths,
        vector_network=dict(vector.vector_network) if vector and vector.vector_network else None,
        winding_rule=vector.winding_rule if vector else None,
        handle_mirroring=vector.handle_mirroring if vector else None,
        path_commands=path_commands,
        svg_data=build_svg_data(node, svg_content) if svg_content else None,
        mask_data=MaskData() if node.clips_content else None,
        clip_path=clip_path,
    )
