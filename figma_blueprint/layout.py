from typing import Optional

from .blueprint import (
    AutoLayout,
    ConstraintsValue,
    Layout,
    Padding,
    Position,
    RelativePosition,
    ResponsiveHints,
    Size,
    SizeMode,
)
from .scene import AutoLayoutCapability, NodeKind, SceneNode


def padding_of(auto_layout: Optional[AutoLayoutCapability]) -> Padding:
    if auto_layout is None:
        return Padding()
    return Padding(
        top=auto_layout.padding_top or 0,
        right=auto_layout.padding_right or 0,
        bottom=auto_layout.padding_bottom or 0,
        left=auto_layout.padding_left or 0,
    )


def constraints_of(node: SceneNode) -> ConstraintsValue:
    constraints = node.constraints
    if constraints is None:
        return ConstraintsValue()
    return ConstraintsValue(
        horizontal=constraints.horizontal or "MIN",
        vertical=constraints.vertical or "MIN",
        scale_mode=constraints.scale_mode,
    )


def auto_layout_descriptor(node: SceneNode) -> AutoLayout:
    al = node.auto_layout
    if al is not None and al.enabled:
        return AutoLayout(
            enabled=True,
            direction=al.layout_mode,
            spacing=al.item_spacing or 0,
            alignment=al.primary_axis_align_items or "MIN",
            padding=padding_of(al),
            align_items=al.counter_axis_align_items or "MIN",
            justify_content=al.primary_axis_align_items or "MIN",
            gap=al.item_spacing or 0,
            primary_axis_sizing_mode=al.primary_axis_sizing_mode,
            counter_axis_sizing_mode=al.counter_axis_sizing_mode,
            layout_wrap=al.layout_wrap,
        )

    # No auto-layout: guess the flow axis from the aspect ratio
    wider = (node.width or 0) > (node.height or 0)
    return AutoLayout(
        enabled=False,
        direction="NONE",
        spacing=0,
        alignment="CENTER",
        align_items="CENTER",
        justify_content="CENTER",
        gap=0,
        detected_direction="HORIZONTAL" if wider else "VERTICAL",
        suggested_alignment="CENTER",
    )


def group_relative_position(node: SceneNode, group: SceneNode):
    """Children of a group carry no local origin; re-base them on the tightest sibling corner."""
    min_x = min((c.x or 0) for c in group.children)
    min_y = min((c.y or 0) for c in group.children)
    return max(0, (node.x or 0) - min_x), max(0, (node.y or 0) - min_y)


def position_of(node: SceneNode, parent: Optional[SceneNode] = None) -> Position:
    x, y = node.x or 0, node.y or 0
    if parent is not None and parent.kind is NodeKind.GROUP and parent.children:
        x, y = group_relative_position(node, parent)
    return Position(x=x, y=y, rotation=node.rotation or 0, z_index=node.z_index)


def _origin(node: SceneNode):
    if node.absolute_bounding_box is not None:
        return node.absolute_bounding_box.x, node.absolute_bounding_box.y
    return node.x or 0, node.y or 0


def relative_to_parent(node: SceneNode, parent: SceneNode) -> RelativePosition:
    node_x, node_y = _origin(node)
    parent_x, parent_y = _origin(parent)
    dx, dy = node_x - parent_x, node_y - parent_y
    return RelativePosition(
        x=dx,
        y=dy,
        x_percent=dx / (parent.width or 1) * 100,
        y_percent=dy / (parent.height or 1) * 100,
    )


def extract_layout(node: SceneNode, parent: Optional[SceneNode] = None) -> Layout:
    al = node.auto_layout
    enabled = al is not None and al.enabled
    primary = al.primary_axis_sizing_mode if al else None
    counter = al.counter_axis_sizing_mode if al else None

    has_padding = al is not None and any(
        v is not None for v in (al.padding_left, al.padding_right, al.padding_top, al.padding_bottom)
    )

    return Layout(
        constraints=constraints_of(node),
        auto_layout=auto_layout_descriptor(node),
        padding=padding_of(al) if has_padding else None,
        min_width=node.min_width,
        max_width=node.max_width,
        min_height=node.min_height,
        max_height=node.max_height,
        size_mode=SizeMode(width=primary or "FIXED", height=counter or "FIXED"),
        responsive_hints=ResponsiveHints(
            preferred_behavior="hug-content" if primary == "AUTO" else "fixed-size",
            breakpoint_support=enabled,
            fluid_sizing=primary == "AUTO" or counter == "AUTO",
            adaptive_layout=enabled,
        ),
        layout_align=node.layout_align,
        layout_grow=node.layout_grow,
        layout_positioning=node.layout_positioning,
        gap=al.item_spacing if al else None,
        clip_content=bool(node.clips_content),
        size=Size(width=node.width, height=node.height),
        position=position_of(node, parent),
        relative_to_parent=relative_to_parent(node, parent) if parent is not None else None,
    )
