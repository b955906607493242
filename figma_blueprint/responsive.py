from typing import Optional

from .blueprint import (
    BreakpointBehavior,
    ContainerAdaptation,
    ContainerBreakpoint,
    Dimensions,
    LayoutChanges,
    ResizeConstraint,
    ResizingLogic,
    Responsive,
    ViewportAdaptation,
)
from .layout import constraints_of, padding_of
from .scene import SceneNode

# Only one breakpoint is ever synthesized.
BREAKPOINT = "md"


def aspect_ratio(node: SceneNode) -> Optional[float]:
    if node.width and node.height:
        return node.width / node.height
    return None


def extract_responsive(node: SceneNode) -> Optional[Responsive]:
    """Responsive descriptors, derived only for auto-layout containers."""
    al = node.auto_layout
    if al is None or not al.enabled:
        return None

    padding = padding_of(al)
    ratio = aspect_ratio(node)

    breakpoint = BreakpointBehavior(
        breakpoint=BREAKPOINT,
        min_width=node.min_width,
        max_width=node.max_width,
        layout_changes=LayoutChanges(
            direction=al.layout_mode,
            alignment=al.primary_axis_align_items,
            spacing=al.item_spacing,
            padding=padding,
            sizing=al.primary_axis_sizing_mode,
            constraints=constraints_of(node) if node.constraints else None,
            position=node.layout_positioning,
        ),
    )

    container = ContainerAdaptation(
        min_width=node.min_width,
        max_width=node.max_width,
        aspect_ratio=ratio,
        breakpoints={
            BREAKPOINT: ContainerBreakpoint(
                width=node.width,
                layout=al.layout_mode,
                spacing=al.item_spacing,
                padding=padding,
                children_layout=al.layout_mode,
            )
        },
    )

    resizing = ResizingLogic(
        constraints=[
            ResizeConstraint(axis="horizontal", value=node.min_width or 0),
            ResizeConstraint(axis="vertical", value=node.min_height or 0),
        ],
        min_size=Dimensions(width=node.min_width or 0, height=node.min_height or 0),
        max_size=Dimensions(width=node.max_width or node.width, height=node.max_height or node.height),
        preferred_size=Dimensions(width=node.width, height=node.height),
    )

    return Responsive(
        fluid_sizing=al.primary_axis_sizing_mode == "AUTO" or al.counter_axis_sizing_mode == "AUTO",
        aspect_ratio=ratio,
        viewport_adaptation=ViewportAdaptation(
            min_width=node.min_width,
            max_width=node.max_width,
            min_height=node.min_height,
            max_height=node.max_height,
        ),
        breakpoint_behavior=[breakpoint],
        container_adaptation=container,
        resizing_logic=resizing,
    )
