import math
from typing import List, Optional

from .blueprint import CornerRadii, EffectValue, GradientStopValue, PaintValue, Visuals
from .colors import format_rgba
from .geometry import vector_clip_path
from .scene import Effect, NodeKind, Paint, SceneNode
from .snapshot import HostSnapshot

SHADOW_EFFECTS = ("DROP_SHADOW", "INNER_SHADOW")
BLUR_EFFECTS = ("LAYER_BLUR", "BACKGROUND_BLUR")


def gradient_angle(paint: Paint) -> int:
    if not paint.gradient_transform or len(paint.gradient_transform) < 2:
        return 0
    a = paint.gradient_transform[0][0]
    b = paint.gradient_transform[1][0]
    return round(math.degrees(math.atan2(b, a)))


def gradient_css(paint: Paint) -> str:
    if not paint.gradient_stops:
        return ""
    stops = ", ".join(f"{format_rgba(s.color)} {round(s.position * 100)}%" for s in paint.gradient_stops)
    if paint.type == "GRADIENT_LINEAR":
        return f"linear-gradient({gradient_angle(paint)}deg, {stops})"
    if paint.type == "GRADIENT_RADIAL":
        return f"radial-gradient(circle, {stops})"
    if paint.type == "GRADIENT_ANGULAR":
        return f"conic-gradient({stops})"
    return f"linear-gradient({stops})"


def _matrix(value):
    return [list(row) for row in value] if value else None


def extract_paint(paint: Paint, snapshot: HostSnapshot) -> PaintValue:
    fields = {
        "type": paint.type,
        "visible": paint.visible,
        "opacity": paint.opacity,
        "blend_mode": paint.blend_mode,
    }
    if paint.type == "SOLID":
        color = format_rgba(paint.color)
        fields.update(color=color, fallback_color=color, token=snapshot.style_name(paint.style_id))
    elif "GRADIENT" in paint.type:
        stops = [GradientStopValue(position=s.position, color=format_rgba(s.color)) for s in paint.gradient_stops]
        fields.update(
            gradient_stops=stops,
            gradient_transform=_matrix(paint.gradient_transform),
            gradient_handle_positions=[list(h) for h in paint.gradient_handle_positions] or None,
            gradient_css=gradient_css(paint),
            fallback_color=stops[0].color if stops else None,
        )
    elif paint.type in ("IMAGE", "VIDEO"):
        fields.update(
            image_hash=paint.image_hash,
            video_hash=paint.video_hash,
            scale_mode=paint.scale_mode,
            image_transform=_matrix(paint.image_transform),
            filters=dict(paint.filters) or None,
        )
    return PaintValue(**fields)


def extract_effect(effect: Effect) -> EffectValue:
    fields = {"type": effect.type, "visible": effect.visible, "blend_mode": effect.blend_mode}
    if effect.type in SHADOW_EFFECTS:
        fields.update(
            radius=effect.radius,
            color=format_rgba(effect.color),
            offset=list(effect.offset) if effect.offset else [0.0, 0.0],
            spread=effect.spread,
        )
    elif effect.type in BLUR_EFFECTS:
        fields["radius"] = effect.radius
    return EffectValue(**fields)


def backdrop_blur(node: SceneNode) -> float:
    for effect in node.effects:
        if effect.type == "BACKGROUND_BLUR" and effect.visible:
            return effect.radius or 0
    return 0


def mask_clip_path(node: SceneNode) -> Optional[str]:
    """CSS clip-path approximating a mask layer."""
    if not node.is_mask:
        return None
    if node.kind is NodeKind.VECTOR and node.vector and node.vector.vector_paths:
        return vector_clip_path(node.vector.vector_paths[0].data)
    if node.kind is NodeKind.RECTANGLE:
        radius = node.corner_radius or 0
        return f"inset(0 round {radius:g}px)" if radius > 0 else "inset(0)"
    if node.kind is NodeKind.ELLIPSE:
        return "ellipse(50% 50% at 50% 50%)"
    return None


def _paints(paints, snapshot) -> Optional[List[PaintValue]]:
    if not paints:
        return None
    return [extract_paint(p, snapshot) for p in paints]


def extract_visuals(node: SceneNode, snapshot: HostSnapshot) -> Visuals:
    border_radius = None
    if node.corner_radii is not None:
        tl, tr, br, bl = node.corner_radii
        border_radius = CornerRadii(top_left=tl, top_right=tr, bottom_right=br, bottom_left=bl)
    elif node.corner_radius is not None:
        border_radius = node.corner_radius

    return Visuals(
        # text fills are reported as the text color instead
        fills=None if node.kind is NodeKind.TEXT else _paints(node.fills, snapshot),
        strokes=_paints(node.strokes, snapshot),
        border_radius=border_radius,
        corner_smoothing=node.corner_smoothing,
        stroke_weight=node.stroke_weight,
        stroke_align=node.stroke_align,
        stroke_cap=node.stroke_cap,
        stroke_join=node.stroke_join,
        dash_pattern=list(node.dash_pattern) if node.dash_pattern is not None else None,
        opacity=node.opacity,
        blend_mode=node.blend_mode,
        is_mask=node.is_mask,
        fill_style_id=node.fill_style_id,
        stroke_style_id=node.stroke_style_id,
        effect_style_id=node.effect_style_id,
        effects=[extract_effect(e) for e in node.effects] or None,
        backdrop_blur=backdrop_blur(node) if node.effects else None,
        clip_path=mask_clip_path(node),
    )
