"""Scene node model and decoder.

Raw node dictionaries arrive in one of two shapes: the Figma REST document
(``absoluteBoundingBox``, ``relativeTransform``, ``style``, ``styles``) or the
plugin serialization (``x``/``y``, ``fontName``, ``fillStyleId``). Both are
decoded once into an immutable :class:`SceneNode` whose capability records
(``text``, ``auto_layout``, ``vector``, ``component``) are only populated for
kinds that carry them, so extractors test ``node.text is not None`` instead of
probing raw keys.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union


class NodeKind(str, Enum):
    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    PAGE = "PAGE"
    SECTION = "SECTION"
    FRAME = "FRAME"
    GROUP = "GROUP"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    TEXT = "TEXT"
    VECTOR = "VECTOR"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    POLYGON = "POLYGON"
    REGULAR_POLYGON = "REGULAR_POLYGON"
    STAR = "STAR"
    LINE = "LINE"
    IMAGE = "IMAGE"
    SLICE = "SLICE"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: Optional[str]) -> "NodeKind":
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


NO_PAINT_KINDS = frozenset({NodeKind.DOCUMENT, NodeKind.SLICE})

COMPONENT_KINDS = frozenset({NodeKind.COMPONENT, NodeKind.COMPONENT_SET, NodeKind.INSTANCE})


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class GradientStop:
    position: float
    color: Color


@dataclass(frozen=True)
class Paint:
    type: str
    visible: bool = True
    opacity: Optional[float] = None
    blend_mode: Optional[str] = None
    color: Optional[Color] = None
    gradient_stops: Tuple[GradientStop, ...] = ()
    gradient_transform: Optional[Tuple[Tuple[float, ...], ...]] = None
    gradient_handle_positions: Tuple[Tuple[float, float], ...] = ()
    image_hash: Optional[str] = None
    video_hash: Optional[str] = None
    scale_mode: Optional[str] = None
    image_transform: Optional[Tuple[Tuple[float, ...], ...]] = None
    filters: Tuple[Tuple[str, float], ...] = ()
    style_id: Optional[str] = None


@dataclass(frozen=True)
class Effect:
    type: str
    visible: bool = True
    radius: Optional[float] = None
    color: Optional[Color] = None
    offset: Optional[Tuple[float, float]] = None
    spread: Optional[float] = None
    blend_mode: Optional[str] = None
    style_id: Optional[str] = None


@dataclass(frozen=True)
class Reaction:
    trigger_type: Optional[str]
    action_type: Optional[str] = None
    destination: Optional[str] = None
    navigation: Optional[str] = None
    transition_type: Optional[str] = None
    duration: Optional[float] = None
    easing: Optional[str] = None
    key_code: Optional[int] = None
    device: Optional[str] = None
    preserve_scroll_position: Optional[bool] = None


@dataclass(frozen=True)
class AffineTransform:
    """2x3 matrix ``(a, b, c, d, tx, ty)``."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["AffineTransform"]:
        """Accept ``[[a, c, tx], [b, d, ty]]`` or a flat ``[a, b, c, d, tx, ty]``."""
        if not isinstance(raw, (list, tuple)):
            return None
        try:
            if len(raw) == 2 and all(isinstance(row, (list, tuple)) for row in raw):
                (a, c, tx), (b, d, ty) = raw[0][:3], raw[1][:3]
            elif len(raw) >= 6:
                a, b, c, d, tx, ty = raw[:6]
            else:
                return None
            return cls(float(a), float(b), float(c), float(d), float(tx), float(ty))
        except (TypeError, ValueError):
            return None

    def as_matrix(self) -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
        return ((self.a, self.c, self.tx), (self.b, self.d, self.ty))


@dataclass(frozen=True)
class Bounds:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Constraints:
    horizontal: Optional[str] = None
    vertical: Optional[str] = None
    scale_mode: Optional[str] = None


@dataclass(frozen=True)
class ExportSetting:
    format: Optional[str]
    suffix: Optional[str] = None
    constraint_type: Optional[str] = None
    constraint_value: Optional[float] = None
    contents_only: Optional[bool] = None


@dataclass(frozen=True)
class LineHeight:
    value: Optional[float]
    unit: str


@dataclass(frozen=True)
class LetterSpacing:
    value: float
    unit: str


@dataclass(frozen=True)
class TextCapability:
    characters: str = ""
    font_family: Optional[str] = None
    font_style: Optional[str] = None
    font_size: Optional[float] = None
    line_height: Optional[LineHeight] = None
    letter_spacing: Optional[LetterSpacing] = None
    text_align_horizontal: Optional[str] = None
    text_align_vertical: Optional[str] = None
    text_case: Optional[str] = None
    text_decoration: Optional[str] = None
    text_transform: Optional[str] = None
    text_auto_resize: Optional[str] = None
    text_truncation: Optional[str] = None
    paragraph_spacing: Optional[float] = None
    paragraph_indent: Optional[float] = None
    list_spacing: Optional[float] = None
    line_indent: Optional[float] = None
    opentype_flags: Union[int, Mapping[str, int], None] = None
    text_style_id: Optional[str] = None


@dataclass(frozen=True)
class AutoLayoutCapability:
    layout_mode: str = "NONE"
    primary_axis_sizing_mode: Optional[str] = None
    counter_axis_sizing_mode: Optional[str] = None
    primary_axis_align_items: Optional[str] = None
    counter_axis_align_items: Optional[str] = None
    item_spacing: Optional[float] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None
    padding_top: Optional[float] = None
    padding_bottom: Optional[float] = None
    layout_wrap: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return bool(self.layout_mode) and self.layout_mode != "NONE"


@dataclass(frozen=True)
class VectorPath:
    winding_rule: Optional[str]
    data: str


@dataclass(frozen=True)
class VectorCapability:
    vector_paths: Tuple[VectorPath, ...] = ()
    vector_network: Optional[Mapping[str, Any]] = None
    winding_rule: Optional[str] = None
    handle_mirroring: Optional[str] = None


@dataclass(frozen=True)
class ComponentProperty:
    type: Optional[str]
    value: Any
    default_value: Any = None
    preferred_values: Optional[Tuple[Any, ...]] = None


@dataclass(frozen=True)
class ComponentCapability:
    key: Optional[str] = None
    description: Optional[str] = None
    main_component_id: Optional[str] = None
    component_properties: Mapping[str, ComponentProperty] = field(default_factory=dict)


@dataclass(frozen=True)
class SceneNode:
    id: str
    name: str
    type_name: str
    kind: NodeKind
    visible: bool = True
    opacity: Optional[float] = None
    blend_mode: Optional[str] = None
    is_mask: Optional[bool] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: Optional[float] = None
    absolute_transform: Optional[AffineTransform] = None
    relative_transform: Optional[AffineTransform] = None
    absolute_bounding_box: Optional[Bounds] = None
    constraints: Optional[Constraints] = None
    min_width: Optional[float] = None
    max_width: Optional[float] = None
    min_height: Optional[float] = None
    max_height: Optional[float] = None
    layout_align: Optional[str] = None
    layout_grow: Optional[float] = None
    layout_positioning: Optional[str] = None
    z_index: Optional[int] = None
    clips_content: Optional[bool] = None
    corner_radius: Optional[float] = None
    corner_radii: Optional[Tuple[float, float, float, float]] = None
    corner_smoothing: Optional[float] = None
    fills: Optional[Tuple[Paint, ...]] = None
    strokes: Optional[Tuple[Paint, ...]] = None
    stroke_weight: Optional[float] = None
    stroke_align: Optional[str] = None
    stroke_cap: Optional[str] = None
    stroke_join: Optional[str] = None
    dash_pattern: Optional[Tuple[float, ...]] = None
    effects: Tuple[Effect, ...] = ()
    fill_style_id: Optional[str] = None
    stroke_style_id: Optional[str] = None
    effect_style_id: Optional[str] = None
    reactions: Tuple[Reaction, ...] = ()
    export_settings: Tuple[ExportSetting, ...] = ()
    prototype_start_node_id: Optional[str] = None
    transition_node_id: Optional[str] = None
    transition_duration: Optional[float] = None
    transition_easing: Optional[str] = None
    text: Optional[TextCapability] = None
    auto_layout: Optional[AutoLayoutCapability] = None
    vector: Optional[VectorCapability] = None
    component: Optional[ComponentCapability] = None
    children: Tuple["SceneNode", ...] = ()

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def has_reactions(self) -> bool:
        return len(self.reactions) > 0

    @property
    def style_ids(self) -> Dict[str, str]:
        """Node-level style references keyed by role (fill/stroke/text/effect)."""
        ids = {
            "fill": self.fill_style_id,
            "stroke": self.stroke_style_id,
            "text": self.text.text_style_id if self.text else None,
            "effect": self.effect_style_id,
        }
        return {role: style_id for role, style_id in ids.items() if style_id}


# --- decoding -------------------------------------------------------------

def _num(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value != "" else None


def _items(value: Any) -> Tuple[Any, ...]:
    return tuple(value) if isinstance(value, (list, tuple)) else ()


def _nums(value: Any, length: Optional[int] = None) -> Optional[Tuple[float, ...]]:
    """All-numeric list as floats, or None when any element is not a number."""
    if not isinstance(value, (list, tuple)) or (length is not None and len(value) != length):
        return None
    numbers = tuple(_num(v) for v in value)
    return None if any(n is None for n in numbers) else numbers


def _matrix(value: Any) -> Optional[Tuple[Tuple[float, ...], ...]]:
    if not isinstance(value, (list, tuple)):
        return None
    rows = []
    for row in value:
        if not isinstance(row, (list, tuple)):
            return None
        rows.append(tuple(float(v) for v in row if _num(v) is not None))
    return tuple(rows)


def _decode_color(raw: Any) -> Optional[Color]:
    if not isinstance(raw, Mapping):
        return None
    r, g, b = _num(raw.get("r")), _num(raw.get("g")), _num(raw.get("b"))
    if r is None or g is None or b is None:
        return None
    a = _num(raw.get("a"))
    return Color(r, g, b, 1.0 if a is None else a)


def _decode_paint(raw: Mapping[str, Any]) -> Paint:
    stops = []
    for stop in _items(raw.get("gradientStops")):
        if not isinstance(stop, Mapping):
            continue
        color = _decode_color(stop.get("color"))
        if color is not None:
            stops.append(GradientStop(_num(stop.get("position")) or 0.0, color))

    handles = []
    for handle in _items(raw.get("gradientHandlePositions")):
        if isinstance(handle, Mapping):
            handles.append((_num(handle.get("x")) or 0.0, _num(handle.get("y")) or 0.0))

    filters = raw.get("filters")
    filter_items: Tuple[Tuple[str, float], ...] = ()
    if isinstance(filters, Mapping):
        filter_items = tuple((str(k), float(v)) for k, v in filters.items() if _num(v) is not None)

    return Paint(
        type=str(raw.get("type") or "SOLID"),
        visible=raw.get("visible") is not False,
        opacity=_num(raw.get("opacity")),
        blend_mode=_str(raw.get("blendMode")),
        color=_decode_color(raw.get("color")),
        gradient_stops=tuple(stops),
        gradient_transform=_matrix(raw.get("gradientTransform")),
        gradient_handle_positions=tuple(handles),
        image_hash=_str(raw.get("imageHash") or raw.get("imageRef")),
        video_hash=_str(raw.get("videoHash")),
        scale_mode=_str(raw.get("scaleMode")),
        image_transform=_matrix(raw.get("imageTransform")),
        filters=filter_items,
        style_id=_str(raw.get("styleId")),
    )


def _decode_paints(raw: Any, style_id: Optional[str] = None) -> Optional[Tuple[Paint, ...]]:
    if not isinstance(raw, list):
        return None
    paints = tuple(_decode_paint(p) for p in raw if isinstance(p, Mapping))
    if style_id:
        # a node-level style applies to every paint in the list
        paints = tuple(p if p.style_id else replace(p, style_id=style_id) for p in paints)
    return paints


def _decode_effect(raw: Mapping[str, Any]) -> Effect:
    offset = raw.get("offset")
    return Effect(
        type=str(raw.get("type") or ""),
        visible=raw.get("visible") is not False,
        radius=_num(raw.get("radius")),
        color=_decode_color(raw.get("color")),
        offset=(_num(offset.get("x")) or 0.0, _num(offset.get("y")) or 0.0) if isinstance(offset, Mapping) else None,
        spread=_num(raw.get("spread")),
        blend_mode=_str(raw.get("blendMode")),
        style_id=_str(raw.get("styleId")),
    )


def _decode_reaction(raw: Mapping[str, Any]) -> Reaction:
    trigger = raw.get("trigger")
    if not isinstance(trigger, Mapping):
        trigger = {}
    action = raw.get("action")
    if not action:
        actions = _items(raw.get("actions"))
        action = actions[0] if actions else {}
    if not isinstance(action, Mapping):
        action = {}

    transition = action.get("transition")
    if isinstance(transition, Mapping):
        transition_type = _str(transition.get("type"))
        duration = _num(transition.get("duration"))
        easing = transition.get("easing")
    else:
        transition_type = _str(transition)
        duration = _num(action.get("duration"))
        easing = action.get("easing")
    if isinstance(easing, Mapping):
        easing = easing.get("type")

    destination = action.get("destination") or action.get("destinationId") or action.get("url")
    if isinstance(destination, Mapping):
        destination = destination.get("id")

    return Reaction(
        trigger_type=_str(trigger.get("type")),
        action_type=_str(action.get("type")),
        destination=_str(destination),
        navigation=_str(action.get("navigation")),
        transition_type=transition_type,
        duration=duration,
        easing=_str(easing),
        key_code=trigger.get("keyCode"),
        device=_str(trigger.get("device")),
        preserve_scroll_position=action.get("preserveScrollPosition"),
    )


def _decode_text(raw: Mapping[str, Any]) -> TextCapability:
    style = raw.get("style") if isinstance(raw.get("style"), Mapping) else {}
    font_name = raw.get("fontName") if isinstance(raw.get("fontName"), Mapping) else {}

    family = _str(font_name.get("family")) or _str(style.get("fontFamily"))
    font_style = _str(font_name.get("style")) or _str(style.get("fontStyle"))
    if font_style is None and style:
        font_style = "Italic" if style.get("italic") else "Regular"

    line_height = None
    lh = raw.get("lineHeight")
    if isinstance(lh, Mapping):
        line_height = LineHeight(_num(lh.get("value")), str(lh.get("unit") or "AUTO"))
    elif style:
        unit = style.get("lineHeightUnit")
        if unit == "INTRINSIC_%" or (unit is None and style.get("lineHeightPx") is None):
            line_height = LineHeight(None, "AUTO")
        elif unit == "FONT_SIZE_%":
            line_height = LineHeight(_num(style.get("lineHeightPercentFontSize")), "PERCENT")
        else:
            line_height = LineHeight(_num(style.get("lineHeightPx")), "PIXELS")

    letter_spacing = None
    ls = raw.get("letterSpacing")
    if isinstance(ls, Mapping):
        letter_spacing = LetterSpacing(_num(ls.get("value")) or 0.0, str(ls.get("unit") or "PIXELS"))
    elif _num(style.get("letterSpacing")) is not None:
        letter_spacing = LetterSpacing(_num(style.get("letterSpacing")), "PIXELS")

    def pick(key: str) -> Any:
        return raw.get(key) if key in raw else style.get(key)

    styles = raw.get("styles") if isinstance(raw.get("styles"), Mapping) else {}
    opentype = pick("opentypeFlags")

    return TextCapability(
        characters=str(raw.get("characters") or ""),
        font_family=family,
        font_style=font_style,
        font_size=_num(raw.get("fontSize")) or _num(style.get("fontSize")),
        line_height=line_height,
        letter_spacing=letter_spacing,
        text_align_horizontal=_str(pick("textAlignHorizontal")),
        text_align_vertical=_str(pick("textAlignVertical")),
        text_case=_str(pick("textCase")),
        text_decoration=_str(pick("textDecoration")),
        text_transform=_str(pick("textTransform")),
        text_auto_resize=_str(pick("textAutoResize")),
        text_truncation=_str(pick("textTruncation")),
        paragraph_spacing=_num(pick("paragraphSpacing")),
        paragraph_indent=_num(pick("paragraphIndent")),
        list_spacing=_num(pick("listSpacing")),
        line_indent=_num(pick("lineIndent")),
        opentype_flags=opentype if isinstance(opentype, (int, Mapping)) and not isinstance(opentype, bool) else None,
        text_style_id=_str(raw.get("textStyleId")) or _str(raw.get("styleId")) or _str(styles.get("text")),
    )


def _decode_auto_layout(raw: Mapping[str, Any]) -> Optional[AutoLayoutCapability]:
    if "layoutMode" not in raw:
        return None
    return AutoLayoutCapability(
        layout_mode=str(raw.get("layoutMode") or "NONE"),
        primary_axis_sizing_mode=_str(raw.get("primaryAxisSizingMode")),
        counter_axis_sizing_mode=_str(raw.get("counterAxisSizingMode")),
        primary_axis_align_items=_str(raw.get("primaryAxisAlignItems")),
        counter_axis_align_items=_str(raw.get("counterAxisAlignItems")),
        item_spacing=_num(raw.get("itemSpacing")),
        padding_left=_num(raw.get("paddingLeft")),
        padding_right=_num(raw.get("paddingRight")),
        padding_top=_num(raw.get("paddingTop")),
        padding_bottom=_num(raw.get("paddingBottom")),
        layout_wrap=_str(raw.get("layoutWrap")),
    )


def _decode_vector(raw: Mapping[str, Any]) -> Optional[VectorCapability]:
    raw_paths = raw.get("vectorPaths")
    if raw_paths is None:
        raw_paths = raw.get("fillGeometry")
    network = raw.get("vectorNetwork")
    if raw_paths is None and network is None:
        return None
    paths = tuple(
        VectorPath(_str(p.get("windingRule")), str(p.get("data") or p.get("path") or ""))
        for p in _items(raw_paths)
        if isinstance(p, Mapping)
    )
    return VectorCapability(
        vector_paths=paths,
        vector_network=network if isinstance(network, Mapping) else None,
        winding_rule=_str(raw.get("windingRule")),
        handle_mirroring=_str(raw.get("handleMirroring")),
    )


def _decode_component(raw: Mapping[str, Any], kind: NodeKind) -> Optional[ComponentCapability]:
    if kind not in COMPONENT_KINDS:
        return None
    props = {}
    for key, value in (raw.get("componentProperties") or {}).items():
        if isinstance(value, Mapping):
            preferred = value.get("preferredValues")
            props[key] = ComponentProperty(
                type=_str(value.get("type")),
                value=value.get("value"),
                default_value=value.get("defaultValue"),
                preferred_values=tuple(preferred) if isinstance(preferred, list) else None,
            )
    main = raw.get("mainComponent")
    main_id = main.get("id") if isinstance(main, Mapping) else raw.get("componentId")
    return ComponentCapability(
        key=_str(raw.get("key")),
        description=_str(raw.get("description")),
        main_component_id=_str(main_id),
        component_properties=props,
    )


def _decode_geometry(raw: Mapping[str, Any]) -> Dict[str, Any]:
    bbox = raw.get("absoluteBoundingBox")
    bounds = None
    if isinstance(bbox, Mapping) and _num(bbox.get("width")) is not None:
        bounds = Bounds(
            _num(bbox.get("x")) or 0.0,
            _num(bbox.get("y")) or 0.0,
            _num(bbox.get("width")) or 0.0,
            _num(bbox.get("height")) or 0.0,
        )
    relative = AffineTransform.from_raw(raw.get("relativeTransform"))
    absolute = AffineTransform.from_raw(raw.get("absoluteTransform"))

    x, y = _num(raw.get("x")), _num(raw.get("y"))
    if x is None and relative is not None:
        x, y = relative.tx, relative.ty
    if x is None and bounds is not None:
        x, y = bounds.x, bounds.y

    size = raw.get("size") if isinstance(raw.get("size"), Mapping) else {}
    width = _num(raw.get("width"))
    height = _num(raw.get("height"))
    if width is None:
        width = _num(size.get("x")) if size else (bounds.width if bounds else None)
    if height is None:
        height = _num(size.get("y")) if size else (bounds.height if bounds else None)

    if absolute is None and bounds is not None:
        absolute = AffineTransform(tx=bounds.x, ty=bounds.y)

    return {
        "x": x,
        "y": y,
        "width": width,
        "height": height,
        "absolute_transform": absolute,
        "relative_transform": relative,
        "absolute_bounding_box": bounds,
    }


def decode_node(raw: Mapping[str, Any]) -> SceneNode:
    """Decode one raw node dict (and its subtree) into a SceneNode."""
    kind = NodeKind.parse(raw.get("type"))
    styles = raw.get("styles") if isinstance(raw.get("styles"), Mapping) else {}

    constraints = raw.get("constraints")
    radii = raw.get("rectangleCornerRadii")
    corner_radius = raw.get("cornerRadius")
    if isinstance(corner_radius, list) and len(corner_radius) == 4:
        radii, corner_radius = corner_radius, None
    if radii is None and any(k in raw for k in ("topLeftRadius", "topRightRadius")) and _num(corner_radius) is None:
        radii = [raw.get(k) or 0 for k in ("topLeftRadius", "topRightRadius", "bottomRightRadius", "bottomLeftRadius")]

    dash = raw.get("dashPattern") or raw.get("strokeDashes")
    fill_style_id = _str(raw.get("fillStyleId")) or _str(styles.get("fill")) or _str(styles.get("fills"))
    stroke_style_id = _str(raw.get("strokeStyleId")) or _str(styles.get("stroke")) or _str(styles.get("strokes"))
    effect_style_id = _str(raw.get("effectStyleId")) or _str(styles.get("effect"))

    return SceneNode(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or ""),
        type_name=str(raw.get("type") or ""),
        kind=kind,
        visible=raw.get("visible") is not False,
        opacity=_num(raw.get("opacity")),
        blend_mode=_str(raw.get("blendMode")),
        is_mask=raw.get("isMask") if isinstance(raw.get("isMask"), bool) else None,
        rotation=_num(raw.get("rotation")),
        constraints=Constraints(
            _str(constraints.get("horizontal")),
            _str(constraints.get("vertical")),
            _str(constraints.get("scaleMode")),
        ) if isinstance(constraints, Mapping) else None,
        min_width=_num(raw.get("minWidth")),
        max_width=_num(raw.get("maxWidth")),
        min_height=_num(raw.get("minHeight")),
        max_height=_num(raw.get("maxHeight")),
        layout_align=_str(raw.get("layoutAlign")),
        layout_grow=_num(raw.get("layoutGrow")),
        layout_positioning=_str(raw.get("layoutPositioning")),
        z_index=raw.get("zIndex") if isinstance(raw.get("zIndex"), int) else None,
        clips_content=raw.get("clipsContent") if isinstance(raw.get("clipsContent"), bool) else None,
        corner_radius=_num(corner_radius),
        corner_radii=_nums(radii, 4),
        corner_smoothing=_num(raw.get("cornerSmoothing")),
        fills=None if kind in NO_PAINT_KINDS else _decode_paints(raw.get("fills"), fill_style_id),
        strokes=None if kind in NO_PAINT_KINDS else _decode_paints(raw.get("strokes"), stroke_style_id),
        stroke_weight=_num(raw.get("strokeWeight")),
        stroke_align=_str(raw.get("strokeAlign")),
        stroke_cap=_str(raw.get("strokeCap")),
        stroke_join=_str(raw.get("strokeJoin")),
        dash_pattern=_nums(dash),
        effects=tuple(
            replace(effect, style_id=effect.style_id or effect_style_id)
            for effect in (_decode_effect(e) for e in _items(raw.get("effects")) if isinstance(e, Mapping))
        ),
        fill_style_id=fill_style_id,
        stroke_style_id=stroke_style_id,
        effect_style_id=effect_style_id,
        reactions=tuple(_decode_reaction(r) for r in _items(raw.get("reactions")) if isinstance(r, Mapping)),
        export_settings=tuple(
            ExportSetting(
                format=_str(s.get("format")),
                suffix=s.get("suffix"),
                constraint_type=_str((s.get("constraint") or {}).get("type")),
                constraint_value=_num((s.get("constraint") or {}).get("value")),
                contents_only=s.get("contentsOnly"),
            )
            for s in _items(raw.get("exportSettings"))
            if isinstance(s, Mapping)
        ),
        prototype_start_node_id=_str(raw.get("prototypeStartNodeID")),
        transition_node_id=_str(raw.get("transitionNodeID")),
        transition_duration=_num(raw.get("transitionDuration")),
        transition_easing=_str(raw.get("transitionEasing")),
        text=_decode_text(raw) if kind is NodeKind.TEXT else None,
        auto_layout=_decode_auto_layout(raw),
        vector=_decode_vector(raw),
        component=_decode_component(raw, kind),
        children=tuple(decode_node(c) for c in _items(raw.get("children")) if isinstance(c, Mapping)),
        **_decode_geometry(raw),
    )


# --- traversal helpers ----------------------------------------------------

def iter_nodes(node: SceneNode) -> Iterator[SceneNode]:
    """Pre-order traversal."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)


def count_nodes(node: SceneNode) -> int:
    return sum(1 for _ in iter_nodes(node))


def has_text_children(node: SceneNode) -> bool:
    return any(child.kind is NodeKind.TEXT or has_text_children(child) for child in node.children)
