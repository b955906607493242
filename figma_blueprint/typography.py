from typing import Dict, Mapping, Optional, Union

from .blueprint import (
    FontDefinition,
    FontDescriptor,
    FontFallback,
    FontStack,
    TextAlignment,
    TextShadow,
    TextStroke,
    Typography,
    UnitValue,
)
from .colors import format_rgba
from .scene import LetterSpacing, LineHeight, SceneNode, TextCapability
from .snapshot import HostSnapshot
from .text_metrics import AUTO_LINE_HEIGHT, build_line_boxes, character_metrics, measure_text

DEFAULT_FONT_SIZE = 16
SYSTEM_FALLBACK = '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif'

# Checked in order; "Extra Bold" hits the plain "Bold" rule first and maps to 700.
WEIGHT_KEYWORDS = (
    (("Thin",), 100),
    (("Extra Light", "Ultra Light"), 200),
    (("Light",), 300),
    (("Regular", "Normal"), 400),
    (("Medium",), 500),
    (("Semi Bold", "Demi Bold"), 600),
    (("Bold",), 700),
    (("Extra Bold", "Ultra Bold"), 800),
    (("Black", "Heavy"), 900),
)

OPENTYPE_FEATURES = (
    "liga", "dlig", "smcp", "c2sc", "c2pc", "salt", "tnum", "onum", "lnum", "pnum",
    "case", "locl", "zero", "hist",
) + tuple(f"ss{i:02d}" for i in range(1, 21))

FLAG_BITS = 32


def font_weight(style: Optional[str]) -> int:
    style = style or ""
    for keywords, weight in WEIGHT_KEYWORDS:
        if any(k in style for k in keywords):
            return weight
    return 400


def decode_opentype_flags(flags: Union[int, Mapping[str, int], None]) -> Dict[str, bool]:
    """Decode a feature bitmask (or a REST ``{"LIGA": 1}`` map) into feature booleans.

    Bitmasks are read as 32-bit integers: ss19 and ss20 sit on bits 32 and 33
    and always decode as off.
    """
    if isinstance(flags, Mapping):
        enabled = {str(tag).lower() for tag, value in flags.items() if value}
        return {name: name in enabled for name in OPENTYPE_FEATURES}

    mask = (flags or 0) & ((1 << FLAG_BITS) - 1)
    return {name: bit < FLAG_BITS and bool(mask & (1 << bit)) for bit, name in enumerate(OPENTYPE_FEATURES)}


def _num_str(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def line_height_css(line_height: Optional[LineHeight]) -> str:
    if line_height is None or line_height.unit == "AUTO" or line_height.value is None:
        return "auto"
    suffix = "px" if line_height.unit == "PIXELS" else "%"
    return f"{_num_str(line_height.value)}{suffix}"


def letter_spacing_css(letter_spacing: Optional[LetterSpacing]) -> str:
    if letter_spacing is None:
        return "0px"
    suffix = "px" if letter_spacing.unit == "PIXELS" else "%"
    return f"{_num_str(letter_spacing.value)}{suffix}"


def line_height_px(line_height: Optional[LineHeight], font_size: float) -> float:
    if line_height is None or line_height.value is None or line_height.unit == "AUTO":
        return font_size * AUTO_LINE_HEIGHT
    if line_height.unit == "PERCENT":
        return line_height.value / 100 * font_size
    return line_height.value


def font_descriptor(text: TextCapability, snapshot: HostSnapshot) -> FontDescriptor:
    weight = font_weight(text.font_style)
    size = f"{_num_str(text.font_size)}px" if text.font_size is not None else f"{DEFAULT_FONT_SIZE}px"
    return FontDescriptor(
        family=text.font_family,
        size=text.font_size,
        weight=weight,
        style=text.font_style,
        line_height=UnitValue(value=text.line_height.value, unit=text.line_height.unit) if text.line_height else None,
        letter_spacing=UnitValue(value=text.letter_spacing.value, unit=text.letter_spacing.unit)
        if text.letter_spacing
        else None,
        token=snapshot.style_name(text.text_style_id),
        fallback=FontFallback(
            family=text.font_family,
            size=size,
            weight=weight,
            style=text.font_style,
            line_height=line_height_css(text.line_height),
            letter_spacing=letter_spacing_css(text.letter_spacing),
        ),
    )


def font_stack(text: TextCapability) -> FontStack:
    return FontStack(
        primary=FontDefinition(
            family=text.font_family or "inherit",
            weight=font_weight(text.font_style or "Regular"),
            style=text.font_style or "Regular",
            feature_settings=decode_opentype_flags(text.opentype_flags),
        ),
        fallbacks=[FontDefinition(family="system-ui"), FontDefinition(family="Arial")],
        system_fallback=SYSTEM_FALLBACK,
    )


def extract_typography(node: SceneNode, snapshot: HostSnapshot) -> Optional[Typography]:
    text = node.text
    if text is None:
        return None

    text_color = text_color_token = None
    first_fill = node.fills[0] if node.fills else None
    if first_fill is not None and first_fill.type == "SOLID" and first_fill.visible:
        text_color = format_rgba(first_fill.color)
        text_color_token = snapshot.style_name(first_fill.style_id)

    alignment = None
    if text.text_align_horizontal or text.text_align_vertical:
        alignment = TextAlignment(horizontal=text.text_align_horizontal or "LEFT", vertical=text.text_align_vertical)

    font_size = text.font_size or DEFAULT_FONT_SIZE
    line_height = line_height_px(text.line_height, font_size)
    line_boxes = build_line_boxes(
        text.characters, node.width or 0, font_size, line_height, text.text_align_horizontal or "LEFT"
    )

    shadows = [
        TextShadow(
            offset_x=e.offset[0] if e.offset else 0,
            offset_y=e.offset[1] if e.offset else 0,
            blur_radius=e.radius or 0,
            color=format_rgba(e.color),
        )
        for e in node.effects
        if e.type == "DROP_SHADOW" and e.visible
    ]

    text_stroke = None
    if node.strokes:
        text_stroke = TextStroke(width=node.stroke_weight or 0, color=format_rgba(node.strokes[0].color))

    return Typography(
        font=font_descriptor(text, snapshot),
        text_style_id=text.text_style_id if snapshot.style_name(text.text_style_id) else None,
        text_content=text.characters,
        text_color=text_color,
        text_color_token=text_color_token,
        text_color_fallback=text_color,
        text_case=text.text_case,
        text_decoration=text.text_decoration,
        text_transform=text.text_transform,
        text_auto_resize=text.text_auto_resize,
        text_truncation=text.text_truncation,
        alignment=alignment,
        paragraph_spacing=text.paragraph_spacing,
        paragraph_indent=text.paragraph_indent,
        list_spacing=text.list_spacing,
        line_indent=text.line_indent,
        open_type_features=decode_opentype_flags(text.opentype_flags) if text.opentype_flags is not None else None,
        font_stack=font_stack(text),
        text_metrics=measure_text(text.characters, font_size),
        line_boxes=line_boxes,
        character_metrics=character_metrics(text.characters, font_size),
        first_line_offset=line_boxes[0].y if line_boxes else 0,
        last_line_offset=line_boxes[-1].y + line_boxes[-1].height if line_boxes else 0,
        text_shadow=shadows or None,
        text_stroke=text_stroke,
        font_loading_state=snapshot.font_state(text.font_family, text.font_style),
    )
