import math
import re
from typing import Optional, Tuple

from .scene import Color

TRANSPARENT = "rgba(0, 0, 0, 0)"

_RGBA_RE = re.compile(
    r"^\s*rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([-+0-9.eE]+)\s*)?\)\s*$"
)


def channel(value: float) -> int:
    """0..1 float to an 8-bit channel, rounding halves up like JavaScript's Math.round."""
    return int(math.floor(value * 255 + 0.5))


def format_alpha(alpha: float) -> str:
    if float(alpha).is_integer():
        return str(int(alpha))
    return repr(float(alpha))


def format_rgba(color: Optional[Color]) -> str:
    """Serialize a color as ``rgba(r, g, b, a)``; a missing color is fully transparent."""
    if color is None:
        return TRANSPARENT
    return f"rgba({channel(color.r)}, {channel(color.g)}, {channel(color.b)}, {format_alpha(color.a)})"


def format_hex(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(channel(color.r), channel(color.g), channel(color.b))


def parse_rgba(value: str) -> Tuple[int, int, int, float]:
    """Decode an ``rgba(...)`` string back into ``(r, g, b, a)``.

    Raises ValueError for anything that is not an rgb/rgba functional color.
    """
    match = _RGBA_RE.match(value or "")
    if not match:
        raise ValueError(f"not an rgba() color: {value!r}")
    r, g, b, a = match.groups()
    return int(r), int(g), int(b), float(a) if a is not None else 1.0
