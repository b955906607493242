"""Design-token mapping, categorization and token linting."""

from typing import Dict, List, Optional

from .blueprint import LintWarning, Tokens
from .colors import format_rgba
from .scene import NodeKind, SceneNode
from .snapshot import HostSnapshot

# Ordered: a key is filed under the first category whose substring it contains.
TOKEN_CATEGORIES = (
    ("colors", ("color", "fill", "stroke")),
    ("typography", ("font", "text")),
    ("spacing", ("spacing", "padding", "margin")),
    ("sizing", ("size", "width", "height")),
    ("shadows", ("shadow", "effect")),
    ("borders", ("border",)),
    ("radii", ("radius",)),
)

# Role in token_mapping -> (category, slot) seeded in design_tokens.
SEEDED_SLOTS = (
    ("background", "colors", "backgroundPrimary"),
    ("border", "colors", "borderPrimary"),
    ("text", "typography", "bodyText"),
    ("effect", "shadows", "dropShadow"),
)


def classify_token_key(key: str) -> Optional[str]:
    for category, needles in TOKEN_CATEGORIES:
        if any(needle in key for needle in needles):
            return category
    return None


def token_mapping(node: SceneNode, snapshot: HostSnapshot) -> Dict[str, str]:
    """Style names by role; a later paint with a resolvable style wins within a role."""
    mapping = {}
    for role, paints in (("background", node.fills), ("border", node.strokes)):
        for paint in paints or ():
            name = snapshot.style_name(paint.style_id)
            if name:
                mapping[role] = name

    text_style = node.text.text_style_id if node.text else None
    name = snapshot.style_name(text_style)
    if name:
        mapping["text"] = name

    for effect in node.effects:
        name = snapshot.style_name(effect.style_id)
        if name:
            mapping["effect"] = name
    return mapping


def categorize_tokens(mapping: Dict[str, str]) -> Dict[str, Dict[str, str]]:
    categories: Dict[str, Dict[str, str]] = {}
    for role, category, slot in SEEDED_SLOTS:
        if role in mapping:
            categories.setdefault(category, {})[slot] = mapping[role]
    for key, value in mapping.items():
        category = classify_token_key(key)
        if category is not None:
            categories.setdefault(category, {})[key] = value
    return categories


def non_token_values(node: SceneNode) -> List[str]:
    values = []
    values.extend("fill" for p in node.fills or () if not p.style_id)
    values.extend("stroke" for p in node.strokes or () if not p.style_id)
    values.extend("effect" for e in node.effects if not e.style_id)
    if node.text is None or node.text.text_style_id is None:
        values.append("text")
    return values


def fallback_values(node: SceneNode) -> Dict[str, str]:
    fallbacks = {}
    if node.fills:
        fill = node.fills[0]
        if fill.type == "SOLID":
            key = "textColor" if node.kind is NodeKind.TEXT else "backgroundColor"
            fallbacks[key] = format_rgba(fill.color)
    if node.strokes and node.strokes[0].type == "SOLID":
        fallbacks["borderColor"] = format_rgba(node.strokes[0].color)
    if node.text is not None:
        if node.text.font_size:
            size = node.text.font_size
            fallbacks["fontSize"] = f"{int(size) if float(size).is_integer() else size}px"
        if node.text.font_family:
            fallbacks["fontFamily"] = node.text.font_family
    return fallbacks


def extract_tokens(node: SceneNode, snapshot: HostSnapshot) -> Tokens:
    mapping = token_mapping(node, snapshot)
    missing = non_token_values(node)
    return Tokens(
        token_mapping=mapping,
        design_tokens=categorize_tokens(mapping),
        fallback_values=fallback_values(node),
        non_token_values=missing,
        linting_warnings=[
            LintWarning(message=f"No design token for {value}", element=node.name, property=value)
            for value in missing
        ],
    )
