import re
from typing import Optional

from .blueprint import GroupMetadata, Semantic
from .scene import COMPONENT_KINDS, NodeKind, SceneNode

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9_\- ]")
_WHITESPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")

SECTION_KEYWORDS = (
    ("nav", "navigation"),
    ("header", "header"),
    ("footer", "footer"),
    ("sidebar", "sidebar"),
    ("modal", "modal"),
    ("card", "card"),
    ("form", "form"),
    ("list", "list"),
    ("table", "table"),
)

GROUP_TYPES = frozenset({
    "header", "footer", "sidebar", "modal", "card", "form", "list", "other", "navigation", "content", "toolbar",
})

ROLE_BY_KIND = {
    NodeKind.TEXT: "text",
    NodeKind.GROUP: "group",
    NodeKind.FRAME: "container",
    NodeKind.INSTANCE: "instance",
    NodeKind.COMPONENT: "component",
    NodeKind.COMPONENT_SET: "variant-group",
}


def clean_name(name: str) -> str:
    return _UNSAFE_CHARS_RE.sub("", name).strip()


def normalize_name(cleaned: str) -> str:
    return _DASHES_RE.sub("-", _WHITESPACE_RE.sub("-", cleaned)).lower()


def section_type(node: SceneNode, name_lower: str) -> Optional[str]:
    for keyword, section in SECTION_KEYWORDS:
        if keyword in name_lower:
            return section
    if node.kind is NodeKind.GROUP:
        return "other"
    return None


def role_of(node: SceneNode, name_lower: str) -> Optional[str]:
    if "button" in name_lower and node.kind in (NodeKind.FRAME, NodeKind.COMPONENT, NodeKind.INSTANCE):
        return "button"
    return ROLE_BY_KIND.get(node.kind)


def suggested_component_type(node: SceneNode, section: Optional[str]) -> str:
    if section:
        return section
    if node.kind is NodeKind.TEXT:
        return "text"
    if node.kind is NodeKind.GROUP:
        return "container"
    if node.kind is NodeKind.FRAME:
        return "layout"
    return "component"


def theme_of(name_lower: str) -> str:
    if "dark" in name_lower:
        return "dark"
    if "light" in name_lower:
        return "light"
    return "neutral"


def extract_semantic(node: SceneNode) -> Semantic:
    cleaned = clean_name(node.name)
    name_lower = cleaned.lower()
    section = section_type(node, name_lower)
    triggers = [r.trigger_type for r in node.reactions]
    auto_layout = node.auto_layout is not None and node.auto_layout.enabled

    group_metadata = None
    if node.kind in (NodeKind.GROUP, NodeKind.FRAME):
        group_metadata = GroupMetadata(
            type=section if section in GROUP_TYPES else "other",
            purpose=section or "group",
            is_interactive=node.has_reactions,
            children_count=len(node.children),
            layout_type="auto" if auto_layout else "manual",
            responsive_behavior="auto-layout" if auto_layout else "none",
        )

    if node.has_reactions:
        importance = "high"
    elif node.kind is NodeKind.COMPONENT:
        importance = "medium"
    else:
        importance = "low"

    component_type = section
    if component_type is None and node.kind in (NodeKind.COMPONENT, NodeKind.COMPONENT_SET):
        component_type = "other"

    return Semantic(
        clean_name=cleaned,
        normalized_name=normalize_name(cleaned),
        section_type=section,
        purpose=section,
        role=role_of(node, name_lower),
        component_type=component_type,
        is_interactive=node.has_reactions,
        is_reusable=node.kind in COMPONENT_KINDS,
        is_responsive=auto_layout,
        is_container=len(node.children) > 0,
        has_interactions=node.has_reactions,
        has_hover_state="ON_HOVER" in triggers,
        has_click_handler="ON_CLICK" in triggers,
        theme=theme_of(node.name.lower()),
        importance=importance,
        suggested_component_type=suggested_component_type(node, section),
        design_intent=f"{section or 'component'} with {len(node.children)} children",
        group_metadata=group_metadata,
    )
