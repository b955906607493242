"""Host port.

Everything the extractor needs from the design tool beyond the node tree
itself (style names, main components, fonts, SVG exports) goes through a
:class:`SceneHost`. Lookups are async and return a :class:`HostResult`
instead of raising, so an unavailable style is just another value.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Mapping, Optional, Protocol, Tuple, TypeVar

from .scene import SceneNode

T = TypeVar("T")


@dataclass(frozen=True)
class HostResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "HostResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "HostResult[T]":
        return cls(error=error)


@dataclass(frozen=True)
class StyleInfo:
    id: str
    name: str
    style_type: Optional[str] = None
    key: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class ComponentInfo:
    id: str
    name: str
    type: str = "COMPONENT"
    key: Optional[str] = None
    description: Optional[str] = None
    component_set_id: Optional[str] = None


class SceneHost(Protocol):
    async def get_style(self, style_id: str) -> HostResult[StyleInfo]:
        ...

    async def get_main_component(self, node: SceneNode) -> HostResult[ComponentInfo]:
        ...

    async def export_svg(self, node: SceneNode) -> HostResult[str]:
        ...

    async def load_font(self, family: str, style: str) -> HostResult[bool]:
        ...


def parse_style_registry(raw: Optional[Mapping[str, Any]]) -> dict:
    """Figma file ``styles`` map -> ``{style_id: StyleInfo}``."""
    registry = {}
    for style_id, meta in (raw or {}).items():
        if isinstance(meta, Mapping):
            registry[style_id] = StyleInfo(
                id=style_id,
                name=str(meta.get("name") or ""),
                style_type=meta.get("styleType") or meta.get("type"),
                key=meta.get("key"),
                description=meta.get("description"),
            )
    return registry


def parse_component_registry(raw: Optional[Mapping[str, Any]], component_sets: Optional[Mapping[str, Any]] = None) -> dict:
    """Figma file ``components`` (and ``componentSets``) maps -> ``{id: ComponentInfo}``."""
    registry = {}
    for kind, entries in (("COMPONENT", raw), ("COMPONENT_SET", component_sets)):
        for component_id, meta in (entries or {}).items():
            if isinstance(meta, Mapping):
                registry[component_id] = ComponentInfo(
                    id=component_id,
                    name=str(meta.get("name") or ""),
                    type=kind,
                    key=meta.get("key"),
                    description=meta.get("description"),
                    component_set_id=meta.get("componentSetId"),
                )
    return registry


class InMemoryHost:
    """Dictionary-backed host, used for tests and for offline JSON exports."""

    def __init__(
        self,
        styles: Optional[Mapping[str, StyleInfo]] = None,
        components: Optional[Mapping[str, ComponentInfo]] = None,
        svgs: Optional[Mapping[str, str]] = None,
        fonts: Optional[Iterable[Tuple[str, str]]] = None,
    ):
        self.styles = dict(styles or {})
        self.components = dict(components or {})
        self.svgs = dict(svgs or {})
        # None means every font is available
        self.fonts = set(fonts) if fonts is not None else None
        self.calls = []

    @classmethod
    def from_file(cls, file_json: Mapping[str, Any], **kwargs) -> "InMemoryHost":
        return cls(
            styles=parse_style_registry(file_json.get("styles")),
            components=parse_component_registry(file_json.get("components"), file_json.get("componentSets")),
            **kwargs,
        )

    async def get_style(self, style_id: str) -> HostResult[StyleInfo]:
        self.calls.append(("get_style", style_id))
        style = self.styles.get(style_id)
        if style is None:
            return HostResult.failure(f"style {style_id} not found")
        return HostResult.success(style)

    async def get_main_component(self, node: SceneNode) -> HostResult[ComponentInfo]:
        self.calls.append(("get_main_component", node.id))
        component_id = node.component.main_component_id if node.component else None
        if not component_id:
            return HostResult.failure("instance has no main component id")
        component = self.components.get(component_id)
        if component is None:
            return HostResult.failure(f"component {component_id} not found")
        return HostResult.success(component)

    async def export_svg(self, node: SceneNode) -> HostResult[str]:
        self.calls.append(("export_svg", node.id))
        svg = self.svgs.get(node.id)
        if svg is None:
            return HostResult.failure(f"no SVG export for {node.id}")
        return HostResult.success(svg)

    async def load_font(self, family: str, style: str) -> HostResult[bool]:
        self.calls.append(("load_font", f"{family} {style}"))
        if self.fonts is not None and (family, style) not in self.fonts:
            return HostResult.failure(f"font {family} {style} is not available")
        return HostResult.success(True)
