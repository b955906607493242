"""Host prefetch.

Every lookup the extractors need is resolved here, before the tree
transform runs, into a read-only :class:`HostSnapshot`. Lookups run one at a
time in tree order and each is bounded by ``Settings.host_timeout``.
"""

import asyncio
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Awaitable, Dict, Mapping, Optional, Tuple

from loguru import logger

from .config import Settings
from .diagnostics import Diagnostics
from .exceptions import HostError, HostTimeoutError
from .geometry import is_svg_exportable
from .host import ComponentInfo, HostResult, SceneHost, StyleInfo
from .scene import NodeKind, SceneNode, iter_nodes

FontKey = Tuple[str, str]


def _frozen(mapping: Optional[Mapping] = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class HostSnapshot:
    styles: Mapping[str, StyleInfo] = field(default_factory=_frozen)
    main_components: Mapping[str, ComponentInfo] = field(default_factory=_frozen)
    fonts: Mapping[FontKey, bool] = field(default_factory=_frozen)
    svgs: Mapping[str, str] = field(default_factory=_frozen)
    failures: Mapping[str, str] = field(default_factory=_frozen)

    def style_name(self, style_id: Optional[str]) -> Optional[str]:
        if not style_id:
            return None
        style = self.styles.get(style_id)
        return style.name if style else None

    def main_component(self, node_id: str) -> Optional[ComponentInfo]:
        return self.main_components.get(node_id)

    def font_state(self, family: Optional[str], style: Optional[str]) -> str:
        key = (family or "", style or "Regular")
        if key in self.fonts:
            return "loaded" if self.fonts[key] else "unloaded"
        if f"font:{key[0]} {key[1]}" in self.failures:
            return "error"
        return "unloaded"


EMPTY_SNAPSHOT = HostSnapshot()


def paint_style_ids(node: SceneNode):
    for paints in (node.fills or (), node.strokes or ()):
        for paint in paints:
            if paint.style_id:
                yield paint.style_id
    for effect in node.effects:
        if effect.style_id:
            yield effect.style_id
    yield from node.style_ids.values()


async def _bounded(operation: str, target: str, call: Awaitable[HostResult], timeout: float) -> HostResult:
    try:
        return await asyncio.wait_for(call, timeout)
    except asyncio.TimeoutError:
        return HostResult.failure(str(HostTimeoutError(operation, target, timeout)))
    except Exception as e:
        # a misbehaving host must not take the whole extraction down
        return HostResult.failure(str(HostError(operation, target, str(e))))


async def prefetch_snapshot(
    root: SceneNode,
    host: SceneHost,
    settings: Optional[Settings] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> HostSnapshot:
    settings = settings or Settings()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    timeout = settings.host_timeout

    styles: Dict[str, StyleInfo] = {}
    components: Dict[str, ComponentInfo] = {}
    fonts: Dict[FontKey, bool] = {}
    svgs: Dict[str, str] = {}
    failures: Dict[str, str] = {}

    for node in iter_nodes(root):
        for style_id in paint_style_ids(node):
            if style_id in styles or f"style:{style_id}" in failures:
                continue
            result = await _bounded("get_style", style_id, host.get_style(style_id), timeout)
            if result.ok:
                styles[style_id] = result.value
            else:
                failures[f"style:{style_id}"] = result.error
                diagnostics.warn(node, "host.get_style", result.error)

        if node.kind is NodeKind.INSTANCE:
            result = await _bounded("get_main_component", node.id, host.get_main_component(node), timeout)
            if result.ok and result.value is not None:
                components[node.id] = result.value
            else:
                failures[f"component:{node.id}"] = result.error or "no main component"
                diagnostics.warn(node, "host.get_main_component", failures[f"component:{node.id}"])

        if node.text is not None and node.text.font_family:
            key = (node.text.font_family, node.text.font_style or "Regular")
            failure_key = f"font:{key[0]} {key[1]}"
            if key not in fonts and failure_key not in failures:
                result = await _bounded("load_font", f"{key[0]} {key[1]}", host.load_font(*key), timeout)
                if result.ok:
                    fonts[key] = bool(result.value)
                else:
                    failures[failure_key] = result.error
                    diagnostics.warn(node, "host.load_font", result.error)

        if settings.export_svg and is_svg_exportable(node):
            result = await _bounded("export_svg", node.id, host.export_svg(node), timeout)
            if result.ok and result.value:
                svgs[node.id] = result.value
            else:
                failures[f"svg:{node.id}"] = result.error or "empty SVG export"
                diagnostics.skip(node, "host.export_svg", failures[f"svg:{node.id}"])

    logger.debug(
        f"Prefetched {len(styles)} styles, {len(components)} components, "
        f"{len(fonts)} fonts, {len(svgs)} SVGs ({len(failures)} failures)"
    )
    return HostSnapshot(
        styles=_frozen(styles),
        main_components=_frozen(components),
        fonts=_frozen(fonts),
        svgs=_frozen(svgs),
        failures=_frozen(failures),
    )
