import asyncio
from typing import Any, Dict, Optional, Tuple

import requests
from loguru import logger

from .config import Settings
from .exceptions import BlueprintError, ExportError, HostLookupError
from .host import ComponentInfo, HostResult, StyleInfo, parse_component_registry, parse_style_registry
from .scene import SceneNode


def figma_api_get(path: str, settings: Settings, params=None):
    headers = {"X-Figma-Token": settings.require_api_key()}
    url = f"{settings.figma_api_base}{path}"
    res = requests.get(url, headers=headers, params=params, timeout=settings.host_timeout)
    res.raise_for_status()
    return res.json()


def get_node_image_url(fileKey: str, nodeId: str, settings: Settings, format="png"):
    """Get a Figma-hosted image URL for a node (expires in ~5 mins)."""
    params = {"ids": nodeId, "format": format}
    result = figma_api_get(f"/images/{fileKey}", settings, params=params)
    if result.get("err"):
        raise ExportError("export", nodeId, str(result["err"]))
    return (result.get("images") or {}).get(nodeId)


def normalize_node_id(nodeId: str) -> str:
    # URLs carry node ids as 12-34, the API wants 12:34
    return nodeId.replace("-", ":")


def fetch_document(
    fileKey: str, settings: Settings, nodeId: Optional[str] = None, depth: Optional[int] = None
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Fetch a whole file or one node.

    Returns ``(document, registries)`` where ``registries`` holds the raw
    ``styles`` / ``components`` / ``componentSets`` maps from the response.
    """
    if nodeId:
        nodeId = normalize_node_id(nodeId)
        params = {"ids": nodeId}
        if depth:
            params["depth"] = depth
        raw = figma_api_get(f"/files/{fileKey}/nodes", settings, params=params)
        nodes = raw.get("nodes") or {}
        if nodeId not in nodes or nodes[nodeId] is None:
            raise HostLookupError("fetch", nodeId, f"node not found in response. Available nodes: {list(nodes.keys())}")
        entry = nodes[nodeId]
        node = entry.get("document")
        if not node:
            raise HostLookupError("fetch", nodeId, "node found, but 'document' field is missing")
    else:
        params = {"depth": depth} if depth else None
        raw = figma_api_get(f"/files/{fileKey}", settings, params=params)
        entry = raw
        node = raw.get("document")
        if not node:
            raise HostLookupError("fetch", fileKey, "document field missing from file-level response")

    registries = {key: entry.get(key) or {} for key in ("styles", "components", "componentSets")}
    return node, registries


def download_svg(fileKey: str, nodeId: str, settings: Settings) -> str:
    url = get_node_image_url(fileKey, nodeId, settings, format="svg")
    if not url:
        raise ExportError("export", nodeId, "Figma returned no SVG URL")
    res = requests.get(url, timeout=settings.host_timeout)
    res.raise_for_status()
    return res.text


class FigmaRestHost:
    """Host port backed by the Figma REST API.

    Style and component names come from the registries returned alongside
    the document, so only SVG export goes back over the network.
    """

    def __init__(self, file_key: str, settings: Settings, registries: Optional[Dict[str, Any]] = None):
        registries = registries or {}
        self.file_key = file_key
        self.settings = settings
        self.styles = parse_style_registry(registries.get("styles"))
        self.components = parse_component_registry(registries.get("components"), registries.get("componentSets"))

    async def get_style(self, style_id: str) -> HostResult[StyleInfo]:
        style = self.styles.get(style_id)
        if style is None:
            return HostResult.failure(f"style {style_id} is not in the file's style registry")
        return HostResult.success(style)

    async def get_main_component(self, node: SceneNode) -> HostResult[ComponentInfo]:
        component_id = node.component.main_component_id if node.component else None
        if not component_id:
            return HostResult.failure("instance has no componentId")
        component = self.components.get(component_id)
        if component is None:
            return HostResult.failure(f"component {component_id} is not in the file's component registry")
        return HostResult.success(component)

    async def export_svg(self, node: SceneNode) -> HostResult[str]:
        try:
            svg = await asyncio.to_thread(download_svg, self.file_key, node.id, self.settings)
        except (requests.RequestException, BlueprintError) as e:
            logger.debug(f"SVG export failed for {node.name} ({node.type_name}): {e}")
            return HostResult.failure(str(e))
        if not svg.strip():
            return HostResult.failure("empty SVG export")
        return HostResult.success(svg)

    async def load_font(self, family: str, style: str) -> HostResult[bool]:
        # REST responses carry no font binaries; report the font as not loaded
        return HostResult.success(False)
