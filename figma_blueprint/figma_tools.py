import asyncio

import requests
from fastmcp.utilities.types import Image
from loguru import logger

from .config import load_settings
from .fidelity import js_round, validate_node, validate_tree
from .figma_api import FigmaRestHost, fetch_document, get_node_image_url, normalize_node_id
from .mcp_server import mcp
from .scene import decode_node
from .transform import extract_blueprint


async def _extract(fileKey: str, nodeId: str = None, depth: int = None):
    settings = load_settings()
    raw, registries = await asyncio.to_thread(fetch_document, fileKey, settings, nodeId, depth)
    root = decode_node(raw)
    host = FigmaRestHost(fileKey, settings, registries)
    return root, await extract_blueprint(root, host, settings)


@mcp.tool(
    name="get_figma_blueprint",
    description="""
    Fetches a Figma file or node and extracts a blueprint tree: visuals, typography, layout,
    geometry, semantics, responsive hints, interactions, design tokens and component relationships.

    Use this tool when you want structured design data of a UI for code generation.
    Set validate=true to include a fidelity score for the root node.
    """
)
async def get_figma_blueprint(fileKey: str, nodeId: str = None, depth: int = None, validate: bool = False):
    try:
        root, result = await _extract(fileKey, nodeId, depth)

        response = {
            "instructions": "Use this blueprint to recreate the UI. "
                            "Call `download_figma_image` to view the visual reference.",
            "design": result.blueprint.to_dict(),
            "diagnostics": [d.to_dict() for d in result.diagnostics],
        }
        if validate:
            response["fidelity"] = validate_node(root, result.blueprint).to_dict()
        return response

    except Exception as e:
        logger.warning(f"get_figma_blueprint failed for {fileKey}/{nodeId}: {e}")
        return {"error": f"Failed to process Figma data: {e}"}


@mcp.tool(
    name="validate_figma_blueprint",
    description="""
    Extracts the blueprint for a Figma node and scores how faithfully it reproduces the source
    (positioning, typography, visuals; 0-100 each), with improvement suggestions.
    """
)
async def validate_figma_blueprint(fileKey: str, nodeId: str):
    try:
        root, result = await _extract(fileKey, nodeId)
        reports = validate_tree(root, result.blueprint)
        pixel_perfect = sum(1 for r in reports if r.overall.pixel_perfect)

        return {
            "root": reports[0].to_dict(),
            "averageAccuracy": js_round(sum(r.overall.accuracy for r in reports) / len(reports)),
            "pixelPerfectCount": pixel_perfect,
            "totalNodes": len(reports),
            "diagnostics": len(result.diagnostics),
        }

    except Exception as e:
        logger.warning(f"validate_figma_blueprint failed for {fileKey}/{nodeId}: {e}")
        return {"error": f"Failed to validate Figma data: {e}"}


@mcp.tool(
    name="download_figma_image",
    description="""
    Downloads a design node from Figma and returns it as an image object for visual reference.
    """
)
def download_figma_image(fileKey: str, nodeId: str):
    try:
        settings = load_settings()
        nodeId = normalize_node_id(nodeId)
        image_url = get_node_image_url(fileKey, nodeId, settings)
        if not image_url:
            return {"error": f"Could not get image URL for nodeId {nodeId}"}

        image_response = requests.get(image_url, timeout=settings.host_timeout)
        image_response.raise_for_status()

        img = Image(data=image_response.content, format="png")
        return img.to_image_content()

    except Exception as e:
        return {"error": f"Failed to fetch or convert image: {e}"}
