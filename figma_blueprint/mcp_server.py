"""FastMCP server setup and tool registration."""
from fastmcp import FastMCP

from .config import load_settings
from .logging_config import setup_logging

mcp = FastMCP("figma-blueprint")


def create_server():
    """Create the MCP server with every tool registered."""
    # tools register themselves on import via @mcp.tool
    from . import figma_tools  # noqa: F401

    return mcp


def run_server():
    """Run the MCP server."""
    settings = load_settings()
    setup_logging(level=settings.log_level, force=True)

    server = create_server()
    server.run(show_banner=False)
