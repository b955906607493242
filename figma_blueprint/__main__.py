import os

# stdout carries the MCP stdio protocol
os.environ.setdefault("FIGMA_BLUEPRINT_MACHINE_MODE", "1")

from .mcp_server import run_server  # noqa: E402


def main():
    run_server()


if __name__ == "__main__":
    main()
