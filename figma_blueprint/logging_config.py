import os
import sys

from loguru import logger

_logging_configured = False


def setup_logging(level=None, suppress_console=None, force=False):
    """
    Configures the global logger.

    Args:
        level: Logging level. If None, read FIGMA_BLUEPRINT_LOG_LEVEL (default INFO).
        suppress_console: If True, drop the stderr sink. If None, check
            FIGMA_BLUEPRINT_MACHINE_MODE (set when serving MCP over stdio).
        force: Reconfigure even if logging was already set up.
    """
    global _logging_configured

    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if level is None:
        level = os.getenv("FIGMA_BLUEPRINT_LOG_LEVEL", "INFO").upper()

    if suppress_console is None:
        suppress_console = os.getenv("FIGMA_BLUEPRINT_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True,
        )

