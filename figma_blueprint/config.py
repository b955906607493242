import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .exceptions import ConfigError

DEFAULT_API_BASE = "https://api.figma.com/v1"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime settings, read from the environment (and a .env file)."""

    figma_api_key: Optional[str] = Field(None, description="Personal access token sent as X-Figma-Token")
    figma_api_base: str = Field(DEFAULT_API_BASE, description="Figma REST API root")
    host_timeout: float = Field(30.0, gt=0, description="Seconds allowed for one host call")
    export_svg: bool = Field(True, description="Request SVG exports for eligible nodes")
    log_level: str = Field("INFO", description="loguru level for the console sink")

    def require_api_key(self) -> str:
        if not self.figma_api_key:
            raise ConfigError("Missing FIGMA_API_KEY (set it in the environment or a .env file)")
        return self.figma_api_key


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)

    timeout_raw = os.getenv("FIGMA_HOST_TIMEOUT", "30")
    try:
        host_timeout = float(timeout_raw)
    except ValueError:
        raise ConfigError(f"FIGMA_HOST_TIMEOUT must be a number of seconds, got {timeout_raw!r}")

    return Settings(
        figma_api_key=os.getenv("FIGMA_API_KEY") or None,
        figma_api_base=os.getenv("FIGMA_API_BASE", DEFAULT_API_BASE).rstrip("/"),
        host_timeout=host_timeout,
        export_svg=_env_flag("FIGMA_EXPORT_SVG", True),
        log_level=os.getenv("FIGMA_BLUEPRINT_LOG_LEVEL", "INFO").upper(),
    )
