"""Figma scene-graph to blueprint extraction."""

from .blueprint import BlueprintNode, ExtractionResult, FidelityReport
from .config import Settings, load_settings
from .diagnostics import Diagnostics
from .exceptions import BlueprintError, ConfigError, ExportError, HostError, HostLookupError, HostTimeoutError
from .fidelity import run_benchmark, validate_node, validate_tree
from .host import HostResult, InMemoryHost, SceneHost
from .logging_config import setup_logging
from .scene import SceneNode, decode_node
from .snapshot import HostSnapshot, prefetch_snapshot
from .transform import extract_blueprint, transform_node_tree

__all__ = [
    "BlueprintError",
    "BlueprintNode",
    "ConfigError",
    "Diagnostics",
    "ExportError",
    "ExtractionResult",
    "FidelityReport",
    "HostError",
    "HostLookupError",
    "HostResult",
    "HostSnapshot",
    "HostTimeoutError",
    "InMemoryHost",
    "SceneHost",
    "SceneNode",
    "Settings",
    "decode_node",
    "extract_blueprint",
    "load_settings",
    "prefetch_snapshot",
    "run_benchmark",
    "setup_logging",
    "transform_node_tree",
    "validate_node",
    "validate_tree",
]
