from typing import List

from loguru import logger

from .blueprint import Diagnostic
from .scene import SceneNode


class Diagnostics:
    """Collects warnings raised while extracting a tree.

    Each entry is mirrored to the logger so a console run still shows what
    was skipped, but callers get the full list back with the blueprint.
    """

    def __init__(self):
        self._entries: List[Diagnostic] = []

    def warn(self, node: SceneNode, stage: str, message: str) -> None:
        self._add(node.id, node.name, stage, "warning", message)
        logger.warning(f"[{stage}] {node.name} ({node.id}): {message}")

    def skip(self, node: SceneNode, stage: str, message: str) -> None:
        self._add(node.id, node.name, stage, "info", message)
        logger.debug(f"[{stage}] {node.name} ({node.id}): {message}")

    def record(self, node_id: str, node_name: str, stage: str, message: str, level: str = "warning") -> None:
        self._add(node_id, node_name, stage, level, message)
        if level == "warning":
            logger.warning(f"[{stage}] {node_name} ({node_id}): {message}")
        else:
            logger.debug(f"[{stage}] {node_name} ({node_id}): {message}")

    def extend(self, entries: List[Diagnostic]) -> None:
        self._entries.extend(entries)

    def _add(self, node_id: str, node_name: str, stage: str, level: str, message: str) -> None:
        self._entries.append(
            Diagnostic(node_id=node_id, node_name=node_name, stage=stage, level=level, message=message)
        )

    @property
    def entries(self) -> List[Diagnostic]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)
