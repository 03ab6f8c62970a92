"""
Component name registries.

A registry supplies the display names of the components ("nodes") a project
ships. Titles may use "<display name> Node" as their scope, so the validator
asks the registry for the current names every time it checks such a scope.
"""
# [CTX:PBI-1:1-6:REGISTRY]

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from .config import LintConfig

logger = logging.getLogger(__name__)


class ComponentRegistry(ABC):
    """
    Abstract base class for component name providers.

    Implementations must be free of side effects visible to the validator;
    they may re-read their source on every call.
    """

    @abstractmethod
    def display_names(self) -> list[str]:
        """
        Current component display names, in registry order.

        Returns:
            Display names such as ["HTTP Request", "Slack"]
        """
        pass


class StaticComponentRegistry(ComponentRegistry):
    """Registry backed by a fixed list of names."""

    def __init__(self, names: Iterable[str] = ()):
        self._names = list(names)

    def display_names(self) -> list[str]:
        return list(self._names)


class NodeDefinitionRegistry(ComponentRegistry):
    """
    Registry that reads node definition files from a directory.

    Every ``*.node.json`` file below ``root`` contributes its ``displayName``.
    Files are visited in sorted path order and rescanned on each call.
    """

    PATTERN = "*.node.json"

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def display_names(self) -> list[str]:
        if not self.root.is_dir():
            logger.warning("Node definitions directory not found: %s", self.root)
            return []

        names = []
        for path in sorted(self.root.rglob(self.PATTERN)):
            definition = json.loads(path.read_text(encoding="utf-8"))
            name = definition.get("displayName") if isinstance(definition, dict) else None
            if not isinstance(name, str) or not name:
                logger.debug("Skipping %s: no displayName", path)
                continue
            names.append(name)

        return names


def build_registry(config: LintConfig) -> ComponentRegistry:
    """Choose the registry described by a configuration."""
    if config.node_definitions_dir:
        return NodeDefinitionRegistry(config.node_definitions_dir)
    return StaticComponentRegistry(config.node_names)
