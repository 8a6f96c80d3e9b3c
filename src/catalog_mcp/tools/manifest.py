"""
Tool manifest.

The manifest is an introspectable summary of the registered tools which can be
exported as JSON for documentation and tooling.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from catalog_mcp.tools.models import ManifestEntry, ToolMetadata
from catalog_mcp.tools.schema import param_names

logger = logging.getLogger(__name__)


class ManifestBuilder:
    """Accumulates manifest entries during a registration pass."""

    def __init__(self):
        self._entries: List[ManifestEntry] = []

    def add(self, metadata: ToolMetadata) -> ManifestEntry:
        """
        Add an entry derived from validated metadata.

        Args:
            metadata: The tool's metadata

        Returns:
            The new manifest entry
        """
        entry = ManifestEntry(
            name=metadata.name,
            description=metadata.description,
            params=param_names(metadata.params_schema),
        )
        self._entries.append(entry)
        return entry

    @property
    def entries(self) -> List[ManifestEntry]:
        return list(self._entries)

    def to_list(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    def to_json(self) -> str:
        return json.dumps(self.to_list(), indent=2)

    def export(self, file_path: Union[str, Path]) -> bool:
        """
        Write the manifest to a file as pretty-printed JSON.

        Args:
            file_path: Destination path

        Returns:
            True if successful, False otherwise
        """
        logger.debug(f"Exporting tools manifest to {file_path}")
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(self.to_json())
        except OSError as e:
            logger.error(f"Failed to export tools manifest to {file_path}: {e}")
            return False

        logger.info(f"Tools manifest exported to {file_path} with {len(self._entries)} tools")
        return True

    @staticmethod
    def load(file_path: Union[str, Path]) -> List[ManifestEntry]:
        """Read a previously exported manifest."""
        with open(file_path, "r", encoding="utf-8") as f:
            return [ManifestEntry.from_dict(item) for item in json.load(f)]

    def __len__(self) -> int:
        return len(self._entries)
