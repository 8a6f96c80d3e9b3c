"""
Tool loader.

Drives the registration pipeline: discovery, metadata resolution, validation,
registration and manifest bookkeeping.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from catalog_mcp.errors import MetadataValidationError
from catalog_mcp.tools.discovery import ToolDiscovery
from catalog_mcp.tools.manifest import ManifestBuilder
from catalog_mcp.tools.metadata import MetadataProvider
from catalog_mcp.tools.models import ManifestEntry
from catalog_mcp.tools.registrar import ToolRegistrar
from catalog_mcp.tools.validator import ToolValidator

logger = logging.getLogger(__name__)


class ToolLoader:
    """Loads discovered tools into the host surface."""

    def __init__(
        self,
        discovery: ToolDiscovery,
        registrar: ToolRegistrar,
        validator: Optional[ToolValidator] = None,
        metadata_provider: Optional[MetadataProvider] = None,
        manifest: Optional[ManifestBuilder] = None,
    ):
        """
        Initialize the loader.

        Args:
            discovery: Strategy yielding tool candidates
            registrar: Registrar binding tools to the host surface
            validator: Metadata validator, or None for the default one
            metadata_provider: Metadata provider, or None to use the default registry
            manifest: Manifest builder, or None to create a new one
        """
        self.discovery = discovery
        self.registrar = registrar
        self.validator = validator if validator is not None else ToolValidator()
        self.metadata_provider = metadata_provider if metadata_provider is not None else MetadataProvider()
        self.manifest = manifest if manifest is not None else ManifestBuilder()

    def register_all(self) -> int:
        """
        Register every discovered tool.

        Candidates without metadata or with invalid metadata are skipped.
        Registration errors are not caught and abort the pass.

        Returns:
            The number of tools registered
        """
        logger.debug("Starting tool registration process")
        processed = 0
        registered = 0

        for candidate, source in self.discovery.discover():
            processed += 1
            name = getattr(candidate, "__name__", source)
            logger.debug(f"Registering tool class {name}")

            metadata = self.metadata_provider.get_metadata(candidate)
            if metadata is None:
                logger.warning(f"No tool metadata found for {name} ({source})")
                continue

            try:
                self.validator.validate(metadata, source)
            except MetadataValidationError as e:
                logger.warning(f"Tool validation failed for {name}: {e}")
                continue

            self.registrar.register(candidate, metadata)
            self.manifest.add(metadata)
            registered += 1
            logger.debug(f"Successfully registered tool {metadata.name}")

        logger.info(f"Processed {processed} tool candidates, registered {registered} tools successfully")
        return registered

    @property
    def manifest_entries(self) -> List[ManifestEntry]:
        return self.manifest.entries

    def export_manifest(self, file_path: Union[str, Path]) -> bool:
        return self.manifest.export(file_path)
