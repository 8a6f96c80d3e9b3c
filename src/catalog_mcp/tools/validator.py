"""
Tool metadata validation.
"""

import logging
from typing import Any, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from catalog_mcp.errors import MetadataValidationError
from catalog_mcp.tools.models import ToolMetadata
from catalog_mcp.tools.schema import is_introspectable

logger = logging.getLogger(__name__)


class RawToolMetadata(BaseModel):
    """Contract every tool's metadata must satisfy."""

    model_config = ConfigDict(str_strip_whitespace=True, arbitrary_types_allowed=True, extra="ignore")

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    params_schema: Optional[Any] = None
    max_batch_size: Optional[int] = Field(default=None, gt=0)


class ToolValidator:
    """Validates tool metadata before registration."""

    def validate(self, metadata: ToolMetadata, source: str = "") -> None:
        """
        Validate tool metadata.

        Args:
            metadata: The metadata to validate
            source: Where the tool was found, used in log and error messages

        Raises:
            MetadataValidationError: If the metadata is invalid
        """
        label = source or "<unknown source>"
        try:
            RawToolMetadata.model_validate(
                {
                    "name": getattr(metadata, "name", None),
                    "description": getattr(metadata, "description", None),
                    "params_schema": getattr(metadata, "params_schema", None),
                    "max_batch_size": getattr(metadata, "max_batch_size", None),
                }
            )
        except pydantic.ValidationError as e:
            errors = e.errors(include_url=False, include_context=False)
            logger.error(f"Invalid tool metadata in {label}: {errors}")
            raise MetadataValidationError(
                f"Tool metadata validation failed for {label}: "
                + "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in errors),
                details={"source": label, "errors": errors},
            ) from e

        if metadata.params_schema is not None and not is_introspectable(metadata.params_schema):
            logger.warning(
                f"Parameter shape for tool '{metadata.name}' in {label} is not introspectable; "
                "its manifest entry will list no params"
            )
