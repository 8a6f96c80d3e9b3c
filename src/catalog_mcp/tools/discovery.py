"""
Tool discovery strategies.

A discovery strategy yields (candidate, source) pairs for the loader. Static
discovery walks modules that are already imported; dynamic discovery imports
tool files from a directory.
"""

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, Iterator, List, Optional, Protocol, Tuple, Union

from catalog_mcp.tools.models import is_tool_candidate

logger = logging.getLogger(__name__)

Candidate = Tuple[Any, str]

DEFAULT_TOOL_FILE_PATTERN = "*_tool.py"


class ToolDiscovery(Protocol):
    def discover(self) -> Iterable[Candidate]:
        ...


def _exported_members(module: ModuleType) -> List[Any]:
    names = getattr(module, "__all__", None)
    if names is None:
        names = [name for name in vars(module) if not name.startswith("_")]
    return [getattr(module, name) for name in names if hasattr(module, name)]


class ModuleToolDiscovery:
    """Enumerate tool classes exposed by already-imported modules."""

    def __init__(self, *modules: ModuleType):
        self.modules = modules

    def discover(self) -> Iterator[Candidate]:
        seen = set()
        for module in self.modules:
            for member in _exported_members(module):
                if not is_tool_candidate(member) or id(member) in seen:
                    continue
                seen.add(id(member))
                yield member, f"{module.__name__}.{member.__name__}"


class DirectoryToolDiscovery:
    """Import tool files from a directory and take the first tool class in each."""

    def __init__(self, directory: Union[str, Path], pattern: str = DEFAULT_TOOL_FILE_PATTERN):
        self.directory = Path(directory)
        self.pattern = pattern

    def discover(self) -> Iterator[Candidate]:
        if not self.directory.is_dir():
            logger.warning(f"Tools directory {self.directory} does not exist")
            return

        for file_path in sorted(self.directory.glob(self.pattern)):
            candidate = self.load_tool(file_path)
            if candidate is None:
                logger.warning(f"No valid tool class found in {file_path}")
                continue
            yield candidate, str(file_path)

    def load_tool(self, file_path: Path) -> Optional[Any]:
        """
        Import a tool file and return its first exported tool class.

        Args:
            file_path: Path to the tool module

        Returns:
            The tool class, or None if the file could not be imported or holds no tool
        """
        module_name = f"catalog_mcp_tools_{file_path.stem}"
        logger.debug(f"Loading tool module from {file_path}")
        try:
            spec = importlib.util.spec_from_file_location(module_name, file_path)
            if spec is None or spec.loader is None:
                logger.error(f"Cannot create an import spec for {file_path}")
                return None
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(module_name, None)
            logger.error(f"Failed to load tool from {file_path}: {e}")
            return None

        for member in _exported_members(module):
            if is_tool_candidate(member) and getattr(member, "__module__", None) == module_name:
                logger.debug(f"Successfully loaded tool class from {file_path}")
                return member
        return None
