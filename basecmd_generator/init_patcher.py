"""
Module registration in the shared application init file.

Generated modules are wired into ``app/init.go`` by inserting an import line
before the ``// MODULE_IMPORT_MARKER`` comment and a registration line before
the ``// MODULE_INITIALIZER_MARKER`` comment. Destroying a module removes
exactly those lines again.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment

from basecmd_generator.codegen import render_template
from basecmd_generator.constants import DefaultConfig, GoImports, Markers, TemplateNames
from basecmd_generator.domain.naming import NamingConvention
from basecmd_generator.exceptions import InitFilePatchError

logger = logging.getLogger(__name__)


class ModuleRegistry(ABC):
    """Where generated modules get registered with the application."""

    @abstractmethod
    def insert_module(self, naming: NamingConvention) -> bool:
        """Register a module. Returns True if anything changed."""

    @abstractmethod
    def remove_module(self, naming: NamingConvention) -> bool:
        """Unregister a module. Returns True if anything changed."""


class MarkerInitFilePatcher(ModuleRegistry):
    """
    Text-splicing registry driven by marker comments.

    The file is read whole, edited in memory and written back whole. Two
    concurrent invocations on the same file are not supported.

    Args:
        init_path: Path of the init file
        module_path: Go module path used in the import line
        env: Jinja2 environment used to create a missing init file
    """

    def __init__(
        self,
        init_path: Path,
        module_path: str = DefaultConfig.MODULE_PATH,
        env: Optional[Environment] = None,
    ):
        self.init_path = Path(init_path)
        self.module_path = module_path
        self.env = env

    def import_line(self, naming: NamingConvention) -> str:
        """Sentinel text of the import line, without indentation."""
        return f'"{self.module_path}/{GoImports.APP}/{naming.package_name}"'

    def initializer_line(self, naming: NamingConvention) -> str:
        """Sentinel text of the registration line, without indentation."""
        package = naming.package_name
        return f'modules["{package}"] = {package}.Init(deps)'

    def insert_module(self, naming: NamingConvention) -> bool:
        if not self.init_path.exists():
            self._create_init_file()

        lines = self._read_lines()
        changed = False
        changed |= self._insert_before_marker(lines, Markers.IMPORT, self.import_line(naming))
        changed |= self._insert_before_marker(lines, Markers.INITIALIZER, self.initializer_line(naming))

        if changed:
            self._write_lines(lines)
            logger.debug(f"Registered module '{naming.package_name}' in {self.init_path}")
        else:
            logger.debug(f"Module '{naming.package_name}' already registered in {self.init_path}")
        return changed

    def remove_module(self, naming: NamingConvention) -> bool:
        if not self.init_path.exists():
            logger.debug(f"{self.init_path} does not exist, nothing to unregister")
            return False

        sentinels = (self.import_line(naming), self.initializer_line(naming))
        lines = self._read_lines()
        kept = [line for line in lines if not any(sentinel in line for sentinel in sentinels)]
        if len(kept) == len(lines):
            return False

        self._write_lines(kept)
        logger.debug(f"Unregistered module '{naming.package_name}' from {self.init_path}")
        return True

    def is_registered(self, naming: NamingConvention) -> bool:
        if not self.init_path.exists():
            return False
        content = self.init_path.read_text(encoding="utf-8")
        return self.initializer_line(naming) in content

    def _insert_before_marker(self, lines: List[str], marker: str, text: str) -> bool:
        marker_index = None
        for index, line in enumerate(lines):
            if marker in line:
                marker_index = index
                break
        if marker_index is None:
            raise InitFilePatchError(
                f"Marker comment '{marker}' not found",
                init_file=self.init_path,
                marker=marker,
            )

        if any(text in line for line in lines):
            return False

        marker_line = lines[marker_index]
        indent = marker_line[:len(marker_line) - len(marker_line.lstrip())]
        newline = "\r\n" if marker_line.endswith("\r\n") else "\n"
        lines.insert(marker_index, f"{indent}{text}{newline}")
        return True

    def _create_init_file(self) -> None:
        if self.env is None:
            raise InitFilePatchError(
                "Init file does not exist and no template environment was given to create it",
                init_file=self.init_path,
            )
        content = render_template(self.env, TemplateNames.INIT, {"module_path": self.module_path})
        self.init_path.parent.mkdir(parents=True, exist_ok=True)
        self.init_path.write_text(content, encoding="utf-8")
        logger.info(f"Created {self.init_path}")

    def _read_lines(self) -> List[str]:
        try:
            with open(self.init_path, "r", encoding="utf-8", newline="") as f:
                return f.readlines()
        except OSError as e:
            raise InitFilePatchError(f"Could not read init file: {e}", init_file=self.init_path) from e

    def _write_lines(self, lines: List[str]) -> None:
        try:
            with open(self.init_path, "w", encoding="utf-8", newline="") as f:
                f.writelines(lines)
        except OSError as e:
            raise InitFilePatchError(f"Could not write init file: {e}", init_file=self.init_path) from e
