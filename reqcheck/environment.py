"""
Environment readers for reqcheck.

Predicates never touch process state directly; they go through an
EnvironmentReader so a fake reader can stand in during tests.

- ProcessEnvironment reads installed Python distributions, imported
  modules and environment variables of the running process
- StaticEnvironment answers from plain mappings
"""

import importlib.util
import logging
import os
import platform
import sys
from importlib import metadata
from typing import Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class EnvironmentReader:
    """Base class for reading the environment requirements are checked against."""

    def is_extension_loaded(self, name: str) -> bool:
        """Whether the named extension is available."""
        raise NotImplementedError

    def get_extension_version(self, name: str) -> Optional[str]:
        """Reported version of the named extension, or None."""
        raise NotImplementedError

    def get_ini_value(self, name: str) -> Optional[str]:
        """Raw value of a configuration option, or None when unset."""
        raise NotImplementedError

    def get_server_info(self) -> str:
        """Short description of the server software, may be empty."""
        raise NotImplementedError


class ProcessEnvironment(EnvironmentReader):
    """
    Reads the environment of the running interpreter.

    Extensions are installed distributions or importable modules; the
    interpreter itself is available as the ``python`` extension. Ini
    options come from explicit settings first, then environment variables.
    """

    INTERPRETER_NAME = "python"

    def __init__(self, settings: Optional[Mapping[str, object]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        """
        Args:
            settings: Explicit option values, take precedence over environ
            environ: Environment variables (defaults to os.environ)
        """
        self.settings: Dict[str, object] = dict(settings or {})
        self.environ = environ if environ is not None else os.environ

    def is_extension_loaded(self, name: str) -> bool:
        if name.lower() == self.INTERPRETER_NAME:
            return True
        if self._distribution_version(name) is not None:
            return True
        try:
            return importlib.util.find_spec(name) is not None
        except (ImportError, ValueError):
            logger.debug(f"Module spec lookup failed for {name}")
            return False

    def get_extension_version(self, name: str) -> Optional[str]:
        if name.lower() == self.INTERPRETER_NAME:
            return platform.python_version()
        version = self._distribution_version(name)
        if version:
            return version
        module = sys.modules.get(name)
        module_version = getattr(module, "__version__", None)
        return str(module_version) if module_version else None

    def get_ini_value(self, name: str) -> Optional[str]:
        if name in self.settings:
            value = self.settings[name]
            return self._stringify(value)
        if name in self.environ:
            return self.environ[name]
        env_name = name.upper().replace(".", "_").replace("-", "_")
        value = self.environ.get(env_name)
        if value is None:
            logger.debug(f"Option {name} is not set")
        return value

    def get_server_info(self) -> str:
        return self.environ.get("SERVER_SOFTWARE", "")

    @staticmethod
    def _distribution_version(name: str) -> Optional[str]:
        try:
            return metadata.version(name)
        except metadata.PackageNotFoundError:
            return None

    @staticmethod
    def _stringify(value: object) -> Optional[str]:
        # YAML settings may carry real booleans or numbers
        if value is None:
            return None
        if isinstance(value, bool):
            return "1" if value else ""
        return str(value)


class StaticEnvironment(EnvironmentReader):
    """Environment reader backed by plain mappings."""

    def __init__(self, extensions: Optional[Mapping[str, Optional[str]]] = None,
                 ini: Optional[Mapping[str, Optional[str]]] = None,
                 server_info: str = ""):
        self.extensions = dict(extensions or {})
        self.ini = dict(ini or {})
        self.server_info = server_info

    def is_extension_loaded(self, name: str) -> bool:
        return name in self.extensions

    def get_extension_version(self, name: str) -> Optional[str]:
        return self.extensions.get(name)

    def get_ini_value(self, name: str) -> Optional[str]:
        return self.ini.get(name)

    def get_server_info(self) -> str:
        return self.server_info
