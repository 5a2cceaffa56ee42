"""
Environment predicates for requirement conditions.

Each predicate answers a yes/no question about the environment. Missing data
(an extension that is not installed, an option that is not set) yields False
instead of raising, so it shows up as a failed requirement in the report.
"""

import logging
from datetime import datetime
from typing import Optional

import semantic_version as sv

from reqcheck.bytesize import compare_byte_size, get_byte_size, resolve_comparator
from reqcheck.environment import EnvironmentReader, ProcessEnvironment

logger = logging.getLogger(__name__)

VERSION_PREFIXES = ("pecl-", "v")


class EnvironmentPredicates:
    """Boolean checks against an EnvironmentReader."""

    def __init__(self, environment: Optional[EnvironmentReader] = None):
        self.environment = environment or ProcessEnvironment()

    def check_extension_version(self, extension_name: str, version: str, compare: str = ">=") -> bool:
        """
        Check that an extension is available and its version matches.

        Args:
            extension_name: Extension (distribution or module) name
            version: Required version
            compare: Comparison operator, by default '>='

        Returns:
            True if the extension is loaded and its version satisfies the comparison
        """
        comparator = resolve_comparator(compare)
        if not self.environment.is_extension_loaded(extension_name):
            return False
        extension_version = self.environment.get_extension_version(extension_name)
        if not extension_version:
            return False

        for prefix in VERSION_PREFIXES:
            if extension_version.lower().startswith(prefix):
                extension_version = extension_version[len(prefix):]
                break

        try:
            actual = sv.Version.coerce(extension_version.strip())
            required = sv.Version.coerce(str(version).strip())
        except ValueError as e:
            logger.warning(f"Cannot compare {extension_name} version {extension_version!r} with {version!r}: {e}")
            return False

        return bool(comparator(actual, required))

    def check_ini_on(self, name: str) -> bool:
        """Whether the configuration option is on (``1`` or ``on``)."""
        value = self.environment.get_ini_value(name)
        if not value:
            return False
        value = value.strip()
        return self._as_int(value) == 1 or value.lower() == "on"

    def check_ini_off(self, name: str) -> bool:
        """
        Whether the configuration option is off.

        An empty or missing option counts as off. Note that ``0`` is neither
        on nor off for these two predicates.
        """
        value = self.environment.get_ini_value(name)
        if not value:
            return True
        return value.strip().lower() == "off"

    def compare_byte_size(self, a: str, b: str, compare: str = ">=") -> bool:
        """Compare byte sizes given in verbose form, like '5M' or '15K'."""
        return compare_byte_size(a, b, compare)

    def get_byte_size(self, verbose_size: str) -> int:
        """Size in bytes of a verbose size representation."""
        return get_byte_size(verbose_size)

    def check_upload_max_file_size(self, min: Optional[str] = None, max: Optional[str] = None) -> bool:
        """
        Check that the upload size limits fall within the given range.

        Both ``post_max_size`` and ``upload_max_filesize`` must satisfy each
        bound that is given.

        Args:
            min: Verbose minimum size, None to skip the minimum check
            max: Verbose maximum size, None to skip the maximum check

        Returns:
            True on success
        """
        post_max_size = self.environment.get_ini_value("post_max_size") or ""
        upload_max_file_size = self.environment.get_ini_value("upload_max_filesize") or ""

        if min is not None:
            min_check_result = (
                self.compare_byte_size(post_max_size, min, ">=")
                and self.compare_byte_size(upload_max_file_size, min, ">=")
            )
        else:
            min_check_result = True

        if max is not None:
            max_check_result = (
                self.compare_byte_size(post_max_size, max, "<=")
                and self.compare_byte_size(upload_max_file_size, max, "<=")
            )
        else:
            max_check_result = True

        return min_check_result and max_check_result

    def get_server_info(self) -> str:
        return self.environment.get_server_info()

    def get_now_date(self) -> str:
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    @staticmethod
    def _as_int(value: str) -> Optional[int]:
        try:
            return int(value)
        except ValueError:
            return None
