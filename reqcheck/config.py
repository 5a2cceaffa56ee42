"""
Configuration loading for reqcheck.

Requirement sets are kept in YAML or JSON files:

    settings:
      upload_max_filesize: 8M
      post_max_size: 8M
    requirements:
      - name: Upload size
        mandatory: true
        condition: "eval:check_upload_max_file_size('5M')"
        by: File uploads

A file may also be just the list (or mapping) of requirements. Option values
for ini predicates can come from the ``settings`` section, from ``.env``
files or from the environment.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv

from reqcheck.errors import UsageError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
DEFAULT_FORMAT_ENV = "REQCHECK_FORMAT"


@dataclass
class RequirementsFile:
    """Requirements and option settings read from one file."""

    path: Path
    requirements: Any
    settings: Dict[str, Any] = field(default_factory=dict)


def _parse(path: Path, text: str) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise UsageError(f"Cannot parse {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise UsageError(f"Cannot parse {path}: {e}") from e


def load_requirements(path: Union[str, Path]) -> RequirementsFile:
    """
    Load a requirement set from a YAML or JSON file.

    Args:
        path: File path; ``.yaml``/``.yml`` is read as YAML, anything else as JSON

    Returns:
        RequirementsFile with the raw requirements and settings

    Raises:
        UsageError: If the file is missing, unparseable or has the wrong shape
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise UsageError(f"Cannot read requirements file {path}: {e.strerror or e}") from e

    data = _parse(path, text)
    settings: Dict[str, Any] = {}
    if isinstance(data, dict) and "requirements" in data:
        settings = data.get("settings") or {}
        if not isinstance(settings, dict):
            raise UsageError(f'"settings" in {path} must be a mapping')
        data = data["requirements"]

    if not isinstance(data, (list, dict)):
        raise UsageError(f"Requirements file {path} must contain a list or a mapping of requirements")

    logger.debug(f"Loaded {len(data)} requirements from {path}")
    return RequirementsFile(path=path, requirements=data, settings=settings)


def load_env_file(path: Optional[Union[str, Path]] = None) -> bool:
    """
    Load option values from a .env file into the process environment.

    Without a path, a ``.env`` in the working directory is used when present.
    Existing environment variables are not overridden.

    Returns:
        True if a file was loaded
    """
    if path is None:
        path = Path.cwd() / ".env"
        if not path.exists():
            return False
    elif not Path(path).exists():
        raise UsageError(f"Env file not found: {path}")

    loaded = load_dotenv(dotenv_path=path, override=False)
    logger.debug(f"Loaded env file {path}: {loaded}")
    return loaded


def parse_setting(assignment: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` command-line override."""
    name, sep, value = assignment.partition("=")
    if not sep or not name.strip():
        raise UsageError(f"Invalid setting {assignment!r}, expected NAME=VALUE")
    return name.strip(), value


def default_format() -> str:
    return os.environ.get(DEFAULT_FORMAT_ENV, "console")


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("reqcheck").setLevel(level)
