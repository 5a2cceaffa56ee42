from importlib import metadata

try:
    __version__ = metadata.version("reqcheck")
except metadata.PackageNotFoundError:
    __version__ = "0.1.0"

from reqcheck.checker import CheckedRequirement, RequirementsChecker, RunResult, Summary
from reqcheck.environment import EnvironmentReader, ProcessEnvironment, StaticEnvironment
from reqcheck.errors import EvaluationError, ReqCheckError, UsageError
from reqcheck.predicates import EnvironmentPredicates

__all__ = [
    "__version__",
    "RequirementsChecker", "RunResult", "Summary", "CheckedRequirement",
    "EnvironmentReader", "ProcessEnvironment", "StaticEnvironment", "EnvironmentPredicates",
    "ReqCheckError", "UsageError", "EvaluationError",
]
