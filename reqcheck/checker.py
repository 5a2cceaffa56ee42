"""
Requirements checker.

Checks whether the current environment meets the requirements for running an
application and collects the outcome into a RunResult that the report
renderers consume.

Example:

    checker = RequirementsChecker()
    checker.check([
        {
            "name": "Rich console",
            "mandatory": True,
            "condition": "eval:check_extension_version('rich', '13.0')",
            "by": "Terminal report",
            "memo": "rich 13 or newer is required",
        },
    ])
    print(checker.render("console"))

check() can be called several times; every call appends to the same result.
"""

import logging
from collections.abc import Iterable, Mapping, Set
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, NoReturn, Optional

from reqcheck.environment import EnvironmentReader
from reqcheck.errors import UsageError
from reqcheck.expression import ConditionEvaluator
from reqcheck.predicates import EnvironmentPredicates

logger = logging.getLogger(__name__)

KNOWN_FIELDS = ("name", "condition", "mandatory", "required", "by", "memo")


@dataclass(frozen=True)
class CheckedRequirement:
    """A normalized requirement together with its classification."""

    name: str
    condition: bool
    mandatory: bool
    by: str = "Unknown"
    memo: str = ""
    error: bool = False
    warning: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def status(self) -> str:
        """'ok', 'warning' or 'error'."""
        if self.error:
            return "error"
        if self.warning:
            return "warning"
        return "ok"

    def to_dict(self) -> Dict[str, Any]:
        data = {key: value for key, value in asdict(self).items() if key != "extra"}
        data.update(self.extra)
        return data


@dataclass
class Summary:
    total: int = 0
    errors: int = 0
    warnings: int = 0


@dataclass
class RunResult:
    """Accumulated outcome of all check() calls of a checker."""

    summary: Summary = field(default_factory=Summary)
    requirements: List[CheckedRequirement] = field(default_factory=list)

    def add(self, requirement: CheckedRequirement) -> None:
        self.requirements.append(requirement)
        self.summary.total += 1
        if requirement.error:
            self.summary.errors += 1
        if requirement.warning:
            self.summary.warnings += 1

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping form: {'summary': {...}, 'requirements': [...]}."""
        return {
            "summary": asdict(self.summary),
            "requirements": [requirement.to_dict() for requirement in self.requirements],
        }


def _is_numeric_key(key: Any) -> bool:
    if isinstance(key, bool):
        return False
    if isinstance(key, int):
        return True
    return isinstance(key, str) and key.isdigit()


class RequirementsChecker:
    """
    Checks requirement sets and accumulates the results.

    Each raw requirement is a mapping with the keys:
    - condition: bool, zero-argument callable or "eval:<expression>" (required)
    - name: display name (defaults to "Requirement #<index>" or the mapping key)
    - mandatory: whether a failure is an error (legacy key: required)
    - by: what needs the requirement (defaults to "Unknown")
    - memo: free-form note
    """

    def __init__(self,
                 environment: Optional[EnvironmentReader] = None,
                 predicates: Optional[EnvironmentPredicates] = None):
        """
        Initialize requirements checker.

        Args:
            environment: Environment reader for predicates (live process if None)
            predicates: Predicate library, built from environment if None
        """
        self.predicates = predicates or EnvironmentPredicates(environment)
        self.evaluator = ConditionEvaluator(self.predicates)
        self.result: Optional[RunResult] = None

    def check(self, requirements: Any) -> "RequirementsChecker":
        """
        Check the given requirements, collecting results into the result.

        A batch is all-or-nothing: if any requirement in it is malformed or
        its condition fails to evaluate, nothing from the batch is recorded.

        Args:
            requirements: Ordered sequence (or other non-string iterable) of
                requirement mappings, or a mapping of key -> requirement mapping

        Returns:
            Self, for chaining

        Raises:
            UsageError: On malformed input
            EvaluationError: If a deferred condition fails
        """
        if isinstance(requirements, Mapping):
            items = list(requirements.items())
        elif isinstance(requirements, Iterable) and not isinstance(requirements, (str, bytes, Set)):
            items = list(enumerate(requirements))
        else:
            self.usage_error(
                f'Requirements must be a sequence or a mapping, "{type(requirements).__name__}" has been given!'
            )

        checked = []
        for key, raw_requirement in items:
            if not isinstance(raw_requirement, Mapping):
                self.usage_error(
                    f'Requirement must be a mapping, "{type(raw_requirement).__name__}" has been given!'
                )
            requirement = self.normalize_requirement(raw_requirement, key)
            checked.append(self._classify(requirement))

        if self.result is None:
            self.result = RunResult()
        for requirement in checked:
            self.result.add(requirement)

        logger.info(
            f"Checked {len(checked)} requirements "
            f"({sum(r.error for r in checked)} errors, {sum(r.warning for r in checked)} warnings)"
        )
        return self

    def get_result(self) -> Optional[RunResult]:
        """Return the accumulated result, None before the first check()."""
        return self.result

    def render(self, renderer: str = "console", **context: Any) -> str:
        """
        Render the accumulated result with the named renderer.

        Args:
            renderer: Renderer name ('console', 'web' or 'json')
            **context: Extra values passed to the renderer

        Returns:
            Rendered report
        """
        from reqcheck.views import get_renderer

        if self.result is None:
            self.usage_error("Nothing to render!")
        context.setdefault("server_info", self.predicates.get_server_info())
        context.setdefault("now", self.predicates.get_now_date())
        return get_renderer(renderer).render(self.result, **context)

    def normalize_requirement(self, requirement: Mapping, requirement_key: Any = 0) -> Dict[str, Any]:
        """
        Normalize a raw requirement, filling defaults and resolving its condition.

        Args:
            requirement: Raw requirement
            requirement_key: Requirement key in the list

        Returns:
            Normalized requirement
        """
        if "condition" not in requirement:
            self.usage_error(f'Requirement "{requirement_key}" has no condition!')

        normalized = dict(requirement)
        normalized["condition"] = self.evaluator.evaluate(requirement["condition"], requirement_key)

        if "name" not in normalized:
            if _is_numeric_key(requirement_key):
                normalized["name"] = f"Requirement #{requirement_key}"
            else:
                normalized["name"] = str(requirement_key)
        if "mandatory" not in normalized:
            normalized["mandatory"] = normalized.get("required", False)
        normalized.setdefault("by", "Unknown")
        normalized.setdefault("memo", "")

        return normalized

    def usage_error(self, message: str) -> NoReturn:
        """Raise a UsageError; the CLI reports it and exits non-zero."""
        raise UsageError(message)

    @staticmethod
    def _classify(requirement: Dict[str, Any]) -> CheckedRequirement:
        mandatory = bool(requirement["mandatory"])
        condition = requirement["condition"]
        if condition:
            error, warning = False, False
        elif mandatory:
            error, warning = True, True
        else:
            error, warning = False, True

        extra = {key: value for key, value in requirement.items() if key not in KNOWN_FIELDS}
        return CheckedRequirement(
            name=str(requirement["name"]),
            condition=condition,
            mandatory=mandatory,
            by=str(requirement["by"]),
            memo=str(requirement["memo"]),
            error=error,
            warning=warning,
            extra=extra,
        )
