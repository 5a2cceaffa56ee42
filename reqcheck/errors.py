"""Error types raised by the requirements checker."""

from typing import Optional


class ReqCheckError(Exception):
    """Base class for all reqcheck errors."""


class UsageError(ReqCheckError):
    """Requirements were supplied in a shape the checker cannot use.

    Raised for non-collection requirement sets, non-mapping requirements,
    requirements without a ``condition``, plain-string conditions and
    rendering before anything was checked. Never downgraded to a warning.
    """


class EvaluationError(ReqCheckError):
    """A deferred condition could not be evaluated."""

    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression
