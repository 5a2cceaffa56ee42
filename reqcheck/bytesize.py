"""
Byte size helpers.

Parses verbose size strings such as ``"5M"`` or ``"16KB"`` into bytes and
compares them using the same comparator vocabulary as version checks.
"""

import logging
import math
import operator
from typing import Callable, Dict, Optional

from reqcheck.errors import EvaluationError

logger = logging.getLogger(__name__)

UNIT_MULTIPLIERS = {
    "k": 1024,
    "kb": 1024,
    "m": 1024 ** 2,
    "mb": 1024 ** 2,
    "g": 1024 ** 3,
    "gb": 1024 ** 3,
}

COMPARATORS: Dict[str, Callable[[object, object], bool]] = {
    ">=": operator.ge,
    "ge": operator.ge,
    ">": operator.gt,
    "gt": operator.gt,
    "<=": operator.le,
    "le": operator.le,
    "<": operator.lt,
    "lt": operator.lt,
    "==": operator.eq,
    "===": operator.eq,
    "=": operator.eq,
    "eq": operator.eq,
    "!=": operator.ne,
    "!==": operator.ne,
    "<>": operator.ne,
    "ne": operator.ne,
}


def resolve_comparator(compare: str) -> Callable[[object, object], bool]:
    """
    Look up a comparison operator by symbol or mnemonic.

    Args:
        compare: One of ``>=``, ``>``, ``<=``, ``<``, ``==``, ``!=`` or the
            aliases ``ge``, ``gt``, ``le``, ``lt``, ``eq``, ``ne``, ``=``, ``<>``

    Returns:
        Two-argument function returning a bool

    Raises:
        EvaluationError: If the comparator is unknown
    """
    key = compare.strip().lower() if isinstance(compare, str) else compare
    try:
        return COMPARATORS[key]
    except (KeyError, TypeError):
        raise EvaluationError(f"Unknown comparison operator: {compare!r}") from None


def _is_numeric(value: str) -> bool:
    try:
        return math.isfinite(float(value))
    except ValueError:
        return False


def get_byte_size(verbose_size: Optional[str]) -> int:
    """
    Get the size in bytes from a verbose size representation.

    For example ``'5K'`` gives ``5 * 1024``. Unknown units and malformed
    numbers give 0 rather than raising.

    Args:
        verbose_size: Size such as ``'456'``, ``'16KB'`` or ``'2G'``

    Returns:
        Size in bytes
    """
    if not verbose_size:
        return 0
    verbose_size = str(verbose_size)
    if _is_numeric(verbose_size):
        try:
            return int(verbose_size)
        except ValueError:
            return int(float(verbose_size))

    size_unit = verbose_size.strip("0123456789")
    size = verbose_size.replace(size_unit, "").strip()
    if not _is_numeric(size):
        logger.debug(f"Unparseable byte size {verbose_size!r}")
        return 0

    multiplier = UNIT_MULTIPLIERS.get(size_unit.strip().lower())
    if multiplier is None:
        logger.debug(f"Unknown byte size unit {size_unit!r} in {verbose_size!r}")
        return 0
    return int(float(size) * multiplier)


def compare_byte_size(a: str, b: str, compare: str = ">=") -> bool:
    """Compare two verbose byte sizes, e.g. ``compare_byte_size('2M', '2K', '>')``."""
    comparator = resolve_comparator(compare)
    return bool(comparator(get_byte_size(a), get_byte_size(b)))
