"""
Condition evaluation for requirements.

A condition is a literal bool, a zero-argument callable, or a deferred
expression string of the form ``"eval:<expression>"``. Deferred expressions
are parsed with ``ast`` and run by a small interpreter that only knows
literals, boolean logic, arithmetic, comparisons and calls to the
environment predicates, e.g.::

    "eval:check_upload_max_file_size('5M')"
    "eval:check_extension_version('rich', '13.0') and check_ini_off('debug')"

``&&`` and ``||`` are accepted as ``and`` and ``or`` outside string literals.
Any failure while parsing or running an expression is an EvaluationError.
"""

import ast
import logging
import operator
import re
from typing import Any, Callable, Dict

from reqcheck.errors import EvaluationError, UsageError
from reqcheck.predicates import EnvironmentPredicates

logger = logging.getLogger(__name__)

EVAL_PREFIX = "eval:"

PREDICATE_NAMES = (
    "check_extension_version",
    "check_ini_on",
    "check_ini_off",
    "compare_byte_size",
    "get_byte_size",
    "check_upload_max_file_size",
)

_COMPARE_OPS = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
}

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}

_NAMED_CONSTANTS = {"true": True, "false": False, "none": None}

# Quoted strings are matched first so that && and || inside them stay literal.
_LOGICAL_OPERATOR_RE = re.compile(r"""('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")|&&|\|\|""")


def _replace_logical_operator(match: "re.Match[str]") -> str:
    if match.group(1) is not None:
        return match.group(1)
    return " and " if match.group(0) == "&&" else " or "


class _ExpressionInterpreter(ast.NodeVisitor):
    """Safe interpreter for deferred condition expressions.

    Any node type without a ``visit_`` method is rejected with an
    EvaluationError, so attribute access, subscripts, lambdas, comprehensions
    and calls to anything but the predicate functions never run.
    """

    def __init__(self, functions: Dict[str, Callable[..., Any]], source: str):
        self.functions = functions
        self.source = source

    def fail(self, message: str) -> EvaluationError:
        return EvaluationError(f"{message} in expression {self.source!r}", expression=self.source)

    def visit(self, node: ast.AST) -> Any:
        visitor = getattr(self, "visit_" + node.__class__.__name__, None)
        if visitor is None:
            raise self.fail(f"Unsupported expression element '{node.__class__.__name__}'")
        return visitor(node)

    def visit_Expression(self, node: ast.Expression) -> Any:
        return self.visit(node.body)

    def visit_Constant(self, node: ast.Constant) -> Any:
        if node.value is None or isinstance(node.value, (str, int, float, bool)):
            return node.value
        raise self.fail(f"Unsupported constant type '{type(node.value).__name__}'")

    def visit_Name(self, node: ast.Name) -> Any:
        lowered = node.id.lower()
        if lowered in _NAMED_CONSTANTS:
            return _NAMED_CONSTANTS[lowered]
        raise self.fail(f"Unknown name '{node.id}'")

    def visit_UnaryOp(self, node: ast.UnaryOp) -> Any:
        operand = self.visit(node.operand)
        if isinstance(node.op, ast.Not):
            return not operand
        if isinstance(node.op, ast.USub):
            return self._apply(operator.neg, operand)
        if isinstance(node.op, ast.UAdd):
            return self._apply(operator.pos, operand)
        raise self.fail(f"Unsupported unary operator '{node.op.__class__.__name__}'")

    def visit_BoolOp(self, node: ast.BoolOp) -> Any:
        if isinstance(node.op, ast.And):
            result = True
            for value in node.values:
                result = self.visit(value)
                if not result:
                    break
            return result
        result = False
        for value in node.values:
            result = self.visit(value)
            if result:
                break
        return result

    def visit_BinOp(self, node: ast.BinOp) -> Any:
        op = _BINARY_OPS.get(type(node.op))
        if op is None:
            raise self.fail(f"Unsupported operator '{node.op.__class__.__name__}'")
        return self._apply(op, self.visit(node.left), self.visit(node.right))

    def visit_Compare(self, node: ast.Compare) -> Any:
        left = self.visit(node.left)
        for op_node, comparator_node in zip(node.ops, node.comparators):
            op = _COMPARE_OPS.get(type(op_node))
            if op is None:
                raise self.fail(f"Unsupported comparison '{op_node.__class__.__name__}'")
            right = self.visit(comparator_node)
            if not self._apply(op, left, right):
                return False
            left = right
        return True

    def visit_Call(self, node: ast.Call) -> Any:
        if not isinstance(node.func, ast.Name) or node.func.id not in self.functions:
            raise self.fail("Only predicate functions may be called")
        args = [self.visit(arg) for arg in node.args]
        kwargs = {}
        for keyword in node.keywords:
            if keyword.arg is None:
                raise self.fail("Keyword unpacking is not supported")
            kwargs[keyword.arg] = self.visit(keyword.value)
        return self._apply(self.functions[node.func.id], *args, **kwargs)

    def visit_Starred(self, node: ast.Starred) -> Any:
        raise self.fail("Argument unpacking is not supported")

    def _apply(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except EvaluationError:
            raise
        except Exception as e:
            raise self.fail(f"{type(e).__name__}: {e}") from e


class ConditionEvaluator:
    """Resolves requirement conditions to booleans."""

    def __init__(self, predicates: EnvironmentPredicates):
        self.predicates = predicates

    def evaluate(self, condition: Any, key: Any = 0) -> bool:
        """
        Resolve a condition to a bool.

        Args:
            condition: Literal bool, zero-argument callable or ``"eval:"`` string
            key: Requirement key, used in error messages

        Returns:
            Resolved condition

        Raises:
            UsageError: If the condition is of an unsupported kind
            EvaluationError: If a callable or expression fails
        """
        if isinstance(condition, bool):
            return condition
        if isinstance(condition, str):
            if condition.startswith(EVAL_PREFIX):
                expression = condition[len(EVAL_PREFIX):]
                result = self.evaluate_expression(expression)
                logger.debug(f"Requirement {key!r}: {expression!r} -> {result!r}")
                return bool(result)
            raise UsageError(
                f'Requirement "{key}" has a string condition without the "{EVAL_PREFIX}" prefix: {condition!r}'
            )
        if callable(condition):
            try:
                return bool(condition())
            except Exception as e:
                raise EvaluationError(f'Condition of requirement "{key}" failed: {e}') from e
        raise UsageError(
            f'Requirement "{key}" condition must be a bool, a callable or an "{EVAL_PREFIX}" string, '
            f'"{type(condition).__name__}" has been given!'
        )

    def evaluate_expression(self, expression: str) -> Any:
        """Evaluate a deferred expression with access to the environment predicates."""
        normalised = _LOGICAL_OPERATOR_RE.sub(_replace_logical_operator, expression).strip()
        functions = {name: getattr(self.predicates, name) for name in PREDICATE_NAMES}
        try:
            tree = ast.parse(normalised, mode="eval")
            return _ExpressionInterpreter(functions, expression).visit(tree)
        except SyntaxError as e:
            raise EvaluationError(f"Invalid expression syntax {expression!r}: {e.msg}", expression=expression) from e
        except (RecursionError, MemoryError) as e:
            raise EvaluationError(f"Expression {expression!r} is nested too deeply", expression=expression) from e
