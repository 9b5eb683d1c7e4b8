"""
Condition System for field visibility

Fields and sections may carry a visibility expression such as:

    show if {Purpose of visit} = "Business matching"

This module turns such strings into Condition objects. It contains no
evaluation logic (see formlogic.evaluator); syntax and operator
semantics are kept apart so each can be tested on its own.

Grammar (case-insensitive, "show if" prefix optional):

    show if { <ref> } <op> "<literal>"

    <op>      one of  =  !=  contains  not_contains
    <ref>     any run of non-'}' characters (a field id or label)
    <literal> delimited by straight or typographic quotes
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)


class ConditionOperator(Enum):
    """
    Comparison operators of the visibility language.

    The enum value is the internal name; `symbol` is the spelling
    used in condition strings.
    """

    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    ConditionOperator.EQ: "=",
    ConditionOperator.NEQ: "!=",
    ConditionOperator.CONTAINS: "contains",
    ConditionOperator.NOT_CONTAINS: "not_contains",
}

_OPERATORS = {symbol: op for op, symbol in _SYMBOLS.items()}

# Straight quote plus the typographic quotes rich-text editors substitute.
_QUOTES = "\"“”„‟″"

_CONDITION_RE = re.compile(
    r"^\s*(?:show\s+if\s*)?"
    r"\{(?P<ref>[^}]+)\}\s*"
    r"(?P<op>!=|=|not_contains|contains)\s*"
    r"[" + _QUOTES + r"](?P<literal>[^" + _QUOTES + r"]*)[" + _QUOTES + r"]"
    r"\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Condition:
    """
    A parsed visibility condition.

    Properties:
        ref: Field reference from inside {...}; an id or a label,
             ambiguous until resolved against a registry
        operator: ConditionOperator
        literal: Comparison value, trimmed

    IMPORTANT:
        This object does NOT check that ref names an existing field.
        That happens at evaluation time.
    """

    ref: str
    operator: ConditionOperator
    literal: str


def parse_condition(expr: Any) -> Optional[Condition]:
    """
    Parse a visibility expression.

    Args:
        expr: Raw condition string

    Returns:
        Condition, or None when the input is empty or does not match the
        grammar. Callers treat None as "no condition" (always visible).
    """
    if not isinstance(expr, str) or not expr.strip():
        return None

    match = _CONDITION_RE.match(expr)
    if match is None:
        logger.warning("Could not parse condition: %r", expr)
        return None

    ref = match.group("ref").strip()
    if not ref:
        logger.warning("Condition has an empty field reference: %r", expr)
        return None

    return Condition(
        ref=ref,
        operator=_OPERATORS[match.group("op").lower()],
        literal=match.group("literal").strip(),
    )


def format_condition(condition: Condition) -> str:
    """Render a Condition back to its canonical string form."""
    return f'show if {{{condition.ref}}} {condition.operator.symbol} "{condition.literal}"'


def referenced_fields(exprs: Iterable[Any]) -> List[str]:
    """
    Distinct field references of all parseable expressions.

    Useful to know which form values to watch. Order is first-seen.
    """
    refs: List[str] = []
    for expr in exprs or []:
        condition = parse_condition(expr)
        if condition is not None and condition.ref not in refs:
            refs.append(condition.ref)
    return refs
