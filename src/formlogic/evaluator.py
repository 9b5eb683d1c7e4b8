"""
Condition evaluation against live form state.

Resolves a parsed Condition through a FieldRegistry, reads the gating
field's current value out of label-keyed form values and applies the
operator. Everything here is pure and synchronous.

Failure semantics:
    - A condition string that does not parse is ignored (field shown).
    - A reference that does not resolve hides the field.
    No exception escapes on malformed input.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Union

from formlogic.conditions import Condition, ConditionOperator, parse_condition
from formlogic.model import FieldDefinition, FieldOption
from formlogic.options import find_option_by_label
from formlogic.registry import FieldRegistry

logger = logging.getLogger(__name__)


def _scalar_text(value: Any) -> str:
    if isinstance(value, FieldOption):
        return value.value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    if isinstance(value, Mapping) and "value" in value:
        return str(value["value"]).strip()
    return str(value).strip()


def _normalize_raw(raw: Any) -> Union[str, List[str]]:
    if isinstance(raw, (list, tuple)):
        return [_scalar_text(item) for item in raw]
    return _scalar_text(raw)


def _resolve_literal(field: FieldDefinition, literal: str) -> str:
    # Authors usually write the option text; stored values are option values.
    if field.type.is_choice:
        option = find_option_by_label(field, literal)
        if option is not None:
            return option.value
    return literal


def _matches(operator: ConditionOperator, value: Union[str, List[str]], literal: str) -> bool:
    if operator in (ConditionOperator.EQ, ConditionOperator.NEQ):
        if isinstance(value, list):
            equal = literal in value
        else:
            equal = value == literal
        return equal if operator is ConditionOperator.EQ else not equal

    if isinstance(value, list):
        found = any(literal in item for item in value)
    else:
        found = literal in value
    return found if operator is ConditionOperator.CONTAINS else not found


def evaluate_condition(
    condition: Optional[Condition],
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> bool:
    """
    Decide whether a condition holds for the current form values.

    Args:
        condition: Parsed condition, or None for "no condition"
        form_values: Current values keyed by the fields' current labels
        registry: Registry built from the same generation of fields

    Returns:
        True if the dependent field should be shown
    """
    if condition is None:
        return True

    field = registry.resolve(condition.ref)
    if field is None:
        logger.debug("Hiding: condition reference %r is unresolved", condition.ref)
        return False

    if not isinstance(form_values, Mapping) or field.label not in form_values:
        return False

    literal = _resolve_literal(field, condition.literal)
    value = _normalize_raw(form_values[field.label])
    return _matches(condition.operator, value, literal)


def evaluate_all(
    exprs: Iterable[Any],
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> bool:
    """
    AND-combine several condition strings.

    A string that fails to parse counts as satisfied; only a reference
    that fails to resolve hides content.
    """
    for expr in exprs or []:
        condition = parse_condition(expr)
        if condition is None:
            continue
        if not evaluate_condition(condition, form_values, registry):
            return False
    return True


def is_field_visible(
    field: FieldDefinition,
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> bool:
    if not field.condition:
        return True
    return evaluate_all([field.condition], form_values, registry)


def visible_fields(
    fields: Iterable[FieldDefinition],
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> List[FieldDefinition]:
    """Fields whose own condition passes, in the order given."""
    return [f for f in fields if is_field_visible(f, form_values, registry)]
