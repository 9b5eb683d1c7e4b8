"""
Submission payload shaping and hydration.

On submit, only the fields the user can see are sent, values are
converted to wire shape and keys switch from the (translated) label to
the stable field id. On load, a stored payload is turned back into
label-keyed UI values for the current generation.
"""

import logging
from typing import Any, Dict, Iterable, Mapping

from formlogic.codec import denormalize_form_value, normalize_form_value
from formlogic.model import FieldDefinition, FieldType
from formlogic.registry import FieldRegistry
from formlogic.sections import visible_form_fields

logger = logging.getLogger(__name__)


def _submission_key(field: FieldDefinition) -> str:
    return field.id if field.has_id else field.label


def build_submission(
    fields: Iterable[FieldDefinition],
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> Dict[str, Any]:
    """
    Build the custom-field payload for the current form state.

    Args:
        fields: Current generation of field definitions
        form_values: Label-keyed UI values
        registry: Registry built from the same fields

    Returns:
        Wire-shaped values keyed by field id (label for fields without id).
        Hidden fields, missing values, unchecked agreements and empty
        multi-selects are left out.
    """
    payload: Dict[str, Any] = {}

    for field in visible_form_fields(fields, form_values, registry):
        value = form_values.get(field.label)
        if value is None:
            continue

        if field.type is FieldType.AGREEMENT:
            if value is True or (isinstance(value, str) and value.strip().lower() == "true"):
                payload[_submission_key(field)] = "true"
            continue

        wire = normalize_form_value(field, value)
        if field.type is FieldType.MULTI_SELECT and not wire:
            continue
        payload[_submission_key(field)] = wire

    logger.debug("Built submission with %d field(s)", len(payload))
    return payload


def initial_form_values(fields: Iterable[FieldDefinition]) -> Dict[str, Any]:
    """
    Label-keyed UI values seeded from each field's default.

    Fields without a (non-blank) default are left out.
    """
    values: Dict[str, Any] = {}
    for field in fields:
        if field.default is None or (isinstance(field.default, str) and not field.default.strip()):
            continue
        values[field.label] = denormalize_form_value(field, field.default)
    return values


def hydrate_form_values(
    fields: Iterable[FieldDefinition],
    stored: Mapping[str, Any],
    registry: FieldRegistry,
) -> Dict[str, Any]:
    """
    Turn a stored payload (keyed by field id or label) into label-keyed
    UI values for the current generation. Stored keys that match no
    field are dropped. Fields with no stored value fall back to their
    decoded default.
    """
    ordered = list(fields)
    by_label = registry.to_labels(stored or {})
    values = initial_form_values(ordered)
    for field in ordered:
        if field.label not in by_label:
            continue
        values[field.label] = denormalize_form_value(field, by_label[field.label])
    return values
