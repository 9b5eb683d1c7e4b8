"""
Field identity registry.

A FieldRegistry indexes one generation of field definitions by stable id
and by current label. Conditions may reference a field either way; ids
win because labels drift when the form is translated.

ARCHITECTURAL RULE:
    A registry is built once per generation and never mutated.
    When the field set changes (e.g. on a language switch), build a new
    registry and drop the old one. The registry never detects staleness.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from formlogic.model import FieldDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FieldRegistry:
    """
    Immutable index over one generation of fields.

    Properties:
        fields: The field definitions in definition order
        id_to_label: stable id -> current label
        label_to_id: current label -> stable id
        id_to_field: stable id -> FieldDefinition

    Only fields with a non-empty id appear in the three maps. A field
    without an id is still reachable through resolve() by label.
    """

    fields: Tuple[FieldDefinition, ...]
    id_to_label: Mapping[str, str]
    label_to_id: Mapping[str, str]
    id_to_field: Mapping[str, FieldDefinition]

    def resolve(self, ref: Any) -> Optional[FieldDefinition]:
        """
        Find the field a condition reference points at.

        Priority:
            1. exact id match
            2. exact label match, first in definition order
            3. None

        Never raises.
        """
        if not isinstance(ref, str) or not ref:
            return None

        by_id = self.id_to_field.get(ref)
        if by_id is not None:
            return by_id

        for field in self.fields:
            if field.label == ref:
                return field

        logger.debug("Reference %r matches no field id or label", ref)
        return None

    def label_for(self, field_id: str) -> Optional[str]:
        return self.id_to_label.get(field_id)

    def id_for(self, label: str) -> Optional[str]:
        return self.label_to_id.get(label)

    def to_field_ids(self, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Re-key label-keyed form data by field id.

        Keys with no known id (core fields, legacy fields) are kept as-is.
        """
        converted: Dict[str, Any] = {}
        for key, value in form_data.items():
            converted[self.label_to_id.get(key, key)] = value
        return converted

    def to_labels(self, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        """Re-key id-keyed data by current label. Unknown keys are kept."""
        converted: Dict[str, Any] = {}
        for key, value in form_data.items():
            converted[self.id_to_label.get(key, key)] = value
        return converted


def build_registry(fields: Iterable[FieldDefinition]) -> FieldRegistry:
    """
    Build the registry for one generation of fields.

    Args:
        fields: Ordered field definitions as currently displayed

    Returns:
        A new, immutable FieldRegistry
    """
    ordered = tuple(fields)
    id_to_label: Dict[str, str] = {}
    label_to_id: Dict[str, str] = {}
    id_to_field: Dict[str, FieldDefinition] = {}

    for field in ordered:
        if not field.has_id:
            continue
        # First definition of an id wins, matching label resolution order.
        if field.id in id_to_field:
            logger.debug("Duplicate field id %r ignored", field.id)
            continue
        id_to_field[field.id] = field
        id_to_label[field.id] = field.label
        label_to_id.setdefault(field.label, field.id)

    return FieldRegistry(
        fields=ordered,
        id_to_label=MappingProxyType(id_to_label),
        label_to_id=MappingProxyType(label_to_id),
        id_to_field=MappingProxyType(id_to_field),
    )
