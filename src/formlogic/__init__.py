"""
Form Field Identity and Conditional Visibility Engine

Decides which fields of a dynamic registration form are visible and
shapes the values that get submitted.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - UI rendering
    - HTTP or the form-definition API
    - Translation services

Everything here is pure, synchronous and free of shared state.
A FieldRegistry belongs to exactly one generation of fields and is
rebuilt, never patched, when the field set changes.
"""

from formlogic.codec import denormalize_form_value, normalize_form_value
from formlogic.conditions import (
    Condition,
    ConditionOperator,
    format_condition,
    parse_condition,
    referenced_fields,
)
from formlogic.evaluator import evaluate_all, evaluate_condition, is_field_visible, visible_fields
from formlogic.model import FieldDefinition, FieldOption, FieldType
from formlogic.options import find_option_by_label, find_option_by_value, normalize_field_options
from formlogic.registry import FieldRegistry, build_registry

__version__ = "0.1.0"

__all__ = [
    "Condition",
    "ConditionOperator",
    "FieldDefinition",
    "FieldOption",
    "FieldRegistry",
    "FieldType",
    "build_registry",
    "denormalize_form_value",
    "evaluate_all",
    "evaluate_condition",
    "find_option_by_label",
    "find_option_by_value",
    "format_condition",
    "is_field_visible",
    "normalize_field_options",
    "normalize_form_value",
    "parse_condition",
    "referenced_fields",
    "visible_fields",
]
