"""
Value codec for select-type fields.

UI controls hold FieldOption objects (or lists of them); storage holds
plain option values. normalize_form_value goes UI -> wire,
denormalize_form_value goes wire -> UI. Other field types pass through
untouched.
"""

from collections.abc import Mapping
from typing import Any, List

from formlogic.model import FieldDefinition, FieldOption, FieldType
from formlogic.options import find_option_by_label, find_option_by_value, option_value


def _split_csv(text: str) -> List[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def _wire_value(field: FieldDefinition, item: Any) -> str:
    """Option value for one UI item; strings may name a value or a label."""
    if isinstance(item, (FieldOption, Mapping)):
        return option_value(item)
    text = option_value(item)
    option = find_option_by_value(field, text) or find_option_by_label(field, text)
    return option.value if option is not None else text


def _ui_option(field: FieldDefinition, value: Any) -> FieldOption:
    option = find_option_by_value(field, value)
    if option is not None:
        return option
    text = str(value)
    return FieldOption(value=text, label=text)


def normalize_form_value(field: FieldDefinition, ui_value: Any) -> Any:
    """
    Convert a UI value into the shape submitted to storage.

    Select:       option value (raw string if it matches no option)
    Multi Select: ordered list of option values; accepts a list of
                  options/strings or a comma-separated string
    Other types:  unchanged
    """
    if field.type is FieldType.MULTI_SELECT:
        if isinstance(ui_value, (list, tuple)):
            return [_wire_value(field, item) for item in ui_value]
        if isinstance(ui_value, str):
            return [_wire_value(field, part) for part in _split_csv(ui_value)]
        return []

    if field.type is FieldType.SELECT:
        if ui_value is None:
            return None
        return _wire_value(field, ui_value)

    return ui_value


def denormalize_form_value(field: FieldDefinition, wire_value: Any) -> Any:
    """
    Convert a stored value back into the shape UI controls use.

    Values with no matching option (legacy or free-form data) become a
    FieldOption whose value and label are both the stored value.
    """
    if field.type is FieldType.MULTI_SELECT:
        if isinstance(wire_value, (list, tuple)):
            return [_ui_option(field, item) for item in wire_value]
        if isinstance(wire_value, str):
            return [_ui_option(field, part) for part in _split_csv(wire_value)]
        return []

    if field.type is FieldType.SELECT:
        if isinstance(wire_value, str):
            return _ui_option(field, wire_value)
        return wire_value

    return wire_value
