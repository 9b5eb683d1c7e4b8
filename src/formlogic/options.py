"""
Option normalization for select-type fields.

Field options arrive either as plain strings or as {value, label}
records. This module is the only place that inspects those raw shapes;
everything else works with FieldOption.
"""

from collections.abc import Mapping
from typing import Any, List, Optional

from formlogic.model import FieldDefinition, FieldOption


def _is_option_like(item: Any) -> bool:
    if isinstance(item, FieldOption):
        return True
    return isinstance(item, Mapping) and "value" in item and "label" in item


def _coerce_option(item: Any) -> FieldOption:
    """Wrap a trusted option record without trimming it."""
    if isinstance(item, FieldOption):
        if isinstance(item.value, str) and isinstance(item.label, str):
            return item
        return FieldOption(value=str(item.value), label=str(item.label))
    if isinstance(item, Mapping):
        return FieldOption(value=str(item.get("value", "")), label=str(item.get("label", "")))
    text = str(item)
    return FieldOption(value=text, label=text)


def normalize_field_options(field: FieldDefinition) -> List[FieldOption]:
    """
    Canonicalize a field's raw options into FieldOption pairs.

    - No options: empty list.
    - Options already shaped as {value, label} (judged by the first
      element) are trusted as-is: no dedup, no re-trim.
    - Otherwise every entry is a string; it is trimmed and used as both
      value and label. Entries that are blank after trimming are kept.

    Applying this to its own output returns an equal list.
    """
    raw = field.raw_options
    if not raw:
        return []

    if _is_option_like(raw[0]):
        return [_coerce_option(item) for item in raw]

    options = []
    for item in raw:
        if _is_option_like(item):
            options.append(_coerce_option(item))
            continue
        text = str(item).strip()
        options.append(FieldOption(value=text, label=text))
    return options


def option_value(option: Any) -> str:
    """Machine value of an option record, or the trimmed string itself."""
    if isinstance(option, FieldOption):
        return option.value
    if isinstance(option, Mapping) and "value" in option:
        return str(option["value"])
    if option is None:
        return ""
    return str(option).strip()


def option_label(option: Any) -> str:
    """Display label of an option record, or the trimmed string itself."""
    if isinstance(option, FieldOption):
        return option.label
    if isinstance(option, Mapping) and "label" in option:
        return str(option["label"])
    if option is None:
        return ""
    return str(option).strip()


def find_option_by_value(field: FieldDefinition, raw: Any) -> Optional[FieldOption]:
    """Case-insensitive exact match on option value. None if absent."""
    if raw is None:
        return None
    needle = str(raw).strip().lower()
    for option in normalize_field_options(field):
        if option.value.lower() == needle:
            return option
    return None


def find_option_by_label(field: FieldDefinition, raw: Any) -> Optional[FieldOption]:
    """Case-insensitive exact match on option label. None if absent."""
    if raw is None:
        return None
    needle = str(raw).strip().lower()
    for option in normalize_field_options(field):
        if option.label.lower() == needle:
            return option
    return None
