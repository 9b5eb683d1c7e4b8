"""
Serialization helpers for form definitions and conditions.

Maps between the form-definition wire format (as served by the event
API) and formlogic model objects, via an intermediate dict
representation. JSON and YAML front-ends sit on top of the dict layer.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Dict, List

import yaml

from formlogic.conditions import Condition, ConditionOperator
from formlogic.model import FieldDefinition, FieldOption, FieldType


class FieldDefinitionError(ValueError):
    """Raised when a field definition cannot be loaded."""
    pass


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _int_or(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _options_from_wire(raw: Any) -> tuple:
    if raw is None:
        return ()
    if isinstance(raw, str):
        # Legacy definitions ship options as one comma-separated string.
        return tuple(part for part in raw.split(",")) if raw.strip() else ()
    if isinstance(raw, (list, tuple)):
        return tuple(raw)
    raise FieldDefinitionError(f"Unsupported options value: {raw!r}")


def option_to_dict(o: FieldOption) -> Dict[str, Any]:
    return {"value": o.value, "label": o.label}


def _option_to_wire(item: Any) -> Any:
    if isinstance(item, FieldOption):
        return option_to_dict(item)
    return item


def field_to_dict(f: FieldDefinition) -> Dict[str, Any]:
    return {
        "field_id": f.id,
        "label": f.label,
        "type": f.type.value,
        "required": f.required,
        "values": [_option_to_wire(item) for item in f.raw_options],
        "field_condition": f.condition or "",
        "groupmember": f.group_member,
        "sort": f.sort,
        "section_name": f.section_name,
        "section_sort": f.section_sort,
        "section_condition": f.section_condition or "",
        "default": f.default,
        "helptext": f.help_text,
    }


def field_from_dict(d: Any) -> FieldDefinition:
    if not isinstance(d, Mapping):
        raise FieldDefinitionError(f"Field definition must be a mapping, got {type(d).__name__}")

    label = d.get("label")
    if not isinstance(label, str) or not label.strip():
        raise FieldDefinitionError(f"Field definition has no label: {dict(d)!r}")

    raw_options = d.get("values")
    if raw_options is None:
        raw_options = d.get("options")

    return FieldDefinition(
        id=_optional_str(d.get("field_id", d.get("id"))),
        label=label,
        type=FieldType.from_wire(d.get("type", "Text")),
        required=bool(d.get("required", False)),
        raw_options=_options_from_wire(raw_options),
        condition=_optional_str(d.get("field_condition")),
        group_member=bool(d.get("groupmember", False)),
        sort=_int_or(d.get("sort"), 0),
        section_name=d.get("section_name") or "",
        section_sort=_int_or(d.get("section_sort"), 999),
        section_condition=_optional_str(d.get("section_condition")),
        default=d.get("default"),
        help_text=d.get("helptext") or "",
    )


def fields_to_dicts(fields: List[FieldDefinition]) -> List[Dict[str, Any]]:
    return [field_to_dict(f) for f in fields]


def fields_from_dicts(data: Any) -> List[FieldDefinition]:
    """Accepts a list of field dicts or a mapping with a `fields` list."""
    if isinstance(data, Mapping):
        data = data.get("fields", [])
    if not isinstance(data, (list, tuple)):
        raise FieldDefinitionError("Expected a list of field definitions")
    return [field_from_dict(d) for d in data]


def fields_to_json(fields: List[FieldDefinition]) -> str:
    return json.dumps(fields_to_dicts(fields), sort_keys=True, ensure_ascii=False)


def fields_from_json(s: str) -> List[FieldDefinition]:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise FieldDefinitionError(f"Invalid JSON: {e}") from e
    return fields_from_dicts(d)


def fields_to_yaml(fields: List[FieldDefinition]) -> str:
    return yaml.safe_dump({"fields": fields_to_dicts(fields)}, allow_unicode=True, sort_keys=False)


def fields_from_yaml(s: str) -> List[FieldDefinition]:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise FieldDefinitionError(f"Invalid YAML: {e}") from e
    if d is None:
        return []
    return fields_from_dicts(d)


def load_fields(path: str) -> List[FieldDefinition]:
    """Load field definitions from a .json, .yaml or .yml file."""
    with open(path, "r", encoding="utf-8") as fh:
        content = fh.read()
    if path.lower().endswith(".json"):
        return fields_from_json(content)
    return fields_from_yaml(content)


def condition_to_dict(c: Condition | None) -> Dict[str, Any] | None:
    if c is None:
        return None
    return {"ref": c.ref, "operator": c.operator.value, "literal": c.literal}


def condition_from_dict(d: Dict[str, Any] | None) -> Condition | None:
    if d is None:
        return None
    if not isinstance(d, Mapping):
        raise FieldDefinitionError(f"Condition must be a mapping, got {type(d).__name__}")
    try:
        return Condition(ref=d["ref"], operator=ConditionOperator(d["operator"]), literal=d.get("literal", ""))
    except KeyError as e:
        raise FieldDefinitionError(f"Condition is missing key {e}") from e
    except ValueError as e:
        raise FieldDefinitionError(f"Invalid condition operator: {e}") from e
