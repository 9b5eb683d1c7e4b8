"""
Tests for loading and dumping form definitions.

These tests ensure the form-definition wire format maps onto the model
and that JSON/YAML round-trips are lossless.
"""

import pytest
from formlogic.conditions import Condition, ConditionOperator
from formlogic.examples import build_example_registration_form
from formlogic.model import FieldOption, FieldType
from formlogic.serialization import (
    FieldDefinitionError,
    condition_from_dict,
    condition_to_dict,
    field_from_dict,
    field_to_dict,
    fields_from_json,
    fields_from_yaml,
    fields_to_json,
    fields_to_yaml,
    load_fields,
)


def test_field_from_wire_dict():
    f = field_from_dict({
        "field_id": "aw2025_purpose",
        "sort": 1,
        "label": "Mục đích tham quan",
        "type": "Select",
        "required": True,
        "groupmember": False,
        "helptext": "",
        "placeholder": "",
        "field_condition": "",
        "section_name": "Thông tin",
        "section_sort": 2,
        "section_condition": "",
        "matching_field": False,
        "values": ["Kết nối giao thương", "Tham quan thông thường"],
    })
    assert f.id == "aw2025_purpose"
    assert f.type is FieldType.SELECT
    assert f.required is True
    assert f.condition is None
    assert f.section_condition is None
    assert f.section_sort == 2
    assert f.raw_options == ("Kết nối giao thương", "Tham quan thông thường")


def test_legacy_options_key_and_string_values():
    f = field_from_dict({"label": "Size", "type": "Multi Select", "options": "S, M ,L"})
    assert f.type is FieldType.MULTI_SELECT
    assert f.raw_options == ("S", " M ", "L")
    assert f.id is None


def test_missing_label_raises():
    with pytest.raises(FieldDefinitionError):
        field_from_dict({"field_id": "x"})


def test_non_mapping_raises():
    with pytest.raises(FieldDefinitionError):
        field_from_dict(["label"])


def test_unsupported_options_raise():
    with pytest.raises(FieldDefinitionError):
        field_from_dict({"label": "X", "values": 5})


def test_json_roundtrip():
    fields = build_example_registration_form("vi")
    before = [field_to_dict(f) for f in fields]
    restored = fields_from_json(fields_to_json(fields))
    after = [field_to_dict(f) for f in restored]
    assert before == after


def test_yaml_roundtrip():
    fields = build_example_registration_form("en")
    before = [field_to_dict(f) for f in fields]
    restored = fields_from_yaml(fields_to_yaml(fields))
    after = [field_to_dict(f) for f in restored]
    assert before == after


def test_option_records_serialize_as_mappings():
    fields = build_example_registration_form("en")
    d = field_to_dict(fields[0])
    assert d["values"][0] == {"value": "business_matching", "label": "Business matching"}


def test_yaml_accepts_plain_list():
    fields = fields_from_yaml("- label: Company\n- label: Email\n  type: Email\n")
    assert [f.label for f in fields] == ["Company", "Email"]
    assert fields[1].type is FieldType.EMAIL


def test_empty_yaml():
    assert fields_from_yaml("") == []


def test_invalid_json_raises():
    with pytest.raises(FieldDefinitionError):
        fields_from_json("{not json")


def test_load_fields_by_extension(tmp_path):
    fields = build_example_registration_form("vi")
    json_path = tmp_path / "fields.json"
    yaml_path = tmp_path / "fields.yaml"
    json_path.write_text(fields_to_json(fields), encoding="utf-8")
    yaml_path.write_text(fields_to_yaml(fields), encoding="utf-8")

    from_json = load_fields(str(json_path))
    from_yaml = load_fields(str(yaml_path))
    assert [f.label for f in from_json] == [f.label for f in fields]
    assert [f.id for f in from_yaml] == [f.id for f in fields]


def test_loaded_option_records_normalize():
    from formlogic.options import normalize_field_options

    fields = fields_from_json(fields_to_json(build_example_registration_form("en")))
    assert normalize_field_options(fields[0])[0] == FieldOption("business_matching", "Business matching")


def test_condition_roundtrip():
    condition = Condition(ref="aw2025_purpose", operator=ConditionOperator.NOT_CONTAINS, literal="x")
    assert condition_from_dict(condition_to_dict(condition)) == condition
    assert condition_to_dict(None) is None
    assert condition_from_dict(None) is None


@pytest.mark.parametrize("payload", [
    {"operator": "eq", "literal": "x"},
    {"ref": "x", "literal": "x"},
    {"ref": "x", "operator": "bogus"},
    ["ref", "eq"],
])
def test_invalid_condition_dict_raises(payload):
    with pytest.raises(FieldDefinitionError):
        condition_from_dict(payload)
