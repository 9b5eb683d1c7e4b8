"""
Tests for the UI <-> wire value codec.
"""

from formlogic.codec import denormalize_form_value, normalize_form_value
from formlogic.model import FieldDefinition, FieldOption, FieldType

TECH = FieldOption(value="tech", label="Technology")
SALES = FieldOption(value="sales", label="Sales")


def multi_field(options=(TECH, SALES)) -> FieldDefinition:
    return FieldDefinition(id="interests", label="Interests", type=FieldType.MULTI_SELECT, raw_options=options)


def select_field(options=(TECH, SALES)) -> FieldDefinition:
    return FieldDefinition(id="sector", label="Sector", type=FieldType.SELECT, raw_options=options)


class TestNormalizeMultiSelect:
    """UI values of multi-select fields become ordered value lists."""

    def test_option_objects(self):
        assert normalize_form_value(multi_field(), [SALES, TECH]) == ["sales", "tech"]

    def test_labels_become_values(self):
        assert normalize_form_value(multi_field(), ["Technology", "sales"]) == ["tech", "sales"]

    def test_mixed_items(self):
        assert normalize_form_value(multi_field(), [TECH, {"value": "sales", "label": "Sales"}]) == ["tech", "sales"]

    def test_comma_separated_string(self):
        assert normalize_form_value(multi_field(), " tech , ,Sales") == ["tech", "sales"]

    def test_unknown_strings_kept(self):
        assert normalize_form_value(multi_field(), ["Other "]) == ["Other"]

    def test_none_is_empty_list(self):
        assert normalize_form_value(multi_field(), None) == []


class TestNormalizeSelect:

    def test_option_object(self):
        assert normalize_form_value(select_field(), TECH) == "tech"

    def test_label_string(self):
        assert normalize_form_value(select_field(), "Technology") == "tech"

    def test_unresolved_string(self):
        assert normalize_form_value(select_field(), "Retail") == "Retail"

    def test_none_passes_through(self):
        assert normalize_form_value(select_field(), None) is None


class TestPassThrough:

    def test_text_field_unchanged(self):
        field = FieldDefinition(label="Note")
        assert normalize_form_value(field, "  keep me ") == "  keep me "
        assert denormalize_form_value(field, "  keep me ") == "  keep me "

    def test_file_field_unchanged(self):
        field = FieldDefinition(label="Photo", type=FieldType.FILE)
        payload = {"name": "photo.jpg"}
        assert normalize_form_value(field, payload) is payload


class TestDenormalize:
    """Wire values become option objects for UI controls."""

    def test_multi_select_values(self):
        assert denormalize_form_value(multi_field(), ["tech", "sales"]) == [TECH, SALES]

    def test_multi_select_comma_string(self):
        assert denormalize_form_value(multi_field(), "sales, tech") == [SALES, TECH]

    def test_unknown_value_synthesizes_option(self):
        """Legacy free-form data survives instead of failing."""
        result = denormalize_form_value(multi_field(), ["tech", "legacy"])
        assert result == [TECH, FieldOption(value="legacy", label="legacy")]

    def test_multi_select_none(self):
        assert denormalize_form_value(multi_field(), None) == []

    def test_select_case_insensitive_lookup(self):
        assert denormalize_form_value(select_field(), "TECH") == TECH

    def test_select_unknown(self):
        assert denormalize_form_value(select_field(), "retail") == FieldOption("retail", "retail")

    def test_select_non_string_passes_through(self):
        assert denormalize_form_value(select_field(), TECH) is TECH


class TestRoundTrip:

    def test_multi_select_with_string_options(self):
        field = multi_field(options=["A", "B", "C"])
        restored = denormalize_form_value(field, normalize_form_value(field, ["A", "B"]))
        assert [o.value for o in restored] == ["A", "B"]

    def test_wire_values_are_never_labels(self):
        field = multi_field()
        wire = normalize_form_value(field, denormalize_form_value(field, ["tech", "sales"]))
        assert wire == ["tech", "sales"]
