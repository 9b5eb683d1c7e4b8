"""
Tests for section grouping and section-level visibility.
"""

from formlogic.model import FieldDefinition, FieldType
from formlogic.registry import build_registry
from formlogic.sections import (
    DEFAULT_SECTION_NAME,
    FormSection,
    group_fields_by_section,
    visible_form_fields,
    visible_sections,
)


def build_fields():
    return [
        FieldDefinition(id="c", label="Company", section_name="Business", section_sort=2, sort=2),
        FieldDefinition(id="t", label="Title", section_name="Business", section_sort=2, sort=1),
        FieldDefinition(
            id="terms",
            label="Accept terms",
            type=FieldType.AGREEMENT,
            section_name="Terms",
            section_sort=0,
        ),
        FieldDefinition(id="n", label="Notes"),
        FieldDefinition(
            id="budget",
            label="Budget",
            section_name="Purchasing",
            section_sort=3,
            section_condition='show if {t} = "Buyer"',
        ),
    ]


class TestGroupFieldsBySection:

    def test_sections_sorted(self):
        sections = group_fields_by_section(build_fields())
        assert [s.name for s in sections] == ["Terms", "Business", "Purchasing", DEFAULT_SECTION_NAME]

    def test_fields_sorted_within_section(self):
        business = group_fields_by_section(build_fields())[1]
        assert [f.label for f in business.fields] == ["Title", "Company"]

    def test_kind(self):
        sections = {s.name: s for s in group_fields_by_section(build_fields())}
        assert sections["Terms"].kind == "agreement"
        assert sections["Business"].kind == "custom"

    def test_condition_taken_from_first_field(self):
        sections = {s.name: s for s in group_fields_by_section(build_fields())}
        assert sections["Purchasing"].condition == 'show if {t} = "Buyer"'
        assert sections["Business"].condition is None

    def test_empty(self):
        assert group_fields_by_section([]) == []

    def test_agreement_sections_come_first(self):
        """A shared section name splits by kind; agreements lead even with a later sort."""
        fields = [
            FieldDefinition(id="company", label="Company", section_name="Info", section_sort=1),
            FieldDefinition(
                id="consent",
                label="Consent",
                type=FieldType.AGREEMENT,
                section_name="Info",
                section_sort=1,
            ),
            FieldDefinition(
                id="terms_ok",
                label="Terms ok",
                type=FieldType.AGREEMENT,
                section_name="Legal",
                section_sort=5,
            ),
        ]
        sections = group_fields_by_section(fields)
        assert [(s.name, s.kind) for s in sections] == [
            ("Info", "agreement"),
            ("Legal", "agreement"),
            ("Info", "custom"),
        ]
        assert [f.label for f in sections[0].fields] == ["Consent"]
        assert [f.label for f in sections[2].fields] == ["Company"]


class TestVisibleSections:

    def test_section_condition(self):
        fields = build_fields()
        registry = build_registry(fields)
        sections = group_fields_by_section(fields)

        shown = visible_sections(sections, {"Title": "Buyer"}, registry)
        assert "Purchasing" in [s.name for s in shown]

        hidden = visible_sections(sections, {"Title": "Engineer"}, registry)
        assert "Purchasing" not in [s.name for s in hidden]

    def test_unparsable_section_condition_is_visible(self):
        registry = build_registry([])
        section = FormSection(name="S", sort=0, condition="show if whatever")
        assert visible_sections([section], {}, registry) == [section]


class TestVisibleFormFields:

    def test_combines_section_and_field_conditions(self):
        fields = build_fields() + [
            FieldDefinition(
                id="vat",
                label="VAT number",
                section_name="Business",
                section_sort=2,
                sort=3,
                condition='show if {c} != ""',
            ),
        ]
        registry = build_registry(fields)

        labels = [f.label for f in visible_form_fields(fields, {"Title": "Buyer", "Company": "ACME"}, registry)]
        assert labels == ["Accept terms", "Title", "Company", "VAT number", "Budget", "Notes"]

        labels = [f.label for f in visible_form_fields(fields, {"Title": "Engineer", "Company": ""}, registry)]
        assert labels == ["Accept terms", "Title", "Company", "Notes"]
