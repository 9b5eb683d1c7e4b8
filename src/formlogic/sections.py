"""
Section grouping for multi-step registration forms.

Fields are grouped by section_name into ordered steps. A section may
carry its own visibility condition, evaluated like a field condition.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from formlogic.evaluator import evaluate_all, visible_fields
from formlogic.model import FieldDefinition, FieldType
from formlogic.registry import FieldRegistry

DEFAULT_SECTION_NAME = "Other"


@dataclass
class FormSection:
    """
    One step of a sectioned form.

    Properties:
        name: Section display name
        sort: Position among sections (ascending)
        kind: "agreement" for agreement sections, "custom" otherwise
        condition: Raw visibility expression of the section, if any
        fields: Member fields ordered by their sort key
    """

    name: str
    sort: int
    kind: str = "custom"
    condition: Optional[str] = None
    fields: List[FieldDefinition] = field(default_factory=list)


def _group(fields: List[FieldDefinition], kind: str) -> List[FormSection]:
    by_name: Dict[str, FormSection] = {}

    for f in fields:
        name = f.section_name or DEFAULT_SECTION_NAME
        section = by_name.get(name)
        if section is None:
            section = FormSection(
                name=name,
                sort=f.section_sort,
                kind=kind,
                condition=f.section_condition or None,
            )
            by_name[name] = section
        section.fields.append(f)

    sections = sorted(by_name.values(), key=lambda s: s.sort)
    for section in sections:
        section.fields.sort(key=lambda f: f.sort)
    return sections


def group_fields_by_section(fields: Iterable[FieldDefinition]) -> List[FormSection]:
    """
    Group fields into sections.

    Agreement fields and all other fields are grouped separately, so a
    section name used by both yields one agreement section and one
    custom section. Every agreement section comes before every custom
    section; within each kind, sections are ordered by section_sort.

    The first field seen for a section decides its sort and condition.
    Sorting is stable, so ties keep definition order.
    """
    ordered = list(fields)
    agreements = [f for f in ordered if f.type is FieldType.AGREEMENT]
    others = [f for f in ordered if f.type is not FieldType.AGREEMENT]
    return _group(agreements, "agreement") + _group(others, "custom")


def is_section_visible(
    section: FormSection,
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> bool:
    if not section.condition:
        return True
    return evaluate_all([section.condition], form_values, registry)


def visible_sections(
    sections: Iterable[FormSection],
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> List[FormSection]:
    return [s for s in sections if is_section_visible(s, form_values, registry)]


def visible_form_fields(
    fields: Iterable[FieldDefinition],
    form_values: Mapping[str, Any],
    registry: FieldRegistry,
) -> List[FieldDefinition]:
    """
    Every field the user can currently see: its section is visible and
    its own condition passes. Ordered section by section.
    """
    shown: List[FieldDefinition] = []
    for section in visible_sections(group_fields_by_section(fields), form_values, registry):
        shown.extend(visible_fields(section.fields, form_values, registry))
    return shown
