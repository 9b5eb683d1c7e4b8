"""
Core Form Model Objects

Defines the fundamental data structures of a registration form:
    - FieldType (the kind of input a field renders as)
    - FieldOption (one choice of a select-type field)
    - FieldDefinition (one field of the form, as currently displayed)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about rendering or HTTP
        - Are immutable (a language switch produces new objects)
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class FieldType(Enum):
    """
    Field types as named by the form-definition source.

    The enum value is the wire name. Unknown wire names map to UNKNOWN,
    which every component treats as a plain pass-through field.
    """

    TEXT = "Text"
    EMAIL = "Email"
    NUMBER = "Number"
    TEXTAREA = "Textarea"
    SELECT = "Select"
    MULTI_SELECT = "Multi Select"
    FILE = "File"
    IMAGE = "Image"
    AGREEMENT = "Agreement"
    DATE = "Date"
    PHONE = "Phone"
    UNKNOWN = "Unknown"

    @classmethod
    def from_wire(cls, name: Any) -> "FieldType":
        """
        Map a wire type name to a FieldType.

        Matching ignores case, spaces, dashes and underscores, so
        "Multi Select", "MultiSelect" and "multi_select" are all
        MULTI_SELECT.
        """
        if isinstance(name, FieldType):
            return name
        if not isinstance(name, str):
            return cls.UNKNOWN
        key = _squash(name)
        for member in cls:
            if _squash(member.value) == key:
                return member
        return cls.UNKNOWN

    @property
    def is_choice(self) -> bool:
        """True for field types whose values come from an option list."""
        return self in (FieldType.SELECT, FieldType.MULTI_SELECT)


def _squash(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch not in " -_")


@dataclass(frozen=True)
class FieldOption:
    """
    One choice of a Select / Multi Select field.

    Properties:
        value: Stable machine token. Unique (case-insensitively) within a field.
        label: Display string. May change with translation, need not be unique.
    """

    value: str
    label: str


@dataclass(frozen=True)
class FieldDefinition:
    """
    A single form field as supplied by the form-definition source.

    One generation of a form is an ordered sequence of these. When the
    display language changes, the whole sequence is rebuilt: labels (and
    option labels) change, ids do not.

    Properties:
        label:
            Current display string. Form state is keyed by this.

        type:
            FieldType of the input.

        id:
            Stable identifier. Legacy fields may have none, in which
            case the field is reachable by label only.

        required:
            Whether the field must be filled in.

        raw_options:
            Options as delivered: either plain strings or
            {value, label} records (FieldOption or mappings).
            Only formlogic.options interprets this.

        condition:
            Optional raw visibility expression,
            e.g. 'show if {purpose} = "Business matching"'

        group_member:
            True if the field is repeated per group member.

        sort, section_name, section_sort, section_condition:
            Placement of the field inside a sectioned form.

        default, help_text:
            Presentation data carried through unchanged.

    IMPORTANT:
        This object is immutable (frozen=True). raw_options is stored
        as a tuple whatever sequence was passed in.
    """

    label: str
    type: FieldType = FieldType.TEXT
    id: Optional[str] = None
    required: bool = False
    raw_options: Tuple[Any, ...] = field(default_factory=tuple)
    condition: Optional[str] = None
    group_member: bool = False
    sort: int = 0
    section_name: str = ""
    section_sort: int = 999
    section_condition: Optional[str] = None
    default: Optional[str] = None
    help_text: str = ""

    def __post_init__(self):
        if not isinstance(self.type, FieldType):
            object.__setattr__(self, "type", FieldType.from_wire(self.type))
        if self.raw_options is None:
            object.__setattr__(self, "raw_options", ())
        elif not isinstance(self.raw_options, tuple):
            object.__setattr__(self, "raw_options", tuple(self.raw_options))

    @property
    def has_id(self) -> bool:
        return bool(self.id and self.id.strip())
