"""
Example form builder for a trade-expo visitor registration.

Builds the same form in two display languages. Field ids are shared
between the generations; labels and option labels differ, which is
what the identity registry has to cope with.
"""
from formlogic.model import FieldDefinition, FieldOption, FieldType

_LABELS = {
    "vi": {
        "purpose": "Mục đích tham quan",
        "meeting_goal": "Mục tiêu gặp gỡ",
        "interests": "Lĩnh vực quan tâm",
        "budget": "Ngân sách dự kiến",
        "company": "Tên công ty",
        "consent": "Đồng ý điều khoản",
        "business": "Kết nối giao thương",
        "visit": "Tham quan thông thường",
        "profile": "Thông tin doanh nghiệp",
        "terms": "Điều khoản",
    },
    "en": {
        "purpose": "Purpose of visit",
        "meeting_goal": "Meeting goal",
        "interests": "Areas of interest",
        "budget": "Expected budget",
        "company": "Company name",
        "consent": "Accept terms",
        "business": "Business matching",
        "visit": "General visit",
        "profile": "Company profile",
        "terms": "Terms",
    },
}


def build_example_registration_form(language: str = "vi") -> list:
    labels = _LABELS[language]

    purpose = FieldDefinition(
        id="aw2025_purpose",
        label=labels["purpose"],
        type=FieldType.SELECT,
        required=True,
        raw_options=[
            FieldOption(value="business_matching", label=labels["business"]),
            FieldOption(value="general_visit", label=labels["visit"]),
        ],
        sort=1,
        section_name=labels["profile"],
        section_sort=1,
    )

    # Only asked of visitors who came for business matching
    meeting_goal = FieldDefinition(
        id="aw2025_meeting_goal",
        label=labels["meeting_goal"],
        type=FieldType.TEXTAREA,
        condition=f'show if {{aw2025_purpose}} = "{labels["business"]}"',
        sort=2,
        section_name=labels["profile"],
        section_sort=1,
    )

    interests = FieldDefinition(
        id="aw2025_interests",
        label=labels["interests"],
        type=FieldType.MULTI_SELECT,
        raw_options=["Technology", "Marketing", "Sales", "Finance"],
        sort=3,
        section_name=labels["profile"],
        section_sort=1,
    )

    budget = FieldDefinition(
        id="aw2025_budget",
        label=labels["budget"],
        type=FieldType.NUMBER,
        condition='show if {aw2025_interests} contains "Technology"',
        sort=4,
        section_name=labels["profile"],
        section_sort=1,
    )

    # Legacy field: no id, reachable by label only
    company = FieldDefinition(
        label=labels["company"],
        type=FieldType.TEXT,
        sort=5,
        section_name=labels["profile"],
        section_sort=1,
    )

    consent = FieldDefinition(
        id="aw2025_consent",
        label=labels["consent"],
        type=FieldType.AGREEMENT,
        required=True,
        sort=1,
        section_name=labels["terms"],
        section_sort=0,
    )

    return [purpose, meeting_goal, interests, budget, company, consent]
