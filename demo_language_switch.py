"""
Demo: evaluate the example registration form, switch language, evaluate again.
"""

import json

from formlogic.analyzer import analyze_form
from formlogic.examples import build_example_registration_form
from formlogic.registry import build_registry
from formlogic.sections import visible_form_fields
from formlogic.submission import build_submission


def show_generation(language, values):
    fields = build_example_registration_form(language)
    # A new generation always gets a new registry
    registry = build_registry(fields)

    print()
    print("=" * 70)
    print(f"GENERATION: {language}")
    print("=" * 70)
    print()

    print("Visible fields:")
    for field in visible_form_fields(fields, values, registry):
        print(f"  {field.label}")
    print()

    print("Submission:")
    print(json.dumps(build_submission(fields, values, registry), indent=2, ensure_ascii=False))

    report = analyze_form(fields)
    if report.warnings:
        print()
        print("Warnings:")
        for warning in report.warnings:
            print(f"  - {warning}")


def main():
    show_generation("vi", {
        "Mục đích tham quan": "business_matching",
        "Mục tiêu gặp gỡ": "Tìm nhà phân phối",
        "Lĩnh vực quan tâm": ["Technology", "Sales"],
        "Ngân sách dự kiến": "5000",
        "Đồng ý điều khoản": True,
    })

    show_generation("en", {
        "Purpose of visit": "general_visit",
        "Meeting goal": "hidden, never submitted",
        "Areas of interest": ["Finance"],
        "Accept terms": True,
    })


if __name__ == "__main__":
    main()
