"""
Command-line inspector for form definitions.

    formlogic fields.yaml
    formlogic fields.json --values answers.json

Prints the analyzer report and, when form values are given, which
fields are visible and the payload that would be submitted.
"""

import argparse
import json
import logging
import sys

import yaml

from formlogic.analyzer import FormReport, analyze_form
from formlogic.registry import build_registry
from formlogic.sections import visible_form_fields
from formlogic.serialization import FieldDefinitionError, load_fields
from formlogic.submission import build_submission

logger = logging.getLogger(__name__)


def print_report(report: FormReport) -> None:
    """Pretty-print a FormReport."""
    print()
    print("=" * 70)
    print("FORM ANALYSIS REPORT")
    print("=" * 70)
    print()
    print(f"  Total Fields:          {report.total_fields}")
    print(f"  Fields With Id:        {report.fields_with_id}")
    print(f"  Fields Without Id:     {len(report.fields_without_id)}")
    print(f"  Conditional Fields:    {report.conditional_fields}")
    print()

    if report.warnings:
        print("WARNINGS")
        for warning in report.warnings:
            print(f"  - {warning}")
    else:
        print("No warnings.")
    print()


def _load_values(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as fh:
        content = fh.read()
    if path.lower().endswith(".json"):
        data = json.loads(content)
    else:
        data = yaml.safe_load(content)
    if not isinstance(data, dict):
        raise ValueError(f"Form values in {path} must be a mapping of label to value")
    return data


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="formlogic",
        description="Inspect form field definitions and their visibility conditions",
    )
    parser.add_argument("fields", help="Path to field definitions (.yaml, .yml or .json)")
    parser.add_argument("--values", help="Label-keyed form values (.yaml, .yml or .json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
    )

    try:
        fields = load_fields(args.fields)
    except (OSError, FieldDefinitionError) as e:
        logger.error(f"Could not load field definitions: {e}")
        return 1

    print_report(analyze_form(fields))

    if args.values:
        try:
            values = _load_values(args.values)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Could not load form values: {e}")
            return 1

        registry = build_registry(fields)
        print("VISIBLE FIELDS")
        for field in visible_form_fields(fields, values, registry):
            print(f"  {field.label}")
        print()
        print("SUBMISSION")
        print(json.dumps(build_submission(fields, values, registry), indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
