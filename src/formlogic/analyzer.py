"""
Form Analyzer: diagnostics for a set of field definitions.

This module provides lightweight analysis of one generation of fields:
    - Identity coverage (which fields carry a stable id)
    - Condition health (unparsable, unresolved, label-based references)
    - Option integrity (duplicate option values)
    - Dependency structure (self references, cycles)

IMPORTANT: This is read-only. It never modifies the field set.
It only produces reports.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from formlogic.conditions import parse_condition
from formlogic.model import FieldDefinition
from formlogic.options import normalize_field_options
from formlogic.registry import build_registry


def _find_cycles_dfs(graph: Dict[str, List[str]], start: str, visited: Set[str],
                     rec_stack: Set[str], path: List[str]) -> Optional[List[str]]:
    """DFS to find a cycle starting from a node."""
    visited.add(start)
    rec_stack.add(start)
    path.append(start)

    for neighbor in graph.get(start, []):
        if neighbor not in visited:
            cycle = _find_cycles_dfs(graph, neighbor, visited, rec_stack, path[:])
            if cycle:
                return cycle
        elif neighbor in rec_stack:
            cycle_start_idx = path.index(neighbor)
            return path[cycle_start_idx:] + [neighbor]

    rec_stack.remove(start)
    return None


@dataclass
class FormReport:
    """Analysis report for one generation of fields."""

    total_fields: int = 0
    fields_with_id: int = 0
    fields_without_id: List[str] = field(default_factory=list)
    conditional_fields: int = 0

    # Condition health, keyed by the label of the field carrying the condition
    unparsable_conditions: Dict[str, str] = field(default_factory=dict)
    unresolved_references: Dict[str, str] = field(default_factory=dict)
    label_references: Dict[str, str] = field(default_factory=dict)
    self_references: List[str] = field(default_factory=list)

    # Integrity
    duplicate_labels: List[str] = field(default_factory=list)
    duplicate_option_values: Dict[str, List[str]] = field(default_factory=dict)

    # Dependency graph
    has_cycles: bool = False
    cycle_example: Optional[List[str]] = None

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _conditions_of(f: FieldDefinition) -> List[Tuple[str, str]]:
    found = []
    if f.condition:
        found.append(("field", f.condition))
    if f.section_condition:
        found.append(("section", f.section_condition))
    return found


def analyze_form(fields: Iterable[FieldDefinition]) -> FormReport:
    """
    Perform analysis of a field set.

    Returns a FormReport with findings and warnings.
    """
    ordered = list(fields)
    registry = build_registry(ordered)
    report = FormReport(total_fields=len(ordered))

    # =========================================================================
    # 1. IDENTITY
    # =========================================================================

    label_counts: Dict[str, int] = defaultdict(int)
    for f in ordered:
        label_counts[f.label] += 1
        if f.has_id:
            report.fields_with_id += 1
        else:
            report.fields_without_id.append(f.label)

    report.duplicate_labels = sorted(label for label, n in label_counts.items() if n > 1)

    # =========================================================================
    # 2. OPTIONS
    # =========================================================================

    for f in ordered:
        seen: Set[str] = set()
        reported: Set[str] = set()
        dupes: List[str] = []
        for option in normalize_field_options(f):
            key = option.value.lower()
            if key in seen and key not in reported:
                dupes.append(option.value)
                reported.add(key)
            seen.add(key)
        if dupes:
            report.duplicate_option_values[f.label] = dupes

    # =========================================================================
    # 3. CONDITIONS
    # =========================================================================

    graph: Dict[str, List[str]] = defaultdict(list)

    for f in ordered:
        conditions = _conditions_of(f)
        if any(kind == "field" for kind, _ in conditions):
            report.conditional_fields += 1

        for kind, expr in conditions:
            condition = parse_condition(expr)
            if condition is None:
                report.unparsable_conditions[f.label] = expr
                continue

            target = registry.resolve(condition.ref)
            if target is None:
                report.unresolved_references[f.label] = condition.ref
                continue

            if target.has_id and condition.ref != target.id:
                report.label_references[f.label] = condition.ref

            if target is f:
                if f.label not in report.self_references:
                    report.self_references.append(f.label)
                continue

            if kind == "field":
                graph[f.label].append(target.label)

    visited: Set[str] = set()
    for node in list(graph.keys()):
        if node not in visited:
            cycle = _find_cycles_dfs(graph, node, visited, set(), [])
            if cycle:
                report.has_cycles = True
                report.cycle_example = cycle
                break

    # =========================================================================
    # 4. WARNING FLAGS
    # =========================================================================

    if report.duplicate_labels:
        report.add_warning(
            f"Duplicate labels (first definition wins): {', '.join(report.duplicate_labels)}"
        )

    for label, values in report.duplicate_option_values.items():
        report.add_warning(f"Duplicate option values in '{label}': {', '.join(values)}")

    for label, expr in report.unparsable_conditions.items():
        report.add_warning(f"Unparsable condition on '{label}' (ignored, always shown): {expr}")

    for label, ref in report.unresolved_references.items():
        report.add_warning(f"Condition on '{label}' references unknown field '{ref}' (always hidden)")

    for label, ref in report.label_references.items():
        report.add_warning(
            f"Condition on '{label}' references '{ref}' by label; it will break on translation"
        )

    if report.self_references:
        report.add_warning(f"Self-referencing conditions: {', '.join(report.self_references)}")

    if report.has_cycles:
        report.add_warning(f"Condition cycle detected: {' -> '.join(report.cycle_example)}")

    return report
