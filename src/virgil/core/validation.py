"""Consistency checks for a loaded or compiled walkthrough."""

from collections import Counter

from ..models import Walkthrough, parse_location
from .step_tree import build_tree


def validate_base_references(walkthrough: Walkthrough) -> list[str]:
    """Check base-reference configuration against the steps that need it."""
    warnings: list[str] = []
    repository = walkthrough.repository
    refs = repository.base_references() if repository else []

    if len(refs) > 1:
        warnings.append(
            f"Multiple base references specified ({', '.join(refs)}). "
            f"Using {refs[0]} (priority: baseCommit > baseBranch > pr)."
        )

    if not refs:
        for step in walkthrough.steps:
            if step.base_location:
                warnings.append(
                    f'Step "{step.title}" has base_location but no base reference is '
                    "configured. Add baseCommit, baseBranch, or pr to repository."
                )
    return warnings


def validate_locations(walkthrough: Walkthrough) -> list[str]:
    """Check that every location string follows the location grammar."""
    warnings: list[str] = []
    for step in walkthrough.steps:
        for name, value in (("location", step.location), ("base_location", step.base_location)):
            if value and parse_location(value) is None:
                warnings.append(f'Step "{step.title}" has an invalid {name}: {value}')
    return warnings


def validate_hierarchy(walkthrough: Walkthrough) -> list[str]:
    """Check step ids and parent references.

    None of these problems stop the step tree from being built; they only
    change where a step shows up.
    """
    warnings: list[str] = []
    steps = walkthrough.steps

    counts = Counter(step.id for step in steps)
    for step_id, count in counts.items():
        if count > 1:
            warnings.append(
                f"Duplicate step id {step_id} ({count} steps); "
                "child steps attach to the first of them."
            )

    known_ids = set(counts)
    for step in steps:
        if step.parent_id is None:
            continue
        if step.parent_id == step.id:
            warnings.append(f'Step "{step.title}" is its own parent; shown as a top-level step.')
        elif step.parent_id not in known_ids:
            warnings.append(
                f'Step "{step.title}" references missing parent {step.parent_id}; '
                "shown as a top-level step."
            )

    for root in build_tree(steps):
        step = root.step
        if step.parent_id is not None and step.parent_id != step.id and step.parent_id in known_ids:
            warnings.append(
                f'Step "{step.title}" is part of a parent cycle; shown as a top-level step.'
            )
    return warnings


def validate_walkthrough(walkthrough: Walkthrough) -> list[str]:
    """Run every check and return the combined warnings."""
    return [
        *validate_base_references(walkthrough),
        *validate_locations(walkthrough),
        *validate_hierarchy(walkthrough),
    ]
