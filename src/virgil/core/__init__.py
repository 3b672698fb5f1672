"""Core walkthrough logic for virgil.

This package contains pure logic with no external I/O:
- markdown_parser: Markdown to Walkthrough compiler
- step_tree: Step hierarchy, flattened order and navigation index
- remote: Git remote URL normalization
- validation: Consistency checks for walkthrough documents
"""

from .markdown_parser import (
    LocationLink,
    ParseResult,
    RepositoryStateProvider,
    match_location_link,
    parse_markdown_walkthrough,
)
from .remote import normalize_remote_url, remotes_match
from .step_tree import (
    NavigationEntry,
    StepTreeNode,
    build_navigation_map,
    build_tree,
    flatten_tree,
)
from .validation import (
    validate_base_references,
    validate_hierarchy,
    validate_locations,
    validate_walkthrough,
)

__all__ = [
    "LocationLink",
    "NavigationEntry",
    "ParseResult",
    "RepositoryStateProvider",
    "StepTreeNode",
    "build_navigation_map",
    "build_tree",
    "flatten_tree",
    "match_location_link",
    "normalize_remote_url",
    "parse_markdown_walkthrough",
    "remotes_match",
    "validate_base_references",
    "validate_hierarchy",
    "validate_locations",
    "validate_walkthrough",
]
