"""Markdown walkthrough compiler.

Turns an authored markdown document into a Walkthrough::

    # <title>

    ---
    remote: git@github.com:org/repo.git
    commit: 4f2a9c1
    audience: backend
    ---

    <description>

    ## <step title>
    [handler (10-20,33)](src/server.ts)
    [Base (5-9)](src/server.ts)

    <step body>

The scan is strictly top to bottom. Nothing in here raises for malformed
input: every anomaly becomes a warning string and a best-effort document
is still returned.
"""

import json
import logging
import math
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Protocol

import yaml

from ..constants import (
    MAX_METADATA_CHARS,
    MAX_METADATA_DEPTH,
    MAX_METADATA_NODES,
    UNTITLED_TITLE,
)
from ..models import MetadataValue, Repository, Walkthrough, WalkthroughStep, parse_location

logger = logging.getLogger(__name__)

REPOSITORY_KEYS = ("remote", "commit", "baseBranch", "baseCommit", "pr")

_LINE_BREAK = re.compile(r"\r?\n")
# A location link must be the only thing on its line
_LINK_LINE = re.compile(r"^\[([^\]]+)\]\(([^)]+)\)$")
_BODY_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_LINE_SUFFIX = re.compile(r"\(([^()]*)\)\s*$")
_BASE_LABEL = re.compile(r"^base\s*\(", re.IGNORECASE)
_SINGLE_LINE = re.compile(r"^\d+$")
_LINE_SPAN = re.compile(r"^(\d+)\s*-\s*(\d+)$")


class RepositoryStateProvider(Protocol):
    """Source of repository info when the frontmatter has none."""

    def get_remote(self) -> str | None: ...

    def get_commit(self) -> str | None: ...


@dataclass
class ParseResult:
    """Compiled walkthrough plus the warnings collected on the way."""

    walkthrough: Walkthrough
    warnings: list[str] = field(default_factory=list)


@dataclass
class LocationLink:
    """A location link recognised in a markdown line."""

    location: str
    is_base: bool
    range_count: int


def _link_location(text: str, url: str) -> LocationLink | None:
    """Build a location from ``[text (ranges)](url)``, or None if text has no ranges."""
    suffix = _LINE_SUFFIX.search(text)
    if not suffix or not suffix.group(1).strip():
        return None

    ranges: list[str] = []
    for token in suffix.group(1).split(","):
        token = token.strip()
        span = _LINE_SPAN.match(token)
        if span:
            ranges.append(f"{span.group(1)}-{span.group(2)}")
        elif _SINGLE_LINE.match(token):
            ranges.append(f"{token}-{token}")
        else:
            return None

    return LocationLink(
        location=f"{url}:{','.join(ranges)}",
        is_base=bool(_BASE_LABEL.match(text.strip())),
        range_count=len(ranges),
    )


def match_location_link(line: str) -> LocationLink | None:
    """Recognise a line consisting of a single location link.

    Args:
        line: One markdown line

    Returns:
        LocationLink, or None if the line is not a location link
    """
    link = _LINK_LINE.match(line.strip())
    if not link:
        return None
    return _link_location(link.group(1), link.group(2))


def _is_valid_location(link: LocationLink) -> bool:
    parsed = parse_location(link.location)
    return parsed is not None and len(parsed.ranges) == link.range_count


def _within_limits(value: Any) -> bool:
    """Walk a loaded YAML value without expanding it past the metadata limits.

    Aliases are counted every time they are reached, so a small document
    that expands into a huge (or self-referencing) structure fails here.
    """
    visited = 0
    chars = 0
    stack = [(value, 0)]
    while stack:
        item, depth = stack.pop()
        visited += 1
        if isinstance(item, str):
            chars += len(item)
        if (
            visited > MAX_METADATA_NODES
            or depth > MAX_METADATA_DEPTH
            or chars > MAX_METADATA_CHARS
        ):
            return False
        if isinstance(item, dict):
            stack.extend((child, depth + 1) for pair in item.items() for child in pair)
        elif isinstance(item, (list, tuple, set)):
            stack.extend((child, depth + 1) for child in item)
    return True


def _structured_to_string(value: Any) -> str | None:
    if not _within_limits(value):
        return None
    try:
        text = json.dumps(value, default=str)
    except (TypeError, ValueError):
        # Non-string nested keys
        text = str(value)
    if len(text) > MAX_METADATA_CHARS:
        return None
    return text


def _coerce_metadata(data: dict[Any, Any], warnings: list[str]) -> dict[str, MetadataValue]:
    metadata: dict[str, MetadataValue] = {}
    for key, value in data.items():
        if key in REPOSITORY_KEYS:
            continue
        name = str(key)
        if value is None:
            warnings.append(f'Frontmatter key "{name}" has no value; ignored')
        elif isinstance(value, float) and not math.isfinite(value):
            # JSON has no nan/inf
            metadata[name] = str(value)
        elif isinstance(value, (bool, int, float, str)):
            metadata[name] = value
        elif isinstance(value, date):
            metadata[name] = value.isoformat()
        else:
            text = _structured_to_string(value)
            if text is None:
                warnings.append(f'Frontmatter key "{name}" is too large to store; ignored')
            else:
                metadata[name] = text
    return metadata


def _repository_from_frontmatter(
    data: dict[Any, Any], warnings: list[str]
) -> Repository | None:
    fields: dict[str, str | int] = {}
    for key in REPOSITORY_KEYS:
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if key == "pr":
            valid = isinstance(value, int) and not isinstance(value, bool)
        else:
            valid = isinstance(value, str)
        if valid:
            fields[key] = value
        else:
            expected = "a number" if key == "pr" else "a string"
            warnings.append(f'Frontmatter field "{key}" must be {expected}; ignored')

    if not fields:
        return None
    return Repository.model_validate(fields)


def _skip_blank(lines: list[str], i: int) -> int:
    while i < len(lines) and not lines[i].strip():
        i += 1
    return i


def parse_markdown_walkthrough(
    markdown: str,
    repository_state: RepositoryStateProvider | None = None,
    *,
    load_yaml: Callable[[str], Any] = yaml.safe_load,
) -> ParseResult:
    """Compile a markdown document into a Walkthrough.

    Args:
        markdown: Markdown source
        repository_state: Consulted for remote/commit when the frontmatter
            supplies no repository fields
        load_yaml: Frontmatter loader; must raise on unloadable input

    Returns:
        ParseResult with the walkthrough and any warnings
    """
    warnings: list[str] = []
    lines = _LINE_BREAK.split(markdown)
    i = 0

    # Title: first "# " heading
    title = ""
    while i < len(lines):
        line = lines[i].strip()
        i += 1
        if line.startswith("# "):
            title = line[2:].strip()
            break

    if not title:
        title = UNTITLED_TITLE
        warnings.append(f'No title found (first # heading), using "{UNTITLED_TITLE}"')
        i = 0

    # Frontmatter between "---" fences
    metadata: dict[str, MetadataValue] | None = None
    repository: Repository | None = None

    i = _skip_blank(lines, i)
    if i < len(lines) and lines[i].strip() == "---":
        opening = i
        end = i + 1
        while end < len(lines) and lines[end].strip() != "---":
            end += 1

        if end >= len(lines):
            warnings.append("YAML frontmatter not properly closed (missing closing ---)")
            # Unterminated frontmatter is left in place as description text
            i = opening
        else:
            i = end + 1
            frontmatter_text = "\n".join(lines[opening + 1 : end])
            if frontmatter_text.strip():
                try:
                    data = load_yaml(frontmatter_text)
                except Exception as e:  # loader errors include RecursionError on deep nesting
                    warnings.append(f"Invalid YAML frontmatter: {e}")
                    data = None

                if isinstance(data, dict):
                    repository = _repository_from_frontmatter(data, warnings)
                    metadata = _coerce_metadata(data, warnings) or None
                elif data is not None:
                    warnings.append("YAML frontmatter is not a mapping; ignored")

    # Description: everything before the first "## " heading
    description_lines: list[str] = []
    while i < len(lines) and not lines[i].strip().startswith("## "):
        description_lines.append(lines[i])
        i += 1
    description = "\n".join(description_lines).strip() or None

    steps: list[WalkthroughStep] = []
    step_id = 1
    while i < len(lines):
        if not lines[i].strip().startswith("## "):
            i += 1
            continue

        step_title = lines[i].strip()[3:].strip()
        i = _skip_blank(lines, i + 1)

        # Up to two location links (head and base, either order)
        location: str | None = None
        base_location: str | None = None
        for _ in range(2):
            if i >= len(lines):
                break
            link = match_location_link(lines[i])
            if link is None:
                break
            i += 1

            if not _is_valid_location(link):
                warnings.append(f'Invalid location format in step "{step_title}": {link.location}')
            elif link.is_base:
                if base_location:
                    warnings.append(
                        f'Multiple base location links in step "{step_title}". Using first one.'
                    )
                else:
                    base_location = link.location
            elif location:
                warnings.append(f'Multiple location links in step "{step_title}". Using first one.')
            else:
                location = link.location

            i = _skip_blank(lines, i)

        body_lines: list[str] = []
        while i < len(lines) and not lines[i].strip().startswith("## "):
            body_lines.append(lines[i])
            i += 1
        body = "\n".join(body_lines).strip() or None

        if body:
            for stray in _BODY_LINK.finditer(body):
                extracted = _link_location(stray.group(1), stray.group(2))
                if extracted:
                    kind = "Base location" if extracted.is_base else "Location"
                    warnings.append(
                        f'{kind} link found in step body for "{step_title}": {stray.group(0)}. '
                        "This link will be ignored; only location links immediately "
                        "after the step title are used."
                    )

        steps.append(
            WalkthroughStep(
                id=step_id,
                title=step_title,
                body=body,
                location=location,
                base_location=base_location,
            )
        )
        step_id += 1

    if not steps:
        warnings.append("No steps found (no ## headings)")

    if repository is None and repository_state is not None:
        remote = repository_state.get_remote()
        commit = repository_state.get_commit()
        if remote or commit:
            repository = Repository(remote=remote or None, commit=commit or None)

    logger.debug(f"Parsed walkthrough '{title}': {len(steps)} steps, {len(warnings)} warnings")

    walkthrough = Walkthrough(
        title=title,
        description=description,
        repository=repository,
        metadata=metadata,
        steps=steps,
    )
    return ParseResult(walkthrough=walkthrough, warnings=warnings)
