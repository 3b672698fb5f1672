"""Walkthrough document models.

These models define the persisted ``*.walkthrough.json`` format. Python
attributes are snake_case; the JSON field names (``parentId``,
``baseCommit``, ``base_location``, ...) are kept through aliases so that a
document round-trips with ``model_dump(by_alias=True, exclude_none=True)``.
"""

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .location import ParsedLocation, parse_location

# Frontmatter metadata is narrowed to plain scalars at the parse boundary
MetadataValue = str | int | float | bool


class StepType(str, Enum):
    """How a step is presented, derived from which locations it carries."""

    DIFF = "diff"
    POINT_IN_TIME = "point-in-time"
    BASE_ONLY = "base-only"
    INFORMATIONAL = "informational"


class Comment(BaseModel):
    """Reviewer comment attached to a step."""

    id: str = Field(description="Opaque unique token")
    author: str = Field(description="Display name of the author")
    body: str = Field(description="Comment text (markdown)")


class Repository(BaseModel):
    """Provenance of a walkthrough: where and against which state it was written.

    At most one of ``base_commit``, ``base_branch`` and ``pr`` is expected.
    When several are set the priority ``baseCommit > baseBranch > pr`` decides
    which one is used; reporting the conflict is left to validation.

    Attributes:
        remote: Git remote URL (SSH, HTTPS or bare host/path).
        commit: Commit the walkthrough was authored against.
        base_commit: Explicit base commit for diff steps.
        base_branch: Branch whose tip is the base for diff steps.
        pr: Pull request number whose base branch is the base for diff steps.
    """

    model_config = ConfigDict(populate_by_name=True)

    remote: str | None = None
    commit: str | None = None
    base_commit: str | None = Field(default=None, alias="baseCommit")
    base_branch: str | None = Field(default=None, alias="baseBranch")
    pr: int | None = None

    def base_references(self) -> list[str]:
        """Names of the base-reference fields that are set, in priority order."""
        names = []
        if self.base_commit is not None:
            names.append("baseCommit")
        if self.base_branch is not None:
            names.append("baseBranch")
        if self.pr is not None:
            names.append("pr")
        return names

    def base_reference(self) -> tuple[str, str | int] | None:
        """Return the winning ``(field name, value)`` base reference, if any."""
        if self.base_commit is not None:
            return "baseCommit", self.base_commit
        if self.base_branch is not None:
            return "baseBranch", self.base_branch
        if self.pr is not None:
            return "pr", self.pr
        return None


class WalkthroughStep(BaseModel):
    """A single unit of narration in a walkthrough.

    Attributes:
        id: Identifier unique within the walkthrough (not necessarily contiguous).
        title: Step heading.
        body: Markdown narration.
        location: Head-state location, ``path:start-end[,start-end]``.
        base_location: Base-state location in the same format.
        comments: Comments appended by reviewers, in order.
        parent_id: Id of the parent step; None for a top-level step.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = Field(min_length=1)
    body: str | None = None
    location: str | None = None
    base_location: str | None = None
    comments: list[Comment] | None = None
    parent_id: int | None = Field(default=None, alias="parentId")

    @property
    def step_type(self) -> StepType:
        return classify_step(self)

    @property
    def parsed_location(self) -> ParsedLocation | None:
        return parse_location(self.location) if self.location else None

    @property
    def parsed_base_location(self) -> ParsedLocation | None:
        return parse_location(self.base_location) if self.base_location else None

    def add_comment(self, author: str, body: str) -> Comment:
        """Append a comment with a fresh id and return it."""
        comment = Comment(id=uuid.uuid4().hex, author=author, body=body)
        if self.comments is None:
            self.comments = []
        self.comments.append(comment)
        return comment


class Walkthrough(BaseModel):
    """Root walkthrough document.

    ``steps`` keeps source order. Display order for hierarchical documents
    comes from the step tree (see ``virgil.core.step_tree``).
    """

    title: str = Field(min_length=1)
    description: str | None = None
    repository: Repository | None = None
    metadata: dict[str, MetadataValue] | None = None
    steps: list[WalkthroughStep] = Field(default_factory=list)

    def get_step(self, step_id: int) -> WalkthroughStep | None:
        """Return the first step with the given id."""
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to the persisted JSON form."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


def classify_step(step: WalkthroughStep) -> StepType:
    """Classify a step by which of its locations are present."""
    if step.location and step.base_location:
        return StepType.DIFF
    if step.location:
        return StepType.POINT_IN_TIME
    if step.base_location:
        return StepType.BASE_ONLY
    return StepType.INFORMATIONAL
