"""Pydantic data models for virgil walkthroughs.

This package defines the data structures shared by the compiler, the
step tree and every consumer of a walkthrough:
- Walkthrough documents and their steps (Walkthrough, WalkthroughStep)
- Provenance and review data (Repository, Comment)
- The location grammar (LineRange, ParsedLocation)
- Derived step classification (StepType)

Example:
    >>> from virgil.models import WalkthroughStep
    >>> step = WalkthroughStep(id=1, title="Entry point", location="src/app.py:1-5")
    >>> step.step_type
    <StepType.POINT_IN_TIME: 'point-in-time'>
"""

from .location import LineRange, ParsedLocation, format_location, parse_location
from .walkthrough import (
    Comment,
    MetadataValue,
    Repository,
    StepType,
    Walkthrough,
    WalkthroughStep,
    classify_step,
)

__all__ = [
    "Comment",
    "LineRange",
    "MetadataValue",
    "ParsedLocation",
    "Repository",
    "StepType",
    "Walkthrough",
    "WalkthroughStep",
    "classify_step",
    "format_location",
    "parse_location",
]
