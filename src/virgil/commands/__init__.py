"""CLI command implementations for virgil.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .comment import comment
from .convert import convert
from .init import init
from .list import list_walkthroughs
from .outline import outline
from .validate import validate

__all__ = [
    "comment",
    "convert",
    "init",
    "list_walkthroughs",
    "outline",
    "validate",
]
