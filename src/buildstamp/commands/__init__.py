"""CLI command implementations for buildstamp.

This package contains the implementation of each CLI command,
separated from the CLI framework setup in cli.py.
"""

from .check import check
from .finish import finish
from .history import history
from .init import init
from .next import next_build
from .render import render

__all__ = [
    "check",
    "finish",
    "history",
    "init",
    "next_build",
    "render",
]
