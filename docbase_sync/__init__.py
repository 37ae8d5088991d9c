"""
docbase-sync: keep markdown documents in sync with DocBase notes.
"""

from pyrollup import rollup

from . import core
from .core import *  # noqa

__all__ = rollup(core)

__canonical_children__ = [
    "core",
]
