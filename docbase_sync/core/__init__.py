"""
This module implements the DocBase client and conversion between documents
and notes.
"""

from pyrollup import rollup

from . import client, exceptions, frontmatter, model, sync, transcode
from .client import *  # noqa
from .exceptions import *  # noqa
from .frontmatter import *  # noqa
from .model import *  # noqa
from .sync import *  # noqa
from .transcode import *  # noqa

__all__ = rollup(
    model,
    transcode,
    frontmatter,
    client,
    sync,
    exceptions,
)

__canonical_children__ = [
    "model",
    "transcode",
    "frontmatter",
    "client",
    "sync",
    "exceptions",
]
