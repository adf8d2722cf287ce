"""peruse - a terminal pager with vi-style navigation."""

import logging

from .document import Document, StaticDocument, StreamingDocument
from .geometry import Geometry
from .view import DocumentView, clip_line

# Records only go somewhere when the CLI is asked to log to a file
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'Document',
    'StaticDocument',
    'StreamingDocument',
    'Geometry',
    'DocumentView',
    'clip_line',
]
