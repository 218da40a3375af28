"""
Label Composition
=================

Record normalization, container grouping and label layout.
"""

from .text import chunk
from .normalizer import normalize
from .grouping import group
from .composer import compose, compose_all

__all__ = ['chunk', 'normalize', 'group', 'compose', 'compose_all']
