"""
Labels module for task and user classification.

This module contains the extraction registry that picks one extractor per
(data type, label name) pair, and the built-in extractors.
"""

from .registry import (
    LabelExtractor,
    ExtractionRegistry,
    ExtractorResolutionConflict,
)
from .extractors import (
    DEFAULT_TASK_SKILLS_EXTRACTOR,
    DEFAULT_TASK_AFFINITIES_EXTRACTOR,
    EXAMPLE_TASK_SKILLS_EXTRACTOR,
    DIRECTORY_USER_SKILLS_EXTRACTOR,
    DEFAULT_EXTRACTORS,
)

__all__ = [
    # Registry
    "LabelExtractor",
    "ExtractionRegistry",
    "ExtractorResolutionConflict",
    # Built-in extractors
    "DEFAULT_TASK_SKILLS_EXTRACTOR",
    "DEFAULT_TASK_AFFINITIES_EXTRACTOR",
    "EXAMPLE_TASK_SKILLS_EXTRACTOR",
    "DIRECTORY_USER_SKILLS_EXTRACTOR",
    "DEFAULT_EXTRACTORS",
]
