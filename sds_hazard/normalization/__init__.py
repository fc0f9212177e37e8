"""
Text normalization package for SDS text processing.

This package provides the text cleanup applied before extraction, CAS
number handling, named-section location, and the string similarity
primitive used by the document matcher.
"""

from .text_normalizer import TextNormalizer, normalize_text, NORMALIZATION_VERSION
from .cas_extractor import CASExtractor
from .sections import SectionSpan, locate_section
from .similarity import string_similarity, contains_either

__all__ = [
    'TextNormalizer',
    'normalize_text',
    'NORMALIZATION_VERSION',
    'CASExtractor',
    'SectionSpan',
    'locate_section',
    'string_similarity',
    'contains_either',
]
