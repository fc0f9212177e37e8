"""
SDS field extraction package.

Provides the field extractors that read identity, statements, pictograms,
printed ratings, hazard keywords and first aid from normalized SDS text,
plus the structured GHS Section 2 and Section 8 parsers.

Usage:
    from sds_hazard.extraction import GHSSection2Parser, SignalWordExtractor

    signal_word = SignalWordExtractor()(text)
    section2 = GHSSection2Parser().parse(text)
"""

from .base import FieldExtractor
from .categories import FirstAidExtractor, HazardCategoryExtractor
from .detector import detect_document_type, is_safety_document
from .hazard_codes import (
    HazardStatementExtractor,
    PrecautionaryStatementExtractor,
    StatementExtractor,
    unique_codes,
)
from .identity import CASNumberExtractor, ManufacturerExtractor, SignalWordExtractor
from .pictograms import PictogramExtractor
from .ratings import HMISLabelExtractor, NFPALabelExtractor
from .section2_parser import GHSSection2Parser, celsius_to_fahrenheit, parse_section2
from .section8_parser import Section8Parser
from .types import (
    ExtractionResult,
    GHSSection2Data,
    HazardClass,
    HazardStatement,
    HMISCodes,
    PhysicalProperties,
    Pictogram,
    PPERequirements,
    SDSClassificationRecord,
    ToxicityData,
)

__all__ = [
    'FieldExtractor',
    'FirstAidExtractor',
    'HazardCategoryExtractor',
    'detect_document_type',
    'is_safety_document',
    'HazardStatementExtractor',
    'PrecautionaryStatementExtractor',
    'StatementExtractor',
    'unique_codes',
    'CASNumberExtractor',
    'ManufacturerExtractor',
    'SignalWordExtractor',
    'PictogramExtractor',
    'HMISLabelExtractor',
    'NFPALabelExtractor',
    'GHSSection2Parser',
    'celsius_to_fahrenheit',
    'parse_section2',
    'Section8Parser',
    'ExtractionResult',
    'GHSSection2Data',
    'HazardClass',
    'HazardStatement',
    'HMISCodes',
    'PhysicalProperties',
    'Pictogram',
    'PPERequirements',
    'SDSClassificationRecord',
    'ToxicityData',
]
