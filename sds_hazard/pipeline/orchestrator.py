"""
SDS classification pipeline.

Runs one document through every extraction phase and assembles the
``SDSClassificationRecord``:

    normalize -> detect document type -> field extractors -> Section 2 parser
    -> Section 8 (caller excerpt or located) -> HMIS converter -> quality score

A phase that finds nothing leaves its fields empty; later phases still run.
Non-text input and unexpected failures produce a degraded record instead of
an exception.
"""

from typing import List, Optional, Tuple

from loguru import logger

from sds_hazard.conversion.hmis_converter import GHSToHMISConverter
from sds_hazard.extraction.categories import FirstAidExtractor, HazardCategoryExtractor
from sds_hazard.extraction.detector import detect_document_type, is_safety_document
from sds_hazard.extraction.hazard_codes import (
    HazardStatementExtractor,
    PrecautionaryStatementExtractor,
    unique_codes,
)
from sds_hazard.extraction.identity import (
    CASNumberExtractor,
    ManufacturerExtractor,
    SignalWordExtractor,
)
from sds_hazard.extraction.pictograms import PictogramExtractor
from sds_hazard.extraction.ratings import HMISLabelExtractor, NFPALabelExtractor
from sds_hazard.extraction.section2_parser import GHSSection2Parser
from sds_hazard.extraction.section8_parser import Section8Parser
from sds_hazard.extraction.types import (
    ExtractionResult,
    PPERequirements,
    SDSClassificationRecord,
)
from sds_hazard.normalization.text_normalizer import TextNormalizer
from sds_hazard.pipeline.quality_scorer import QualityScorer
from sds_hazard.rules import RuleSet
from sds_hazard.utils.config_manager import ConfigManager

DEGRADED_QUALITY_SCORE = 5

# Points per phase that produced data
PHASE_CONFIDENCE = (
    ('manufacturer', 10),
    ('cas_number', 15),
    ('signal_word', 10),
    ('h_codes', 20),
    ('p_codes', 10),
    ('pictograms', 15),
    ('extracted_hmis', 10),
    ('nfpa_codes', 5),
)


class SDSClassifier:
    """
    Classifies SDS documents into standardized hazard data.

    Settings resolve as constructor override > YAML config > hardcoded
    default. The classifier holds no per-document state and can be shared
    between threads.

    Args:
        config: ConfigManager (defaults only when None)
        rules: Rule tables (built from the config ``rules`` section if None)
        normalizer: TextNormalizer instance (creates new if None)
        readable_threshold: Override the quality readable threshold
        locate_section8: Override whether Section 8 is searched in the
            document when no excerpt is supplied

    Examples:
        >>> classifier = SDSClassifier()
        >>> record = classifier.classify_text(
        ...     "CAS: 67-64-1\\nSignal Word: DANGER\\nH225: Highly flammable liquid and vapor")
        >>> record.cas_number, record.signal_word, record.h_codes
        ('67-64-1', 'DANGER', ['H225'])
    """

    def __init__(self,
                 config: Optional[ConfigManager] = None,
                 rules: Optional[RuleSet] = None,
                 normalizer: Optional[TextNormalizer] = None,
                 readable_threshold: Optional[int] = None,
                 locate_section8: Optional[bool] = None):
        self.config = config or ConfigManager()
        self.rules = rules or RuleSet.from_overrides(self.config.get_rule_overrides())
        self.normalizer = normalizer or TextNormalizer()

        extraction = self.config.get_all_config().get('extraction', {})
        min_length = extraction.get('min_statement_length', 10)

        self.manufacturer_extractor = ManufacturerExtractor()
        self.cas_extractor = CASNumberExtractor()
        self.signal_word_extractor = SignalWordExtractor()
        self.h_code_extractor = HazardStatementExtractor(min_description_length=min_length)
        self.p_code_extractor = PrecautionaryStatementExtractor(
            min_description_length=min_length,
            max_statements=extraction.get('max_p_codes', 20),
        )
        self.pictogram_extractor = PictogramExtractor(self.rules)
        self.hmis_label_extractor = HMISLabelExtractor()
        self.nfpa_label_extractor = NFPALabelExtractor()
        self.category_extractor = HazardCategoryExtractor(self.rules)
        self.first_aid_extractor = FirstAidExtractor(max_chars=extraction.get('first_aid_max_chars', 500))

        self.section2_parser = GHSSection2Parser(
            rules=self.rules,
            window=extraction.get('section2_window', 3000),
            fallback_length=extraction.get('section2_fallback', 2000),
            search_property_sections=extraction.get('search_property_sections', True),
        )
        self.section8_parser = Section8Parser(
            rules=self.rules,
            window=extraction.get('section8_window', 2000),
        )
        self.converter = GHSToHMISConverter(self.rules)

        if readable_threshold is None:
            readable_threshold = self.config.get_quality_param('readable_threshold')
        self.quality_scorer = QualityScorer(readable_threshold=readable_threshold)

        self.locate_section8 = (
            locate_section8 if locate_section8 is not None
            else bool(extraction.get('locate_section8', True))
        )

    def classify(self, text: str, section8_text: Optional[str] = None) -> ExtractionResult:
        """
        Classify one document.

        Args:
            text: Raw or normalized document text
            section8_text: Optional Section 8 excerpt supplied by the caller

        Returns:
            ExtractionResult; ``success`` is False for non-text input or an
            internal failure, in which case ``record`` is a degraded record
        """
        if not isinstance(text, str):
            message = f"Input is not text (got {type(text).__name__})"
            logger.warning(message)
            return self.degraded_result(message)

        try:
            return self._classify(text, section8_text)
        except Exception as e:
            logger.exception(f"Classification failed: {e}")
            return self.degraded_result(f"Extraction failed: {e}")

    def classify_text(self, text: str, section8_text: Optional[str] = None) -> SDSClassificationRecord:
        """Classify one document and return just the record."""
        return self.classify(text, section8_text).record

    def degraded_result(self, message: str) -> ExtractionResult:
        """Result carrying a minimal, unreadable record and the error message."""
        record = SDSClassificationRecord(quality_score=DEGRADED_QUALITY_SCORE, is_readable=False)
        return ExtractionResult(success=False, record=record, confidence=0, errors=[message])

    def _classify(self, text: str, section8_text: Optional[str]) -> ExtractionResult:
        normalized = self.normalizer.normalize(text)
        warnings: List[str] = []

        if not normalized:
            warnings.append("Document contains no text")

        document_type = detect_document_type(normalized)
        if normalized and not is_safety_document(document_type):
            warnings.append(f"Document type '{document_type}' is not a safety data sheet")

        cas_number = self.cas_extractor(normalized)
        if cas_number and not self.cas_extractor.is_valid(cas_number):
            warnings.append(f"CAS number {cas_number} fails check digit validation")

        hazard_statements = self.h_code_extractor(normalized)
        precautionary_statements = self.p_code_extractor(normalized)
        categories = self.category_extractor(normalized)

        section2 = self.section2_parser.parse(normalized)
        if normalized and not section2.section_found:
            warnings.append("Section 2 heading not found; hazard data read from document start")

        section8_ppe, ppe_text = self._section8(normalized, section8_text)
        hmis_codes = self.converter.convert(section2, ppe_text)

        record = SDSClassificationRecord(
            manufacturer=self.manufacturer_extractor(normalized),
            cas_number=cas_number,
            signal_word=self.signal_word_extractor(normalized),
            h_codes=unique_codes(hazard_statements),
            p_codes=unique_codes(precautionary_statements),
            hazard_statements=hazard_statements,
            precautionary_statements=precautionary_statements,
            pictograms=self.pictogram_extractor(normalized),
            hmis_codes=hmis_codes,
            extracted_hmis=self.hmis_label_extractor(normalized),
            nfpa_codes=self.nfpa_label_extractor(normalized),
            physical_hazards=categories['physical'],
            health_hazards=categories['health'],
            environmental_hazards=categories['environmental'],
            first_aid=self.first_aid_extractor(normalized),
            ghs_section2=section2,
            section8_ppe=section8_ppe,
            document_type=document_type,
        )
        self.quality_scorer.apply(record, len(normalized))

        confidence = self.pipeline_confidence(record)
        logger.debug(
            f"Classified {document_type} document: {len(record.h_codes)} H-codes, "
            f"HMIS {hmis_codes.label}, quality {record.quality_score}, confidence {confidence}"
        )
        return ExtractionResult(success=True, record=record, confidence=confidence, warnings=warnings)

    def _section8(self, normalized: str,
                  section8_text: Optional[str]) -> Tuple[Optional[PPERequirements], Optional[str]]:
        """Section 8 requirements and the text handed to the converter."""
        if section8_text:
            excerpt = self.normalizer.normalize(section8_text)
            if excerpt:
                return self.section8_parser.parse(excerpt, is_excerpt=True), excerpt

        if self.locate_section8 and normalized:
            span = self.section8_parser.locate(normalized)
            if span is not None:
                return self.section8_parser.parse(span.text, is_excerpt=True), span.text

        return None, None

    @staticmethod
    def pipeline_confidence(record: SDSClassificationRecord) -> int:
        """Additive confidence over the phases that produced data, capped at 100."""
        confidence = sum(points for attr, points in PHASE_CONFIDENCE if getattr(record, attr))
        return min(confidence, 100)
