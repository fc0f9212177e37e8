"""
Document confidence matching for SDS search results.

Scores candidate documents against a free-text search term with a weighted
combination of product name, CAS number, manufacturer and content matches,
and ranks them so a caller can auto-select or ask for disambiguation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from sds_hazard.matching.match_result import (
    MatchConfidence,
    RankedCandidate,
    SearchDecision,
    SearchResolution,
)
from sds_hazard.matching.types import CandidateDocument, ScoringWeights
from sds_hazard.normalization.cas_extractor import CASExtractor
from sds_hazard.normalization.similarity import contains_either, string_similarity
from sds_hazard.utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)

DEFAULT_AUTO_SELECT = 0.9
DEFAULT_ACCEPT = 0.7

ComponentScore = Tuple[float, Optional[str]]


class DocumentConfidenceMatcher:
    """
    Weighted confidence matcher for candidate SDS documents.

    Product name and manufacturer use edit-distance similarity mapped onto
    score tiers; CAS scoring is binary; content matching rewards hazard
    codes, signal word and pictogram names that appear in the query.

    Thresholds load as constructor override > config > hardcoded default.

    Args:
        weights: Component weights (config ``weights`` section if None)
        auto_select_threshold: Score at or above which a match auto-selects
        accept_threshold: Caller-side accept threshold used by ``resolve``
        config: ConfigManager to read defaults from
        max_workers: Score candidates on a thread pool of this size
        cas_extractor: CASExtractor instance (creates new if None)
    """

    # (minimum similarity, sub-score, reason label), best first
    PRODUCT_NAME_TIERS = (
        (0.95, 1.0, 'Product name (exact)'),
        (0.8, 0.9, 'Product name (near match)'),
        (0.6, 0.7, 'Product name (partial)'),
    )
    PRODUCT_NAME_CONTAINS = (0.6, 'Product name (contains)')

    MANUFACTURER_TIERS = (
        (0.9, 1.0, 'Manufacturer (exact)'),
        (0.7, 0.8, 'Manufacturer (close)'),
    )

    CONTENT_H_CODE = 0.5
    CONTENT_SIGNAL_WORD = 0.3
    CONTENT_PICTOGRAM = 0.2

    def __init__(self,
                 weights: Optional[ScoringWeights] = None,
                 auto_select_threshold: Optional[float] = None,
                 accept_threshold: Optional[float] = None,
                 config: Optional[ConfigManager] = None,
                 max_workers: Optional[int] = None,
                 cas_extractor: Optional[CASExtractor] = None):
        config = config or ConfigManager()
        thresholds = config.get_all_config().get('thresholds', {})

        self.weights = weights or ScoringWeights.from_dict(config.get_weights())
        self.auto_select_threshold = (
            auto_select_threshold if auto_select_threshold is not None
            else float(thresholds.get('auto_select', DEFAULT_AUTO_SELECT))
        )
        self.accept_threshold = (
            accept_threshold if accept_threshold is not None
            else float(thresholds.get('accept', DEFAULT_ACCEPT))
        )
        for name, value in (('auto_select', self.auto_select_threshold),
                            ('accept', self.accept_threshold)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Threshold '{name}' must be between 0 and 1, got {value}")

        self.max_workers = max_workers
        self.cas_extractor = cas_extractor or CASExtractor()

    # ========================================================================
    # COMPONENT SCORES
    # ========================================================================

    def score_product_name(self, search_term: str, product_name: Optional[str]) -> ComponentScore:
        similarity = string_similarity(search_term, product_name or '')
        for minimum, score, reason in self.PRODUCT_NAME_TIERS:
            if similarity >= minimum:
                return score, reason
        if contains_either(search_term, product_name or ''):
            return self.PRODUCT_NAME_CONTAINS
        return similarity, None

    def score_cas_number(self, search_term: str, cas_number: Optional[str]) -> ComponentScore:
        if not cas_number:
            return 0.0, None
        search_cas = self.cas_extractor.find_cas_shaped(search_term)
        if search_cas and search_cas == cas_number.strip():
            return 1.0, 'CAS number (exact)'
        return 0.0, None

    def score_manufacturer(self, search_term: str, manufacturer: Optional[str]) -> ComponentScore:
        if not manufacturer:
            return 0.0, None
        similarity = string_similarity(search_term, manufacturer)
        for minimum, score, reason in self.MANUFACTURER_TIERS:
            if similarity >= minimum:
                return score, reason
        return similarity, None

    def score_content(self, search_term: str, document: CandidateDocument) -> ComponentScore:
        search_upper = search_term.upper()
        score = 0.0
        matched: List[str] = []

        hazard_texts = [c for c in document.h_codes if c] + [d for d in document.hazard_statements if d]
        if any(text.upper() in search_upper for text in hazard_texts):
            score += self.CONTENT_H_CODE
            matched.append('Hazard codes')

        if document.signal_word and document.signal_word.upper() in search_upper:
            score += self.CONTENT_SIGNAL_WORD
            matched.append('Signal word')

        if any(name and name.upper() in search_upper for name in document.pictograms):
            score += self.CONTENT_PICTOGRAM
            matched.append('Pictograms')

        reason = f"Content ({', '.join(matched)})" if matched else None
        return min(score, 1.0), reason

    # ========================================================================
    # SCORING / RANKING
    # ========================================================================

    def score(self, search_term: str, document: CandidateDocument) -> MatchConfidence:
        """
        Calculate match confidence for one candidate.

        Args:
            search_term: Free-text query (product name, CAS number, ...)
            document: Candidate document

        Returns:
            MatchConfidence with score in [0, 1]
        """
        if not search_term or not isinstance(search_term, str) or not search_term.strip():
            return MatchConfidence(score=0.0, components={
                'product_name': 0.0, 'cas_number': 0.0, 'manufacturer': 0.0, 'content_match': 0.0,
            })

        components = {}
        reasons: List[str] = []
        for name, (value, reason) in (
            ('product_name', self.score_product_name(search_term, document.product_name)),
            ('cas_number', self.score_cas_number(search_term, document.cas_number)),
            ('manufacturer', self.score_manufacturer(search_term, document.manufacturer)),
            ('content_match', self.score_content(search_term, document)),
        ):
            components[name] = value
            if reason:
                reasons.append(reason)

        total = (
            components['product_name'] * self.weights.product_name
            + components['cas_number'] * self.weights.cas_number
            + components['manufacturer'] * self.weights.manufacturer
            + components['content_match'] * self.weights.content_match
        )
        total = round(min(max(total, 0.0), 1.0), 6)

        return MatchConfidence(
            score=total,
            reasons=reasons,
            auto_select=total >= self.auto_select_threshold,
            components=components,
        )

    def rank(self, search_term: str, documents: Sequence[CandidateDocument]) -> List[RankedCandidate]:
        """
        Score and rank candidates by descending confidence.

        Ties keep their input order.

        Args:
            search_term: Free-text query
            documents: Candidate documents

        Returns:
            RankedCandidate list, rank 1 first
        """
        if not documents:
            return []

        if self.max_workers and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                confidences = list(executor.map(lambda doc: self.score(search_term, doc), documents))
        else:
            confidences = [self.score(search_term, doc) for doc in documents]

        scored = sorted(zip(documents, confidences), key=lambda pair: pair[1].score, reverse=True)

        ranked = [
            RankedCandidate(document=doc, confidence=confidence, rank=i)
            for i, (doc, confidence) in enumerate(scored, start=1)
        ]
        logger.debug(
            f"Ranked {len(ranked)} candidates for '{search_term}': "
            f"top score {ranked[0].confidence.score:.3f}"
        )
        return ranked

    def resolve(self, search_term: str, documents: Sequence[CandidateDocument],
                accept_threshold: Optional[float] = None) -> SearchResolution:
        """
        Rank candidates and decide what the caller should do.

        Args:
            search_term: Free-text query
            documents: Candidate documents
            accept_threshold: Override the caller accept threshold

        Returns:
            SearchResolution with the ranked candidates and decision
        """
        accept = self.accept_threshold if accept_threshold is None else accept_threshold
        ranked = self.rank(search_term, documents)

        if not ranked:
            decision = SearchDecision.ESCALATE
        elif ranked[0].confidence.auto_select:
            decision = SearchDecision.AUTO_SELECT
        elif ranked[0].confidence.score >= accept:
            decision = SearchDecision.ACCEPT
        elif any(c.confidence.score > 0 for c in ranked):
            decision = SearchDecision.REVIEW
        else:
            decision = SearchDecision.ESCALATE

        logger.info(f"Search '{search_term}': {decision.value} ({len(ranked)} candidates)")
        return SearchResolution(search_term=search_term, candidates=ranked, decision=decision)
