"""
Tests for the document confidence matcher.

Tests:
- Component scores (product name tiers, CAS, manufacturer, content)
- Weighted score and auto-select threshold
- Ranking order and stability
- Search resolution decisions
- Construction from config
"""

import pytest

from sds_hazard.matching import build_matcher
from sds_hazard.matching.confidence_matcher import DocumentConfidenceMatcher
from sds_hazard.matching.match_result import MatchConfidence, SearchDecision
from sds_hazard.matching.types import CandidateDocument, ScoringWeights
from sds_hazard.pipeline.orchestrator import SDSClassifier
from sds_hazard.utils.config_manager import ConfigManager
from tests.fixtures.test_data import ACETONE_SDS


# ============================================================================
# COMPONENT SCORES
# ============================================================================

class TestComponentScores:

    def test_product_name_exact(self, matcher):
        assert matcher.score_product_name("acetone ", "Acetone") == (1.0, 'Product name (exact)')

    def test_product_name_near_match(self, matcher):
        # one edit in ten characters: similarity 0.9
        assert matcher.score_product_name("Isopropanl", "Isopropano") == (0.9, 'Product name (near match)')

    def test_product_name_partial(self, matcher):
        # two edits in seven characters: similarity ~0.71
        assert matcher.score_product_name("Acetate", "Acetone") == (0.7, 'Product name (partial)')

    def test_product_name_contains(self, matcher):
        score, reason = matcher.score_product_name("Acetone", "Acetone-Free Nail Polish Remover")
        assert (score, reason) == (0.6, 'Product name (contains)')

    def test_product_name_raw_similarity(self, matcher):
        score, reason = matcher.score_product_name("Toluene", "Methanol")
        assert reason is None
        assert 0.0 <= score < 0.6

    def test_cas_exact(self, matcher):
        assert matcher.score_cas_number("acetone 67-64-1", "67-64-1") == (1.0, 'CAS number (exact)')

    def test_cas_is_binary(self, matcher):
        assert matcher.score_cas_number("67-64-2", "67-64-1") == (0.0, None)
        assert matcher.score_cas_number("Acetone", "67-64-1") == (0.0, None)
        assert matcher.score_cas_number("67-64-1", None) == (0.0, None)

    def test_manufacturer_tiers(self, matcher):
        assert matcher.score_manufacturer("Acme Chemical Co.", "ACME CHEMICAL CO.") == (1.0, 'Manufacturer (exact)')
        assert matcher.score_manufacturer("Acme Chemical", "Acme Chemicals") == (1.0, 'Manufacturer (exact)')
        assert matcher.score_manufacturer("anything", None) == (0.0, None)

    def test_manufacturer_close(self, matcher):
        # four edits in seventeen characters: similarity ~0.76
        assert matcher.score_manufacturer("Acme Chemical", "Acme Chemical Co.") == (0.8, 'Manufacturer (close)')

    def test_content_all_components(self, matcher, acetone_candidate):
        score, reason = matcher.score_content("H225 DANGER flame acetone", acetone_candidate)
        assert score == pytest.approx(1.0)
        assert reason == "Content (Hazard codes, Signal word, Pictograms)"

    def test_content_statement_text(self, matcher, acetone_candidate):
        score, reason = matcher.score_content("causes serious eye irritation", acetone_candidate)
        assert score == pytest.approx(0.5)
        assert reason == "Content (Hazard codes)"

    def test_content_none(self, matcher, acetone_candidate):
        assert matcher.score_content("Acetone", acetone_candidate) == (0.0, None)


# ============================================================================
# WEIGHTED SCORE
# ============================================================================

class TestScore:

    def test_acetone_exact_product_name(self, matcher, acetone_candidate):
        confidence = matcher.score("Acetone", acetone_candidate)
        assert confidence.components['product_name'] == 1.0
        assert 'Product name (exact)' in confidence.reasons
        assert confidence.score >= 0.4
        assert not confidence.auto_select

    def test_components_keys(self, matcher, acetone_candidate):
        confidence = matcher.score("Acetone", acetone_candidate)
        assert set(confidence.components) == {'product_name', 'cas_number', 'manufacturer', 'content_match'}

    def test_empty_search_scores_zero(self, matcher, acetone_candidate):
        for term in ["", "   ", None]:
            confidence = matcher.score(term, acetone_candidate)
            assert confidence.score == 0.0
            assert confidence.reasons == []

    def test_auto_select_at_threshold(self, acetone_candidate):
        weights = ScoringWeights(product_name=0.9, cas_number=0.1, manufacturer=0.0, content_match=0.0)
        matcher = DocumentConfidenceMatcher(weights=weights, config=ConfigManager())
        confidence = matcher.score("Acetone", acetone_candidate)
        assert confidence.score == pytest.approx(0.9)
        assert confidence.auto_select

    def test_auto_select_threshold_override(self, acetone_candidate):
        matcher = DocumentConfidenceMatcher(auto_select_threshold=0.4, config=ConfigManager())
        assert matcher.score("Acetone", acetone_candidate).auto_select

    def test_score_bounds(self, matcher, candidates):
        terms = ["Acetone", "67-64-1", "H225 DANGER flame", "zzz", "Acme Chemical Co.",
                 "Acetone 67-64-1 Acme Chemical Co. H225 DANGER flame"]
        for term in terms:
            for doc in candidates:
                confidence = matcher.score(term, doc)
                assert 0.0 <= confidence.score <= 1.0
                assert confidence.auto_select == (confidence.score >= matcher.auto_select_threshold)

    def test_match_confidence_validates_score(self):
        with pytest.raises(ValueError):
            MatchConfidence(score=1.5)


# ============================================================================
# RANKING
# ============================================================================

class TestRanking:

    def test_acetone_ranks_first(self, matcher, candidates):
        ranked = matcher.rank("Acetone", candidates)
        assert ranked[0].document.document_id == 'acme-acetone'
        assert [c.rank for c in ranked] == [1, 2]
        assert ranked[0].confidence.score > ranked[1].confidence.score
        assert ranked[1].confidence.components['product_name'] == 0.6

    def test_ties_keep_input_order(self, matcher):
        docs = [CandidateDocument(product_name='Acetone', document_id=str(i)) for i in range(5)]
        ranked = matcher.rank("Acetone", docs)
        assert [c.document.document_id for c in ranked] == ['0', '1', '2', '3', '4']

    def test_parallel_ranking_matches_sequential(self, candidates):
        sequential = DocumentConfidenceMatcher(config=ConfigManager())
        parallel = DocumentConfidenceMatcher(config=ConfigManager(), max_workers=4)
        term = "Acetone 67-64-1"
        assert [c.to_dict() for c in sequential.rank(term, candidates)] == \
            [c.to_dict() for c in parallel.rank(term, candidates)]

    def test_empty_candidates(self, matcher):
        assert matcher.rank("Acetone", []) == []


# ============================================================================
# RESOLUTION
# ============================================================================

class TestResolution:

    def test_review_below_accept(self, matcher, candidates):
        resolution = matcher.resolve("Acetone", candidates)
        assert resolution.decision == SearchDecision.REVIEW
        assert resolution.requires_review
        assert not resolution.is_resolved
        assert resolution.best.document.document_id == 'acme-acetone'

    def test_accept_with_caller_threshold(self, matcher, candidates):
        resolution = matcher.resolve("Acetone", candidates, accept_threshold=0.3)
        assert resolution.decision == SearchDecision.ACCEPT
        assert resolution.is_resolved

    def test_auto_select(self, candidates):
        matcher = DocumentConfidenceMatcher(auto_select_threshold=0.4, config=ConfigManager())
        assert matcher.resolve("Acetone", candidates).decision == SearchDecision.AUTO_SELECT

    def test_escalate_when_nothing_matches(self, matcher, candidates):
        resolution = matcher.resolve("zzzz", candidates)
        assert resolution.decision == SearchDecision.ESCALATE
        assert resolution.confidence == 0.0

    def test_escalate_without_candidates(self, matcher):
        resolution = matcher.resolve("Acetone", [])
        assert resolution.decision == SearchDecision.ESCALATE
        assert resolution.best is None

    def test_to_dict(self, matcher, candidates):
        result = matcher.resolve("Acetone", candidates).to_dict()
        assert result['decision'] == 'review'
        assert result['candidates'][0]['rank'] == 1


# ============================================================================
# CONSTRUCTION
# ============================================================================

class TestConstruction:

    def test_defaults_from_config(self, matcher):
        assert matcher.auto_select_threshold == 0.9
        assert matcher.accept_threshold == 0.7
        assert matcher.weights == ScoringWeights()

    def test_invalid_weights(self):
        with pytest.raises(ValueError):
            ScoringWeights(product_name=0.5, cas_number=0.5, manufacturer=0.5, content_match=0.0)
        with pytest.raises(ValueError):
            ScoringWeights(product_name=-0.1, cas_number=0.6, manufacturer=0.4, content_match=0.1)
        with pytest.raises(ValueError):
            ScoringWeights.from_dict({'name': 1.0})

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            DocumentConfidenceMatcher(auto_select_threshold=1.5, config=ConfigManager())

    def test_build_matcher_from_file(self, write_config):
        path = write_config({
            'thresholds': {'auto_select': 0.8, 'accept': 0.5},
            'weights': {'product_name': 0.5, 'cas_number': 0.3, 'manufacturer': 0.1, 'content_match': 0.1},
        })
        matcher = build_matcher(path)
        assert matcher.auto_select_threshold == 0.8
        assert matcher.accept_threshold == 0.5
        assert matcher.weights.product_name == 0.5

    def test_build_matcher_rejects_invalid_config(self, write_config):
        path = write_config({'weights': {'product_name': 0.9}})
        with pytest.raises(ValueError):
            build_matcher(path)

    def test_build_matcher_kwargs_override(self, write_config):
        path = write_config({'thresholds': {'auto_select': 0.8}})
        assert build_matcher(path, auto_select_threshold=0.95).auto_select_threshold == 0.95

    def test_candidate_from_record(self):
        record = SDSClassifier(config=ConfigManager()).classify_text(ACETONE_SDS)
        candidate = CandidateDocument.from_record(record, product_name='Acetone', document_id='doc-1')
        assert candidate.h_codes == ['H225', 'H319', 'H336']
        assert candidate.pictograms == ['flame', 'exclamation mark']
        assert candidate.signal_word == 'DANGER'
        assert candidate.cas_number == '67-64-1'
