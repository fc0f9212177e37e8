"""
Invariant Test Suite: stability gates for the SDS hazard classifier

These tests encode system-wide invariants as executable assertions. They are
NOT unit tests for individual functions; they guard properties every output
must keep no matter which document goes in.

Invariant categories:
  1. Threshold ordering (control-surface geometry)
  2. Rating ranges (HMIS 0-4, PPE letter set, quality 0-100)
  3. Determinism (same input, same output)
  4. Severity monotonicity (more hazards never lower health)
  5. Match score bounds and the auto-select boundary
  6. Normalization version consistency

Run:  pytest tests/test_invariants.py -v
"""

import pytest
import yaml

from sds_hazard.extraction.types import GHSSection2Data, HazardClass
from sds_hazard.extraction.section2_parser import celsius_to_fahrenheit
from sds_hazard.matching.types import CandidateDocument
from sds_hazard.normalization.text_normalizer import NORMALIZATION_VERSION, TextNormalizer
from sds_hazard.pipeline.orchestrator import DEGRADED_QUALITY_SCORE, SDSClassifier
from sds_hazard.rules import HMIS_PPE_CODES
from sds_hazard.utils.config_manager import DEFAULT_CONFIG_PATH, ConfigManager
from tests.fixtures.test_data import (
    ACETONE_SDS,
    FORMALIN_SDS,
    LEGACY_MSDS,
    MINIMAL_H225_TEXT,
    PRODUCT_DATA_SHEET,
)

ALL_DOCUMENTS = [ACETONE_SDS, FORMALIN_SDS, LEGACY_MSDS, MINIMAL_H225_TEXT, PRODUCT_DATA_SHEET]

HEALTH_CODES = ['H300', 'H301', 'H302', 'H304', 'H310', 'H311', 'H312', 'H314', 'H315', 'H317',
                'H318', 'H319', 'H330', 'H331', 'H332', 'H334', 'H335', 'H336', 'H340', 'H341',
                'H350', 'H351', 'H360', 'H361', 'H370', 'H371', 'H372', 'H373']


@pytest.fixture
def config():
    """Load the canonical YAML config."""
    with open(DEFAULT_CONFIG_PATH, "r") as f:
        return yaml.safe_load(f)


# ============================================================================
# 1. THRESHOLD ORDERING
# ============================================================================

class TestThresholdOrdering:

    def test_accept_below_auto_select(self, config):
        thresholds = config['thresholds']
        assert 0.0 < thresholds['accept'] < thresholds['auto_select'] <= 1.0

    def test_file_matches_built_in_defaults(self, config):
        assert config['thresholds'] == ConfigManager.DEFAULT_CONFIG['thresholds']
        assert config['weights'] == ConfigManager.DEFAULT_CONFIG['weights']

    def test_weights_sum_to_one(self, config):
        assert sum(config['weights'].values()) == pytest.approx(1.0)


# ============================================================================
# 2. RATING RANGES
# ============================================================================

class TestRatingRanges:

    @pytest.mark.parametrize("text", ALL_DOCUMENTS)
    def test_hmis_ranges(self, classifier, text):
        hmis = classifier.classify_text(text).hmis_codes
        for value in (hmis.health, hmis.flammability, hmis.physical):
            assert 0 <= value <= 4
        assert hmis.ppe in HMIS_PPE_CODES
        assert 0 <= hmis.confidence <= 100

    @pytest.mark.parametrize("text", ALL_DOCUMENTS + ["", "   ", "\x00\x01", "H999 " * 500, "x" * 10000])
    def test_quality_range(self, classifier, text):
        result = classifier.classify(text)
        assert 0 <= result.record.quality_score <= 100
        assert 0 <= result.confidence <= 100

    def test_empty_and_missing_text(self, classifier):
        empty = classifier.classify("").record
        assert empty.quality_score == 0 and not empty.is_readable

        missing = classifier.classify(None).record
        assert missing.quality_score == DEGRADED_QUALITY_SCORE and not missing.is_readable

    @pytest.mark.parametrize("celsius", [-273.15, -40, 0, 37, 100, 465])
    def test_celsius_conversion(self, celsius):
        assert celsius_to_fahrenheit(celsius) == pytest.approx(celsius * 9 / 5 + 32)


# ============================================================================
# 3. DETERMINISM
# ============================================================================

class TestDeterminism:

    @pytest.mark.parametrize("text", ALL_DOCUMENTS)
    def test_repeat_classification(self, text):
        first = SDSClassifier(config=ConfigManager()).classify(text).to_dict()
        second = SDSClassifier(config=ConfigManager()).classify(text).to_dict()
        assert first == second

    def test_normalizer_idempotent(self):
        normalizer = TextNormalizer()
        for text in ALL_DOCUMENTS:
            once = normalizer.normalize(text)
            assert normalizer.normalize(once) == once


# ============================================================================
# 4. SEVERITY MONOTONICITY
# ============================================================================

class TestSeverityMonotonicity:

    @pytest.mark.parametrize("base", [['H225'], ['H319'], ['H336'], ['H301', 'H315']])
    def test_adding_health_code_never_lowers_health(self, converter, base):
        def health(codes):
            data = GHSSection2Data(hazard_classes=[
                HazardClass(code=c, category=1, description="Hazard statement text") for c in codes
            ])
            return converter.convert(data).health

        baseline = health(base)
        for code in HEALTH_CODES:
            assert health(base + [code]) >= baseline, code


# ============================================================================
# 5. MATCH SCORES
# ============================================================================

class TestMatchScores:

    SEARCH_TERMS = ["Acetone", "acetone 67-64-1", "67-64-1", "Acme", "H225 DANGER flame",
                    "Causes serious eye irritation", "zzzz", "a", "0-00-0"]

    def test_score_bounds_and_auto_select(self, matcher, candidates):
        for term in self.SEARCH_TERMS:
            for doc in candidates:
                confidence = matcher.score(term, doc)
                assert 0.0 <= confidence.score <= 1.0
                assert confidence.auto_select == (confidence.score >= 0.9)
                for value in confidence.components.values():
                    assert 0.0 <= value <= 1.0

    def test_cas_component_is_binary(self, matcher, candidates):
        for term in self.SEARCH_TERMS:
            for doc in candidates:
                assert matcher.score(term, doc).components['cas_number'] in (0.0, 1.0)

    def test_ranking_is_sorted(self, matcher, candidates):
        docs = candidates + [CandidateDocument(product_name=name) for name in ('Acetic acid', 'Methanol')]
        for term in self.SEARCH_TERMS:
            scores = [c.confidence.score for c in matcher.rank(term, docs)]
            assert scores == sorted(scores, reverse=True)


# ============================================================================
# 6. NORMALIZATION VERSION
# ============================================================================

class TestNormalizationVersion:

    def test_version_is_positive_int(self):
        assert isinstance(NORMALIZATION_VERSION, int)
        assert NORMALIZATION_VERSION >= 1
