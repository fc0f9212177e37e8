"""
Tests for extraction quality scoring.
"""

import pytest

from sds_hazard.extraction.types import (
    HazardStatement,
    Pictogram,
    SDSClassificationRecord,
)
from sds_hazard.pipeline.quality_scorer import QualityScorer, calculate_extraction_quality


def full_record() -> SDSClassificationRecord:
    statement = HazardStatement('H225', 'Highly flammable liquid and vapor')
    return SDSClassificationRecord(
        manufacturer='Acme Chemical Co.',
        cas_number='67-64-1',
        signal_word='DANGER',
        h_codes=['H225'],
        p_codes=['P210'],
        hazard_statements=[statement],
        precautionary_statements=[HazardStatement('P210', 'Keep away from heat')],
        pictograms=[Pictogram('GHS02', 'flame')],
        extracted_hmis={'health': 2},
        nfpa_codes={'health': 1},
        physical_hazards=['flammable'],
        health_hazards=['toxic'],
        environmental_hazards=['persistent'],
        first_aid={'eyes': 'Rinse with water.'},
    )


class TestQualityScorer:

    def test_empty_record_scores_zero(self):
        assert QualityScorer().score(SDSClassificationRecord(), 0) == 0

    @pytest.mark.parametrize("length,expected", [
        (0, 0), (200, 0), (201, 5), (500, 5), (501, 10), (1000, 10), (1001, 15), (2000, 15), (2001, 20),
    ])
    def test_text_length_tiers(self, length, expected):
        assert QualityScorer().score(SDSClassificationRecord(), length) == expected

    def test_essential_fields(self):
        record = SDSClassificationRecord(h_codes=['H225'], signal_word='DANGER')
        assert QualityScorer().score(record, 0) == 25

    def test_rating_codes(self):
        record = SDSClassificationRecord(extracted_hmis={'health': 2}, nfpa_codes={'health': 1})
        assert QualityScorer().score(record, 0) == 10

    def test_full_record_capped(self):
        assert QualityScorer().score(full_record(), 5000) == 100

    def test_readable_threshold(self):
        scorer = QualityScorer()
        assert not scorer.is_readable(29)
        assert scorer.is_readable(30)

    def test_custom_threshold(self):
        scorer = QualityScorer(readable_threshold=50)
        record = SDSClassificationRecord(h_codes=['H225'], signal_word='DANGER', cas_number='67-64-1')
        scorer.apply(record, 0)
        assert record.quality_score == 35
        assert not record.is_readable

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            QualityScorer(readable_threshold=101)

    def test_apply_sets_fields(self):
        record = full_record()
        QualityScorer().apply(record, 100)
        assert record.quality_score == 80
        assert record.is_readable

    def test_convenience_function(self):
        assert calculate_extraction_quality(SDSClassificationRecord(), 2500) == 20
