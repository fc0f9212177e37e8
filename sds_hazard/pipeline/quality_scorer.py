"""
Extraction quality scoring.

Scores how complete an extraction is (0-100) from the fields that were
found and the amount of source text. A record is readable when its score
reaches the readable threshold.
"""

from typing import Optional

from sds_hazard.extraction.types import SDSClassificationRecord

DEFAULT_READABLE_THRESHOLD = 30

# (minimum length exclusive, points), longest first
TEXT_LENGTH_TIERS = (
    (2000, 20),
    (1000, 15),
    (500, 10),
    (200, 5),
)

ESSENTIAL_POINTS = {
    'h_codes': 15,
    'signal_word': 10,
    'cas_number': 10,
    'manufacturer': 5,
    'pictograms': 10,
}

SECONDARY_POINTS = {
    'hazard_statements': 5,
    'precautionary_statements': 5,
    'physical_hazards': 3,
    'health_hazards': 3,
    'environmental_hazards': 2,
    'first_aid': 2,
}

# Ratings printed in the document itself
RATING_POINTS = {
    'nfpa_codes': 5,
    'extracted_hmis': 5,
}


class QualityScorer:
    """
    Scores extraction completeness.

    Args:
        readable_threshold: Minimum score for a record to count as readable
    """

    def __init__(self, readable_threshold: int = DEFAULT_READABLE_THRESHOLD):
        if not 0 <= readable_threshold <= 100:
            raise ValueError(f"Readable threshold must be between 0 and 100, got {readable_threshold}")
        self.readable_threshold = readable_threshold

    def score(self, record: SDSClassificationRecord, text_length: int) -> int:
        """
        Calculate the quality score for an extraction.

        Args:
            record: Extracted record
            text_length: Length of the normalized source text

        Returns:
            Score 0-100
        """
        score = 0

        for minimum, points in TEXT_LENGTH_TIERS:
            if text_length > minimum:
                score += points
                break

        for group in (ESSENTIAL_POINTS, SECONDARY_POINTS, RATING_POINTS):
            for attr, points in group.items():
                if getattr(record, attr):
                    score += points

        return min(score, 100)

    def is_readable(self, score: int) -> bool:
        return score >= self.readable_threshold

    def apply(self, record: SDSClassificationRecord, text_length: int) -> SDSClassificationRecord:
        """Set ``quality_score`` and ``is_readable`` on the record and return it."""
        record.quality_score = self.score(record, text_length)
        record.is_readable = self.is_readable(record.quality_score)
        return record


def calculate_extraction_quality(record: SDSClassificationRecord, text_length: int,
                                 scorer: Optional[QualityScorer] = None) -> int:
    """Score a record with the default scorer."""
    return (scorer or QualityScorer()).score(record, text_length)
