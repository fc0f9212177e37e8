"""
SDS classification pipeline.

Usage:
    from sds_hazard.pipeline import SDSClassifier

    result = SDSClassifier().classify(text)
    print(result.record.hmis_codes.label)
"""

from .batch import classify_documents, results_to_dataframe
from .orchestrator import SDSClassifier
from .quality_scorer import QualityScorer, calculate_extraction_quality

__all__ = [
    'SDSClassifier',
    'QualityScorer',
    'calculate_extraction_quality',
    'classify_documents',
    'results_to_dataframe',
]
