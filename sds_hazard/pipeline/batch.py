"""
Batch classification of many SDS documents.

Documents are independent, so they are classified concurrently on a thread
pool. Results come back keyed by document id in input order and can be
flattened into a pandas DataFrame for register export.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd
from loguru import logger
from tqdm import tqdm

from sds_hazard.extraction.types import ExtractionResult
from sds_hazard.pipeline.orchestrator import SDSClassifier

DocumentInput = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

DATAFRAME_COLUMNS = [
    'document_id', 'success', 'confidence', 'document_type',
    'manufacturer', 'cas_number', 'signal_word',
    'h_codes', 'p_codes', 'pictograms',
    'hmis_health', 'hmis_flammability', 'hmis_physical', 'hmis_ppe',
    'hmis_chronic', 'hmis_label',
    'quality_score', 'is_readable', 'warnings', 'errors',
]


def _as_pairs(documents: DocumentInput) -> List[Tuple[str, str]]:
    if isinstance(documents, Mapping):
        return list(documents.items())
    return list(documents)


def classify_documents(
    documents: DocumentInput,
    classifier: Optional[SDSClassifier] = None,
    max_workers: Optional[int] = None,
    show_progress: bool = False,
) -> Dict[str, ExtractionResult]:
    """
    Classify many documents concurrently.

    Args:
        documents: Mapping of document id -> text, or (id, text) pairs
        classifier: SDSClassifier to use (creates one with defaults if None)
        max_workers: Thread pool size (config ``batch.max_workers`` if None)
        show_progress: Show a tqdm progress bar

    Returns:
        Dictionary of document id -> ExtractionResult, in input order
    """
    classifier = classifier or SDSClassifier()
    pairs = _as_pairs(documents)

    if max_workers is None:
        max_workers = classifier.config.get_batch_param('max_workers')
    if max_workers < 1:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    logger.info(f"Classifying {len(pairs)} documents using {max_workers} workers")

    results: Dict[str, ExtractionResult] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_id = {
            executor.submit(classifier.classify, text): doc_id
            for doc_id, text in pairs
        }

        with tqdm(total=len(future_to_id), desc="Classifying SDS", unit="doc",
                  disable=not show_progress) as pbar:
            for future in as_completed(future_to_id):
                doc_id = future_to_id[future]
                try:
                    results[doc_id] = future.result()
                except Exception as e:
                    logger.error(f"Document '{doc_id}' failed: {e}")
                    results[doc_id] = classifier.degraded_result(f"Extraction failed: {e}")
                pbar.update(1)

    successful = sum(1 for r in results.values() if r.success)
    logger.info(f"Batch complete: {successful}/{len(pairs)} documents classified")

    return {doc_id: results[doc_id] for doc_id, _ in pairs if doc_id in results}


def results_to_dataframe(results: Mapping[str, ExtractionResult]) -> pd.DataFrame:
    """
    Flatten classification results into one row per document.

    List fields are joined with '; '.

    Args:
        results: Document id -> ExtractionResult

    Returns:
        DataFrame with ``DATAFRAME_COLUMNS``
    """
    rows = []
    for doc_id, result in results.items():
        record = result.record
        hmis = record.hmis_codes
        rows.append({
            'document_id': doc_id,
            'success': result.success,
            'confidence': result.confidence,
            'document_type': record.document_type,
            'manufacturer': record.manufacturer,
            'cas_number': record.cas_number,
            'signal_word': record.signal_word,
            'h_codes': '; '.join(record.h_codes),
            'p_codes': '; '.join(record.p_codes),
            'pictograms': '; '.join(p.ghs_code for p in record.pictograms),
            'hmis_health': hmis.health,
            'hmis_flammability': hmis.flammability,
            'hmis_physical': hmis.physical,
            'hmis_ppe': hmis.ppe,
            'hmis_chronic': hmis.has_chronic_hazard,
            'hmis_label': hmis.label,
            'quality_score': record.quality_score,
            'is_readable': record.is_readable,
            'warnings': '; '.join(result.warnings),
            'errors': '; '.join(result.errors),
        })

    return pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)
