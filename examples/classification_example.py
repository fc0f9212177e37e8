"""
Example usage of the SDS hazard classifier.

This script demonstrates classifying SDS text into an HMIS record,
batch export to a DataFrame, and ranking candidate documents for a
product search.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sds_hazard.matching import CandidateDocument, build_matcher
from sds_hazard.pipeline import SDSClassifier, classify_documents, results_to_dataframe
from sds_hazard.utils.config_manager import ConfigManager


SAMPLE_SDS = """SAFETY DATA SHEET
SECTION 1: IDENTIFICATION
Product name: Acetone
Manufacturer: Acme Chemical Co.
CAS No. 67-64-1

SECTION 2: HAZARDS IDENTIFICATION
Signal Word: DANGER
H225: Highly flammable liquid and vapor
H319: Causes serious eye irritation
H336: May cause drowsiness or dizziness
P210: Keep away from heat, hot surfaces, sparks, open flames.
Pictograms: GHS02, GHS07
Flash point: -20 °C
Boiling point: 56 °C

SECTION 8: EXPOSURE CONTROLS/PERSONAL PROTECTION
Wear safety glasses and chemical resistant gloves.

SECTION 9: PHYSICAL AND CHEMICAL PROPERTIES
Appearance: clear liquid
"""


def example_single_document():
    """Example: Classify one SDS."""
    print("=" * 80)
    print("EXAMPLE 1: Single Document Classification")
    print("=" * 80)

    classifier = SDSClassifier(config=ConfigManager.from_default_location())
    result = classifier.classify(SAMPLE_SDS)
    record = result.record

    if result.success:
        print(f"\n✓ CLASSIFIED ({record.document_type})")
        print(f"  Manufacturer: {record.manufacturer}")
        print(f"  CAS: {record.cas_number}")
        print(f"  Signal word: {record.signal_word}")
        print(f"  H-codes: {', '.join(record.h_codes)}")
        print(f"  HMIS: {record.hmis_codes.label}")
        print(f"  Quality: {record.quality_score} (readable: {record.is_readable})")
        print(f"  Confidence: {result.confidence}")

        print("\n  Calculation details:")
        for line in record.hmis_codes.calculation_details:
            print(f"    - {line}")

        for warning in result.warnings:
            print(f"  ⚠ {warning}")
    else:
        print(f"\n✗ FAILED: {'; '.join(result.errors)}")


def example_batch_export():
    """Example: Classify several documents and export a register."""
    print("\n" + "=" * 80)
    print("EXAMPLE 2: Batch Classification")
    print("=" * 80)

    documents = {
        'acetone': SAMPLE_SDS,
        'label-only': "Signal Word: WARNING\nH226: Flammable liquid and vapor",
        'empty': "",
    }

    results = classify_documents(documents, max_workers=2, show_progress=True)
    df = results_to_dataframe(results)

    print(f"\nClassified {len(df)} documents:")
    print(df[['document_id', 'success', 'hmis_label', 'quality_score', 'warnings']].to_string(index=False))


def example_candidate_ranking():
    """Example: Pick the right document for a product search."""
    print("\n" + "=" * 80)
    print("EXAMPLE 3: Candidate Document Ranking")
    print("=" * 80)

    record = SDSClassifier().classify_text(SAMPLE_SDS)
    candidates = [
        CandidateDocument(product_name='Acetone-Free Nail Polish Remover',
                          manufacturer='Beauty Supply Ltd', document_id='nail-polish'),
        CandidateDocument.from_record(record, product_name='Acetone', document_id='acme-acetone'),
    ]

    matcher = build_matcher(project_root / 'config' / 'classifier_config.yaml')

    for query in ["Acetone", "Acetone 67-64-1 Acme Chemical Co.", "Toluene"]:
        resolution = matcher.resolve(query, candidates)
        print(f"\nQuery: '{query}' -> {resolution.decision.value}")
        for candidate in resolution.candidates:
            reasons = ', '.join(candidate.confidence.reasons) or 'no matching fields'
            print(f"  {candidate.rank}. {candidate.document.document_id}: "
                  f"{candidate.confidence.score:.3f} ({reasons})")


if __name__ == "__main__":
    """Run all examples."""

    print("\n" + "=" * 80)
    print("SDS HAZARD CLASSIFIER - EXAMPLES")
    print("=" * 80)

    try:
        example_single_document()
        example_batch_export()
        example_candidate_ranking()

        print("\n" + "=" * 80)
        print("✓ All examples completed!")
        print("=" * 80)

    except Exception as e:
        print(f"\n✗ Error running examples: {e}")
        import traceback
        traceback.print_exc()
