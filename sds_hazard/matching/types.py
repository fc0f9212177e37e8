"""
Type definitions for the document confidence matcher.

Defines the candidate document shape and the scoring weights used across
the matching modules.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from sds_hazard.extraction.types import SDSClassificationRecord


@dataclass
class CandidateDocument:
    """
    A document returned by an upstream search, to be scored against the query.

    Attributes:
        product_name: Product name printed on the document
        cas_number: CAS number of the product, if known
        manufacturer: Manufacturer or supplier name, if known
        h_codes: Hazard codes of the document ('H225', ...)
        hazard_statements: Hazard statement texts, used for content matching
        signal_word: 'DANGER' or 'WARNING', if known
        pictograms: Canonical pictogram names ('flame', 'exclamation mark', ...)
        document_id: Caller's identifier for the document
    """
    product_name: str
    cas_number: Optional[str] = None
    manufacturer: Optional[str] = None
    h_codes: List[str] = field(default_factory=list)
    hazard_statements: List[str] = field(default_factory=list)
    signal_word: Optional[str] = None
    pictograms: List[str] = field(default_factory=list)
    document_id: Optional[str] = None

    @classmethod
    def from_record(cls, record: SDSClassificationRecord, product_name: str,
                    document_id: Optional[str] = None) -> 'CandidateDocument':
        """Build a candidate from a classified SDS record."""
        return cls(
            product_name=product_name,
            cas_number=record.cas_number,
            manufacturer=record.manufacturer,
            h_codes=list(record.h_codes),
            hazard_statements=[s.description for s in record.hazard_statements],
            signal_word=record.signal_word,
            pictograms=[p.name for p in record.pictograms],
            document_id=document_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'document_id': self.document_id,
            'product_name': self.product_name,
            'cas_number': self.cas_number,
            'manufacturer': self.manufacturer,
            'h_codes': list(self.h_codes),
            'hazard_statements': list(self.hazard_statements),
            'signal_word': self.signal_word,
            'pictograms': list(self.pictograms),
        }


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the four match components; must be non-negative and sum to 1."""
    product_name: float = 0.4
    cas_number: float = 0.3
    manufacturer: float = 0.2
    content_match: float = 0.1

    def __post_init__(self):
        values = (self.product_name, self.cas_number, self.manufacturer, self.content_match)
        if any(v < 0 for v in values):
            raise ValueError(f"Weights must be non-negative, got {values}")
        if not math.isclose(sum(values), 1.0, abs_tol=1e-6):
            raise ValueError(f"Weights must sum to 1, got {sum(values)}")

    @classmethod
    def from_dict(cls, weights: Mapping[str, float]) -> 'ScoringWeights':
        """
        Build weights from a mapping such as the config ``weights`` section.

        Raises:
            ValueError: If a key is unknown or the weights are invalid
        """
        unknown = set(weights) - {'product_name', 'cas_number', 'manufacturer', 'content_match'}
        if unknown:
            raise ValueError(f"Unknown weight names: {sorted(unknown)}")
        return cls(**{name: float(value) for name, value in weights.items()})

    def to_dict(self) -> Dict[str, float]:
        return {
            'product_name': self.product_name,
            'cas_number': self.cas_number,
            'manufacturer': self.manufacturer,
            'content_match': self.content_match,
        }
