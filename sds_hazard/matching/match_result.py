"""
Data structures for document matching results.

Defines the per-candidate confidence, the ranked candidate list entry and
the search resolution returned to callers that must decide between
auto-selecting a document and asking a human.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from sds_hazard.matching.types import CandidateDocument


class SearchDecision(Enum):
    """What the caller should do with a ranked candidate list."""
    AUTO_SELECT = "auto_select"  # matcher auto-selects the top candidate
    ACCEPT = "accept"  # top candidate clears the caller accept threshold
    REVIEW = "review"  # some candidate matched; a human should pick
    ESCALATE = "escalate"  # nothing matched


@dataclass
class MatchConfidence:
    """
    Confidence that a candidate document is the one searched for.

    Attributes:
        score: Weighted score [0.0, 1.0]
        reasons: Labels of the components that matched, in scoring order
        auto_select: True if score reaches the auto-select threshold
        components: Sub-score per component before weighting
    """
    score: float
    reasons: List[str] = field(default_factory=list)
    auto_select: bool = False
    components: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        """Validate the score."""
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"Score must be between 0 and 1, got {self.score}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'reasons': list(self.reasons),
            'auto_select': self.auto_select,
            'components': dict(self.components),
        }


@dataclass
class RankedCandidate:
    """A candidate with its confidence and 1-based rank."""
    document: CandidateDocument
    confidence: MatchConfidence
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rank': self.rank,
            'document': self.document.to_dict(),
            'confidence': self.confidence.to_dict(),
        }


@dataclass
class SearchResolution:
    """
    Ranked candidates for a search term and the resulting decision.

    Attributes:
        search_term: The caller's query
        candidates: Candidates ranked by descending score
        decision: AUTO_SELECT, ACCEPT, REVIEW or ESCALATE
    """
    search_term: str
    candidates: List[RankedCandidate] = field(default_factory=list)
    decision: SearchDecision = SearchDecision.ESCALATE

    @property
    def best(self) -> Optional[RankedCandidate]:
        """Top-ranked candidate, or None if there were no candidates."""
        return self.candidates[0] if self.candidates else None

    @property
    def is_resolved(self) -> bool:
        """Check if a document can be used without human review."""
        return self.decision in (SearchDecision.AUTO_SELECT, SearchDecision.ACCEPT)

    @property
    def requires_review(self) -> bool:
        return self.decision == SearchDecision.REVIEW

    @property
    def confidence(self) -> float:
        """Score of the top candidate, 0.0 if none."""
        return self.best.confidence.score if self.best else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'search_term': self.search_term,
            'decision': self.decision.value,
            'candidates': [c.to_dict() for c in self.candidates],
        }
