"""
Document confidence matching package.

Scores and ranks candidate SDS documents against a free-text search term:
- Product name similarity (Levenshtein, tiered)
- CAS number (exact, binary)
- Manufacturer similarity (tiered)
- Content hits (hazard codes, signal word, pictogram names)

The resolution step turns the ranking into a decision: auto-select, accept,
review or escalate.
"""

import logging
from pathlib import Path
from typing import Optional

from sds_hazard.matching.confidence_matcher import DocumentConfidenceMatcher
from sds_hazard.matching.match_result import (
    MatchConfidence,
    RankedCandidate,
    SearchDecision,
    SearchResolution,
)
from sds_hazard.matching.types import CandidateDocument, ScoringWeights
from sds_hazard.utils.config_manager import ConfigManager

_logger = logging.getLogger(__name__)


def build_matcher(
    config_path: Optional[Path] = None,
    **matcher_kwargs,
) -> DocumentConfidenceMatcher:
    """
    Build a DocumentConfidenceMatcher from a YAML config file.

    Falls back to built-in defaults when the file does not exist.

    Args:
        config_path: YAML config path (None for built-in defaults)
        **matcher_kwargs: Extra kwargs forwarded to DocumentConfidenceMatcher.

    Returns:
        Configured DocumentConfidenceMatcher instance.
    """
    config = ConfigManager(config_path)
    errors = config.validate_config()
    if errors:
        raise ValueError(f"Invalid matcher configuration: {'; '.join(errors)}")

    matcher = DocumentConfidenceMatcher(config=config, **matcher_kwargs)
    _logger.info(
        "Matcher ready: auto_select=%.2f accept=%.2f",
        matcher.auto_select_threshold,
        matcher.accept_threshold,
    )
    return matcher


__all__ = [
    "CandidateDocument",
    "ScoringWeights",
    "MatchConfidence",
    "RankedCandidate",
    "SearchDecision",
    "SearchResolution",
    "DocumentConfidenceMatcher",
    "build_matcher",
]
