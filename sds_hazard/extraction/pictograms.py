"""
GHS pictogram detection.

Pictograms are found from explicit ``GHS01``..``GHS09`` references and from
a synonym dictionary ("flame", "corrosive", ...). Longer synonyms shadow the
shorter ones they contain, so "flame over circle" reports GHS03 only.
"""

import re
from typing import Dict, List, Optional, Pattern, Tuple

from sds_hazard.extraction.base import FieldExtractor
from sds_hazard.extraction.types import Pictogram
from sds_hazard.rules import DEFAULT_RULES, RuleSet


class PictogramExtractor(FieldExtractor[List[Pictogram]]):
    """
    Detects GHS pictograms in SDS text.

    Results are deduplicated by code. Explicit references come first in
    order of appearance and win over keyword matches for the same code.
    """

    name = 'pictograms'

    EXPLICIT_PATTERN = re.compile(r'\bGHS\s?0([1-9])\b', re.IGNORECASE)

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or DEFAULT_RULES
        self._keyword_patterns = self._compile_keywords(self.rules.pictogram_synonyms)

    @staticmethod
    def _compile_keywords(synonyms: Dict[str, Tuple[str, ...]]) -> List[Tuple[str, str, Pattern]]:
        entries = [
            (code, keyword)
            for code, keywords in synonyms.items()
            for keyword in keywords
        ]
        # Longest first so containing phrases claim their span
        entries.sort(key=lambda entry: len(entry[1]), reverse=True)
        return [
            (code, keyword, re.compile(rf'\b{re.escape(keyword)}\b', re.IGNORECASE))
            for code, keyword in entries
        ]

    def extract(self, text: str) -> List[Pictogram]:
        pictograms: List[Pictogram] = []
        seen = set()

        for match in self.EXPLICIT_PATTERN.finditer(text):
            code = f"GHS0{match.group(1)}"
            if code not in seen:
                seen.add(code)
                pictograms.append(self._build(code, 'Explicit GHS pictogram reference'))

        for code, keyword in self._keyword_hits(text):
            if code not in seen:
                seen.add(code)
                pictograms.append(self._build(code, f"Detected from keyword '{keyword}'"))

        return pictograms

    def empty(self) -> List[Pictogram]:
        return []

    def _keyword_hits(self, text: str) -> List[Tuple[str, str]]:
        """Non-overlapping keyword hits as ``(code, keyword)`` in text order."""
        claimed: List[Tuple[int, int]] = []
        hits: List[Tuple[int, str, str]] = []

        for code, keyword, pattern in self._keyword_patterns:
            for match in pattern.finditer(text):
                start, end = match.span()
                if any(start < c_end and c_start < end for c_start, c_end in claimed):
                    continue
                claimed.append((start, end))
                hits.append((start, code, keyword))

        hits.sort(key=lambda hit: hit[0])
        return [(code, keyword) for _, code, keyword in hits]

    def _build(self, code: str, description: str) -> Pictogram:
        return Pictogram(
            ghs_code=code,
            name=self.rules.pictogram_names[code],
            description=description,
        )
