"""
Label rating extraction (HMIS and NFPA 704).

Many SDS documents print the ratings of their own HMIS and NFPA labels,
either as a block (``HMIS: 2/3/0/B``, ``NFPA 704: 1-3-0``) or as separately
labelled fields (``Health: 2``). Only keys actually found are returned.
"""

import re
from typing import Any, Dict, Optional, Pattern, Sequence, Tuple

from sds_hazard.extraction.base import FieldExtractor

LABEL_WINDOW = 300

# (key, pattern, converter)
FieldSpec = Tuple[str, Pattern, type]


def _field(label: str, value: str = r'([0-4])\*?(?!\d)') -> Pattern:
    return re.compile(rf'\b{label}\s*[:=]\s*{value}', re.IGNORECASE)


class _LabelRatingExtractor(FieldExtractor[Dict[str, Any]]):
    """Shared block-then-fields extraction for a rating system label."""

    LABEL_PATTERN: Pattern
    BLOCK_PATTERN: Pattern
    BLOCK_KEYS: Sequence[str]
    FIELDS: Sequence[FieldSpec]

    def extract(self, text: str) -> Dict[str, Any]:
        block = self.BLOCK_PATTERN.search(text)
        if block:
            ratings: Dict[str, Any] = {}
            for key, value in zip(self.BLOCK_KEYS, block.groups()):
                if value is not None:
                    ratings[key] = int(value) if value.isdigit() else value.upper()
            return ratings

        window = self._field_window(text)
        if window is None:
            return {}

        ratings = {}
        for key, pattern, convert in self.FIELDS:
            match = pattern.search(window)
            if match:
                value = match.group(1)
                ratings[key] = convert(value) if convert is int else value.upper()
        return ratings

    def empty(self) -> Dict[str, Any]:
        return {}

    def _field_window(self, text: str) -> Optional[str]:
        label = self.LABEL_PATTERN.search(text)
        if label:
            return text[label.start():label.start() + LABEL_WINDOW]
        return None


class HMISLabelExtractor(_LabelRatingExtractor):
    """
    Reads printed HMIS ratings.

    Keys: health, flammability, physical (ints 0-4) and ppe (letter).
    Separately labelled fields are read near the "HMIS" label; without one
    they are read from the whole text, unless the document carries an NFPA
    label whose "Health:" field would be misread.

    Examples:
        >>> HMISLabelExtractor()("HMIS: 2/3/0/B")
        {'health': 2, 'flammability': 3, 'physical': 0, 'ppe': 'B'}
    """

    name = 'hmis_label'

    LABEL_PATTERN = re.compile(r'\bHMIS\b', re.IGNORECASE)
    BLOCK_PATTERN = re.compile(
        r'\bHMIS\b[^\n\d]{0,30}?([0-4])\*?\s*[/\-]\s*([0-4])\s*[/\-]\s*([0-4])'
        r'(?:\s*[/\-]\s*([A-KX])\b)?',
        re.IGNORECASE
    )
    BLOCK_KEYS = ('health', 'flammability', 'physical', 'ppe')
    FIELDS = (
        ('health', _field(r'health(?:\s+hazard)?'), int),
        ('flammability', _field(r'flammability(?:\s+hazard)?'), int),
        ('physical', _field(r'physical(?:\s+hazard)?'), int),
        ('ppe', _field(r'(?:personal\s+protection|ppe)', r'([A-KX])\b'), str),
    )

    NFPA_LABEL = re.compile(r'\bNFPA\b', re.IGNORECASE)

    def _field_window(self, text: str) -> Optional[str]:
        window = super()._field_window(text)
        if window is not None:
            return window
        if self.NFPA_LABEL.search(text):
            return None
        return text


class NFPALabelExtractor(_LabelRatingExtractor):
    """
    Reads printed NFPA 704 ratings.

    Keys: health, flammability, reactivity (ints 0-4) and special (symbol
    such as 'W' or 'OX'). Fields are only read near the "NFPA" label.

    Examples:
        >>> NFPALabelExtractor()("NFPA 704: 1-3-0")
        {'health': 1, 'flammability': 3, 'reactivity': 0}
    """

    name = 'nfpa_label'

    SPECIAL = r'(W|OX|OXY|SA|COR|ACID|ALK|BIO|CRY|RAD|POI)\b'

    LABEL_PATTERN = re.compile(r'\bNFPA\b', re.IGNORECASE)
    BLOCK_PATTERN = re.compile(
        r'\bNFPA(?:\s*704)?\b[^\n\d]{0,30}?([0-4])\s*[/\-]\s*([0-4])\s*[/\-]\s*([0-4])'
        rf'(?:\s*[/\-]\s*{SPECIAL})?',
        re.IGNORECASE
    )
    BLOCK_KEYS = ('health', 'flammability', 'reactivity', 'special')
    FIELDS = (
        ('health', _field(r'health(?:\s+hazard)?'), int),
        ('flammability', _field(r'(?:fire|flammability)(?:\s+hazard)?'), int),
        ('reactivity', _field(r'(?:reactivity|instability)(?:\s+hazard)?'), int),
        ('special', _field(r'special(?:\s+hazards?)?', SPECIAL), str),
    )
