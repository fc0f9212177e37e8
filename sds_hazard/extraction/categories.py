"""
Hazard category keywords and first aid measures.
"""

import re
from typing import Dict, List, Optional, Tuple

from loguru import logger

from sds_hazard.extraction.base import FieldExtractor
from sds_hazard.normalization.sections import locate_section
from sds_hazard.rules import DEFAULT_RULES, RuleSet

DEFAULT_FIRST_AID_MAX_CHARS = 500
FIRST_AID_WINDOW = 3000

FIRST_AID_KEYS = ('inhalation', 'skin', 'eyes', 'ingestion')


class HazardCategoryExtractor(FieldExtractor[Dict[str, List[str]]]):
    """
    Scans for physical, health and environmental hazard keywords.

    Returns a dict with keys 'physical', 'health' and 'environmental',
    each listing the keywords present (case-insensitive substring test)
    in rule-table order.
    """

    name = 'hazard_categories'

    def __init__(self, rules: Optional[RuleSet] = None):
        self.rules = rules or DEFAULT_RULES

    def extract(self, text: str) -> Dict[str, List[str]]:
        lowered = text.lower()
        return {
            'physical': [k for k in self.rules.physical_hazard_keywords if k in lowered],
            'health': [k for k in self.rules.health_hazard_keywords if k in lowered],
            'environmental': [k for k in self.rules.environmental_hazard_keywords if k in lowered],
        }

    def empty(self) -> Dict[str, List[str]]:
        return {'physical': [], 'health': [], 'environmental': []}


class FirstAidExtractor(FieldExtractor[Dict[str, str]]):
    """
    Extracts first aid instructions per exposure route.

    The first aid section (SDS Section 4) is located first; inside it each
    route label ("If inhaled:", "Skin contact:", "In case of eye contact:",
    "If swallowed:") opens a passage that runs to the next route label or
    sub-heading. Colon-terminated labels are preferred; labels at the start
    of a line are used when the section has none.
    """

    name = 'first_aid'

    HEADING_PATTERNS = (
        r'\bsection\s*4\b[:.\s-]*first[\s-]*aid[^\n]*',
        r'\bfirst[\s-]*aid\s+measures\b[^\n]*',
        r'\bfirst[\s-]*aid\b[^\n]*',
    )
    END_PATTERNS = (
        r'\bsection\s*5\b',
        r'\bfire[\s-]*fighting\b',
    )

    LABELS: Tuple[Tuple[str, str], ...] = (
        (r'skin\s+contact', 'skin'),
        (r'eye\s+contact', 'eyes'),
        (r'inhalation', 'inhalation'),
        (r'inhaled', 'inhalation'),
        (r'ingestion', 'ingestion'),
        (r'swallowed', 'ingestion'),
        (r'ingested', 'ingestion'),
        (r'skin', 'skin'),
        (r'eyes', 'eyes'),
        (r'eye', 'eyes'),
    )

    _LABEL_ALTERNATION = '|'.join(f'(?P<l{i}>{label})' for i, (label, _) in enumerate(LABELS))

    COLON_LABEL = re.compile(
        rf'\b(?:(?:if|in|on|after|case|of)\s+)*(?:{_LABEL_ALTERNATION})\b'
        r'(?:\s+contact)?(?:\s*\([^)\n]{0,20}\))?\s*:',
        re.IGNORECASE
    )
    LINE_LABEL = re.compile(
        rf'^[ \t]*(?:(?:if|in|on|after|case|of)\s+)*(?:{_LABEL_ALTERNATION})\b(?:\s+contact)?[ \t]*[:\-]?',
        re.IGNORECASE | re.MULTILINE
    )
    SUBHEADING = re.compile(
        r'\n[ \t]*(?:most\s+important|notes?\s+to\s+(?:physician|doctor)|indication\s+of|'
        r'protection\s+of\s+first[\s-]*aiders)',
        re.IGNORECASE
    )
    WHITESPACE = re.compile(r'\s+')

    def __init__(self, max_chars: int = DEFAULT_FIRST_AID_MAX_CHARS):
        self.max_chars = max_chars

    def extract(self, text: str) -> Dict[str, str]:
        section = locate_section(text, self.HEADING_PATTERNS, self.END_PATTERNS,
                                 max_length=FIRST_AID_WINDOW)
        if section is None:
            return {}

        body = section.text
        labels = list(self.COLON_LABEL.finditer(body))
        if not labels:
            labels = list(self.LINE_LABEL.finditer(body))
        if not labels:
            logger.debug("First aid section found but no route labels")
            return {}

        stops = sorted(
            [m.start() for m in labels] + [m.start() for m in self.SUBHEADING.finditer(body)]
        )

        found: Dict[str, str] = {}
        for match in labels:
            key = self._key_for(match)
            if key in found:
                continue
            end = next((s for s in stops if s > match.start()), len(body))
            passage = self.WHITESPACE.sub(' ', body[match.end():end]).strip(' :-')
            if passage:
                found[key] = passage[:self.max_chars]

        return {key: found[key] for key in FIRST_AID_KEYS if key in found}

    def empty(self) -> Dict[str, str]:
        return {}

    def _key_for(self, match: re.Match) -> str:
        for i, (_, key) in enumerate(self.LABELS):
            if match.group(f'l{i}') is not None:
                return key
        raise AssertionError("Label match without a named group")
