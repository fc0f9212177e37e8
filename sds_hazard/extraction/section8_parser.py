"""
SDS Section 8 (Exposure Controls / Personal Protection) parser.

Reads the protective equipment recommendations and derives the HMIS PPE
letter from them with the same profile table the HMIS converter uses.
"""

import re
from typing import List, Optional, Tuple

from loguru import logger

from sds_hazard.extraction.types import PPERequirements
from sds_hazard.normalization.sections import SectionSpan, locate_section
from sds_hazard.rules import DEFAULT_RULES, RuleSet

DEFAULT_SECTION8_WINDOW = 2000
MAX_PHRASE_LENGTH = 200

GENERAL_PPE_KEYWORDS = (
    'safety glasses', 'goggles', 'face shield', 'gloves', 'apron',
    'lab coat', 'protective clothing', 'boots', 'respirator', 'scba',
)


class Section8Parser:
    """
    Parser for SDS Section 8 PPE recommendations.

    Args:
        rules: Rule tables providing the PPE profiles
        window: Maximum section length in characters
    """

    HEADING_PATTERNS = (
        r'\bsection\s*8\b[:.\s-]*exposure\s+controls?',
        r'\bexposure\s+controls?\s*/\s*personal\s+protection\b',
    )
    END_PATTERNS = (r'\bsection\s*9\b',)

    PROTECTION_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
        ('eye_protection', re.compile(
            r'\b(?:eye\s*/\s*face|eye|face)\s+protection\s*[:\-]?[ \t]*([^\n]+)', re.IGNORECASE)),
        ('hand_protection', re.compile(
            r'\bhand\s+protection\s*[:\-]?[ \t]*([^\n]+)', re.IGNORECASE)),
        ('respiratory_protection', re.compile(
            r'\brespiratory\s+protection\s*[:\-]?[ \t]*([^\n]+)', re.IGNORECASE)),
        ('skin_protection', re.compile(
            r'\b(?:skin(?:\s+and\s+body)?|body)\s+protection\s*[:\-]?[ \t]*([^\n]+)', re.IGNORECASE)),
    )

    def __init__(self, rules: Optional[RuleSet] = None, window: int = DEFAULT_SECTION8_WINDOW):
        self.rules = rules or DEFAULT_RULES
        self.window = window

    def locate(self, text: str) -> Optional[SectionSpan]:
        """Locate Section 8 in full document text."""
        if not text or not isinstance(text, str):
            return None
        return locate_section(text, self.HEADING_PATTERNS, self.END_PATTERNS, max_length=self.window)

    def parse(self, text: str, is_excerpt: bool = False) -> PPERequirements:
        """
        Parse PPE requirements.

        Args:
            text: Full document text, or a Section 8 excerpt
            is_excerpt: True when ``text`` already is the Section 8 excerpt

        Returns:
            PPERequirements; ``hmis_ppe_code`` is 'X' when no profile matches
        """
        if not text or not isinstance(text, str):
            return PPERequirements()

        body = text
        if not is_excerpt:
            section = self.locate(text)
            if section is None:
                logger.debug("Section 8 not found")
                return PPERequirements()
            body = section.text

        requirements = PPERequirements(section_found=True)
        for attr, pattern in self.PROTECTION_PATTERNS:
            setattr(requirements, attr, self._phrases(pattern, body))

        lowered = body.lower()
        requirements.general_ppe = [k for k in GENERAL_PPE_KEYWORDS if k in lowered]
        requirements.hmis_ppe_code = self.rules.ppe_code_for(body)

        logger.debug(f"Section 8 PPE code {requirements.hmis_ppe_code}, keywords {requirements.general_ppe}")
        return requirements

    @staticmethod
    def _phrases(pattern: re.Pattern, body: str) -> List[str]:
        phrases: List[str] = []
        for match in pattern.finditer(body):
            phrase = match.group(1).strip(' :-.')[:MAX_PHRASE_LENGTH]
            if phrase and phrase not in phrases:
                phrases.append(phrase)
        return phrases
