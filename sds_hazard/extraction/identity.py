"""
Product identity extractors: manufacturer, CAS number and signal word.
"""

import re
from typing import Optional

from sds_hazard.extraction.base import FieldExtractor
from sds_hazard.normalization.cas_extractor import CASExtractor

MAX_MANUFACTURER_LENGTH = 100


class ManufacturerExtractor(FieldExtractor[Optional[str]]):
    """
    Finds the manufacturer or supplier named in SDS Section 1.

    Labels that commonly open a heading ("Company identification") must be
    followed by a colon; verb phrases ("Manufactured by") need not be.
    Patterns are tried in order and the first usable value wins.
    """

    name = 'manufacturer'

    PATTERNS = (
        re.compile(
            r'\b(?:manufacturer|company|supplier|distributor)(?:\s+name)?[ \t]*:[ \t]*([^\n]+)',
            re.IGNORECASE
        ),
        re.compile(
            r'\b(?:made|manufactured|distributed)\s+by[ \t]*:?[ \t]*([^\n]+)',
            re.IGNORECASE
        ),
    )

    DISALLOWED_CHARS = re.compile(r"[^\w\s&.,'()-]")
    WHITESPACE = re.compile(r'\s+')

    def extract(self, text: str) -> Optional[str]:
        for pattern in self.PATTERNS:
            for match in pattern.finditer(text):
                value = self._sanitize(match.group(1))
                if value:
                    return value
        return None

    def empty(self) -> Optional[str]:
        return None

    def _sanitize(self, raw: str) -> str:
        value = self.DISALLOWED_CHARS.sub('', raw[:MAX_MANUFACTURER_LENGTH])
        value = self.WHITESPACE.sub(' ', value)
        return value.strip(' ,')


class CASNumberExtractor(FieldExtractor[Optional[str]]):
    """
    Extracts the document's CAS Registry Number.

    A "CAS"-labelled number wins even when its check digit fails (the
    pipeline reports that as a warning); an unlabelled number is only
    accepted when its check digit is valid.
    """

    name = 'cas_number'

    def __init__(self, cas_extractor: Optional[CASExtractor] = None):
        self.cas_extractor = cas_extractor or CASExtractor()

    def extract(self, text: str) -> Optional[str]:
        return self.cas_extractor.extract_cas(text)

    def empty(self) -> Optional[str]:
        return None

    def is_valid(self, cas: Optional[str]) -> bool:
        """Check digit test for an extracted number."""
        return self.cas_extractor.validate_cas(cas) if cas else False


class SignalWordExtractor(FieldExtractor[Optional[str]]):
    """
    Extracts the GHS signal word, returned uppercase.

    Examples:
        >>> SignalWordExtractor()("Signal Word: Danger")
        'DANGER'
        >>> SignalWordExtractor()("WARNING: keep away from heat")
        'WARNING'
    """

    name = 'signal_word'

    LABELLED_PATTERN = re.compile(r'\bsignal\s*word\s*[:\-]?\s*(danger|warning)\b', re.IGNORECASE)
    BARE_PATTERN = re.compile(r'\b(danger|warning)\b', re.IGNORECASE)

    def extract(self, text: str) -> Optional[str]:
        match = self.LABELLED_PATTERN.search(text) or self.BARE_PATTERN.search(text)
        return match.group(1).upper() if match else None

    def empty(self) -> Optional[str]:
        return None
