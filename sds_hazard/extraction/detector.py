"""
Document type detection.

Identifies what kind of data sheet a text is before field extraction, so the
pipeline can flag documents that are not safety data sheets at all.

Types:
  - **sds**: GHS Safety Data Sheet (16-section layout)
  - **msds**: legacy (pre-GHS) Material Safety Data Sheet
  - **pds**: Product Data Sheet (marketing sheet, no hazard data)
  - **tds**: Technical Data Sheet
  - **unknown**: none of the above
"""

import re

SAFETY_DOCUMENT_TYPES = frozenset({'sds', 'msds'})

# The earliest phrase in the document decides (titles come first)
_TYPE_PATTERNS = (
    ('msds', re.compile(r'\bmaterial\s+safety\s+data\s+sheet\b|\bMSDS\b', re.IGNORECASE)),
    ('sds', re.compile(r'\bsafety\s+data\s+sheet\b|\bSDS\b', re.IGNORECASE)),
    ('pds', re.compile(r'\bproduct\s+data\s+sheet\b', re.IGNORECASE)),
    ('tds', re.compile(r'\btechnical\s+data\s+sheet\b', re.IGNORECASE)),
)

_GHS_SECTION_2 = re.compile(r'\bsection\s*2\b[:.\s-]*hazard(?:s|\(s\))?\s+identification', re.IGNORECASE)


def detect_document_type(text: str) -> str:
    """
    Detect the data sheet type from document text.

    A document with no type phrase but a GHS "Section 2: Hazard(s)
    identification" heading is treated as an SDS.

    Args:
        text: Normalized document text

    Returns:
        One of 'sds', 'msds', 'pds', 'tds', or 'unknown'.
    """
    if not text or not isinstance(text, str):
        return 'unknown'

    hits = []
    for doc_type, pattern in _TYPE_PATTERNS:
        match = pattern.search(text)
        if match:
            hits.append((match.start(), doc_type))
    if hits:
        return min(hits)[1]

    if _GHS_SECTION_2.search(text):
        return 'sds'

    return 'unknown'


def is_safety_document(doc_type: str) -> bool:
    """True for SDS and MSDS documents."""
    return doc_type in SAFETY_DOCUMENT_TYPES
