"""
Text normalization module for safety data sheet text.

Provides the cleanup applied to raw document text before any field
extraction: control character stripping, BOM/replacement character removal,
whitespace collapse and Unicode normalization.
"""

import re
import unicodedata

# Versioned normalization: increment when rules change, records built with an
# older version are not comparable byte-for-byte
NORMALIZATION_VERSION = 1


class TextNormalizer:
    """
    Normalizes extracted SDS text to a standard form for field extraction.

    Handles:
    - Control characters (newline and tab survive)
    - Byte order marks and U+FFFD replacement characters left by PDF decoders
    - Whitespace runs (horizontal runs become one space, runs containing a
      line break become one newline)
    - Unicode normalization (NFD)

    Line structure is preserved: several extractors (manufacturer,
    H/P statements, first aid) read up to the end of a line or heading.
    """

    # C0 controls, DEL and C1 controls, minus \t (0x09) and \n (0x0A)
    CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')

    # U+FFFD replacement character, U+FEFF byte order mark
    ARTIFACT_CHARS = re.compile('[\ufffd\ufeff]')

    HORIZONTAL_WHITESPACE = re.compile(r'[^\S\n]+')
    LINE_BREAK_RUN = re.compile(r' ?\n[\s]*')

    def __init__(self, unicode_form: str = 'NFD'):
        """
        Initialize the text normalizer.

        Args:
            unicode_form: Unicode normalization form applied last
        """
        self.unicode_form = unicode_form

    def normalize(self, text: str) -> str:
        """
        Apply the complete normalization pipeline to document text.

        Pipeline order:
        1. Line ending unification (CRLF / CR -> LF)
        2. Control character removal
        3. BOM / replacement character removal
        4. Whitespace collapse
        5. Trim
        6. Unicode normalization

        Args:
            text: Raw document text

        Returns:
            Normalized text, '' for empty or non-string input

        Examples:
            >>> normalizer = TextNormalizer()
            >>> normalizer.normalize("Signal  Word:\\x07 DANGER\\r\\n\\r\\nH225")
            'Signal Word: DANGER\\nH225'
        """
        if not text or not isinstance(text, str):
            return ''

        text = text.replace('\r\n', '\n').replace('\r', '\n')
        text = self._strip_control_characters(text)
        text = self.ARTIFACT_CHARS.sub('', text)
        text = self._collapse_whitespace(text)
        text = text.strip()

        return self._unicode_normalize(text)

    def _strip_control_characters(self, text: str) -> str:
        """Remove C0 and C1 control characters except newline and tab."""
        return self.CONTROL_CHARS.sub('', text)

    def _collapse_whitespace(self, text: str) -> str:
        """
        Collapse whitespace runs.

        Tabs, non-breaking spaces and repeated spaces become a single space;
        any run that contains a line break (blank lines included) becomes a
        single newline.

        Args:
            text: Input text

        Returns:
            Text with collapsed whitespace
        """
        text = self.HORIZONTAL_WHITESPACE.sub(' ', text)
        return self.LINE_BREAK_RUN.sub('\n', text)

    def _unicode_normalize(self, text: str) -> str:
        """Apply the configured Unicode normalization form."""
        return unicodedata.normalize(self.unicode_form, text)


# Module-level singleton for convenience function
_normalizer_instance = None


def _get_normalizer() -> TextNormalizer:
    """Get or create the module-level TextNormalizer singleton."""
    global _normalizer_instance
    if _normalizer_instance is None:
        _normalizer_instance = TextNormalizer()
    return _normalizer_instance


def normalize_text(text: str) -> str:
    """
    Convenience function for text normalization.

    Uses a module-level TextNormalizer singleton. The normalizer holds no
    per-call state, so sharing it across threads is safe.

    Args:
        text: Raw document text

    Returns:
        Normalized text string
    """
    return _get_normalizer().normalize(text)
