"""
CAS number extraction and validation module.

Handles CAS (Chemical Abstracts Service) Registry Number extraction from
SDS text and search terms, plus check-digit validation.
"""

import re
from typing import List, Optional


class CASExtractor:
    """
    Extracts and validates CAS Registry Numbers.

    CAS numbers are unique identifiers for chemical substances.
    Format: 2-7 digits, hyphen, 2 digits, hyphen, 1 check digit
    Example: 67-64-1 (Acetone)

    Extraction prefers a number explicitly labelled "CAS" (``CAS: 67-64-1``,
    ``CAS No. 67-64-1``, ``CAS#67-64-1``). Unlabelled numbers are only
    accepted when their check digit is valid, which keeps part numbers and
    phone fragments out.
    """

    # Format: \d{2,7}-\d{2}-\d
    CAS_PATTERN = re.compile(
        r'\b(\d{2,7}-\d{2}-\d)\b'
    )

    LABELLED_CAS_PATTERN = re.compile(
        r'\bCAS(?:[\s-]*(?:Registry\s*)?(?:No|Number|RN)\.?)?[\s#:.]*(\d{2,7}-\d{2}-\d)\b',
        re.IGNORECASE
    )

    def extract_cas(self, text: str) -> Optional[str]:
        """
        Extract the document's CAS number from text.

        Args:
            text: Input text potentially containing a CAS number

        Returns:
            CAS number if found, None otherwise

        Examples:
            >>> extractor = CASExtractor()
            >>> extractor.extract_cas("Acetone (CAS: 67-64-1)")
            '67-64-1'
            >>> extractor.extract_cas("Toluene 108-88-3")
            '108-88-3'
            >>> extractor.extract_cas("Part 123-45-6") is None
            True
        """
        if not text or not isinstance(text, str):
            return None

        labelled = self.LABELLED_CAS_PATTERN.search(text)
        if labelled:
            return labelled.group(1)

        for cas in self.CAS_PATTERN.findall(text):
            if self.validate_cas(cas):
                return cas

        return None

    def extract_all_cas(self, text: str) -> List[str]:
        """
        Extract all valid CAS numbers from text, in order of appearance.

        Args:
            text: Input text

        Returns:
            List of unique valid CAS numbers found
        """
        if not text or not isinstance(text, str):
            return []

        found: List[str] = []
        for cas in self.CAS_PATTERN.findall(text):
            if cas not in found and self.validate_cas(cas):
                found.append(cas)
        return found

    def find_cas_shaped(self, text: str) -> Optional[str]:
        """
        Return the first CAS-shaped substring without check-digit validation.

        Used for search terms, where the user typed a number and an exact
        string comparison decides the match.

        Args:
            text: Free text (e.g. a search query)

        Returns:
            First substring matching the CAS format, or None
        """
        if not text or not isinstance(text, str):
            return None

        match = self.CAS_PATTERN.search(text)
        return match.group(1) if match else None

    def validate_cas(self, cas: str) -> bool:
        """
        Validate CAS number using check digit algorithm.

        The check digit is calculated by:
        1. Remove hyphens from CAS number
        2. Take all digits except the last (check digit)
        3. Starting from the right, multiply each digit by its position (1, 2, 3, ...)
        4. Sum all products
        5. Take sum modulo 10
        6. Compare with check digit

        Args:
            cas: CAS number to validate

        Returns:
            True if CAS number is valid, False otherwise

        Examples:
            >>> extractor = CASExtractor()
            >>> extractor.validate_cas("67-64-1")
            True
            >>> extractor.validate_cas("67-64-2")
            False
        """
        if not cas or not isinstance(cas, str):
            return False

        if not self.is_cas_format(cas):
            return False

        digits_only = cas.strip().replace('-', '')
        check_digit = int(digits_only[-1])

        total = 0
        for i, digit in enumerate(reversed(digits_only[:-1]), start=1):
            total += int(digit) * i

        return check_digit == total % 10

    def is_cas_format(self, text: str) -> bool:
        """
        Check if text is exactly a CAS number (format only, no validation).

        Args:
            text: Text to check

        Returns:
            True if text matches CAS format, False otherwise
        """
        if not text or not isinstance(text, str):
            return False

        return self.CAS_PATTERN.fullmatch(text.strip()) is not None
