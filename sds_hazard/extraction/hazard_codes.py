"""
Hazard (H) and precautionary (P) statement extraction.

A statement is a code, optionally combined with further codes of the same
kind (``H302+H312``, ``P303 + P361 + P353``), followed by its text up to the
next sentence boundary (period, line break, the next code of the same kind
or end of text).
"""

import re
from typing import Iterator, List, Optional, Pattern, Tuple

from sds_hazard.extraction.base import FieldExtractor
from sds_hazard.extraction.types import HazardStatement

DEFAULT_MIN_DESCRIPTION_LENGTH = 10
DEFAULT_MAX_P_CODES = 20


def _compile_statement_pattern(prefix: str) -> Pattern:
    # description stops at the next code of the same kind on the line
    return re.compile(
        rf'\b({prefix}\d{{3}}(?:\s*\+\s*{prefix}\d{{3}})*)\b[ \t]*[:\-]?[ \t]*'
        rf'((?:(?!\b{prefix}\d{{3}}\b)[^\n.])*)'
    )


H_STATEMENT_PATTERN = _compile_statement_pattern('H')
P_STATEMENT_PATTERN = _compile_statement_pattern('P')


def statement_pattern(prefix: str) -> Pattern:
    """Compiled statement regex for a code prefix ('H' or 'P')."""
    if prefix == 'H':
        return H_STATEMENT_PATTERN
    if prefix == 'P':
        return P_STATEMENT_PATTERN
    raise ValueError(f"Statement prefix must be 'H' or 'P', got '{prefix}'")


def iter_statements(text: str, prefix: str, min_description_length: int) -> Iterator[Tuple[str, str]]:
    """
    Yield ``(code, description)`` pairs in order of appearance.

    Combined codes are returned without inner whitespace. Pairs whose
    description is shorter than ``min_description_length`` are skipped;
    duplicates are not filtered here.
    """
    for match in statement_pattern(prefix).finditer(text):
        code = re.sub(r'\s+', '', match.group(1))
        description = match.group(2).strip()
        if len(description) < min_description_length:
            continue
        yield code, description


def unique_codes(statements: List[HazardStatement]) -> List[str]:
    """Individual codes of the statements, deduplicated in order."""
    codes: List[str] = []
    for statement in statements:
        for code in statement.codes:
            if code not in codes:
                codes.append(code)
    return codes


class StatementExtractor(FieldExtractor[List[HazardStatement]]):
    """
    Extracts statements with a given code prefix.

    Args:
        prefix: 'H' for hazard statements, 'P' for precautionary statements
        min_description_length: Shorter descriptions are discarded
        max_statements: Keep at most this many statements (None for no cap)
    """

    def __init__(self, prefix: str,
                 min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
                 max_statements: Optional[int] = None):
        if prefix not in ('H', 'P'):
            raise ValueError(f"Statement prefix must be 'H' or 'P', got '{prefix}'")
        self.prefix = prefix
        self.min_description_length = min_description_length
        self.max_statements = max_statements
        self.name = f"{prefix.lower()}_codes"

    def extract(self, text: str) -> List[HazardStatement]:
        statements: List[HazardStatement] = []
        seen = set()

        for code, description in iter_statements(text, self.prefix, self.min_description_length):
            if code in seen:
                continue
            seen.add(code)
            statements.append(HazardStatement(code=code, description=description))
            if self.max_statements is not None and len(statements) >= self.max_statements:
                break

        return statements

    def empty(self) -> List[HazardStatement]:
        return []


class HazardStatementExtractor(StatementExtractor):
    """H-code statements such as ``H225: Highly flammable liquid and vapor``."""

    def __init__(self, min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH):
        super().__init__('H', min_description_length=min_description_length)


class PrecautionaryStatementExtractor(StatementExtractor):
    """P-code statements, capped at ``max_statements`` (20 by default)."""

    def __init__(self, min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
                 max_statements: int = DEFAULT_MAX_P_CODES):
        super().__init__('P', min_description_length=min_description_length,
                         max_statements=max_statements)
