"""
Named-section location for SDS text.

SDS documents follow the 16-section GHS layout. Parsers that need one
section (hazard identification, first aid, exposure controls) locate it
here instead of repeating heading search logic.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Sequence, Union

PatternLike = Union[str, Pattern]


@dataclass(frozen=True)
class SectionSpan:
    """
    A located section of document text.

    Attributes:
        text: The section text (bounded window)
        start: Offset of the section start in the source text
        end: Offset one past the section end in the source text
        heading: The heading text that matched, '' on the fallback path
        found: False when no heading matched and a fallback window was used
    """
    text: str
    start: int
    end: int
    heading: str = ''
    found: bool = True


def _compile(pattern: PatternLike) -> Pattern:
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern


def locate_section(
    text: str,
    heading_patterns: Sequence[PatternLike],
    end_patterns: Sequence[PatternLike] = (),
    max_length: int = 3000,
    fallback_length: Optional[int] = None,
) -> Optional[SectionSpan]:
    """
    Locate a named section in document text.

    Heading patterns are tried in priority order; the first pattern with a
    match anchors the section. The window runs ``max_length`` characters from
    the heading and is cut at the earliest end pattern found after the
    heading itself.

    Args:
        text: Normalized document text
        heading_patterns: Regexes for the section heading, most specific first
        end_patterns: Regexes marking the start of the following section
        max_length: Maximum window size in characters
        fallback_length: If set and no heading matches, return the first
            ``fallback_length`` characters with ``found=False``

    Returns:
        SectionSpan, or None when nothing matched and no fallback was requested
    """
    if not text or not isinstance(text, str):
        if fallback_length is not None:
            return SectionSpan(text='', start=0, end=0, found=False)
        return None

    for pattern in heading_patterns:
        match = _compile(pattern).search(text)
        if not match:
            continue

        start = match.start()
        window = text[start:start + max_length]

        # Search for the next section only after the heading
        heading_length = match.end() - start
        cut = len(window)
        for end_pattern in end_patterns:
            end_match = _compile(end_pattern).search(window, heading_length)
            if end_match and end_match.start() < cut:
                cut = end_match.start()

        return SectionSpan(
            text=window[:cut],
            start=start,
            end=start + cut,
            heading=match.group(0),
            found=True,
        )

    if fallback_length is not None:
        window = text[:fallback_length]
        return SectionSpan(text=window, start=0, end=len(window), found=False)

    return None
