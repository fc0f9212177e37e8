"""
String similarity primitive shared by the matching layer.

Similarity is defined as ``1 - levenshtein(a, b) / max(len(a), len(b))`` on
case-folded, trimmed strings.
"""

import Levenshtein


def string_similarity(text1: str, text2: str) -> float:
    """
    Calculate edit-distance similarity between two strings.

    Args:
        text1: First string
        text2: Second string

    Returns:
        Similarity in [0.0, 1.0], where 1.0 is identical (case-insensitive).
        Returns 0.0 if either string is empty or not a string.

    Examples:
        >>> string_similarity("Acetone", "ACETONE ")
        1.0
        >>> string_similarity("Acetone", "")
        0.0
    """
    if not text1 or not text2 or not isinstance(text1, str) or not isinstance(text2, str):
        return 0.0

    s1 = text1.casefold().strip()
    s2 = text2.casefold().strip()

    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    max_length = max(len(s1), len(s2))
    distance = Levenshtein.distance(s1, s2)
    return 1.0 - (distance / max_length)


def contains_either(text1: str, text2: str) -> bool:
    """
    Check whether either string contains the other (case-insensitive).

    Empty strings never count as contained.
    """
    if not text1 or not text2:
        return False

    s1 = text1.casefold().strip()
    s2 = text2.casefold().strip()
    if not s1 or not s2:
        return False

    return s1 in s2 or s2 in s1
