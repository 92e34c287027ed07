"""
Name similarity scoring for the fuzzy match tier.
"""


def similarity(a: str, b: str) -> float:
    """
    Return a similarity score between 0.0 and 1.0 for two item names.

    - 1.0 when the names are equal ignoring case
    - len(shorter) / len(longer) when one name contains the other
    - otherwise shared words / max(word count of a, word count of b)

    The word overlap is computed over word sets, so
    similarity(a, b) == similarity(b, a).
    """
    s1 = a.lower()
    s2 = b.lower()

    if s1 == s2:
        return 1.0

    if s1 in s2 or s2 in s1:
        shorter, longer = (s1, s2) if len(s1) < len(s2) else (s2, s1)
        return len(shorter) / len(longer)

    words1 = s1.split()
    words2 = s2.split()
    if not words1 or not words2:
        return 0.0

    common = set(words1) & set(words2)
    if not common:
        return 0.0

    return len(common) / max(len(words1), len(words2))
