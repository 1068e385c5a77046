"""Shannon entropy of query names."""

import math
from collections import Counter


def shannon_entropy(text: str) -> float:
    """Shannon entropy of a string in bits, rounded to 3 decimal places.

    Computed over the empirical distribution of the string's code points.
    Returns 0 for the empty string.
    """
    length = len(text)
    if length == 0:
        return 0.0

    entropy = 0.0
    for count in Counter(text).values():
        p = count / length
        entropy -= p * math.log2(p)

    return round(entropy, 3)
