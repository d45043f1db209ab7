"""
Vector similarity helpers.

Dependencies: math (stdlib), navigator.core.exceptions
System role: Ranking primitive for the local vector store
"""

import math
from collections.abc import Sequence

from navigator.core.exceptions import DimensionMismatchError


def cosine_similarity(vector_a: Sequence[float], vector_b: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    Args:
        vector_a: First vector
        vector_b: Second vector

    Returns:
        float: dot(a, b) / (|a| * |b|), or 0.0 when either norm is zero

    Raises:
        DimensionMismatchError: When the vectors differ in length
    """
    if len(vector_a) != len(vector_b):
        raise DimensionMismatchError(expected=len(vector_a), actual=len(vector_b))

    dot_product = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for a, b in zip(vector_a, vector_b):
        dot_product += a * b
        norm_a += a * a
        norm_b += b * b

    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return dot_product / (math.sqrt(norm_a) * math.sqrt(norm_b))
