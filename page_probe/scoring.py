from __future__ import annotations
from typing import List, Sequence

from .datatypes import BagOfWords, SimilarityMatrix
from .features import find_similarity_matrix

# Rows from sentences shorter than this many words score 0.
MIN_ROW_LENGTH = 4

def score_similarity_matrix(matrix: SimilarityMatrix, normalize: bool = False) -> List[float]:
    """
    Score each sentence by the sum of its similarities to all others.

    Sentences shorter than the average are discounted by length / average; longer ones
    are not boosted. Sentences under `MIN_ROW_LENGTH` words score 0.
    """
    n = len(matrix)
    if n == 0:
        return []
    average = matrix.inner_length / n
    scores = []
    for row, length in zip(matrix.rows, matrix.row_lengths):
        if length < MIN_ROW_LENGTH:
            scores.append(0.0)
            continue
        factor = min(length / average, 1)
        scores.append(sum(sim * factor for sim in row))
    return normalize_score_list(scores) if normalize else scores

def normalize_score_list(scores: Sequence[float]) -> List[float]:
    """Scale scores to sum to 1. An all-zero list is returned unchanged."""
    total = sum(scores)
    if total == 0:
        return list(scores)
    return [s / total for s in scores]

def find_similarity_scores(bags: Sequence[BagOfWords], normalize: bool = False) -> List[float]:
    return score_similarity_matrix(find_similarity_matrix(bags), normalize=normalize)
