from __future__ import annotations
from itertools import combinations
from typing import List, Sequence, Set

from .datatypes import SentenceDocument, SentenceGraph, SimilarityEdge, SimilarityMatrix

def build_graph(documents: Sequence[SentenceDocument], matrix: SimilarityMatrix, threshold: float = 0.2) -> SentenceGraph:
    """Link every pair of sentences whose similarity reaches `threshold`."""
    edges = [
        SimilarityEdge(source=a, target=b, similarity=matrix.rows[a][b])
        for a, b in combinations(range(len(documents)), 2)
        if matrix.rows[a][b] >= threshold
    ]
    return SentenceGraph(documents=list(documents), edges=edges, threshold=threshold)

def node_degrees(graph: SentenceGraph) -> List[int]:
    degrees = [0] * len(graph.documents)
    for edge in graph.edges:
        degrees[edge.source] += 1
        degrees[edge.target] += 1
    return degrees

def isolated_sentences(graph: SentenceGraph) -> Set[int]:
    return {i for i, degree in enumerate(node_degrees(graph)) if degree == 0}
