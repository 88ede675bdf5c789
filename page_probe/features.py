from __future__ import annotations
import math
from typing import Dict, Iterable, List, Sequence

from .config import STOPWORDS
from .datatypes import BagOfWords, SimilarityMatrix, Topic
from .preprocessing import remove_stopwords

def to_topics(word_lists: Iterable[Sequence[str]],
              context_length: int = 4,
              stopwords: Iterable[str] = STOPWORDS,
              remove_stop: bool = True) -> Dict[str, Topic]:
    """
    Recurring n-grams (2..context_length words) keyed by phrase.

    Each word closes every sub-window of the last `context_length` words that ends on
    it; a sub-window of length L adds 1 + 0.1 * L to its phrase score. Phrases scoring
    3 or less are dropped, then so is any phrase whose words all appear in a phrase that
    is at least as long and scores strictly higher. Result is ordered by score,
    then by phrase length, both descending.
    """
    stopwords = tuple(stopwords)
    topics: Dict[str, Topic] = {}
    for words in word_lists:
        if remove_stop:
            words = remove_stopwords(words, stopwords)
        context: List[str] = []
        for w in words:
            if len(context) == context_length:
                context.pop(0)
            context.append(w)
            n = len(context)
            for i in range(n - 1):
                window = context[i:n]
                phrase = " ".join(window)
                topic = topics.get(phrase)
                if topic is None:
                    topic = topics[phrase] = Topic(words=list(window))
                topic.count += 1
                topic.score += 1 + 0.1 * (n - i)

    kept = [t for t in topics.values() if t.score > 3]
    kept = [t for t in kept if not any(_dominates(t2, t) for t2 in kept)]
    kept.sort(key=lambda t: len(t.phrase), reverse=True)
    kept.sort(key=lambda t: t.score, reverse=True)  # stable: length order survives ties
    return {t.phrase: t for t in kept}

def _dominates(t2: Topic, t: Topic) -> bool:
    return (t2.score > t.score
            and len(t2.words) >= len(t.words)
            and all(w in t2.words for w in t.words))

def to_vocabulary(*word_lists: Iterable[str]) -> List[str]:
    """Unique words across all lists, in first-seen order."""
    vocab: Dict[str, None] = {}
    for words in word_lists:
        for w in words:
            vocab.setdefault(w, None)
    return list(vocab)

def words_to_vector(vocab: Sequence[str], bag: BagOfWords) -> List[int]:
    return [bag.counts.get(v, 0) for v in vocab]

def dot_product(v1: Sequence[float], v2: Sequence[float]) -> float:
    return sum(a * b for a, b in zip(v1, v2))

def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    n1 = math.sqrt(dot_product(v1, v1))
    n2 = math.sqrt(dot_product(v2, v2))
    if n1 == 0.0 or n2 == 0.0:
        return 0.0
    return dot_product(v1, v2) / (n1 * n2)

def get_similarity(bag1: BagOfWords, bag2: BagOfWords) -> float:
    """Cosine similarity of two bags over their shared vocabulary; 0 if either is empty."""
    if not len(bag1) or not len(bag2):
        return 0.0
    vocab = to_vocabulary(bag1.counts, bag2.counts)
    return cosine_similarity(words_to_vector(vocab, bag1), words_to_vector(vocab, bag2))

def find_similarity_matrix(bags: Sequence[BagOfWords]) -> SimilarityMatrix:
    n = len(bags)
    rows = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            sim = get_similarity(bags[i], bags[j])
            rows[i][j] = rows[j][i] = sim
    return SimilarityMatrix(rows=rows, row_lengths=[b.inner_length for b in bags])
