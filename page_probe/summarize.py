from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional

from .config import SummaryConfig
from .datatypes import SentenceDocument, SimilarityMatrix, Topic
from .features import find_similarity_matrix, to_topics
from .preprocessing import split_sentences, split_words, to_bag_of_words
from .scoring import score_similarity_matrix

logger = logging.getLogger(__name__)


class SentencesDocumentProcessor:
    """
    One extractive summarization run over a fixed text snapshot.

    Construction does all the work: sentences are segmented, turned into bags of words,
    scored against each other, and recurring topics are collected. The top-K getters
    only select from those results.
    """

    def __init__(self, text: str, config: Optional[SummaryConfig] = None):
        self.text = text
        self.config = config or SummaryConfig()
        cfg = self.config

        sentences = split_sentences(text, cfg.abbreviations)
        self.word_lists: List[List[str]] = [split_words(s) for s in sentences]
        self.topics: Dict[str, Topic] = to_topics(
            self.word_lists, cfg.context_length, cfg.stopwords, cfg.remove_stopwords)

        bags = [to_bag_of_words(words, cfg.stopwords, cfg.remove_stopwords) for words in self.word_lists]
        self.matrix: SimilarityMatrix = find_similarity_matrix(bags)
        scores = score_similarity_matrix(self.matrix, normalize=cfg.normalize_scores)
        self.documents: List[SentenceDocument] = [
            SentenceDocument(original=s, words=self.word_lists[i], bag=bags[i], score=scores[i], sort_order=i)
            for i, s in enumerate(sentences)
        ]
        logger.debug("Processed %d sentences, %d topics", len(self.documents), len(self.topics))

    def get_top_k_value(self) -> int:
        return math.ceil(self.config.top_percent * len(self.documents))

    def get_top_k_documents(self) -> List[SentenceDocument]:
        """Best scoring sentences (positive scores only), back in reading order."""
        ranked = sorted((d for d in self.documents if d.score > 0), key=lambda d: d.score, reverse=True)
        return sorted(ranked[:self.get_top_k_value()], key=lambda d: d.sort_order)

    def get_top_k_topics(self) -> List[Topic]:
        """
        Best scoring topics: min(k, 2 * top_percent * topic count), but never fewer than
        the topics occurring more than k times.
        """
        k = self.get_top_k_value()
        topic_2k = math.ceil(2 * self.config.top_percent * len(self.topics))
        main_topic_count = sum(1 for t in self.topics.values() if t.count > k)
        ranked = sorted(self.topics.values(), key=lambda t: t.score, reverse=True)
        return ranked[:max(main_topic_count, min(topic_2k, k))]


def generate_summary(processor: SentencesDocumentProcessor) -> str:
    return " ".join(d.original for d in processor.get_top_k_documents())

def summarize(text: str, top_percent: float = 0.1) -> str:
    # Pipeline glue
    processor = SentencesDocumentProcessor(text, SummaryConfig(top_percent=top_percent))
    return generate_summary(processor)
