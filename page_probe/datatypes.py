from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Any

@dataclass
class BagOfWords:
    counts: Dict[str, int]  # stopwords excluded when requested
    inner_length: int  # word count including stopwords

    def __len__(self) -> int:
        return len(self.counts)

@dataclass(frozen=True)
class SentenceDocument:
    original: str
    words: List[str]
    bag: BagOfWords
    score: float
    sort_order: int

@dataclass
class Topic:
    words: List[str]
    count: int = 0
    score: float = 0.0

    @property
    def phrase(self) -> str:
        return " ".join(self.words)

@dataclass
class SimilarityMatrix:
    rows: List[List[float]]
    row_lengths: List[int]  # inner length of the bag behind each row

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def inner_length(self) -> int:
        return sum(self.row_lengths)

@dataclass(frozen=True)
class SimilarityEdge:
    source: int  # sort_order of the earlier sentence
    target: int
    similarity: float

@dataclass
class SentenceGraph:
    documents: List[SentenceDocument]
    edges: List[SimilarityEdge]  # undirected
    threshold: float

class FailureKind(str, Enum):
    LANDING_PAGE = "landing_page"
    NO_ARTICLE_CONTAINER = "no_article_container"
    INSUFFICIENT_CONTENT = "insufficient_content"

@dataclass
class SummaryResult:
    success: bool
    message: str = ""
    reason: Optional[FailureKind] = None
    title: Optional[str] = None
    description: str = ""
    top_sentences: List[SentenceDocument] = field(default_factory=list)
    top_topics: List[Topic] = field(default_factory=list)
    original_word_count: int = 0
    summary_word_count: int = 0

    @property
    def minutes_saved(self) -> int:
        # ~200 words per minute of reading
        return round((self.original_word_count - self.summary_word_count) / 200)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "message": self.message}
        return {
            "success": True,
            "title": self.title,
            "description": self.description,
            "topSentences": [
                {"original": d.original, "words": list(d.words), "sortOrder": d.sort_order}
                for d in self.top_sentences
            ],
            "topTopics": [
                {"phrase": t.phrase, "count": t.count, "score": t.score}
                for t in self.top_topics
            ],
            "originalWordCount": self.original_word_count,
            "summaryWordCount": self.summary_word_count,
        }
