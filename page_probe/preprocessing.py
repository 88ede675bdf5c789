from __future__ import annotations
import re
from collections import Counter
from functools import lru_cache
from typing import Iterable, List, Sequence

from .config import ABBREVIATIONS, STOPWORDS
from .datatypes import BagOfWords

# Closing quotes move in front of the end punctuation: `."` -> `".`
_QUOTE_ORDER = (
    ('."', '".'), (".'", "'."),
    ('?"', '"?'), ("?'", "'?"),
    ('!"', '"!'), ("!'", "'!"),
)

# Word separators: a leading `[citation]`, runs of non-letters, periods not
# closing a single-letter abbreviation, and spaces not around one (`u.s. army`).
WORD_TERMINATOR = re.compile(
    r'(?:^\[.*\])'
    r'|(?:[^a-z.\s]+)'
    r'|(?:(?<!\b[a-z])\.)'
    r'|(?:(?<!\b[a-z]\.)\s)'
    r'|(?:\s(?![a-z]\.))',
    re.IGNORECASE,
)

@lru_cache(maxsize=16)
def sentence_terminator(abbreviations: Sequence[str] = ABBREVIATIONS) -> re.Pattern:
    """
    `!`, `?` and line breaks always end a sentence. A run of periods does too, unless it
    follows a known abbreviation or a single letter (`Dr.`, `U.S.`), or is directly
    followed by a word character or more punctuation (decimals, `example.com`).
    """
    # one fixed-width look-behind per abbreviation
    guards = "".join(rf"(?<!\b{re.escape(a)})" for a in abbreviations)
    return re.compile(
        r'(?:[!?\r\n]+["\']?)'
        r'|(?:' + guards + r'(?<!\b[a-z])\.+(?![\w.!?])["\']?)',
        re.IGNORECASE,
    )

def split_sentences(text: str, abbreviations: Sequence[str] = ABBREVIATIONS) -> List[str]:
    for before, after in _QUOTE_ORDER:
        text = text.replace(before, after)
    parts = sentence_terminator(tuple(abbreviations)).split(text)
    return [p.strip() for p in parts if p and p.strip()]

def split_words(sentence: str) -> List[str]:
    words = WORD_TERMINATOR.split(sentence.lower())
    return [w.strip() for w in words if w and w.strip()]

def remove_stopwords(words: Iterable[str], stopwords: Iterable[str] = STOPWORDS) -> List[str]:
    stop = set(stopwords)
    return [w for w in words if w.lower() not in stop]

def to_bag_of_words(words: Sequence[str],
                    stopwords: Iterable[str] = STOPWORDS,
                    remove_stop: bool = True) -> BagOfWords:
    """Word -> count, keeping the full word count (stopwords included) alongside."""
    stop = set(stopwords) if remove_stop else set()
    counts = Counter(w for w in words if w.lower() not in stop)
    return BagOfWords(counts=dict(counts), inner_length=len(words))
