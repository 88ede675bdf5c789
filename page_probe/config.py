from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# Keywords are sought in the lowercased `.class1 .class2 #id +tag ` string of an element.
# `+tag ` (trailing space) targets one tag exactly, e.g. `+p ` does not match `pre`.
SELECTOR_KEYWORD_SCORES: Dict[str, int] = {
    '+div ': 5, '+pre ': 5, '+section ': 5, '+p ': 10,
    'article': 25, 'body': 25, 'content': 25, 'entry': 25, 'hentry': 25, 'main': 25,
    'page': 25, 'post': 25, 'text': 25, 'blog': 25, 'story': 25, 'column': 25,
    '+dl ': -5, '+dt ': -5, '+dd ': -5, '+li ': -5, '+ol ': -5, '+td ': -5, '+ul ': -5,
    '.grid': -25, 'attribution': -25, 'blocks': -25, 'combx': -25, 'comment': -25,
    'contact': -25, 'reference': -25, 'foot': -25, 'footer': -25, 'footnote': -25,
    'infobox': -25, 'masonry': -25, 'masthead': -25, 'media': -25, 'meta': -25,
    'outbrain': -25, 'promo': -25, 'related': -25, 'scroll': -25, 'shoutbox': -25,
    'sidebar': -25, 'sponsor': -25, 'shopping': -25, 'tags': -25, 'tool': -25,
    'widget': -25, 'community': -25, 'disqus': -25, 'extra': -25, 'header': -25,
    'menu': -25, 'remark': -25, 'rss': -25, 'ad-break': -25, 'pagination': -25,
    'pager': -25, 'popup': -25, 'tweet': -25, 'twitter': -25, 'viewcode': -25,
}

BLOCK_DISPLAY_STYLES = ('block', 'flex', 'grid', 'inline-block', 'inline-flex')
BLOCK_POSITION_STYLES = ('absolute', 'fixed', 'sticky')
BLOCK_TAGS = (
    'address', 'article', 'aside', 'blockquote', 'br', 'canvas', 'dd', 'div', 'fieldset',
    'figcaption', 'figure', 'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header',
    'hr', 'li', 'main', 'nav', 'noscript', 'ol', 'p', 'pre', 'section', 'table', 'td', 'th',
    'tr', 'thead', 'tfoot', 'ul', 'video',
)
PROSE_TAGS = ('p', 'pre', 'span', 'td', 'div')
HEADING_TAGS = ('h1', 'h2', 'h3', 'h4', 'h5', 'h6')
ABSTRACT_TAGS = ('head', 'link', 'meta', 'noscript', 'script', 'style')
DESCRIPTIVE_TAGS = (
    'address', 'blockquote', 'cite', 'figcaption', 'footer', 'header', 'output', 'pre',
    'sup', 'tfoot',
)
INTERACTIVE_TAGS = (
    'button', 'canvas', 'dialog', 'embed', 'figure', 'form', 'frame', 'iframe', 'img',
    'input', 'label', 'menu', 'menuitem', 'nav', 'object', 'select', 'svg', 'textarea', 'video',
)
ASIDE_ROLES = (
    'alert', 'alertdialog', 'banner', 'button', 'columnheader', 'combobox', 'complementary',
    'dialog', 'directory', 'figure', 'heading', 'img', 'listbox', 'marquee', 'math', 'menu',
    'menubar', 'menuitem', 'navigation', 'option', 'search', 'searchbox', 'status', 'toolbar',
    'tooltip',
)
ASIDE_CLASSES = (
    'blogroll', 'caption', 'citation', 'comment', 'community', 'contact', 'copyright', 'extra',
    'foot', 'footer', 'footnote', 'hide-print', 'infobox', 'masthead', 'media', 'meta',
    'metadata', 'mw-jump-link', 'mw-revision', 'navigation', 'navigation-not-searchable',
    'noprint', 'outbrain', 'pager', 'popup', 'promo', 'reference', 'reference-text',
    'references', 'related', 'related-articles', 'remark', 'rss', 's-popover', 'scroll',
    'shopping', 'shoutbox', 'sidebar', 'sponsor', 'tag-cloud', 'tags', 'thumb', 'tool',
    'user-info', 'widget', 'wikitable',
)

STOPWORDS = (
    'i', 'me', 'my', 'myself', 'we', 'our', 'ours', 'ourselves', 'you', 'your', 'yours',
    'yourself', 'yourselves', 'he', 'him', 'his', 'himself', 'she', 'her', 'hers', 'herself',
    'it', 'its', 'itself', 'they', 'them', 'their', 'theirs', 'themselves', 'what', 'which',
    'who', 'whom', 'this', 'that', "that'll", 'these', 'those', 'am', 'is', 'are', 'was',
    'were', 'be', 'been', 'being', 'have', 'has', 'had', 'having', 'do', 'does', 'did',
    'doing', 'a', 'an', 'the', 'and', 'but', 'if', 'or', 'because', 'as', 'until', 'while',
    'of', 'at', 'by', 'for', 'with', 'about', 'against', 'between', 'into', 'through',
    'during', 'before', 'after', 'above', 'below', 'to', 'from', 'up', 'down', 'in', 'out',
    'on', 'off', 'over', 'under', 'again', 'further', 'then', 'once', 'here', 'there', 'when',
    'where', 'why', 'how', 'all', 'any', 'both', 'each', 'few', 'more', 'most', 'other',
    'some', 'such', 'no', 'nor', 'not', 'only', 'own', 'same', 'so', 'than', 'too', 'very',
    's', 't', 'th', 'nd', 'can', 'will', 'just', 'don', 'should', 'now', 'd', 'll', 'm', 'o',
    're', 've', 'y', 'ain', 'aren', 'couldn', 'didn', 'doesn', 'hadn', 'hasn', 'haven',
    'isn', 'ma', 'mightn', 'mustn', 'needn', 'shan', 'shouldn', 'wasn', 'weren', 'won',
    'wouldn', 'www', 'com', 'also',
)

ABBREVIATIONS = (
    'abr', 'apr', 'aug', 'ave', 'cir', 'ct', 'dec', 'dr', 'ed', 'etc', 'et al', 'feb', 'gen',
    'inc', 'jan', 'jr', 'jul', 'jun', 'ln', 'mar', 'mr', 'mrs', 'nov', 'oct', 'pp', 'prof',
    'rep', 'rd', 'rev', 'sen', 'sep', 'sr', 'st', 'vol', 'vs',
)

# Paths treated as landing or search pages.
LANDING_PATHS = ('', '/', '/search', '/search/')


class _Overridable:
    def with_overrides(self, **overrides):
        """Return a copy with `overrides` merged over the current values."""
        return dataclasses.replace(self, **overrides)


@dataclass(frozen=True)
class LocatorConfig(_Overridable):
    selector_keyword_scores: Dict[str, int] = field(default_factory=lambda: dict(SELECTOR_KEYWORD_SCORES))
    block_display_styles: Tuple[str, ...] = BLOCK_DISPLAY_STYLES
    block_position_styles: Tuple[str, ...] = BLOCK_POSITION_STYLES
    block_tags: Tuple[str, ...] = BLOCK_TAGS
    prose_tags: Tuple[str, ...] = PROSE_TAGS
    heading_tags: Tuple[str, ...] = HEADING_TAGS
    abstract_tags: Tuple[str, ...] = ABSTRACT_TAGS
    descriptive_tags: Tuple[str, ...] = DESCRIPTIVE_TAGS
    interactive_tags: Tuple[str, ...] = INTERACTIVE_TAGS
    aside_roles: Tuple[str, ...] = ASIDE_ROLES
    aside_classes: Tuple[str, ...] = ASIDE_CLASSES
    # share (0-1) of an element's text that must belong to a selector's matches
    container_ratio_threshold: float = 0.4
    text_length_threshold: int = 75
    text_container_traversal_depth: int = 4

    def __post_init__(self):
        if not 0 < self.container_ratio_threshold <= 1:
            raise ValueError(f"container_ratio_threshold must be in (0, 1], got {self.container_ratio_threshold}")
        if self.text_length_threshold <= 0:
            raise ValueError(f"text_length_threshold must be positive, got {self.text_length_threshold}")
        if self.text_container_traversal_depth < 1:
            raise ValueError(f"text_container_traversal_depth must be >= 1, got {self.text_container_traversal_depth}")


@dataclass(frozen=True)
class SummaryConfig(_Overridable):
    top_percent: float = 0.1
    stopwords: Tuple[str, ...] = STOPWORDS
    abbreviations: Tuple[str, ...] = ABBREVIATIONS
    context_length: int = 4
    remove_stopwords: bool = True
    normalize_scores: bool = False
    min_text_length: int = 250
    min_sentence_count: int = 12

    def __post_init__(self):
        if not 0 < self.top_percent <= 1:
            raise ValueError(f"top_percent must be in (0, 1], got {self.top_percent}")
        if self.context_length < 2:
            raise ValueError(f"context_length must be >= 2, got {self.context_length}")


@dataclass(frozen=True)
class ProbeSettings(_Overridable):
    show_icon: bool = True
    suppress_landing: bool = True
    summary_size: int = 2  # slider, 1..3
    landing_paths: Tuple[str, ...] = LANDING_PATHS

    def __post_init__(self):
        if not 1 <= self.summary_size <= 3:
            raise ValueError(f"summary_size must be between 1 and 3, got {self.summary_size}")

    @property
    def top_percent(self) -> float:
        return self.summary_size / 20

    def summary_config(self, explicit: Optional[SummaryConfig] = None) -> SummaryConfig:
        """An explicit config is used as given; otherwise the defaults sized by `summary_size`."""
        if explicit is not None:
            return explicit
        return SummaryConfig(top_percent=self.top_percent)
