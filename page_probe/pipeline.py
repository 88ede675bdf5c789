from __future__ import annotations
import logging
from typing import Optional

from .config import ProbeSettings, SummaryConfig
from .datatypes import FailureKind, SummaryResult
from .locator import ContentLocator
from .summarize import SentencesDocumentProcessor
from .tree import TreeNode, document_body

logger = logging.getLogger(__name__)

LANDING_PAGE_MESSAGE = (
    "probe is configured to ignore landing pages and search pages, as they are generally bad "
    "candidates for summarization. You may change this in the settings."
)
NOT_A_CANDIDATE_MESSAGE = (
    "This page is not a good candidate for summarization. Try longer pages such as news "
    "articles, blog posts, or encyclopedia entries."
)
INSUFFICIENT_CONTENT_MESSAGE = (
    "This page does not have enough text to summarize. Try longer pages such as news "
    "articles, blog posts, or encyclopedia entries."
)


def is_landing_page(path: Optional[str], settings: ProbeSettings) -> bool:
    return path is not None and path.lower() in settings.landing_paths

def extract_article_text(root: TreeNode, locator: ContentLocator) -> Optional[str]:
    """Suppress page noise, locate the article container and return its text, or None."""
    root = document_body(root)
    locator.reset()
    locator.ignore_all(
        locator.select_abstract_elements(root),
        locator.select_aside_elements(root),
        locator.select_hyperlink_containers(root),
        locator.select_visual_containers(root),
    )
    node = locator.find_article_container(root)
    if node is None:
        return None
    return "".join(t + "\n" for t in locator.get_text_list(node))

def extract_page_summary(root: TreeNode,
                         settings: Optional[ProbeSettings] = None,
                         path: Optional[str] = None,
                         locator: Optional[ContentLocator] = None,
                         summary_config: Optional[SummaryConfig] = None) -> SummaryResult:
    """
    Summarize the page under `root`. Expected failures come back as unsuccessful
    results, never as exceptions.
    """
    settings = settings or ProbeSettings()
    locator = locator or ContentLocator()
    config = settings.summary_config(summary_config)

    if settings.suppress_landing and is_landing_page(path, settings):
        logger.info("Skipping landing page %r", path)
        return SummaryResult(success=False, reason=FailureKind.LANDING_PAGE, message=LANDING_PAGE_MESSAGE)

    text = extract_article_text(root, locator)
    if text is None:
        logger.info("No article container found")
        return SummaryResult(success=False, reason=FailureKind.NO_ARTICLE_CONTAINER, message=NOT_A_CANDIDATE_MESSAGE)

    content = SentencesDocumentProcessor(text, config)
    if len(text) < config.min_text_length or len(content.documents) < config.min_sentence_count:
        logger.info("Insufficient content: %d characters, %d sentences", len(text), len(content.documents))
        return SummaryResult(success=False, reason=FailureKind.INSUFFICIENT_CONTENT, message=INSUFFICIENT_CONTENT_MESSAGE)

    top_sentences = content.get_top_k_documents()
    result = SummaryResult(
        success=True,
        title=locator.get_page_title(root),
        description=locator.get_page_description(root),
        top_sentences=top_sentences,
        top_topics=content.get_top_k_topics(),
        original_word_count=sum(len(d.words) for d in content.documents),
        summary_word_count=sum(len(d.words) for d in top_sentences),
    )
    logger.info("Summarized %d sentences into %d", len(content.documents), len(top_sentences))
    return result
