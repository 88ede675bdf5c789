from __future__ import annotations
import logging
import re
from collections import deque
from typing import Iterator, List, Optional, Tuple

from .extractor import TextExtractor
from .tree import (
    Selector, TreeNode, class_selector, iter_descendants, role_selector, tag_selector,
)

logger = logging.getLogger(__name__)

SCORE = "score"
_TITLE_SEPARATOR = re.compile(r' - | \| ')


class ContentLocator(TextExtractor):
    """
    Finds the element most likely to hold a page's article body.

    Typical session::

        locator = ContentLocator()
        locator.reset()
        locator.ignore_all(
            locator.select_abstract_elements(root),
            locator.select_aside_elements(root),
            locator.select_hyperlink_containers(root),
            locator.select_visual_containers(root),
        )
        container = locator.find_article_container(root)
    """

    # --- scoring ------------------------------------------------------------

    def keyword_extremes(self, node: TreeNode) -> Tuple[int, int]:
        """
        Most positive and most negative keyword score matching `node`'s classes, id and tag.
        Same-sign matches never stack: only the single extreme of each sign counts.
        """
        classes = " .".join(node.classes)
        search = f".{classes} #{node.id} +{node.tag} ".lower()
        highest = 0
        lowest = 0
        for keyword, value in self.config.selector_keyword_scores.items():
            if keyword in search:
                if value > highest:
                    highest = value
                elif value < lowest:
                    lowest = value
        return highest, lowest

    def score(self, weight: float, node: TreeNode) -> float:
        """
        Add `weight` to the node's score. The first call seeds the score from keyword
        matches (highest + lowest + weight); later calls only accumulate `weight`.
        """
        current = self.cache.get(SCORE, node)
        if current is None:
            highest, lowest = self.keyword_extremes(node)
            current = highest + lowest + weight
        else:
            current += weight
        self.cache.set(SCORE, current, node)
        return current

    def get_score(self, node: TreeNode) -> Optional[float]:
        return self.cache.get(SCORE, node)

    def scored_nodes(self) -> List[Tuple[TreeNode, float]]:
        return list(self.cache.items(SCORE))

    def score_candidates(self, root: TreeNode) -> List[TreeNode]:
        """
        Score the ancestors of every significant prose element, with a weight derived
        from the element's text length that shrinks on each step upward. Returns the
        scored ancestors in first-scored order. The walk never climbs above `root`.
        """
        candidates = []
        for n in self.select_prose_elements(root):
            weight = min(self.calculate_text_length(n) / self.config.text_length_threshold, 10) - 1
            depth = self.config.text_container_traversal_depth
            decrement = weight / depth

            p = n.parent
            depth -= 1
            while p is not None and depth:
                if self.get_score(p) is None:
                    candidates.append(p)
                self.score(weight, p)
                if p is root:
                    break
                weight -= decrement
                p = p.parent
                depth -= 1
        return candidates

    def find_article_container(self, root: TreeNode) -> Optional[TreeNode]:
        """
        Highest scoring candidate container, or None when no candidate scores above 0.
        `root` itself is only chosen when no element beneath it scores above 0.
        """
        best_node = None
        best_score = 0
        for n in self.score_candidates(root):
            score = self.get_score(n)
            if n is not root and score > best_score:
                best_node = n
                best_score = score
        if best_node is None and (self.get_score(root) or 0) > 0:
            best_node = root
            best_score = self.get_score(root)
        if best_node is None:
            logger.debug("No positively scored article container")
        else:
            logger.debug("Article container %r scored %.2f", best_node, best_score)
        return best_node

    # --- selections ---------------------------------------------------------

    def select_containers_of(self, selector: Selector, title: str, root: TreeNode) -> Iterator[TreeNode]:
        """
        Matches of `selector`, followed by every ancestor whose text is predominantly
        (over `container_ratio_threshold`) owned by top-level matches. Lazy, single pass.
        """
        prop = f"{title}_container"
        queue = deque(self.select(selector, root))
        while queue:
            current = queue.popleft()
            self.cache.set(prop, True, current)
            yield current

            parent = current.parent
            if parent is not None and parent is not root and not self.cache.has(prop, parent):
                is_container = self.calculate_text_fill(selector, parent) > self.config.container_ratio_threshold
                self.cache.set(prop, is_container, parent)
                if is_container:
                    queue.append(parent)

    def select_hyperlink_containers(self, root: TreeNode, minimum_hyperlinks: int = 3) -> Iterator[TreeNode]:
        link = tag_selector(["a"])
        for n in self.select_containers_of(link, "link", root):
            if n.tag == "a":
                continue
            if self.is_block(n):
                yield n
            elif sum(1 for _ in self.select(link, n)) >= minimum_hyperlinks:
                yield n

    def select_prose_elements(self, root: TreeNode) -> Iterator[TreeNode]:
        for n in self.select(tag_selector(self.config.prose_tags), root):
            if self.is_significant_text_length(n):
                yield n

    def select_abstract_elements(self, root: TreeNode) -> Iterator[TreeNode]:
        return self.select(tag_selector(self.config.abstract_tags), root)

    def select_aside_elements(self, root: TreeNode) -> Iterator[TreeNode]:
        selector = class_selector(self.config.aside_classes) | role_selector(self.config.aside_roles)
        return self.select(selector, root)

    def select_visual_containers(self, root: TreeNode) -> Iterator[TreeNode]:
        selector = (tag_selector(self.config.descriptive_tags)
                    | tag_selector(self.config.interactive_tags)
                    | tag_selector(self.config.heading_tags))
        return self.select_containers_of(selector, "visual", root)

    # --- page metadata ------------------------------------------------------

    def get_page_title(self, root: TreeNode) -> Optional[str]:
        """The only `h1`'s text, else the document title up to the first ` - ` or ` | `."""
        h1s = [n for n in iter_descendants(root) if n.tag == "h1"]
        if len(h1s) == 1:
            return h1s[0].text_content().strip()
        for n in iter_descendants(root):
            if n.tag == "title":
                title = n.text_content()
                if title.strip():
                    return _TITLE_SEPARATOR.split(title)[0].strip()
                break
        return None

    def get_page_description(self, root: TreeNode) -> str:
        for n in iter_descendants(root):
            if n.tag != "meta":
                continue
            if (n.attribute("description") is not None
                    or n.attribute("name") == "description"
                    or n.attribute("property") == "og:description"):
                value = n.attribute("description") or n.attribute("content")
                if value:
                    return value
        short = [n for n in iter_descendants(root) if "shortdescription" in n.classes]
        if len(short) == 1:
            return short[0].text_content().strip()
        return ""
