from __future__ import annotations
import logging
import re
from typing import Iterable, Iterator, Optional, Union

from .annotations import AnnotationCache
from .config import LocatorConfig
from .tree import BLOCK_BREAK, Selector, TreeNode, iter_descendants

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r'\s+')

IGNORED = "ignored"
TEXT_LENGTH = "textlength"


class TextExtractor:
    """
    Visibility/ignore classification and plain-text extraction over a `TreeNode` tree.

    All computed state lives in `self.cache`; call `reset()` to start a new session.
    """

    def __init__(self, config: Optional[LocatorConfig] = None, cache: Optional[AnnotationCache] = None):
        self.config = config or LocatorConfig()
        self.cache = cache or AnnotationCache()

    def reset(self) -> None:
        """Unignore everything and drop cached text lengths, scores and container flags."""
        self.cache.reset_session()

    # --- classification ---------------------------------------------------

    def is_ignored(self, node: TreeNode) -> bool:
        return bool(self.cache.get(IGNORED, node))

    def ignore(self, node: TreeNode) -> None:
        """Mark `node` and all its descendants as ignored for the rest of the session."""
        stack = [node]
        while stack:
            current = stack.pop()
            if self.is_ignored(current):
                continue  # its subtree is already ignored
            self.cache.set(IGNORED, True, current)
            self.cache.set(TEXT_LENGTH, 0, current)
            stack.extend(current.children)

    def ignore_all(self, *selections: Iterable[TreeNode]) -> int:
        """Ignore every node of each selection, one selection after another."""
        count = 0
        for selection in selections:
            # materialized first so container walks see the subtree before it is ignored
            for node in list(selection):
                self.ignore(node)
                count += 1
        logger.debug("Ignored %d nodes from %d selections", count, len(selections))
        return count

    def is_hidden(self, node: TreeNode, auto_ignore: bool = True) -> bool:
        """
        True if the node has no layout box. `visibility: hidden` elements still take up
        space, so they count as visible.
        """
        hidden = not node.has_layout()
        if hidden and auto_ignore:
            self.ignore(node)
        return hidden

    def is_block(self, node: TreeNode) -> bool:
        """Estimate block display from the inline style only, else from the tag name."""
        display = node.style("display")
        if display and display.lower() in self.config.block_display_styles:
            return True
        position = node.style("position")
        if position and position.lower() in self.config.block_position_styles:
            return True
        return node.tag.lower() in self.config.block_tags

    def _is_visible(self, node: TreeNode) -> bool:
        return not self.is_ignored(node) and not self.is_hidden(node)

    def select(self, selector: Selector, node: TreeNode) -> Iterator[TreeNode]:
        """Nodes under `node` matching `selector`, skipping ignored and hidden ones."""
        for n in iter_descendants(node):
            if selector.matches(n) and self._is_visible(n):
                yield n

    # --- text ---------------------------------------------------------------

    def get_text_nodes(self, node: TreeNode, add_block_breaks: bool = True) -> Iterator[Union[str, object]]:
        is_block = False
        for child in node.child_nodes():
            if isinstance(child, str):
                yield child
                is_block = False
            elif self._is_visible(child):
                last_block = is_block
                is_block = add_block_breaks and self.is_block(child)
                if is_block and not last_block:
                    yield BLOCK_BREAK
                yield from self.get_text_nodes(child, add_block_breaks)
                if is_block:
                    yield BLOCK_BREAK

    def get_text_list(self, node: TreeNode, collapse_whitespace: bool = True) -> Iterator[str]:
        """Continuous runs of text, one per block element."""
        text = ""
        for t in self.get_text_nodes(node):
            if t is not BLOCK_BREAK:
                text += _WHITESPACE.sub(" ", t) if collapse_whitespace else t
            elif text.strip():
                yield text.strip()
                text = ""
        if text.strip():
            yield text.strip()

    def calculate_text_length(self, node: TreeNode) -> int:
        """Character count of visible, unignored text under `node`; cached per node."""
        if self.is_ignored(node):
            return 0
        length = self.cache.get(TEXT_LENGTH, node) or 0
        if not length:
            for child in node.child_nodes():
                if isinstance(child, str):
                    length += len(_WHITESPACE.sub(" ", child).strip())
                elif self._is_visible(child):
                    length += self.calculate_text_length(child)
            self.cache.set(TEXT_LENGTH, length, node)
        return length

    def calculate_text_fill(self, selector: Selector, node: TreeNode) -> float:
        """Share of `node`'s text owned by the topmost `selector` matches beneath it."""
        text_length = self.calculate_text_length(node)
        if text_length == 0:
            return 0.0
        selected = 0
        for n in self.select(selector, node):
            if selector.closest(n.parent, stop=node) is None:
                selected += self.calculate_text_length(n)
        return selected / text_length

    def is_significant_text_length(self, node: TreeNode) -> bool:
        return self.calculate_text_length(node) >= self.config.text_length_threshold
