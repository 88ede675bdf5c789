"""
Tree provider interface used by the locator and extractor, plus an lxml-backed adapter.

The core never touches a concrete tree type: anything implementing `TreeNode` can be
located, scored and extracted. `parse_html` is the adapter used by the host app and tests.
"""
from __future__ import annotations
import re
from typing import Callable, Dict, Iterator, List, Optional, Protocol, Sequence, Union, runtime_checkable

from lxml import html as lxml_html
from lxml import etree

@runtime_checkable
class TreeNode(Protocol):
    tag: str
    id: str
    classes: Sequence[str]

    @property
    def parent(self) -> Optional["TreeNode"]: ...

    @property
    def children(self) -> Sequence["TreeNode"]: ...

    def child_nodes(self) -> Iterator[Union[str, "TreeNode"]]: ...

    def attribute(self, name: str) -> Optional[str]: ...

    def style(self, name: str) -> Optional[str]: ...

    def text_content(self) -> str: ...

    def has_layout(self) -> bool: ...


class _BlockBreak:
    """Synthetic newline text emitted around block-level elements."""
    text = "\n"

    def __repr__(self) -> str:
        return "BLOCK_BREAK"

BLOCK_BREAK = _BlockBreak()


def iter_descendants(node: TreeNode) -> Iterator[TreeNode]:
    """Pre-order walk of the elements under `node` (excluding `node`)."""
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))

def document_body(root: TreeNode) -> TreeNode:
    """The `<body>` child of a document root, or the root itself."""
    for child in root.children:
        if child.tag == "body":
            return child
    return root


class Selector:
    """Predicate over tree nodes. Combine with `|`."""

    def __init__(self, predicate: Callable[[TreeNode], bool], description: str = ""):
        self._predicate = predicate
        self.description = description

    def matches(self, node: TreeNode) -> bool:
        return self._predicate(node)

    __call__ = matches

    def __or__(self, other: "Selector") -> "Selector":
        return Selector(lambda n: self.matches(n) or other.matches(n),
                        f"{self.description},{other.description}")

    def closest(self, node: Optional[TreeNode], stop: Optional[TreeNode] = None) -> Optional[TreeNode]:
        """First of `node` and its ancestors matching, not walking past `stop` (exclusive)."""
        while node is not None and node is not stop:
            if self.matches(node):
                return node
            node = node.parent
        return None

    def __repr__(self) -> str:
        return f"Selector({self.description!r})"


def tag_selector(items: Sequence[str]) -> Selector:
    tags = frozenset(t.lower() for t in items)
    return Selector(lambda n: n.tag in tags, ",".join(items))

def id_selector(items: Sequence[str]) -> Selector:
    ids = frozenset(items)
    return Selector(lambda n: n.id in ids, "#" + ",#".join(items))

def class_selector(items: Sequence[str]) -> Selector:
    classes = frozenset(items)
    return Selector(lambda n: any(c in classes for c in n.classes), "." + ",.".join(items))

def attribute_selector(items: Sequence[str]) -> Selector:
    return Selector(lambda n: any(n.attribute(a) is not None for a in items),
                    "[" + "],[".join(items) + "]")

def role_selector(items: Sequence[str]) -> Selector:
    roles = frozenset(items)
    return Selector(lambda n: n.attribute("role") in roles, "[role=" + "],[role=".join(items) + "]")


# --- lxml adapter -----------------------------------------------------------

# Tags a browser never lays out.
NON_RENDERED_TAGS = {"head", "script", "style", "template", "title", "meta", "link", "noscript"}

_STYLE_DECL = re.compile(r'\s*([-\w]+)\s*:\s*([^;]+)')

def _parse_style(style: str) -> Dict[str, str]:
    decls = {}
    for m in _STYLE_DECL.finditer(style or ""):
        value = m.group(2).replace("!important", "").strip().lower()
        decls[m.group(1).lower()] = value
    return decls

def _is_element(el) -> bool:
    return isinstance(el.tag, str)  # comments & processing instructions carry non-str tags


class LxmlDocument:
    """Interns one `LxmlNode` per lxml element so node identity is stable."""

    def __init__(self, root: etree._Element):
        self._nodes: Dict[etree._Element, LxmlNode] = {}
        self.root = self.wrap(root)

    def wrap(self, el: etree._Element) -> "LxmlNode":
        node = self._nodes.get(el)
        if node is None:
            node = self._nodes[el] = LxmlNode(el, self)
        return node


class LxmlNode:
    __slots__ = ("element", "document", "tag", "id", "classes", "_style")

    def __init__(self, element: etree._Element, document: LxmlDocument):
        self.element = element
        self.document = document
        self.tag = element.tag.lower()
        self.id = element.get("id", "")
        self.classes = element.get("class", "").split()
        self._style: Optional[Dict[str, str]] = None

    @property
    def parent(self) -> Optional["LxmlNode"]:
        parent = self.element.getparent()
        return None if parent is None else self.document.wrap(parent)

    @property
    def children(self) -> List["LxmlNode"]:
        return [self.document.wrap(c) for c in self.element if _is_element(c)]

    def child_nodes(self) -> Iterator[Union[str, "LxmlNode"]]:
        if self.element.text:
            yield self.element.text
        for child in self.element:
            if _is_element(child):
                yield self.document.wrap(child)
            if child.tail:
                yield child.tail

    def attribute(self, name: str) -> Optional[str]:
        return self.element.get(name)

    def style(self, name: str) -> Optional[str]:
        if self._style is None:
            self._style = _parse_style(self.element.get("style", ""))
        return self._style.get(name.lower())

    def text_content(self) -> str:
        return "".join(t if isinstance(t, str) else t.text_content() for t in self.child_nodes())

    def has_layout(self) -> bool:
        if self.tag in NON_RENDERED_TAGS:
            return False
        if self.attribute("hidden") is not None:
            return False
        if self.tag == "input" and (self.attribute("type") or "").lower() == "hidden":
            return False
        return self.style("display") != "none"

    def __repr__(self) -> str:
        ident = f"#{self.id}" if self.id else ""
        cls = "".join(f".{c}" for c in self.classes)
        return f"<{self.tag}{ident}{cls}>"


def parse_html(html: str) -> LxmlNode:
    """Parse an HTML document and return its root (`<html>`) node."""
    if not html or not html.strip():
        raise ValueError("cannot parse an empty document")
    root = lxml_html.document_fromstring(html)
    return LxmlDocument(root).root
