from typing import Dict, Iterator, List, Optional, Union

import pytest

from page_probe.locator import ContentLocator
from page_probe.tree import document_body, iter_descendants, parse_html

LONG_TEXT = (
    "Solar panels turn sunlight into electricity that can power homes, "
    "schools and small businesses every day"
)

ARTICLE_SENTENCES = [
    "Solar panels convert sunlight into electricity for homes and offices.",
    "Most solar panels are built from silicon cells arranged in a grid.",
    "The silicon cells in solar panels release electrons when sunlight arrives.",
    "An inverter changes the direct current from solar panels into household power.",
    "Homeowners often install solar panels on roofs that face the sun.",
    "Cloudy weather lowers the output of solar panels but does not stop it.",
    "Batteries can store extra electricity from solar panels for the night.",
    "Many cities now offer rebates to families who install solar panels.",
    "Solar panels usually last twenty five years with very little maintenance.",
    "Cleaning dust from solar panels helps them capture more sunlight.",
    "Utility companies sometimes buy surplus electricity from home solar panels.",
    "Experts expect solar panels to become cheaper and more efficient every year.",
]

ARTICLE_HTML = """
<html>
<head>
  <title>Solar Power Basics - Energy Blog</title>
  <meta name="description" content="A short guide to how solar panels work.">
</head>
<body>
  <div class="menu"><a href="/">Home</a> <a href="/about">About</a> <a href="/blog">Blog</a></div>
  <script>var tracking = "solar panels everywhere";</script>
  <div id="main">
    <div class="post">
      <h1>Solar Power Basics</h1>
      <p>{p1}</p>
      <p>{p2}</p>
      <p>{p3}</p>
    </div>
  </div>
  <div class="footer"><p>Copyright Energy Blog. All rights reserved. Contact us for reprints and partnerships.</p></div>
</body>
</html>
""".format(
    p1=" ".join(ARTICLE_SENTENCES[0:4]),
    p2=" ".join(ARTICLE_SENTENCES[4:8]),
    p3=" ".join(ARTICLE_SENTENCES[8:12]),
)


class FakeNode:
    """Minimal in-memory tree node, independent of any HTML parser."""

    def __init__(self, tag: str, *content: Union[str, "FakeNode"], id: str = "", classes=(),
                 style: Optional[Dict[str, str]] = None, attrs: Optional[Dict[str, str]] = None,
                 layout: bool = True):
        self.tag = tag
        self.id = id
        self.classes = list(classes)
        self.parent: Optional[FakeNode] = None
        self._content = list(content)
        self._style = style or {}
        self._attrs = attrs or {}
        self._layout = layout
        for child in self.children:
            child.parent = self

    @property
    def children(self) -> List["FakeNode"]:
        return [c for c in self._content if not isinstance(c, str)]

    def child_nodes(self) -> Iterator[Union[str, "FakeNode"]]:
        return iter(self._content)

    def attribute(self, name: str) -> Optional[str]:
        return self._attrs.get(name)

    def style(self, name: str) -> Optional[str]:
        return self._style.get(name)

    def text_content(self) -> str:
        return "".join(c if isinstance(c, str) else c.text_content() for c in self._content)

    def has_layout(self) -> bool:
        return self._layout


def find_by_id(root, node_id):
    for n in iter_descendants(root):
        if n.id == node_id:
            return n
    raise LookupError(node_id)


@pytest.fixture
def locator():
    return ContentLocator()

@pytest.fixture
def body():
    def _parse(markup: str):
        return document_body(parse_html(f"<html><body>{markup}</body></html>"))
    return _parse

@pytest.fixture
def article_root():
    return parse_html(ARTICLE_HTML)
