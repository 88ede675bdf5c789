import pytest

from page_probe.extractor import TextExtractor
from page_probe.tree import BLOCK_BREAK, iter_descendants, tag_selector

from conftest import FakeNode, find_by_id


@pytest.fixture
def extractor():
    return TextExtractor()


def test_ignore_propagates_to_every_descendant(extractor, body):
    root = body('<div id="d"><p id="p1">Hello <b id="b">world</b></p><p id="p2">Second paragraph</p></div>')
    div = find_by_id(root, "d")
    assert extractor.calculate_text_length(div) > 0

    extractor.ignore(div)

    assert extractor.is_ignored(div)
    assert all(extractor.is_ignored(n) for n in iter_descendants(div))
    assert extractor.calculate_text_length(div) == 0
    assert extractor.calculate_text_length(find_by_id(root, "p1")) == 0

def test_ignore_is_idempotent(extractor, body):
    root = body('<div id="d"><p>text</p></div>')
    div = find_by_id(root, "d")
    extractor.ignore(div)
    extractor.ignore(div)
    assert extractor.is_ignored(div)
    assert not extractor.is_ignored(root)

def test_ignored_subtree_drops_out_of_parent_length(extractor, body):
    root = body('<div id="d">abcd<span id="s">efgh</span></div>')
    extractor.ignore(find_by_id(root, "s"))
    assert extractor.calculate_text_length(find_by_id(root, "d")) == 4

def test_reset_unignores(extractor, body):
    root = body('<div id="d"><p>text</p></div>')
    div = find_by_id(root, "d")
    extractor.ignore(div)
    extractor.reset()
    assert not extractor.is_ignored(div)
    assert extractor.calculate_text_length(div) == 4

def test_display_none_is_hidden_and_auto_ignored(extractor, body):
    root = body('<div id="h" style="display: none"><p id="inner">secret</p></div>')
    hidden = find_by_id(root, "h")
    assert extractor.is_hidden(hidden)
    assert extractor.is_ignored(hidden)
    assert extractor.is_ignored(find_by_id(root, "inner"))

def test_hidden_without_auto_ignore(extractor, body):
    root = body('<div id="h" hidden>secret</div>')
    hidden = find_by_id(root, "h")
    assert extractor.is_hidden(hidden, auto_ignore=False)
    assert not extractor.is_ignored(hidden)

def test_visibility_hidden_still_counts_as_visible(extractor, body):
    root = body('<div id="v" style="visibility: hidden">takes up space</div>')
    assert not extractor.is_hidden(find_by_id(root, "v"))

def test_hidden_synthetic_node(extractor):
    hidden = FakeNode("div", "secret", layout=False)
    root = FakeNode("body", hidden, "visible")
    assert extractor.is_hidden(hidden)
    assert extractor.calculate_text_length(root) == len("visible")

@pytest.mark.parametrize("markup, expected", [
    ('<span id="n">x</span>', False),
    ('<div id="n">x</div>', True),
    ('<span id="n" style="display: inline-block">x</span>', True),
    ('<span id="n" style="DISPLAY:FLEX">x</span>', True),
    ('<span id="n" style="position: absolute">x</span>', True),
    ('<span id="n" style="position: relative">x</span>', False),
    ('<span id="n" style="display: inline">x</span>', False),
])
def test_is_block(extractor, body, markup, expected):
    assert extractor.is_block(find_by_id(body(markup), "n")) is expected

def test_text_length_collapses_whitespace(extractor, body):
    root = body('<div id="d">  Hello   big\n world  <span>ab</span></div>')
    assert extractor.calculate_text_length(find_by_id(root, "d")) == len("Hello big world") + 2

def test_text_length_skips_hidden_children(extractor, body):
    root = body('<div id="d">abc<span style="display:none">hidden</span><script>var x;</script></div>')
    assert extractor.calculate_text_length(find_by_id(root, "d")) == 3

def test_text_length_is_cached(extractor, body):
    root = body('<div id="d">abc</div>')
    div = find_by_id(root, "d")
    extractor.calculate_text_length(div)
    assert extractor.cache.get("textlength", div) == 3

def test_block_breaks_are_not_duplicated(extractor, body):
    root = body('<div id="d"><p>a</p><p>b</p></div>')
    nodes = list(extractor.get_text_nodes(find_by_id(root, "d")))
    assert nodes == [BLOCK_BREAK, "a", BLOCK_BREAK, "b", BLOCK_BREAK]

def test_inline_children_get_no_breaks(extractor, body):
    root = body('<div id="d">one <b>two</b> three</div>')
    nodes = list(extractor.get_text_nodes(find_by_id(root, "d")))
    assert BLOCK_BREAK not in nodes
    assert "".join(nodes) == "one two three"

def test_text_list_segments_blocks(extractor, body):
    root = body('<div id="d">Intro <span>inline</span><p>Para one</p><p>Para   two</p>tail text</div>')
    segments = list(extractor.get_text_list(find_by_id(root, "d")))
    assert segments == ["Intro inline", "Para one", "Para two", "tail text"]

def test_text_list_without_collapse(extractor, body):
    root = body('<div id="d"><p>a  b</p></div>')
    assert list(extractor.get_text_list(find_by_id(root, "d"), collapse_whitespace=False)) == ["a  b"]

def test_text_list_skips_ignored_blocks(extractor, body):
    root = body('<div id="d"><p>keep</p><p id="drop">drop</p><p>also keep</p></div>')
    extractor.ignore(find_by_id(root, "drop"))
    assert list(extractor.get_text_list(find_by_id(root, "d"))) == ["keep", "also keep"]

def test_text_fill_counts_only_topmost_matches(extractor, body):
    root = body('<div id="d"><blockquote>aaaa<blockquote>bb</blockquote></blockquote>cccc</div>')
    fill = extractor.calculate_text_fill(tag_selector(["blockquote"]), find_by_id(root, "d"))
    assert fill == pytest.approx(6 / 10)

def test_text_fill_of_empty_node_is_zero(extractor, body):
    root = body('<div id="d"><a href="#"></a></div>')
    assert extractor.calculate_text_fill(tag_selector(["a"]), find_by_id(root, "d")) == 0

def test_select_skips_ignored_and_hidden(extractor, body):
    root = body('<p id="a">1</p><p id="b">2</p><p id="c" style="display:none">3</p>')
    extractor.ignore(find_by_id(root, "b"))
    assert [n.id for n in extractor.select(tag_selector(["p"]), root)] == ["a"]
