"""Test the presentation tree and its HTML rendering."""

import pytest

from block_content_core.types.element import Element, render_html


def test_to_html_nested():
    tree = Element(
        tag="p",
        children=("Hello ", Element(tag="strong", children=("world",)), "!"),
    )
    assert tree.to_html() == "<p>Hello <strong>world</strong>!</p>"


def test_to_html_escapes_text_and_attributes():
    tree = Element(
        tag="a",
        props={"href": 'https://example.com/?a=1&b="2"'},
        children=("1 < 2",),
    )
    assert (
        tree.to_html()
        == '<a href="https://example.com/?a=1&amp;b=&quot;2&quot;">1 &lt; 2</a>'
    )


def test_to_html_style_and_class():
    tree = Element(
        tag="span",
        props={"style": {"textDecoration": "underline"}, "class_name": "u"},
        children=("x",),
    )
    assert (
        tree.to_html() == '<span style="text-decoration:underline" class="u">x</span>'
    )


def test_to_html_void_and_skipped_attributes():
    assert Element(tag="br").to_html() == "<br>"
    assert Element(tag="a", props={"href": None}).to_html() == "<a></a>"


def test_render_html_sequences():
    assert render_html(["a", Element(tag="br"), "b", None]) == "a<br>b"


def test_render_html_unsupported_node():
    with pytest.raises(ValueError):
        render_html(42)
