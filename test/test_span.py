"""Test the span recursion engine."""

import pytest

from block_content_core.transforms.serializer import (
    UnknownMarkType,
    create_element,
    default_serializers,
    serialize_span,
)
from block_content_core.types.element import Element
from block_content_core.types.nodes import to_span


def test_plain_text_is_returned_verbatim():
    assert serialize_span("hello", default_serializers, 0) == "hello"
    assert serialize_span("", default_serializers, 3) == ""


def test_newline_becomes_keyed_hard_break():
    res = serialize_span("\n", default_serializers, 4)
    assert res == Element(tag="br", key="hb-4")
    assert res.children == ()


def test_newline_is_text_without_hard_break_serializer():
    serializers = default_serializers.merge_with_patch({"hardBreak": None})
    assert serialize_span("\n", serializers, 0) == "\n"


def test_strong_mark():
    res = serialize_span(
        {"mark": "strong", "children": ["hi"]}, default_serializers, 0
    )
    assert res == Element(tag="strong", children=("hi",), key="span-0")


def test_span_key_wins_over_index():
    res = serialize_span(
        {"_key": "abc", "mark": "em", "children": ["x"]}, default_serializers, 7
    )
    assert res.tag == "em"
    assert res.key == "abc"


def test_nested_spans():
    span = {
        "mark": "strong",
        "children": [
            "a",
            {"mark": "em", "children": ["b", "\n"]},
            {"mark": "code", "children": ["c"]},
        ],
    }
    res = serialize_span(span, default_serializers, 0)
    assert res == Element(
        tag="strong",
        key="span-0",
        children=(
            "a",
            Element(
                tag="em", key="span-1", children=("b", Element(tag="br", key="hb-1"))
            ),
            Element(tag="code", key="span-2", children=("c",)),
        ),
    )
    assert res.to_html() == "<strong>a<em>b<br></em><code>c</code></strong>"


def test_link_mark():
    res = serialize_span(
        {
            "mark": {"_type": "link", "href": "https://example.com"},
            "children": ["go"],
        },
        default_serializers,
        0,
    )
    assert res.tag == "a"
    assert res.props == {"href": "https://example.com"}
    assert res.children == ("go",)


def test_underline_and_strike_through():
    underline = serialize_span(
        {"mark": "underline", "children": ["u"]}, default_serializers, 0
    )
    assert underline.to_html() == '<span style="text-decoration:underline">u</span>'
    strike = serialize_span(
        {"mark": "strike-through", "children": ["s"]}, default_serializers, 0
    )
    assert strike.to_html() == "<del>s</del>"


def test_unknown_mark_type():
    with pytest.raises(UnknownMarkType, match="superscript") as exc_info:
        serialize_span(
            {"mark": "superscript", "children": ["2"]}, default_serializers, 0
        )
    assert exc_info.value.type_name == "superscript"


def test_unknown_nested_mark_type():
    span = {"mark": "strong", "children": [{"mark": {"_type": "comment"}}]}
    with pytest.raises(UnknownMarkType, match="comment"):
        serialize_span(span, default_serializers, 0)


def test_missing_mark():
    with pytest.raises(UnknownMarkType) as exc_info:
        serialize_span({"children": ["x"]}, default_serializers, 0)
    assert exc_info.value.type_name == "<missing>"


def test_custom_mark_serializer():
    def superscript(ctx):
        assert ctx.serializers is serializers
        return Element(tag="sup", children=ctx.children)

    serializers = default_serializers.merge_with_patch(
        {"marks": {"superscript": superscript}}
    )
    res = serialize_span({"mark": "superscript", "children": ["2"]}, serializers, 0)
    assert res == Element(tag="sup", children=("2",), key="span-0")


def test_input_span_is_left_untouched():
    span = to_span(
        {"mark": "strong", "children": ["a", {"mark": "em", "children": ["b"]}]}
    )
    serialize_span(span, default_serializers, 0)
    assert span.children[0] == "a"
    assert span.children[1].children == ("b",)


def test_span_dispatch_with_mapping_node():
    res = create_element(
        default_serializers.span,
        {
            "node": {"mark": "strong", "children": ["x"]},
            "serializers": default_serializers,
        },
    )
    assert res == Element(tag="strong", children=("x",))


def test_span_dispatch_with_mapping_node_unknown_mark():
    with pytest.raises(UnknownMarkType, match="superscript"):
        create_element(
            default_serializers.span,
            {
                "node": {"mark": "superscript", "children": ["2"]},
                "serializers": default_serializers,
            },
        )


def test_reloaded_span_serializes():
    span = to_span(
        {"mark": {"_type": "link", "href": "https://example.com"}, "children": ["go"]}
    )
    res = serialize_span(span.model_dump(by_alias=True), default_serializers, 0)
    assert res.to_html() == '<a href="https://example.com">go</a>'
