"""Test the default image URL resolution."""

import pytest

from block_content_core.transforms.serializer import (
    RenderParams,
    SerializationContext,
    get_image_url,
)
from block_content_core.types.nodes import Block

_REF = "image-Tb9Ew8CXIwaY6R1kjMvI0uRR-2000x3000-jpg"


def _ctx(asset, **params):
    return SerializationContext(
        node=Block(_type="image", asset=asset), options=RenderParams(**params)
    )


def test_asset_url():
    ctx = _ctx({"url": "https://example.com/a.png", "_ref": _REF})
    assert get_image_url(ctx) == "https://example.com/a.png"


def test_asset_url_with_image_options():
    ctx = _ctx(
        {"url": "https://example.com/a.png"}, image_options={"w": 320, "fit": "max"}
    )
    assert get_image_url(ctx) == "https://example.com/a.png?fit=max&w=320"


def test_asset_reference():
    ctx = _ctx({"_ref": _REF}, project_id="3do82whm", dataset="production")
    assert get_image_url(ctx) == (
        "https://cdn.sanity.io/images/3do82whm/production/"
        "Tb9Ew8CXIwaY6R1kjMvI0uRR-2000x3000.jpg"
    )


def test_asset_reference_custom_cdn():
    ctx = _ctx(
        {"_ref": _REF},
        cdn_base_url="https://cdn.example.com/img/",
        project_id="p",
        dataset="d",
        image_options={"h": 10},
    )
    assert get_image_url(ctx) == (
        "https://cdn.example.com/img/p/d/Tb9Ew8CXIwaY6R1kjMvI0uRR-2000x3000.jpg?h=10"
    )


def test_asset_reference_without_project():
    with pytest.raises(ValueError, match="Unable to resolve URL"):
        get_image_url(_ctx({"_ref": _REF}))


def test_malformed_asset_reference():
    with pytest.raises(ValueError):
        get_image_url(_ctx({"_ref": "file-abc"}, project_id="p", dataset="d"))


def test_missing_asset():
    ctx = SerializationContext(node=Block(_type="image"))
    with pytest.raises(ValueError, match="no asset"):
        get_image_url(ctx)
