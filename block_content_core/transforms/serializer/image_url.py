#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Default resolution of image node URLs."""
import logging
import re
from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlencode

from block_content_core.transforms.serializer.common import (
    RenderParams,
    SerializationContext,
)

_logger = logging.getLogger(__name__)

# e.g. image-Tb9Ew8CXIwaY6R1kjMvI0uRR-2000x3000-jpg
_IMAGE_REF = re.compile(r"^image-(?P<id>[^-]+)-(?P<dims>\d+x\d+)-(?P<fmt>[a-z0-9]+)$")


def _get_field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _with_query(url: str, image_options: dict[str, Any]) -> str:
    if not image_options:
        return url
    query = urlencode(sorted(image_options.items()))
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}{query}"


def _url_from_ref(ref: str, params: RenderParams) -> Optional[str]:
    match = _IMAGE_REF.match(ref)
    if match is None:
        _logger.warning(f"Malformed image asset reference: {ref}")
        return None
    if not (params.project_id and params.dataset):
        _logger.warning(
            f"Missing project_id or dataset to resolve image asset reference: {ref}"
        )
        return None
    filename = f"{match.group('id')}-{match.group('dims')}.{match.group('fmt')}"
    return "/".join(
        [params.cdn_base_url.rstrip("/"), params.project_id, params.dataset, filename]
    )


def get_image_url(ctx: SerializationContext) -> str:
    """Resolve the URL of the image node in the passed context.

    An asset carrying a `url` wins over an asset reference (`_ref`), which
    is resolved against the CDN, project and dataset of the render options.
    """
    asset = _get_field(ctx.node, "asset")
    if asset is None:
        raise ValueError("Image node has no asset to resolve an URL from")

    url = _get_field(asset, "url")
    if url is None:
        ref = _get_field(asset, "_ref")
        if ref is not None:
            url = _url_from_ref(ref, ctx.options)
    if url is None:
        raise ValueError(f"Unable to resolve URL of image asset: {asset}")

    return _with_query(url, ctx.options.image_options)
