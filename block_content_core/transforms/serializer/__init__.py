#
# Copyright IBM Corp. 2024 - 2025
# SPDX-License-Identifier: MIT
#

"""Serialization of block content trees into presentation trees."""

from block_content_core.transforms.serializer.base import (
    BaseSerializer,
    ElementBuilder,
    ImageUrlResolver,
    UnknownBlockType,
    UnknownMarkType,
)
from block_content_core.transforms.serializer.common import (
    RenderParams,
    SerializationContext,
    Serializers,
)
from block_content_core.transforms.serializer.defaults import (
    SerializerSuite,
    create_serializers,
    default_serializers,
    make_raw_tag_serializer,
    serialize_span,
)
from block_content_core.transforms.serializer.document import BlocksSerializer
from block_content_core.transforms.serializer.hyperscript import create_element
from block_content_core.transforms.serializer.image_url import get_image_url
