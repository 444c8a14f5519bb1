"""Package for models defined by the block content format."""

from block_content_core.types.element import Element, render_html
from block_content_core.types.nodes import (
    Block,
    Mark,
    PlainMark,
    Span,
    StructuredMark,
    resolve_mark_type,
    to_block,
    to_span,
)
