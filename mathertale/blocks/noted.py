"""
Noted blocks: definitions, facts, theorems, propositions, remarks and lemmas.

They share one shape and differ only in their ``type``, so a single pair of
conversion functions serves all six and ``noted_converter`` binds the type.
"""

from typing import Callable

from ..models.canvas import RawData
from ..models.schemas import NOTED_TYPES, NotedBlock
from ..parsing.properties import extract_properties
from ..parsing.tokens import MarkdownBlock
from .base import BlockSource, dispatch, require_content


def _check_type(block_type: str) -> str:
    block_type = block_type.upper()
    if block_type not in NOTED_TYPES:
        raise ValueError(f"Not a noted block type: {block_type}")
    return block_type


def from_node(raw: RawData, block_type: str) -> NotedBlock:
    block_type = _check_type(block_type)
    content = require_content(raw.raw_content, raw.id, f" (Type: {block_type})")
    return NotedBlock(id=raw.id, type=block_type, content=content, name=raw.name or "")


def from_markdown(block: MarkdownBlock, block_type: str) -> NotedBlock:
    block_type = _check_type(block_type)
    extracted = extract_properties(block.raw_tokens)
    content = extracted.properties.get("content") or extracted.content
    return NotedBlock(
        id=block.id,
        type=block_type,
        content=require_content(content, block.id, f" (Type: {block_type})"),
        name=block.name or "",
    )


def noted_converter(block_type: str) -> Callable[[BlockSource], NotedBlock]:
    """Build the converter for one noted block type (e.g. ``THEOREM``)."""
    block_type = _check_type(block_type)

    def convert(source: BlockSource) -> NotedBlock:
        return dispatch(
            source,
            lambda raw: from_node(raw, block_type),
            lambda block: from_markdown(block, block_type),
        )

    convert.__name__ = f"convert_{block_type.lower()}"
    return convert
