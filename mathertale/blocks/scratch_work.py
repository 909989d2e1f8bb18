"""
Scratch-work blocks.

A scratch pad the learner can write in next to the surrounding material. The
content is a prompt and may be left empty.
"""

from ..models.canvas import RawData
from ..models.schemas import ScratchWorkBlock
from ..parsing.properties import extract_properties
from ..parsing.tokens import MarkdownBlock
from .base import BlockSource, dispatch


def from_node(raw: RawData) -> ScratchWorkBlock:
    return ScratchWorkBlock(id=raw.id, content=(raw.raw_content or "").strip(), name=raw.name)


def from_markdown(block: MarkdownBlock) -> ScratchWorkBlock:
    extracted = extract_properties(block.raw_tokens)
    content = extracted.properties.get("content") or extracted.content
    return ScratchWorkBlock(id=block.id, content=content.strip(), name=block.name)


def convert_scratch_work(source: BlockSource) -> ScratchWorkBlock:
    return dispatch(source, from_node, from_markdown)
