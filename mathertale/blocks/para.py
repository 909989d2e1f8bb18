"""Paragraph blocks: plain explanatory text between other blocks."""

from ..models.canvas import RawData
from ..models.schemas import ParaBlock
from ..parsing.properties import extract_properties
from ..parsing.tokens import MarkdownBlock
from .base import BlockSource, dispatch, require_content


def from_node(raw: RawData) -> ParaBlock:
    content = require_content(raw.raw_content, raw.id)
    return ParaBlock(id=raw.id, content=content, name=raw.name)


def from_markdown(block: MarkdownBlock) -> ParaBlock:
    extracted = extract_properties(block.raw_tokens)
    content = extracted.properties.get("content") or extracted.content
    return ParaBlock(id=block.id, content=require_content(content, block.id), name=block.name)


def convert_para(source: BlockSource) -> ParaBlock:
    return dispatch(source, from_node, from_markdown)
