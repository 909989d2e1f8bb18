"""
Quest compilation from canvas graphs and from quest markdown.

Canvas quests are a ``#quest`` node with sections chained to its right and
blocks chained below each section. Markdown quests look like::

    # Quest: Limits
    id: 6f1c...
    desc: First steps with limits
    category: analysis

    ## Section: Definition

    ### definition: Limit of a sequence
    id: 0a2b...

    A sequence converges to L if ...

Both paths produce a QuestSchema with empty dependency lists; dependencies
are filled in later from the journey that references the quest.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..blocks.registry import ConverterRegistry, default_registry, normalize_tag
from ..exceptions import BlockValidationError, StructureError
from ..models.canvas import CanvasData, CanvasNode, RawData
from ..models.schemas import BlockSchema, Category, QuestSchema, SectionSchema
from ..parsing.lexer import lex
from ..parsing.properties import parse_quest_header
from ..parsing.tokens import HEADING, PARAGRAPH, SPACE, MarkdownBlock, Token
from .graph import find_next_block_node, find_next_section_node, walk_chain
from .metadata import split_node_text

QUEST_MARKER = "#quest "

SECTION_PREFIX = re.compile(r"^Section:\s*")
ID_PREFIX = "id:"


def find_marked_node(canvas: CanvasData, marker: str) -> Optional[CanvasNode]:
    """First non-file node whose trimmed text starts with ``marker``."""
    for node in canvas.nodes:
        if node.type == "file" or not node.text:
            continue
        if node.text.strip().startswith(marker):
            return node
    return None


def find_quest_node(canvas: CanvasData) -> Optional[CanvasNode]:
    return find_marked_node(canvas, QUEST_MARKER)


def _registry(registry: Optional[ConverterRegistry]) -> ConverterRegistry:
    return registry if registry is not None else default_registry()


# --------------------------
# Canvas path
# --------------------------

def convert_block_node(node: CanvasNode, registry: Optional[ConverterRegistry] = None) -> BlockSchema:
    """Convert one block node via the converter registered for its tag."""
    metadata, body = split_node_text(node.text)
    if not metadata.id:
        raise StructureError(f"Block id is required: {node.text}")

    raw = RawData(id=metadata.id, tag=metadata.tag, name=metadata.name or None, raw_content=body)
    return _registry(registry).convert(raw)


def convert_section_node(
    node: CanvasNode,
    canvas: CanvasData,
    registry: Optional[ConverterRegistry] = None,
) -> SectionSchema:
    """Convert a section node and the blocks chained below it."""
    metadata, _ = split_node_text(node.text)
    blocks = [
        convert_block_node(block_node, registry)
        for block_node in walk_chain(node, canvas, find_next_block_node)
    ]
    return SectionSchema(name=metadata.name, blocks=blocks)


def convert_quest_node(
    node: CanvasNode,
    canvas: CanvasData,
    registry: Optional[ConverterRegistry] = None,
) -> QuestSchema:
    metadata, desc = split_node_text(node.text)
    if not metadata.id:
        raise StructureError(f"Quest id is required: {node.text}")
    if not metadata.name:
        raise StructureError(f"Quest name is required: {node.text}")

    sections = [
        convert_section_node(section_node, canvas, registry)
        for section_node in walk_chain(node, canvas, find_next_section_node)
    ]
    logging.debug(f"Converted quest {metadata.id} with {len(sections)} sections")

    return QuestSchema(
        id=metadata.id,
        name=metadata.name,
        desc=desc,
        block_count=sum(len(section.blocks) for section in sections),
        sections=sections,
    )


def convert_quest_canvas(canvas: CanvasData, registry: Optional[ConverterRegistry] = None) -> QuestSchema:
    """
    Compile a quest canvas.

    Raises:
        StructureError: If there is no quest node or it lacks an id or name
        ConversionError: If a block fails to convert
    """
    node = find_quest_node(canvas)
    if node is None:
        raise StructureError("Quest node not found in canvas data")
    return convert_quest_node(node, canvas, registry)


# --------------------------
# Markdown path
# --------------------------

@dataclass
class MarkdownSection:
    name: str
    blocks: List[MarkdownBlock] = field(default_factory=list)


@dataclass
class MarkdownQuest:
    """A quest markdown document split into sections and block token slices."""
    name: str = ""
    id: str = ""
    desc: str = ""
    category: Optional[str] = None
    sections: List[MarkdownSection] = field(default_factory=list)


def _take_block_id(token: Token, block: MarkdownBlock) -> bool:
    """Consume a leading ``id: ...`` line into ``block.id``; True if the token was used up."""
    first, _, rest = token.text.partition("\n")
    if block.id or not first.startswith(ID_PREFIX):
        return False

    block.id = first[len(ID_PREFIX):].strip()
    rest = rest.strip()
    if rest:
        block.raw_tokens.append(Token(PARAGRAPH, text=rest))
    return True


def parse_markdown_quest(text: str) -> MarkdownQuest:
    """
    Split quest markdown into header fields, sections and raw block tokens.

    No block conversion happens here; blocks keep their token slices.
    """
    tokens = lex(text)
    header = parse_quest_header(tokens)
    quest = MarkdownQuest(
        name=header.get("name", ""),
        id=header.get("id", ""),
        desc=header.get("desc", ""),
        category=header.get("category"),
    )

    section: Optional[MarkdownSection] = None
    block: Optional[MarkdownBlock] = None

    for token in tokens:
        if token.is_heading(2):
            section = MarkdownSection(name=SECTION_PREFIX.sub("", token.text).strip())
            quest.sections.append(section)
            block = None
        elif token.is_heading(3) and ":" in token.text and section is not None:
            tag, _, name = token.text.partition(":")
            block = MarkdownBlock(id="", tag=normalize_tag(tag), name=name.strip() or None)
            section.blocks.append(block)
        elif block is not None:
            if token.type == PARAGRAPH and _take_block_id(token, block):
                continue
            block.raw_tokens.append(token)
        elif section is not None and token.type not in (SPACE, HEADING):
            logging.warning(f"Ignoring content outside any block in section '{section.name}'")

    return quest


def convert_quest_markdown(text: str, registry: Optional[ConverterRegistry] = None) -> QuestSchema:
    """
    Compile a quest markdown document.

    Raises:
        StructureError: If the quest id or name or any block id is missing
        BlockValidationError: If the category is unknown or a block is invalid
        UnknownBlockTypeError: If a block tag has no converter
    """
    parsed = parse_markdown_quest(text)
    if not parsed.id:
        raise StructureError(f"Quest id is required: {parsed.name or text.strip()[:80]}")
    if not parsed.name:
        raise StructureError(f"Quest name is required: {parsed.id}")

    category = None
    if parsed.category:
        category = Category.from_key(parsed.category)
        if category is None:
            raise BlockValidationError(f"Invalid category: {parsed.category}")

    registry = _registry(registry)
    sections: List[SectionSchema] = []
    for section in parsed.sections:
        blocks = []
        for block in section.blocks:
            if not block.id:
                raise StructureError(f"Block id is required: {block.tag}: {block.name or ''}")
            blocks.append(registry.convert(block))
        sections.append(SectionSchema(name=section.name, blocks=blocks))

    return QuestSchema(
        id=parsed.id,
        name=parsed.name,
        desc=parsed.desc,
        category=category,
        block_count=sum(len(section.blocks) for section in sections),
        sections=sections,
    )
