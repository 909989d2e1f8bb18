"""Quest and journey compilation from canvas graphs and quest markdown."""

from .graph import find_next_block_node, find_next_node, find_next_section_node, walk_chain
from .journey import (
    apply_dependencies,
    convert_journey_canvas,
    extract_journey_node,
    find_journey_node,
    find_quest_files,
    is_journey_canvas_available,
    resolve_dependencies,
)
from .metadata import NodeValidationResult, get_metadata, is_valid_uuid, validate_node
from .quest import (
    MarkdownQuest,
    MarkdownSection,
    convert_block_node,
    convert_quest_canvas,
    convert_quest_markdown,
    convert_quest_node,
    convert_section_node,
    find_quest_node,
    parse_markdown_quest,
)

__all__ = [
    "find_next_block_node",
    "find_next_node",
    "find_next_section_node",
    "walk_chain",
    "apply_dependencies",
    "convert_journey_canvas",
    "extract_journey_node",
    "find_journey_node",
    "find_quest_files",
    "is_journey_canvas_available",
    "resolve_dependencies",
    "NodeValidationResult",
    "get_metadata",
    "is_valid_uuid",
    "validate_node",
    "MarkdownQuest",
    "MarkdownSection",
    "convert_block_node",
    "convert_quest_canvas",
    "convert_quest_markdown",
    "convert_quest_node",
    "convert_section_node",
    "find_quest_node",
    "parse_markdown_quest",
]
