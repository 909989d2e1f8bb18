"""Text and token parsing helpers: keyword sections, lexing, reconstruction."""

from .lexer import lex
from .properties import (
    ExtractedProperties,
    check_required_properties,
    extract_properties,
    parse_quest_header,
)
from .reconstructor import tokens_to_markdown
from .sections import KeywordSpec, keyword, section_list, section_text, split_sections
from .tokens import ListItem, MarkdownBlock, Token

__all__ = [
    "lex",
    "ExtractedProperties",
    "check_required_properties",
    "extract_properties",
    "parse_quest_header",
    "tokens_to_markdown",
    "KeywordSpec",
    "keyword",
    "section_list",
    "section_text",
    "split_sections",
    "ListItem",
    "MarkdownBlock",
    "Token",
]
