"""
Markdown lexing on top of markdown-it-py.

markdown-it produces a flat open/close token stream; this module folds it
into the block-level Token shape used by the rest of the package. Blank lines
between blocks become ``space`` tokens, and ``$$`` lines inside a paragraph
become paired ``html`` tokens so display math survives reconstruction.
"""

import logging
from typing import List

from markdown_it import MarkdownIt
from markdown_it.token import Token as MdToken

from .tokens import (
    CODE,
    HEADING,
    HTML,
    LATEX_FENCE,
    LIST,
    PARAGRAPH,
    SPACE,
    ListItem,
    Token,
)


_parser = MarkdownIt("commonmark")


def lex(text: str) -> List[Token]:
    """Tokenize markdown text into block-level tokens."""
    stream = _parser.parse(text)
    lines = text.split("\n")
    return _convert(stream, 0, len(stream), lines)


def _find_close(stream: List[MdToken], open_index: int) -> int:
    opener = stream[open_index]
    close_type = opener.type[: -len("_open")] + "_close"
    for index in range(open_index + 1, len(stream)):
        candidate = stream[index]
        if candidate.type == close_type and candidate.level == opener.level:
            return index
    raise ValueError(f"Unbalanced markdown token stream at {opener.type}")


def _inline_text(stream: List[MdToken], open_index: int) -> str:
    inline = stream[open_index + 1]
    return inline.content if inline.type == "inline" else ""


def _split_latex(text: str) -> List[Token]:
    """Split a paragraph so every ``$$`` line becomes its own html token."""
    tokens: List[Token] = []
    run: List[str] = []
    for line in text.split("\n"):
        if line.strip() == LATEX_FENCE:
            if run:
                tokens.append(Token(PARAGRAPH, text="\n".join(run)))
                run = []
            tokens.append(Token(HTML, text=LATEX_FENCE))
        else:
            run.append(line)
    if run:
        tokens.append(Token(PARAGRAPH, text="\n".join(run)))
    return tokens


def _list_items(stream: List[MdToken], start: int, stop: int, lines: List[str]) -> List[ListItem]:
    items: List[ListItem] = []
    index = start
    while index < stop:
        if stream[index].type == "list_item_open":
            close = _find_close(stream, index)
            children = _convert(stream, index + 1, close, lines)
            first_paragraph = next((t for t in children if t.type == PARAGRAPH), None)
            items.append(ListItem(
                text=first_paragraph.text if first_paragraph else "",
                tokens=children,
            ))
            index = close + 1
        else:
            index += 1
    return items


def _follows_blank_line(token: MdToken, lines: List[str]) -> bool:
    if not token.map:
        return False
    start = token.map[0]
    return start > 0 and lines[start - 1].strip() == ""


def _convert(stream: List[MdToken], start: int, stop: int, lines: List[str]) -> List[Token]:
    tokens: List[Token] = []
    index = start
    while index < stop:
        current = stream[index]
        converted: List[Token] = []
        next_index = index + 1

        if current.type == "heading_open":
            close = _find_close(stream, index)
            converted = [Token(HEADING, text=_inline_text(stream, index), depth=int(current.tag[1:]))]
            next_index = close + 1
        elif current.type == "paragraph_open":
            close = _find_close(stream, index)
            converted = _split_latex(_inline_text(stream, index))
            next_index = close + 1
        elif current.type in ("fence", "code_block"):
            content = current.content[:-1] if current.content.endswith("\n") else current.content
            converted = [Token(CODE, text=content, lang=current.info.strip())]
        elif current.type in ("bullet_list_open", "ordered_list_open"):
            close = _find_close(stream, index)
            converted = [Token(
                LIST,
                ordered=current.type == "ordered_list_open",
                items=_list_items(stream, index + 1, close, lines),
            )]
            next_index = close + 1
        elif current.type == "html_block":
            converted = [Token(HTML, text=current.content.strip())]
        elif current.type == "hr":
            logging.debug("Dropping thematic break")
        elif current.type == "blockquote_open":
            # children are kept, the quote markers are not
            logging.debug("Flattening blockquote into its children")

        if converted:
            if tokens and _follows_blank_line(current, lines):
                tokens.append(Token(SPACE, text="\n"))
            tokens.extend(converted)
        index = next_index
    return tokens
