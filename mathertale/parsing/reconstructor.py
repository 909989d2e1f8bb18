"""
Token reconstruction: turn a block token sequence back into markdown text.

The output is canonical rather than byte-identical to the source: ordered
lists are renumbered from 1, blank lines are normalized between blocks, and
code fences are re-emitted with their language tag.
"""

from typing import List, Optional, Sequence

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

# Nested lists under an ordered item always sit at this level (4 spaces).
ORDERED_NESTED_LEVEL = 2


def _blank(lines: List[str]) -> None:
    if lines and lines[-1] != "":
        lines.append("")


def _render_items(items: Sequence[ListItem], ordered: bool, lines: List[str], level: int = 0) -> None:
    for number, item in enumerate(items, 1):
        prefix = f"{number}. " if ordered else "- "
        lines.append("  " * level + prefix + item.text.split("\n")[0])

        for nested in item.tokens:
            if nested.type != LIST:
                continue
            nested_level = ORDERED_NESTED_LEVEL if ordered else level + 1
            _render_items(nested.items, nested.ordered, lines, nested_level)


def tokens_to_markdown(tokens: Optional[Sequence[Token]]) -> str:
    """
    Reconstruct markdown text from block tokens.

    Args:
        tokens: Token sequence as produced by the lexer

    Returns:
        The markdown text, trimmed of surrounding whitespace
    """
    if not tokens:
        return ""

    lines: List[str] = []
    in_latex = False
    last_type: Optional[str] = None
    last_list_ordered: Optional[bool] = None

    for position, token in enumerate(tokens):
        next_token = tokens[position + 1] if position + 1 < len(tokens) else None

        if token.type == LIST:
            if last_type in (PARAGRAPH, CODE):
                _blank(lines)
            elif last_type == LIST and last_list_ordered != token.ordered:
                _blank(lines)
            if token.ordered and last_type is not None:
                _blank(lines)

            _render_items(token.items, token.ordered, lines)

            if next_token is not None and next_token.type != LIST:
                lines.append("")
            last_type = LIST
            last_list_ordered = token.ordered

        elif token.type == CODE:
            if last_type == CODE:
                _blank(lines)
            lines.append("```" + (token.lang or ""))
            lines.append(token.text)
            lines.append("```")
            last_type = CODE

        elif token.type == PARAGRAPH:
            if not in_latex and last_type in (PARAGRAPH, LIST, CODE):
                _blank(lines)
            lines.append(token.text)
            last_type = PARAGRAPH

        elif token.type == SPACE:
            if not in_latex and last_type != LIST:
                _blank(lines)
            last_type = SPACE

        elif token.type == HTML:
            if token.text == LATEX_FENCE:
                if not in_latex and last_type == PARAGRAPH:
                    _blank(lines)
                in_latex = not in_latex
                lines.append(LATEX_FENCE)
            else:
                lines.append(token.text)
            last_type = HTML

        elif token.type == HEADING:
            if last_type is not None:
                _blank(lines)
            lines.append("#" * (token.depth or 1) + " " + token.text)
            last_type = HEADING

    return "\n".join(lines).strip()
