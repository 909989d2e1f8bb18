"""
Block-level markdown tokens consumed by the reconstructor and extractor.

The shape mirrors a classic markdown lexer: each token has a ``type`` among
``heading``, ``paragraph``, ``list``, ``code``, ``space`` and ``html``, plus the
fields relevant to that type.
"""

from dataclasses import dataclass, field
from typing import List, Optional


HEADING = "heading"
PARAGRAPH = "paragraph"
LIST = "list"
CODE = "code"
SPACE = "space"
HTML = "html"

LATEX_FENCE = "$$"


@dataclass
class ListItem:
    """One list item: its first-line text and the block tokens it contains."""
    text: str
    tokens: List["Token"] = field(default_factory=list)


@dataclass
class Token:
    """A single block-level token."""
    type: str
    text: str = ""
    depth: Optional[int] = None
    ordered: bool = False
    items: List[ListItem] = field(default_factory=list)
    lang: str = ""

    def is_heading(self, depth: int) -> bool:
        return self.type == HEADING and self.depth == depth


@dataclass
class MarkdownBlock:
    """Input to a markdown block converter: the token slice of one block."""
    id: str
    tag: str
    raw_tokens: List[Token] = field(default_factory=list)
    name: Optional[str] = None
