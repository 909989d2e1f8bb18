"""
Shared plumbing for block converters.

Every converter accepts either a RawData record (legacy canvas text) or a
MarkdownBlock (token slice from a quest markdown file). The helpers here
dispatch between the two and parse the pieces several block types share.
"""

from typing import Callable, List, TypeVar, Union

from ..exceptions import BlockValidationError
from ..models.canvas import RawData
from ..models.schemas import Choice
from ..parsing.tokens import MarkdownBlock

BlockSource = Union[RawData, MarkdownBlock]

T = TypeVar("T")


def dispatch(
    source: BlockSource,
    from_node: Callable[[RawData], T],
    from_markdown: Callable[[MarkdownBlock], T],
) -> T:
    """Route a block source to the matching conversion path."""
    if isinstance(source, MarkdownBlock):
        return from_markdown(source)
    if isinstance(source, RawData):
        return from_node(source)
    raise TypeError(f"Unsupported block source: {type(source).__name__}")


def parse_choices(text: str) -> List[Choice]:
    """
    Parse ``key: content`` lines into choices.

    Lines are split at their first colon so choice content may contain colons
    itself (``a: f: X -> Y``). Lines with an empty key or content are skipped.
    """
    choices: List[Choice] = []
    for line in (text or "").split("\n"):
        key, colon, content = line.partition(":")
        key = key.strip()
        content = content.strip()
        if colon and key and content:
            choices.append(Choice(key=key, content=content))
    return choices


def require_content(content: str, block_id: str, suffix: str = "") -> str:
    """Return trimmed content, or raise if nothing is left."""
    content = (content or "").strip()
    if not content:
        raise BlockValidationError(f"Content cannot be empty for block ID: {block_id}{suffix}")
    return content


def check_answer_keys(answer: List[str], choices: List[Choice], block_id: str) -> None:
    """Raise for the first answer key that names no choice."""
    keys = [choice.key for choice in choices]
    for key in answer:
        if key not in keys:
            raise BlockValidationError(
                f'Answer key "{key}" does not exist in choices ({", ".join(keys)}) '
                f"for block ID: {block_id}"
            )
