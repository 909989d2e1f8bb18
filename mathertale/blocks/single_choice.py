"""
Single-choice questions.

Raw canvas text::

    What is 2+2?

    choices:
    a: 3
    b: 4

    answer:
    b

    explanation:
    Count them.

The markdown form uses ``#### Choices``, ``#### Answer`` and
``#### Explanation`` property headings instead of keyword lines. The
explanation is optional in both forms.
"""

from typing import List, Optional

from ..exceptions import BlockValidationError
from ..models.canvas import RawData
from ..models.schemas import Choice, SingleChoiceBlock, SingleChoiceQuestionData
from ..parsing.properties import extract_properties
from ..parsing.sections import section_text, split_sections
from ..parsing.tokens import MarkdownBlock
from .base import BlockSource, check_answer_keys, dispatch, parse_choices

KEYWORDS = ["choices:", "answer:", "explanation:"]


def build_block(
    block_id: str,
    content: str,
    choices: List[Choice],
    answer: Optional[str],
    explanation: Optional[str],
    name: Optional[str] = None,
) -> SingleChoiceBlock:
    """Validate the parsed pieces and assemble the block."""
    if not choices:
        raise BlockValidationError(f"Choices cannot be empty for block ID: {block_id}")

    answer = (answer or "").strip()
    if not answer:
        raise BlockValidationError(f"Answer is required for block ID: {block_id}")
    check_answer_keys([answer], choices, block_id)

    return SingleChoiceBlock(
        id=block_id,
        content=content,
        name=name,
        question_data=SingleChoiceQuestionData(
            choices=choices,
            answer=answer,
            explanation=(explanation or "").strip(),
        ),
    )


def from_node(raw: RawData) -> SingleChoiceBlock:
    sections = split_sections(raw.raw_content, KEYWORDS)
    return build_block(
        raw.id,
        sections["content"],
        parse_choices(section_text(sections, "choices")),
        section_text(sections, "answer"),
        section_text(sections, "explanation"),
        raw.name,
    )


def from_markdown(block: MarkdownBlock) -> SingleChoiceBlock:
    content, properties = extract_properties(block.raw_tokens)
    return build_block(
        block.id,
        properties.get("content") or content,
        parse_choices(properties.get("choices", "")),
        properties.get("answer"),
        properties.get("explanation"),
        block.name,
    )


def convert_single_choice(source: BlockSource) -> SingleChoiceBlock:
    return dispatch(source, from_node, from_markdown)
