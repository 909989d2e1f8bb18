"""
Contradiction questions: pick the two statements that cannot both hold.

Same layout as a single-choice question, except the answer is a
comma-separated pair of choice keys and the explanation is required.
"""

from typing import List, Optional

from ..exceptions import BlockValidationError
from ..models.canvas import RawData
from ..models.schemas import Choice, ContradictionBlock, ContradictionQuestionData
from ..parsing.properties import extract_properties
from ..parsing.sections import section_text, split_sections
from ..parsing.tokens import MarkdownBlock
from .base import BlockSource, check_answer_keys, dispatch, parse_choices

KEYWORDS = ["choices:", "answer:", "explanation:"]

ANSWER_SIZE = 2


def parse_answer(text: Optional[str]) -> List[str]:
    """Split a comma-separated answer into distinct keys, keeping first occurrences."""
    keys: List[str] = []
    for key in (text or "").split(","):
        key = key.strip()
        if key and key not in keys:
            keys.append(key)
    return keys


def build_block(
    block_id: str,
    content: str,
    choices: List[Choice],
    answer: List[str],
    explanation: Optional[str],
    name: Optional[str] = None,
) -> ContradictionBlock:
    if not choices:
        raise BlockValidationError(f"Choices cannot be empty for block ID: {block_id}")

    explanation = (explanation or "").strip()
    if not explanation:
        raise BlockValidationError(f"Explanation is required for block ID: {block_id}")

    if len(answer) != ANSWER_SIZE:
        raise BlockValidationError(f"Answer must contain exactly 2 keys for block ID: {block_id}")
    check_answer_keys(answer, choices, block_id)

    return ContradictionBlock(
        id=block_id,
        content=content,
        name=name,
        question_data=ContradictionQuestionData(
            choices=choices,
            answer=answer,
            explanation=explanation,
        ),
    )


def from_node(raw: RawData) -> ContradictionBlock:
    sections = split_sections(raw.raw_content, KEYWORDS)
    return build_block(
        raw.id,
        sections["content"],
        parse_choices(section_text(sections, "choices")),
        parse_answer(section_text(sections, "answer")),
        section_text(sections, "explanation"),
        raw.name,
    )


def from_markdown(block: MarkdownBlock) -> ContradictionBlock:
    content, properties = extract_properties(block.raw_tokens)
    return build_block(
        block.id,
        properties.get("content") or content,
        parse_choices(properties.get("choices", "")),
        parse_answer(properties.get("answer")),
        properties.get("explanation"),
        block.name,
    )


def convert_contradiction(source: BlockSource) -> ContradictionBlock:
    return dispatch(source, from_node, from_markdown)
