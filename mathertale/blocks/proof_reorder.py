"""
Proof-reorder questions: the learner puts shuffled proof steps back in order.

Raw canvas text lists the steps under ``part-1:``, ``part-2:`` ... keyword
lines and the presentation order under ``question-order:``. Markdown uses
``#### Part 1`` ... and ``#### Question Order`` properties. Steps are numbered
``1``, ``2`` ... in the order they appear, whatever numbers the author wrote.
"""

import re
from typing import List, Optional

from ..exceptions import BlockValidationError
from ..models.canvas import RawData
from ..models.schemas import OrderItem, ProofReorderBlock, ProofReorderQuestionData
from ..parsing.properties import extract_properties
from ..parsing.sections import KeywordSpec, keyword, section_list, section_text, split_sections
from ..parsing.tokens import MarkdownBlock
from .base import BlockSource, dispatch

KEYWORDS = [
    KeywordSpec(re.compile(r"part-\d+:"), "parts"),
    keyword("question-order:"),
]

PART_PROPERTY = re.compile(r"part\s+\d+\b.*")


def build_block(
    block_id: str,
    content: str,
    parts: List[str],
    question_order: Optional[str],
    name: Optional[str] = None,
) -> ProofReorderBlock:
    if not parts:
        raise BlockValidationError(f"Parts cannot be empty for block ID: {block_id}")

    question_order = (question_order or "").strip()
    if not question_order:
        raise BlockValidationError(f"Question order is required for block ID: {block_id}")

    order_length = len(question_order.split(","))
    if len(parts) != order_length:
        raise BlockValidationError(
            f"Number of parts ({len(parts)}) does not match the length of question order "
            f"({order_length}) for block ID: {block_id}"
        )

    return ProofReorderBlock(
        id=block_id,
        content=content,
        name=name,
        question_data=ProofReorderQuestionData(
            order_items=[
                OrderItem(id=str(index), content=part.strip())
                for index, part in enumerate(parts, 1)
            ],
            question_order=question_order,
        ),
    )


def from_node(raw: RawData) -> ProofReorderBlock:
    sections = split_sections(raw.raw_content, KEYWORDS)
    return build_block(
        raw.id,
        sections["content"],
        section_list(sections, "parts"),
        section_text(sections, "question-order"),
        raw.name,
    )


def from_markdown(block: MarkdownBlock) -> ProofReorderBlock:
    content, properties = extract_properties(block.raw_tokens)
    parts = [value for name, value in properties.items() if PART_PROPERTY.fullmatch(name.strip())]
    return build_block(
        block.id,
        content,
        parts,
        properties.get("question order"),
        block.name,
    )


def convert_proof_reorder(source: BlockSource) -> ProofReorderBlock:
    return dispatch(source, from_node, from_markdown)
