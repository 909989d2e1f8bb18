"""
Property extraction from block token sequences.

A markdown block is its content followed by optional ``#### Property``
subsections. Everything before the first level-4 heading is the content; each
level-4 heading starts a property named by its lowercased text.
"""

import json
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from ..exceptions import BlockValidationError
from .reconstructor import tokens_to_markdown
from .tokens import HEADING, PARAGRAPH, Token

PROPERTY_DEPTH = 4


class ExtractedProperties(NamedTuple):
    content: str
    properties: Dict[str, str]


def extract_properties(tokens: Optional[Sequence[Token]]) -> ExtractedProperties:
    """
    Split a token sequence into content and named properties.

    Args:
        tokens: Block tokens

    Returns:
        ``(content, properties)`` where every property value is itself
        reconstructed markdown. Properties without a body are omitted.
    """
    if not tokens:
        return ExtractedProperties("", {})

    first_property = next(
        (index for index, token in enumerate(tokens) if token.is_heading(PROPERTY_DEPTH)),
        None,
    )
    if first_property is None:
        return ExtractedProperties(tokens_to_markdown(tokens), {})

    content = tokens_to_markdown(tokens[:first_property])

    properties: Dict[str, str] = {}
    current: Optional[str] = None
    body: List[Token] = []

    for token in tokens[first_property:]:
        if token.is_heading(PROPERTY_DEPTH):
            if current and body:
                properties[current] = tokens_to_markdown(body)
            current = token.text.lower()
            body = []
        elif current:
            body.append(token)

    if current and body:
        properties[current] = tokens_to_markdown(body)

    return ExtractedProperties(content, properties)


def check_required_properties(properties: Dict[str, str], required: Iterable[str]) -> None:
    """Raise BlockValidationError for the first required property that is missing or empty."""
    for name in required:
        if not properties.get(name):
            raise BlockValidationError(f"{name} is required: {json.dumps(properties)}")


def parse_quest_header(tokens: Sequence[Token]) -> Dict[str, str]:
    """
    Read the quest header: ``# Quest: <name>`` and the ``key: value`` lines after it.

    Keys are lowercased and split at the first colon; reading stops at the next
    heading. Missing fields are simply absent from the result.
    """
    result: Dict[str, str] = {}
    name_extracted = False

    for token in tokens:
        if not name_extracted and token.is_heading(1):
            text = token.text.strip()
            if text.startswith("Quest:"):
                result["name"] = text[len("Quest:"):].strip()
            name_extracted = True
            continue

        if name_extracted and token.type == HEADING:
            break

        if name_extracted and token.type == PARAGRAPH:
            for line in token.text.split("\n"):
                key, colon, value = line.partition(":")
                key = key.strip().lower()
                value = value.strip()
                if colon and key and value:
                    result[key] = value

    return result
