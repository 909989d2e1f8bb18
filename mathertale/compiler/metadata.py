"""
Marker-line metadata and node validation.

Structural and block nodes on a canvas open with a marker line::

    #theorem Pythagoras ^0f8fad5b-d9cb-469f-a165-70867728950e

The tag comes first, the trailing ``^uuid`` is the stable id, and whatever sits
between them is the display name.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ..blocks.registry import default_registry
from ..models.canvas import CanvasNode, Metadata

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

STRUCTURAL_TAGS = ("journey", "quest", "section")

PLAIN = "plain"
STRUCTURAL = "structural"
BLOCK = "block"

INVALID_TAG = "INVALID_TAG"
MISSING_NAME = "MISSING_NAME"
MISSING_UUID = "MISSING_UUID"
INVALID_UUID = "INVALID_UUID"


def is_valid_uuid(value: str) -> bool:
    return bool(value) and UUID_PATTERN.match(value) is not None


def get_metadata(line: str) -> Metadata:
    """
    Parse a marker line into tag, name and id.

    The id is only taken when the last word is ``^`` followed by a canonical
    UUID; otherwise ``id`` is empty and the last word stays part of the name.
    """
    parts = line.strip().split(" ")
    tag = parts[0].replace("#", "", 1)

    block_id = ""
    last = parts[-1]
    if len(parts) > 1 and last.startswith("^") and is_valid_uuid(last[1:]):
        block_id = last[1:]
        parts.pop()

    return Metadata(tag=tag, name=" ".join(parts[1:]), id=block_id)


def split_node_text(text: Optional[str]):
    """Return ``(metadata, body)`` for a node's text: the marker line and the trimmed rest."""
    lines = (text or "").split("\n")
    return get_metadata(lines[0]), "\n".join(lines[1:]).strip()


@dataclass
class NodeValidationResult:
    """Outcome of validating a single canvas node."""
    is_valid: bool
    node_type: str
    error_type: Optional[str] = None
    message: Optional[str] = None


def validate_node(node: CanvasNode, block_tags: Optional[Iterable[str]] = None) -> NodeValidationResult:
    """
    Check that a node's marker line is well formed.

    Args:
        node: Canvas node to check
        block_tags: Tags accepted for block nodes; defaults to the tags of the
            default converter registry

    Returns:
        NodeValidationResult. Nodes without a marker line are valid ``plain``
        nodes.
    """
    if not node.text or not node.text.strip().startswith("#"):
        return NodeValidationResult(is_valid=True, node_type=PLAIN)

    if block_tags is None:
        block_tags = list(default_registry())
    block_tags = list(block_tags)

    metadata = get_metadata(node.text.strip().split("\n")[0])

    if metadata.tag in STRUCTURAL_TAGS:
        node_type = STRUCTURAL
    elif metadata.tag in block_tags:
        node_type = BLOCK
    else:
        expected = ", ".join([*STRUCTURAL_TAGS, *block_tags])
        return NodeValidationResult(
            is_valid=False,
            node_type=PLAIN,
            error_type=INVALID_TAG,
            message=f"Invalid tag: {metadata.tag}. Expected one of: {expected}",
        )

    if node_type == STRUCTURAL and not metadata.name:
        return NodeValidationResult(
            is_valid=False,
            node_type=node_type,
            error_type=MISSING_NAME,
            message=f"Missing name for {metadata.tag} node",
        )

    if not metadata.id:
        last = metadata.name.split(" ")[-1] if metadata.name else ""
        if last.startswith("^"):
            return NodeValidationResult(
                is_valid=False,
                node_type=node_type,
                error_type=INVALID_UUID,
                message=f"Invalid UUID format: {last[1:]}",
            )
        return NodeValidationResult(
            is_valid=False,
            node_type=node_type,
            error_type=MISSING_UUID,
            message="Missing UUID: Node must end with ^uuid",
        )

    return NodeValidationResult(is_valid=True, node_type=node_type)
