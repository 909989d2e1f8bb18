"""
Journey compilation and quest dependency resolution.

A journey canvas holds one ``#journey`` text node plus file nodes pointing at
quest documents. Vertical edges (bottom to top) between two quest file nodes
mean the upper quest unlocks the lower one. Quests are compiled first, each
with empty dependency lists; the edges are then resolved into a list of
``(from_quest_id, to_quest_id)`` pairs and merged into fresh quest records.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

from ..config import get_config
from ..exceptions import BlockValidationError, StructureError
from ..models.canvas import CanvasData, CanvasNode
from ..models.schemas import Category, DevStatus, JourneySchema, QuestSchema, QuestShortSchema
from ..parsing.sections import section_text, split_sections
from .graph import BOTTOM, TOP
from .metadata import split_node_text
from .quest import find_marked_node

JOURNEY_MARKER = "#journey "

JOURNEY_KEYWORDS = ["desc:", "category:", "devStatus:"]
INLINE_FIELDS = ("desc", "category", "devStatus")

DependencyEdge = Tuple[str, str]
Q = TypeVar("Q", QuestSchema, QuestShortSchema)


def find_journey_node(canvas: CanvasData) -> Optional[CanvasNode]:
    return find_marked_node(canvas, JOURNEY_MARKER)


def _require_journey_node(canvas: CanvasData) -> CanvasNode:
    node = find_journey_node(canvas)
    if node is None:
        raise StructureError("Journey node not found in canvas data")
    return node


def _journey_fields(body: str) -> Dict[str, str]:
    """
    Read desc, category and devStatus from a journey node body.

    Fields may be keyword sections (``category:`` alone on a line, value
    below) or inline ``category: algebra`` lines. Remaining text is the desc.
    """
    sections = split_sections(body, JOURNEY_KEYWORDS)
    fields: Dict[str, str] = {}
    desc_lines: List[str] = []

    for line in sections["content"].split("\n"):
        key, colon, value = line.partition(":")
        if colon and key.strip() in INLINE_FIELDS and value.strip():
            fields[key.strip()] = value.strip()
        else:
            desc_lines.append(line)

    for name in INLINE_FIELDS:
        value = section_text(sections, name)
        if value:
            fields[name] = value

    fields.setdefault("desc", "\n".join(desc_lines).strip())
    return fields


def extract_journey_node(node: CanvasNode) -> JourneySchema:
    """
    Build a journey with an empty quest map from its ``#journey`` node.

    Raises:
        StructureError: If the id or name is missing
        BlockValidationError: If category or devStatus is missing or unknown
    """
    if not node.text:
        raise StructureError("Journey text is required")

    metadata, body = split_node_text(node.text)
    if not metadata.id:
        raise StructureError(f"Journey id is required: {node.text}")
    if not metadata.name:
        raise StructureError(f"Journey name is required: {node.text}")

    fields = _journey_fields(body)

    category = Category.from_key(fields.get("category"))
    if category is None:
        raise BlockValidationError(f"Invalid category: {fields.get('category')}")

    dev_status = DevStatus.from_key(fields.get("devStatus"))
    if dev_status is None:
        raise BlockValidationError(f"Invalid dev status: {fields.get('devStatus')}")

    return JourneySchema(
        id=metadata.id,
        name=metadata.name,
        desc=fields["desc"],
        category=category,
        dev_status=dev_status,
    )


def _node_quests(canvas: CanvasData, quest_map: Mapping[str, QuestSchema]) -> Dict[str, QuestSchema]:
    """Map file node ids to the quests their paths resolve to."""
    node_quests: Dict[str, QuestSchema] = {}
    for node in canvas.nodes:
        if node.type != "file" or not node.file:
            continue
        quest = quest_map.get(node.file)
        if quest is None:
            logging.debug(f"File node {node.id} ({node.file}) does not reference a known quest")
            continue
        node_quests[node.id] = quest
    return node_quests


def resolve_dependencies(
    canvas: CanvasData,
    journey_node: CanvasNode,
    quest_map: Mapping[str, QuestSchema],
) -> List[DependencyEdge]:
    """
    Collect quest dependency pairs from the journey canvas edges.

    Only bottom-to-top edges joining two quest file nodes count; edges leaving
    the journey node itself are skipped.

    Returns:
        ``(from_quest_id, to_quest_id)`` pairs in edge order, without duplicates
    """
    node_quests = _node_quests(canvas, quest_map)
    edges: List[DependencyEdge] = []

    for edge in canvas.edges:
        if edge.from_side != BOTTOM or edge.to_side != TOP:
            continue
        if edge.from_node == journey_node.id:
            continue

        source = node_quests.get(edge.from_node)
        target = node_quests.get(edge.to_node)
        if source is None or target is None:
            continue

        pair = (source.id, target.id)
        if pair not in edges:
            edges.append(pair)

    return edges


def _merge(existing: Sequence[str], additions: Iterable[str]) -> List[str]:
    merged = list(existing)
    for quest_id in additions:
        if quest_id not in merged:
            merged.append(quest_id)
    return merged


def apply_dependencies(quests: Iterable[Q], edges: Sequence[DependencyEdge]) -> List[Q]:
    """
    Return copies of ``quests`` with the dependency edges merged in.

    For every ``(a, b)`` edge, ``b`` joins ``a.child_quests`` and ``a`` joins
    ``b.dependent_quests``. The input records are not modified.
    """
    updated: List[Q] = []
    for quest in quests:
        children = [to_id for from_id, to_id in edges if from_id == quest.id]
        parents = [from_id for from_id, to_id in edges if to_id == quest.id]
        updated.append(quest.model_copy(update={
            "child_quests": _merge(quest.child_quests, children),
            "dependent_quests": _merge(quest.dependent_quests, parents),
        }))
    return updated


def convert_journey_canvas(canvas: CanvasData, quest_map: Mapping[str, QuestSchema]) -> JourneySchema:
    """
    Compile a journey canvas.

    Args:
        canvas: The journey canvas
        quest_map: Compiled quests keyed by the file path the canvas uses to
            reference them

    Returns:
        The journey with one short record per referenced quest, keyed by
        quest id and carrying the resolved dependencies
    """
    journey_node = _require_journey_node(canvas)
    journey = extract_journey_node(journey_node)

    shorts: Dict[str, QuestShortSchema] = {}
    for quest in _node_quests(canvas, quest_map).values():
        shorts.setdefault(quest.id, quest.to_short())

    edges = resolve_dependencies(canvas, journey_node, quest_map)
    short_map = {short.id: short for short in apply_dependencies(shorts.values(), edges)}

    logging.info(f"Journey {journey.id}: {len(short_map)} quests, {len(edges)} dependencies")

    return journey.model_copy(update={
        "quest_short_map": short_map,
        "quest_count": len(short_map),
    })


def find_quest_files(canvas: CanvasData, suffixes: Optional[Sequence[str]] = None) -> List[str]:
    """Paths of file nodes that reference quest documents, in node order."""
    suffixes = tuple(suffixes if suffixes is not None else get_config().quest_suffixes)
    return [
        node.file for node in canvas.nodes
        if node.type == "file" and node.file and node.file.endswith(suffixes)
    ]


def is_journey_canvas_available(canvas: CanvasData) -> bool:
    journey = extract_journey_node(_require_journey_node(canvas))
    return journey.dev_status == DevStatus.AVAILABLE
