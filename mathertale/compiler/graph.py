"""
Canvas graph walking.

Sections hang off a quest node in a horizontal chain (right side to left
side); blocks hang off a section node in a vertical chain (bottom side to top
side). Each step must be unambiguous: a node with two outgoing edges on the
same side pair is an authoring error.
"""

import logging
from typing import Callable, Iterator, Optional

from ..exceptions import AmbiguousEdgeError, StructureError
from ..models.canvas import CanvasData, CanvasNode

RIGHT, LEFT, BOTTOM, TOP = "right", "left", "bottom", "top"

Step = Callable[[CanvasNode, CanvasData], Optional[CanvasNode]]


def find_next_node(
    node: CanvasNode,
    canvas: CanvasData,
    from_side: str,
    to_side: str,
) -> Optional[CanvasNode]:
    """
    Follow the single outgoing edge of ``node`` with the given side pair.

    Returns:
        The target node, or None if there is no such edge or its target is
        missing from the canvas

    Raises:
        AmbiguousEdgeError: If more than one edge matches
    """
    edges = [
        edge for edge in canvas.edges
        if edge.from_node == node.id and edge.from_side == from_side and edge.to_side == to_side
    ]
    if not edges:
        return None
    if len(edges) > 1:
        targets = ", ".join(edge.to_node for edge in edges)
        raise AmbiguousEdgeError(
            f"Node {node.id} has {len(edges)} outgoing {from_side}->{to_side} edges (to {targets})"
        )

    target = canvas.get_node(edges[0].to_node)
    if target is None:
        logging.warning(f"Edge from node {node.id} points to missing node {edges[0].to_node}")
    return target


def find_next_section_node(node: CanvasNode, canvas: CanvasData) -> Optional[CanvasNode]:
    return find_next_node(node, canvas, RIGHT, LEFT)


def find_next_block_node(node: CanvasNode, canvas: CanvasData) -> Optional[CanvasNode]:
    return find_next_node(node, canvas, BOTTOM, TOP)


def walk_chain(start: CanvasNode, canvas: CanvasData, step: Step) -> Iterator[CanvasNode]:
    """
    Yield the nodes chained after ``start`` (``start`` itself excluded).

    Raises:
        StructureError: If the chain loops back on itself
    """
    seen = {start.id}
    current = step(start, canvas)
    while current is not None:
        if current.id in seen:
            raise StructureError(f"Cycle detected in canvas chain at node {current.id}")
        seen.add(current.id)
        yield current
        current = step(current, canvas)
