"""
Canvas input models for Mathertale.

These models describe the parsed JSON of an Obsidian canvas file and the
normalized records handed to block converters.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CanvasModel(BaseModel):
    """Base for canvas records: camelCase on the wire, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class CanvasNode(CanvasModel):
    """
    A positioned vertex of the canvas graph.

    Text nodes carry a leading marker line (``#tag Name ^uuid``); file nodes
    reference another quest or journey document by vault-relative path.
    """

    id: str = Field(..., description="Canvas-local node identifier")
    type: str = Field(..., description="Node kind, 'text' or 'file'")
    text: Optional[str] = Field(None, description="Text body of a text node")
    file: Optional[str] = Field(None, description="Referenced path of a file node")


class CanvasEdge(CanvasModel):
    """A directed connector between two nodes."""

    id: Optional[str] = None
    from_node: str
    to_node: str
    from_side: str
    to_side: str


class CanvasData(CanvasModel):
    """A whole canvas document."""

    nodes: List[CanvasNode] = Field(default_factory=list)
    edges: List[CanvasEdge] = Field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[CanvasNode]:
        """Look up a node by its canvas id."""
        return self._node_index().get(node_id)

    def _node_index(self) -> Dict[str, CanvasNode]:
        # first occurrence wins, matching a linear scan
        index: Dict[str, CanvasNode] = {}
        for node in self.nodes:
            index.setdefault(node.id, node)
        return index


class Metadata(BaseModel):
    """Fields parsed from a marker line ``#tag Name ^uuid``."""

    tag: str
    name: str = ""
    id: str = ""


class RawData(BaseModel):
    """Input to a legacy (raw text) block converter."""

    id: str
    tag: str
    name: Optional[str] = None
    raw_content: str = ""
