"""Data models for Mathertale."""

from .canvas import CanvasData, CanvasEdge, CanvasNode, Metadata, RawData
from .schemas import (
    BlockSchema,
    Category,
    Choice,
    ContradictionBlock,
    ContradictionQuestionData,
    DevStatus,
    JourneySchema,
    NotedBlock,
    OrderItem,
    ParaBlock,
    ProofReorderBlock,
    ProofReorderQuestionData,
    QuestSchema,
    QuestShortSchema,
    ScratchWorkBlock,
    SectionSchema,
    SingleChoiceBlock,
    SingleChoiceQuestionData,
    get_quest_text,
)

__all__ = [
    "CanvasData",
    "CanvasEdge",
    "CanvasNode",
    "Metadata",
    "RawData",
    "BlockSchema",
    "Category",
    "Choice",
    "ContradictionBlock",
    "ContradictionQuestionData",
    "DevStatus",
    "JourneySchema",
    "NotedBlock",
    "OrderItem",
    "ParaBlock",
    "ProofReorderBlock",
    "ProofReorderQuestionData",
    "QuestSchema",
    "QuestShortSchema",
    "ScratchWorkBlock",
    "SectionSchema",
    "SingleChoiceBlock",
    "SingleChoiceQuestionData",
    "get_quest_text",
]
