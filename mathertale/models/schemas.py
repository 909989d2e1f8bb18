"""
Output schema models for Mathertale.

This module defines the typed content tree (Journey -> Quest -> Section ->
Block) that every converter produces. The models are frozen value objects and
serialize to the camelCase JSON shape consumed by the learning application.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SchemaModel(BaseModel):
    """Base for all output records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json_dict(self) -> dict:
        """Dump to the JSON-ready camelCase representation."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class Category(str, Enum):
    """Closed set of journey/quest categories."""

    FOUNDATIONAL = "Foundational Mathematics"
    ANALYSIS = "Analysis"
    ALGEBRA = "Algebra"
    PROBABILITY = "Probability and Statistics"

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["Category"]:
        """Resolve an authoring key such as ``foundational``; None if unknown."""
        if not key:
            return None
        return cls.__members__.get(key.strip().upper())


class DevStatus(str, Enum):
    """Publication state of a journey."""

    IN_DEVELOPMENT = "in_development"
    COMING_SOON = "coming_soon"
    AVAILABLE = "available"

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["DevStatus"]:
        if not key:
            return None
        try:
            return cls(key.strip().lower())
        except ValueError:
            return None


# --------------------------
# Blocks
# --------------------------

PARA = "PARA"
DEFINITION = "DEFINITION"
FACT = "FACT"
THEOREM = "THEOREM"
PROPOSITION = "PROPOSITION"
REMARK = "REMARK"
LEMMA = "LEMMA"
SINGLE_CHOICE = "SINGLE_CHOICE"
CONTRADICTION = "CONTRADICTION"
PROOF_REORDER = "PROOF_REORDER"
SCRATCH_WORK = "SCRATCH_WORK"

NOTED_TYPES = (DEFINITION, FACT, THEOREM, PROPOSITION, REMARK, LEMMA)


class BlockBase(SchemaModel):
    """Fields shared by every block variant."""

    id: str = Field(..., description="Stable block UUID")
    content: str = Field("", description="Markdown body of the block")
    name: Optional[str] = Field(None, description="Optional display name")
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp of the conversion that produced this block"
    )

    def get_text(self) -> str:
        """Render the block back to its raw authoring text."""
        return self.content


class ParaBlock(BlockBase):
    type: Literal["PARA"] = PARA


class ScratchWorkBlock(BlockBase):
    type: Literal["SCRATCH_WORK"] = SCRATCH_WORK


class NotedBlock(BlockBase):
    """Definition, fact, theorem, proposition, remark or lemma."""

    type: Literal["DEFINITION", "FACT", "THEOREM", "PROPOSITION", "REMARK", "LEMMA"]

    def get_text(self) -> str:
        return f"{self.type.capitalize()}: {self.name or ''}\n{self.content}"


class Choice(SchemaModel):
    key: str
    content: str


def _choices_text(choices: List[Choice]) -> str:
    return "".join(f"{choice.key}: {choice.content}\n" for choice in choices)


class SingleChoiceQuestionData(SchemaModel):
    choices: List[Choice]
    answer: str
    explanation: str = ""


class SingleChoiceBlock(BlockBase):
    type: Literal["SINGLE_CHOICE"] = SINGLE_CHOICE
    question_data: SingleChoiceQuestionData

    def get_text(self) -> str:
        data = self.question_data
        return (
            f"{self.content}\n\nchoices:\n{_choices_text(data.choices)}"
            f"\nanswer:\n{data.answer}\n\nexplanation:\n{data.explanation}"
        )


class ContradictionQuestionData(SchemaModel):
    choices: List[Choice]
    answer: List[str] = Field(..., description="The two contradicting choice keys")
    explanation: str


class ContradictionBlock(BlockBase):
    type: Literal["CONTRADICTION"] = CONTRADICTION
    question_data: ContradictionQuestionData

    def get_text(self) -> str:
        data = self.question_data
        return (
            f"{self.content}\n\nchoices:\n{_choices_text(data.choices)}"
            f"\nanswer:\n{', '.join(data.answer)}\n\nexplanation:\n{data.explanation}"
        )


class OrderItem(SchemaModel):
    id: str
    content: str


class ProofReorderQuestionData(SchemaModel):
    order_items: List[OrderItem]
    question_order: str = Field(..., description="Comma-separated presentation order")


class ProofReorderBlock(BlockBase):
    type: Literal["PROOF_REORDER"] = PROOF_REORDER
    question_data: ProofReorderQuestionData

    def get_text(self) -> str:
        text = "Proof:\n\n" + self.content + "\n\n"
        for index, item in enumerate(self.question_data.order_items, 1):
            text += f"part-{index}:\n{item.content}\n\n"
        return text


BlockSchema = Annotated[
    Union[
        ParaBlock,
        NotedBlock,
        SingleChoiceBlock,
        ContradictionBlock,
        ProofReorderBlock,
        ScratchWorkBlock,
    ],
    Field(discriminator="type"),
]


# --------------------------
# Sections, quests, journeys
# --------------------------

class SectionSchema(SchemaModel):
    name: str
    blocks: List[BlockSchema] = Field(default_factory=list)


class QuestShortSchema(SchemaModel):
    """A quest without its sections, as listed inside a journey."""

    id: str
    name: str
    desc: str = ""
    category: Optional[Category] = None
    block_count: int = 0
    updated_at: datetime = Field(default_factory=datetime.now)
    dependent_quests: List[str] = Field(
        default_factory=list,
        description="Quests that must be completed before this one"
    )
    child_quests: List[str] = Field(
        default_factory=list,
        description="Quests unlocked by this one"
    )


class QuestSchema(QuestShortSchema):
    sections: List[SectionSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_block_count(self):
        total = sum(len(section.blocks) for section in self.sections)
        if self.block_count != total:
            raise ValueError(
                f"blockCount ({self.block_count}) does not match the number of blocks ({total}) "
                f"for quest ID: {self.id}"
            )
        return self

    def to_short(self) -> QuestShortSchema:
        """Project to the lightweight short form."""
        return QuestShortSchema.model_validate(self.model_dump(exclude={"sections"}))


class JourneySchema(SchemaModel):
    id: str
    name: str
    desc: str = ""
    category: Category
    dev_status: DevStatus
    quest_count: int = 0
    quest_short_map: Dict[str, QuestShortSchema] = Field(default_factory=dict)
    updated_at: datetime = Field(default_factory=datetime.now)
    created_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def check_quest_count(self):
        if self.quest_count != len(self.quest_short_map):
            raise ValueError(
                f"questCount ({self.quest_count}) does not match the number of quests "
                f"({len(self.quest_short_map)}) for journey ID: {self.id}"
            )
        return self


def get_quest_text(quest: QuestSchema) -> str:
    """Render a whole quest as readable text, section by section."""
    parts = [f"# {quest.name}"]
    if quest.desc:
        parts.append(quest.desc)
    for section in quest.sections:
        parts.append(f"## {section.name}")
        parts.extend(block.get_text().strip() for block in section.blocks)
    return "\n\n".join(parts)
