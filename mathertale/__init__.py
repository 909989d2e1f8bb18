"""
Mathertale: compiles course sources into the learning app's content tree.

Reads Obsidian canvas files and quest markdown and produces typed
Journey -> Quest -> Section -> Block records.
"""

__version__ = "0.1.0"
__author__ = "Mathertale Project"

from .blocks import ConverterRegistry, default_registry, register_block_converter
from .builder import JourneyBuild, build_all, build_journey_data, write_build
from .compiler import convert_journey_canvas, convert_quest_canvas, convert_quest_markdown
from .exceptions import (
    AmbiguousEdgeError,
    BlockValidationError,
    ConversionError,
    StructureError,
    UnknownBlockTypeError,
)
from .models import BlockSchema, JourneySchema, QuestSchema, SectionSchema, get_quest_text

__all__ = [
    "ConverterRegistry",
    "default_registry",
    "register_block_converter",
    "JourneyBuild",
    "build_all",
    "build_journey_data",
    "write_build",
    "convert_journey_canvas",
    "convert_quest_canvas",
    "convert_quest_markdown",
    "AmbiguousEdgeError",
    "BlockValidationError",
    "ConversionError",
    "StructureError",
    "UnknownBlockTypeError",
    "BlockSchema",
    "JourneySchema",
    "QuestSchema",
    "SectionSchema",
    "get_quest_text",
]
