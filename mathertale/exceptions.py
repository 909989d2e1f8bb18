"""
Error types raised while converting course sources.

Every error derives from ConversionError so callers converting many files can
catch one type per file and keep going.
"""


class ConversionError(ValueError):
    """Base class for all conversion failures."""


class StructureError(ConversionError):
    """A required structural node or marker field is missing or malformed."""


class AmbiguousEdgeError(StructureError):
    """A node has more than one outgoing edge for the same side pair."""


class BlockValidationError(ConversionError):
    """Block content failed validation (empty content, bad answers, ...)."""


class UnknownBlockTypeError(ConversionError):
    """No converter is registered for a block tag."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"No converter registered for block type: {tag}")
