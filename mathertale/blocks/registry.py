"""
Block conversion registry.

Maps authoring tags (``para``, ``theorem``, ``single_choice`` ...) to the
converter that turns a RawData or MarkdownBlock into a typed block. A
registry is immutable: ``with_converter`` returns an extended copy, so a
registry handed to a compiler cannot change underneath it.

The process keeps one default registry holding the built-in converters.
``register_block_converter`` swaps that default for an extended copy; the
swap lasts for the rest of the process.
"""

import logging
from typing import Callable, Dict, Iterator, Mapping, Optional

from ..exceptions import UnknownBlockTypeError
from ..models.schemas import NOTED_TYPES
from .base import BlockSource
from .contradiction import convert_contradiction
from .noted import noted_converter
from .para import convert_para
from .proof_reorder import convert_proof_reorder
from .scratch_work import convert_scratch_work
from .single_choice import convert_single_choice

Converter = Callable[[BlockSource], object]


def normalize_tag(tag: str) -> str:
    return (tag or "").strip().lower()


class ConverterRegistry(Mapping[str, Converter]):
    """
    Immutable tag to converter mapping.
    """

    def __init__(self, converters: Optional[Mapping[str, Converter]] = None):
        self._converters: Dict[str, Converter] = {
            normalize_tag(tag): converter for tag, converter in (converters or {}).items()
        }

    def __getitem__(self, tag: str) -> Converter:
        return self._converters[normalize_tag(tag)]

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and normalize_tag(tag) in self._converters

    def __iter__(self) -> Iterator[str]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def with_converter(self, tag: str, converter: Converter) -> "ConverterRegistry":
        """
        Return a new registry with ``converter`` registered under ``tag``.

        Args:
            tag: Block tag; surrounding whitespace and case are ignored
            converter: Callable taking a RawData or MarkdownBlock

        Returns:
            A new ConverterRegistry; this one is left unchanged
        """
        if not normalize_tag(tag):
            raise ValueError("Block tag must not be empty")
        merged = dict(self._converters)
        merged[normalize_tag(tag)] = converter
        return ConverterRegistry(merged)

    def convert(self, source: BlockSource):
        """
        Convert one block source with the converter registered for its tag.

        Raises:
            UnknownBlockTypeError: If no converter handles the tag
        """
        converter = self._converters.get(normalize_tag(source.tag))
        if converter is None:
            raise UnknownBlockTypeError(source.tag)
        return converter(source)


BUILTIN_CONVERTERS: Dict[str, Converter] = {
    "para": convert_para,
    **{block_type.lower(): noted_converter(block_type) for block_type in NOTED_TYPES},
    "single_choice": convert_single_choice,
    "contradiction": convert_contradiction,
    "proof_reorder": convert_proof_reorder,
    "scratch_work": convert_scratch_work,
}

_default_registry = ConverterRegistry(BUILTIN_CONVERTERS)


def default_registry() -> ConverterRegistry:
    """Get the process-wide default registry."""
    return _default_registry


def register_block_converter(tag: str, converter: Converter) -> ConverterRegistry:
    """
    Add a converter to the process-wide default registry.

    Registrations are never undone automatically; tests that register
    converters should call ``restore_builtin_converters`` afterwards.

    Returns:
        The new default registry
    """
    global _default_registry
    if tag in _default_registry:
        logging.info(f"Replacing block converter for tag: {normalize_tag(tag)}")
    _default_registry = _default_registry.with_converter(tag, converter)
    return _default_registry


def restore_builtin_converters() -> ConverterRegistry:
    """Reset the default registry to the built-in converters only."""
    global _default_registry
    _default_registry = ConverterRegistry(BUILTIN_CONVERTERS)
    return _default_registry
