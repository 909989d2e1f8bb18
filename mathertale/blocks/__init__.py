"""Block variants: per-tag converters and the registry that dispatches to them."""

from .base import BlockSource, parse_choices
from .contradiction import convert_contradiction
from .noted import noted_converter
from .para import convert_para
from .proof_reorder import convert_proof_reorder
from .registry import (
    BUILTIN_CONVERTERS,
    ConverterRegistry,
    default_registry,
    normalize_tag,
    register_block_converter,
    restore_builtin_converters,
)
from .scratch_work import convert_scratch_work
from .single_choice import convert_single_choice

__all__ = [
    "BlockSource",
    "parse_choices",
    "convert_contradiction",
    "noted_converter",
    "convert_para",
    "convert_proof_reorder",
    "BUILTIN_CONVERTERS",
    "ConverterRegistry",
    "default_registry",
    "normalize_tag",
    "register_block_converter",
    "restore_builtin_converters",
    "convert_scratch_work",
    "convert_single_choice",
]
