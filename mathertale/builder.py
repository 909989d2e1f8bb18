"""
Build layer: reads course sources from disk and writes the compiled JSON.

Canvas file nodes reference quest documents by vault-relative path, so
quest files are resolved against a vault root (``paths.vault_root`` in
config.yaml unless given explicitly).
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .blocks.registry import ConverterRegistry
from .compiler.journey import convert_journey_canvas, find_quest_files
from .compiler.metadata import validate_node
from .compiler.quest import convert_quest_canvas, convert_quest_markdown
from .config import get_config
from .exceptions import ConversionError
from .models.canvas import CanvasData
from .models.schemas import JourneySchema, QuestSchema

PathLike = Union[str, Path]

MARKDOWN_SUFFIX = ".md"


@dataclass
class JourneyBuild:
    """A compiled journey and the quests it references, dependencies included."""
    journey: JourneySchema
    quests: List[QuestSchema] = field(default_factory=list)
    source: Optional[Path] = None


def load_canvas(path: PathLike) -> CanvasData:
    """Read and parse a canvas JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return CanvasData.model_validate(data)


def report_invalid_nodes(canvas: CanvasData, source: PathLike) -> int:
    """Log every node with a malformed marker line; returns how many were found."""
    invalid = 0
    for node in canvas.nodes:
        result = validate_node(node)
        if not result.is_valid:
            invalid += 1
            logging.warning(f"{source}: node {node.id}: {result.error_type}: {result.message}")
    return invalid


def convert_quest_file(path: PathLike, registry: Optional[ConverterRegistry] = None) -> QuestSchema:
    """Compile a quest document, markdown or canvas depending on the file name."""
    path = Path(path)
    logging.debug(f"Converting quest file: {path}")

    if path.name.endswith(MARKDOWN_SUFFIX):
        return convert_quest_markdown(path.read_text(encoding='utf-8'), registry)

    canvas = load_canvas(path)
    report_invalid_nodes(canvas, path)
    return convert_quest_canvas(canvas, registry)


def build_journey_data(
    journey_path: PathLike,
    vault_root: Optional[PathLike] = None,
    registry: Optional[ConverterRegistry] = None,
) -> JourneyBuild:
    """
    Compile a journey canvas together with every quest it references.

    Args:
        journey_path: The ``.journey.canvas`` file
        vault_root: Directory the canvas file paths are relative to
        registry: Block converters to use; defaults to the process default

    Returns:
        JourneyBuild whose quests (in canvas order, one per quest id) carry
        the dependencies resolved by the journey
    """
    journey_path = Path(journey_path)
    root = Path(vault_root if vault_root is not None else get_config().vault_root)

    canvas = load_canvas(journey_path)
    report_invalid_nodes(canvas, journey_path)

    quest_map: Dict[str, QuestSchema] = {}
    for quest_path in find_quest_files(canvas):
        if quest_path not in quest_map:
            quest_map[quest_path] = convert_quest_file(root / quest_path, registry)

    journey = convert_journey_canvas(canvas, quest_map)

    quests: List[QuestSchema] = []
    seen = set()
    for quest in quest_map.values():
        if quest.id in seen:
            continue
        seen.add(quest.id)
        short = journey.quest_short_map[quest.id]
        quests.append(quest.model_copy(update={
            "dependent_quests": list(short.dependent_quests),
            "child_quests": list(short.child_quests),
        }))

    logging.info(f"Built journey '{journey.name}' ({journey.id}) with {len(quests)} quests")
    return JourneyBuild(journey=journey, quests=quests, source=journey_path)


def find_journey_files(root: PathLike, suffix: Optional[str] = None) -> List[Path]:
    """All journey canvases under ``root``, recursively, in sorted order."""
    suffix = suffix or get_config().journey_suffix
    return sorted(Path(root).rglob(f"*{suffix}"))


def build_all(
    root: PathLike,
    vault_root: Optional[PathLike] = None,
    registry: Optional[ConverterRegistry] = None,
) -> List[JourneyBuild]:
    """
    Build every journey found under ``root``.

    A journey that fails to convert is logged and skipped; the others are
    still built. Quest paths are resolved against ``vault_root``, or against
    ``root`` when it is not given.
    """
    root = Path(root)
    vault = vault_root if vault_root is not None else root
    builds: List[JourneyBuild] = []

    for path in find_journey_files(root):
        try:
            builds.append(build_journey_data(path, vault, registry))
        except (ConversionError, ValueError, OSError) as e:
            logging.warning(f"Skipping journey {path}: {e}")

    logging.info(f"Built {len(builds)} journeys from {root}")
    return builds


def _write_json(path: Path, data: dict, indent: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)


def write_build(
    build: JourneyBuild,
    output_dir: Optional[PathLike] = None,
    indent: Optional[int] = None,
) -> List[Path]:
    """
    Write a journey build as ``journeys/<id>.json`` and ``quests/<id>.json``.

    Returns:
        The written file paths, journey first
    """
    config = get_config()
    out = Path(output_dir if output_dir is not None else config.output_directory)
    indent = indent if indent is not None else config.json_indent

    journey_file = out / "journeys" / f"{build.journey.id}.json"
    _write_json(journey_file, build.journey.to_json_dict(), indent)
    written = [journey_file]

    for quest in build.quests:
        quest_file = out / "quests" / f"{quest.id}.json"
        _write_json(quest_file, quest.to_json_dict(), indent)
        written.append(quest_file)

    logging.info(f"Wrote {len(written)} files for journey {build.journey.id} to {out}")
    return written
