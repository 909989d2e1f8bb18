"""
Unit tests for journey compilation and dependency resolution.
"""

import unittest

from canvas_helpers import (
    JOURNEY_ID,
    QUEST_ID,
    QUEST_ID_2,
    QUEST_ID_3,
    canvas,
    edge,
    file_node,
    text_node,
)
from mathertale.compiler.journey import (
    apply_dependencies,
    convert_journey_canvas,
    extract_journey_node,
    find_journey_node,
    find_quest_files,
    is_journey_canvas_available,
    resolve_dependencies,
)
from mathertale.exceptions import BlockValidationError, StructureError
from mathertale.models.canvas import CanvasNode
from mathertale.models.schemas import Category, DevStatus, QuestSchema

JOURNEY_TEXT = (
    f"#journey Proofcraft 101 ^{JOURNEY_ID}\n"
    "Learn to write proofs.\n"
    "category:\nfoundational\n"
    "devStatus:\navailable"
)


def quest(quest_id, name):
    return QuestSchema(id=quest_id, name=name, desc=f"{name} desc")


def journey_canvas(journey_text=JOURNEY_TEXT):
    return canvas(
        [
            text_node("j", journey_text),
            file_node("f1", "quests/one.quest.canvas"),
            file_node("f2", "quests/two.quest.md"),
            file_node("f3", "quests/three.quest.canvas"),
            file_node("img", "images/diagram.png"),
        ],
        [
            edge("j", "f1"),
            edge("f1", "f2"),
            edge("f1", "f3"),
            edge("f2", "f3"),
            edge("f2", "f3"),
            edge("f3", "img"),
            edge("f1", "f2", "right", "left"),
        ],
    )


QUEST_MAP = {
    "quests/one.quest.canvas": quest(QUEST_ID, "One"),
    "quests/two.quest.md": quest(QUEST_ID_2, "Two"),
    "quests/three.quest.canvas": quest(QUEST_ID_3, "Three"),
}


class TestExtractJourneyNode(unittest.TestCase):
    """Test reading journey fields from the journey node."""

    def test_keyword_sections(self):
        journey = extract_journey_node(CanvasNode(id="j", type="text", text=JOURNEY_TEXT))

        self.assertEqual(journey.id, JOURNEY_ID)
        self.assertEqual(journey.name, "Proofcraft 101")
        self.assertEqual(journey.desc, "Learn to write proofs.")
        self.assertEqual(journey.category, Category.FOUNDATIONAL)
        self.assertEqual(journey.dev_status, DevStatus.AVAILABLE)
        self.assertEqual(journey.quest_count, 0)
        self.assertEqual(journey.quest_short_map, {})

    def test_inline_fields(self):
        text = f"#journey Algebra ^{JOURNEY_ID}\ndesc: Groups and rings\ncategory: algebra\ndevStatus: coming_soon"
        journey = extract_journey_node(CanvasNode(id="j", type="text", text=text))

        self.assertEqual(journey.desc, "Groups and rings")
        self.assertEqual(journey.category, Category.ALGEBRA)
        self.assertEqual(journey.dev_status, DevStatus.COMING_SOON)

    def test_missing_category(self):
        text = f"#journey J ^{JOURNEY_ID}\ndevStatus:\navailable"
        with self.assertRaises(BlockValidationError) as ctx:
            extract_journey_node(CanvasNode(id="j", type="text", text=text))
        self.assertEqual(str(ctx.exception), "Invalid category: None")

    def test_invalid_category(self):
        text = f"#journey J ^{JOURNEY_ID}\ncategory:\ntopology\ndevStatus:\navailable"
        with self.assertRaises(BlockValidationError) as ctx:
            extract_journey_node(CanvasNode(id="j", type="text", text=text))
        self.assertEqual(str(ctx.exception), "Invalid category: topology")

    def test_invalid_dev_status(self):
        text = f"#journey J ^{JOURNEY_ID}\ncategory:\nanalysis\ndevStatus:\nsoon"
        with self.assertRaises(BlockValidationError) as ctx:
            extract_journey_node(CanvasNode(id="j", type="text", text=text))
        self.assertEqual(str(ctx.exception), "Invalid dev status: soon")

    def test_missing_id(self):
        with self.assertRaises(StructureError) as ctx:
            extract_journey_node(CanvasNode(id="j", type="text", text="#journey J\ncategory:\nanalysis"))
        self.assertIn("Journey id is required", str(ctx.exception))


class TestConvertJourneyCanvas(unittest.TestCase):
    """Test journey assembly and the dependency graph."""

    def test_journey_node_not_found(self):
        with self.assertRaises(StructureError) as ctx:
            convert_journey_canvas(canvas([text_node("x", "plain")]), {})
        self.assertEqual(str(ctx.exception), "Journey node not found in canvas data")

    def test_find_journey_node(self):
        self.assertEqual(find_journey_node(journey_canvas()).id, "j")
        self.assertIsNone(find_journey_node(canvas([text_node("x", "#journeys J")])))

    def test_short_map_keyed_by_quest_id(self):
        journey = convert_journey_canvas(journey_canvas(), QUEST_MAP)

        self.assertEqual(set(journey.quest_short_map), {QUEST_ID, QUEST_ID_2, QUEST_ID_3})
        self.assertEqual(journey.quest_count, 3)
        self.assertEqual(journey.quest_short_map[QUEST_ID_2].name, "Two")

    def test_dependencies(self):
        shorts = convert_journey_canvas(journey_canvas(), QUEST_MAP).quest_short_map

        self.assertEqual(shorts[QUEST_ID].child_quests, [QUEST_ID_2, QUEST_ID_3])
        self.assertEqual(shorts[QUEST_ID].dependent_quests, [])
        self.assertEqual(shorts[QUEST_ID_2].dependent_quests, [QUEST_ID])
        self.assertEqual(shorts[QUEST_ID_2].child_quests, [QUEST_ID_3])
        self.assertEqual(shorts[QUEST_ID_3].dependent_quests, [QUEST_ID, QUEST_ID_2])

    def test_symmetry(self):
        shorts = convert_journey_canvas(journey_canvas(), QUEST_MAP).quest_short_map
        for a in shorts.values():
            for b in shorts.values():
                self.assertEqual(b.id in a.child_quests, a.id in b.dependent_quests)

    def test_unknown_files_are_ignored(self):
        partial = {"quests/one.quest.canvas": QUEST_MAP["quests/one.quest.canvas"]}
        journey = convert_journey_canvas(journey_canvas(), partial)
        self.assertEqual(journey.quest_count, 1)
        self.assertEqual(journey.quest_short_map[QUEST_ID].child_quests, [])

    def test_inputs_are_not_modified(self):
        convert_journey_canvas(journey_canvas(), QUEST_MAP)
        for compiled in QUEST_MAP.values():
            self.assertEqual(compiled.child_quests, [])
            self.assertEqual(compiled.dependent_quests, [])


class TestDependencyHelpers(unittest.TestCase):

    def test_resolve_dependencies(self):
        data = journey_canvas()
        edges = resolve_dependencies(data, data.get_node("j"), QUEST_MAP)
        self.assertEqual(edges, [
            (QUEST_ID, QUEST_ID_2),
            (QUEST_ID, QUEST_ID_3),
            (QUEST_ID_2, QUEST_ID_3),
        ])

    def test_journey_edges_are_excluded(self):
        data = canvas(
            [text_node("j", JOURNEY_TEXT), file_node("f1", "a.quest.md"), file_node("f2", "b.quest.md")],
            [edge("j", "f1"), edge("j", "f2")],
        )
        quest_map = {"a.quest.md": quest(QUEST_ID, "A"), "b.quest.md": quest(QUEST_ID_2, "B")}
        self.assertEqual(resolve_dependencies(data, data.get_node("j"), quest_map), [])

    def test_apply_dependencies(self):
        one, two = quest(QUEST_ID, "One"), quest(QUEST_ID_2, "Two")
        updated_one, updated_two = apply_dependencies([one, two], [(QUEST_ID, QUEST_ID_2)])

        self.assertEqual(updated_one.child_quests, [QUEST_ID_2])
        self.assertEqual(updated_two.dependent_quests, [QUEST_ID])
        self.assertEqual(updated_two.sections, [])
        self.assertEqual(one.child_quests, [])

    def test_find_quest_files(self):
        files = find_quest_files(journey_canvas())
        self.assertEqual(files, [
            "quests/one.quest.canvas",
            "quests/two.quest.md",
            "quests/three.quest.canvas",
        ])
        self.assertEqual(find_quest_files(journey_canvas(), [".md"]), ["quests/two.quest.md"])

    def test_is_available(self):
        self.assertTrue(is_journey_canvas_available(journey_canvas()))
        text = JOURNEY_TEXT.replace("available", "in_development")
        self.assertFalse(is_journey_canvas_available(journey_canvas(text)))


if __name__ == "__main__":
    unittest.main()
