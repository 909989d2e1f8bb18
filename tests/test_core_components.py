"""
Unit tests for core Mathertale components.

Tests configuration management, the output schema models and the command
line entry point.
"""

import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from mathertale.config import ConfigManager
from mathertale.models.canvas import CanvasData
from mathertale.models.schemas import (
    Category,
    DevStatus,
    JourneySchema,
    ParaBlock,
    QuestSchema,
    QuestShortSchema,
    SectionSchema,
)


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.output_directory, "build")
        self.assertEqual(config.journey_suffix, ".journey.canvas")
        self.assertEqual(config.quest_suffixes, [".quest.canvas", ".quest.md"])
        self.assertEqual(config.json_indent, 2)

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
paths:
  output_dir: "dist"
  vault_root: "vault"

build:
  json_indent: 4
  quest_suffixes:
    - ".quest.md"
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.output_directory, "dist")
        self.assertEqual(config.vault_root, "vault")
        self.assertEqual(config.json_indent, 4)
        self.assertEqual(config.quest_suffixes, [".quest.md"])
        # Missing keys fall back to property defaults
        self.assertEqual(config.journey_suffix, ".journey.canvas")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("logging.level"), "INFO")
        self.assertEqual(config.get("paths.log_file"), "mathertale.log")
        self.assertIsNone(config.get("nonexistent.key"))
        self.assertEqual(config.get("nonexistent.key", "fallback"), "fallback")

    def test_get_section(self):
        config = ConfigManager(str(self.config_path))
        self.assertIn("journey_suffix", config.get_section("build"))
        self.assertEqual(config.get_section("missing"), {})

    def test_invalid_yaml_uses_defaults(self):
        with open(self.config_path, 'w') as f:
            f.write("paths: [unclosed")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.output_directory, "build")

    def test_reload(self):
        config = ConfigManager(str(self.config_path))
        with open(self.config_path, 'w') as f:
            f.write("paths:\n  output_dir: later\n")
        config.reload()
        self.assertEqual(config.output_directory, "later")


class TestSchemas(unittest.TestCase):
    """Test output schema validation and serialization."""

    def quest(self, block_count=1):
        return QuestSchema(
            id="q",
            name="Quest",
            block_count=block_count,
            sections=[SectionSchema(name="S", blocks=[ParaBlock(id="b", content="text")])],
        )

    def test_block_count_invariant(self):
        self.assertEqual(self.quest().block_count, 1)
        with self.assertRaises(ValidationError):
            self.quest(block_count=3)

    def test_quest_count_invariant(self):
        short = QuestShortSchema(id="q", name="Quest")
        with self.assertRaises(ValidationError):
            JourneySchema(
                id="j", name="J", category=Category.ALGEBRA, dev_status=DevStatus.AVAILABLE,
                quest_count=2, quest_short_map={"q": short},
            )

    def test_to_short(self):
        short = self.quest().to_short()
        self.assertIsInstance(short, QuestShortSchema)
        self.assertEqual(short.block_count, 1)
        self.assertNotIn("sections", short.to_json_dict())

    def test_camel_case_json(self):
        data = self.quest().to_json_dict()
        self.assertIn("blockCount", data)
        self.assertIn("dependentQuests", data)
        self.assertIn("childQuests", data)
        self.assertEqual(data["sections"][0]["blocks"][0]["type"], "PARA")

    def test_discriminated_blocks_from_json(self):
        section = SectionSchema.model_validate({
            "name": "S",
            "blocks": [
                {"id": "1", "type": "THEOREM", "content": "x", "name": "T"},
                {"id": "2", "type": "SINGLE_CHOICE", "content": "q",
                 "questionData": {"choices": [{"key": "a", "content": "1"}], "answer": "a"}},
            ],
        })
        self.assertEqual(section.blocks[0].type, "THEOREM")
        self.assertEqual(section.blocks[1].question_data.answer, "a")

    def test_models_are_frozen(self):
        quest = self.quest()
        with self.assertRaises(ValidationError):
            quest.name = "other"

    def test_category_and_status_keys(self):
        self.assertEqual(Category.from_key(" Probability "), Category.PROBABILITY)
        self.assertIsNone(Category.from_key("topology"))
        self.assertIsNone(Category.from_key(None))
        self.assertEqual(DevStatus.from_key("in_development"), DevStatus.IN_DEVELOPMENT)
        self.assertEqual(DevStatus.from_key(" Available "), DevStatus.AVAILABLE)
        self.assertEqual(Category.from_key("ANALYSIS"), Category.ANALYSIS)
        self.assertIsNone(DevStatus.from_key("available soon"))

    def test_canvas_aliases(self):
        data = CanvasData.model_validate({
            "nodes": [{"id": "a", "type": "text", "text": "x", "color": "4"}],
            "edges": [{"id": "e", "fromNode": "a", "toNode": "b", "fromSide": "bottom", "toSide": "top"}],
        })
        self.assertEqual(data.edges[0].to_node, "b")
        self.assertIsNone(data.get_node("b"))
        self.assertEqual(data.get_node("a").text, "x")


if __name__ == "__main__":
    unittest.main()
