"""
Unit tests for lexing markdown and reconstructing it from tokens.
"""

import unittest

from mathertale.parsing.lexer import lex
from mathertale.parsing.reconstructor import tokens_to_markdown
from mathertale.parsing.tokens import (
    CODE,
    HEADING,
    HTML,
    LATEX_FENCE,
    LIST,
    PARAGRAPH,
    SPACE,
    ListItem,
    Token,
)


def paragraph(text):
    return Token(PARAGRAPH, text=text)


def bullet_list(*texts, ordered=False):
    return Token(LIST, ordered=ordered, items=[ListItem(text=t) for t in texts])


class TestTokensToMarkdown(unittest.TestCase):
    """Test spacing and rendering rules on hand-built token sequences."""

    def test_empty(self):
        self.assertEqual(tokens_to_markdown([]), "")
        self.assertEqual(tokens_to_markdown(None), "")

    def test_paragraphs_are_separated(self):
        self.assertEqual(tokens_to_markdown([paragraph("a"), paragraph("b")]), "a\n\nb")

    def test_list_then_paragraph(self):
        tokens = [bullet_list("x", "y"), paragraph("after")]
        self.assertEqual(tokens_to_markdown(tokens), "- x\n- y\n\nafter")

    def test_paragraph_then_list(self):
        tokens = [paragraph("before"), bullet_list("x")]
        self.assertEqual(tokens_to_markdown(tokens), "before\n\n- x")

    def test_space_after_list_adds_nothing_extra(self):
        tokens = [bullet_list("x"), Token(SPACE, text="\n"), paragraph("after")]
        self.assertEqual(tokens_to_markdown(tokens), "- x\n\nafter")

    def test_lists_of_different_kinds(self):
        tokens = [bullet_list("x"), bullet_list("y", ordered=True)]
        self.assertEqual(tokens_to_markdown(tokens), "- x\n\n1. y")

    def test_ordered_list_is_renumbered(self):
        tokens = [bullet_list("a", "b", "c", ordered=True)]
        self.assertEqual(tokens_to_markdown(tokens), "1. a\n2. b\n3. c")

    def test_nested_under_unordered_indents_two_per_level(self):
        inner = Token(LIST, items=[ListItem(text="c")])
        middle = Token(LIST, items=[ListItem(text="b", tokens=[paragraph("b"), inner])])
        outer = Token(LIST, items=[ListItem(text="a", tokens=[paragraph("a"), middle])])
        self.assertEqual(tokens_to_markdown([outer]), "- a\n  - b\n    - c")

    def test_nested_under_ordered_indents_four(self):
        nested = Token(LIST, items=[ListItem(text="inner")])
        outer = Token(LIST, ordered=True, items=[
            ListItem(text="one", tokens=[paragraph("one"), nested]),
            ListItem(text="two"),
        ])
        self.assertEqual(tokens_to_markdown([outer]), "1. one\n    - inner\n2. two")

    def test_code_blocks(self):
        tokens = [Token(CODE, text="x = 1", lang="python"), Token(CODE, text="y")]
        self.assertEqual(tokens_to_markdown(tokens), "```python\nx = 1\n```\n\n```\ny\n```")

    def test_heading_not_first_gets_blank_line(self):
        tokens = [paragraph("intro"), Token(HEADING, text="Title", depth=2), paragraph("body")]
        self.assertEqual(tokens_to_markdown(tokens), "intro\n\n## Title\nbody")

    def test_heading_first(self):
        self.assertEqual(tokens_to_markdown([Token(HEADING, text="T", depth=1)]), "# T")

    def test_latex_block(self):
        tokens = [
            paragraph("Consider"),
            Token(HTML, text=LATEX_FENCE),
            paragraph("x^2"),
            paragraph("+ 1"),
            Token(HTML, text=LATEX_FENCE),
        ]
        self.assertEqual(tokens_to_markdown(tokens), "Consider\n\n$$\nx^2\n+ 1\n$$")

    def test_other_html(self):
        self.assertEqual(tokens_to_markdown([Token(HTML, text="<br>")]), "<br>")

    def test_output_is_trimmed(self):
        tokens = [Token(SPACE, text="\n"), paragraph("x"), Token(SPACE, text="\n")]
        self.assertEqual(tokens_to_markdown(tokens), "x")


class TestRoundTrip(unittest.TestCase):
    """Test that lexing then reconstructing reproduces canonical markdown."""

    def assertRoundTrip(self, text):
        self.assertEqual(tokens_to_markdown(lex(text)), text)

    def test_paragraphs(self):
        self.assertRoundTrip("First paragraph\nstill first.\n\nSecond paragraph.")

    def test_headings(self):
        self.assertRoundTrip("# Title\n\nSome text.\n\n## Part\n\nMore text.")

    def test_bullet_list(self):
        self.assertRoundTrip("Intro\n\n- one\n- two\n  - nested\n\nOutro")

    def test_ordered_list_with_nested(self):
        self.assertRoundTrip("1. first\n    - detail\n2. second")

    def test_code_fence(self):
        self.assertRoundTrip("Example:\n\n```python\nprint(1)\n```")

    def test_latex(self):
        self.assertRoundTrip("Text\n\n$$\nx^2 + y^2 = z^2\n$$\n\nMore")


class TestLex(unittest.TestCase):
    """Test the markdown-it token adapter."""

    def test_token_shapes(self):
        tokens = lex("## Head\n\npara\n\n- a\n\n```js\nx\n```")
        types = [token.type for token in tokens]
        self.assertEqual(types, [HEADING, SPACE, PARAGRAPH, SPACE, LIST, SPACE, CODE])
        self.assertEqual(tokens[0].depth, 2)
        self.assertEqual(tokens[0].text, "Head")
        self.assertEqual(tokens[4].items[0].text, "a")
        self.assertEqual(tokens[6].lang, "js")
        self.assertEqual(tokens[6].text, "x")

    def test_latex_lines_become_html(self):
        tokens = lex("$$\na\n$$")
        self.assertEqual([t.type for t in tokens], [HTML, PARAGRAPH, HTML])
        self.assertEqual(tokens[1].text, "a")

    def test_ordered_list(self):
        tokens = lex("3. c\n4. d")
        self.assertTrue(tokens[0].ordered)
        self.assertEqual([item.text for item in tokens[0].items], ["c", "d"])

    def test_thematic_break_is_dropped_with_debug_log(self):
        with self.assertLogs(level="DEBUG") as logs:
            tokens = lex("a\n\n***\n\nb")
        self.assertEqual([t.type for t in tokens], [PARAGRAPH, SPACE, PARAGRAPH])
        self.assertTrue(any("thematic break" in line for line in logs.output))

    def test_blockquote_is_flattened_with_debug_log(self):
        with self.assertLogs(level="DEBUG") as logs:
            tokens = lex("> quoted")
        self.assertEqual([(t.type, t.text) for t in tokens], [(PARAGRAPH, "quoted")])
        self.assertTrue(any("blockquote" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
