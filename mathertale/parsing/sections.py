"""
Keyword-section splitting for raw (non-markdown) block text.

Raw canvas blocks are written as a leading content blob followed by sections
introduced by keyword lines::

    What is 2+2?

    choices:
    a: 3
    b: 4

    answer:
    b

Keywords are matched against whole trimmed lines, either literally or with a
regular expression, so repeating numbered sections (``part-1:``,
``part-2:`` ...) can be collected under a single name.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Pattern, Tuple, Union


@dataclass(frozen=True)
class KeywordSpec:
    """
    A section keyword.

    ``pattern`` is either a literal line (compared after trimming) or a
    compiled regular expression that must match the whole trimmed line.
    """
    pattern: Union[str, Pattern[str]]
    name: str

    def matches(self, line: str) -> bool:
        if isinstance(self.pattern, str):
            return line == self.pattern
        return self.pattern.fullmatch(line) is not None


KeywordLike = Union[str, KeywordSpec]
SectionValue = Union[str, List[str]]


def keyword(literal: str) -> KeywordSpec:
    """Spec for a literal keyword line, named after the literal without its colon."""
    return KeywordSpec(literal, re.sub(r":$", "", literal))


def _normalize(keywords: Iterable[KeywordLike]) -> List[KeywordSpec]:
    return [k if isinstance(k, KeywordSpec) else keyword(k) for k in keywords]


def split_sections(raw_content: str, keywords: Iterable[KeywordLike]) -> Dict[str, SectionValue]:
    """
    Split raw text into ``content`` plus one entry per matched keyword name.

    Args:
        raw_content: The raw block text
        keywords: Literal keyword lines (e.g. ``"answer:"``) or KeywordSpec objects

    Returns:
        A dict with ``content`` (text before the first keyword line) and the
        body of every keyword section. A name matched once maps to a string;
        a name matched several times maps to a list in occurrence order.
    """
    specs = _normalize(keywords)
    lines = raw_content.split("\n")

    positions: List[Tuple[str, int]] = []
    for index, line in enumerate(lines):
        trimmed = line.strip()
        for spec in specs:
            if spec.matches(trimmed):
                positions.append((spec.name, index))
                break

    first_line = positions[0][1] if positions else len(lines)
    result: Dict[str, SectionValue] = {"content": "\n".join(lines[:first_line]).strip()}

    collected: Dict[str, List[str]] = {}
    for order, (name, line_index) in enumerate(positions):
        end = positions[order + 1][1] if order + 1 < len(positions) else len(lines)
        body = "\n".join(lines[line_index + 1:end]).strip()
        collected.setdefault(name, []).append(body)

    for name, bodies in collected.items():
        result[name] = bodies[0] if len(bodies) == 1 else bodies

    return result


def section_list(sections: Dict[str, SectionValue], name: str) -> List[str]:
    """Return a section as a list whether it occurred once, several times or not at all."""
    value = sections.get(name)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def section_text(sections: Dict[str, SectionValue], name: str, default: str = "") -> str:
    """Return a section's body as text; a repeated section yields its first occurrence."""
    bodies = section_list(sections, name)
    return bodies[0] if bodies else default
