"""
Line Classifier

Splits a training log into session chunks and classifies each line into a
small token set the session parser walks over:

    TITLE         "# Push Day"
    DATE          "20/02/2025" or "20/02/2025 18:30"
    SEPARATOR     "---"
    EXERCISE_DEF  "Bench Press (4x8): 45kg A, / C7"
    LIST_ITEM     "- 80kg A"
    OTHER         anything else (ignored)
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class LineKind(str, Enum):
    TITLE = "title"
    DATE = "date"
    SEPARATOR = "separator"
    EXERCISE_DEF = "exercise_def"
    LIST_ITEM = "list_item"
    OTHER = "other"


TITLE_PATTERN = re.compile(r'^#(?:\s+(.*))?$')
DATE_PATTERN = re.compile(r'^(\d{2})/(\d{2})/(\d{4})(?:\s+(\d{2}):(\d{2}))?$')
SEPARATOR_PATTERN = re.compile(r'^-{3,}$')
# Searched for, not anchored: the name is whatever precedes the match and the
# inline detail whatever follows it. The objective never spans a '(' so every
# attempt stops at the next parenthesis.
EXERCISE_PATTERN = re.compile(
    r'\((?P<sets>\d+)[*xX]'  # Set count and separator
    r'(?P<target>[^()]+)\)'  # Objective: "8", "45s", "1min"
)


@dataclass
class ClassifiedLine:
    """A trimmed line with its kind and the parts the session parser needs"""
    kind: LineKind
    text: str
    title: Optional[str] = None
    name: Optional[str] = None
    target_sets: Optional[str] = None
    target: Optional[str] = None
    detail: Optional[str] = None


def classify_line(line: str) -> ClassifiedLine:
    """Classify one line. Title and date win over exercise definitions, which win over list items."""
    text = line.strip()

    title_match = TITLE_PATTERN.match(text)
    if title_match:
        return ClassifiedLine(LineKind.TITLE, text, title=(title_match.group(1) or "").strip())

    if DATE_PATTERN.match(text):
        return ClassifiedLine(LineKind.DATE, text)

    if SEPARATOR_PATTERN.match(text):
        return ClassifiedLine(LineKind.SEPARATOR, text)

    # Starting at 1 keeps at least one (non-blank, the line is trimmed) name character
    exercise_match = EXERCISE_PATTERN.search(text, 1)
    if exercise_match:
        detail = text[exercise_match.end():].strip()
        if detail.startswith(":"):
            detail = detail[1:].strip()
        return ClassifiedLine(
            LineKind.EXERCISE_DEF,
            text,
            name=text[:exercise_match.start()].strip(),
            target_sets=exercise_match.group("sets"),
            target=exercise_match.group("target").strip(),
            detail=detail,
        )

    if text.startswith("-"):
        return ClassifiedLine(LineKind.LIST_ITEM, text, detail=text[1:].strip())

    return ClassifiedLine(LineKind.OTHER, text)


def split_sections(content: str) -> List[List[str]]:
    """
    Split a document into session chunks of trimmed lines.

    A title line closes the current chunk and opens a new one; a separator
    closes the current chunk only. Chunks with no visible text are dropped.
    """
    sections: List[List[str]] = []
    current: List[str] = []

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if TITLE_PATTERN.match(line):
            if current:
                sections.append(current)
            current = [line]
        elif SEPARATOR_PATTERN.match(line):
            if current:
                sections.append(current)
                current = []
        else:
            current.append(line)

    if current:
        sections.append(current)

    return [section for section in sections if any(section)]
