"""
Log Parser

Parses a plain text training log into TrainingSession objects:

    # Push Day
    20/02/2025 18:30
    Bench Press (4x8): 45kg A, / C7, 40kg C6, 35kg A
    Cable Flyes (3x12):
    - 10/5kg C7/5
    - / B

The parser is lenient: unrecognised lines are dropped, malformed
numbers read as 0 and nothing is ever raised to the caller. Every call works
on its own local state, so it is safe to call on each edit of a document.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from .line_classifier import (
    DATE_PATTERN,
    ClassifiedLine,
    LineKind,
    classify_line,
    split_sections,
)
from .models import Exercise, TrainingSession
from .repeat_resolver import resolve_repeats
from .set_parser import SetParser
from .target_parser import parse_target
from training_log_api.utils import to_int

logger = logging.getLogger(__name__)


class LogParser:
    """Parser for training log documents"""

    def parse(self, content: str) -> List[TrainingSession]:
        """Parse a full document. Always returns a list, empty for empty input."""
        if not content:
            return []

        sessions = []
        for index, section in enumerate(split_sections(content)):
            try:
                sessions.append(self.parse_session(section))
            except Exception as e:
                logger.exception(f"Failed to parse session chunk {index}: {e}")

        return sessions

    def parse_session(self, lines: List[str]) -> TrainingSession:
        """Parse one session chunk (a list of trimmed lines)."""
        classified = [classify_line(line) for line in lines]
        title, date, body = self.extract_header(classified)

        session = TrainingSession(title=title, date=date)

        current: Optional[Exercise] = None
        pending_items: List[str] = []

        for line in body:
            if line.kind == LineKind.EXERCISE_DEF:
                if current is not None:
                    self._flush_list_items(current, pending_items)
                pending_items = []

                current = Exercise(
                    name=line.name,
                    target_sets=to_int(line.target_sets),
                    target=parse_target(line.target),
                )
                session.exercises.append(current)

                if line.detail:
                    current.sets.extend(SetParser(current.target).parse(line.detail))
                continue

            if line.kind == LineKind.LIST_ITEM and current is not None:
                pending_items.append(line.detail)
                continue

            if line.text:
                logger.debug(f"Ignoring line: {line.text!r}")

        if current is not None:
            self._flush_list_items(current, pending_items)

        for exercise in session.exercises:
            resolve_repeats(exercise)

        return session

    def extract_header(
        self, lines: List[ClassifiedLine]
    ) -> Tuple[str, Optional[datetime], List[ClassifiedLine]]:
        """
        Pull the title and date out of a chunk.

        Returns:
            Tuple of (title, date, remaining lines). The title is "" when absent
            and the date None when absent or not a real calendar date.
        """
        title_line = next((l for l in lines if l.kind == LineKind.TITLE), None)
        date_line = next((l for l in lines if l.kind == LineKind.DATE), None)

        title = title_line.title if title_line else ""
        date = self.parse_date(date_line.text) if date_line else None

        remaining = [l for l in lines if l.kind not in (LineKind.TITLE, LineKind.DATE)]
        return title, date, remaining

    def parse_date(self, text: str) -> Optional[datetime]:
        """Parse "DD/MM/YYYY" or "DD/MM/YYYY HH:MM"; None when the values do not form a date."""
        match = DATE_PATTERN.match(text.strip())
        if not match:
            return None

        day, month, year, hours, minutes = match.groups()
        try:
            return datetime(
                int(year),
                int(month),
                int(day),
                int(hours) if hours else 0,
                int(minutes) if minutes else 0,
            )
        except ValueError:
            logger.debug(f"Invalid date line: {text!r}")
            return None

    def _flush_list_items(self, exercise: Exercise, items: List[str]) -> None:
        parser = SetParser(exercise.target)
        for item in items:
            exercise.sets.extend(parser.parse(item))


def parse_content(content: str) -> List[TrainingSession]:
    """Parse a training log document into sessions."""
    return LogParser().parse(content)
