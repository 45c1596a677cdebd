"""Suggestion service feeding autocompletion in the log editor."""
import logging
from datetime import datetime
from typing import Dict, List

from training_log_api.models import Suggestion
from training_log_api.parsers.log_parser import parse_content
from training_log_api.parsers.models import Exercise
from training_log_api.services.export_service import ExportService

logger = logging.getLogger(__name__)


class SuggestionService:
    """Builds completion options from the document being edited."""

    @staticmethod
    def unique_exercises(content: str) -> List[Exercise]:
        """
        Exercises of the document by name, in first-seen order.

        Each name maps to its most recent occurrence so the suggested
        objective follows what was logged last.
        """
        exercises: Dict[str, Exercise] = {}
        for session in parse_content(content):
            for exercise in session.exercises:
                exercises[exercise.name] = exercise
        return list(exercises.values())

    @staticmethod
    def exercise_suggestions(content: str) -> List[Suggestion]:
        """Suggest "Name (4x8):" definition lines for every exercise already logged."""
        suggestions = []
        for exercise in SuggestionService.unique_exercises(content):
            objective = f"{exercise.target_sets}x{ExportService.render_target(exercise)}"
            suggestions.append(Suggestion(
                label=exercise.name,
                detail=objective,
                apply=f"{exercise.name} ({objective}):",
            ))
        logger.debug(f"Built {len(suggestions)} exercise suggestions")
        return suggestions

    @staticmethod
    def title_suggestions(content: str) -> List[Suggestion]:
        """Suggest "# Title" lines from earlier sessions, most recent last."""
        titles: Dict[str, None] = {}
        for session in parse_content(content):
            if session.title:
                titles.pop(session.title, None)
                titles[session.title] = None
        return [Suggestion(label=title, apply=f"# {title}") for title in titles]

    @staticmethod
    def date_suggestions(now: datetime) -> List[Suggestion]:
        """Date stamps for the caller's current moment."""
        return [
            Suggestion(label="@Date", detail="Today's date", apply=now.strftime("%d/%m/%Y")),
            Suggestion(label="@Datetime", detail="Date and time", apply=now.strftime("%d/%m/%Y %H:%M")),
        ]
