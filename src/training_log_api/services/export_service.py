"""Export service for rendering parsed sessions as notation, CSV or JSON."""
import csv
import io
import json
from typing import List, Optional

from training_log_api.parsers.models import (
    CompletionState,
    Effort,
    Exercise,
    ExerciseSet,
    LoadValue,
    TimeResult,
    TimeTarget,
    TimeValue,
    TrainingSession,
)
from training_log_api.utils import format_number

CSV_HEADER = ["Date", "Exercise", "Set", "Weight", "Reps", "Time", "Status", "Comment"]

# Stands in for an effort with neither load nor result; parses back to a loadless zero effort
EMPTY_EFFORT = "_"


class ExportService:
    """Service for exporting training sessions to various formats."""

    @staticmethod
    def render_notation(sessions: List[TrainingSession]) -> str:
        """
        Render sessions back to canonical log notation.

        Parsing the output gives the same titles, dates, exercises, targets,
        loads and states. Repeat markers come out as the concrete values they
        resolved to.

        Args:
            sessions: Sessions to render

        Returns:
            Notation text, sessions separated by a blank line
        """
        blocks = [ExportService.render_session(session) for session in sessions]
        return "\n\n".join(blocks) + ("\n" if blocks else "")

    @staticmethod
    def render_session(session: TrainingSession) -> str:
        lines = [f"# {session.title}".rstrip()]
        if session.date:
            lines.append(ExportService.format_date(session))
        for exercise in session.exercises:
            lines.append(f"{exercise.name} ({exercise.target_sets}x{ExportService.render_target(exercise)})")
            for exercise_set in exercise.sets:
                lines.append(f"- {ExportService.render_set(exercise_set)}".rstrip())
        return "\n".join(lines)

    @staticmethod
    def format_date(session: TrainingSession) -> str:
        date = session.date
        text = date.strftime("%d/%m/%Y")
        if date.hour or date.minute:
            text += date.strftime(" %H:%M")
        return text

    @staticmethod
    def render_target(exercise: Exercise) -> str:
        target = exercise.target
        if isinstance(target, TimeTarget):
            return ExportService.render_time(target.duration)
        return str(target.count)

    @staticmethod
    def render_time(duration: TimeValue) -> str:
        return f"{format_number(duration.value)}{duration.unit or 's'}"

    @staticmethod
    def render_load(load: Optional[LoadValue]) -> str:
        if load is None:
            return ""
        return f"{format_number(load.value)}{load.unit}"

    @staticmethod
    def render_value(effort: Effort) -> str:
        result = effort.result
        if isinstance(result, TimeResult):
            if result.duration.value == 0:
                return ""
            return ExportService.render_time(result.duration)
        return str(result.count) if result.count else ""

    @staticmethod
    def render_set(exercise_set: ExerciseSet) -> str:
        efforts = exercise_set.efforts
        if len(efforts) == 1:
            text = ExportService._render_single(efforts[0])
        else:
            text = ExportService._render_drop_set(efforts)

        if exercise_set.comment:
            text = f"{text} '{exercise_set.comment}'"
        return text

    @staticmethod
    def _render_single(effort: Effort) -> str:
        state = effort.result.state
        parts = []
        load = ExportService.render_load(effort.load)
        if load:
            parts.append(load)
        if state in (CompletionState.A, CompletionState.B):
            parts.append(state.value)
        elif state == CompletionState.C:
            parts.append(f"C{ExportService.render_value(effort)}")
        return " ".join(parts) or EMPTY_EFFORT

    @staticmethod
    def _render_drop_set(efforts: List[Effort]) -> str:
        loads = "/".join(ExportService.render_load(e.load) or EMPTY_EFFORT for e in efforts)
        state = efforts[0].result.state
        if state == CompletionState.NONE:
            return loads
        values = [ExportService.render_value(e) or "0" for e in efforts]
        return f"{loads} {state.value}{'/'.join(values)}"

    @staticmethod
    def render_csv(sessions: List[TrainingSession]) -> str:
        """
        Render one CSV row per effort of every dated session.

        Returns:
            CSV text with header Date,Exercise,Set,Weight,Reps,Time,Status,Comment
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)

        for session in sessions:
            if not session.date:
                continue
            session_date = session.date.strftime("%Y-%m-%d")

            for exercise in session.exercises:
                for index, exercise_set in enumerate(exercise.sets, 1):
                    for effort in exercise_set.efforts:
                        result = effort.result
                        if isinstance(result, TimeResult):
                            reps, time = "", format_number(result.duration.seconds)
                        else:
                            reps, time = str(result.count), ""
                        writer.writerow([
                            session_date,
                            exercise.name,
                            str(index),
                            format_number(effort.load.value) if effort.load and effort.load.value else "",
                            reps,
                            time,
                            result.state.value,
                            exercise_set.comment or "",
                        ])

        return buffer.getvalue()

    @staticmethod
    def render_json(sessions: List[TrainingSession]) -> str:
        """Render sessions as indented JSON."""
        return json.dumps([s.model_dump(mode="json") for s in sessions], indent=2)
