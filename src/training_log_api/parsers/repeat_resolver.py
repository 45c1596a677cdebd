"""
Repeat Resolver

Second pass over an exercise's parsed sets. A '/' marker means "same as the
previous set": each repeat effort copies the effort at the same position in
the set before it. Runs after every set of the exercise is parsed, and only
ever looks backward.
"""

import logging
from typing import Optional

from .models import (
    CompletionState,
    Effort,
    Exercise,
    RepsResult,
    TimeResult,
    TimeTarget,
    TimeValue,
)

logger = logging.getLogger(__name__)


def resolve_repeats(exercise: Exercise) -> Exercise:
    """Replace every repeat-flagged effort with concrete values. Mutates and returns the exercise."""
    for i, current_set in enumerate(exercise.sets):
        previous_set = exercise.sets[i - 1] if i > 0 else None

        for j, effort in enumerate(current_set.efforts):
            if not effort.is_repeat:
                continue

            previous: Optional[Effort] = None
            if previous_set is not None and j < len(previous_set.efforts):
                previous = previous_set.efforts[j]

            if previous is not None:
                _copy_from_previous(effort, previous)
            else:
                logger.debug(
                    f"No effort {j} in the set before set {i} of '{exercise.name}', using objective defaults"
                )
                _apply_target_default(effort, exercise)

            effort.is_repeat = False

    return exercise


def _copy_from_previous(effort: Effort, previous: Effort) -> None:
    effort.load = previous.load.model_copy() if previous.load else None

    result = effort.result
    prev_result = previous.result
    if result.kind != prev_result.kind:
        return

    if result.state == CompletionState.NONE:
        effort.result = prev_result.model_copy(deep=True)
    elif result.state == CompletionState.C and _is_zero(result):
        # An explicit "C" with no value stays at zero
        if isinstance(result, TimeResult):
            effort.result = TimeResult(
                duration=TimeValue(value=0, unit=prev_result.duration.unit),
                state=CompletionState.C,
            )
        else:
            effort.result = RepsResult(count=0, state=CompletionState.C)


def _apply_target_default(effort: Effort, exercise: Exercise) -> None:
    """
    Give an A/B repeat with no previous effort the exercise objective.

    SetParser already builds A/B repeats at the objective, so for parsed
    input this is a no-op; it covers efforts built directly from the models.
    """
    result = effort.result
    if result.state not in (CompletionState.A, CompletionState.B):
        return

    target = exercise.target
    if isinstance(target, TimeTarget) and isinstance(result, TimeResult):
        result.duration = target.duration.model_copy()
    elif not isinstance(target, TimeTarget) and isinstance(result, RepsResult):
        result.count = target.count


def _is_zero(result) -> bool:
    if isinstance(result, TimeResult):
        return result.duration.value == 0
    return result.count == 0
