"""
Set Parser

Turns one set description (a list item, or the inline detail of an exercise
definition) into ExerciseSets. Handles:

- quoted comments:   "C55s 'core fatigue'"
- several sets:      "45kg A, / C7, 40kg C6"
- repeat markers:    "/", "/ C7", "/ A"
- drop sets:         "80/70/60kg C8/6", "10/5kg C7/5", "80/70kg A"
- plain efforts:     "45kg A", "C1min30s", "40kg"

Repeat markers are only flagged here; resolve_repeats fills them in once the
whole exercise is parsed.
"""

import logging
from typing import List, Tuple, Union

from .base import BaseNotationParser
from .models import (
    CompletionState,
    Effort,
    ExerciseSet,
    RepsResult,
    RepsTarget,
    TimeTarget,
)

logger = logging.getLogger(__name__)


class SetParser(BaseNotationParser):
    """Parser for set descriptions of one exercise"""

    def __init__(self, target: Union[RepsTarget, TimeTarget]):
        self.target = target

    def parse(self, description: str) -> List[ExerciseSet]:
        """
        Parse a set description into zero or more sets.

        Comments are lifted out first so commas and slashes inside them are
        left alone; they end up on the last set the description produces.
        """
        description, comment = self.extract_comment(description)

        sets = []
        for piece in self.split_pieces(description):
            efforts = self.parse_efforts(piece)
            if efforts:
                sets.append(ExerciseSet(efforts=efforts))
            else:
                logger.debug(f"Set description '{piece}' produced no effort")

        if comment and sets:
            sets[-1].comment = comment

        return sets

    def extract_comment(self, description: str) -> Tuple[str, str]:
        """Remove every quoted comment, returning (remaining text, joined comments)."""
        comments = [c.strip() for c in self.COMMENT_PATTERN.findall(description)]
        if not comments:
            return description.strip(), ""
        remaining = self.COMMENT_PATTERN.sub("", description).strip()
        return remaining, "; ".join(c for c in comments if c)

    def split_pieces(self, description: str) -> List[str]:
        """
        Split on commas.

        "100kg A, /, /" (a bare '/' between commas) and "45kg A, 40kg C6" both
        read as distinct sets; drop sets never contain a comma, so a comma is
        always a set boundary. A line mixing a drop set and a bare '/' is
        therefore read as separate sets.
        """
        return [piece.strip() for piece in description.split(",") if piece.strip()]

    def parse_efforts(self, piece: str) -> List[Effort]:
        """Parse one comma-free piece: repeat marker, drop set or plain effort."""
        piece = piece.strip()
        if not piece:
            return []

        if piece == "/":
            return [Effort(load=None, result=self.zero_result(self.target), is_repeat=True)]

        repeat_match = self.REPEAT_WITH_STATE_PATTERN.match(piece)
        if repeat_match:
            state = CompletionState(repeat_match.group(1))
            return [Effort(
                load=None,
                result=self.state_result(state, repeat_match.group(2) or ""),
                is_repeat=True,
            )]

        if "/" in piece:
            return self.parse_drop_set(piece)

        return [self.parse_plain_effort(piece)]

    def state_result(self, state: CompletionState, value: str):
        """A and B meet the objective whatever follows the letter; C takes its explicit value."""
        if state in (CompletionState.A, CompletionState.B):
            return self.target_result(self.target, state)
        if state == CompletionState.C and value:
            return self.value_result(self.target, state, value)
        return self.zero_result(self.target, state)

    def parse_drop_set(self, piece: str) -> List[Effort]:
        """
        Parse a drop set such as "80/70/60kg C8/6/4" or "10/5kg C7/5".

        Resistances and completions pair up by position. On a reps objective,
        when a completion block gives fewer values than resistances, the last
        effort gets whatever reps are left of the objective. Without a
        completion block every effort is zero.
        """
        state_match = self.STATE_LETTER_PATTERN.search(piece)
        if state_match:
            resistance_part = piece[:state_match.start()]
            state = CompletionState(state_match.group(0))
            completion_part = piece[state_match.end():].strip()
        else:
            resistance_part = piece
            state = CompletionState.NONE
            completion_part = ""

        resistances = [r.strip() for r in resistance_part.split("/") if r.strip()]
        if "/" in completion_part:
            completions = [c.strip() for c in completion_part.split("/") if c.strip()]
        elif completion_part:
            completions = [completion_part]
        else:
            completions = []

        default_unit = "kg" if any("kg" in r for r in resistances) else ""

        # Only a completion block ("C8", "A") fills the last effort; bare loads stay at zero
        remaining_reps = 0
        if state_match and isinstance(self.target, RepsTarget):
            explicit = sum(int(c) for c in completions if self.DIGITS_PATTERN.match(c))
            remaining_reps = self.target.count - explicit

        efforts = []
        for i, resistance in enumerate(resistances):
            if i < len(completions):
                result = self.value_result(self.target, state, completions[i])
            elif (
                i == len(resistances) - 1
                and len(completions) < len(resistances)
                and remaining_reps > 0
            ):
                result = RepsResult(count=remaining_reps, state=state)
            else:
                result = self.zero_result(self.target, state)

            efforts.append(Effort(
                load=self.parse_load(resistance, default_unit),
                result=result,
            ))

        return efforts

    def parse_plain_effort(self, piece: str) -> Effort:
        """
        Parse a single effort: optional load plus optional state letter and value.

        "45kg A" -> 45kg, objective met; "40kg C6" -> 40kg, 6 reps;
        "C55s" -> no load, 55 seconds; "40kg" -> 40kg, zero result.
        """
        state = CompletionState.NONE
        value = ""

        state_match = self.STATE_PATTERN.search(piece)
        if state_match:
            state = CompletionState(state_match.group(1))
            value = state_match.group(2) or ""
            piece = (piece[:state_match.start()] + piece[state_match.end():]).strip()

        load = self.parse_load(piece) if piece else None
        return Effort(load=load, result=self.state_result(state, value))
