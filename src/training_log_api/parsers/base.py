"""
Base Parser

Shared patterns and result builders for the notation parsers.
"""

import re
import logging
from typing import Optional, Union

from .models import (
    CompletionState,
    LoadValue,
    RepsResult,
    RepsTarget,
    TimeResult,
    TimeTarget,
    TimeValue,
)
from .target_parser import parse_time_expression
from training_log_api.utils import to_number

logger = logging.getLogger(__name__)


class BaseNotationParser:
    """Base class holding the notation's token patterns"""

    # Regex patterns for set descriptions
    COMMENT_PATTERN = re.compile(r"'([^']+)'")  # "'core fatigue'"
    REPEAT_WITH_STATE_PATTERN = re.compile(r'^/\s+([ABC])(\d*[a-z0-9]*)')  # "/ C7", "/ A"
    STATE_PATTERN = re.compile(r'([ABC])(\d*[a-z0-9]*)')  # "A", "C7", "C1min30s"
    STATE_LETTER_PATTERN = re.compile(r'[ABC]')
    LOAD_PATTERN = re.compile(r'(\d+(?:\.\d+)?)(?:kg)?')  # "80kg", "22.5kg", "12"
    DIGITS_PATTERN = re.compile(r'^\d+$')

    def parse_load(self, token: str, default_unit: str = "") -> Optional[LoadValue]:
        """Read the first number of a token as a load; None when the token holds no number."""
        match = self.LOAD_PATTERN.search(token)
        if not match:
            return None
        unit = "kg" if "kg" in token else default_unit
        return LoadValue(value=to_number(match.group(1)), unit=unit)

    def zero_result(
        self,
        target: Union[RepsTarget, TimeTarget],
        state: CompletionState = CompletionState.NONE,
    ) -> Union[RepsResult, TimeResult]:
        """A zero-valued result of the target's kind"""
        if isinstance(target, TimeTarget):
            return TimeResult(
                duration=TimeValue(value=0, unit=target.duration.unit or "s"),
                state=state,
            )
        return RepsResult(count=0, state=state)

    def target_result(
        self,
        target: Union[RepsTarget, TimeTarget],
        state: CompletionState,
    ) -> Union[RepsResult, TimeResult]:
        """A result that meets the objective exactly (states A and B)"""
        if isinstance(target, TimeTarget):
            return TimeResult(duration=target.duration.model_copy(), state=state)
        return RepsResult(count=target.count, state=state)

    def value_result(
        self,
        target: Union[RepsTarget, TimeTarget],
        state: CompletionState,
        value: str,
    ) -> Union[RepsResult, TimeResult]:
        """
        A result carrying an explicit completion value ("7", "55s", "1min30s").

        The value is read in the target's kind: digits are reps for a reps
        target and seconds for a time target; a time expression only counts
        against a time target. Anything else gives a zero result.
        """
        value = value.strip()

        if self.DIGITS_PATTERN.match(value):
            if isinstance(target, TimeTarget):
                return TimeResult(duration=TimeValue(value=int(value), unit="s"), state=state)
            return RepsResult(count=int(value), state=state)

        duration = parse_time_expression(value) if value else None
        if duration is not None and isinstance(target, TimeTarget):
            return TimeResult(duration=duration, state=state)

        if duration is not None:
            logger.debug(f"Time value '{value}' on a reps objective read as zero reps")

        return self.zero_result(target, state)
