"""
Target Parser

Reads the objective written inside an exercise definition, e.g. the "8" of
"Bench Press (4x8)" or the "1min" of "Plank (4*1min)".
"""

import re
from typing import Optional, Union

from training_log_api.parsers.models import RepsTarget, TimeTarget, TimeValue
from training_log_api.utils import to_int

TIME_TARGET_PATTERN = re.compile(r'^(\d+)(min|s)$')  # "45s", "1min"
TIME_EXPRESSION_PATTERN = re.compile(r'(\d+)(min|s)(\d+)?(s)?')  # "1min30s", "45s", "2min"


def parse_target(target_str: str) -> Union[RepsTarget, TimeTarget]:
    """
    Parse a target string into a RepsTarget or TimeTarget.

    Non-numeric input gives a reps target of 0 rather than an error.
    """
    target_str = target_str.strip()

    time_match = TIME_TARGET_PATTERN.match(target_str)
    if time_match:
        return TimeTarget(
            duration=TimeValue(value=int(time_match.group(1)), unit=time_match.group(2))
        )

    return RepsTarget(count=to_int(target_str))


def parse_time_expression(text: str) -> Optional[TimeValue]:
    """
    Read a completion time like "1min30s", "45s" or "2min" as seconds.

    Returns None when the text holds no time expression.
    """
    match = TIME_EXPRESSION_PATTERN.search(text)
    if not match:
        return None

    amount, unit, extra_seconds, _ = match.groups()
    minutes = int(amount) if unit == "min" else 0
    if extra_seconds:
        seconds = int(extra_seconds)
    else:
        seconds = int(amount) if unit == "s" else 0

    return TimeValue(value=minutes * 60 + seconds, unit="s")
