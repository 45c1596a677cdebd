"""
Parser Models

Pydantic models for the structured training log that the notation parser outputs.
A document parses into a list of TrainingSession trees:

    TrainingSession -> Exercise -> ExerciseSet -> Effort

Each node is owned by its parent; there are no back-references, so a session
dumps straight to JSON.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

TimeUnit = Literal["s", "min", ""]
LoadUnit = Literal["kg", ""]


class CompletionState(str, Enum):
    """How an effort went against the exercise objective"""
    NONE = ""
    A = "A"  # Objective met
    B = "B"  # Objective met, with difficulty
    C = "C"  # Partial, explicit value


class TimeValue(BaseModel):
    """A duration as written in the notation ("45s", "1min")"""
    value: Union[int, float] = 0
    unit: TimeUnit = ""

    @property
    def seconds(self) -> Union[int, float]:
        """Duration converted to seconds"""
        if self.unit == "min":
            return self.value * 60
        return self.value


class LoadValue(BaseModel):
    """A resistance ("80kg", "12")"""
    value: Union[int, float] = 0
    unit: LoadUnit = ""


class RepsTarget(BaseModel):
    kind: Literal["reps"] = "reps"
    count: int = 0


class TimeTarget(BaseModel):
    kind: Literal["time"] = "time"
    duration: TimeValue = Field(default_factory=TimeValue)


Target = Annotated[Union[RepsTarget, TimeTarget], Field(discriminator="kind")]


class RepsResult(BaseModel):
    kind: Literal["reps"] = "reps"
    count: int = 0
    state: CompletionState = CompletionState.NONE


class TimeResult(BaseModel):
    kind: Literal["time"] = "time"
    duration: TimeValue = Field(default_factory=TimeValue)
    state: CompletionState = CompletionState.NONE


EffortResult = Annotated[Union[RepsResult, TimeResult], Field(discriminator="kind")]


class Effort(BaseModel):
    """One load/result pair. Several efforts in one set make a drop set."""
    load: Optional[LoadValue] = None
    result: EffortResult
    is_repeat: bool = Field(
        default=False,
        description="Set while parsing a '/' marker; cleared by the repeat resolver",
    )


class ExerciseSet(BaseModel):
    """One performed set (one list item or one comma-separated piece)"""
    efforts: List[Effort] = Field(default_factory=list)
    comment: Optional[str] = None


class Exercise(BaseModel):
    """A named movement with its declared objective and performed sets"""
    name: str
    target_sets: int = Field(default=0, description="Declared set count, may differ from len(sets)")
    target: Target = Field(default_factory=RepsTarget)
    sets: List[ExerciseSet] = Field(default_factory=list)
    comment: Optional[str] = None


class TrainingSession(BaseModel):
    """One logged workout"""
    title: str = ""
    date: Optional[datetime] = None
    comment: Optional[str] = None
    exercises: List[Exercise] = Field(default_factory=list)
