"""Data models for statistics and editor suggestions built on parsed sessions."""
from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, Field

StatsInterval = Literal["week", "month"]
DateRange = Literal["last30days", "last3months", "last6months", "lastyear", "alltime"]


class ExerciseProgress(BaseModel):
    """Heaviest working load of an exercise over time."""
    exercise_name: str
    dates: List[datetime] = Field(default_factory=list)
    weights: List[float] = Field(default_factory=list)
    states: List[str] = Field(default_factory=list)


class CompletionStats(BaseModel):
    """Set outcomes counted over one week or month."""
    date: datetime
    period: str  # "Week 8, 2025", "February 2025"
    completed: int = 0  # A
    partial: int = 0  # B
    failed: int = 0  # C


class VolumeData(BaseModel):
    """Training volume (load x reps) of one exercise in one session."""
    exercise: str
    date: datetime
    volume: float


class Suggestion(BaseModel):
    """A completion option offered to the log editor."""
    label: str
    detail: str = ""
    apply: str
