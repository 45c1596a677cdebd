"""
Statistics service for aggregate views over parsed sessions.

Results are memoised in an injectable StatisticsCache keyed by the session
count, the latest session timestamp and an optional caller scope (the HTTP
layer passes a digest of the document, so different documents never share
entries). The cache belongs to whoever builds the service.
"""
import calendar
import logging
import time
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from training_log_api.models import (
    CompletionStats,
    DateRange,
    ExerciseProgress,
    StatsInterval,
    VolumeData,
)
from training_log_api.parsers.models import CompletionState, TimeResult, TrainingSession

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 30.0


class StatisticsCache:
    """In-memory cache with per-entry expiry."""

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}

    @staticmethod
    def session_key(sessions: List[TrainingSession]) -> Tuple[int, Optional[str]]:
        """Fingerprint of a session list: (count, latest timestamp)."""
        dates = [s.date for s in sessions if s.date]
        latest = max(dates).isoformat() if dates else None
        return len(sessions), latest

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Stats cache MISS: %s", key)
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            logger.debug("Stats cache EXPIRED: %s", key)
            self._entries.pop(key, None)
            return None
        logger.debug("Stats cache HIT: %s", key)
        return value

    def set(self, key: Hashable, value: Any) -> None:
        now = self._clock()
        # Drop stale entries so one-off documents do not pile up
        expired = [
            k for k, (stored_at, _) in list(self._entries.items())
            if now - stored_at >= self.ttl_seconds
        ]
        for k in expired:
            self._entries.pop(k, None)
        self._entries[key] = (now, value)

    def clear(self) -> None:
        self._entries.clear()


class StatisticsService:
    """Aggregates over parsed sessions. Never mutates its input."""

    def __init__(self, cache: Optional[StatisticsCache] = None):
        self.cache = cache

    def invalidate(self) -> None:
        """Drop every cached result."""
        if self.cache is not None:
            self.cache.clear()

    def _cached(
        self,
        name: str,
        sessions: List[TrainingSession],
        extra: Hashable,
        scope: Hashable,
        compute: Callable[[], Any],
    ):
        if self.cache is None:
            return compute()
        key = (name, scope, *StatisticsCache.session_key(sessions), extra)
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        value = compute()
        self.cache.set(key, value)
        return value

    def unique_exercises(self, sessions: List[TrainingSession], scope: Hashable = None) -> List[str]:
        """Sorted names of every exercise logged."""
        def compute():
            return sorted({e.name for s in sessions for e in s.exercises if e.name})
        return self._cached("unique_exercises", sessions, None, scope, compute)

    def exercise_progress(
        self, sessions: List[TrainingSession], exercise_name: str, scope: Hashable = None
    ) -> ExerciseProgress:
        """
        Load progression of one exercise across dated sessions.

        Per session, the first set with a positive load is taken as the
        working set and its heaviest effort is recorded.
        """
        def compute():
            progress = ExerciseProgress(exercise_name=exercise_name)
            relevant = sorted(
                (s for s in sessions if s.date and any(e.name == exercise_name for e in s.exercises)),
                key=lambda s: s.date,
            )
            for session in relevant:
                exercise = next(e for e in session.exercises if e.name == exercise_name)
                working_set = next(
                    (st for st in exercise.sets if any(ef.load and ef.load.value > 0 for ef in st.efforts)),
                    None,
                )
                if working_set is None:
                    continue
                heaviest = max(
                    (ef for ef in working_set.efforts if ef.load and ef.load.value),
                    key=lambda ef: ef.load.value,
                )
                progress.dates.append(session.date)
                progress.weights.append(heaviest.load.value)
                progress.states.append(heaviest.result.state.value)
            return progress
        return self._cached("exercise_progress", sessions, exercise_name, scope, compute)

    def completion_stats(
        self, sessions: List[TrainingSession], interval: StatsInterval = "week", scope: Hashable = None
    ) -> List[CompletionStats]:
        """Count A/B/C outcomes (first effort of each set) per week or month."""
        def compute():
            by_period: Dict[Tuple[int, int], CompletionStats] = {}
            for session in sessions:
                if not session.date:
                    continue
                date = session.date
                if interval == "week":
                    iso_year, week, _ = date.isocalendar()
                    key = (iso_year, week)
                    label = f"Week {week}, {date.year}"
                else:
                    key = (date.year, date.month)
                    label = date.strftime("%B %Y")

                stats = by_period.get(key)
                if stats is None:
                    stats = by_period[key] = CompletionStats(date=date, period=label)

                for exercise in session.exercises:
                    for exercise_set in exercise.sets:
                        if not exercise_set.efforts:
                            continue
                        state = exercise_set.efforts[0].result.state
                        if state == CompletionState.A:
                            stats.completed += 1
                        elif state == CompletionState.B:
                            stats.partial += 1
                        elif state == CompletionState.C:
                            stats.failed += 1

            return sorted(by_period.values(), key=lambda s: s.date)
        return self._cached("completion_stats", sessions, interval, scope, compute)

    def volume_by_session(self, sessions: List[TrainingSession], scope: Hashable = None) -> List[VolumeData]:
        """
        Load x reps per exercise per dated session.

        Timed efforts count as load x seconds / 10.
        """
        def compute():
            volumes = []
            for session in sessions:
                if not session.date:
                    continue
                for exercise in session.exercises:
                    volume = 0.0
                    for exercise_set in exercise.sets:
                        for effort in exercise_set.efforts:
                            weight = effort.load.value if effort.load else 0
                            result = effort.result
                            if isinstance(result, TimeResult):
                                volume += weight * (result.duration.seconds / 10)
                            else:
                                volume += weight * result.count
                    if volume > 0:
                        volumes.append(VolumeData(exercise=exercise.name, date=session.date, volume=volume))
            return volumes
        return self._cached("volume_by_session", sessions, None, scope, compute)

    @staticmethod
    def range_start(date_range: DateRange, now: datetime) -> Optional[datetime]:
        """First moment included in a named date range; None for all time."""
        if date_range == "last30days":
            return now - timedelta(days=30)
        if date_range == "last3months":
            return _months_before(now, 3)
        if date_range == "last6months":
            return _months_before(now, 6)
        if date_range == "lastyear":
            return _months_before(now, 12)
        return None

    @staticmethod
    def filter_by_range(
        sessions: List[TrainingSession], date_range: DateRange, now: datetime
    ) -> List[TrainingSession]:
        """Sessions dated inside the range. "alltime" keeps undated sessions too."""
        start = StatisticsService.range_start(date_range, now)
        if start is None:
            return list(sessions)
        return [s for s in sessions if s.date and s.date >= start]


def _months_before(moment: datetime, months: int) -> datetime:
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
