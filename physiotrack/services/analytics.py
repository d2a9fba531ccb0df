# physiotrack/services/analytics.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Optional, Sequence

from physiotrack.services.session_controller import Session

TOP_EXERCISES = 5


@dataclass(frozen=True, slots=True)
class PainPoint:
    at: datetime
    level: int


@dataclass(slots=True)
class DailyProgress:
    sessions_completed: int
    session_target: int
    points_earned: int
    point_target: int

    @property
    def session_progress(self) -> float:
        return self.sessions_completed / self.session_target if self.session_target > 0 else 0.0

    @property
    def point_progress(self) -> float:
        return self.points_earned / self.point_target if self.point_target > 0 else 0.0


@dataclass(slots=True)
class WeeklyProgress:
    week_start: datetime
    sessions_completed: int
    points_earned: int
    avg_pain_level: float


@dataclass(slots=True)
class ProgressReport:
    start: datetime
    end: datetime
    total_sessions: int
    total_points: int
    avg_pain_level: float
    most_frequent_exercises: list[str]
    streak_days: int
    weekly: list[WeeklyProgress] = field(default_factory=list)


def as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)


def week_start(dt: datetime) -> datetime:
    """Monday 00:00 of the week containing ``dt``."""
    d = as_utc(dt).date()
    monday = d - timedelta(days=d.weekday())
    return datetime.combine(monday, time.min, tzinfo=timezone.utc)


def _avg(levels: Sequence[int]) -> float:
    return sum(levels) / len(levels) if levels else 0.0


def _in(dt: datetime, start: datetime, end: datetime, *, inclusive_end: bool = True) -> bool:
    dt = as_utc(dt)
    return start <= dt <= end if inclusive_end else start <= dt < end


def daily_progress(
    sessions: Iterable[Session],
    *,
    session_target: int,
    point_target: int,
    today: Optional[datetime] = None,
) -> DailyProgress:
    day = as_utc(today or datetime.now(timezone.utc)).date()
    todays = [s for s in sessions if as_utc(s.start_date).date() == day]
    return DailyProgress(
        sessions_completed=len(todays),
        session_target=session_target,
        points_earned=sum(s.points_earned for s in todays),
        point_target=point_target,
    )


def weekly_progress(
    sessions: Iterable[Session],
    pain: Iterable[PainPoint],
    *,
    today: Optional[datetime] = None,
) -> WeeklyProgress:
    now = as_utc(today or datetime.now(timezone.utc))
    start = week_start(now)
    week = [s for s in sessions if _in(s.start_date, start, now)]
    levels = [p.level for p in pain if as_utc(p.at) >= start]
    return WeeklyProgress(
        week_start=start,
        sessions_completed=len(week),
        points_earned=sum(s.points_earned for s in week),
        avg_pain_level=_avg(levels),
    )


def weekly_breakdown(
    sessions: Sequence[Session],
    pain: Sequence[PainPoint],
    start: datetime,
    end: datetime,
) -> list[WeeklyProgress]:
    weeks: list[WeeklyProgress] = []
    cursor = week_start(start)
    end = as_utc(end)
    while cursor <= end:
        nxt = cursor + timedelta(days=7)
        in_week = [s for s in sessions if _in(s.start_date, cursor, nxt, inclusive_end=False)]
        levels = [p.level for p in pain if _in(p.at, cursor, nxt, inclusive_end=False)]
        weeks.append(WeeklyProgress(
            week_start=cursor,
            sessions_completed=len(in_week),
            points_earned=sum(s.points_earned for s in in_week),
            avg_pain_level=_avg(levels),
        ))
        cursor = nxt
    return weeks


def current_streak(session_days: Iterable[datetime], *, today: Optional[datetime] = None) -> int:
    """
    Consecutive days with at least one session, counted back from today.
    A streak that ended yesterday still counts until today is over.
    """
    days: set[date] = {as_utc(d).date() for d in session_days}
    if not days:
        return 0
    day = as_utc(today or datetime.now(timezone.utc)).date()
    if day not in days:
        day -= timedelta(days=1)
    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def progress_report(
    sessions: Sequence[Session],
    pain: Sequence[PainPoint],
    start: datetime,
    end: datetime,
    *,
    today: Optional[datetime] = None,
) -> ProgressReport:
    start, end = as_utc(start), as_utc(end)
    period = [s for s in sessions if _in(s.start_date, start, end)]
    period_pain = [p.level for p in pain if _in(p.at, start, end)]
    freq = Counter(e.name for s in period for e in s.exercises)

    return ProgressReport(
        start=start,
        end=end,
        total_sessions=len(period),
        total_points=sum(s.points_earned for s in period),
        avg_pain_level=_avg(period_pain),
        most_frequent_exercises=[name for name, _ in freq.most_common(TOP_EXERCISES)],
        streak_days=current_streak((s.start_date for s in sessions), today=today),
        weekly=weekly_breakdown(period, [p for p in pain if _in(p.at, start, end)], start, end),
    )
