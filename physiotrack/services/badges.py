# physiotrack/services/badges.py
"""Milestone badges: a static table checked against a user's running statistics."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable


class BadgeCategory(str, Enum):
    sessions = "sessions"
    consistency = "consistency"
    points = "points"
    special = "special"


@dataclass(frozen=True, slots=True)
class BadgeDefinition:
    id: str
    name: str
    description: str
    icon: str
    category: BadgeCategory


@dataclass(slots=True)
class UserStats:
    total_sessions: int = 0
    total_points: int = 0
    streak_days: int = 0
    pain_levels: list[int] = field(default_factory=list)
    exercise_names: list[str] = field(default_factory=list)


SESSION_MILESTONES = {
    1: ("first_session", "First Step"),
    5: ("five_sessions", "Getting Started"),
    10: ("ten_sessions", "Committed"),
    25: ("twentyfive_sessions", "Determined"),
    50: ("fifty_sessions", "Expert"),
    100: ("hundred_sessions", "Master"),
    250: ("twofifty_sessions", "Legend"),
    500: ("fivehundred_sessions", "Hero"),
}

STREAK_MILESTONES = {
    3: ("streak_3", "Three in a Row"),
    7: ("streak_7", "One Steady Week"),
    14: ("streak_14", "Two Disciplined Weeks"),
    30: ("streak_30", "One Committed Month"),
    60: ("streak_60", "Two Determined Months"),
    100: ("streak_100", "Hundred Day Hero"),
}

POINT_MILESTONES = {
    50: ("points_50", "Scoring Starter"),
    100: ("points_100", "Hundred Club"),
    250: ("points_250", "Point Hunter"),
    500: ("points_500", "Point Master"),
    1000: ("points_1000", "Thousand Club"),
    2500: ("points_2500", "Point Legend"),
}

PAIN_TRACKER_ENTRIES = 10
LOW_PAIN_LEVEL = 3
LOW_PAIN_ENTRIES = 20
VARIETY_EXERCISES = 15
WEEKEND_WARRIOR_SESSIONS = 20


def _milestone_badges(table, category, icon_prefix, describe) -> list[tuple[int, BadgeDefinition]]:
    return [
        (threshold, BadgeDefinition(badge_id, name, describe(threshold), f"{icon_prefix}_{threshold}", category))
        for threshold, (badge_id, name) in table.items()
    ]


_SESSION_BADGES = _milestone_badges(SESSION_MILESTONES, BadgeCategory.sessions, "sessions",
                                    lambda n: f"You completed {n} sessions!")
_STREAK_BADGES = _milestone_badges(STREAK_MILESTONES, BadgeCategory.consistency, "streak",
                                   lambda n: f"You exercised {n} days in a row!")
_POINT_BADGES = _milestone_badges(POINT_MILESTONES, BadgeCategory.points, "points",
                                  lambda n: f"You earned {n} points!")

_SPECIAL_BADGES: list[tuple[BadgeDefinition, Callable[[UserStats], bool]]] = [
    (BadgeDefinition("pain_tracker", "Pain Tracker",
                     f"You logged your pain level {PAIN_TRACKER_ENTRIES} times",
                     "pain_tracker", BadgeCategory.special),
     lambda s: len(s.pain_levels) >= PAIN_TRACKER_ENTRIES),
    (BadgeDefinition("low_pain_hero", "Pain Management Expert",
                     f"You reached a low pain level {LOW_PAIN_ENTRIES} times",
                     "low_pain_hero", BadgeCategory.special),
     lambda s: sum(1 for p in s.pain_levels if p <= LOW_PAIN_LEVEL) >= LOW_PAIN_ENTRIES),
    (BadgeDefinition("exercise_variety", "Variety Expert",
                     f"You tried {VARIETY_EXERCISES} different exercises",
                     "exercise_variety", BadgeCategory.special),
     lambda s: len({n.strip().lower() for n in s.exercise_names}) >= VARIETY_EXERCISES),
    (BadgeDefinition("weekend_warrior", "Weekend Warrior",
                     "You keep exercising, weekends included",
                     "weekend_warrior", BadgeCategory.special),
     lambda s: s.total_sessions >= WEEKEND_WARRIOR_SESSIONS),
]

ALL_BADGES: tuple[BadgeDefinition, ...] = tuple(
    [b for _, b in _SESSION_BADGES]
    + [b for _, b in _STREAK_BADGES]
    + [b for _, b in _POINT_BADGES]
    + [b for b, _ in _SPECIAL_BADGES]
)
BADGES_BY_ID = {b.id: b for b in ALL_BADGES}


def check_new_badges(stats: UserStats, earned_ids: Iterable[str]) -> list[BadgeDefinition]:
    """Badges whose threshold is met and that the user does not hold yet, in catalog order."""
    earned = set(earned_ids)
    new: list[BadgeDefinition] = []

    for value, table in (
        (stats.total_sessions, _SESSION_BADGES),
        (stats.streak_days, _STREAK_BADGES),
        (stats.total_points, _POINT_BADGES),
    ):
        new.extend(b for threshold, b in table if value >= threshold and b.id not in earned)

    new.extend(b for b, rule in _SPECIAL_BADGES if b.id not in earned and rule(stats))
    return new


ICONS = {
    "session": "🏆",
    "streak": "🔥",
    "points": "⭐",
    "pain": "💚",
    "variety": "🌈",
    "weekend": "⚡",
}


def icon_for(icon_name: str) -> str:
    for needle, glyph in ICONS.items():
        if needle in icon_name:
            return glyph
    return "🎖️"
