# physiotrack/services/recommendations.py
"""
Exercise-program suggestions from a hosted language model.

The model is asked to answer in a fixed line format:

    SESSION_NAME: ...
    DESCRIPTION: ...
    DURATION: <minutes>
    EXERCISES: Arm Raise|Knee Bend|...
    CAUTION: ...

Anything that goes wrong (no API key, API error, unparseable answer) falls
back to a canned program for the user's category.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

import openai

from physiotrack.models.profile import ActivityLevel, AgeGroup, UserCategory
from physiotrack.services import catalog
from physiotrack.settings import Settings, get_settings

logger = logging.getLogger(__name__)

PARSED_CONFIDENCE = 0.9
FALLBACK_CONFIDENCE = 0.7
MAX_SUGGESTIONS = 5
# widths of the session_name / exercise name and duration columns
MAX_NAME_LENGTH = 120
MAX_DURATION_LENGTH = 32


@dataclass(slots=True)
class ProfileSnapshot:
    category: UserCategory
    age_group: AgeGroup
    activity_level: ActivityLevel
    primary_complaint: str = ""
    goal: str = ""
    limitations: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Recommendation:
    session_name: str
    description: str
    exercises: list[str]
    estimated_duration: str
    special_notes: str
    confidence: float


_FALLBACKS: dict[UserCategory, Recommendation] = {
    UserCategory.athlete: Recommendation(
        "Athlete Performance Session",
        "Exercises aimed at improving athletic performance",
        ["Arm Raise", "Knee Bend", "Shoulder Roll", "Hip Movements", "Back Stretch"],
        "30 min",
        "Keep a high tempo and short rest periods",
        FALLBACK_CONFIDENCE,
    ),
    UserCategory.post_surgery: Recommendation(
        "Post-Surgery Recovery",
        "Gentle recovery exercises",
        ["Neck Stretch", "Ankle Rotation", "Lower Back Stretch"],
        "15 min",
        "Move slowly and with control, stop if you feel pain",
        FALLBACK_CONFIDENCE,
    ),
    UserCategory.elderly: Recommendation(
        "Gentle Mobility Session",
        "Safe and effective movements for older adults",
        ["Neck Stretch", "Shoulder Roll", "Ankle Rotation", "Lower Back Stretch"],
        "20 min",
        "Keep your balance and move slowly and carefully",
        FALLBACK_CONFIDENCE,
    ),
    UserCategory.general: Recommendation(
        "General Health Session",
        "A balanced program for general health",
        ["Arm Raise", "Knee Bend", "Shoulder Roll", "Back Stretch"],
        "25 min",
        "Listen to your body and avoid discomfort",
        FALLBACK_CONFIDENCE,
    ),
}

_FALLBACK_IMPROVEMENTS: dict[UserCategory, list[str]] = {
    UserCategory.athlete: [
        "Extend your warm-up before training",
        "Take your recovery days seriously",
        "Increase your hydration",
    ],
    UserCategory.post_surgery: [
        "Keep up with your doctor's check-ups",
        "Perform the exercises slowly and with control",
        "Pause whenever you feel pain",
    ],
    UserCategory.elderly: [
        "Take short daily walks",
        "Focus on balance exercises",
        "Join social activities",
    ],
    UserCategory.general: [
        "Build a regular exercise habit",
        "Learn stress management techniques",
        "Make sure you get enough sleep",
    ],
}


def fallback_recommendation(category: UserCategory) -> Recommendation:
    fb = _FALLBACKS[category]
    return Recommendation(fb.session_name, fb.description, list(fb.exercises),
                          fb.estimated_duration, fb.special_notes, fb.confidence)


def fallback_improvements(category: UserCategory) -> list[str]:
    return list(_FALLBACK_IMPROVEMENTS[category])


def build_session_prompt(profile: ProfileSnapshot, current_pain: Optional[int],
                         previous_sessions: Sequence[str]) -> str:
    lines = [
        "You are an expert physiotherapist. Suggest a personalised exercise session for this user.",
        "",
        "User profile:",
        f"- Category: {profile.category.value}",
        f"- Age group: {profile.age_group.value}",
        f"- Primary complaint: {profile.primary_complaint}",
        f"- Goal: {profile.goal}",
        f"- Activity level: {profile.activity_level.value}",
        f"- Limitations: {', '.join(profile.limitations)}",
    ]
    if current_pain is not None:
        lines.append(f"Current pain level: {current_pain}/10")
    if previous_sessions:
        lines.append(f"Recent sessions: {', '.join(previous_sessions)}")
    lines += [
        "",
        "Answer in exactly this format:",
        "SESSION_NAME: [a fitting name for the session]",
        "DESCRIPTION: [a short description]",
        "DURATION: [estimated minutes]",
        "EXERCISES: [Exercise1|Exercise2|Exercise3|Exercise4|Exercise5]",
        "CAUTION: [points to be careful about]",
        "",
        "Pick exercise names from this list: " + ", ".join(e.name for e in catalog.CATALOG),
    ]
    return "\n".join(lines)


def build_improvement_prompt(profile: ProfileSnapshot, pain_history: Sequence[int],
                             frequent_exercises: Sequence[str]) -> str:
    return "\n".join([
        "As a physiotherapist, analyse the user's pain history and exercise data.",
        "",
        f"User category: {profile.category.value}",
        f"Pain levels (last 10): {', '.join(str(p) for p in list(pain_history)[-10:])}",
        f"Most performed exercises: {', '.join(frequent_exercises)}",
        "",
        "Give 3-5 short improvement suggestions, one per line, in this format:",
        "SUGGESTION: [a concrete, actionable suggestion]",
    ])


def _after_colon(line: str) -> str:
    return line.split(":", 1)[1].strip()


def parse_session_recommendation(text: str) -> Optional[Recommendation]:
    """Line-prefix parse of the model's answer. None when no exercises were found."""
    name = "Custom Session"
    description = "Personalised exercise session"
    duration = "25"
    exercises: list[str] = []
    notes = ""

    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("SESSION_NAME:"):
            name = _after_colon(line) or name
        elif line.startswith("DESCRIPTION:"):
            description = _after_colon(line) or description
        elif line.startswith("DURATION:"):
            duration = re.sub(r"\D", "", _after_colon(line)) or duration
        elif line.startswith("EXERCISES:"):
            exercises = [e.strip() for e in _after_colon(line).split("|") if e.strip()]
        elif line.startswith("CAUTION:"):
            notes = _after_colon(line)

    if not exercises:
        return None
    return Recommendation(name, description, exercises, f"{duration} min", notes, PARSED_CONFIDENCE)


def clamp_to_columns(rec: Recommendation) -> Recommendation:
    """Model output is unbounded; cut names down to what the tables hold."""
    return Recommendation(
        rec.session_name[:MAX_NAME_LENGTH],
        rec.description,
        [name[:MAX_NAME_LENGTH] for name in rec.exercises],
        rec.estimated_duration[:MAX_DURATION_LENGTH],
        rec.special_notes,
        rec.confidence,
    )


def parse_improvements(text: str) -> list[str]:
    out = [_after_colon(l.strip()) for l in text.splitlines() if l.strip().startswith("SUGGESTION:")]
    return [s for s in out if s][:MAX_SUGGESTIONS]


class RecommendationService:
    def __init__(self, settings: Optional[Settings] = None, client=None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self):
        if self._client is None and self.settings.OPENAI_API_KEY:
            self._client = openai.OpenAI(api_key=self.settings.OPENAI_API_KEY,
                                         timeout=self.settings.OPENAI_TIMEOUT)
        return self._client

    def _complete(self, prompt: str) -> Optional[str]:
        if self.client is None:
            logger.info("no OpenAI client configured, serving fallback")
            return None
        try:
            response = self.client.chat.completions.create(
                model=self.settings.OPENAI_MODEL,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.7,
            )
        except openai.OpenAIError as e:
            logger.warning("OpenAI request failed: %s", e)
            return None
        return response.choices[0].message.content or ""

    def suggest_session(self, profile: ProfileSnapshot, *, current_pain: Optional[int] = None,
                        previous_sessions: Sequence[str] = ()) -> Recommendation:
        text = self._complete(build_session_prompt(profile, current_pain, previous_sessions))
        if text is not None:
            parsed = parse_session_recommendation(text)
            if parsed is not None:
                return parsed
            logger.warning("could not parse recommendation, serving fallback")
        return fallback_recommendation(profile.category)

    def suggest_improvements(self, profile: ProfileSnapshot, *, pain_history: Sequence[int],
                             frequent_exercises: Sequence[str]) -> list[str]:
        text = self._complete(build_improvement_prompt(profile, pain_history, frequent_exercises))
        suggestions = parse_improvements(text) if text else []
        return suggestions or fallback_improvements(profile.category)
