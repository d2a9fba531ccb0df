from types import SimpleNamespace

import openai

from physiotrack.models.profile import ActivityLevel, AgeGroup, UserCategory
from physiotrack.services import catalog
from physiotrack.services.recommendations import (
    FALLBACK_CONFIDENCE,
    PARSED_CONFIDENCE,
    ProfileSnapshot,
    RecommendationService,
    build_session_prompt,
    parse_improvements,
    parse_session_recommendation,
)
from physiotrack.settings import Settings

ANSWER = """Here you go.
SESSION_NAME: Knee Friendly Flow
DESCRIPTION: Low impact mobility
DURATION: about 20 minutes
EXERCISES: Knee Bend| Ankle Rotation |Hip Movements
CAUTION: Stop if the knee swells
"""

def profile(category=UserCategory.general):
    return ProfileSnapshot(
        category=category,
        age_group=AgeGroup.middle,
        activity_level=ActivityLevel.light,
        primary_complaint="knee pain",
        goal="walk without pain",
        limitations=["no jumping"],
    )

class FakeClient:
    """Quacks like openai.OpenAI for chat.completions.create."""

    def __init__(self, content=None, error=None):
        self.prompts = []
        self._content = content
        self._error = error
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.prompts.append(kwargs["messages"][0]["content"])
        if self._error is not None:
            raise self._error
        message = SimpleNamespace(content=self._content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

def service(client):
    return RecommendationService(Settings(OPENAI_API_KEY=None), client=client)

def test_parse_session_recommendation():
    rec = parse_session_recommendation(ANSWER)
    assert rec.session_name == "Knee Friendly Flow"
    assert rec.description == "Low impact mobility"
    assert rec.estimated_duration == "20 min"
    assert rec.exercises == ["Knee Bend", "Ankle Rotation", "Hip Movements"]
    assert rec.special_notes == "Stop if the knee swells"
    assert rec.confidence == PARSED_CONFIDENCE

def test_parse_without_exercises_is_none():
    assert parse_session_recommendation("SESSION_NAME: Something\nDURATION: 10") is None

def test_parse_defaults_for_missing_fields():
    rec = parse_session_recommendation("EXERCISES: Arm Raise")
    assert rec.session_name == "Custom Session"
    assert rec.estimated_duration == "25 min"

def test_parse_improvements_caps_at_five():
    text = "\n".join(f"SUGGESTION: tip {i}" for i in range(8)) + "\nnoise\nSUGGESTION:"
    assert parse_improvements(text) == [f"tip {i}" for i in range(5)]

def test_prompt_mentions_profile_and_catalog():
    prompt = build_session_prompt(profile(), 6, ["Morning"])
    assert "knee pain" in prompt
    assert "Current pain level: 6/10" in prompt
    assert "Recent sessions: Morning" in prompt
    assert catalog.CATALOG[0].name in prompt

def test_no_client_serves_category_fallback():
    svc = service(None)
    rec = svc.suggest_session(profile(UserCategory.post_surgery))
    assert rec.session_name == "Post-Surgery Recovery"
    assert rec.confidence == FALLBACK_CONFIDENCE

def test_fallback_is_a_copy():
    svc = service(None)
    svc.suggest_session(profile()).exercises.append("Mutated")
    assert "Mutated" not in svc.suggest_session(profile()).exercises

def test_client_answer_is_parsed():
    client = FakeClient(ANSWER)
    rec = service(client).suggest_session(profile(), current_pain=3)
    assert rec.session_name == "Knee Friendly Flow"
    assert "Current pain level: 3/10" in client.prompts[0]

def test_unparseable_answer_falls_back():
    rec = service(FakeClient("I cannot help with that")).suggest_session(profile(UserCategory.elderly))
    assert rec.session_name == "Gentle Mobility Session"

def test_api_error_falls_back():
    client = FakeClient(error=openai.OpenAIError("rate limited"))
    rec = service(client).suggest_session(profile(UserCategory.athlete))
    assert rec.confidence == FALLBACK_CONFIDENCE
    assert rec.session_name == "Athlete Performance Session"

def test_improvements_from_client_and_fallback():
    svc = service(FakeClient("SUGGESTION: Walk daily\nSUGGESTION: Sleep more"))
    assert svc.suggest_improvements(profile(), pain_history=[5, 4], frequent_exercises=["Arm Raise"]) == [
        "Walk daily", "Sleep more",
    ]
    fallback = service(None).suggest_improvements(profile(UserCategory.elderly), pain_history=[], frequent_exercises=[])
    assert fallback[0] == "Take short daily walks"

def test_catalog_lookup_and_duration():
    assert catalog.find(" arm raise ").key == "arm_raise"
    assert catalog.describe("Unknown") == catalog.DEFAULT_DESCRIPTION
    ex = catalog.resolve_exercise("Wall Push", "custom")
    assert ex.name == "Wall Push" and ex.description == "custom"
    assert catalog.estimated_duration(3) == "15 min"
