# physiotrack/services/catalog.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from physiotrack.services.session_controller import Exercise

DEFAULT_DESCRIPTION = "Perform this exercise with good form and remember to keep breathing."
MINUTES_PER_EXERCISE = 5

@dataclass(frozen=True, slots=True)
class CatalogEntry:
    key: str
    name: str
    description: str
    instruction: str

CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("arm_raise", "Arm Raise", "Raise the arms out to the sides",
                 "Slowly raise your arms out to the sides up to shoulder height, then lower them with control."),
    CatalogEntry("knee_bend", "Knee Bend", "Bend the knees to build flexibility",
                 "Standing, bend your knee slowly and bring your heel towards your hip."),
    CatalogEntry("shoulder_roll", "Shoulder Roll", "Roll the shoulders",
                 "Roll your shoulders slowly forwards and backwards. Keep breathing deeply."),
    CatalogEntry("neck_stretch", "Neck Stretch", "Stretch the neck muscles",
                 "Turn your head slowly to the right and to the left. Stretch without forcing."),
    CatalogEntry("lower_back_stretch", "Lower Back Stretch", "Relax the lower back muscles",
                 "Standing, place your hands on your lower back and lean back slowly."),
    CatalogEntry("ankle_rotation", "Ankle Rotation", "Ankle mobility exercise",
                 "Rotate your ankle slowly clockwise, then counter-clockwise."),
    CatalogEntry("back_stretch", "Back Stretch", "Stretch the back muscles",
                 "Reach your arms forward and stretch your back muscles."),
    CatalogEntry("hip_movements", "Hip Movements", "Movements for hip flexibility",
                 "Move your hips slowly forwards and backwards."),
)

_BY_NAME = {e.name.lower(): e for e in CATALOG}

def find(name: str) -> Optional[CatalogEntry]:
    return _BY_NAME.get(name.strip().lower())

def describe(name: str) -> str:
    entry = find(name)
    return entry.description if entry else DEFAULT_DESCRIPTION

def instruction_for(name: str) -> str:
    entry = find(name)
    return entry.instruction if entry else DEFAULT_DESCRIPTION

def resolve_exercise(name: str, fallback_description: str = "") -> Exercise:
    """Catalog exercise when the name is known, otherwise an ad hoc one."""
    entry = find(name)
    if entry:
        return Exercise(name=entry.name, description=entry.description)
    return Exercise(name=name.strip(), description=fallback_description)

def estimated_duration(exercise_count: int) -> str:
    return f"{exercise_count * MINUTES_PER_EXERCISE} min"
