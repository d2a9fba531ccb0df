from physiotrack.models.user import User, UserRole
from physiotrack.models.session import ExerciseSession, SessionExercise
from physiotrack.models.template import SessionTemplate, TemplateExercise
from physiotrack.models.pain_entry import PainEntry, BodyPart, Mood
from physiotrack.models.badge import EarnedBadge
from physiotrack.models.profile import UserProfile, UserCategory, AgeGroup, ActivityLevel
from physiotrack.models.recommendation import AIRecommendation
from physiotrack.models.reminder import Reminder, ReminderType
