from vidafit.schemas.session import Session, SessionEvent
from vidafit.schemas.user import Profile, Account, UserData, OnboardingAnswers
from vidafit.schemas.subscription import Subscription, SubscriptionStatus, PaymentMethod
from vidafit.schemas.workout import Exercise, Workout, EDITABLE_EXERCISE_FIELDS
from vidafit.schemas.nutrition import (
    Meal,
    MacroProgress,
    NutritionSummary,
    WaterIntake,
    WaterProgress
)
from vidafit.schemas.reminder import ReminderSlot, DEFAULT_WATER_REMINDERS
