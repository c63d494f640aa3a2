"""
Estado del cliente.

`AppState` es el único registro mutable de la aplicación. Lo posee la máquina de
pantallas y se divide en slices; cada colaborador recibe solo el slice que lee o
escribe.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vidafit.core.screens import AuthMode, Screen
from vidafit.schemas.nutrition import Meal, MacroProgress, NutritionSummary
from vidafit.schemas.reminder import DEFAULT_WATER_REMINDERS, ReminderSlot
from vidafit.schemas.session import Session
from vidafit.schemas.subscription import PaymentMethod
from vidafit.schemas.user import UserData
from vidafit.schemas.workout import Exercise

DEFAULT_WORKOUT_NAME = "Peito e Tríceps"


@dataclass
class AuthSlice:
    session: Optional[Session] = None
    mode: AuthMode = AuthMode.LOGIN
    error: Optional[str] = None
    loading: bool = False


@dataclass
class UserSlice:
    data: Optional[UserData] = None


@dataclass
class OnboardingSlice:
    step: int = 0
    answers: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SubscriptionSlice:
    active: bool = False
    payment_method: Optional[PaymentMethod] = None
    show_pix_code: bool = False
    pix_copied: bool = False


def empty_summary(calories: float = 0, protein: float = 0, carbs: float = 0, fat: float = 0) -> NutritionSummary:
    return NutritionSummary(
        calories=MacroProgress(consumed=0, target=calories),
        protein=MacroProgress(consumed=0, target=protein),
        carbs=MacroProgress(consumed=0, target=carbs),
        fat=MacroProgress(consumed=0, target=fat),
    )


@dataclass
class NutritionSlice:
    meals: List[Meal] = field(default_factory=list)
    summary: NutritionSummary = field(default_factory=empty_summary)


@dataclass
class WaterSlice:
    consumed: int = 0
    target: int = 8


@dataclass
class WorkoutSlice:
    workout_id: Optional[str] = None
    name: str = DEFAULT_WORKOUT_NAME
    exercises: List[Exercise] = field(default_factory=list)


@dataclass
class ReminderSlice:
    enabled: bool = False
    slots: List[ReminderSlot] = field(default_factory=lambda: list(DEFAULT_WATER_REMINDERS))
    banner_visible: bool = False
    last_fired: Optional[str] = None


@dataclass
class RestTimerSlice:
    remaining: int = 0
    resting: bool = False


@dataclass
class AppState:
    screen: Screen = Screen.AUTH
    loading: bool = True
    auth: AuthSlice = field(default_factory=AuthSlice)
    user: UserSlice = field(default_factory=UserSlice)
    onboarding: OnboardingSlice = field(default_factory=OnboardingSlice)
    subscription: SubscriptionSlice = field(default_factory=SubscriptionSlice)
    nutrition: NutritionSlice = field(default_factory=NutritionSlice)
    water: WaterSlice = field(default_factory=WaterSlice)
    workout: WorkoutSlice = field(default_factory=WorkoutSlice)
    reminders: ReminderSlice = field(default_factory=ReminderSlice)
    rest: RestTimerSlice = field(default_factory=RestTimerSlice)
