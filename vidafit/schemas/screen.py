"""
Vista de pantalla y cuerpos de petición de la fachada HTTP local.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field

from vidafit.core.screens import AuthMode, Screen
from vidafit.schemas.nutrition import Meal, NutritionSummary, WaterProgress
from vidafit.schemas.reminder import ReminderSlot
from vidafit.schemas.subscription import PaymentMethod
from vidafit.schemas.user import UserData
from vidafit.schemas.workout import Exercise


# === Secciones de la vista ===

class AuthView(BaseModel):
    mode: AuthMode
    error: Optional[str] = None
    loading: bool = False


class OnboardingView(BaseModel):
    step: int
    total_steps: int
    title: str
    options: List[str]
    multiple: bool
    answers: dict
    can_continue: bool
    is_last_step: bool


class SubscriptionView(BaseModel):
    active: bool
    amount: float
    payment_method: Optional[PaymentMethod] = None
    show_pix_code: bool = False
    pix_code: Optional[str] = None
    pix_copied: bool = False


class NutritionView(BaseModel):
    summary: NutritionSummary
    meals: List[Meal] = Field(default_factory=list)


class WorkoutView(BaseModel):
    name: str
    exercises: List[Exercise] = Field(default_factory=list)


class RestView(BaseModel):
    resting: bool
    remaining: int
    display: str


class RemindersView(BaseModel):
    enabled: bool
    banner_visible: bool
    slots: List[ReminderSlot] = Field(default_factory=list)


class ScreenView(BaseModel):
    """Instantánea de la pantalla actual y de los datos que muestra."""
    screen: Screen
    loading: bool = False
    auth: Optional[AuthView] = None
    user: Optional[UserData] = None
    onboarding: Optional[OnboardingView] = None
    subscription: Optional[SubscriptionView] = None
    nutrition: Optional[NutritionView] = None
    water: Optional[WaterProgress] = None
    workout: Optional[WorkoutView] = None
    rest: Optional[RestView] = None
    reminders: Optional[RemindersView] = None


# === Peticiones ===

class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str
    confirm_password: str


class OnboardingOptionRequest(BaseModel):
    option: str


class PaymentMethodRequest(BaseModel):
    method: PaymentMethod


class ExerciseUpdateRequest(BaseModel):
    field: str
    value: Any = None


class RestStartRequest(BaseModel):
    seconds: int = Field(..., ge=0, le=3600)


class PixCodeResponse(BaseModel):
    pix_code: str
