"""
Services module for Vida FitPro

Lógica del cliente: autenticación, onboarding, assinatura, nutrición, hidratación,
entrenamiento, recordatorios y la máquina de pantallas que los orquesta.
"""

# servicios disponibles
from vidafit.services.nutrition import NutritionTargets, aggregate_meals, water_progress
from vidafit.services.preferences import LocalPreferences
from vidafit.services.notifications import OneSignalNotifier
from vidafit.services.auth import AuthService
from vidafit.services.onboarding import OnboardingFlow, ONBOARDING_STEPS
from vidafit.services.subscription import SubscriptionService
from vidafit.services.hydration import HydrationService
from vidafit.services.workout import WorkoutService
from vidafit.services.rest_timer import RestTimer
from vidafit.services.reminders import WaterReminderScheduler
from vidafit.services.orchestrator import ScreenStateMachine
