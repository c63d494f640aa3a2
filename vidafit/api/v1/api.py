from fastapi import APIRouter

# Import routers from modules
from vidafit.api.v1.endpoints.state import router as state_router
from vidafit.api.v1.endpoints.auth import router as auth_router
from vidafit.api.v1.endpoints.onboarding import router as onboarding_router
from vidafit.api.v1.endpoints.subscription import router as subscription_router
from vidafit.api.v1.endpoints.navigation import router as navigation_router
from vidafit.api.v1.endpoints.dashboard import router as dashboard_router
from vidafit.api.v1.endpoints.workout import router as workout_router

api_router = APIRouter()

# Screen view
api_router.include_router(state_router, tags=["state"])

# Authentication module
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])

# Onboarding questionnaire
api_router.include_router(onboarding_router, prefix="/onboarding", tags=["onboarding"])

# Subscription / payment
api_router.include_router(subscription_router, prefix="/subscription", tags=["subscription"])

# Lateral navigation
api_router.include_router(navigation_router, prefix="/navigation", tags=["navigation"])

# Water and reminders
api_router.include_router(dashboard_router, tags=["dashboard"])

# Workout screen
api_router.include_router(workout_router, prefix="/workout", tags=["workout"])
