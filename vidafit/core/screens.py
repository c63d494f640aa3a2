"""
Pantallas del cliente y regla de enrutamiento tras la carga de sesión.
"""

from enum import Enum
from typing import Optional


class Screen(str, Enum):
    AUTH = "auth"
    ONBOARDING = "onboarding"
    SUBSCRIPTION = "subscription"
    DASHBOARD = "dashboard"
    WORKOUT = "workout"
    DIET = "diet"
    PROGRESS = "progress"
    PROFILE = "profile"


class AuthMode(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"


# Pantallas accesibles desde el dashboard (y de vuelta a él)
DASHBOARD_SCREENS = frozenset(
    {Screen.DASHBOARD, Screen.WORKOUT, Screen.DIET, Screen.PROGRESS, Screen.PROFILE}
)


def route_for(
    session_present: bool,
    goal: Optional[str],
    level: Optional[str],
    has_active_subscription: bool
) -> Screen:
    """
    Decide la pantalla inicial a partir del estado de sesión, perfil y assinatura.

    >>> route_for(True, "Força", "Avançado", False)
    <Screen.SUBSCRIPTION: 'subscription'>
    """
    if not session_present:
        return Screen.AUTH
    if not goal or not level:
        return Screen.ONBOARDING
    if not has_active_subscription:
        return Screen.SUBSCRIPTION
    return Screen.DASHBOARD
