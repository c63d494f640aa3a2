"""
Esquemas de perfil y cuenta de usuario.

El cliente lee dos filas remotas (`profiles` y `users`) y las combina en una
única vista (`UserData`).
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class Profile(BaseModel):
    """Fila de la tabla `profiles`."""
    id: str
    name: Optional[str] = ""

    @field_validator("name", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or ""


class Account(BaseModel):
    """Fila de la tabla `users` (datos del onboarding y métricas)."""
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    goal: Optional[str] = None
    level: Optional[str] = None
    days_per_week: Optional[int] = Field(None, ge=0, le=7)
    session_time: Optional[int] = Field(None, ge=0)
    equipment: Optional[List[str]] = None
    weight: Optional[float] = Field(None, ge=0)
    target_weight: Optional[float] = Field(None, ge=0)
    streak: Optional[int] = Field(0, ge=0)


class UserData(BaseModel):
    """Vista combinada de perfil + cuenta que consumen las pantallas."""
    id: str
    name: str = ""
    email: str = ""
    goal: Optional[str] = None
    level: Optional[str] = None
    days_per_week: Optional[int] = None
    session_time: Optional[int] = None
    equipment: List[str] = Field(default_factory=list)
    weight: Optional[float] = None
    target_weight: Optional[float] = None
    streak: int = 0

    @property
    def onboarding_complete(self) -> bool:
        return bool(self.goal) and bool(self.level)

    @classmethod
    def merge(cls, user_id: str, email: str, profile: Profile, account: Optional[Account]) -> "UserData":
        """Combina perfil y cuenta. Una cuenta ausente deja sus campos vacíos."""
        return cls(
            id=user_id,
            name=profile.name or "",
            email=email or "",
            goal=account.goal if account else None,
            level=account.level if account else None,
            days_per_week=account.days_per_week if account else None,
            session_time=account.session_time if account else None,
            equipment=(account.equipment or []) if account else [],
            weight=account.weight if account else None,
            target_weight=account.target_weight if account else None,
            streak=(account.streak or 0) if account else 0,
        )


class OnboardingAnswers(BaseModel):
    """Respuestas del cuestionario, tal como se guardan en `users`."""
    goal: str = Field(..., min_length=1)
    level: str = Field(..., min_length=1)
    days_per_week: int = Field(..., ge=1, le=7)
    session_time: int = Field(..., gt=0)
    equipment: List[str] = Field(..., min_length=1)
