"""
Esquemas de nutrición e hidratación del día.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class Meal(BaseModel):
    """Fila de la tabla `meals`."""
    id: Optional[str] = None
    name: str
    calories: float = Field(0, ge=0)
    protein: float = Field(0, ge=0)
    carbs: float = Field(0, ge=0)
    fat: float = Field(0, ge=0)
    meal_time: Optional[str] = None
    completed: bool = False
    date: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        return None if v is None else str(v)


class MacroProgress(BaseModel):
    consumed: float = 0
    target: float = 0

    @property
    def percentage(self) -> float:
        if not self.target:
            return 0.0
        return self.consumed / self.target * 100


class NutritionSummary(BaseModel):
    """Totales del día. `consumed` siempre es la suma de las comidas."""
    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress


class WaterIntake(BaseModel):
    """Fila de la tabla `water_intake` (única por usuario y fecha)."""
    glasses: int = Field(0, ge=0)
    target: int = Field(..., gt=0)
    date: str


class WaterProgress(BaseModel):
    consumed: int
    target: int
    percentage: float
    remaining: int
