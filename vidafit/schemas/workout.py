"""
Esquemas del entrenamiento del día.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class Exercise(BaseModel):
    """Ejercicio editable durante la sesión de entrenamiento."""
    id: Optional[str] = None  # None si aún no se ha persistido
    name: str
    sets: int = Field(0, ge=0)
    reps: str = ""
    weight: float = Field(0, ge=0)
    rest: int = Field(0, ge=0, description="Descanso en segundos")
    completed: bool = False
    rpe: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = None
    order_index: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        # las tablas con clave bigint devuelven ids numéricos
        return None if v is None else str(v)

    @field_validator("weight", "rest", "order_index", mode="before")
    @classmethod
    def none_to_zero(cls, v):
        return 0 if v is None else v

    @field_validator("reps", mode="before")
    @classmethod
    def reps_as_text(cls, v):
        # reps es texto libre ("8-12", "até a falha"), aunque llegue como número
        return "" if v is None else str(v)


# Campos que el usuario puede editar desde la pantalla de entrenamiento
EDITABLE_EXERCISE_FIELDS = frozenset(
    {"name", "sets", "reps", "weight", "rest", "completed", "rpe", "notes"}
)


class Workout(BaseModel):
    id: Optional[str] = None
    name: str
    exercises: List[Exercise] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        return None if v is None else str(v)
