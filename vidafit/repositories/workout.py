"""
Repositorio del entrenamiento del día y sus ejercicios.
"""
from typing import Any, Optional
import logging

from vidafit.core.exceptions import GatewayError, LoadError
from vidafit.db.gateway import Gateway, Record
from vidafit.repositories.base import GatewayRepository
from vidafit.schemas.workout import Exercise, Workout

logger = logging.getLogger(__name__)


class WorkoutRepository(GatewayRepository[Workout]):

    def __init__(self):
        super().__init__(Workout, "workouts")

    async def get_current(self, gateway: Gateway, user_id: str) -> Optional[Workout]:
        """
        Último entrenamiento no completado del usuario, con ejercicios ordenados
        por `order_index`.
        """
        try:
            rows = await gateway.read_many(
                self.table,
                {"user_id": user_id, "completed": False},
                order_by="created_at",
                descending=True,
                limit=1,
                columns="*, exercises(*)",
            )
        except GatewayError as e:
            raise LoadError(f"Error leyendo '{self.table}': {e.message}", cause=e) from e

        if not rows:
            return None
        row = dict(rows[0])
        row["exercises"] = sorted(row.get("exercises") or [], key=lambda ex: ex.get("order_index") or 0)
        return self.parse(row)


class ExerciseRepository(GatewayRepository[Exercise]):

    def __init__(self):
        super().__init__(Exercise, "exercises")

    async def update_field(self, gateway: Gateway, exercise_id: str, field: str, value: Any) -> Record:
        """Actualización parcial de un único campo del ejercicio."""
        return await self.update(gateway, {"id": exercise_id}, {field: value})


workout_repository = WorkoutRepository()
exercise_repository = ExerciseRepository()
