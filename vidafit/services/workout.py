"""
Entrenamiento del día: carga y edición optimista de ejercicios.
"""

import logging
from typing import Any

from vidafit.core.exceptions import LoadError, WriteError
from vidafit.core.state import WorkoutSlice
from vidafit.db.gateway import Gateway
from vidafit.repositories.workout import exercise_repository, workout_repository
from vidafit.schemas.workout import EDITABLE_EXERCISE_FIELDS, Exercise

logger = logging.getLogger(__name__)


class WorkoutService:

    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def load_today(self, workout: WorkoutSlice, user_id: str) -> None:
        try:
            current = await workout_repository.get_current(self.gateway, user_id)
        except LoadError as e:
            logger.error(f"Error loading workout for user {user_id}: {e}", exc_info=True)
            return
        if current is None:
            return
        workout.workout_id = current.id
        workout.name = current.name
        workout.exercises = list(current.exercises)

    async def update_exercise(self, workout: WorkoutSlice, index: int, field: str, value: Any) -> Exercise:
        """
        Cambia un campo de un ejercicio en local y, si el ejercicio ya existe en
        remoto, envía una actualización parcial de ese único campo.

        Raises:
            ValueError: Índice fuera de rango, campo no editable o valor inválido
        """
        if field not in EDITABLE_EXERCISE_FIELDS:
            raise ValueError(f"Campo no editable: {field}")
        if index < 0 or index >= len(workout.exercises):
            raise ValueError(f"Índice de ejercicio fuera de rango: {index}")

        current = workout.exercises[index]
        # model_validate vuelve a aplicar las restricciones (ej: rpe entre 1 y 10)
        updated = Exercise.model_validate({**current.model_dump(), field: value})
        workout.exercises[index] = updated

        if updated.id:
            try:
                await exercise_repository.update_field(
                    self.gateway, updated.id, field, getattr(updated, field)
                )
            except WriteError as e:
                logger.error(f"Error updating exercise {updated.id}: {e}", exc_info=True)
        return updated
