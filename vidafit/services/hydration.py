"""
Hidratación del día: carga y vaso a vaso.

Los vasos se actualizan primero en local y después se guardan en remoto
(upsert por usuario y fecha). Un fallo al guardar se registra y no revierte
el valor local.
"""

import logging
from typing import Callable

from vidafit.core.exceptions import LoadError, WriteError
from vidafit.core.state import WaterSlice
from vidafit.db.gateway import Gateway
from vidafit.repositories.nutrition import water_intake_repository
from vidafit.services.nutrition import clamp_glasses, next_glass_count

logger = logging.getLogger(__name__)


class HydrationService:

    def __init__(self, gateway: Gateway, today: Callable[[], str]):
        self.gateway = gateway
        self.today = today

    async def load_today(self, water: WaterSlice, user_id: str) -> None:
        """Carga la fila de hoy; si no existe se mantienen los valores actuales."""
        try:
            intake = await water_intake_repository.get_for_date(self.gateway, user_id, self.today())
        except LoadError as e:
            logger.error(f"Error loading water intake for user {user_id}: {e}", exc_info=True)
            return
        if intake is None:
            return
        water.target = intake.target
        water.consumed = clamp_glasses(intake.glasses, intake.target)

    async def add_glass(self, water: WaterSlice, user_id: str) -> int:
        """
        Suma un vaso (limitado a la meta) y lo guarda en remoto.

        Returns:
            Vasos consumidos tras la operación
        """
        new_amount = next_glass_count(water.consumed, water.target)
        water.consumed = new_amount

        try:
            await water_intake_repository.upsert_for_date(
                self.gateway, user_id, glasses=new_amount, target=water.target, date=self.today()
            )
        except WriteError as e:
            logger.error(f"Error updating water intake for user {user_id}: {e}", exc_info=True)
        return new_amount
