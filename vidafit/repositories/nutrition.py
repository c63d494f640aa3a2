"""
Repositorios de comidas (`meals`) e hidratación (`water_intake`) del día.
"""
from typing import List, Optional

from vidafit.core.exceptions import GatewayError, WriteError
from vidafit.db.gateway import Gateway, Record
from vidafit.repositories.base import GatewayRepository
from vidafit.schemas.nutrition import Meal, WaterIntake


class MealRepository(GatewayRepository[Meal]):

    def __init__(self):
        super().__init__(Meal, "meals")

    async def get_for_date(self, gateway: Gateway, user_id: str, date: str) -> List[Meal]:
        return await self.get_multi(gateway, order_by="created_at", user_id=user_id, date=date)


class WaterIntakeRepository(GatewayRepository[WaterIntake]):

    # Clave única de la tabla
    CONFLICT_KEYS = ("user_id", "date")

    def __init__(self):
        super().__init__(WaterIntake, "water_intake")

    async def get_for_date(self, gateway: Gateway, user_id: str, date: str) -> Optional[WaterIntake]:
        return await self.get(gateway, user_id=user_id, date=date)

    async def upsert_for_date(
        self,
        gateway: Gateway,
        user_id: str,
        glasses: int,
        target: int,
        date: str
    ) -> Record:
        record = {"user_id": user_id, "glasses": glasses, "target": target, "date": date}
        try:
            return await gateway.upsert(self.table, record, self.CONFLICT_KEYS)
        except GatewayError as e:
            raise WriteError(f"Error guardando '{self.table}': {e.message}", cause=e) from e


meal_repository = MealRepository()
water_intake_repository = WaterIntakeRepository()
