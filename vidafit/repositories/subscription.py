from typing import Optional

from vidafit.db.gateway import Gateway, Record
from vidafit.repositories.base import GatewayRepository
from vidafit.schemas.subscription import PaymentMethod, Subscription, SubscriptionStatus


class SubscriptionRepository(GatewayRepository[Subscription]):

    def __init__(self):
        super().__init__(Subscription, "subscriptions")

    async def get_active(self, gateway: Gateway, user_id: str) -> Optional[Subscription]:
        """
        Assinatura activa del usuario o None si no tiene.

        Raises:
            LoadError: Si la consulta falla por otro motivo que "sin filas"
        """
        return await self.get(gateway, user_id=user_id, status=SubscriptionStatus.ACTIVE.value)

    async def create_active(
        self,
        gateway: Gateway,
        user_id: str,
        payment_method: Optional[PaymentMethod],
        amount: float
    ) -> Record:
        return await self.create(
            gateway,
            {
                "user_id": user_id,
                "status": SubscriptionStatus.ACTIVE.value,
                "payment_method": payment_method.value if payment_method else None,
                "amount": amount,
            },
        )


subscription_repository = SubscriptionRepository()
