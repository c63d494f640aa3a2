"""
Pantalla de assinatura: elección de método de pago y activación.

No hay integración con pasarela de pago: se muestra un código PIX estático y el
usuario confirma el pago por su cuenta.
"""

import logging
from typing import Optional

from vidafit.core.config import Settings, get_settings
from vidafit.core.state import SubscriptionSlice
from vidafit.db.gateway import Gateway
from vidafit.repositories.subscription import subscription_repository
from vidafit.schemas.subscription import PaymentMethod

logger = logging.getLogger(__name__)


class SubscriptionService:

    def __init__(self, gateway: Gateway, settings: Optional[Settings] = None):
        self.gateway = gateway
        self.settings = settings or get_settings()

    def select_payment_method(self, subscription: SubscriptionSlice, method: PaymentMethod) -> None:
        subscription.payment_method = method
        subscription.show_pix_code = method == PaymentMethod.PIX
        subscription.pix_copied = False

    def clear_payment_method(self, subscription: SubscriptionSlice) -> None:
        subscription.payment_method = None
        subscription.show_pix_code = False
        subscription.pix_copied = False

    def copy_pix_code(self, subscription: SubscriptionSlice) -> str:
        if subscription.payment_method != PaymentMethod.PIX:
            raise ValueError("Selecione PIX para copiar o código")
        subscription.pix_copied = True
        return self.settings.PIX_CODE

    async def activate(self, subscription: SubscriptionSlice, user_id: str) -> None:
        """
        Crea la assinatura activa tras la confirmación del usuario.

        Raises:
            ValueError: Si no se eligió PIX ni tarjeta
            WriteError: Si el gateway falla; el slice no se modifica
        """
        if subscription.payment_method is None:
            raise ValueError("Selecione uma forma de pagamento")
        await subscription_repository.create_active(
            self.gateway, user_id, subscription.payment_method, self.settings.SUBSCRIPTION_AMOUNT
        )
        subscription.active = True
        logger.info(f"Assinatura activada para el usuario {user_id} ({subscription.payment_method})")
