from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"


class PaymentMethod(str, Enum):
    PIX = "pix"
    CARD = "card"


class Subscription(BaseModel):
    """Fila de la tabla `subscriptions`."""
    id: Optional[str] = None
    user_id: str
    status: str
    payment_method: Optional[str] = None
    amount: float = Field(..., ge=0)
    started_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        return None if v is None else str(v)

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE.value
