"""
Esquemas de sesión de autenticación.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class SessionEvent(str, Enum):
    """Eventos de cambio de sesión entregados por el gateway."""
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


class Session(BaseModel):
    """Copia de solo lectura de la sesión del gateway."""
    user_id: str = Field(..., min_length=1)
    email: Optional[str] = None
