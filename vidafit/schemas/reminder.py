from typing import List
from pydantic import BaseModel, Field


class ReminderSlot(BaseModel):
    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)
    label: str

    @property
    def key(self) -> str:
        return f"{self.hour}:{self.minute}"


# Horarios por defecto para recordatorios de agua
DEFAULT_WATER_REMINDERS: List[ReminderSlot] = [
    ReminderSlot(hour=8, minute=0, label="Manhã"),
    ReminderSlot(hour=10, minute=0, label="Meio da Manhã"),
    ReminderSlot(hour=12, minute=0, label="Almoço"),
    ReminderSlot(hour=14, minute=0, label="Tarde"),
    ReminderSlot(hour=16, minute=0, label="Lanche"),
    ReminderSlot(hour=18, minute=0, label="Final da Tarde"),
    ReminderSlot(hour=20, minute=0, label="Noite"),
    ReminderSlot(hour=22, minute=0, label="Antes de Dormir"),
]
