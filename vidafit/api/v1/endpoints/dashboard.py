"""
Endpoints de hidratación y recordatorios de agua.
"""

from fastapi import APIRouter, Depends

from vidafit.core.deps import get_machine
from vidafit.schemas.screen import ScreenView
from vidafit.services.orchestrator import ScreenStateMachine

router = APIRouter()


@router.post("/water/glass", response_model=ScreenView)
async def add_water_glass(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    """Suma un vaso de agua. En la meta no cambia nada."""
    await machine.add_water_glass()
    return machine.view()


@router.post("/reminders/toggle", response_model=ScreenView)
async def toggle_reminders(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    await machine.toggle_water_reminders()
    return machine.view()


@router.post("/reminders/accept", response_model=ScreenView)
async def accept_reminder(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    """Acción "Bebi Água!": suma un vaso y oculta el banner."""
    await machine.accept_reminder()
    return machine.view()


@router.post("/reminders/dismiss", response_model=ScreenView)
async def dismiss_reminder(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    machine.dismiss_reminder()
    return machine.view()
