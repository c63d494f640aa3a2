from fastapi import APIRouter, Depends

from vidafit.core.deps import get_machine
from vidafit.schemas.screen import ScreenView
from vidafit.services.orchestrator import ScreenStateMachine

router = APIRouter()


@router.get("/state", response_model=ScreenView)
async def get_state(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    """Pantalla actual y los datos que necesita para pintarse."""
    return machine.view()
