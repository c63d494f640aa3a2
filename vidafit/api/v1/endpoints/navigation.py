from fastapi import APIRouter, Depends, HTTPException, status

from vidafit.core.deps import get_machine
from vidafit.core.screens import Screen
from vidafit.schemas.screen import ScreenView
from vidafit.services.orchestrator import ScreenStateMachine

router = APIRouter()


@router.post("/{screen}", response_model=ScreenView)
async def navigate(
    screen: Screen,
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    """Navegación lateral entre dashboard, treino, dieta, progresso y perfil."""
    try:
        machine.navigate(screen)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()
