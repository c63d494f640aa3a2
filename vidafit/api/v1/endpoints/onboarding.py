from fastapi import APIRouter, Depends, HTTPException, status

from vidafit.core.deps import get_machine
from vidafit.schemas.screen import OnboardingOptionRequest, ScreenView
from vidafit.services.orchestrator import ScreenStateMachine

router = APIRouter()


@router.post("/select", response_model=ScreenView)
async def select_option(
    body: OnboardingOptionRequest,
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    """Marca una opción del paso actual (alterna en el paso de equipamentos)."""
    try:
        machine.select_onboarding_option(body.option)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.post("/next", response_model=ScreenView)
async def next_step(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    """
    Avanza al siguiente paso. En el último paso guarda las respuestas y
    vuelve a cargar al usuario (assinatura o dashboard).
    """
    try:
        await machine.next_onboarding_step()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.post("/back", response_model=ScreenView)
async def previous_step(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    try:
        machine.previous_onboarding_step()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()
