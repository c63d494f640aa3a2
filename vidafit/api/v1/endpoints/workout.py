"""
Endpoints de la pantalla de treino: edición de ejercicios y descanso.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, status

from vidafit.core.deps import get_machine
from vidafit.schemas.screen import ExerciseUpdateRequest, RestStartRequest, ScreenView
from vidafit.services.orchestrator import ScreenStateMachine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.patch("/exercises/{index}", response_model=ScreenView)
async def update_exercise(
    body: ExerciseUpdateRequest,
    index: int = Path(..., ge=0),
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    """
    Cambia un campo de un ejercicio.

    El cambio se aplica en local y se envía en segundo plano; un fallo remoto
    solo se registra.
    """
    try:
        await machine.update_exercise(index, body.field, body.value)
    except ValueError as e:
        logger.info(f"Edición de ejercicio rechazada ({index}, {body.field}): {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.post("/rest", response_model=ScreenView)
async def start_rest(
    body: RestStartRequest,
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    try:
        machine.start_rest(body.seconds)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.delete("/rest", response_model=ScreenView)
async def skip_rest(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    machine.skip_rest()
    return machine.view()
