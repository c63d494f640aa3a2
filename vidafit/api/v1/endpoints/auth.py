"""
Endpoints del formulario de login/registro.

Un `AuthError` se guarda como error del formulario y se devuelve como 401 con el
mismo mensaje.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from vidafit.core.deps import get_machine
from vidafit.schemas.screen import LoginRequest, ScreenView, SignupRequest
from vidafit.services.orchestrator import ScreenStateMachine

logger = logging.getLogger(__name__)
router = APIRouter()


def _auth_failed(machine: ScreenStateMachine) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=machine.state.auth.error
    )


@router.post("/login", response_model=ScreenView)
async def login(
    body: LoginRequest,
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    try:
        ok = await machine.sign_in(body.email, body.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not ok:
        raise _auth_failed(machine)
    return machine.view()


@router.post("/signup", response_model=ScreenView)
async def signup(
    body: SignupRequest,
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    try:
        ok = await machine.sign_up(body.name, body.email, body.password, body.confirm_password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not ok:
        raise _auth_failed(machine)
    return machine.view()


@router.post("/mode", response_model=ScreenView)
async def switch_mode(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    """Alterna entre login y registro."""
    try:
        machine.switch_auth_mode()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.post("/logout", response_model=ScreenView)
async def logout(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    await machine.sign_out()
    return machine.view()
