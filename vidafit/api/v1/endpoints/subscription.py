"""
Endpoints de la pantalla de assinatura.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from vidafit.core.deps import get_machine
from vidafit.schemas.screen import PaymentMethodRequest, PixCodeResponse, ScreenView
from vidafit.services.orchestrator import ScreenStateMachine

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/method", response_model=ScreenView)
async def select_payment_method(
    body: PaymentMethodRequest,
    machine: ScreenStateMachine = Depends(get_machine)
) -> ScreenView:
    try:
        machine.select_payment_method(body.method)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.delete("/method", response_model=ScreenView)
async def clear_payment_method(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    try:
        machine.clear_payment_method()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return machine.view()


@router.post("/pix/copy", response_model=PixCodeResponse)
async def copy_pix_code(machine: ScreenStateMachine = Depends(get_machine)) -> PixCodeResponse:
    """Devuelve el código PIX estático y lo marca como copiado."""
    try:
        code = machine.copy_pix_code()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return PixCodeResponse(pix_code=code)


@router.post("/confirm", response_model=ScreenView)
async def confirm_payment(machine: ScreenStateMachine = Depends(get_machine)) -> ScreenView:
    """
    El usuario confirma el pago. Si la assinatura no se puede crear se queda en
    la pantalla de assinatura (el fallo solo se registra).
    """
    try:
        activated = await machine.confirm_payment()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not activated:
        logger.warning("Confirmação de pagamento sem assinatura criada")
    return machine.view()
