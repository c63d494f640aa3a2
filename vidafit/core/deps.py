"""
Dependencias centrales para la API local.

La máquina de pantallas se construye en el lifespan y se guarda en `app.state`.
"""

from fastapi import HTTPException, Request, status

from vidafit.services.orchestrator import ScreenStateMachine


async def get_machine(request: Request) -> ScreenStateMachine:
    """
    Obtiene la máquina de pantallas de la aplicación.

    Raises:
        HTTPException 503: Si el backend no se pudo inicializar
    """
    machine = getattr(request.app.state, "machine", None)
    if machine is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Cliente não inicializado"
        )
    return machine
