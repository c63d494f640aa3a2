import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging

# Importar la función de configuración de logging
from vidafit.core.logging_config import setup_logging

# Llamar a la configuración de logging ANTES de importar/crear otros elementos
setup_logging()

from vidafit.api.v1.api import api_router
from vidafit.core.config import get_settings
from vidafit.core.exceptions import GatewayError
from vidafit.core.scheduler import init_scheduler, shutdown_scheduler
from vidafit.db.supabase_gateway import SupabaseGateway
from vidafit.middleware.timing import TimingMiddleware
from vidafit.services.orchestrator import ScreenStateMachine

logger = logging.getLogger(__name__)

# Obtener la instancia de configuración al inicio del módulo
settings_instance = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Lifespan: Startup iniciado...")
    app.state.machine = None

    # Iniciar el scheduler
    scheduler = init_scheduler()
    app.state.scheduler = scheduler

    # Conectar con Supabase y arrancar la máquina de pantallas
    try:
        gateway = await SupabaseGateway.connect(
            settings_instance.SUPABASE_URL, settings_instance.SUPABASE_ANON_KEY
        )
        machine = ScreenStateMachine(gateway, scheduler, settings=settings_instance)
        await machine.start()
        app.state.machine = machine
        logger.info(f"Lifespan: Cliente listo en la pantalla '{machine.state.screen.value}'.")
    except GatewayError as e:
        logger.error(f"Lifespan: Error al conectar con Supabase: {e}", exc_info=True)

    yield  # Aplicación en ejecución

    logger.info("Lifespan: Shutdown iniciado...")

    if app.state.machine is not None:
        await app.state.machine.teardown()

    try:
        shutdown_scheduler()
    except Exception as e:
        logger.error(f"Error shutting down scheduler: {e}", exc_info=True)


app = FastAPI(
    title=settings_instance.PROJECT_NAME,
    description=settings_instance.PROJECT_DESCRIPTION,
    version=settings_instance.VERSION,
    openapi_url=f"{settings_instance.API_V1_STR}/openapi.json",
    docs_url=f"{settings_instance.API_V1_STR}/docs",
    redoc_url=f"{settings_instance.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Añadir middleware para medir el tiempo de respuesta
app.add_middleware(TimingMiddleware)

# Incluir routers
app.include_router(api_router, prefix=settings_instance.API_V1_STR)


# Ruta raíz
@app.get("/")
def root():
    return {
        "message": f"Bem-vindo ao {settings_instance.PROJECT_NAME}",
        "docs": f"{settings_instance.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    uvicorn.run("vidafit.main:app", host="127.0.0.1", port=8000, reload=settings_instance.DEBUG_MODE)
