from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.jobstores.base import JobLookupError
from typing import Any, Awaitable, Callable, Optional
import logging

import pytz

from vidafit.core.config import get_settings

logger = logging.getLogger(__name__)

# Variable global para mantener referencia al scheduler
_scheduler: Optional[AsyncIOScheduler] = None


class RecurringJob:
    """
    Job recurrente cancelable, propiedad del componente que lo crea.

    Envuelve un job de intervalo de APScheduler. La función debe ser una corrutina
    para que AsyncIOScheduler la ejecute en el event loop y no en un hilo.

    Uso como recurso con alcance:
        with RecurringJob(scheduler, tick, seconds=1, job_id="rest_timer") as job:
            job.start()
            ...
        # al salir del bloque el job queda eliminado
    """

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        func: Callable[[], Awaitable[Any]],
        seconds: int,
        job_id: str
    ):
        self.scheduler = scheduler
        self.func = func
        self.seconds = seconds
        self.job_id = job_id
        self._job = None

    @property
    def running(self) -> bool:
        return self._job is not None

    def start(self) -> None:
        """Programa el job. Si ya existía uno con el mismo id, lo reemplaza."""
        self._job = self.scheduler.add_job(
            self.func,
            "interval",
            seconds=self.seconds,
            id=self.job_id,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.debug(f"Job '{self.job_id}' programado cada {self.seconds}s")

    def stop(self) -> None:
        """Elimina el job. Es seguro llamarlo aunque no esté programado."""
        if self._job is None:
            return
        try:
            self._job.remove()
            logger.debug(f"Job '{self.job_id}' eliminado")
        except JobLookupError:
            logger.debug(f"Job '{self.job_id}' ya no existía en el scheduler")
        finally:
            self._job = None

    def __enter__(self) -> "RecurringJob":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def init_scheduler() -> AsyncIOScheduler:
    """
    Crea y arranca el scheduler compartido en la zona horaria de la aplicación.

    Debe llamarse con el event loop ya en marcha (lifespan de FastAPI).
    """
    global _scheduler
    settings = get_settings()

    logger.info(f"Initializing scheduler with timezone {settings.APP_TIMEZONE}")
    _scheduler = AsyncIOScheduler(timezone=pytz.timezone(settings.APP_TIMEZONE))
    _scheduler.start()
    logger.info("Scheduler started")
    return _scheduler


def get_scheduler() -> Optional[AsyncIOScheduler]:
    return _scheduler


def shutdown_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler shut down.")
        _scheduler = None
