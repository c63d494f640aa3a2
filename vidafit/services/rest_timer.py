"""
Temporizador de descanso entre series.

Solo existe una cuenta atrás a la vez: iniciar una nueva reemplaza la anterior.
"""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from vidafit.core.scheduler import RecurringJob
from vidafit.core.state import RestTimerSlice
from vidafit.core.timezone_utils import format_time

logger = logging.getLogger(__name__)


class RestTimer:

    JOB_ID = "rest_timer_tick"

    def __init__(self, rest: RestTimerSlice, scheduler: AsyncIOScheduler, tick_seconds: int = 1):
        self.rest = rest
        self.job = RecurringJob(scheduler, self._on_tick, seconds=tick_seconds, job_id=self.JOB_ID)

    @property
    def display(self) -> str:
        return format_time(self.rest.remaining)

    def start(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("El descanso no puede ser negativo")
        self.job.stop()
        self.rest.remaining = seconds
        self.rest.resting = seconds > 0
        if self.rest.resting:
            self.job.start()
        logger.debug(f"Descanso iniciado: {seconds}s")

    def tick(self) -> None:
        """Un segundo de descanso. Al llegar a cero termina el descanso."""
        if self.rest.resting and self.rest.remaining > 0:
            self.rest.remaining -= 1
        if self.rest.remaining <= 0:
            self.rest.remaining = 0
            self.rest.resting = False
        if not self.rest.resting:
            self.job.stop()

    def cancel(self) -> None:
        """Salta el descanso sin esperar a que la cuenta llegue a cero."""
        self.rest.resting = False
        self.job.stop()

    async def _on_tick(self) -> None:
        self.tick()
