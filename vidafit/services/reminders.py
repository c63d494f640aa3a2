"""
Recordatorios de agua.

Una comprobación recurrente (una vez por minuto) compara la hora local con los
horarios configurados y dispara como mucho una vez por horario y día. Al disparar
se muestra el banner dentro de la app y, si hay permiso, una notificación del
sistema con el progreso de agua.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from vidafit.core.scheduler import RecurringJob
from vidafit.core.state import ReminderSlice, WaterSlice
from vidafit.services.notifications import OneSignalNotifier
from vidafit.services.preferences import LocalPreferences, WATER_REMINDERS_ENABLED_KEY

logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "💧 Hora de Beber Água!"


def reminder_body(consumed: int, target: int) -> str:
    return f"Você já bebeu {consumed} de {target} copos hoje. Mantenha-se hidratado!"


class WaterReminderScheduler:
    """
    Dueño del job de recordatorios de agua.

    Lee el slice de agua solo para el texto de la notificación; el vaso extra al
    aceptar un recordatorio se delega en `drink`.
    """

    JOB_ID = "water_reminder_check"

    def __init__(
        self,
        reminders: ReminderSlice,
        water: WaterSlice,
        scheduler: AsyncIOScheduler,
        preferences: LocalPreferences,
        notifier: OneSignalNotifier,
        clock: Callable[[], datetime],
        drink: Callable[[], Awaitable[object]],
        interval_seconds: int = 60,
        icon: Optional[str] = None,
        badge: Optional[str] = None
    ):
        self.reminders = reminders
        self.water = water
        self.preferences = preferences
        self.notifier = notifier
        self.clock = clock
        self.drink = drink
        self.icon = icon
        self.badge = badge
        self.job = RecurringJob(scheduler, self.check, seconds=interval_seconds, job_id=self.JOB_ID)
        self._user_id: Optional[str] = None

        self.reminders.enabled = preferences.get_bool(WATER_REMINDERS_ENABLED_KEY, False)

    @property
    def running(self) -> bool:
        return self.job.running

    async def start(self, user_id: str) -> None:
        """Arranca las comprobaciones si los recordatorios están activados."""
        self._user_id = user_id
        if not self.reminders.enabled or self.job.running:
            return
        self.job.start()
        logger.info(f"Recordatorios de agua activos para el usuario {user_id}")
        await self.check()

    def stop(self) -> None:
        """Detiene disparos futuros. `last_fired` se conserva."""
        self.job.stop()

    async def toggle(self, user_id: Optional[str], dashboard_ready: bool) -> bool:
        """
        Activa o desactiva los recordatorios y persiste la preferencia.

        Activar pide permiso de notificaciones; sin permiso el banner sigue funcionando.
        """
        enabled = not self.reminders.enabled
        self.reminders.enabled = enabled
        self.preferences.set_bool(WATER_REMINDERS_ENABLED_KEY, enabled)

        if enabled:
            try:
                await self.notifier.request_permission()
            except Exception as e:
                logger.warning(f"No se pudo solicitar permiso de notificaciones: {e}")
            if user_id and dashboard_ready:
                await self.start(user_id)
        else:
            self.stop()
        return enabled

    async def check(self, now: Optional[datetime] = None) -> bool:
        """
        Comprueba si toca recordatorio en este minuto.

        Returns:
            True si se disparó un recordatorio
        """
        if not self.reminders.enabled or self._user_id is None:
            return False

        now = now or self.clock()
        # La fecha forma parte de la clave: un horario vuelve a disparar al día siguiente
        current_key = f"{now.date().isoformat()} {now.hour}:{now.minute}"
        should_remind = any(
            slot.hour == now.hour and slot.minute == now.minute for slot in self.reminders.slots
        )
        if not should_remind or self.reminders.last_fired == current_key:
            return False

        self.reminders.banner_visible = True
        self.reminders.last_fired = current_key
        logger.info(f"Recordatorio de agua disparado ({current_key})")

        if self.notifier.granted:
            result = await self.notifier.notify(
                self._user_id,
                NOTIFICATION_TITLE,
                reminder_body(self.water.consumed, self.water.target),
                icon=self.icon,
                badge=self.badge,
                data={"type": "water_reminder", "slot": current_key},
            )
            if not result.get("success"):
                logger.warning(f"Notificación de agua no enviada: {result.get('errors')}")
        return True

    async def accept(self) -> None:
        """Acción "Bebi Água!": suma un vaso y oculta el banner."""
        await self.drink()
        self.reminders.banner_visible = False

    def dismiss(self) -> None:
        """Acción "Mais Tarde": solo oculta el banner."""
        self.reminders.banner_visible = False
