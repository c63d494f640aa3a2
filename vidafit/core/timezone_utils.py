"""
Utilidades para el manejo de la zona horaria del cliente.

"Hoy" (filas de comidas y agua) y la hora de los recordatorios se calculan
siempre en la misma zona horaria configurada (APP_TIMEZONE).
"""
from datetime import datetime, timezone
import pytz


def convert_utc_to_local(utc_dt: datetime, app_timezone: str) -> datetime:
    """
    Convierte un datetime UTC a hora local de la aplicación.

    Args:
        utc_dt: Datetime aware en UTC (si es naive se asume UTC)
        app_timezone: Zona horaria de la aplicación

    Returns:
        Datetime aware en la zona horaria de la aplicación
    """
    if utc_dt.tzinfo is None:
        utc_dt = utc_dt.replace(tzinfo=timezone.utc)

    tz = pytz.timezone(app_timezone)
    return utc_dt.astimezone(tz)


def now_local(app_timezone: str) -> datetime:
    """Hora actual en la zona horaria de la aplicación."""
    return convert_utc_to_local(datetime.now(timezone.utc), app_timezone)


def format_time(seconds: int) -> str:
    """Formatea segundos como M:SS (ej: 90 -> '1:30')."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins}:{secs:02d}"
