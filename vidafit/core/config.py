import os
from typing import Optional
from functools import lru_cache
import logging

import pytz
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Configurar el logger
logger = logging.getLogger(__name__)

# Código PIX estático mostrado en la pantalla de assinatura
DEFAULT_PIX_CODE = (
    "00020126580014br.gov.bcb.pix0136a1b2c3d4-e5f6-7890-abcd-ef1234567890"
    "520400005303986540525.995802BR5925VIDA FITPRO LTDA6009SAO PAULO62070503***63041D3A"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Permitir campos extra en .env
    )

    # Información del proyecto
    PROJECT_NAME: str = "Vida FitPro"
    PROJECT_DESCRIPTION: str = "Cliente local del personal trainer digital Vida FitPro"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Debug mode
    DEBUG_MODE: bool = os.getenv("DEBUG_MODE", "False").lower() in ("true", "1", "t")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")
    LOG_TO_FILE: bool = os.getenv("LOG_TO_FILE", "True").lower() in ("true", "1", "t")

    # Supabase (auth + base de datos)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    # Configuración de OneSignal para notificaciones push
    ONESIGNAL_APP_ID: Optional[str] = None
    ONESIGNAL_REST_API_KEY: Optional[str] = None
    NOTIFICATION_ICON: str = "/icon-192.png"
    NOTIFICATION_BADGE: str = "/icon-192.png"

    # Zona horaria usada para "hoy" y para los recordatorios
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "America/Sao_Paulo")

    # Preferencias locales (sobreviven a reinicios)
    PREFERENCES_FILE: str = os.getenv(
        "PREFERENCES_FILE", os.path.join(os.path.expanduser("~"), ".vidafit", "preferences.json")
    )

    # Metas diarias de nutrición
    CALORIES_TARGET: int = 2200
    PROTEIN_TARGET_G: int = 165
    CARBS_TARGET_G: int = 275
    FAT_TARGET_G: int = 85
    WATER_TARGET_GLASSES: int = 8

    # Timers
    REMINDER_CHECK_INTERVAL_SECONDS: int = 60
    REST_TIMER_TICK_SECONDS: int = 1

    # Assinatura
    SUBSCRIPTION_AMOUNT: float = 25.99
    PIX_CODE: str = DEFAULT_PIX_CODE

    # Auth
    MIN_PASSWORD_LENGTH: int = 6

    @field_validator("APP_TIMEZONE")
    def validate_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"APP_TIMEZONE desconocida: {v}")
        return v

    @field_validator("SUPABASE_URL", mode="before")
    def strip_supabase_url(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            if not v.startswith(("http://", "https://")):
                logger.warning("SUPABASE_URL tiene un formato inesperado")
            return v or None
        return v


# Usar una función con caché para obtener la configuración
@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    logger.info("Configuración cargada correctamente")
    return settings
