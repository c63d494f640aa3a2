"""
Preferencias locales del cliente, persistidas en un fichero JSON.

Sobreviven a reinicios de la aplicación. Un fichero ausente o corrupto se trata
como "sin preferencias guardadas".
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from vidafit.core.config import get_settings

logger = logging.getLogger(__name__)

WATER_REMINDERS_ENABLED_KEY = "water-reminders-enabled"


class LocalPreferences:

    def __init__(self, path: Optional[str] = None):
        self.path = path or get_settings().PREFERENCES_FILE

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"No se pudieron leer las preferencias locales ({self.path}): {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._read().get(key, default)
        if isinstance(value, str):
            return value.lower() in ("true", "1", "t")
        return bool(value)

    def set_bool(self, key: str, value: bool) -> None:
        data = self._read()
        data[key] = bool(value)
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as e:
            logger.error(f"Error guardando preferencia '{key}': {e}", exc_info=True)
