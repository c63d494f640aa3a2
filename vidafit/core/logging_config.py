"""
Configuración de logging del cliente.

Consola siempre; archivo diario en LOG_DIR si LOG_TO_FILE está activo. Los
handlers instalados aquí se marcan para poder reconfigurar sin duplicarlos.
"""

import logging
import os
import sys
from datetime import datetime
from typing import List, Optional

from vidafit.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(filename)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Librerías que registran cada petición o cada disparo del job de recordatorios
QUIET_LOGGERS = {
    "apscheduler": logging.WARNING,
    "httpx": logging.WARNING,
    "hpack": logging.WARNING,
    "uvicorn.access": logging.INFO,
}

_HANDLER_MARK = "_vidafit_handler"


def _build_handlers(settings: Settings, level: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.LOG_TO_FILE:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        log_file = os.path.join(settings.LOG_DIR, f"vidafit_{datetime.now().strftime('%Y%m%d')}.log")
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARK, True)
    return handlers


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configura el logger raíz según DEBUG_MODE.

    Se puede llamar más de una vez: solo se reemplazan los handlers propios, los
    que haya añadido Uvicorn u otro proceso se conservan.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.DEBUG_MODE else logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root.removeHandler(handler)
            handler.close()
    for handler in _build_handlers(settings, level):
        root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    root.info("Logging de %s configurado. Nivel %s.", settings.PROJECT_NAME, logging.getLevelName(level))
    return root
