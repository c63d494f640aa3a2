"""
Canal de notificaciones del sistema vía OneSignal.

El permiso se pide una sola vez: queda concedido si hay credenciales de OneSignal
configuradas y denegado en caso contrario. Sin permiso solo se muestra el banner
dentro de la app.
"""

import httpx
import logging
import json
from enum import Enum
from typing import Any, Dict, Optional

from vidafit.core.config import get_settings

logger = logging.getLogger("onesignal_notifier")


class NotificationPermission(str, Enum):
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"


class OneSignalNotifier:
    """
    Envía notificaciones push a un usuario por su external_user_id.

    Usa httpx.AsyncClient para las llamadas HTTP.
    """

    def __init__(self, app_id: Optional[str] = None, api_key: Optional[str] = None):
        settings = get_settings()
        self.app_id = app_id if app_id is not None else settings.ONESIGNAL_APP_ID
        self.api_key = api_key if api_key is not None else settings.ONESIGNAL_REST_API_KEY
        self.base_url = "https://onesignal.com/api/v1/notifications"
        self.headers = {
            "Authorization": f"Basic {self.api_key}",
            "Content-Type": "application/json; charset=utf-8"
        }
        self.permission = NotificationPermission.DEFAULT

        if not self.app_id or not self.api_key:
            logger.warning("⚠️  OneSignal no configurado - las notificaciones push estarán deshabilitadas")

    @property
    def granted(self) -> bool:
        return self.permission == NotificationPermission.GRANTED

    async def request_permission(self) -> NotificationPermission:
        """Pide el permiso una sola vez; las siguientes llamadas devuelven el resultado guardado."""
        if self.permission == NotificationPermission.DEFAULT:
            if self.app_id and self.api_key:
                self.permission = NotificationPermission.GRANTED
            else:
                self.permission = NotificationPermission.DENIED
            logger.info(f"Permiso de notificaciones: {self.permission.value}")
        return self.permission

    async def notify(
        self,
        user_id: str,
        title: str,
        body: str,
        icon: Optional[str] = None,
        badge: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Envía una notificación al usuario.

        Returns:
            Dict con resultado:
            - success: bool
            - notification_id: str (si exitoso)
            - errors: List[str] (si falla)
        """
        if not self.granted:
            return {"success": False, "errors": ["Notification permission not granted"]}

        payload = {
            "app_id": self.app_id,
            "include_external_user_ids": [user_id],
            "channel_for_external_user_ids": "push",
            "headings": {"en": title, "pt": title},
            "contents": {"en": body, "pt": body},
            "data": data or {}
        }
        if icon:
            payload["chrome_web_icon"] = icon
        if badge:
            payload["chrome_web_badge"] = badge

        try:
            logger.info(f"Sending notification to user {user_id}: {title}")
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.base_url,
                    headers=self.headers,
                    content=json.dumps(payload),
                    timeout=30.0
                )

            logger.debug(f"OneSignal response: {response.status_code} - {response.text}")

            if response.status_code == 200:
                result = response.json()
                return {"success": True, "notification_id": result.get("id")}

            error_msg = f"OneSignal error: {response.status_code} - {response.text}"
            logger.error(error_msg)
            return {"success": False, "errors": [error_msg]}

        except Exception as e:
            error_msg = f"Error sending notification: {str(e)}"
            logger.error(error_msg, exc_info=True)
            return {"success": False, "errors": [error_msg]}
