from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest

from vidafit.services.notifications import NotificationPermission, OneSignalNotifier


class TestOneSignalNotifier:

    @pytest.mark.asyncio
    async def test_permission_denied_without_credentials(self):
        notifier = OneSignalNotifier(app_id="", api_key="")

        assert await notifier.request_permission() == NotificationPermission.DENIED
        assert notifier.granted is False

    @pytest.mark.asyncio
    async def test_permission_requested_once(self):
        notifier = OneSignalNotifier(app_id="app", api_key="key")

        assert await notifier.request_permission() == NotificationPermission.GRANTED
        notifier.app_id = ""
        assert await notifier.request_permission() == NotificationPermission.GRANTED

    @pytest.mark.asyncio
    async def test_notify_without_permission(self):
        notifier = OneSignalNotifier(app_id="app", api_key="key")

        result = await notifier.notify("u1", "Título", "Corpo")

        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_notify_posts_to_onesignal(self):
        notifier = OneSignalNotifier(app_id="app", api_key="key")
        await notifier.request_permission()

        response = Mock(status_code=200, text="{}")
        response.json.return_value = {"id": "notif-1"}
        client = MagicMock()
        client.post = AsyncMock(return_value=response)
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)

        with patch("vidafit.services.notifications.httpx.AsyncClient", return_value=client):
            result = await notifier.notify(
                "u1", "💧 Hora de Beber Água!", "Você já bebeu 2 de 8 copos hoje.",
                icon="/icon-192.png", badge="/icon-192.png",
            )

        assert result == {"success": True, "notification_id": "notif-1"}
        _, kwargs = client.post.call_args
        assert '"include_external_user_ids": ["u1"]' in kwargs["content"]
        assert '"chrome_web_icon": "/icon-192.png"' in kwargs["content"]

    @pytest.mark.asyncio
    async def test_notify_http_error(self):
        notifier = OneSignalNotifier(app_id="app", api_key="key")
        await notifier.request_permission()

        client = MagicMock()
        client.post = AsyncMock(return_value=Mock(status_code=400, text="invalid app_id"))
        client.__aenter__ = AsyncMock(return_value=client)
        client.__aexit__ = AsyncMock(return_value=False)

        with patch("vidafit.services.notifications.httpx.AsyncClient", return_value=client):
            result = await notifier.notify("u1", "t", "b")

        assert result["success"] is False
        assert "400" in result["errors"][0]
