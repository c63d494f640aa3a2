import asyncio
import copy
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest
import pytz

from vidafit.core.config import Settings
from vidafit.core.exceptions import GatewayError, NotFoundError
from vidafit.schemas.session import Session, SessionEvent
from vidafit.services.notifications import OneSignalNotifier
from vidafit.services.orchestrator import ScreenStateMachine
from vidafit.services.preferences import LocalPreferences

TEST_TIMEZONE = "America/Sao_Paulo"
TODAY = "2025-03-10"


def _matches(row: Dict[str, Any], filters: Dict[str, Any]) -> bool:
    return all(row.get(key) == value for key, value in filters.items())


class FakeGateway:
    """
    Gateway en memoria con la misma semántica que el adaptador de Supabase.

    - `tables`: filas por tabla
    - `failures`: tabla (o "auth") -> excepción a lanzar en cualquier operación
    - `before_read`: tabla -> corrutina a esperar antes de leer (para simular latencia)
    """

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[str, Exception] = {}
        self.before_read: Dict[str, Callable[[], Awaitable[None]]] = {}
        self.accounts: Dict[str, Dict[str, str]] = {}
        self.session: Optional[Session] = None
        self.listeners: List[Callable] = []
        self.calls: List[tuple] = []
        self.sign_out_calls = 0

    # --- helpers de test

    def add_row(self, table: str, row: Dict[str, Any]) -> None:
        self.tables.setdefault(table, []).append(dict(row))

    def rows(self, table: str) -> List[Dict[str, Any]]:
        return self.tables.get(table, [])

    def emit(self, event: SessionEvent, session: Optional[Session]) -> None:
        for listener in list(self.listeners):
            listener(event, session)

    def _check(self, table: str) -> None:
        if table in self.failures:
            raise self.failures[table]

    # --- auth

    async def get_current_session(self) -> Optional[Session]:
        self._check("auth")
        return self.session

    def on_session_change(self, callback):
        self.listeners.append(callback)
        return lambda: self.listeners.remove(callback)

    async def sign_in(self, email: str, password: str) -> Session:
        self._check("auth")
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise GatewayError("Invalid login credentials", code="400")
        self.session = Session(user_id=account["user_id"], email=email)
        return self.session

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> Session:
        self._check("auth")
        if email in self.accounts:
            raise GatewayError("User already registered", code="422")
        user_id = f"user-{len(self.accounts) + 1}"
        self.accounts[email] = {"user_id": user_id, "password": password, **metadata}
        self.session = Session(user_id=user_id, email=email)
        return self.session

    async def sign_out(self) -> None:
        self.sign_out_calls += 1
        self._check("auth")
        self.session = None

    # --- registros

    async def read_one(self, table: str, filters: Dict[str, Any], columns: str = "*") -> Dict[str, Any]:
        self.calls.append(("read_one", table, dict(filters)))
        if table in self.before_read:
            await self.before_read[table]()
        self._check(table)
        for row in self.rows(table):
            if _matches(row, filters):
                return copy.deepcopy(row)
        raise NotFoundError("JSON object requested, multiple (or no) rows returned", code="PGRST116")

    async def read_many(self, table, filters, order_by=None, descending=False, limit=None, columns="*"):
        self.calls.append(("read_many", table, dict(filters)))
        if table in self.before_read:
            await self.before_read[table]()
        self._check(table)
        rows = [copy.deepcopy(row) for row in self.rows(table) if _matches(row, filters)]
        if order_by:
            rows.sort(key=lambda row: row.get(order_by) or "", reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return rows

    async def insert(self, table: str, record: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert", table, dict(record)))
        self._check(table)
        self.add_row(table, record)
        return dict(record)

    async def update(self, table: str, filters: Dict[str, Any], partial: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("update", table, dict(filters), dict(partial)))
        self._check(table)
        updated = {}
        for row in self.rows(table):
            if _matches(row, filters):
                row.update(partial)
                updated = dict(row)
        return updated

    async def upsert(self, table: str, record: Dict[str, Any], on_conflict) -> Dict[str, Any]:
        self.calls.append(("upsert", table, dict(record), tuple(on_conflict)))
        self._check(table)
        keys = {key: record[key] for key in on_conflict}
        for row in self.rows(table):
            if _matches(row, keys):
                row.update(record)
                return dict(row)
        self.add_row(table, record)
        return dict(record)


def _seed_user(
    gateway: FakeGateway,
    user_id: str = "user-1",
    email: str = "ana@example.com",
    complete: bool = True,
    subscribed: bool = True
) -> Session:
    """Carga perfil, cuenta y (opcionalmente) assinatura para un usuario."""
    gateway.add_row("profiles", {"id": user_id, "name": "Ana"})
    account = {"id": user_id, "email": email, "name": "Ana", "streak": 3}
    if complete:
        account.update({
            "goal": "Hipertrofia",
            "level": "Intermediário",
            "days_per_week": 4,
            "session_time": 60,
            "equipment": ["Academia completa"],
        })
    gateway.add_row("users", account)
    if subscribed:
        gateway.add_row("subscriptions", {
            "id": f"sub-{user_id}",
            "user_id": user_id,
            "status": "active",
            "payment_method": "pix",
            "amount": 25.99,
        })
    return Session(user_id=user_id, email=email)


def _seed_dashboard(gateway: FakeGateway, user_id: str = "user-1", date: str = TODAY) -> None:
    gateway.add_row("meals", {
        "id": "meal-1", "user_id": user_id, "name": "Café da manhã", "calories": 450,
        "protein": 30, "carbs": 50, "fat": 12, "date": date, "created_at": "2025-03-10T08:00:00",
    })
    gateway.add_row("meals", {
        "id": "meal-2", "user_id": user_id, "name": "Almoço", "calories": 700,
        "protein": 45, "carbs": 80, "fat": 20, "date": date, "created_at": "2025-03-10T12:30:00",
    })
    gateway.add_row("water_intake", {"user_id": user_id, "glasses": 3, "target": 8, "date": date})
    gateway.add_row("workouts", {
        "id": "workout-1",
        "user_id": user_id,
        "name": "Costas e Bíceps",
        "completed": False,
        "created_at": "2025-03-10T06:00:00",
        "exercises": [
            {"id": "ex-2", "name": "Rosca Direta", "sets": 3, "reps": "10-12", "weight": 14, "rest": 60, "order_index": 1},
            {"id": "ex-1", "name": "Puxada Frontal", "sets": 4, "reps": 10, "weight": 50, "rest": 90, "order_index": 0},
        ],
    })


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def mock_scheduler():
    """Scheduler mock: add_job devuelve un job mock con remove()."""
    scheduler = Mock()
    scheduler.add_job.return_value = Mock()
    return scheduler


@pytest.fixture
def fixed_now():
    return pytz.timezone(TEST_TIMEZONE).localize(datetime(2025, 3, 10, 7, 30))


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        APP_TIMEZONE=TEST_TIMEZONE,
        PREFERENCES_FILE=str(tmp_path / "preferences.json"),
        LOG_DIR=str(tmp_path / "logs"),
        ONESIGNAL_APP_ID=None,
        ONESIGNAL_REST_API_KEY=None,
    )


@pytest.fixture
def preferences(app_settings):
    return LocalPreferences(app_settings.PREFERENCES_FILE)


@pytest.fixture
def mock_notifier():
    notifier = Mock(spec=OneSignalNotifier)
    notifier.granted = False
    notifier.request_permission = AsyncMock()
    notifier.notify = AsyncMock(return_value={"success": True, "notification_id": "n-1"})
    return notifier


@pytest.fixture
def machine(fake_gateway, mock_scheduler, preferences, mock_notifier, app_settings, clock):
    return ScreenStateMachine(
        fake_gateway,
        mock_scheduler,
        preferences=preferences,
        notifier=mock_notifier,
        settings=app_settings,
        clock=clock,
    )


async def _settle(rounds: int = 10) -> None:
    """Deja avanzar las tareas pendientes del event loop."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def seed_user():
    return _seed_user


@pytest.fixture
def seed_dashboard():
    return _seed_dashboard


@pytest.fixture
def settle():
    return _settle
