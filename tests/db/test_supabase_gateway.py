"""
Tests del adaptador de Supabase con un cliente mock.
"""

from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from postgrest.exceptions import APIError

from vidafit.core.exceptions import GatewayError, NotFoundError
from vidafit.db.supabase_gateway import SupabaseGateway
from vidafit.schemas.session import SessionEvent


def make_query(data=None, error=None):
    """Query builder encadenable: cada método devuelve el propio builder."""
    query = MagicMock()
    for method in ("select", "eq", "order", "limit", "single", "insert", "update", "upsert"):
        getattr(query, method).return_value = query
    if error is not None:
        query.execute = AsyncMock(side_effect=error)
    else:
        query.execute = AsyncMock(return_value=Mock(data=data))
    return query


@pytest.fixture
def client():
    client = MagicMock()
    client.auth = MagicMock()
    return client


@pytest.fixture
def gateway(client):
    return SupabaseGateway(client)


class TestSupabaseGatewayTables:

    @pytest.mark.asyncio
    async def test_read_one_applies_filters(self, gateway, client):
        query = make_query(data={"id": "u1", "name": "Ana"})
        client.table.return_value = query

        row = await gateway.read_one("profiles", {"id": "u1"})

        assert row == {"id": "u1", "name": "Ana"}
        client.table.assert_called_once_with("profiles")
        query.select.assert_called_once_with("*")
        query.eq.assert_called_once_with("id", "u1")
        query.single.assert_called_once()

    @pytest.mark.asyncio
    async def test_read_one_no_rows_is_not_found(self, gateway, client):
        error = APIError({"message": "no rows", "code": "PGRST116", "hint": None, "details": None})
        client.table.return_value = make_query(error=error)

        with pytest.raises(NotFoundError):
            await gateway.read_one("subscriptions", {"user_id": "u1", "status": "active"})

    @pytest.mark.asyncio
    async def test_other_api_errors_are_gateway_errors(self, gateway, client):
        error = APIError({"message": "permission denied", "code": "42501", "hint": None, "details": None})
        client.table.return_value = make_query(error=error)

        with pytest.raises(GatewayError) as exc_info:
            await gateway.read_one("subscriptions", {"user_id": "u1"})
        assert not isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.code == "42501"

    @pytest.mark.asyncio
    async def test_network_errors_are_gateway_errors(self, gateway, client):
        client.table.return_value = make_query(error=ConnectionError("reset"))

        with pytest.raises(GatewayError):
            await gateway.read_many("meals", {"user_id": "u1"})

    @pytest.mark.asyncio
    async def test_read_many_order_and_limit(self, gateway, client):
        query = make_query(data=[{"id": "w1"}])
        client.table.return_value = query

        rows = await gateway.read_many(
            "workouts", {"user_id": "u1", "completed": False},
            order_by="created_at", descending=True, limit=1, columns="*, exercises(*)",
        )

        assert rows == [{"id": "w1"}]
        query.select.assert_called_once_with("*, exercises(*)")
        query.order.assert_called_once_with("created_at", desc=True)
        query.limit.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_upsert_joins_conflict_keys(self, gateway, client):
        record = {"user_id": "u1", "glasses": 4, "target": 8, "date": "2025-03-10"}
        query = make_query(data=[record])
        client.table.return_value = query

        result = await gateway.upsert("water_intake", record, ("user_id", "date"))

        assert result == record
        query.upsert.assert_called_once_with(record, on_conflict="user_id,date")

    @pytest.mark.asyncio
    async def test_update_filters_by_id(self, gateway, client):
        query = make_query(data=[])
        client.table.return_value = query

        result = await gateway.update("exercises", {"id": "ex-1"}, {"weight": 42})

        assert result == {}
        query.update.assert_called_once_with({"weight": 42})
        query.eq.assert_called_once_with("id", "ex-1")


class TestSupabaseGatewayAuth:

    @pytest.mark.asyncio
    async def test_current_session(self, gateway, client):
        client.auth.get_session = AsyncMock(return_value=Mock(user=Mock(id="u1", email="ana@example.com")))

        session = await gateway.get_current_session()

        assert session.user_id == "u1"
        assert session.email == "ana@example.com"

    @pytest.mark.asyncio
    async def test_no_session(self, gateway, client):
        client.auth.get_session = AsyncMock(return_value=None)
        assert await gateway.get_current_session() is None

    @pytest.mark.asyncio
    async def test_sign_in_error_keeps_message(self, gateway, client):
        error = Exception("Invalid login credentials")
        error.message = "Invalid login credentials"
        client.auth.sign_in_with_password = AsyncMock(side_effect=error)

        with pytest.raises(GatewayError) as exc_info:
            await gateway.sign_in("ana@example.com", "x")
        assert exc_info.value.message == "Invalid login credentials"

    @pytest.mark.asyncio
    async def test_sign_up_sends_metadata(self, gateway, client):
        client.auth.sign_up = AsyncMock(return_value=Mock(user=Mock(id="u2", email="bruno@example.com")))

        session = await gateway.sign_up("bruno@example.com", "segredo1", {"name": "Bruno"})

        assert session.user_id == "u2"
        payload = client.auth.sign_up.call_args.args[0]
        assert payload["options"] == {"data": {"name": "Bruno"}}

    def test_session_events_filtered(self, gateway, client):
        received = []
        client.auth.on_auth_state_change.return_value = Mock(unsubscribe=Mock())

        unsubscribe = gateway.on_session_change(lambda event, session: received.append((event, session)))
        listener = client.auth.on_auth_state_change.call_args.args[0]

        listener("TOKEN_REFRESHED", Mock())
        listener("SIGNED_IN", Mock(user=Mock(id="u1", email="ana@example.com")))
        listener("SIGNED_OUT", None)

        assert [event for event, _ in received] == [SessionEvent.SIGNED_IN, SessionEvent.SIGNED_OUT]
        assert received[0][1].user_id == "u1"
        assert received[1][1] is None
        unsubscribe()
        client.auth.on_auth_state_change.return_value.unsubscribe.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_without_credentials(self, monkeypatch):
        monkeypatch.setattr(
            "vidafit.db.supabase_gateway.get_settings",
            lambda: Mock(SUPABASE_URL=None, SUPABASE_ANON_KEY=None),
        )
        with pytest.raises(GatewayError):
            await SupabaseGateway.connect()
