"""
SupabaseGateway - Implementación del gateway sobre el cliente async de Supabase.

Traduce el contrato de `vidafit.db.gateway.Gateway` a llamadas de supabase-py
(auth + PostgREST) y normaliza los errores a `GatewayError` / `NotFoundError`.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from vidafit.core.config import get_settings
from vidafit.core.exceptions import GatewayError, NotFoundError
from vidafit.db.gateway import Record, SessionCallback, Unsubscribe
from vidafit.schemas.session import Session, SessionEvent

logger = logging.getLogger(__name__)

# PostgREST: la consulta .single() no devolvió filas
NO_ROWS_CODE = "PGRST116"


def _to_session(user: Any) -> Optional[Session]:
    if user is None or not getattr(user, "id", None):
        return None
    return Session(user_id=str(user.id), email=getattr(user, "email", None))


def _wrap_api_error(operation: str, e: APIError) -> GatewayError:
    code = getattr(e, "code", None)
    message = getattr(e, "message", None) or str(e)
    if code == NO_ROWS_CODE:
        return NotFoundError(f"{operation}: sin resultados", code=code)
    return GatewayError(f"{operation}: {message}", code=code)


class SupabaseGateway:
    """
    Gateway remoto respaldado por Supabase.

    Crear con `await SupabaseGateway.connect()`; el cliente async de Supabase se
    construye de forma asíncrona.
    """

    def __init__(self, client: AsyncClient):
        self.client = client

    @classmethod
    async def connect(cls, url: Optional[str] = None, key: Optional[str] = None) -> "SupabaseGateway":
        settings = get_settings()
        url = url or settings.SUPABASE_URL
        key = key or settings.SUPABASE_ANON_KEY
        if not url or not key:
            raise GatewayError("No se proporcionaron credenciales de Supabase (SUPABASE_URL / SUPABASE_ANON_KEY)")
        try:
            client = await acreate_client(url, key)
        except Exception as e:
            raise GatewayError(f"No se pudo crear el cliente Supabase: {e}") from e
        logger.info("Cliente Supabase async inicializado correctamente")
        return cls(client)

    # ------------------------------------------------------------------ auth

    async def get_current_session(self) -> Optional[Session]:
        try:
            session = await self.client.auth.get_session()
        except Exception as e:
            raise GatewayError(f"get_session: {e}") from e
        if session is None:
            return None
        return _to_session(session.user)

    def on_session_change(self, callback: SessionCallback) -> Unsubscribe:
        def listener(event: str, session: Any) -> None:
            try:
                session_event = SessionEvent(event)
            except ValueError:
                # TOKEN_REFRESHED, USER_UPDATED, ... no cambian la pantalla
                logger.debug(f"Evento de auth ignorado: {event}")
                return
            user = getattr(session, "user", None) if session is not None else None
            callback(session_event, _to_session(user))

        subscription = self.client.auth.on_auth_state_change(listener)
        return subscription.unsubscribe

    async def sign_in(self, email: str, password: str) -> Session:
        try:
            response = await self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise GatewayError(getattr(e, "message", None) or str(e)) from e
        session = _to_session(response.user)
        if session is None:
            raise GatewayError("Respuesta de login sin usuario")
        return session

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> Session:
        try:
            response = await self.client.auth.sign_up(
                {"email": email, "password": password, "options": {"data": metadata}}
            )
        except Exception as e:
            raise GatewayError(getattr(e, "message", None) or str(e)) from e
        session = _to_session(response.user)
        if session is None:
            raise GatewayError("Respuesta de registro sin usuario")
        return session

    async def sign_out(self) -> None:
        try:
            await self.client.auth.sign_out()
        except Exception as e:
            raise GatewayError(f"sign_out: {e}") from e

    # ---------------------------------------------------------------- tablas

    async def read_one(self, table: str, filters: Dict[str, Any], columns: str = "*") -> Record:
        query = self.client.table(table).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)
        try:
            response = await query.single().execute()
        except APIError as e:
            raise _wrap_api_error(f"read_one({table})", e) from e
        except Exception as e:
            raise GatewayError(f"read_one({table}): {e}") from e
        if not response.data:
            raise NotFoundError(f"read_one({table}): sin resultados", code=NO_ROWS_CODE)
        return response.data

    async def read_many(
        self,
        table: str,
        filters: Dict[str, Any],
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        columns: str = "*"
    ) -> List[Record]:
        query = self.client.table(table).select(columns)
        for column, value in filters.items():
            query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(limit)
        try:
            response = await query.execute()
        except APIError as e:
            raise _wrap_api_error(f"read_many({table})", e) from e
        except Exception as e:
            raise GatewayError(f"read_many({table}): {e}") from e
        return list(response.data or [])

    async def insert(self, table: str, record: Record) -> Record:
        try:
            response = await self.client.table(table).insert(record).execute()
        except APIError as e:
            raise _wrap_api_error(f"insert({table})", e) from e
        except Exception as e:
            raise GatewayError(f"insert({table}): {e}") from e
        return response.data[0] if response.data else {}

    async def update(self, table: str, filters: Dict[str, Any], partial: Record) -> Record:
        query = self.client.table(table).update(partial)
        for column, value in filters.items():
            query = query.eq(column, value)
        try:
            response = await query.execute()
        except APIError as e:
            raise _wrap_api_error(f"update({table})", e) from e
        except Exception as e:
            raise GatewayError(f"update({table}): {e}") from e
        return response.data[0] if response.data else {}

    async def upsert(self, table: str, record: Record, on_conflict: Sequence[str]) -> Record:
        try:
            response = await (
                self.client.table(table)
                .upsert(record, on_conflict=",".join(on_conflict))
                .execute()
            )
        except APIError as e:
            raise _wrap_api_error(f"upsert({table})", e) from e
        except Exception as e:
            raise GatewayError(f"upsert({table}): {e}") from e
        return response.data[0] if response.data else {}
