"""
Contrato del gateway remoto (identidad + almacenamiento de registros).

El cliente nunca implementa el backend: solo lo llama y reacciona a sus respuestas.
Todas las operaciones lanzan `GatewayError` (o `NotFoundError` cuando no hay filas).
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from vidafit.schemas.session import Session, SessionEvent

SessionCallback = Callable[[SessionEvent, Optional[Session]], None]
Unsubscribe = Callable[[], None]
Record = Dict[str, Any]


class Gateway(Protocol):

    async def get_current_session(self) -> Optional[Session]:
        ...

    def on_session_change(self, callback: SessionCallback) -> Unsubscribe:
        ...

    async def sign_in(self, email: str, password: str) -> Session:
        ...

    async def sign_up(self, email: str, password: str, metadata: Dict[str, Any]) -> Session:
        ...

    async def sign_out(self) -> None:
        ...

    async def read_one(self, table: str, filters: Dict[str, Any], columns: str = "*") -> Record:
        ...

    async def read_many(
        self,
        table: str,
        filters: Dict[str, Any],
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        columns: str = "*"
    ) -> List[Record]:
        ...

    async def insert(self, table: str, record: Record) -> Record:
        ...

    async def update(self, table: str, filters: Dict[str, Any], partial: Record) -> Record:
        ...

    async def upsert(self, table: str, record: Record, on_conflict: Sequence[str]) -> Record:
        ...
