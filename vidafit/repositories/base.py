"""
Repositorio base sobre el gateway remoto.

Los repositorios reciben el gateway como primer argumento (igual que una sesión
de base de datos) y devuelven registros tipados. Una fila con forma inválida se
rechaza como `LoadError` en lugar de propagar campos indefinidos.
"""
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
import logging

from pydantic import BaseModel, ValidationError

from vidafit.core.exceptions import GatewayError, LoadError, NotFoundError, WriteError
from vidafit.db.gateway import Gateway, Record

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


class GatewayRepository(Generic[ModelType]):
    """
    Repositorio genérico para una tabla remota.

    Uso:
        class MealRepository(GatewayRepository[Meal]):
            def __init__(self):
                super().__init__(Meal, "meals")
    """

    def __init__(self, model: Type[ModelType], table: str):
        self.model = model
        self.table = table

    def parse(self, row: Record) -> ModelType:
        """Valida una fila remota contra el modelo."""
        try:
            return self.model.model_validate(row)
        except ValidationError as e:
            raise LoadError(f"Fila inválida en '{self.table}'", cause=e) from e

    def parse_many(self, rows: List[Record]) -> List[ModelType]:
        return [self.parse(row) for row in rows]

    async def get(self, gateway: Gateway, **filters: Any) -> Optional[ModelType]:
        """
        Obtener una fila por filtros de igualdad.

        Returns:
            El registro o None si no existe

        Raises:
            LoadError: Si el gateway falla o la fila es inválida
        """
        try:
            row = await gateway.read_one(self.table, filters)
        except NotFoundError:
            return None
        except GatewayError as e:
            raise LoadError(f"Error leyendo '{self.table}': {e.message}", cause=e) from e
        return self.parse(row)

    async def get_multi(
        self,
        gateway: Gateway,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        **filters: Any
    ) -> List[ModelType]:
        try:
            rows = await gateway.read_many(
                self.table, filters, order_by=order_by, descending=descending, limit=limit
            )
        except GatewayError as e:
            raise LoadError(f"Error leyendo '{self.table}': {e.message}", cause=e) from e
        return self.parse_many(rows)

    async def create(self, gateway: Gateway, record: Dict[str, Any]) -> Record:
        try:
            return await gateway.insert(self.table, record)
        except GatewayError as e:
            raise WriteError(f"Error insertando en '{self.table}': {e.message}", cause=e) from e

    async def update(self, gateway: Gateway, filters: Dict[str, Any], partial: Dict[str, Any]) -> Record:
        try:
            return await gateway.update(self.table, filters, partial)
        except GatewayError as e:
            raise WriteError(f"Error actualizando '{self.table}': {e.message}", cause=e) from e
