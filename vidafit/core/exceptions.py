"""
Excepciones del cliente.

Tres familias:
- Errores del gateway (GatewayError, NotFoundError): los lanza el adaptador de Supabase.
- Errores de dominio (AuthError, LoadError, WriteError): los lanzan servicios y repositorios.
- Condiciones de enrutamiento (NoSession, ProfileMissing, ...): las usa la máquina de
  pantallas para decidir a qué pantalla ir tras la secuencia de carga.
"""

from typing import Optional


class GatewayError(Exception):
    """Fallo de una llamada al backend remoto."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class NotFoundError(GatewayError):
    """La consulta no devolvió filas (PostgREST PGRST116)."""
    pass


class AuthError(Exception):
    """Error mostrado en línea en el formulario de login/registro."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LoadError(Exception):
    """Fallo al leer datos remotos o fila con forma inválida."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class WriteError(Exception):
    """Fallo al escribir datos remotos. Se registra, nunca se muestra al usuario."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class RoutingCondition(Exception):
    """Base de las condiciones que deciden la pantalla tras la carga."""
    pass


class NoSession(RoutingCondition):
    pass


class ProfileMissing(RoutingCondition):
    pass


class ProfileIncomplete(RoutingCondition):
    pass


class SubscriptionInactive(RoutingCondition):
    pass


class LoadFailed(RoutingCondition):
    def __init__(self, cause: BaseException):
        super().__init__(str(cause))
        self.cause = cause
