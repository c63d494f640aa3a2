"""
Login y registro contra el gateway.

Los errores que debe ver el usuario se lanzan como `AuthError` con el mensaje a
mostrar en el formulario. La creación de las filas `profiles` y `users` tras el
registro es best-effort: un fallo se registra y el registro sigue adelante.
"""

import logging

from typing import Optional

from vidafit.core.config import Settings, get_settings
from vidafit.core.exceptions import AuthError, GatewayError, WriteError
from vidafit.db.gateway import Gateway
from vidafit.repositories.user import account_repository, profile_repository
from vidafit.schemas.session import Session

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Erro ao fazer login"
SIGNUP_FAILED = "Erro ao criar conta"
PASSWORD_MISMATCH = "As senhas não coincidem"


class AuthService:

    def __init__(self, gateway: Gateway, settings: Optional[Settings] = None):
        self.gateway = gateway
        self.settings = settings or get_settings()

    async def sign_in(self, email: str, password: str) -> Session:
        try:
            session = await self.gateway.sign_in(email, password)
        except GatewayError as e:
            logger.info(f"Login rechazado para {email}: {e.message}")
            raise AuthError(e.message or LOGIN_FAILED) from e
        logger.info(f"Usuario {session.user_id} autenticado")
        return session

    def validate_signup(self, password: str, confirm_password: str) -> None:
        if password != confirm_password:
            raise AuthError(PASSWORD_MISMATCH)
        if len(password) < self.settings.MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"A senha deve ter pelo menos {self.settings.MIN_PASSWORD_LENGTH} caracteres"
            )

    async def sign_up(self, name: str, email: str, password: str, confirm_password: str) -> Session:
        self.validate_signup(password, confirm_password)

        try:
            session = await self.gateway.sign_up(email, password, {"name": name})
        except GatewayError as e:
            logger.info(f"Registro rechazado para {email}: {e.message}")
            raise AuthError(e.message or SIGNUP_FAILED) from e

        try:
            await profile_repository.create_for_user(self.gateway, session.user_id, name)
        except WriteError as e:
            logger.error(f"Erro ao criar perfil para {session.user_id}: {e}", exc_info=True)

        try:
            await account_repository.create_for_user(self.gateway, session.user_id, email, name)
        except WriteError as e:
            logger.error(f"Erro ao criar usuário {session.user_id}: {e}", exc_info=True)

        logger.info(f"Usuario {session.user_id} registrado")
        return session

    async def sign_out(self) -> None:
        try:
            await self.gateway.sign_out()
        except GatewayError as e:
            logger.error(f"Error al cerrar sesión en el gateway: {e}", exc_info=True)
