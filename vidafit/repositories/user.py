"""
Repositorios de perfil (`profiles`) y cuenta (`users`).
"""
from typing import Optional

from vidafit.db.gateway import Gateway, Record
from vidafit.repositories.base import GatewayRepository
from vidafit.schemas.user import Account, OnboardingAnswers, Profile


class ProfileRepository(GatewayRepository[Profile]):

    def __init__(self):
        super().__init__(Profile, "profiles")

    async def get_by_user(self, gateway: Gateway, user_id: str) -> Optional[Profile]:
        return await self.get(gateway, id=user_id)

    async def create_for_user(self, gateway: Gateway, user_id: str, name: str) -> Record:
        return await self.create(gateway, {"id": user_id, "name": name})


class AccountRepository(GatewayRepository[Account]):

    def __init__(self):
        super().__init__(Account, "users")

    async def get_by_user(self, gateway: Gateway, user_id: str) -> Optional[Account]:
        return await self.get(gateway, id=user_id)

    async def create_for_user(self, gateway: Gateway, user_id: str, email: str, name: str) -> Record:
        return await self.create(
            gateway, {"id": user_id, "email": email, "name": name, "streak": 0}
        )

    async def save_onboarding(self, gateway: Gateway, user_id: str, answers: OnboardingAnswers) -> Record:
        """Guarda las respuestas del onboarding en la fila del usuario."""
        return await self.update(gateway, {"id": user_id}, answers.model_dump())


profile_repository = ProfileRepository()
account_repository = AccountRepository()
