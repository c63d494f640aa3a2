"""
Cuestionario de onboarding.

Cinco pasos; cada opción mostrada se guarda con su valor almacenable
(ej: "4 dias" -> 4). El paso de equipamiento admite varias respuestas.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from vidafit.core.state import OnboardingSlice
from vidafit.db.gateway import Gateway
from vidafit.repositories.user import account_repository
from vidafit.schemas.user import OnboardingAnswers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OnboardingStep:
    title: str
    field: str
    options: Tuple[Tuple[str, Any], ...]
    multiple: bool = False

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.options]

    def value_for(self, label: str) -> Any:
        for option_label, value in self.options:
            if option_label == label:
                return value
        raise ValueError(f"Opción desconocida para '{self.field}': {label}")


ONBOARDING_STEPS: Tuple[OnboardingStep, ...] = (
    OnboardingStep(
        title="Qual seu objetivo?",
        field="goal",
        options=(("Hipertrofia", "Hipertrofia"), ("Emagrecimento", "Emagrecimento"),
                 ("Força", "Força"), ("Resistência", "Resistência")),
    ),
    OnboardingStep(
        title="Qual seu nível?",
        field="level",
        options=(("Iniciante", "Iniciante"), ("Intermediário", "Intermediário"),
                 ("Avançado", "Avançado")),
    ),
    OnboardingStep(
        title="Quantos dias por semana?",
        field="days_per_week",
        options=(("3 dias", 3), ("4 dias", 4), ("5 dias", 5), ("6 dias", 6)),
    ),
    OnboardingStep(
        title="Tempo por sessão?",
        field="session_time",
        # se guarda el límite superior del rango, en minutos
        options=(("30-45 min", 45), ("45-60 min", 60), ("60-90 min", 90), ("90+ min", 120)),
    ),
    OnboardingStep(
        title="Equipamentos disponíveis?",
        field="equipment",
        options=(("Academia completa", "Academia completa"), ("Home gym", "Home gym"),
                 ("Peso corporal", "Peso corporal"), ("Elásticos", "Elásticos")),
        multiple=True,
    ),
)


def empty_answers() -> Dict[str, Any]:
    return {"goal": "", "level": "", "days_per_week": None, "session_time": None, "equipment": []}


class OnboardingFlow:
    """Navegación del cuestionario sobre el slice de onboarding."""

    def __init__(self, onboarding: OnboardingSlice):
        self.onboarding = onboarding
        if not self.onboarding.answers:
            self.onboarding.answers = empty_answers()

    @property
    def current_step(self) -> OnboardingStep:
        return ONBOARDING_STEPS[self.onboarding.step]

    @property
    def is_last_step(self) -> bool:
        return self.onboarding.step == len(ONBOARDING_STEPS) - 1

    def reset(self) -> None:
        self.onboarding.step = 0
        self.onboarding.answers = empty_answers()

    def select_option(self, label: str) -> None:
        step = self.current_step
        value = step.value_for(label)
        if step.multiple:
            current = list(self.onboarding.answers.get(step.field) or [])
            if value in current:
                current.remove(value)
            else:
                current.append(value)
            self.onboarding.answers[step.field] = current
        else:
            self.onboarding.answers[step.field] = value

    def is_step_answered(self) -> bool:
        answer = self.onboarding.answers.get(self.current_step.field)
        if self.current_step.multiple:
            return bool(answer)
        return answer not in (None, "")

    def next_step(self) -> bool:
        """
        Avanza un paso.

        Returns:
            True si el cuestionario quedó completo (último paso respondido)

        Raises:
            ValueError: Si el paso actual no tiene respuesta
        """
        if not self.is_step_answered():
            raise ValueError("Responda a etapa atual para continuar")
        if self.is_last_step:
            return True
        self.onboarding.step += 1
        return False

    def previous_step(self) -> None:
        if self.onboarding.step > 0:
            self.onboarding.step -= 1

    def answers(self) -> OnboardingAnswers:
        return OnboardingAnswers.model_validate(self.onboarding.answers)

    async def save(self, gateway: Gateway, user_id: str) -> None:
        """
        Guarda las respuestas en la fila `users`.

        Raises:
            WriteError: Si el gateway falla
        """
        await account_repository.save_onboarding(gateway, user_id, self.answers())
        logger.info(f"Onboarding guardado para el usuario {user_id}")
