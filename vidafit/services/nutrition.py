"""
Agregador del estado derivado de nutrición e hidratación.

Los valores "consumidos" se recalculan siempre desde la lista de comidas del día;
nunca se guardan por separado.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from vidafit.core.config import Settings, get_settings
from vidafit.schemas.nutrition import Meal, MacroProgress, NutritionSummary, WaterProgress

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NutritionTargets:
    calories: float = 2200
    protein: float = 165
    carbs: float = 275
    fat: float = 85

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "NutritionTargets":
        settings = settings or get_settings()
        return cls(
            calories=settings.CALORIES_TARGET,
            protein=settings.PROTEIN_TARGET_G,
            carbs=settings.CARBS_TARGET_G,
            fat=settings.FAT_TARGET_G,
        )


def aggregate_meals(meals: Iterable[Meal], targets: NutritionTargets = NutritionTargets()) -> NutritionSummary:
    """
    Suma calorías y macros de las comidas del día.

    Una lista vacía devuelve todos los consumos a cero. El resultado no depende
    del orden de las comidas.
    """
    calories = protein = carbs = fat = 0.0
    for meal in meals:
        calories += meal.calories
        protein += meal.protein
        carbs += meal.carbs
        fat += meal.fat

    return NutritionSummary(
        calories=MacroProgress(consumed=calories, target=targets.calories),
        protein=MacroProgress(consumed=protein, target=targets.protein),
        carbs=MacroProgress(consumed=carbs, target=targets.carbs),
        fat=MacroProgress(consumed=fat, target=targets.fat),
    )


def clamp_glasses(glasses: int, target: int) -> int:
    """Limita el consumo de agua al rango [0, target]."""
    return max(0, min(glasses, target))


def next_glass_count(consumed: int, target: int) -> int:
    """Consumo tras beber un vaso; nunca supera la meta."""
    return clamp_glasses(consumed + 1, target)


def water_progress(consumed: int, target: int) -> WaterProgress:
    consumed = clamp_glasses(consumed, target)
    percentage = (consumed / target * 100) if target > 0 else 0.0
    return WaterProgress(
        consumed=consumed,
        target=target,
        percentage=round(percentage, 1),
        remaining=max(0, target - consumed),
    )
