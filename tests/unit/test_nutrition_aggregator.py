"""
Tests del agregador de nutrición e hidratación.
"""

import pytest

from vidafit.schemas.nutrition import Meal
from vidafit.services.nutrition import (
    NutritionTargets,
    aggregate_meals,
    clamp_glasses,
    next_glass_count,
    water_progress,
)


def _meal(name, calories, protein, carbs, fat):
    return Meal(name=name, calories=calories, protein=protein, carbs=carbs, fat=fat)


class TestAggregateMeals:

    @pytest.fixture
    def meals(self):
        return [
            _meal("Café da manhã", 450, 30, 50, 12),
            _meal("Almoço", 700, 45, 80, 20),
            _meal("Jantar", 520.5, 40, 35.5, 18),
        ]

    def test_sums_every_macro(self, meals):
        summary = aggregate_meals(meals)

        assert summary.calories.consumed == pytest.approx(1670.5)
        assert summary.protein.consumed == pytest.approx(115)
        assert summary.carbs.consumed == pytest.approx(165.5)
        assert summary.fat.consumed == pytest.approx(50)

    def test_empty_list_is_all_zeros(self):
        summary = aggregate_meals([])

        for macro in (summary.calories, summary.protein, summary.carbs, summary.fat):
            assert macro.consumed == 0

    def test_default_targets(self):
        summary = aggregate_meals([])

        assert summary.calories.target == 2200
        assert summary.protein.target == 165
        assert summary.carbs.target == 275
        assert summary.fat.target == 85

    def test_order_does_not_matter(self, meals):
        forward = aggregate_meals(meals)
        backward = aggregate_meals(list(reversed(meals)))
        assert forward == backward

    def test_custom_targets_and_percentage(self):
        targets = NutritionTargets(calories=2000, protein=150, carbs=250, fat=70)
        summary = aggregate_meals([_meal("Lanche", 500, 30, 50, 14)], targets)

        assert summary.calories.target == 2000
        assert summary.calories.percentage == pytest.approx(25)
        assert summary.fat.percentage == pytest.approx(20)


class TestWater:

    def test_clamp(self):
        assert clamp_glasses(-1, 8) == 0
        assert clamp_glasses(5, 8) == 5
        assert clamp_glasses(12, 8) == 8

    def test_next_glass_count_stops_at_target(self):
        assert next_glass_count(7, 8) == 8
        assert next_glass_count(8, 8) == 8

    def test_water_progress(self):
        progress = water_progress(3, 8)

        assert progress.consumed == 3
        assert progress.remaining == 5
        assert progress.percentage == 37.5

    def test_water_progress_zero_target(self):
        progress = water_progress(0, 0)
        assert progress.percentage == 0.0
        assert progress.remaining == 0
