# Inicializador del paquete repositories
from vidafit.repositories.base import GatewayRepository
from vidafit.repositories.user import profile_repository, account_repository
from vidafit.repositories.subscription import subscription_repository
from vidafit.repositories.workout import workout_repository, exercise_repository
from vidafit.repositories.nutrition import meal_repository, water_intake_repository
