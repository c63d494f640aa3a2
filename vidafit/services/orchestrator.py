"""
ScreenStateMachine - Orquestador de sesión y pantallas del cliente.

Es el único dueño de `AppState`. Decide qué pantalla está activa, reacciona a los
cambios de sesión del gateway y compone lo que producen los demás componentes
(agregador de nutrición, recordatorios de agua, temporizador de descanso).

Flujo:
    auth -> onboarding -> subscription -> dashboard <-> {workout, diet, progress, profile}

Todos los errores remotos se registran y se absorben aquí; el único error visible
para el usuario es el del formulario de login/registro.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Set

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from vidafit.core.config import Settings, get_settings
from vidafit.core.exceptions import (
    AuthError,
    GatewayError,
    LoadError,
    LoadFailed,
    NoSession,
    ProfileIncomplete,
    ProfileMissing,
    RoutingCondition,
    SubscriptionInactive,
    WriteError,
)
from vidafit.core.screens import DASHBOARD_SCREENS, AuthMode, Screen, route_for
from vidafit.core.state import (
    DEFAULT_WORKOUT_NAME,
    AppState,
    WaterSlice,
    WorkoutSlice,
    empty_summary,
)
from vidafit.core.timezone_utils import format_time, now_local
from vidafit.db.gateway import Gateway, Unsubscribe
from vidafit.repositories.nutrition import meal_repository
from vidafit.repositories.subscription import subscription_repository
from vidafit.repositories.user import account_repository, profile_repository
from vidafit.schemas.nutrition import WaterProgress
from vidafit.schemas.screen import (
    AuthView,
    NutritionView,
    OnboardingView,
    RemindersView,
    RestView,
    ScreenView,
    SubscriptionView,
    WorkoutView,
)
from vidafit.schemas.session import Session, SessionEvent
from vidafit.schemas.subscription import PaymentMethod
from vidafit.schemas.user import UserData
from vidafit.schemas.workout import Exercise
from vidafit.services.auth import AuthService
from vidafit.services.hydration import HydrationService
from vidafit.services.notifications import OneSignalNotifier
from vidafit.services.nutrition import NutritionTargets, aggregate_meals, water_progress
from vidafit.services.onboarding import ONBOARDING_STEPS, OnboardingFlow
from vidafit.services.preferences import LocalPreferences
from vidafit.services.reminders import WaterReminderScheduler
from vidafit.services.rest_timer import RestTimer
from vidafit.services.subscription import SubscriptionService
from vidafit.services.workout import WorkoutService

logger = logging.getLogger(__name__)


class ScreenStateMachine:

    def __init__(
        self,
        gateway: Gateway,
        scheduler: AsyncIOScheduler,
        preferences: Optional[LocalPreferences] = None,
        notifier: Optional[OneSignalNotifier] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.settings = settings or get_settings()
        self.gateway = gateway
        self.clock = clock or (lambda: now_local(self.settings.APP_TIMEZONE))
        self.targets = NutritionTargets.from_settings(self.settings)

        self.state = AppState()
        self._reset_dashboard_data()

        self.auth_service = AuthService(gateway, self.settings)
        self.subscription_service = SubscriptionService(gateway, self.settings)
        self.hydration = HydrationService(gateway, today=self.today)
        self.workout_service = WorkoutService(gateway)
        self.onboarding = OnboardingFlow(self.state.onboarding)
        self.rest_timer = RestTimer(self.state.rest, scheduler, self.settings.REST_TIMER_TICK_SECONDS)
        self.reminders = WaterReminderScheduler(
            self.state.reminders,
            self.state.water,
            scheduler,
            preferences or LocalPreferences(),
            notifier or OneSignalNotifier(),
            clock=self.clock,
            drink=self.add_water_glass,
            interval_seconds=self.settings.REMINDER_CHECK_INTERVAL_SECONDS,
            icon=self.settings.NOTIFICATION_ICON,
            badge=self.settings.NOTIFICATION_BADGE,
        )

        self._unsubscribe: Optional[Unsubscribe] = None
        # Se incrementa en cada cierre de sesión; una carga iniciada antes queda obsoleta
        self._epoch = 0
        self._pending: Set[asyncio.Task] = set()

    # ------------------------------------------------------------- helpers

    @property
    def session(self) -> Optional[Session]:
        return self.state.auth.session

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session else None

    @property
    def dashboard_reachable(self) -> bool:
        user = self.state.user.data
        return (
            self.session is not None
            and user is not None
            and user.onboarding_complete
            and self.state.subscription.active
        )

    def today(self) -> str:
        return self.clock().date().isoformat()

    def _is_stale(self, epoch: int, session: Session) -> bool:
        current = self.state.auth.session
        return epoch != self._epoch or current is None or current.user_id != session.user_id

    def _set_screen(self, screen: Screen) -> None:
        if self.state.screen != screen:
            logger.info(f"Pantalla: {self.state.screen.value} -> {screen.value}")
        self.state.screen = screen

    def _require_screen(self, *screens: Screen) -> None:
        if self.state.screen not in screens:
            raise ValueError(f"Ação indisponível na tela '{self.state.screen.value}'")

    def _require_user_id(self) -> str:
        if self.user_id is None:
            raise ValueError("Nenhum usuário autenticado")
        return self.user_id

    def _reset_dashboard_data(self) -> None:
        nutrition = self.state.nutrition
        nutrition.meals = []
        nutrition.summary = empty_summary(
            self.targets.calories, self.targets.protein, self.targets.carbs, self.targets.fat
        )
        self.state.water.consumed = 0
        self.state.water.target = self.settings.WATER_TARGET_GLASSES
        self.state.workout.workout_id = None
        self.state.workout.name = DEFAULT_WORKOUT_NAME
        self.state.workout.exercises = []

    # ---------------------------------------------------------- ciclo de vida

    async def start(self) -> None:
        """Se suscribe a los cambios de sesión y comprueba la sesión actual."""
        self._unsubscribe = self.gateway.on_session_change(self._on_session_change)
        await self.check_session()

    async def teardown(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.reminders.stop()
        self.rest_timer.cancel()
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    def _on_session_change(self, event: SessionEvent, session: Optional[Session]) -> None:
        # El gateway llama de forma síncrona; el trabajo se programa en el event loop
        task = asyncio.ensure_future(self.handle_session_event(event, session))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def handle_session_event(self, event: SessionEvent, session: Optional[Session]) -> None:
        if event == SessionEvent.SIGNED_IN and session is not None:
            await self.load_user_data(session)
        elif event == SessionEvent.SIGNED_OUT:
            self._route_condition(NoSession())

    async def check_session(self) -> None:
        try:
            session = await self.gateway.get_current_session()
        except GatewayError as e:
            logger.error(f"Error checking user: {e}", exc_info=True)
            session = None

        if session is None:
            self._route_condition(NoSession())
            return
        await self.load_user_data(session)

    # ------------------------------------------------------ secuencia de carga

    async def _load_user(self, session: Session) -> UserData:
        try:
            profile = await profile_repository.get_by_user(self.gateway, session.user_id)
        except LoadError as e:
            logger.error(f"Error loading profile: {e}", exc_info=True)
            raise ProfileMissing() from e
        if profile is None:
            raise ProfileMissing()

        try:
            account = await account_repository.get_by_user(self.gateway, session.user_id)
        except LoadError as e:
            logger.error(f"Error loading user details: {e}", exc_info=True)
            account = None

        return UserData.merge(session.user_id, session.email or "", profile, account)

    async def _require_active_subscription(self, user_id: str) -> None:
        try:
            subscription = await subscription_repository.get_active(self.gateway, user_id)
        except LoadError as e:
            logger.error(f"Error checking subscription: {e}", exc_info=True)
            raise LoadFailed(e) from e
        if subscription is None:
            raise SubscriptionInactive()

    async def load_user_data(self, session: Session) -> None:
        """
        Carga perfil, cuenta y assinatura y coloca al usuario en su pantalla.

        Idempotente: dos ejecuciones con la misma sesión dejan el mismo estado. Si la
        sesión cambia mientras las lecturas están en curso, el resultado se descarta.
        """
        epoch = self._epoch
        self.state.auth.session = session
        self.state.auth.error = None

        try:
            user_data = await self._load_user(session)
            if self._is_stale(epoch, session):
                return
            self.state.user.data = user_data
            if not user_data.onboarding_complete:
                raise ProfileIncomplete()
            await self._require_active_subscription(session.user_id)
        except RoutingCondition as condition:
            if self._is_stale(epoch, session):
                return
            self._route_condition(condition)
            return
        except Exception as e:
            logger.error(f"Error loading user data: {e}", exc_info=True)
            if self._is_stale(epoch, session):
                return
            self._route_condition(LoadFailed(e))
            return
        finally:
            if not self._is_stale(epoch, session):
                self.state.loading = False

        if self._is_stale(epoch, session):
            return
        self.state.subscription.active = True
        await self._enter_dashboard(session, epoch)

    def _route(self, has_active_subscription: bool) -> Screen:
        data = self.state.user.data
        return route_for(
            self.session is not None,
            data.goal if data else None,
            data.level if data else None,
            has_active_subscription,
        )

    def _route_condition(self, condition: RoutingCondition) -> None:
        if isinstance(condition, NoSession):
            self._clear_session()
            return
        if isinstance(condition, ProfileMissing):
            self.state.user.data = None
        # Toda condición cierra el acceso al dashboard
        self.state.subscription.active = False
        self._set_screen(self._route(has_active_subscription=False))

    async def _enter_dashboard(self, session: Session, epoch: int) -> None:
        target = self._route(has_active_subscription=True)
        if target != Screen.DASHBOARD:
            self._set_screen(target)
            return
        if self.state.screen not in DASHBOARD_SCREENS:
            self._set_screen(target)
        await self.load_dashboard_data(session, epoch)
        if not self._is_stale(epoch, session):
            await self.reminders.start(session.user_id)

    async def load_dashboard_data(self, session: Session, epoch: Optional[int] = None) -> None:
        """
        Lee agua, comidas y entrenamiento de hoy. Cada lectura falla por separado.
        """
        epoch = self._epoch if epoch is None else epoch
        user_id = session.user_id

        water = WaterSlice(consumed=self.state.water.consumed, target=self.state.water.target)
        await self.hydration.load_today(water, user_id)
        if self._is_stale(epoch, session):
            return
        self.state.water.consumed = water.consumed
        self.state.water.target = water.target

        try:
            meals = await meal_repository.get_for_date(self.gateway, user_id, self.today())
        except LoadError as e:
            logger.error(f"Error loading meals: {e}", exc_info=True)
        else:
            if self._is_stale(epoch, session):
                return
            self.state.nutrition.meals = meals
            self.state.nutrition.summary = aggregate_meals(meals, self.targets)

        workout = WorkoutSlice()
        await self.workout_service.load_today(workout, user_id)
        if self._is_stale(epoch, session):
            return
        if workout.exercises or workout.workout_id:
            self.state.workout.workout_id = workout.workout_id
            self.state.workout.name = workout.name
            self.state.workout.exercises = workout.exercises

    def _clear_session(self) -> None:
        self._epoch += 1
        self.reminders.stop()
        self.rest_timer.cancel()

        self.state.auth.session = None
        self.state.auth.error = None
        self.state.auth.loading = False
        self.state.user.data = None
        self.state.subscription.active = False
        self.subscription_service.clear_payment_method(self.state.subscription)
        self.state.reminders.banner_visible = False
        self.onboarding.reset()
        self._reset_dashboard_data()
        self.state.loading = False
        self._set_screen(self._route(has_active_subscription=False))

    # ------------------------------------------------------------------ auth

    def switch_auth_mode(self) -> AuthMode:
        self._require_screen(Screen.AUTH)
        auth = self.state.auth
        auth.mode = AuthMode.SIGNUP if auth.mode == AuthMode.LOGIN else AuthMode.LOGIN
        auth.error = None
        return auth.mode

    async def _authenticate(self, action) -> bool:
        self._require_screen(Screen.AUTH)
        auth = self.state.auth
        auth.error = None
        auth.loading = True
        try:
            session = await action()
        except AuthError as e:
            auth.error = e.message
            return False
        finally:
            auth.loading = False
        await self.load_user_data(session)
        return True

    async def sign_in(self, email: str, password: str) -> bool:
        return await self._authenticate(lambda: self.auth_service.sign_in(email, password))

    async def sign_up(self, name: str, email: str, password: str, confirm_password: str) -> bool:
        return await self._authenticate(
            lambda: self.auth_service.sign_up(name, email, password, confirm_password)
        )

    async def sign_out(self) -> None:
        logger.info(f"Cerrando sesión del usuario {self.user_id}")
        self._clear_session()
        await self.auth_service.sign_out()

    # ------------------------------------------------------------ onboarding

    def select_onboarding_option(self, option: str) -> None:
        self._require_screen(Screen.ONBOARDING)
        self.onboarding.select_option(option)

    async def next_onboarding_step(self) -> None:
        self._require_screen(Screen.ONBOARDING)
        if self.onboarding.next_step():
            await self.complete_onboarding()

    def previous_onboarding_step(self) -> None:
        self._require_screen(Screen.ONBOARDING)
        self.onboarding.previous_step()

    async def complete_onboarding(self) -> bool:
        session = self.session
        if session is None:
            return False
        try:
            await self.onboarding.save(self.gateway, session.user_id)
        except WriteError as e:
            logger.error(f"Error completing onboarding: {e}", exc_info=True)
            return False
        self.onboarding.reset()
        await self.load_user_data(session)
        return True

    # ---------------------------------------------------------- assinatura

    def select_payment_method(self, method: PaymentMethod) -> None:
        self._require_screen(Screen.SUBSCRIPTION)
        self.subscription_service.select_payment_method(self.state.subscription, method)

    def clear_payment_method(self) -> None:
        self._require_screen(Screen.SUBSCRIPTION)
        self.subscription_service.clear_payment_method(self.state.subscription)

    def copy_pix_code(self) -> str:
        self._require_screen(Screen.SUBSCRIPTION)
        return self.subscription_service.copy_pix_code(self.state.subscription)

    async def confirm_payment(self) -> bool:
        """
        El usuario confirma que pagó: se crea la assinatura y se entra al dashboard.

        Raises:
            ValueError: Fuera de la pantalla de assinatura o sin método de pago elegido
        """
        self._require_screen(Screen.SUBSCRIPTION)
        session = self.session
        if session is None:
            return False
        try:
            await self.subscription_service.activate(self.state.subscription, session.user_id)
        except WriteError as e:
            logger.error(f"Error activating subscription: {e}", exc_info=True)
            return False
        await self._enter_dashboard(session, self._epoch)
        return True

    # ----------------------------------------------------------- navegación

    def navigate(self, screen: Screen) -> None:
        if screen not in DASHBOARD_SCREENS or not self.dashboard_reachable:
            raise ValueError(f"Navegação para '{screen.value}' indisponível")
        self._require_screen(*DASHBOARD_SCREENS)
        if self.state.screen == Screen.WORKOUT and screen != Screen.WORKOUT:
            self.rest_timer.cancel()
        self._set_screen(screen)

    # --------------------------------------------------------- agua / treino

    async def add_water_glass(self) -> int:
        if self.user_id is None:
            return self.state.water.consumed
        return await self.hydration.add_glass(self.state.water, self.user_id)

    async def toggle_water_reminders(self) -> bool:
        return await self.reminders.toggle(self.user_id, self.dashboard_reachable)

    async def accept_reminder(self) -> None:
        await self.reminders.accept()

    def dismiss_reminder(self) -> None:
        self.reminders.dismiss()

    async def update_exercise(self, index: int, field: str, value: Any) -> Exercise:
        self._require_screen(Screen.WORKOUT)
        return await self.workout_service.update_exercise(self.state.workout, index, field, value)

    def start_rest(self, seconds: int) -> None:
        self._require_screen(Screen.WORKOUT)
        self.rest_timer.start(seconds)

    def skip_rest(self) -> None:
        self.rest_timer.cancel()

    # ------------------------------------------------------------------ vista

    def view(self) -> ScreenView:
        """Instantánea de la pantalla actual con los datos que necesita."""
        state = self.state
        screen = state.screen
        view = ScreenView(screen=screen, loading=state.loading)

        if screen == Screen.AUTH:
            view.auth = AuthView(mode=state.auth.mode, error=state.auth.error, loading=state.auth.loading)
            return view

        view.user = state.user.data

        if screen == Screen.ONBOARDING:
            step = self.onboarding.current_step
            view.onboarding = OnboardingView(
                step=state.onboarding.step,
                total_steps=len(ONBOARDING_STEPS),
                title=step.title,
                options=step.labels,
                multiple=step.multiple,
                answers=dict(state.onboarding.answers),
                can_continue=self.onboarding.is_step_answered(),
                is_last_step=self.onboarding.is_last_step,
            )
            return view

        if screen == Screen.SUBSCRIPTION:
            sub = state.subscription
            view.subscription = SubscriptionView(
                active=sub.active,
                amount=self.settings.SUBSCRIPTION_AMOUNT,
                payment_method=sub.payment_method,
                show_pix_code=sub.show_pix_code,
                pix_code=self.settings.PIX_CODE if sub.show_pix_code else None,
                pix_copied=sub.pix_copied,
            )
            return view

        view.reminders = RemindersView(
            enabled=state.reminders.enabled,
            banner_visible=state.reminders.banner_visible,
            slots=list(state.reminders.slots),
        )
        water: WaterProgress = water_progress(state.water.consumed, state.water.target)

        if screen in (Screen.DASHBOARD, Screen.DIET):
            view.nutrition = NutritionView(summary=state.nutrition.summary, meals=list(state.nutrition.meals))
            view.water = water
        if screen in (Screen.DASHBOARD, Screen.WORKOUT):
            view.workout = WorkoutView(name=state.workout.name, exercises=list(state.workout.exercises))
        if screen == Screen.WORKOUT:
            view.rest = RestView(
                resting=state.rest.resting,
                remaining=state.rest.remaining,
                display=format_time(state.rest.remaining),
            )
        return view
