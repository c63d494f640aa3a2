import pytest

from vidafit.core.state import RestTimerSlice
from vidafit.services.rest_timer import RestTimer


class TestRestTimer:

    @pytest.fixture
    def rest(self):
        return RestTimerSlice()

    @pytest.fixture
    def timer(self, rest, mock_scheduler):
        return RestTimer(rest, mock_scheduler, tick_seconds=1)

    def test_start_schedules_tick_job(self, timer, rest, mock_scheduler):
        timer.start(90)

        assert rest.resting is True
        assert rest.remaining == 90
        assert timer.display == "1:30"
        mock_scheduler.add_job.assert_called_once()
        _, kwargs = mock_scheduler.add_job.call_args
        assert kwargs["seconds"] == 1
        assert kwargs["id"] == RestTimer.JOB_ID

    def test_full_countdown_ends_rest(self, timer, rest, mock_scheduler):
        timer.start(90)
        for _ in range(90):
            timer.tick()

        assert rest.resting is False
        assert rest.remaining == 0
        mock_scheduler.add_job.return_value.remove.assert_called_once()

    def test_extra_ticks_stay_at_zero(self, timer, rest):
        timer.start(2)
        for _ in range(5):
            timer.tick()
        assert rest.remaining == 0
        assert rest.resting is False

    def test_cancel_stops_resting(self, timer, rest, mock_scheduler):
        timer.start(90)
        timer.tick()
        timer.cancel()

        assert rest.resting is False
        assert rest.remaining == 89
        mock_scheduler.add_job.return_value.remove.assert_called_once()

    def test_restart_replaces_previous_countdown(self, timer, rest, mock_scheduler):
        timer.start(90)
        timer.start(30)

        assert rest.remaining == 30
        assert mock_scheduler.add_job.call_count == 2
        mock_scheduler.add_job.return_value.remove.assert_called_once()

    def test_zero_seconds_does_not_schedule(self, timer, rest, mock_scheduler):
        timer.start(0)
        assert rest.resting is False
        mock_scheduler.add_job.assert_not_called()

    def test_negative_seconds_rejected(self, timer):
        with pytest.raises(ValueError):
            timer.start(-1)

    @pytest.mark.asyncio
    async def test_scheduled_callback_ticks(self, timer, rest):
        timer.start(3)
        await timer._on_tick()
        assert rest.remaining == 2
