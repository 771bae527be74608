"""
Name: Periodic Task + Liveness Monitor Tests

Responsibilities:
  - PeriodicTask runs on a daemon thread and survives failures
  - Liveness probe logs OK / failure and never raises
  - A failed probe leaves conversation state untouched
"""

import threading
from unittest.mock import MagicMock, patch

import pytest


@pytest.mark.unit
class TestPeriodicTask:
    def test_rejects_non_positive_interval(self):
        from salesbot.worker import PeriodicTask

        with pytest.raises(ValueError):
            PeriodicTask("x", 0, lambda: None)

    def test_run_once_swallows_and_logs_errors(self):
        from salesbot.worker import PeriodicTask

        task = PeriodicTask("boom", 1.0, MagicMock(side_effect=RuntimeError("boom")))

        with patch("salesbot.worker.periodic.logger") as mock_logger:
            task.run_once()

        mock_logger.exception.assert_called_once()

    def test_ticks_until_stopped(self):
        from salesbot.worker import PeriodicTask

        ticked = threading.Event()
        task = PeriodicTask("fast", 0.01, ticked.set)

        task.start()
        try:
            assert ticked.wait(2.0)
            assert task.is_running
        finally:
            task.stop()

        assert not task.is_running

    def test_stop_without_start_is_noop(self):
        from salesbot.worker import PeriodicTask

        PeriodicTask("idle", 1.0, lambda: None).stop()


@pytest.mark.unit
class TestLivenessMonitor:
    def test_tick_ok(self, fake_transport):
        from salesbot.worker import LivenessMonitor

        monitor = LivenessMonitor(fake_transport, interval_seconds=300)

        with patch("salesbot.worker.liveness.logger") as mock_logger:
            assert monitor.tick() is True

        assert fake_transport.get_me_calls == 1
        assert "Bot health check: OK" in mock_logger.info.call_args.args[0]

    def test_tick_failure_is_logged_not_raised(self, fake_transport, transport_error):
        from salesbot.worker import LivenessMonitor

        fake_transport.get_me_error = transport_error
        monitor = LivenessMonitor(fake_transport, interval_seconds=300)

        with patch("salesbot.worker.liveness.logger") as mock_logger:
            assert monitor.tick() is False

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "Health check failed"

    def test_tick_skipped_when_not_running(self, fake_transport):
        from salesbot.worker import LivenessMonitor

        monitor = LivenessMonitor(
            fake_transport, interval_seconds=300, is_running=lambda: False
        )

        assert monitor.tick() is False
        assert fake_transport.get_me_calls == 0

    def test_failed_probe_keeps_sessions(
        self, dispatcher, fake_transport, transport_error, alice_password
    ):
        from salesbot.worker import LivenessMonitor

        dispatcher.dispatch("1", "/start")
        dispatcher.dispatch("1", "alice")
        dispatcher.dispatch("1", alice_password)
        fake_transport.get_me_error = transport_error

        LivenessMonitor(fake_transport, interval_seconds=300).tick()

        assert dispatcher.sessions.get("1") == 7
