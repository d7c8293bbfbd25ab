import pytest

from nvglide.blink import BlinkState, BlinkStatus, BlinkTiming

TIMING = BlinkTiming(blinkwait=700, blinkon=400, blinkoff=250)


def test_starts_waiting_when_blinkwait_set():
    status = BlinkStatus(now=0.0)
    assert status.update_status(TIMING, now=10.0) is True
    assert status.state is BlinkState.WAITING
    assert status.last_transition == 10.0
    assert status.next_frame == pytest.approx(10.0 + TIMING.blinkwait / 1000)


def test_full_cycle():
    status = BlinkStatus(now=0.0)
    status.update_status(TIMING, now=0.0)
    assert status.update_status(TIMING, now=0.8) is True
    assert status.state is BlinkState.ON
    assert status.next_frame == pytest.approx(0.8 + TIMING.blinkon / 1000)
    assert status.update_status(TIMING, now=1.3) is False
    assert status.state is BlinkState.OFF
    assert status.update_status(TIMING, now=1.6) is True
    assert status.state is BlinkState.ON


def test_no_transition_before_delay():
    status = BlinkStatus(now=0.0)
    status.update_status(TIMING, now=0.0)
    assert status.update_status(TIMING, now=0.5) is True
    assert status.state is BlinkState.WAITING
    assert status.last_transition == 0.0


def test_without_blinkwait_starts_on():
    timing = BlinkTiming(blinkon=400, blinkoff=250)
    status = BlinkStatus(now=0.0)
    assert status.update_status(timing, now=2.0) is True
    assert status.state is BlinkState.ON


@pytest.mark.parametrize(
    "timing",
    [
        BlinkTiming(blinkwait=0, blinkon=400, blinkoff=250),
        BlinkTiming(blinkwait=700, blinkon=0, blinkoff=250),
        BlinkTiming(blinkwait=700, blinkon=400, blinkoff=0),
    ],
)
def test_zero_timing_disables_blinking(timing):
    status = BlinkStatus(now=0.0)
    for now in (0.0, 1.0, 2.0, 3.0, 50.0):
        assert status.update_status(timing, now=now) is True
    assert status.next_frame is None


def test_missing_timings_never_blink():
    timing = BlinkTiming()
    status = BlinkStatus(now=0.0)
    for now in (0.0, 10.0, 100.0):
        assert status.update_status(timing, now=now) is True
    assert status.state is BlinkState.ON
    assert status.next_frame is None


def test_cursor_change_restarts_cycle():
    status = BlinkStatus(now=0.0)
    first = BlinkTiming(700, 400, 250, cursor=(1, 1))
    status.update_status(first, now=0.0)
    status.update_status(first, now=0.8)
    status.update_status(first, now=1.3)
    assert status.state is BlinkState.OFF
    moved = BlinkTiming(700, 400, 250, cursor=(1, 2))
    assert status.update_status(moved, now=1.35) is True
    assert status.state is BlinkState.WAITING
    assert status.last_transition == 1.35


def test_same_timing_does_not_restart():
    status = BlinkStatus(now=0.0)
    status.update_status(TIMING, now=0.0)
    status.update_status(TIMING, now=0.8)
    status.update_status(BlinkTiming(700, 400, 250), now=0.9)
    assert status.state is BlinkState.ON
    assert status.last_transition == 0.8