import threading
import time

import pytest

from gyro_bounce.tilt import KeyboardTilt, PollingTiltSource, TiltRegister


def test_register_keeps_last_write():
    register = TiltRegister()
    assert register.read() == 0.0
    register.write(0.2)
    register.write(-0.7)
    assert register.read() == -0.7


def test_polling_source_pushes_samples_until_unsubscribed():
    samples = []
    got_some = threading.Event()

    def on_sample(x):
        samples.append(x)
        if len(samples) >= 3:
            got_some.set()

    source = PollingTiltSource(lambda: 0.5)
    sub = source.subscribe(1, on_sample)
    assert got_some.wait(2.0)

    sub.unsubscribe()
    assert not sub.active
    assert not sub.thread.is_alive()
    count = len(samples)
    time.sleep(0.02)
    assert len(samples) == count
    assert set(samples) == {0.5}

    sub.unsubscribe()


def test_resubscribe_replaces_old_feed():
    source = PollingTiltSource(lambda: 0.1)
    first = source.subscribe(5, lambda x: None)
    second = source.subscribe(5, lambda x: None)
    assert not first.active
    assert second.active
    second.unsubscribe()


def test_failing_sensor_read_keeps_feed_alive():
    calls = []
    recovered = threading.Event()

    def flaky():
        calls.append(1)
        if len(calls) == 1:
            raise OSError("sensor hiccup")
        recovered.set()
        return 0.3

    sub = PollingTiltSource(flaky).subscribe(1, lambda x: None)
    assert recovered.wait(2.0)
    sub.unsubscribe()


def test_keyboard_tilt_leans_and_recovers():
    tilt = KeyboardTilt(max_tilt=0.6, lean_rate=3.0)
    tilt.update(left=False, right=True, dt=0.1)
    assert tilt.read() == pytest.approx(0.3)
    tilt.update(left=False, right=True, dt=0.5)
    assert tilt.read() == pytest.approx(0.6)
    tilt.update(left=False, right=False, dt=0.1)
    assert tilt.read() == pytest.approx(0.3)
    tilt.update(left=True, right=False, dt=1.0)
    assert tilt.read() == pytest.approx(-0.6)
    tilt.update(left=True, right=True, dt=1.0)
    assert tilt.read() == 0.0
