"""Test helpers shared across modules."""
import threading
import time


def wait_until(predicate, timeout=2.0, interval=0.01):
    """Poll predicate until it is truthy or timeout elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return bool(predicate())


class GatedProbe:
    """Probe that blocks until released, then returns a fixed result."""

    def __init__(self, result=True):
        self.result = result
        self.gate = threading.Event()
        self.started = threading.Event()
        self.calls = 0

    def check(self):
        self.calls += 1
        self.started.set()
        self.gate.wait(timeout=5.0)
        return self.result
